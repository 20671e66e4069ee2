# dls_api/target.py
from __future__ import annotations

import math
from fractions import Fraction
from typing import Optional

from dls_api.categories import MatchCategory, g50_for
from dls_api.errors import InvalidResourceError, InvalidScoreError
from dls_api.innings import InningsState
from dls_api.log import get_logger
from dls_api.models import TargetResult
from dls_api.overs_math import whole_overs
from dls_api.resource_table import DUCKWORTH_LEWIS_TABLE, ResourceTable

logger = get_logger("dls.target")

FULL_RESOURCES = Fraction(100)


def _check_resources(name: str, value: Fraction) -> None:
    if value <= 0 or value > FULL_RESOURCES:
        raise InvalidResourceError(f"{name} must be in (0, 100], got {float(value):.2f}")


def par_score(team1_score: int, r1: Fraction, r2: Fraction, g50: int) -> Fraction:
    """
    Runs team 2 needs to draw level, before rounding.

    - R2 < R1: scale team 1's total down by R2/R1
    - R2 > R1: add the extra resource, valued at G50 runs per 100%
    - equal: team 1's total stands
    """
    if r2 < r1:
        return team1_score * r2 / r1
    if r2 > r1:
        return team1_score + g50 * (r2 - r1) / FULL_RESOURCES
    return Fraction(team1_score)


def compute_target(
    team1_innings: InningsState,
    team1_score: int,
    team2_innings: InningsState,
    category: MatchCategory = MatchCategory.ICC_FULL_MEMBER,
    *,
    g50: Optional[int] = None,
    table: ResourceTable = DUCKWORTH_LEWIS_TABLE,
) -> TargetResult:
    """
    Revised target for the side batting second.

    Neither innings is modified, so this can be re-run whenever another
    interruption is recorded. The result is a target (to win), not the par
    score: a fractional par of 184.41 gives a tie on 184 and a target of
    185; an exact par of 217 gives a tie on 217 and a target of 218.
    """
    if isinstance(team1_score, bool) or not isinstance(team1_score, int):
        raise InvalidScoreError(f"team 1 score must be a whole number of runs, got {team1_score!r}")
    if team1_score < 0:
        raise InvalidScoreError(f"team 1 score cannot be negative, got {team1_score}")

    r1 = team1_innings.resources_available(table)
    r2 = team2_innings.resources_available(table)
    _check_resources("team 1 resources", r1)
    _check_resources("team 2 resources", r2)

    g50_value = g50 if g50 is not None else g50_for(category)
    par = par_score(team1_score, r1, r2, g50_value)
    tie_score = math.floor(par)

    result = TargetResult(
        target=tie_score + 1,
        par_score=tie_score,
        overs_allotted=whole_overs(team2_innings.allocation_balls),
        overs_allotted_balls=team2_innings.allocation_balls,
        overs_remaining_balls=team2_innings.current_overs_remaining_balls(),
        team1_resources=r1,
        team2_resources=r2,
        g50=g50_value,
    )
    logger.info(
        "Target computed | score=%d R1=%.2f R2=%.2f G50=%d -> target=%d in %d overs",
        team1_score, float(r1), float(r2), g50_value, result.target, result.overs_allotted,
    )
    return result
