# dls_api/models.py
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Optional

from dls_api.categories import MatchCategory, g50_for, parse_category
from dls_api.errors import InvalidMatchSetupError
from dls_api.overs_math import MAX_OVERS, balls_to_overs, balls_to_overs_str


class Innings(str, Enum):
    """Limited-overs only: there is never a third or fourth innings."""
    FIRST = "first"
    SECOND = "second"


# -----------------------------
# Match setup
# -----------------------------
@dataclass(frozen=True)
class MatchSetup:
    starting_overs: int
    category: MatchCategory = MatchCategory.ICC_FULL_MEMBER

    # Custom G50 for experimentation; None = category default
    g50_override: Optional[int] = None

    def __post_init__(self) -> None:
        validate_starting_overs(self.starting_overs)

        category = parse_category(self.category)
        if category is None:
            raise InvalidMatchSetupError(f"Unknown match category: {self.category!r}")
        object.__setattr__(self, "category", category)

        if self.g50_override is not None:
            if isinstance(self.g50_override, bool) or not isinstance(self.g50_override, int) or self.g50_override <= 0:
                raise InvalidMatchSetupError(f"G50 must be a positive integer, got {self.g50_override!r}")

    @property
    def g50(self) -> int:
        if self.g50_override is not None:
            return self.g50_override
        return g50_for(self.category)


def validate_starting_overs(starting_overs: object) -> None:
    if isinstance(starting_overs, bool) or not isinstance(starting_overs, int):
        raise InvalidMatchSetupError(f"Starting overs must be a whole number of overs, got {starting_overs!r}")
    if starting_overs <= 0 or starting_overs > MAX_OVERS:
        raise InvalidMatchSetupError(f"Starting overs must be 1-{MAX_OVERS}, got {starting_overs}")


# -----------------------------
# Interruption
# -----------------------------
@dataclass(frozen=True)
class Interruption:
    """
    One stoppage. All overs are stored as BALLS.

    overs_left_balls is what remained of the allocation when play stopped,
    before this interruption's reduction (but after every earlier one).
    """
    wickets_lost: int
    overs_completed_balls: int
    overs_removed_balls: int
    overs_left_balls: int
    innings: Innings = Innings.FIRST

    @property
    def overs_completed(self) -> Fraction:
        return balls_to_overs(self.overs_completed_balls)

    @property
    def overs_removed(self) -> Fraction:
        return balls_to_overs(self.overs_removed_balls)

    @property
    def overs_left(self) -> Fraction:
        return balls_to_overs(self.overs_left_balls)

    def describe(self) -> str:
        return (
            f"{self.innings.value} innings: stopped at {balls_to_overs_str(self.overs_completed_balls)} overs "
            f"({self.wickets_lost} wkts), {balls_to_overs_str(self.overs_removed_balls)} overs lost"
        )


# -----------------------------
# Target result
# -----------------------------
@dataclass(frozen=True)
class TargetResult:
    target: int                 # runs to win
    par_score: int              # runs to tie
    overs_allotted: int         # team 2 allocation, whole overs
    overs_allotted_balls: int   # team 2 allocation, exact
    overs_remaining_balls: int  # team 2 overs still to bowl, exact
    team1_resources: Fraction
    team2_resources: Fraction
    g50: int

    @property
    def overs_remaining(self) -> Fraction:
        return balls_to_overs(self.overs_remaining_balls)

    def to_dict(self) -> dict:
        return {
            "target": self.target,
            "par_score": self.par_score,
            "overs_allotted": self.overs_allotted,
            "overs_allotted_exact": balls_to_overs_str(self.overs_allotted_balls),
            "overs_remaining": balls_to_overs_str(self.overs_remaining_balls),
            "team1_resources": round(float(self.team1_resources), 4),
            "team2_resources": round(float(self.team2_resources), 4),
            "g50": self.g50,
        }
