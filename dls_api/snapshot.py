# dls_api/snapshot.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from dls_api.errors import InvalidInterruptionError, InvalidMatchSetupError
from dls_api.innings import InningsState
from dls_api.match import CricketMatch
from dls_api.models import Innings, MatchSetup
from dls_api.overs_math import balls_to_overs_str


# -----------------------------
# Persisted-state representation
# -----------------------------
# Overs travel as notation strings ("7.4"), which map to whole balls, so
# a snapshot restores without any float rounding.
class InterruptionSnapshot(BaseModel):
    wickets_lost: int
    overs_completed: str = Field(..., description="e.g. 12.0 or 30.2")
    overs_removed: str = Field(..., description="e.g. 10.0 or 7.4")


class InningsSnapshot(BaseModel):
    starting_overs: int
    wickets_lost: int = 0
    interruptions: List[InterruptionSnapshot] = Field(default_factory=list)


class SetupSnapshot(BaseModel):
    starting_overs: int
    category: str
    g50: Optional[int] = Field(None, description="Custom G50; omit for the category default")


class MatchSnapshot(BaseModel):
    setup: SetupSnapshot
    team1_name: str = "Team 1"
    team2_name: str = "Team 2"
    first_innings: InningsSnapshot
    second_innings: Optional[InningsSnapshot] = None
    team1_score: Optional[int] = None


def _innings_snapshot(state: InningsState) -> InningsSnapshot:
    return InningsSnapshot(
        starting_overs=state.starting_overs,
        wickets_lost=state.wickets_lost,
        interruptions=[
            InterruptionSnapshot(
                wickets_lost=i.wickets_lost,
                overs_completed=balls_to_overs_str(i.overs_completed_balls),
                overs_removed=balls_to_overs_str(i.overs_removed_balls),
            )
            for i in state.interruptions
        ],
    )


def to_snapshot(match: CricketMatch) -> MatchSnapshot:
    return MatchSnapshot(
        setup=SetupSnapshot(
            starting_overs=match.setup.starting_overs,
            category=match.setup.category.value,
            g50=match.setup.g50_override,
        ),
        team1_name=match.team1_name,
        team2_name=match.team2_name,
        first_innings=_innings_snapshot(match.first_innings),
        second_innings=_innings_snapshot(match.second_innings) if match.second_innings_started else None,
        team1_score=match.team1_score,
    )


def _replay(state: InningsState, snap: InningsSnapshot) -> InningsState:
    """Re-record every interruption so a snapshot goes through normal validation."""
    for i in snap.interruptions:
        state.record_interruption(i.wickets_lost, i.overs_completed, i.overs_removed)

    if snap.wickets_lost < state.wickets_lost:
        raise InvalidInterruptionError(
            f"{state.innings.value} innings: wickets_lost {snap.wickets_lost} is below the "
            f"{state.wickets_lost} recorded at the last interruption"
        )
    while state.wickets_lost < snap.wickets_lost:
        state.record_wicket()
    return state


def from_snapshot(snap: MatchSnapshot) -> CricketMatch:
    setup = MatchSetup(
        starting_overs=snap.setup.starting_overs,
        category=snap.setup.category,
        g50_override=snap.setup.g50,
    )
    for label, innings in (("first", snap.first_innings), ("second", snap.second_innings)):
        if innings is not None and innings.starting_overs != setup.starting_overs:
            raise InvalidMatchSetupError(
                f"{label} innings starting overs ({innings.starting_overs}) do not match the setup "
                f"({setup.starting_overs})"
            )

    match = CricketMatch(setup, team1_name=snap.team1_name, team2_name=snap.team2_name)
    _replay(match.first_innings, snap.first_innings)

    if snap.second_innings is not None:
        second = _replay(InningsState(setup.starting_overs, Innings.SECOND), snap.second_innings)
        match.attach_second_innings(second)

    if snap.team1_score is not None:
        match.record_team1_score(snap.team1_score)
    return match


def dump_match(match: CricketMatch) -> dict:
    return to_snapshot(match).model_dump()


def load_match(data: dict) -> CricketMatch:
    return from_snapshot(MatchSnapshot.model_validate(data))
