# dls_api/match.py
from __future__ import annotations

from typing import Optional, Union

from dls_api.categories import MatchCategory
from dls_api.config import DEFAULT_CATEGORY
from dls_api.errors import InvalidInterruptionError, InvalidScoreError
from dls_api.innings import InningsState
from dls_api.log import get_logger
from dls_api.models import Innings, Interruption, MatchSetup, TargetResult
from dls_api.overs_math import OversLike, balls_to_overs
from dls_api.resource_table import DUCKWORTH_LEWIS_TABLE, ResourceTable
from dls_api.target import compute_target

logger = get_logger("dls.match")

InningsLike = Union[Innings, str]


def _parse_innings(raw: InningsLike) -> Innings:
    try:
        return Innings(str(raw.value if isinstance(raw, Innings) else raw).strip().lower())
    except ValueError:
        raise InvalidInterruptionError(f"innings must be 'first' or 'second', got {raw!r}") from None


class CricketMatch:
    """
    One interrupted limited-overs match: setup plus both innings.

    Team 2 starts from whatever allocation team 1 ended with. The second
    innings is opened by its first recorded event; from then on team 1's
    innings is closed to further interruptions.
    """

    def __init__(
        self,
        setup: MatchSetup,
        team1_name: str = "Team 1",
        team2_name: str = "Team 2",
        table: ResourceTable = DUCKWORTH_LEWIS_TABLE,
    ):
        self.setup = setup
        self.team1_name = team1_name
        self.team2_name = team2_name
        self.table = table
        self.first_innings = InningsState(setup.starting_overs, Innings.FIRST)
        self._second_innings: Optional[InningsState] = None
        self.team1_score: Optional[int] = None

    # -----------------------
    # Second innings
    # -----------------------
    @property
    def second_innings_started(self) -> bool:
        return self._second_innings is not None

    @property
    def second_innings(self) -> InningsState:
        """
        Team 2's innings. Before it has started this is a preview built
        from team 1's current allocation and is not stored.
        """
        if self._second_innings is not None:
            return self._second_innings
        return self._open_second_innings()

    def _open_second_innings(self) -> InningsState:
        state = InningsState(self.setup.starting_overs, Innings.SECOND)
        lost = self.first_innings.overs_removed_balls
        if lost:
            # Overs team 1 lost come off team 2's innings before a ball is bowled
            state.record_interruption(0, 0, balls_to_overs(lost))
        return state

    def _innings_for_update(self, innings: Innings) -> InningsState:
        if innings is Innings.FIRST:
            if self._second_innings is not None:
                raise InvalidInterruptionError("first innings is closed: the second innings has already started")
            return self.first_innings
        # Work on a copy so a rejected event does not open the innings
        if self._second_innings is None:
            return self._open_second_innings()
        return self._second_innings.clone()

    def _commit(self, innings: Innings, state: InningsState) -> None:
        if innings is Innings.SECOND:
            self._second_innings = state

    # -----------------------
    # Mutation
    # -----------------------
    def record_interruption(
        self,
        wickets_lost_at_stoppage: int,
        overs_completed: OversLike,
        overs_removed: OversLike,
        innings: InningsLike = Innings.FIRST,
    ) -> Interruption:
        which = _parse_innings(innings)
        state = self._innings_for_update(which)
        try:
            interruption = state.record_interruption(wickets_lost_at_stoppage, overs_completed, overs_removed)
        except InvalidInterruptionError as e:
            logger.warning("Interruption rejected | %s innings | %s", which.value, e)
            raise
        self._commit(which, state)
        logger.info("Interruption recorded | %s", interruption.describe())
        return interruption

    def record_wicket(self, innings: InningsLike = Innings.FIRST) -> int:
        which = _parse_innings(innings)
        state = self._innings_for_update(which)
        wickets = state.record_wicket()
        self._commit(which, state)
        return wickets

    def record_team1_score(self, team1_score: int) -> None:
        if isinstance(team1_score, bool) or not isinstance(team1_score, int) or team1_score < 0:
            raise InvalidScoreError(f"team 1 score must be a non-negative whole number, got {team1_score!r}")
        self.team1_score = team1_score

    def attach_second_innings(self, state: InningsState) -> None:
        """Adopt an already-built second innings (used when restoring a snapshot)."""
        if state.innings is not Innings.SECOND:
            raise InvalidInterruptionError("attached innings must be the second innings")
        if state.starting_overs != self.setup.starting_overs:
            raise InvalidInterruptionError(
                f"second innings starts at {state.starting_overs} overs, match is {self.setup.starting_overs}"
            )
        self._second_innings = state

    # -----------------------
    # Query
    # -----------------------
    def compute_target(self, team1_score: Optional[int] = None) -> TargetResult:
        """
        Target for team 2 given everything recorded so far. Uses the
        recorded team 1 score when none is passed. Safe to call repeatedly.
        """
        score = team1_score if team1_score is not None else self.team1_score
        if score is None:
            raise InvalidScoreError("team 1 score has not been recorded")

        return compute_target(
            self.first_innings,
            score,
            self.second_innings,
            self.setup.category,
            g50=self.setup.g50,
            table=self.table,
        )

    def __repr__(self) -> str:
        return (
            f"CricketMatch({self.team1_name} v {self.team2_name}, {self.setup.starting_overs} overs, "
            f"{self.setup.category.value})"
        )


def new_match(
    starting_overs: int,
    category: Union[MatchCategory, str, None] = None,
    *,
    g50: Optional[int] = None,
    team1_name: str = "Team 1",
    team2_name: str = "Team 2",
) -> CricketMatch:
    setup = MatchSetup(
        starting_overs=starting_overs,
        category=category if category is not None else DEFAULT_CATEGORY,
        g50_override=g50,
    )
    match = CricketMatch(setup, team1_name=team1_name, team2_name=team2_name)
    logger.info(
        "Match created | %s | %d overs | %s | G50=%d",
        f"{team1_name} v {team2_name}", starting_overs, setup.category.value, setup.g50,
    )
    return match
