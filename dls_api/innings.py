# dls_api/innings.py
from __future__ import annotations

from fractions import Fraction
from typing import List, Tuple

from dls_api.errors import InvalidInterruptionError
from dls_api.log import get_logger
from dls_api.models import Innings, Interruption, validate_starting_overs
from dls_api.overs_math import (
    BALLS_PER_OVER,
    OversLike,
    balls_to_overs,
    balls_to_overs_str,
    overs_to_balls,
)
from dls_api.resource_table import DUCKWORTH_LEWIS_TABLE, MAX_WICKETS, ResourceTable

ALL_OUT = MAX_WICKETS + 1

logger = get_logger("dls.innings")


def _parse_overs(value: OversLike, field: str) -> int:
    try:
        return overs_to_balls(value)
    except ValueError as e:
        raise InvalidInterruptionError(f"{field}: {e}") from e


class InningsState:
    """
    Running position of one team's innings.

    Only ever grows: interruptions are appended in arrival order and
    wickets only go up. Nothing here decides the innings is over; a caller
    may query resources at any point (e.g. mid-chase).
    """

    def __init__(self, starting_overs: int, innings: Innings = Innings.FIRST):
        validate_starting_overs(starting_overs)
        self.starting_overs = starting_overs
        self.innings = Innings(innings)
        self._interruptions: List[Interruption] = []
        self._wickets_lost = 0
        self._overs_used_balls = 0

    # -----------------------
    # Read-only views
    # -----------------------
    @property
    def interruptions(self) -> Tuple[Interruption, ...]:
        return tuple(self._interruptions)

    @property
    def wickets_lost(self) -> int:
        return self._wickets_lost

    @property
    def overs_used_balls(self) -> int:
        return self._overs_used_balls

    @property
    def overs_removed_balls(self) -> int:
        return sum(i.overs_removed_balls for i in self._interruptions)

    @property
    def allocation_balls(self) -> int:
        return self.starting_overs * BALLS_PER_OVER - self.overs_removed_balls

    @property
    def allocation(self) -> Fraction:
        return balls_to_overs(self.allocation_balls)

    def current_overs_remaining_balls(self) -> int:
        return max(0, self.allocation_balls - self._overs_used_balls)

    def current_overs_remaining(self) -> Fraction:
        return balls_to_overs(self.current_overs_remaining_balls())

    # -----------------------
    # Mutation
    # -----------------------
    def record_interruption(
        self,
        wickets_lost_at_stoppage: int,
        overs_completed: OversLike,
        overs_removed: OversLike,
    ) -> Interruption:
        """
        Append a stoppage. overs_completed is how far the innings had got
        when play stopped; overs_removed is what this stoppage takes off
        THIS innings' allocation.

        Everything is validated before anything is stored, so a rejected
        interruption leaves the innings untouched.
        """
        wickets = wickets_lost_at_stoppage
        if isinstance(wickets, bool) or not isinstance(wickets, int):
            raise InvalidInterruptionError(f"wickets lost must be an integer, got {wickets!r}")
        if wickets < 0 or wickets > MAX_WICKETS:
            raise InvalidInterruptionError(f"wickets lost at stoppage must be 0-{MAX_WICKETS}, got {wickets}")
        if wickets < self._wickets_lost:
            raise InvalidInterruptionError(
                f"wickets lost at stoppage ({wickets}) is below wickets already recorded ({self._wickets_lost})"
            )

        completed = _parse_overs(overs_completed, "overs completed")
        removed = _parse_overs(overs_removed, "overs removed")
        allocation = self.allocation_balls

        if completed < self._overs_used_balls:
            raise InvalidInterruptionError(
                f"overs completed ({balls_to_overs_str(completed)}) is before overs already bowled "
                f"({balls_to_overs_str(self._overs_used_balls)})"
            )
        if completed > allocation:
            raise InvalidInterruptionError(
                f"overs completed ({balls_to_overs_str(completed)}) exceeds the allocation "
                f"({balls_to_overs_str(allocation)})"
            )

        overs_left = allocation - completed
        if removed > overs_left:
            raise InvalidInterruptionError(
                f"cannot remove {balls_to_overs_str(removed)} overs, only "
                f"{balls_to_overs_str(overs_left)} remain"
            )

        interruption = Interruption(
            wickets_lost=wickets,
            overs_completed_balls=completed,
            overs_removed_balls=removed,
            overs_left_balls=overs_left,
            innings=self.innings,
        )
        self._interruptions.append(interruption)
        self._wickets_lost = wickets
        self._overs_used_balls = completed

        logger.debug("Interruption recorded | %s", interruption.describe())
        return interruption

    def record_wicket(self) -> int:
        if self._wickets_lost >= ALL_OUT:
            raise InvalidInterruptionError("innings is already all out")
        self._wickets_lost += 1
        return self._wickets_lost

    # -----------------------
    # Resources
    # -----------------------
    def interruption_loss(self, interruption: Interruption, table: ResourceTable = DUCKWORTH_LEWIS_TABLE) -> Fraction:
        return table.resource_lost(interruption.overs_left, interruption.overs_removed, interruption.wickets_lost)

    def resources_lost(self, table: ResourceTable = DUCKWORTH_LEWIS_TABLE) -> Fraction:
        return sum((self.interruption_loss(i, table) for i in self._interruptions), Fraction(0))

    def resources_available(self, table: ResourceTable = DUCKWORTH_LEWIS_TABLE) -> Fraction:
        """Resources at the start of the innings less every stoppage's loss."""
        return table.resource_percentage(self.starting_overs, 0) - self.resources_lost(table)

    def resources_remaining(self, table: ResourceTable = DUCKWORTH_LEWIS_TABLE) -> Fraction:
        if self._wickets_lost >= ALL_OUT:
            return Fraction(0)
        return table.resource_percentage(self.current_overs_remaining(), self._wickets_lost)

    def clone(self) -> "InningsState":
        other = InningsState(self.starting_overs, self.innings)
        other._interruptions = list(self._interruptions)
        other._wickets_lost = self._wickets_lost
        other._overs_used_balls = self._overs_used_balls
        return other

    def __repr__(self) -> str:
        return (
            f"InningsState({self.innings.value}, starting_overs={self.starting_overs}, "
            f"allocation={balls_to_overs_str(self.allocation_balls)}, wickets={self._wickets_lost}, "
            f"interruptions={len(self._interruptions)})"
        )
