from fractions import Fraction

import pytest

from dls_api.errors import InvalidInterruptionError, InvalidMatchSetupError
from dls_api.innings import InningsState
from dls_api.models import Innings
from dls_api.resource_table import resource_percentage


# ---------------------------------------------------------
# Construction
# ---------------------------------------------------------

@pytest.mark.parametrize("overs", [0, -5, 51, 20.5, "50", None, True])
def test_invalid_starting_overs(overs):
    with pytest.raises(InvalidMatchSetupError):
        InningsState(overs)


def test_fresh_innings():
    state = InningsState(50)

    assert state.allocation == 50
    assert state.current_overs_remaining() == 50
    assert state.wickets_lost == 0
    assert state.interruptions == ()
    assert state.resources_available() == 100
    assert state.resources_remaining() == 100


def test_shorter_match_starts_below_100():
    assert InningsState(20).resources_available() == Fraction("56.6")


# ---------------------------------------------------------
# Interruptions
# ---------------------------------------------------------

def test_interruption_reduces_allocation():
    state = InningsState(50)

    interruption = state.record_interruption(1, 12, 10)

    assert interruption.overs_left == 38
    assert interruption.innings is Innings.FIRST
    assert state.allocation == 40
    assert state.current_overs_remaining() == 28
    assert state.wickets_lost == 1
    assert state.resources_available() == 100 - (Fraction("82.0") - Fraction("68.8"))


def test_interruptions_compose_additively():
    split = InningsState(50)
    split.record_interruption(2, 20, 5)
    split.record_interruption(2, 20, 3)

    single = InningsState(50)
    single.record_interruption(2, 20, 8)

    assert split.current_overs_remaining() == single.current_overs_remaining()
    assert split.allocation == single.allocation == 42


def test_partial_overs_are_exact():
    state = InningsState(50)
    state.record_interruption(0, "10.2", "4.4")

    assert state.allocation == Fraction(272, 6)
    assert state.current_overs_remaining() == Fraction(272 - 62, 6)


def test_remove_everything_left():
    state = InningsState(50)
    state.record_interruption(4, 30, 20)

    assert state.current_overs_remaining() == 0
    assert state.resources_remaining() == 0


def test_removing_more_than_remains_is_atomic():
    state = InningsState(50)
    state.record_interruption(1, 12, 10)

    with pytest.raises(InvalidInterruptionError):
        state.record_interruption(2, 30, 11)

    assert len(state.interruptions) == 1
    assert state.allocation == 40
    assert state.wickets_lost == 1
    assert state.overs_used_balls == 72


@pytest.mark.parametrize("wickets, completed, removed", [
    (10, 20, 1),        # all out is not a stoppage
    (-1, 20, 1),
    (2.0, 20, 1),
    (0, 51, 0),         # beyond allocation
    (0, "20.6", 0),     # bad notation
    (0, 20, "-1"),
])
def test_invalid_interruptions(wickets, completed, removed):
    state = InningsState(50)

    with pytest.raises(InvalidInterruptionError):
        state.record_interruption(wickets, completed, removed)

    assert state.interruptions == ()


def test_overs_completed_cannot_go_backwards():
    state = InningsState(50)
    state.record_interruption(2, 25, 5)

    with pytest.raises(InvalidInterruptionError):
        state.record_interruption(2, 20, 5)


def test_wickets_cannot_go_backwards():
    state = InningsState(50)
    state.record_interruption(4, 25, 5)

    with pytest.raises(InvalidInterruptionError):
        state.record_interruption(3, 30, 1)


def test_completed_limited_by_reduced_allocation():
    state = InningsState(50)
    state.record_interruption(1, 12, 10)

    with pytest.raises(InvalidInterruptionError):
        state.record_interruption(1, 41, 0)


# ---------------------------------------------------------
# Wickets
# ---------------------------------------------------------

def test_record_wicket_changes_resources_remaining():
    state = InningsState(50)
    state.record_interruption(0, 20, 0)
    before = state.resources_remaining()

    state.record_wicket()

    assert state.wickets_lost == 1
    assert state.resources_remaining() == resource_percentage(30, 1)
    assert state.resources_remaining() < before


def test_all_out_has_no_resources():
    state = InningsState(50)
    for _ in range(10):
        state.record_wicket()

    assert state.resources_remaining() == 0

    with pytest.raises(InvalidInterruptionError):
        state.record_wicket()


def test_clone_is_independent():
    state = InningsState(50, Innings.SECOND)
    state.record_interruption(1, 10, 5)
    other = state.clone()

    other.record_interruption(2, 20, 5)

    assert len(state.interruptions) == 1
    assert len(other.interruptions) == 2
    assert other.innings is Innings.SECOND
