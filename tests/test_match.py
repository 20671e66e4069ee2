import pytest

from dls_api.categories import MatchCategory
from dls_api.errors import (
    InvalidInterruptionError,
    InvalidMatchSetupError,
    InvalidScoreError,
)
from dls_api.match import new_match
from dls_api.models import Innings


# ---------------------------------------------------------
# ICC worked examples (Standard Edition)
# ---------------------------------------------------------

def test_icc_example_first_innings_shortened():
    game = new_match(50, MatchCategory.ICC_FULL_MEMBER)
    # 3 down with 30 overs left, 10 lost
    game.record_interruption(3, 20, 10, Innings.FIRST)

    result = game.compute_target(180)

    assert result.target == 185
    assert result.overs_allotted == 40


def test_icc_example_second_innings_delayed_start():
    game = new_match(45, MatchCategory.ICC_FULL_MEMBER)
    game.record_interruption(0, 0, 10, Innings.SECOND)

    result = game.compute_target(212)

    assert result.target == 185
    assert result.overs_allotted == 35


def test_icc_example_second_innings_interrupted():
    game = new_match(50, MatchCategory.ICC_FULL_MEMBER)
    # 1 down with 38 overs left, 10 lost
    game.record_interruption(1, 12, 10, Innings.SECOND)

    assert game.compute_target(250).target == 218


def test_icc_example_three_second_innings_interruptions():
    game = new_match(50, MatchCategory.ICC_FULL_MEMBER)
    game.record_interruption(1, 12, 10, Innings.SECOND)
    # 3 down with 18 of the remaining 40 left, 2 lost
    game.record_interruption(3, 22, 2, Innings.SECOND)
    # 6 down with 7.4 left of 38, innings ended
    game.record_interruption(6, "30.2", "7.4", Innings.SECOND)

    result = game.compute_target(250)

    # par 159.67: target (not par) is 160
    assert result.par_score == 159
    assert result.target == 160
    assert result.overs_allotted == 30
    assert result.overs_remaining == 0


def test_published_scenario_first_innings_reduced_to_40():
    game = new_match(50, "icc_full_member")
    game.record_interruption(1, 12, 10, "first")

    result = game.compute_target(250)

    assert result.target > 251
    assert result.target == 257
    assert result.overs_allotted == 40


# ---------------------------------------------------------
# Setup
# ---------------------------------------------------------

@pytest.mark.parametrize("overs", [0, -10, 51, 40.5])
def test_invalid_starting_overs(overs):
    with pytest.raises(InvalidMatchSetupError):
        new_match(overs, MatchCategory.ICC_FULL_MEMBER)


def test_unknown_category():
    with pytest.raises(InvalidMatchSetupError):
        new_match(50, "county_second_xi")


@pytest.mark.parametrize("g50", [0, -200, 245.5])
def test_invalid_g50(g50):
    with pytest.raises(InvalidMatchSetupError):
        new_match(50, MatchCategory.ICC_FULL_MEMBER, g50=g50)


def test_category_by_name_and_default():
    assert new_match(50, "ICC_ASSOCIATE_MEMBER").setup.g50 == 200
    assert new_match(50).setup.category is MatchCategory.ICC_FULL_MEMBER


def test_g50_override_used():
    game = new_match(50, MatchCategory.ICC_ASSOCIATE_MEMBER, g50=260)
    game.record_interruption(1, 12, 10)

    assert game.compute_target(250).g50 == 260


# ---------------------------------------------------------
# Second innings bookkeeping
# ---------------------------------------------------------

def test_team2_inherits_team1_reduction():
    game = new_match(50)
    game.record_interruption(3, 20, 10)

    second = game.second_innings

    assert second.allocation == 40
    assert len(second.interruptions) == 1
    assert second.interruptions[0].overs_completed == 0
    assert game.second_innings_started is False


def test_first_innings_closed_once_second_starts():
    game = new_match(50)
    game.record_interruption(0, 5, 0, Innings.SECOND)

    with pytest.raises(InvalidInterruptionError):
        game.record_interruption(2, 30, 5, Innings.FIRST)


def test_rejected_second_innings_event_does_not_open_it():
    game = new_match(50)

    with pytest.raises(InvalidInterruptionError):
        game.record_interruption(0, 10, 45, Innings.SECOND)

    assert game.second_innings_started is False
    game.record_interruption(2, 30, 5, Innings.FIRST)


def test_rejected_interruption_leaves_second_innings_unchanged():
    game = new_match(50)
    game.record_interruption(1, 12, 10, Innings.SECOND)

    with pytest.raises(InvalidInterruptionError):
        game.record_interruption(2, 20, 30, Innings.SECOND)

    assert len(game.second_innings.interruptions) == 1
    assert game.second_innings.allocation == 40


def test_wicket_in_second_innings():
    game = new_match(50)

    assert game.record_wicket("second") == 1
    assert game.second_innings_started is True
    assert game.first_innings.wickets_lost == 0


def test_bad_innings_label():
    game = new_match(50)

    with pytest.raises(InvalidInterruptionError):
        game.record_interruption(1, 10, 5, "third")


# ---------------------------------------------------------
# Target queries
# ---------------------------------------------------------

def test_target_is_repeatable_and_pure():
    game = new_match(50)
    game.record_interruption(3, 20, 10)

    first = game.compute_target(180)
    second = game.compute_target(180)

    assert first == second
    assert game.second_innings_started is False


def test_recorded_score_used():
    game = new_match(50)
    game.record_interruption(3, 20, 10)
    game.record_team1_score(180)

    assert game.compute_target().target == 185


def test_missing_score():
    with pytest.raises(InvalidScoreError):
        new_match(50).compute_target()


def test_negative_recorded_score():
    with pytest.raises(InvalidScoreError):
        new_match(50).record_team1_score(-4)


def test_no_interruptions_needs_one_more_run():
    assert new_match(50).compute_target(275).target == 276
