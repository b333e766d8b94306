# Area: Shared Tests
"""Tests for the pydantic wire models and controller-local state."""

import pytest
from pydantic import ValidationError as SchemaError

from dilemma_client._state import MatchState, OpponentSelection
from dilemma_client.types import (
    AlgorithmDescriptor,
    Category,
    Choice,
    MatchSummary,
    Outcome,
    RoundResult,
    Session,
)
from fakes import make_round, make_summary


class TestOutcome:
    """Tests for Outcome helpers."""

    def test_from_choices(self):
        assert Outcome.from_choices(Choice.COOPERATE, Choice.DEFECT) == Outcome.CD
        assert Outcome.from_choices(Choice.DEFECT, Choice.COOPERATE) == Outcome.DC


class TestAlgorithmDescriptor:
    """Tests for catalog entries."""

    def test_camel_case_fields(self):
        algo = AlgorithmDescriptor.model_validate({
            "id": "grudger", "name": "GRUDGER", "description": "Never forgives",
            "category": "nice", "categoryLabel": "NICE",
            "historicalRank": 4, "historicalScore": 480.25,
        })
        assert algo.category == Category.NICE
        assert algo.category_label == "NICE"
        assert algo.historical_rank == 4
        assert algo.historical_score == 480.25

    def test_tag_field_names_accepted(self):
        algo = AlgorithmDescriptor.model_validate({
            "id": "joss", "name": "JOSS", "description": "Sneaky",
            "tag": "nasty", "tagLabel": "NASTY", "historicalRank": None,
        })
        assert algo.category == Category.NASTY
        assert algo.category_label == "NASTY"
        assert algo.historical_rank is None

    def test_unknown_category_rejected(self):
        with pytest.raises(SchemaError):
            AlgorithmDescriptor.model_validate({"id": "x", "name": "X", "category": "evil"})

    def test_immutable(self):
        algo = AlgorithmDescriptor.model_validate({"id": "x", "name": "X", "category": "mixed"})
        with pytest.raises(SchemaError):
            algo.name = "Y"


class TestSession:
    """Tests for Session."""

    def test_parses_start_response(self):
        session = Session.model_validate({
            "sessionId": "abc", "algorithmId": "random", "algorithmName": "RANDOM",
            "totalRounds": 10, "randomMode": True,
        })
        assert session.session_id == "abc"
        assert session.random_mode is True

    def test_total_rounds_must_be_positive(self):
        with pytest.raises(SchemaError):
            Session.model_validate({
                "sessionId": "abc", "algorithmId": "x", "algorithmName": "X",
                "totalRounds": 0, "randomMode": False,
            })


class TestRoundResult:
    """Tests for RoundResult."""

    def test_valid_round(self):
        result = make_round(player="D", opponent="D")
        assert result.outcome == Outcome.DD
        assert result.player_points == 1

    def test_outcome_must_match_choices(self):
        data = make_round(player="C", opponent="D").model_dump(by_alias=True)
        data["outcome"] = "DC"
        with pytest.raises(SchemaError):
            RoundResult.model_validate(data)

    def test_invalid_choice_letter(self):
        data = make_round().model_dump(by_alias=True)
        data["playerChoice"] = "X"
        with pytest.raises(SchemaError):
            RoundResult.model_validate(data)


class TestMatchSummary:
    """Tests for MatchSummary and its leaderboard."""

    def test_parses_summary(self):
        summary = make_summary("s1", 15, 0, "WIN")
        assert summary.result.value == "WIN"
        assert len(summary.history) == 3
        assert summary.history[0].outcome == Outcome.CC
        assert summary.player_entry.name == "YOU"

    def test_duplicate_rank_rejected(self):
        data = make_summary().model_dump(by_alias=True)
        data["leaderboard"][1]["rank"] = 1
        with pytest.raises(SchemaError):
            MatchSummary.model_validate(data)

    def test_exactly_one_player_entry(self):
        data = make_summary().model_dump(by_alias=True)
        data["leaderboard"][1]["isPlayer"] = True
        with pytest.raises(SchemaError):
            MatchSummary.model_validate(data)

    def test_empty_leaderboard_allowed(self):
        data = make_summary().model_dump(by_alias=True)
        data["leaderboard"] = []
        assert MatchSummary.model_validate(data).player_entry is None


class TestOpponentSelection:
    """Tests for OpponentSelection."""

    def test_empty_by_default(self):
        assert OpponentSelection().is_empty() is True

    def test_choose_clears_random(self):
        selection = OpponentSelection(random_mode=True)
        selection.choose("grudger")
        assert selection == OpponentSelection(algorithm_id="grudger", random_mode=False)


class TestMatchState:
    """Tests for MatchState."""

    def test_apply_round_overwrites_from_response(self):
        state = MatchState(waiting=True)
        state.apply_round(make_round(round_number=3, player_score=7, opponent_score=12))
        assert (state.current_round, state.player_score, state.opponent_score) == (3, 7, 12)
        assert state.waiting is False
        assert state.last_round.round_number == 3

    def test_reset_clears_everything(self):
        state = MatchState()
        state.apply_round(make_round(finished=True))
        state.reset()
        assert state == MatchState()

    def test_copy_has_independent_history(self):
        state = MatchState()
        state.apply_round(make_round())
        clone = state.copy()
        clone.history.append(make_round(round_number=2))
        assert len(state.history) == 1
