# Area: Presentation Tests
"""Tests for TerminalPresenter rendering and command parsing."""

import io

import pytest

from dilemma_client._session.enums import Screen
from dilemma_client._session.intents import (
    ChangeOpponent,
    GoBack,
    MainMenu,
    RequestRematch,
    RetrySummary,
    SelectOpponent,
    SelectRounds,
    ShowOpponents,
    ShowRules,
    StartMatch,
    SubmitChoice,
    ToggleRandom,
)
from dilemma_client._session.snapshot import build_snapshot
from dilemma_client._state import MatchState, OpponentSelection
from dilemma_client.terminal_presenter import TerminalPresenter, is_quit_command, parse_command
from dilemma_client.types import Choice, Session
from fakes import make_catalog, make_round, make_summary


def snapshot_for(screen, selection=None, session=None, match=None, summary=None,
                 pending=False, catalog=None):
    return build_snapshot(
        screen=screen,
        catalog=tuple(make_catalog() if catalog is None else catalog),
        selection=selection or OpponentSelection(),
        total_rounds=10,
        session=session,
        match=match or MatchState(),
        summary=summary,
        summary_pending=pending,
    )


def make_session(random_mode=False):
    return Session(session_id="s1", algorithm_id="tit-for-tat", algorithm_name="TIT FOR TAT",
                   total_rounds=10, random_mode=random_mode)


def rendered(snapshot):
    out = io.StringIO()
    TerminalPresenter(stream=out).render(snapshot)
    return out.getvalue()


class TestParseCommand:
    """Tests for parse_command()."""

    @pytest.mark.parametrize("screen,expected", [
        (Screen.INTRO, ShowRules()),
        (Screen.RULES, ShowOpponents()),
        (Screen.SELECTING, StartMatch()),
        (Screen.PLAYING, None),
    ])
    def test_enter_advances(self, screen, expected):
        assert parse_command("", snapshot_for(screen)) == expected
        assert parse_command("next", snapshot_for(screen)) == expected

    @pytest.mark.parametrize("line,expected", [
        ("back", GoBack()),
        ("c", SubmitChoice(Choice.COOPERATE)),
        ("D", SubmitChoice(Choice.DEFECT)),
        ("defect", SubmitChoice(Choice.DEFECT)),
        ("r", ToggleRandom()),
        ("start", StartMatch()),
        ("rematch", RequestRematch()),
        ("change", ChangeOpponent()),
        ("menu", MainMenu()),
        ("retry", RetrySummary()),
        ("rounds 25", SelectRounds(25)),
        ("  2 ", SelectOpponent("always-defect")),
    ])
    def test_commands(self, line, expected):
        assert parse_command(line, snapshot_for(Screen.SELECTING)) == expected

    @pytest.mark.parametrize("line", ["9", "0", "rounds", "rounds many", "dance"])
    def test_unknown_or_out_of_range(self, line):
        assert parse_command(line, snapshot_for(Screen.SELECTING)) is None

    def test_quit_commands(self):
        assert is_quit_command("quit")
        assert is_quit_command(" Q ")
        assert not is_quit_command("c")


class TestRenderScreens:
    """Tests for screen output."""

    def test_selecting_lists_catalog(self):
        text = rendered(snapshot_for(
            Screen.SELECTING, selection=OpponentSelection(algorithm_id="tit-for-tat")))
        assert "1. TIT FOR TAT" in text
        assert "RANK #1" in text
        assert "[NASTY]" in text
        assert "OPPONENT: TIT FOR TAT" in text

    def test_selecting_random(self):
        text = rendered(snapshot_for(Screen.SELECTING,
                                     selection=OpponentSelection(random_mode=True)))
        assert "UNKNOWN (random)" in text

    def test_game_screen_after_round(self):
        match = MatchState()
        match.apply_round(make_round("s1", 1, player="C", opponent="D"))
        text = rendered(snapshot_for(Screen.ROUND_RESOLVED, session=make_session(), match=match))

        assert "ROUND 2 / 10" in text
        assert "COOPERATE vs DEFECT" in text
        assert "BETRAYED" in text
        assert "YOU +0 | THEM +5" in text
        assert "HISTORY: CD" in text

    def test_random_opponent_hidden_during_match(self):
        text = rendered(snapshot_for(Screen.PLAYING, session=make_session(random_mode=True)))
        assert "???" in text
        assert "TIT FOR TAT" not in text

    def test_finished_label(self):
        match = MatchState()
        match.apply_round(make_round("s1", 10, player="D", opponent="C", finished=True))
        text = rendered(snapshot_for(Screen.FINISHED, session=make_session(), match=match,
                                     pending=True))
        assert "COMPLETE — 10 ROUNDS" in text
        assert "YOU BETRAYED THEM" in text
        assert "LOADING RESULTS" in text

    @pytest.mark.parametrize("scores,result,headline,subtitle", [
        ((15, 0), "WIN", "YOU WIN", "+15 POINT ADVANTAGE"),
        ((0, 15), "LOSE", "YOU LOSE", "15 POINTS BEHIND"),
        ((9, 9), "DRAW", "DRAW", "PERFECTLY MATCHED"),
    ])
    def test_results(self, scores, result, headline, subtitle):
        summary = make_summary("s1", scores[0], scores[1], result)
        text = rendered(snapshot_for(Screen.RESULTS, session=make_session(), summary=summary))
        assert headline in text
        assert subtitle in text
        assert "OPPONENT WAS" not in text
        assert "TOURNAMENT STANDINGS" in text
        assert "YOUR PLACE: #1 OF 2" in text

    def test_results_reveal_random_opponent(self):
        summary = make_summary("s1", 9, 9, "DRAW", algorithm_name="GRUDGER")
        text = rendered(snapshot_for(Screen.RESULTS, session=make_session(random_mode=True),
                                     summary=summary))
        assert "PERFECTLY MATCHED · OPPONENT WAS: GRUDGER" in text


class TestPresenterOutput:
    """Tests for render()/notify() stream handling."""

    def test_identical_frames_drawn_once(self):
        out = io.StringIO()
        presenter = TerminalPresenter(stream=out)
        snapshot = snapshot_for(Screen.INTRO)

        presenter.render(snapshot)
        first = out.getvalue()
        presenter.render(snapshot)

        assert out.getvalue() == first

    def test_notify_uppercases(self):
        out = io.StringIO()
        TerminalPresenter(stream=out).notify("no opponent selected")
        assert "!! NO OPPONENT SELECTED" in out.getvalue()
