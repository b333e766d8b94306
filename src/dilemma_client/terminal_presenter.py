# Area: Presentation
"""
dilemma_client.terminal_presenter — Plain-text presenter
=========================================================

A ready-to-use Presenter that draws every screen as text and turns typed
commands into intents. Works out of the box with MatchRunner.

Usage:
    from dilemma_client import MatchRunner, TerminalPresenter

    runner = MatchRunner(config=config, presenter=TerminalPresenter())
    runner.run()

Commands:
    <Enter> / next   advance (intro → rules → opponents → start)
    back             previous screen
    1..N             select opponent N
    r / random       toggle random opponent
    rounds N         set rounds per match
    start            start the match
    c / d            cooperate / defect
    rematch          same opponent and rounds, new session
    change           back to the opponent grid
    menu             back to the intro screen
    retry            retry loading the results
    quit             exit
"""

import sys
from typing import Dict, List, Optional, TextIO

from .presenter import Presenter
from ._session.enums import Screen
from ._session.intents import (
    ChangeOpponent,
    GoBack,
    Intent,
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
from ._session.snapshot import ControllerSnapshot
from .types import Choice, MatchResult, MatchSummary, RoundResult

QUIT_COMMANDS = {"quit", "exit", "q"}

OUTCOME_LABELS: Dict[str, str] = {
    "CC": "MUTUAL COOPERATION",
    "CD": "BETRAYED",
    "DC": "YOU BETRAYED THEM",
    "DD": "MUTUAL DEFECTION",
}

CHOICE_LABELS: Dict[str, str] = {
    "C": "COOPERATE",
    "D": "DEFECT",
}

HIDDEN_OPPONENT = "???"

# Rules screen text; payoffs are applied by the service
RULES_TEXT = [
    "Each round you and your opponent secretly choose to COOPERATE or DEFECT.",
    "",
    "  both cooperate      3 / 3",
    "  you defect alone    5 / 0",
    "  you are betrayed    0 / 5",
    "  both defect         1 / 1",
    "",
    "Betraying pays most, mutual cooperation beats mutual defection,",
    "and being betrayed pays least. Score as many points as you can.",
]

WIDTH = 64


def is_quit_command(line: str) -> bool:
    return line.strip().lower() in QUIT_COMMANDS


def parse_command(line: str, snapshot: ControllerSnapshot) -> Optional[Intent]:
    """
    Translate one line of user input into an intent.

    Args:
        line: Raw input line
        snapshot: Current controller snapshot (resolves context-dependent
            commands such as <Enter> and opponent numbers)

    Returns:
        The intent, or None when the line is not a command on this screen
    """
    words = line.strip().lower().split()
    screen = snapshot.screen

    if not words or words == ["next"]:
        return {
            Screen.INTRO: ShowRules(),
            Screen.RULES: ShowOpponents(),
            Screen.SELECTING: StartMatch(),
        }.get(screen)

    command, args = words[0], words[1:]

    if command == "back":
        return GoBack()
    if command in ("c", "cooperate"):
        return SubmitChoice(Choice.COOPERATE)
    if command in ("d", "defect"):
        return SubmitChoice(Choice.DEFECT)
    if command in ("r", "random"):
        return ToggleRandom()
    if command == "start":
        return StartMatch()
    if command == "rematch":
        return RequestRematch()
    if command == "change":
        return ChangeOpponent()
    if command == "menu":
        return MainMenu()
    if command == "retry":
        return RetrySummary()
    if command == "rounds" and len(args) == 1 and args[0].isdigit():
        return SelectRounds(int(args[0]))
    if command.isdigit() and not args:
        index = int(command) - 1
        if 0 <= index < len(snapshot.catalog):
            return SelectOpponent(snapshot.catalog[index].id)
    return None


class TerminalPresenter(Presenter):
    """
    Presenter that writes each screen to a text stream.

    Repeated snapshots of the same screen with the same content are
    drawn once.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        """
        Initialize TerminalPresenter.

        Args:
            stream: Output stream. Defaults to sys.stdout
        """
        self._stream = stream
        self._last_frame: Optional[str] = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def render(self, snapshot: ControllerSnapshot) -> None:
        frame = "\n".join(self.draw(snapshot))
        if frame == self._last_frame:
            return
        self._last_frame = frame
        self.stream.write(frame + "\n")
        self.stream.flush()

    def notify(self, message: str) -> None:
        self.stream.write(f"\n  !! {message.upper()}\n")
        self.stream.flush()

    def draw(self, snapshot: ControllerSnapshot) -> List[str]:
        """Return the lines for the snapshot's screen."""
        drawers = {
            Screen.INTRO: self._draw_intro,
            Screen.RULES: self._draw_rules,
            Screen.SELECTING: self._draw_selecting,
            Screen.STARTING: self._draw_starting,
            Screen.PLAYING: self._draw_game,
            Screen.AWAITING_ROUND: self._draw_game,
            Screen.ROUND_RESOLVED: self._draw_game,
            Screen.FINISHED: self._draw_game,
            Screen.RESULTS: self._draw_results,
        }
        return [""] + drawers[snapshot.screen](snapshot)

    # ──────────────────────────────────────────────────────────────
    # Screens
    # ──────────────────────────────────────────────────────────────

    def _draw_intro(self, snapshot: ControllerSnapshot) -> List[str]:
        return [
            "=" * WIDTH,
            "  THE PRISONER'S DILEMMA",
            "=" * WIDTH,
            "  Play an iterated match against a classic tournament strategy.",
            "",
            "  [Enter] rules    [quit] exit",
        ]

    def _draw_rules(self, snapshot: ControllerSnapshot) -> List[str]:
        lines = ["--- RULES " + "-" * (WIDTH - 10)]
        lines.extend("  " + line if line else "" for line in RULES_TEXT)
        lines.append("")
        lines.append("  [Enter] choose opponent    [back] intro")
        return lines

    def _draw_selecting(self, snapshot: ControllerSnapshot) -> List[str]:
        lines = ["--- CHOOSE YOUR OPPONENT " + "-" * (WIDTH - 25)]
        if not snapshot.catalog:
            lines.append("  (no opponents available)")
        for number, algorithm in enumerate(snapshot.catalog, start=1):
            marker = ">" if snapshot.selection.algorithm_id == algorithm.id else " "
            label = algorithm.category_label or algorithm.category.value.upper()
            rank = (
                f"  RANK #{algorithm.historical_rank}"
                if algorithm.historical_rank is not None else ""
            )
            lines.append(f" {marker}{number:>3}. {algorithm.name:<24} [{label}]{rank}")
            if algorithm.description:
                lines.append(f"        {algorithm.description}")

        lines.append("")
        lines.append(f"  OPPONENT: {_chosen_label(snapshot)}")
        lines.append(f"  ROUNDS:   {snapshot.total_rounds}")
        lines.append("")
        lines.append("  [1..N] select  [r] random  [rounds N]  [start]  [back]")
        return lines

    def _draw_starting(self, snapshot: ControllerSnapshot) -> List[str]:
        return ["  STARTING MATCH..."]

    def _draw_game(self, snapshot: ControllerSnapshot) -> List[str]:
        session = snapshot.session
        match = snapshot.match
        if session is None:
            return []

        lines = [
            "=" * WIDTH,
            f"  {_round_label(snapshot)}",
            f"  YOU {match.player_score:>5}   vs   {match.opponent_score:<5} "
            f"{snapshot.opponent_display_name}",
            "=" * WIDTH,
        ]
        last = snapshot.last_round
        if last is not None:
            lines.append(f"  {_round_row(last)}")
        if match.history:
            lines.append("  HISTORY: " + " ".join(r.outcome.value for r in match.history[-16:]))

        lines.append("")
        if snapshot.screen == Screen.AWAITING_ROUND:
            lines.append("  WAITING FOR OPPONENT...")
        elif snapshot.screen == Screen.FINISHED:
            if snapshot.summary_pending:
                lines.append("  MATCH OVER. LOADING RESULTS...")
            else:
                lines.append("  [retry] load results   [menu] intro")
        else:
            lines.append("  [c] cooperate   [d] defect   [menu] abandon")
        return lines

    def _draw_results(self, snapshot: ControllerSnapshot) -> List[str]:
        summary = snapshot.summary
        if summary is None:
            return []
        random_mode = snapshot.session is not None and snapshot.session.random_mode
        headline, tag, subtitle = _result_text(summary, random_mode)

        lines = [
            "=" * WIDTH,
            f"  {headline}",
            f"  {tag}",
            f"  {subtitle}",
            "=" * WIDTH,
            f"  YOU {summary.player_score}  -  {summary.opponent_score} {summary.algorithm_name}",
            "",
            f"  MUTUAL COOPERATION  {summary.mutual_coop_count:>4}",
            f"  MUTUAL DEFECTION    {summary.mutual_defect_count:>4}",
            f"  TIMES BETRAYED      {summary.betrayed_count:>4}",
        ]
        if summary.leaderboard:
            lines.append("")
            lines.append("  // TOURNAMENT STANDINGS")
            for entry in summary.leaderboard:
                arrow = " <-" if entry.is_player else ""
                lines.append(f"  {entry.rank:02d}  {entry.name:<24} {entry.score:>6}{arrow}")
            player = summary.player_entry
            if player is not None:
                lines.append(f"  YOUR PLACE: #{player.rank} OF {len(summary.leaderboard)}")
        lines.append("")
        lines.append("  [rematch]  [change] opponent  [menu] intro")
        return lines


def _chosen_label(snapshot: ControllerSnapshot) -> str:
    if snapshot.selection.random_mode:
        return "UNKNOWN (random)"
    algorithm = snapshot.selected_algorithm
    if algorithm is not None:
        return algorithm.name
    if snapshot.selection.algorithm_id:
        return snapshot.selection.algorithm_id
    return "SELECT AN ALGORITHM ABOVE"


def _round_label(snapshot: ControllerSnapshot) -> str:
    total = snapshot.session.total_rounds
    if snapshot.match.finished:
        return f"COMPLETE — {total} ROUNDS"
    return f"ROUND {snapshot.match.current_round + 1} / {total}"


def _round_row(result: RoundResult) -> str:
    outcome = result.outcome.value
    return (
        f"{CHOICE_LABELS[result.player_choice.value]} vs "
        f"{CHOICE_LABELS[result.opponent_choice.value]}  "
        f"{OUTCOME_LABELS.get(outcome, outcome)}  "
        f"YOU +{result.player_points} | THEM +{result.opponent_points}"
    )


def _result_text(summary: MatchSummary, random_mode: bool):
    """Return (headline, tag, subtitle) for the results screen."""
    margin = summary.player_score - summary.opponent_score
    if summary.result == MatchResult.WIN:
        texts = ["YOU WIN", "MATCH COMPLETE · VICTORY", f"+{margin} POINT ADVANTAGE"]
    elif summary.result == MatchResult.LOSE:
        texts = ["YOU LOSE", "MATCH COMPLETE · DEFEAT", f"{-margin} POINTS BEHIND"]
    else:
        texts = ["DRAW", "MATCH COMPLETE · TIE", "PERFECTLY MATCHED"]
    if random_mode:
        texts[2] += f" · OPPONENT WAS: {summary.algorithm_name}"
    return tuple(texts)
