# Area: Session
"""
dilemma_client._session.snapshot — Controller state snapshot
=============================================================

Builds the read-only view of the controller that presenters render.
Snapshots are copies; mutating one never affects the controller.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .enums import Screen
from .._state import MatchState, OpponentSelection
from ..types import AlgorithmDescriptor, MatchSummary, RoundResult, Session


@dataclass(frozen=True)
class ControllerSnapshot:
    """Everything a presenter needs to draw the current screen."""
    screen: Screen
    catalog: Tuple[AlgorithmDescriptor, ...]
    selection: OpponentSelection
    total_rounds: int
    session: Optional[Session]
    match: MatchState
    summary: Optional[MatchSummary]
    summary_pending: bool

    @property
    def last_round(self) -> Optional[RoundResult]:
        return self.match.last_round

    @property
    def selected_algorithm(self) -> Optional[AlgorithmDescriptor]:
        if self.selection.algorithm_id is None:
            return None
        for algorithm in self.catalog:
            if algorithm.id == self.selection.algorithm_id:
                return algorithm
        return None

    @property
    def opponent_display_name(self) -> str:
        """Opponent label for the game screen; hidden in random mode."""
        if self.session is None:
            return ""
        if self.session.random_mode:
            return "???"
        return self.session.algorithm_name

    @property
    def can_submit(self) -> bool:
        return (
            self.session is not None
            and self.match.can_submit()
            and self.screen in (Screen.PLAYING, Screen.ROUND_RESOLVED)
        )


def build_snapshot(
    screen: Screen,
    catalog: Tuple[AlgorithmDescriptor, ...],
    selection: OpponentSelection,
    total_rounds: int,
    session: Optional[Session],
    match: MatchState,
    summary: Optional[MatchSummary],
    summary_pending: bool,
) -> ControllerSnapshot:
    """Copy the controller's mutable pieces into a ControllerSnapshot."""
    return ControllerSnapshot(
        screen=screen,
        catalog=tuple(catalog),
        selection=selection.copy(),
        total_rounds=total_rounds,
        session=session,
        match=match.copy(),
        summary=summary,
        summary_pending=summary_pending,
    )
