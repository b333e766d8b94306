# Area: Presentation
"""
dilemma_client.presenter — The presentation contract
=====================================================

Subclass Presenter and implement the 2 methods. The session controller
calls render() after every state change and notify() whenever an
operation fails with a user-visible error.

The presenter never mutates controller state. It reads snapshots and
raises intents (see dilemma_client.intents) to ask for changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ._session.snapshot import ControllerSnapshot


class Presenter(ABC):
    """
    Abstract base class for a presentation layer.

    render() receives an immutable ControllerSnapshot describing the
    current screen, selection, scores, round history and summary.
    notify() receives a short transient message (connection failures,
    server rejections, "no opponent selected", ...).
    """

    @abstractmethod
    def render(self, snapshot: ControllerSnapshot) -> None:
        """
        Called after every controller state change.

        Parameters
        ----------
        snapshot : ControllerSnapshot
            screen          current Screen
            catalog         opponents available for selection
            selection       OpponentSelection (algorithm_id / random_mode)
            total_rounds    rounds requested for the next match
            session         active Session or None
            match           MatchState copy incl. round history
            summary         MatchSummary once the results are loaded
            summary_pending True while the post-match delay is running
        """
        ...

    @abstractmethod
    def notify(self, message: str) -> None:
        """
        Called with a user-visible transient notice.

        Example
        -------
        >>> def notify(self, message):
        ...     print(f"!! {message}")
        """
        ...


class NullPresenter(Presenter):
    """Presenter that ignores everything; the controller's default."""

    def render(self, snapshot: ControllerSnapshot) -> None:
        pass

    def notify(self, message: str) -> None:
        pass
