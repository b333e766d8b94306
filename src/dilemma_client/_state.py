"""
dilemma_client._state — Controller-local match state
=====================================================

Mutable mirror of the server's match progress plus the player's opponent
selection. Only the session controller mutates these objects; presenters
receive copies through snapshots.
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import List, Optional
import logging

from .types import RoundResult

logger = logging.getLogger("dilemma_client.state")


@dataclass
class OpponentSelection:
    """Which opponent the next match is played against.

    A concrete algorithm id and random mode are mutually exclusive.
    """
    algorithm_id: Optional[str] = None
    random_mode: bool = False

    def is_empty(self) -> bool:
        return self.algorithm_id is None and not self.random_mode

    def choose(self, algorithm_id: str) -> None:
        self.random_mode = False
        self.algorithm_id = algorithm_id

    def toggle_random(self) -> None:
        # Turning random on drops the concrete pick; turning it off does not restore it.
        self.random_mode = not self.random_mode
        if self.random_mode:
            self.algorithm_id = None

    def copy(self) -> "OpponentSelection":
        return replace(self)


@dataclass
class MatchState:
    """
    Local progress of the active session.

    ``waiting`` brackets exactly one in-flight round submission.
    ``finished`` is terminal for a session and is only cleared by reset().
    """
    current_round: int = 0
    player_score: int = 0
    opponent_score: int = 0
    waiting: bool = False
    finished: bool = False
    history: List[RoundResult] = field(default_factory=list)

    @property
    def last_round(self) -> Optional[RoundResult]:
        return self.history[-1] if self.history else None

    def can_submit(self) -> bool:
        return not self.waiting and not self.finished

    def apply_round(self, result: RoundResult) -> None:
        """Overwrite local progress with the server's authoritative values."""
        self.current_round = result.round_number
        self.player_score = result.player_score
        self.opponent_score = result.opponent_score
        self.finished = result.finished
        self.history.append(result)
        self.waiting = False
        logger.debug(
            f"Round {result.round_number}/{result.total_rounds}: {result.outcome.value} "
            f"score {result.player_score}-{result.opponent_score}"
        )

    def reset(self) -> None:
        """Reset for a brand-new session."""
        self.current_round = 0
        self.player_score = 0
        self.opponent_score = 0
        self.waiting = False
        self.finished = False
        self.history = []

    def copy(self) -> "MatchState":
        return replace(self, history=list(self.history))
