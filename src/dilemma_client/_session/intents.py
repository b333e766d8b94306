# Area: Session
"""
dilemma_client._session.intents — Presentation intents
=======================================================

Typed requests the presentation layer raises. The IntentRouter maps each
intent type to one SessionController operation.
"""

from dataclasses import dataclass

from ..types import Choice


@dataclass(frozen=True)
class Intent:
    """Base class for all intents."""


@dataclass(frozen=True)
class ShowRules(Intent):
    pass


@dataclass(frozen=True)
class ShowOpponents(Intent):
    pass


@dataclass(frozen=True)
class GoBack(Intent):
    pass


@dataclass(frozen=True)
class SelectOpponent(Intent):
    algorithm_id: str


@dataclass(frozen=True)
class ToggleRandom(Intent):
    pass


@dataclass(frozen=True)
class SelectRounds(Intent):
    total_rounds: int


@dataclass(frozen=True)
class StartMatch(Intent):
    pass


@dataclass(frozen=True)
class SubmitChoice(Intent):
    choice: Choice


@dataclass(frozen=True)
class RequestRematch(Intent):
    pass


@dataclass(frozen=True)
class ChangeOpponent(Intent):
    pass


@dataclass(frozen=True)
class MainMenu(Intent):
    pass


@dataclass(frozen=True)
class RetrySummary(Intent):
    pass
