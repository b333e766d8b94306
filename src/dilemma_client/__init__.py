"""
dilemma_client — Iterated Prisoner's Dilemma client
====================================================

Session/turn controller for playing an Iterated Prisoner's Dilemma
against a remote match service.

Quick Start (terminal game):
    python -m dilemma_client --base-url http://localhost:8080/api

    from dilemma_client import MatchRunner, TerminalPresenter
    runner = MatchRunner(config={"base_url": "..."}, presenter=TerminalPresenter())
    runner.run()

Custom Presentation:
    from dilemma_client import Presenter, SessionController, MatchServiceClient
    class MyPresenter(Presenter): ...  # Implement render() and notify()

    async with MatchServiceClient(base_url) as client:
        controller = SessionController(client, MyPresenter())
        router = IntentRouter(controller)
        await controller.load_catalog()
        await router.dispatch(ShowRules())

Type Definitions
----------------
Wire models and intents are available for import:

    from dilemma_client import (
        AlgorithmDescriptor, Session, RoundResult, MatchSummary,
        SelectOpponent, StartMatch, SubmitChoice, RequestRematch,
    )
"""

from .presenter import Presenter, NullPresenter
from .terminal_presenter import TerminalPresenter, parse_command
from .runner import MatchRunner
from ._transport import MatchServiceClient
from ._session import (
    SessionController,
    IntentRouter,
    ControllerSnapshot,
    Screen,
    DeferredActionScheduler,
)
from ._session.intents import (
    Intent,
    ShowRules,
    ShowOpponents,
    GoBack,
    SelectOpponent,
    ToggleRandom,
    SelectRounds,
    StartMatch,
    SubmitChoice,
    RequestRematch,
    ChangeOpponent,
    MainMenu,
    RetrySummary,
)
from ._state import MatchState, OpponentSelection
from .errors import (
    DilemmaClientError,
    ValidationError,
    TransportError,
    NetworkError,
    ProtocolError,
    DecodeError,
)
from .types import (
    Choice,
    Outcome,
    Category,
    MatchResult,
    AlgorithmDescriptor,
    Session,
    RoundResult,
    RoundRecord,
    LeaderboardEntry,
    MatchSummary,
)

__all__ = [
    # Main classes
    "SessionController",
    "IntentRouter",
    "MatchServiceClient",
    "MatchRunner",
    "Presenter",
    "NullPresenter",
    "TerminalPresenter",
    "parse_command",
    "ControllerSnapshot",
    "Screen",
    "DeferredActionScheduler",
    "MatchState",
    "OpponentSelection",
    # Intents
    "Intent",
    "ShowRules",
    "ShowOpponents",
    "GoBack",
    "SelectOpponent",
    "ToggleRandom",
    "SelectRounds",
    "StartMatch",
    "SubmitChoice",
    "RequestRematch",
    "ChangeOpponent",
    "MainMenu",
    "RetrySummary",
    # Errors
    "DilemmaClientError",
    "ValidationError",
    "TransportError",
    "NetworkError",
    "ProtocolError",
    "DecodeError",
    # Wire types
    "Choice",
    "Outcome",
    "Category",
    "MatchResult",
    "AlgorithmDescriptor",
    "Session",
    "RoundResult",
    "RoundRecord",
    "LeaderboardEntry",
    "MatchSummary",
]
__version__ = "1.0.0"
