# Area: Session
"""
Session layer: the controller and its collaborators.

This package contains:
- Screen state machine (enums + transitions)
- Deferred action scheduler for the post-match summary fetch
- SessionController, the only owner of match state
- Intents and the IntentRouter that feeds them to the controller
- ControllerSnapshot, the read-only view handed to presenters
"""

from .enums import Screen, ControllerEvent, IN_MATCH_SCREENS
from .state_machine import ScreenStateMachine, TRANSITIONS
from .scheduler import DeferredActionScheduler
from .snapshot import ControllerSnapshot, build_snapshot
from .controller import (
    SessionController,
    CONNECTION_FAILED_NOTICE,
    DEFAULT_SUMMARY_DELAY_SECONDS,
    DEFAULT_TOTAL_ROUNDS,
)
from .intent_router import IntentRouter

__all__ = [
    "Screen",
    "ControllerEvent",
    "IN_MATCH_SCREENS",
    "ScreenStateMachine",
    "TRANSITIONS",
    "DeferredActionScheduler",
    "ControllerSnapshot",
    "build_snapshot",
    "SessionController",
    "CONNECTION_FAILED_NOTICE",
    "DEFAULT_SUMMARY_DELAY_SECONDS",
    "DEFAULT_TOTAL_ROUNDS",
    "IntentRouter",
]
