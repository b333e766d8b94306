# Area: Session
"""
dilemma_client._session.intent_router — Intent Router
======================================================

Routes intents raised by the presentation layer to the session
controller's operations, one at a time and in order. Errors are turned
into presenter notices here so no intent can crash the controller.
"""

import inspect
import logging
from typing import Any, Callable, Dict, Optional, Type

from .intents import (
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
from ..errors import DilemmaClientError, TransportError
from .._shared.logging_config import log_client_error

logger = logging.getLogger("dilemma_client.session.router")

IntentHandler = Callable[[Any], Any]


class IntentRouter:
    """
    Routes intents to controller operations.

    Maintains a registry of handlers keyed by intent type and dispatches
    each intent to its handler. Handlers may be plain functions or
    coroutine functions.

    Usage:
        router = IntentRouter(controller)
        await router.dispatch(SelectOpponent("tit-for-tat"))
        await router.dispatch(StartMatch())
    """

    def __init__(self, controller):
        """Initialize router and register the controller's operations."""
        self.controller = controller
        self._handlers: Dict[Type[Intent], IntentHandler] = {}
        self._register_handlers()

    def _register_handlers(self) -> None:
        c = self.controller
        reg = self.register_handler
        reg(ShowRules, lambda intent: c.show_rules())
        reg(ShowOpponents, lambda intent: c.show_opponents())
        reg(GoBack, lambda intent: c.go_back())
        reg(SelectOpponent, lambda intent: c.select_opponent(intent.algorithm_id))
        reg(ToggleRandom, lambda intent: c.toggle_random_mode())
        reg(SelectRounds, lambda intent: c.select_rounds(intent.total_rounds))
        reg(StartMatch, lambda intent: c.start_match())
        reg(SubmitChoice, lambda intent: c.submit_choice(intent.choice))
        reg(RequestRematch, lambda intent: c.rematch())
        reg(ChangeOpponent, lambda intent: c.change_opponent())
        reg(MainMenu, lambda intent: c.main_menu())
        reg(RetrySummary, lambda intent: c.retry_summary())

    def register_handler(self, intent_type: Type[Intent], handler: IntentHandler) -> None:
        """
        Register a handler for an intent type.

        Args:
            intent_type: The intent class to handle
            handler: Callable taking the intent instance
        """
        self._handlers[intent_type] = handler
        logger.debug(f"Registered handler for {intent_type.__name__}")

    def get_handler(self, intent_type: Type[Intent]) -> Optional[IntentHandler]:
        return self._handlers.get(intent_type)

    async def dispatch(self, intent: Intent) -> Optional[Any]:
        """
        Route an intent to its handler and await the result.

        Args:
            intent: The intent to dispatch

        Returns:
            The operation's result, or None if no handler is registered
            or the operation failed
        """
        handler = self._handlers.get(type(intent))
        if handler is None:
            logger.warning(f"No handler for intent: {type(intent).__name__}")
            return None

        logger.info(f"Dispatching {type(intent).__name__}")
        try:
            result = handler(intent)
            if inspect.isawaitable(result):
                result = await result
            return result
        except DilemmaClientError as e:
            if isinstance(e, TransportError):
                log_client_error(e)
            else:
                logger.info(f"{type(intent).__name__} rejected: {e}")
            self.controller.presenter.notify(str(e))
            return None
