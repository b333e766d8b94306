# Area: Runtime
"""
dilemma_client.runner — Terminal match runner
==============================================

Glues stdin, the terminal presenter and the session controller together
on one asyncio event loop:

    input line → parse_command → IntentRouter.dispatch → SessionController

Usage:
    from dilemma_client import MatchRunner, TerminalPresenter

    runner = MatchRunner(config=config, presenter=TerminalPresenter())
    runner.run()
"""

from __future__ import annotations
import asyncio
import logging
from typing import Any, Callable, Dict, Optional

from ._runner_config import validate_config, with_defaults
from ._session.controller import SessionController
from ._session.enums import IN_MATCH_SCREENS
from ._session.intent_router import IntentRouter
from ._shared import (
    setup_logging,
    enable_presentation_mode,
    disable_presentation_mode,
)
from ._transport.client import MatchServiceClient
from .terminal_presenter import TerminalPresenter, is_quit_command, parse_command

logger = logging.getLogger("dilemma_client.runner")

InputFunc = Callable[[str], str]


class MatchRunner:
    """
    Interactive runner for the terminal presenter.

    Reads one command per line until ``quit``, EOF or Ctrl+C, then waits
    for pending summary/cleanup work before closing the HTTP session.
    """

    def __init__(
        self,
        config: Dict[str, Any],
        presenter: Optional[TerminalPresenter] = None,
        input_func: InputFunc = input,
    ):
        self.config = with_defaults(config)
        validate_config(self.config)
        self.presenter = presenter or TerminalPresenter()
        self._input = input_func

        # Setup logging
        setup_logging(
            log_file_path=self.config["log_file"],
            level=self.config.get("log_level", logging.INFO),
        )

    def run(self) -> None:
        """Start the event loop. Blocks until the player quits."""
        try:
            asyncio.run(self.run_async())
        except KeyboardInterrupt:
            logger.info("Interrupted")

    async def run_async(self) -> None:
        """Run the interactive session on the current event loop."""
        self._log_startup()
        # Terminal belongs to the presenter from here on
        enable_presentation_mode()
        try:
            async with MatchServiceClient(
                base_url=self.config["base_url"],
                timeout_seconds=self.config["timeout_seconds"],
            ) as client:
                controller = SessionController(
                    client,
                    presenter=self.presenter,
                    summary_delay_seconds=self.config["summary_delay_seconds"],
                    default_rounds=self.config["total_rounds"],
                )
                await self._loop(controller)
        finally:
            disable_presentation_mode()
            logger.info("Runner stopped")

    async def _loop(self, controller: SessionController) -> None:
        router = IntentRouter(controller)
        controller.presenter.render(controller.snapshot())
        await controller.load_catalog()

        try:
            while True:
                try:
                    line = await asyncio.to_thread(self._input, "> ")
                except EOFError:
                    break
                if is_quit_command(line):
                    break

                intent = parse_command(line, controller.snapshot())
                if intent is None:
                    controller.presenter.notify(f"unknown command: {line.strip()}")
                    continue
                await router.dispatch(intent)
        finally:
            # A scheduled summary fetch still completes before leaving
            await controller.scheduler.drain()
            if controller.screen in IN_MATCH_SCREENS:
                controller.main_menu()
            await controller.wait_for_pending()

    def _log_startup(self) -> None:
        logger.info(
            f"Starting dilemma client: service={self.config['base_url']} "
            f"rounds={self.config['total_rounds']} "
            f"timeout={self.config['timeout_seconds']}s"
        )
