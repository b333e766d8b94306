# Area: Session
"""
dilemma_client._session.controller — Session Controller
========================================================

Owns the local mirror of a match against the remote service and drives
the screen state machine:

    1. Catalog load and opponent selection (no network effect)
    2. Match start (one active Session at a time)
    3. Round submission, guarded so only one move is ever in flight
    4. Round resolution from the server's authoritative values
    5. Deferred summary fetch, then best-effort session teardown

Every operation validates against the current screen before touching
the network. After each state change the presenter receives a fresh
snapshot.
"""

from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Set, Tuple

from .enums import ControllerEvent, IN_MATCH_SCREENS, Screen
from .scheduler import DeferredActionScheduler
from .snapshot import ControllerSnapshot, build_snapshot
from .state_machine import ScreenStateMachine
from .._state import MatchState, OpponentSelection
from ..errors import DilemmaClientError, TransportError, ValidationError
from ..presenter import NullPresenter, Presenter
from ..types import AlgorithmDescriptor, Choice, MatchSummary, RoundResult, Session

logger = logging.getLogger("dilemma_client.session.controller")

DEFAULT_SUMMARY_DELAY_SECONDS = 1.4
DEFAULT_TOTAL_ROUNDS = 10
CONNECTION_FAILED_NOTICE = "FAILED TO CONNECT TO SERVER"


class SessionController:
    """
    Session/turn controller for one player.

    Usage:
        async with MatchServiceClient(base_url) as client:
            controller = SessionController(client, presenter)
            await controller.load_catalog()
            controller.show_rules()
            controller.show_opponents()
            controller.select_opponent("tit-for-tat")
            await controller.start_match()
            await controller.submit_choice(Choice.COOPERATE)

    Only this object mutates MatchState, the selection and the active
    Session; presenters read snapshots.
    """

    def __init__(
        self,
        client,
        presenter: Optional[Presenter] = None,
        summary_delay_seconds: float = DEFAULT_SUMMARY_DELAY_SECONDS,
        default_rounds: int = DEFAULT_TOTAL_ROUNDS,
        scheduler: Optional[DeferredActionScheduler] = None,
    ):
        """
        Initialize the controller.

        Args:
            client: MatchServiceClient (or any object with the same coroutines)
            presenter: Receives render()/notify() calls; defaults to NullPresenter
            summary_delay_seconds: Pause between the final round and the summary fetch
            default_rounds: Rounds requested when start_match() gets none
            scheduler: Deferred action scheduler (injectable for tests)
        """
        _check_rounds(default_rounds)
        self.client = client
        self.presenter = presenter or NullPresenter()
        self.summary_delay_seconds = summary_delay_seconds
        self.machine = ScreenStateMachine()
        self.scheduler = scheduler or DeferredActionScheduler()

        self.catalog: List[AlgorithmDescriptor] = []
        self.selection = OpponentSelection()
        self.total_rounds = default_rounds
        self.session: Optional[Session] = None
        self.match = MatchState()
        self.summary: Optional[MatchSummary] = None

        self._session_released = True
        self._fetching_summary = False
        self._last_start: Optional[Tuple[int, OpponentSelection]] = None
        self._cleanup_tasks: Set[asyncio.Task] = set()

    @property
    def screen(self) -> Screen:
        return self.machine.current_state

    # ──────────────────────────────────────────────────────────────
    # Catalog & navigation
    # ──────────────────────────────────────────────────────────────

    async def load_catalog(self) -> List[AlgorithmDescriptor]:
        """
        Fetch the opponent catalog.

        A transport failure leaves the catalog empty and surfaces one
        connectivity notice; the controller stays usable.
        """
        try:
            catalog = await self.client.list_algorithms()
        except TransportError as e:
            logger.warning(f"Catalog load failed: {e}")
            self.catalog = []
            self.presenter.notify(CONNECTION_FAILED_NOTICE)
            self._render()
            return []

        self.catalog = list(catalog)
        logger.info(f"Loaded {len(self.catalog)} opponents")
        self._render()
        return list(self.catalog)

    def show_rules(self) -> None:
        self._advance(ControllerEvent.SHOW_RULES)
        self._render()

    def show_opponents(self) -> None:
        self._advance(ControllerEvent.SHOW_OPPONENTS)
        self._render()

    def go_back(self) -> None:
        self._advance(ControllerEvent.GO_BACK)
        self._render()

    def change_opponent(self) -> None:
        """Leave the match (or results) for the opponent grid."""
        self._leave_match(ControllerEvent.CHANGE_OPPONENT)

    def main_menu(self) -> None:
        """Leave the match (or results) for the intro screen."""
        self._leave_match(ControllerEvent.MAIN_MENU)

    def _leave_match(self, event: ControllerEvent) -> None:
        self._require(event)
        if self.screen in IN_MATCH_SCREENS:
            self._abandon_session()
        else:
            self._drop_session()
        self.machine.transition(event)
        self._render()

    # ──────────────────────────────────────────────────────────────
    # Selection
    # ──────────────────────────────────────────────────────────────

    def select_opponent(self, algorithm_id: str) -> None:
        """Pick a concrete opponent; clears random mode. Idempotent."""
        if self.catalog and algorithm_id not in {a.id for a in self.catalog}:
            raise ValidationError(f"unknown opponent: {algorithm_id}")
        self._advance(ControllerEvent.OPPONENT_SELECTED)
        self.selection.choose(algorithm_id)
        self._render()

    def toggle_random_mode(self) -> None:
        self._advance(ControllerEvent.OPPONENT_SELECTED)
        self.selection.toggle_random()
        self._render()

    def select_rounds(self, total_rounds: int) -> None:
        _check_rounds(total_rounds)
        self.total_rounds = total_rounds
        self._render()

    # ──────────────────────────────────────────────────────────────
    # Match lifecycle
    # ──────────────────────────────────────────────────────────────

    async def start_match(
        self,
        total_rounds: Optional[int] = None,
        selection: Optional[OpponentSelection] = None,
    ) -> Session:
        """
        Request a new Session and enter PLAYING.

        Args:
            total_rounds: Rounds to request (defaults to the selected rounds)
            selection: Opponent to play (defaults to the current selection)

        Returns:
            The Session created by the service

        Raises:
            ValidationError: No opponent selected, bad rounds, wrong screen,
                or the previous summary is being fetched
            TransportError: The start call failed; the screen is reverted and
                a summary fetch cancelled by this call is scheduled again
        """
        selection = (selection if selection is not None else self.selection).copy()
        rounds = self.total_rounds if total_rounds is None else total_rounds
        if selection.is_empty():
            raise ValidationError("no opponent selected")
        _check_rounds(rounds)
        if self._fetching_summary:
            raise ValidationError("summary is being fetched")
        self._advance(ControllerEvent.START_REQUESTED)

        previous = self.session
        summary_was_pending = False
        if previous is not None:
            summary_was_pending = self.scheduler.is_pending(previous.session_id)
            self.scheduler.cancel(previous.session_id)
        self._render()

        try:
            session = await self.client.start_match(
                selection.algorithm_id, rounds, selection.random_mode
            )
        except DilemmaClientError as e:
            logger.warning(f"Match start failed: {e}")
            self.machine.transition(ControllerEvent.START_FAILED)
            if summary_was_pending and self.screen == Screen.FINISHED:
                self._schedule_summary()
            self._render()
            raise

        if previous is not None and not self._session_released:
            self._spawn_cleanup(previous.session_id)
        self.session = session
        self._session_released = False
        self.match.reset()
        self.summary = None
        self._last_start = (rounds, selection)
        self.machine.transition(ControllerEvent.MATCH_STARTED)
        logger.info(
            f"Match started: session {session.session_id} vs {session.algorithm_name} "
            f"({session.total_rounds} rounds{', random' if session.random_mode else ''})"
        )
        self._render()
        return session

    async def rematch(self) -> Session:
        """Start a fresh Session with the last used rounds and opponent."""
        if self._last_start is None:
            raise ValidationError("no previous match to replay")
        rounds, selection = self._last_start
        return await self.start_match(rounds, selection)

    async def submit_choice(self, choice: Choice) -> Optional[RoundResult]:
        """
        Submit the player's move for the next round.

        Dropped (returns None, no network call) while a submission is in
        flight, after the match finished, or with no active Session.

        Raises:
            ValidationError: ``choice`` is not C or D
            TransportError: The round call failed; the guard is released
        """
        try:
            choice = Choice(choice)
        except ValueError:
            raise ValidationError(f"invalid choice: {choice!r}") from None

        session = self.session
        if session is None or not self.match.can_submit():
            logger.debug(
                f"Submission dropped (session={session is not None}, "
                f"waiting={self.match.waiting}, finished={self.match.finished})"
            )
            return None
        if not self.machine.can_transition(ControllerEvent.ROUND_SUBMITTED):
            logger.debug(f"Submission dropped on {self.screen.value}")
            return None

        # Guard is taken before the first await
        self.match.waiting = True
        self.machine.transition(ControllerEvent.ROUND_SUBMITTED)
        self._render()

        try:
            result = await self.client.play_round(session.session_id, choice)
        except DilemmaClientError as e:
            if self.session is not session:
                logger.debug(f"Round failure for abandoned session {session.session_id}: {e}")
                return None
            logger.warning(f"Round submission failed: {e}")
            self.match.waiting = False
            self.machine.transition(ControllerEvent.ROUND_FAILED)
            self._render()
            raise

        if self.session is not session:
            logger.info(
                f"Discarding round {result.round_number} for abandoned session "
                f"{session.session_id}"
            )
            return None

        self._resolve_round(result)
        return result

    def _resolve_round(self, result: RoundResult) -> None:
        self.match.apply_round(result)
        self.machine.transition(ControllerEvent.ROUND_RESOLVED)
        if result.finished:
            self.machine.transition(ControllerEvent.MATCH_FINISHED)
            logger.info(
                f"Match finished {result.player_score}-{result.opponent_score}; "
                f"summary in {self.summary_delay_seconds}s"
            )
            self._schedule_summary()
        self._render()

    def _schedule_summary(self) -> None:
        self.scheduler.schedule(
            self.session.session_id,
            self.summary_delay_seconds,
            self._finish_after_delay,
        )

    async def _finish_after_delay(self) -> None:
        try:
            await self.finish_match()
        except DilemmaClientError as e:
            self.presenter.notify(str(e))

    async def finish_match(self) -> Optional[MatchSummary]:
        """
        Fetch the summary of the finished match and enter RESULTS.

        On success a best-effort deletion of the Session is spawned and
        not awaited. On failure the controller stays on FINISHED and the
        error propagates; retry_summary() tries again. Results (or
        failures) for a Session abandoned mid-fetch are discarded and
        None is returned.
        """
        session = self.session
        if session is None or not self.match.finished or self.screen != Screen.FINISHED:
            raise ValidationError("match is not finished")
        if self._fetching_summary:
            raise ValidationError("summary is already being fetched")

        self.scheduler.cancel(session.session_id)
        self._fetching_summary = True
        try:
            summary = await self.client.get_summary(session.session_id)
        except DilemmaClientError as e:
            self._fetching_summary = False
            if self.session is not session:
                logger.debug(f"Summary failure for abandoned session {session.session_id}: {e}")
                return None
            logger.warning(f"Summary fetch failed: {e}")
            self._render()
            raise
        self._fetching_summary = False

        if self.session is not session:
            logger.info(f"Discarding summary for abandoned session {session.session_id}")
            return None

        self.summary = summary
        self.machine.transition(ControllerEvent.SUMMARY_LOADED)
        self._session_released = True
        self._spawn_cleanup(session.session_id)
        logger.info(f"Summary loaded: {summary.result.value}")
        self._render()
        return summary

    async def retry_summary(self) -> Optional[MatchSummary]:
        """Manually re-attempt the summary fetch from FINISHED."""
        if self.screen != Screen.FINISHED:
            raise ValidationError("no summary to retry")
        return await self.finish_match()

    # ──────────────────────────────────────────────────────────────
    # Teardown
    # ──────────────────────────────────────────────────────────────

    async def best_effort_cleanup(self, session_id: str) -> None:
        """Delete a Session on the service. Never raises."""
        try:
            await self.client.delete_session(session_id)
            logger.debug(f"Session {session_id} deleted")
        except Exception as e:
            logger.debug(f"Cleanup of session {session_id} failed: {e}")

    async def wait_for_pending(self) -> None:
        """Wait for scheduled summary fetches and cleanup tasks to settle."""
        await self.scheduler.drain()
        while True:
            tasks = [task for task in self._cleanup_tasks if not task.done()]
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)

    def _spawn_cleanup(self, session_id: str) -> None:
        task = asyncio.get_running_loop().create_task(self.best_effort_cleanup(session_id))
        self._cleanup_tasks.add(task)
        task.add_done_callback(self._cleanup_tasks.discard)

    def _abandon_session(self) -> None:
        session = self.session
        if session is not None:
            logger.info(f"Abandoning session {session.session_id}")
            self.scheduler.cancel(session.session_id)
            if not self._session_released:
                self._spawn_cleanup(session.session_id)
        self._drop_session()

    def _drop_session(self) -> None:
        self.session = None
        self.summary = None
        self.match.reset()
        self._session_released = True

    # ──────────────────────────────────────────────────────────────
    # Snapshot & helpers
    # ──────────────────────────────────────────────────────────────

    def snapshot(self) -> ControllerSnapshot:
        pending = self._fetching_summary or (
            self.session is not None and self.scheduler.is_pending(self.session.session_id)
        )
        return build_snapshot(
            screen=self.screen,
            catalog=tuple(self.catalog),
            selection=self.selection,
            total_rounds=self.total_rounds,
            session=self.session,
            match=self.match,
            summary=self.summary,
            summary_pending=pending,
        )

    def _require(self, event: ControllerEvent) -> None:
        if not self.machine.can_transition(event):
            raise ValidationError(
                f"{event.value} is not allowed on {self.screen.value}"
            )

    def _advance(self, event: ControllerEvent) -> Screen:
        self._require(event)
        return self.machine.transition(event)

    def _render(self) -> None:
        self.presenter.render(self.snapshot())


def _check_rounds(total_rounds) -> None:
    if isinstance(total_rounds, bool) or not isinstance(total_rounds, int) or total_rounds <= 0:
        raise ValidationError(f"total rounds must be a positive integer, got {total_rounds!r}")
