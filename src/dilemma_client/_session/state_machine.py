# Area: Session
"""
dilemma_client._session.state_machine — Screen State Machine
=============================================================

Implements the state machine that tracks which screen the session
controller is on. Handles transitions between screens based on events
raised by the controller's own operations.
"""

from typing import Optional
import logging

from .enums import Screen, ControllerEvent

logger = logging.getLogger("dilemma_client.session.state_machine")


# Valid state transitions: {current_state: {event: next_state}}
TRANSITIONS = {
    Screen.INTRO: {
        ControllerEvent.SHOW_RULES: Screen.RULES,
    },
    Screen.RULES: {
        ControllerEvent.GO_BACK: Screen.INTRO,
        ControllerEvent.SHOW_OPPONENTS: Screen.SELECTING,
    },
    Screen.SELECTING: {
        ControllerEvent.OPPONENT_SELECTED: Screen.SELECTING,
        ControllerEvent.GO_BACK: Screen.RULES,
        ControllerEvent.START_REQUESTED: Screen.STARTING,
    },
    Screen.STARTING: {
        ControllerEvent.MATCH_STARTED: Screen.PLAYING,
        # START_FAILED is resolved by revert() to the screen saved on START_REQUESTED
    },
    Screen.PLAYING: {
        ControllerEvent.ROUND_SUBMITTED: Screen.AWAITING_ROUND,
        ControllerEvent.MAIN_MENU: Screen.INTRO,
    },
    Screen.AWAITING_ROUND: {
        ControllerEvent.ROUND_RESOLVED: Screen.ROUND_RESOLVED,
        ControllerEvent.ROUND_FAILED: Screen.PLAYING,
        ControllerEvent.MAIN_MENU: Screen.INTRO,
    },
    Screen.ROUND_RESOLVED: {
        ControllerEvent.ROUND_SUBMITTED: Screen.AWAITING_ROUND,
        ControllerEvent.MATCH_FINISHED: Screen.FINISHED,
        ControllerEvent.MAIN_MENU: Screen.INTRO,
    },
    Screen.FINISHED: {
        ControllerEvent.SUMMARY_LOADED: Screen.RESULTS,
        ControllerEvent.START_REQUESTED: Screen.STARTING,
        ControllerEvent.CHANGE_OPPONENT: Screen.SELECTING,
        ControllerEvent.MAIN_MENU: Screen.INTRO,
    },
    Screen.RESULTS: {
        ControllerEvent.START_REQUESTED: Screen.STARTING,
        ControllerEvent.CHANGE_OPPONENT: Screen.SELECTING,
        ControllerEvent.MAIN_MENU: Screen.INTRO,
    },
}


class ScreenStateMachine:
    """
    State machine for screen progression.

    Tracks the current screen and validates/executes transitions
    based on controller events.

    Attributes:
        current_state: The screen the controller is on
        saved_state: Screen saved when a match start begins (for revert)
    """

    def __init__(self):
        """Initialize state machine on the INTRO screen."""
        self.current_state = Screen.INTRO
        self.saved_state: Optional[Screen] = None

    def can_transition(self, event: ControllerEvent) -> bool:
        """
        Check if a transition is valid from current state.

        Args:
            event: The event to check

        Returns:
            True if the transition is valid, False otherwise
        """
        if event == ControllerEvent.START_FAILED:
            return self.current_state == Screen.STARTING and self.saved_state is not None
        valid_transitions = TRANSITIONS.get(self.current_state, {})
        return event in valid_transitions

    def transition(self, event: ControllerEvent) -> Screen:
        """
        Execute a state transition.

        Args:
            event: The event triggering the transition

        Returns:
            The new state after transition

        Raises:
            ValueError: If the transition is not valid from the current state
        """
        if not self.can_transition(event):
            raise ValueError(
                f"Invalid transition: {event.value} from {self.current_state.value}"
            )

        if event == ControllerEvent.START_FAILED:
            return self.revert()

        previous = self.current_state
        if event == ControllerEvent.START_REQUESTED:
            self.saved_state = previous
        elif event == ControllerEvent.MATCH_STARTED:
            self.saved_state = None

        self.current_state = TRANSITIONS[previous][event]
        logger.debug(f"Screen: {previous.value} → {self.current_state.value} ({event.value})")
        return self.current_state

    def revert(self) -> Screen:
        """
        Restore the screen saved when the last start was requested.

        Only meaningful while on STARTING; otherwise the current screen is kept.
        """
        if self.current_state == Screen.STARTING and self.saved_state:
            logger.debug(f"Screen: STARTING → {self.saved_state.value} (reverted)")
            self.current_state = self.saved_state
            self.saved_state = None
        return self.current_state
