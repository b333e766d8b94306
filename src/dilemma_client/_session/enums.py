# Area: Session
"""
dilemma_client._session.enums — Screen State Machine Enums
===========================================================

Defines the screens and the events that move the session controller
between them.
"""

from enum import Enum


class Screen(Enum):
    """
    Screens of the session controller.

    State transitions:
    INTRO -> RULES (on SHOW_RULES)
    RULES -> INTRO (on GO_BACK)
    RULES -> SELECTING (on SHOW_OPPONENTS)
    SELECTING -> SELECTING (on OPPONENT_SELECTED)
    SELECTING -> RULES (on GO_BACK)
    SELECTING / FINISHED / RESULTS -> STARTING (on START_REQUESTED)
    STARTING -> PLAYING (on MATCH_STARTED)
    STARTING -> previous screen (on START_FAILED)
    PLAYING / ROUND_RESOLVED -> AWAITING_ROUND (on ROUND_SUBMITTED)
    AWAITING_ROUND -> ROUND_RESOLVED (on ROUND_RESOLVED)
    AWAITING_ROUND -> PLAYING (on ROUND_FAILED)
    ROUND_RESOLVED -> FINISHED (on MATCH_FINISHED)
    FINISHED -> RESULTS (on SUMMARY_LOADED)
    FINISHED / RESULTS -> SELECTING (on CHANGE_OPPONENT)
    Any in-match screen -> INTRO (on MAIN_MENU)
    """
    INTRO = "INTRO"
    RULES = "RULES"
    SELECTING = "SELECTING"
    STARTING = "STARTING"
    PLAYING = "PLAYING"
    AWAITING_ROUND = "AWAITING_ROUND"
    ROUND_RESOLVED = "ROUND_RESOLVED"
    FINISHED = "FINISHED"
    RESULTS = "RESULTS"


class ControllerEvent(Enum):
    """
    Events that trigger screen transitions.

    Events are triggered by:
    - SHOW_RULES / SHOW_OPPONENTS / GO_BACK: navigation intents
    - OPPONENT_SELECTED: SelectOpponent or ToggleRandom intent
    - START_REQUESTED: StartMatch or RequestRematch intent
    - MATCH_STARTED / START_FAILED: POST /game/start completed
    - ROUND_SUBMITTED: SubmitChoice accepted by the waiting guard
    - ROUND_RESOLVED / ROUND_FAILED: POST /game/round completed
    - MATCH_FINISHED: round response with finished=true
    - SUMMARY_LOADED: GET /game/{id}/summary succeeded
    - CHANGE_OPPONENT / MAIN_MENU: results-screen navigation
    """
    SHOW_RULES = "SHOW_RULES"
    SHOW_OPPONENTS = "SHOW_OPPONENTS"
    GO_BACK = "GO_BACK"
    OPPONENT_SELECTED = "OPPONENT_SELECTED"
    START_REQUESTED = "START_REQUESTED"
    MATCH_STARTED = "MATCH_STARTED"
    START_FAILED = "START_FAILED"
    ROUND_SUBMITTED = "ROUND_SUBMITTED"
    ROUND_RESOLVED = "ROUND_RESOLVED"
    ROUND_FAILED = "ROUND_FAILED"
    MATCH_FINISHED = "MATCH_FINISHED"
    SUMMARY_LOADED = "SUMMARY_LOADED"
    CHANGE_OPPONENT = "CHANGE_OPPONENT"
    MAIN_MENU = "MAIN_MENU"


# Screens on which a session is live and leaving it abandons the session
IN_MATCH_SCREENS = frozenset({
    Screen.PLAYING,
    Screen.AWAITING_ROUND,
    Screen.ROUND_RESOLVED,
    Screen.FINISHED,
})
