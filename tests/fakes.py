# Area: Session Tests
"""Shared fakes for controller tests: an in-memory match service and a recording presenter."""

import asyncio
from collections import deque
from typing import Any, Dict, List, Optional

from dilemma_client.presenter import Presenter
from dilemma_client.types import (
    AlgorithmDescriptor,
    Choice,
    MatchSummary,
    RoundResult,
    Session,
)

PAYOFFS = {"CC": (3, 3), "CD": (0, 5), "DC": (5, 0), "DD": (1, 1)}


def make_catalog() -> List[AlgorithmDescriptor]:
    return [
        AlgorithmDescriptor.model_validate({
            "id": "tit-for-tat", "name": "TIT FOR TAT",
            "description": "Copies your last move", "category": "nice",
            "categoryLabel": "NICE", "historicalRank": 1, "historicalScore": 504.5,
        }),
        AlgorithmDescriptor.model_validate({
            "id": "always-defect", "name": "ALWAYS DEFECT",
            "description": "Never cooperates", "category": "nasty",
            "categoryLabel": "NASTY",
        }),
    ]


def make_round(
    session_id: str = "s1",
    round_number: int = 1,
    total_rounds: int = 10,
    player: str = "C",
    opponent: str = "D",
    player_score: Optional[int] = None,
    opponent_score: Optional[int] = None,
    finished: bool = False,
) -> RoundResult:
    player_points, opponent_points = PAYOFFS[player + opponent]
    return RoundResult.model_validate({
        "sessionId": session_id,
        "roundNumber": round_number,
        "totalRounds": total_rounds,
        "playerChoice": player,
        "opponentChoice": opponent,
        "playerPoints": player_points,
        "opponentPoints": opponent_points,
        "playerScore": player_points if player_score is None else player_score,
        "opponentScore": opponent_points if opponent_score is None else opponent_score,
        "outcome": player + opponent,
        "finished": finished,
    })


def make_summary(session_id: str = "s1", player_score: int = 9, opponent_score: int = 9,
                 result: str = "DRAW", algorithm_name: str = "TIT FOR TAT") -> MatchSummary:
    return MatchSummary.model_validate({
        "sessionId": session_id,
        "algorithmId": "tit-for-tat",
        "algorithmName": algorithm_name,
        "totalRounds": 3,
        "playerScore": player_score,
        "opponentScore": opponent_score,
        "result": result,
        "mutualCoopCount": 3,
        "mutualDefectCount": 0,
        "betrayedCount": 0,
        "betrayalCount": 0,
        "history": [
            {"round": n, "playerChoice": "C", "opponentChoice": "C",
             "playerPoints": 3, "opponentPoints": 3}
            for n in (1, 2, 3)
        ],
        "leaderboard": [
            {"rank": 1, "name": "YOU", "score": player_score, "isPlayer": True},
            {"rank": 2, "name": algorithm_name, "score": opponent_score, "isPlayer": False},
        ],
    })


class FakeMatchClient:
    """
    In-memory stand-in for MatchServiceClient.

    Every call is recorded in ``calls`` as (method name, args). Round
    responses come from ``rounds`` when queued, otherwise the opponent
    cooperates and the session finishes after ``total_rounds``. Any
    queued or configured Exception instance is raised instead.
    ``round_gate`` (an asyncio.Event) holds play_round until set.
    """

    def __init__(self, catalog: Optional[List[AlgorithmDescriptor]] = None):
        self.catalog = make_catalog() if catalog is None else catalog
        self.calls: List[tuple] = []
        self.catalog_error: Optional[Exception] = None
        self.start_error: Optional[Exception] = None
        self.summary_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None
        self.rounds: deque = deque()
        self.summaries: Dict[str, MatchSummary] = {}
        self.round_gate: Optional[asyncio.Event] = None
        self._sessions: Dict[str, Dict[str, Any]] = {}

    def calls_to(self, method: str) -> List[tuple]:
        return [args for name, args in self.calls if name == method]

    async def list_algorithms(self):
        self.calls.append(("list_algorithms", ()))
        if self.catalog_error is not None:
            raise self.catalog_error
        return list(self.catalog)

    async def start_match(self, algorithm_id, total_rounds, random_mode):
        self.calls.append(("start_match", (algorithm_id, total_rounds, random_mode)))
        await asyncio.sleep(0)
        if self.start_error is not None:
            raise self.start_error
        session_id = f"s{len(self._sessions) + 1}"
        self._sessions[session_id] = {"round": 0, "player": 0, "opponent": 0,
                                      "total": total_rounds}
        return Session(
            session_id=session_id,
            algorithm_id=algorithm_id or "tit-for-tat",
            algorithm_name="UNKNOWN OPPONENT" if random_mode else "TIT FOR TAT",
            total_rounds=total_rounds,
            random_mode=random_mode,
        )

    async def play_round(self, session_id, choice):
        self.calls.append(("play_round", (session_id, Choice(choice))))
        if self.round_gate is not None:
            await self.round_gate.wait()
        else:
            await asyncio.sleep(0)
        if self.rounds:
            item = self.rounds.popleft()
            if isinstance(item, Exception):
                raise item
            return item
        state = self._sessions[session_id]
        state["round"] += 1
        outcome = Choice(choice).value + "C"
        state["player"] += PAYOFFS[outcome][0]
        state["opponent"] += PAYOFFS[outcome][1]
        return make_round(
            session_id=session_id,
            round_number=state["round"],
            total_rounds=state["total"],
            player=Choice(choice).value,
            opponent="C",
            player_score=state["player"],
            opponent_score=state["opponent"],
            finished=state["round"] >= state["total"],
        )

    async def get_summary(self, session_id):
        self.calls.append(("get_summary", (session_id,)))
        await asyncio.sleep(0)
        if self.summary_error is not None:
            raise self.summary_error
        return self.summaries.get(session_id) or make_summary(session_id)

    async def delete_session(self, session_id):
        self.calls.append(("delete_session", (session_id,)))
        await asyncio.sleep(0)
        if self.delete_error is not None:
            raise self.delete_error


class RecordingPresenter(Presenter):
    """Presenter that keeps every snapshot and notice."""

    def __init__(self):
        self.snapshots = []
        self.notices: List[str] = []

    def render(self, snapshot):
        self.snapshots.append(snapshot)

    def notify(self, message):
        self.notices.append(message)

    @property
    def screens(self):
        return [s.screen for s in self.snapshots]
