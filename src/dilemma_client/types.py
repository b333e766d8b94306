"""
dilemma_client.types — Wire models for the match service
=========================================================

Immutable pydantic models for every payload the match service returns.
Field names are snake_case in Python and camelCase on the wire:

    >>> Session.model_validate({"sessionId": "s1", "algorithmId": "tit-for-tat",
    ...                         "algorithmName": "TIT FOR TAT",
    ...                         "totalRounds": 10, "randomMode": False})
    Session(session_id='s1', ...)

All models are exported from the main package:

    from dilemma_client import AlgorithmDescriptor, RoundResult, MatchSummary
"""

from enum import Enum
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


# ============================================
# Enumerations
# ============================================

class Choice(str, Enum):
    """A single move: cooperate or defect."""
    COOPERATE = "C"
    DEFECT = "D"


class Outcome(str, Enum):
    """Two-letter round code, player's move first."""
    CC = "CC"
    CD = "CD"
    DC = "DC"
    DD = "DD"

    @classmethod
    def from_choices(cls, player: Choice, opponent: Choice) -> "Outcome":
        return cls(player.value + opponent.value)


class Category(str, Enum):
    """Behavioural family of an opponent algorithm."""
    NICE = "nice"
    NASTY = "nasty"
    MIXED = "mixed"


class MatchResult(str, Enum):
    """Final result from the player's point of view."""
    WIN = "WIN"
    LOSE = "LOSE"
    DRAW = "DRAW"


class WireModel(BaseModel):
    """Base for service payloads: camelCase aliases, frozen instances."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ============================================
# GET /algorithms
# ============================================

class AlgorithmDescriptor(WireModel):
    """One opponent in the catalog.

    The service may name the category fields ``tag`` / ``tagLabel``;
    both spellings are accepted.
    """
    id: str
    name: str
    description: str = ""
    category: Category = Field(validation_alias=AliasChoices("category", "tag"))
    category_label: str = Field(
        default="",
        validation_alias=AliasChoices("categoryLabel", "tagLabel"),
    )
    historical_rank: Optional[int] = None
    historical_score: Optional[float] = None


# ============================================
# POST /game/start
# ============================================

class Session(WireModel):
    """Server-tracked match instance returned on start."""
    session_id: str
    algorithm_id: str
    algorithm_name: str
    total_rounds: int = Field(gt=0)
    random_mode: bool


# ============================================
# POST /game/round
# ============================================

class RoundResult(WireModel):
    """Result of one round; cumulative scores are authoritative."""
    session_id: str
    round_number: int = Field(ge=1)
    total_rounds: int = Field(gt=0)
    player_choice: Choice
    opponent_choice: Choice
    player_points: int
    opponent_points: int
    player_score: int = Field(ge=0)
    opponent_score: int = Field(ge=0)
    outcome: Outcome
    finished: bool

    @model_validator(mode="after")
    def _outcome_matches_choices(self) -> "RoundResult":
        expected = Outcome.from_choices(self.player_choice, self.opponent_choice)
        if self.outcome != expected:
            raise ValueError(
                f"outcome {self.outcome.value} does not match choices {expected.value}"
            )
        return self


# ============================================
# GET /game/{sessionId}/summary
# ============================================

class RoundRecord(WireModel):
    """One entry of the summary's round history."""
    round: int = Field(ge=1)
    player_choice: Choice
    opponent_choice: Choice
    player_points: int
    opponent_points: int

    @property
    def outcome(self) -> Outcome:
        return Outcome.from_choices(self.player_choice, self.opponent_choice)


class LeaderboardEntry(WireModel):
    """Tournament standing shown on the results screen."""
    rank: int = Field(ge=1)
    name: str
    score: int
    is_player: bool


class MatchSummary(WireModel):
    """Full match statistics, fetched once after the final round."""
    session_id: str
    algorithm_id: str
    algorithm_name: str
    total_rounds: int
    player_score: int
    opponent_score: int
    result: MatchResult
    mutual_coop_count: int = 0
    mutual_defect_count: int = 0
    betrayed_count: int = 0     # player cooperated, opponent defected
    betrayal_count: int = 0     # player defected, opponent cooperated
    history: List[RoundRecord] = Field(default_factory=list)
    leaderboard: List[LeaderboardEntry] = Field(default_factory=list)

    @model_validator(mode="after")
    def _leaderboard_is_consistent(self) -> "MatchSummary":
        if not self.leaderboard:
            return self
        ranks = [entry.rank for entry in self.leaderboard]
        if len(set(ranks)) != len(ranks):
            raise ValueError(f"leaderboard ranks are not unique: {ranks}")
        players = sum(1 for entry in self.leaderboard if entry.is_player)
        if players != 1:
            raise ValueError(f"leaderboard must contain exactly one player entry, got {players}")
        return self

    @property
    def player_entry(self) -> Optional[LeaderboardEntry]:
        for entry in self.leaderboard:
            if entry.is_player:
                return entry
        return None
