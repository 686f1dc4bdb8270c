"""Pydantic schemas for API requests and responses."""

from pydantic import BaseModel, ConfigDict, Field
from typing import Literal


class NewGameRequest(BaseModel):
    """Request to start a new match."""

    player_name: str = Field(default="Player", min_length=1, max_length=40)


class ActionRequest(BaseModel):
    """Request for player action."""

    action: Literal["hit", "stay"]


class ReplayRequest(BaseModel):
    """Answer to the replay offer after a grand champion."""

    play_again: bool


class CardResponse(BaseModel):
    """Card representation."""

    model_config = ConfigDict(from_attributes=True)

    face: str
    suit: str
    label: str


class HandResponse(BaseModel):
    """A participant's visible cards and total."""

    name: str
    cards: list[CardResponse]
    hidden_cards: int = 0
    total: int | None
    score: int


class OutcomeResponse(BaseModel):
    """Result of the most recent round."""

    winner: str | None
    winner_role: Literal["player", "dealer"] | None
    category: Literal["bust", "target", "total", "tie"]
    player_total: int
    dealer_total: int


class GameStateResponse(BaseModel):
    """Current match state."""

    match_state: str
    round_state: str | None
    player: HandResponse
    dealer: HandResponse
    max_wins: int
    rounds_played: int
    last_outcome: OutcomeResponse | None
    champion: str | None
    can_hit: bool
    can_stay: bool
    can_start_round: bool
