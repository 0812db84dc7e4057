"""
Pydantic schemas for API request/response validation.
"""

from typing import List, Optional, Dict, Any
from pydantic import BaseModel, Field

from pokerbots.core.rules import (
    MIN_BOTS, MAX_BOTS, DEFAULT_BOTS,
    MIN_STARTING_CHIPS, MAX_STARTING_CHIPS, DEFAULT_STARTING_CHIPS,
    DEFAULT_DIFFICULTY,
)


# ============= Request Schemas =============

class StartSessionRequest(BaseModel):
    """Request to start a new session."""
    n_bots: int = Field(ge=MIN_BOTS, le=MAX_BOTS, default=DEFAULT_BOTS)
    starting_chips: int = Field(
        ge=MIN_STARTING_CHIPS, le=MAX_STARTING_CHIPS, default=DEFAULT_STARTING_CHIPS
    )
    difficulty: int = Field(ge=1, le=4, default=int(DEFAULT_DIFFICULTY))


class BuyBackRequest(BaseModel):
    """Request to buy more chips for the human."""
    amount: Optional[int] = Field(default=None, gt=0, description="Defaults to the starting chips")


class AutoplayRequest(BaseModel):
    """Request to play hands with the passive controller answering for the human."""
    hands: int = Field(ge=1, le=100, default=1)


# ============= Response Schemas =============

class CardSchema(BaseModel):
    """Card representation."""
    rank: str
    suit: str
    text: str
    color: str


class PlayerSchema(BaseModel):
    """Seated player."""
    name: str
    kind: str
    chips: int


class BetSchema(BaseModel):
    """One recorded contribution to the pot."""
    player: str
    amount: int


class SessionStateSchema(BaseModel):
    """Session summary."""
    session_id: str
    hand_number: int
    difficulty: int
    starting_chips: int
    players: List[PlayerSchema]
    finished: bool
    needs_buy_back: bool


class RankingSchema(BaseModel):
    """A contender's evaluated hand."""
    name: str
    hand: str
    tie_break: int


class HandResultSchema(BaseModel):
    """Outcome of one hand."""
    hand_number: int
    winners: List[str]
    pot: int
    remaining_players: List[str]
    board: List[CardSchema]
    rankings: List[RankingSchema]
    payouts: Dict[str, int]
    capped_winners: List[str] = []
    eliminated_bots: List[str] = []
    human_folded: bool = False
    human_hand: Optional[str] = None
    ended_early: bool = False


class AutoplayHandSchema(HandResultSchema):
    """Hand result with advice for the human."""
    feedback: List[str] = []


class AutoplayResponse(BaseModel):
    """Hands played by an autoplay request."""
    session_id: str
    results: List[AutoplayHandSchema]
    chips: Dict[str, int]
    finished: bool


# ============= WebSocket Message Schemas =============

class WSDecisionMessage(BaseModel):
    """Human answer to a prompt."""
    type: str = "decision"
    action: Optional[str] = None  # fold, check, call, raise
    amount: Optional[int] = None


class WSPromptMessage(BaseModel):
    """Server asks the human to act."""
    type: str = "prompt"
    kind: str  # round, response, raise_amount
    context: Optional[Dict[str, Any]] = None
    amount: Optional[int] = None
    bounds: Optional[Dict[str, Any]] = None


class WSRejectedMessage(BaseModel):
    """The last decision was invalid."""
    type: str = "rejected"
    message: str
    error: Optional[str] = None


class WSResultMessage(BaseModel):
    """WebSocket hand result message."""
    type: str = "result"
    result: Dict[str, Any]
    chips: Dict[str, int]
    feedback: List[str] = []


class WSErrorMessage(BaseModel):
    """WebSocket error message."""
    type: str = "error"
    message: str
    error: Optional[str] = None
