"""
Pydantic schemas for API request/response validation.

Cards travel as short strings ("As", "Td", "10h", "K♥").
"""

from typing import List, Optional
from pydantic import BaseModel, Field

from dealerbrain.core.equity import RangeTag
from dealerbrain.core.rules import MAX_MONTE_CARLO_SAMPLES


# ============= Request Schemas =============

class HandRequest(BaseModel):
    """Cards to evaluate."""
    hole_cards: List[str] = Field(..., min_length=1, max_length=2)
    community_cards: List[str] = Field(default_factory=list, max_length=5)


class CompareRequest(BaseModel):
    """Two hands sharing a board."""
    first: List[str] = Field(..., min_length=2, max_length=2)
    second: List[str] = Field(..., min_length=2, max_length=2)
    community_cards: List[str] = Field(default_factory=list, max_length=5)


class EquityRequest(BaseModel):
    """Request for a Monte Carlo equity estimate."""
    hole_cards: List[str] = Field(..., min_length=2, max_length=2)
    community_cards: List[str] = Field(default_factory=list, max_length=5)
    range_tag: RangeTag = Field(default=RangeTag.RANDOM, description="Opponent range tag")
    samples: Optional[int] = Field(default=None, gt=0, le=MAX_MONTE_CARLO_SAMPLES)
    seed: Optional[int] = None


class CreateSessionRequest(BaseModel):
    """Request to open a dealer session."""
    seed: Optional[int] = Field(default=None, description="Seed for reproducible play")
    player_stack: Optional[int] = Field(default=None, gt=0)
    opponent_stack: Optional[int] = Field(default=None, gt=0)


class TrackActionRequest(BaseModel):
    """An observed action of the human opponent."""
    is_raise: bool
    is_fold: bool = False


class DecideRequest(BaseModel):
    """Table state at a dealer decision point."""
    hole_cards: List[str] = Field(..., min_length=2, max_length=2)
    community_cards: List[str] = Field(default_factory=list, max_length=5)
    amount_to_call: int = Field(default=0, ge=0)
    pot_size: int = Field(default=0, ge=0)
    own_stack: int = Field(..., ge=0)
    opponent_stack: int = Field(..., ge=0)


# ============= Response Schemas =============

class HandScoreSchema(BaseModel):
    """Evaluated hand."""
    category: str
    tie_breakers: List[int]
    name: str
    description: str
    strength: float


class CompareSchema(BaseModel):
    """Result of a hand comparison."""
    result: int = Field(..., description="1 first wins, -1 second wins, 0 split")
    first: HandScoreSchema
    second: HandScoreSchema


class EquitySchema(BaseModel):
    """Monte Carlo estimate."""
    wins: int
    ties: int
    losses: int
    samples: int
    win_probability: float
    tie_probability: float
    loss_probability: float
    equity: float
    preflop_heuristic: float = Field(..., description="Closed-form starting-hand equity")


class OpponentSchema(BaseModel):
    """Opponent model snapshot."""
    aggression: float
    style: str
    range: str
    personality: str
    observations: int
    raises: int
    calls: int
    folds: int


class SessionSchema(BaseModel):
    """Session information."""
    session_id: str
    seed: Optional[int] = None
    decisions: int
    small_blind: int
    big_blind: int
    opponent: OpponentSchema
    personality_description: str


class DecisionSchema(BaseModel):
    """The dealer's chosen action."""
    action: str
    amount: int
    equity: Optional[float] = None
    pot_odds: Optional[float] = None
    reason: str = ""

