"""
Base Agent Interface for dealerbrain.

The table state machine (owned by the interaction layer) calls an agent
once per decision point with a ``DecisionContext`` and applies the returned
``DecisionResult``. Observed human actions are fed back through
``track_action`` so adaptive agents can model the opponent.

Usage:
    class MyAgent(BaseAgent):
        def decide_context(self, context):
            return DecisionResult(ActionType.CALL)

        def track_action(self, is_raise, is_fold=False):
            pass
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from dealerbrain.core.card import Card
from dealerbrain.core.rules import ActionType, Street, pot_odds, street_for_board


@dataclass(frozen=True)
class DecisionContext:
    """
    Everything an agent may look at for one decision.

    Attributes:
        hole_cards: The agent's two private cards
        community_cards: Board cards revealed so far (0, 3, 4 or 5)
        amount_to_call: Chips needed to continue
        pot_size: Chips already in the pot
        own_stack: The agent's remaining chips
        opponent_stack: The opponent's remaining chips
    """
    hole_cards: Sequence[Card]
    community_cards: Sequence[Card] = ()
    amount_to_call: int = 0
    pot_size: int = 0
    own_stack: int = 0
    opponent_stack: int = 0

    def __post_init__(self):
        object.__setattr__(self, "hole_cards", tuple(self.hole_cards))
        object.__setattr__(self, "community_cards", tuple(self.community_cards))

    @property
    def street(self) -> Street:
        return street_for_board(self.community_cards)

    @property
    def is_preflop(self) -> bool:
        return not self.community_cards

    @property
    def pot_odds(self) -> float:
        return pot_odds(self.amount_to_call, self.pot_size)


@dataclass
class DecisionResult:
    """
    An agent's chosen action.

    ``amount`` is the raise size for RAISE and 0 otherwise. ``equity``,
    ``pot_odds`` and ``reason`` explain how the action was reached.
    """
    action: ActionType
    amount: int = 0
    equity: Optional[float] = None
    pot_odds: Optional[float] = None
    reason: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "amount": self.amount,
            "equity": self.equity,
            "pot_odds": self.pot_odds,
            "reason": self.reason,
        }

    def __repr__(self) -> str:
        return f"DecisionResult({self.action.value}, {self.amount}, reason={self.reason!r})"


class BaseAgent(ABC):
    """
    Abstract base class for dealer agents.

    Attributes:
        name: Human-readable name
    """

    def __init__(self, name: Optional[str] = None):
        self.name = name or self.__class__.__name__

    @abstractmethod
    def decide_context(self, context: DecisionContext) -> DecisionResult:
        """
        Choose an action for the given context.

        Must not mutate anything except the agent's own random stream.
        """

    @abstractmethod
    def track_action(self, is_raise: bool, is_fold: bool = False) -> None:
        """Record an action taken by the opponent."""

    def reset(self) -> None:
        """
        Reset the agent's internal state for a new session.

        Override this method if your agent maintains state between hands.
        """

    def decide(
        self,
        hole_cards: Sequence[Card],
        community_cards: Sequence[Card],
        amount_to_call: int,
        pot_size: int,
        own_stack: int,
        opponent_stack: int,
    ) -> DecisionResult:
        """Convenience method that builds the context and decides."""
        context = DecisionContext(
            hole_cards=hole_cards,
            community_cards=community_cards,
            amount_to_call=amount_to_call,
            pot_size=pot_size,
            own_stack=own_stack,
            opponent_stack=opponent_stack,
        )
        return self.decide_context(context)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name})"
