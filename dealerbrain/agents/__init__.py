"""
dealerbrain Agents - opponent modeling and the dealer's decision policy.
"""

from dealerbrain.agents.base import BaseAgent, DecisionContext, DecisionResult
from dealerbrain.agents.opponent import OpponentModel, Personality, PlayerStyle
from dealerbrain.agents.decision import DecisionEngine

__all__ = [
    "BaseAgent",
    "DecisionContext",
    "DecisionResult",
    "OpponentModel",
    "Personality",
    "PlayerStyle",
    "DecisionEngine",
]
