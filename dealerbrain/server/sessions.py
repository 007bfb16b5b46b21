"""
Session management for the dealer API.

Each session is one human opponent sitting against one dealer engine. The
engine (and its opponent model) lives as long as the session does.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional

from dealerbrain.agents.decision import DecisionEngine
from dealerbrain.config import DEFAULT_CONFIG, EngineConfig


logger = logging.getLogger(__name__)


@dataclass
class DealerSession:
    """A dealer engine bound to one table session."""
    session_id: str
    engine: DecisionEngine
    seed: Optional[int] = None
    decisions: int = 0

    def to_dict(self) -> dict:
        return {
            "session_id": self.session_id,
            "seed": self.seed,
            "decisions": self.decisions,
            "small_blind": self.engine.config.small_blind,
            "big_blind": self.engine.config.big_blind,
            "opponent": self.engine.model.snapshot(),
            "personality_description": self.engine.personality_description,
        }


class SessionManager:
    """
    Manages dealer sessions.

    Usage:
        manager = SessionManager()
        session_id = manager.create_session(seed=42)
        session = manager.get_session(session_id)
        manager.close_session(session_id)
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.sessions: Dict[str, DealerSession] = {}
        self._session_counter = 0

    def create_session(
        self,
        seed: Optional[int] = None,
        config: Optional[EngineConfig] = None,
    ) -> str:
        """Create a new session with a fresh engine."""
        self._session_counter += 1
        session_id = f"session-{self._session_counter}"

        engine = DecisionEngine(
            config=config or self.config,
            rng=random.Random(seed),
            name=f"Dealer[{session_id}]",
        )
        self.sessions[session_id] = DealerSession(session_id, engine, seed)
        logger.info(f"Created {session_id} (seed={seed})")

        return session_id

    def get_session(self, session_id: str) -> Optional[DealerSession]:
        """Get a session by ID."""
        return self.sessions.get(session_id)

    def close_session(self, session_id: str) -> bool:
        """Drop a session. Returns False if it did not exist."""
        if self.sessions.pop(session_id, None) is None:
            return False
        logger.info(f"Closed {session_id}")
        return True

    def clear(self) -> None:
        self.sessions.clear()
        self._session_counter = 0


# Global session manager instance
session_manager = SessionManager()
