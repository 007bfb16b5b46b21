"""
HTTP API Routes for dealerbrain.

Stateless routes expose the evaluator and the equity estimator. Session
routes hold a dealer engine per table so the opponent model persists
across hands.

Routes that run the Monte Carlo sampler are plain ``def`` so FastAPI
executes them in its threadpool instead of on the event loop.
"""

import logging
import random
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException

from dealerbrain.agents.base import DecisionContext
from dealerbrain.config import EngineConfig
from dealerbrain.core.card import Card
from dealerbrain.core.equity import EquityEstimator, preflop_equity
from dealerbrain.core.hand import evaluate
from dealerbrain.server.schemas import (
    CompareRequest, CompareSchema, CreateSessionRequest, DecideRequest,
    DecisionSchema, EquityRequest, EquitySchema, HandRequest, HandScoreSchema,
    SessionSchema, TrackActionRequest,
)
from dealerbrain.server.sessions import DealerSession, session_manager

router = APIRouter()

logger = logging.getLogger(__name__)


def bad_request(error: ValueError) -> HTTPException:
    logger.warning(f"Rejected request: {error}")
    return HTTPException(status_code=400, detail=str(error))


def parse_card_list(cards: List[str]) -> List[Card]:
    """Parse card strings, turning bad input into a 400."""
    try:
        return [Card.from_string(c) for c in cards]
    except ValueError as e:
        raise bad_request(e)


def get_session(session_id: str) -> DealerSession:
    """Get a session or fail with 404."""
    session = session_manager.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return session


@router.get("/health")
async def health() -> Dict[str, Any]:
    return {"status": "ok", "sessions": len(session_manager.sessions)}


@router.post("/evaluate", response_model=HandScoreSchema)
async def evaluate_hand(req: HandRequest) -> Dict[str, Any]:
    """Evaluate the best hand from hole and community cards."""
    hole = parse_card_list(req.hole_cards)
    board = parse_card_list(req.community_cards)
    try:
        return evaluate(hole, board).to_dict()
    except ValueError as e:
        raise bad_request(e)


@router.post("/compare", response_model=CompareSchema)
async def compare(req: CompareRequest) -> Dict[str, Any]:
    """Compare two hole-card pairs on the same board."""
    first = parse_card_list(req.first)
    second = parse_card_list(req.second)
    board = parse_card_list(req.community_cards)

    if set(first) & set(second):
        raise bad_request(ValueError("Hands share a card"))
    try:
        first_score = evaluate(first, board)
        second_score = evaluate(second, board)
    except ValueError as e:
        raise bad_request(e)

    return {
        "result": first_score.compare(second_score),
        "first": first_score.to_dict(),
        "second": second_score.to_dict(),
    }


@router.post("/equity", response_model=EquitySchema)
def equity(req: EquityRequest) -> Dict[str, Any]:
    """
    Estimate equity by Monte Carlo.

    Pass ``seed`` for a reproducible estimate.
    """
    hole = parse_card_list(req.hole_cards)
    board = parse_card_list(req.community_cards)
    estimator = EquityEstimator(session_manager.config, random.Random(req.seed))
    try:
        result = estimator.simulate(hole, board, req.range_tag, samples=req.samples)
    except ValueError as e:
        raise bad_request(e)
    return {**result.to_dict(), "preflop_heuristic": preflop_equity(hole)}


# ============= Session Routes =============

@router.post("/sessions", response_model=SessionSchema)
async def create_session(req: CreateSessionRequest) -> Dict[str, Any]:
    """
    Open a dealer session.

    When both stacks are given, blinds are sized from their average.
    """
    config = None
    if req.player_stack is not None and req.opponent_stack is not None:
        base = session_manager.config.model_dump(exclude={"small_blind", "big_blind"})
        config = EngineConfig.for_stacks(req.player_stack, req.opponent_stack, **base)

    session_id = session_manager.create_session(seed=req.seed, config=config)
    return get_session(session_id).to_dict()


@router.get("/sessions/{session_id}", response_model=SessionSchema)
async def get_session_info(session_id: str) -> Dict[str, Any]:
    """Get session information and the current opponent read."""
    return get_session(session_id).to_dict()


@router.post("/sessions/{session_id}/actions", response_model=SessionSchema)
async def track_action(session_id: str, req: TrackActionRequest) -> Dict[str, Any]:
    """Record an action taken by the human opponent."""
    session = get_session(session_id)
    session.engine.track_action(req.is_raise, req.is_fold)
    return session.to_dict()


@router.post("/sessions/{session_id}/decide", response_model=DecisionSchema)
def decide(session_id: str, req: DecideRequest) -> Dict[str, Any]:
    """Ask the dealer for an action at the current decision point."""
    session = get_session(session_id)
    context = DecisionContext(
        hole_cards=parse_card_list(req.hole_cards),
        community_cards=parse_card_list(req.community_cards),
        amount_to_call=req.amount_to_call,
        pot_size=req.pot_size,
        own_stack=req.own_stack,
        opponent_stack=req.opponent_stack,
    )
    try:
        result = session.engine.decide_context(context)
    except ValueError as e:
        raise bad_request(e)

    session.decisions += 1
    return result.to_dict()


@router.post("/sessions/{session_id}/reset", response_model=SessionSchema)
async def reset_session(session_id: str) -> Dict[str, Any]:
    """Forget the opponent model but keep the session."""
    session = get_session(session_id)
    session.engine.reset()
    return session.to_dict()


@router.delete("/sessions/{session_id}")
async def close_session(session_id: str) -> Dict[str, Any]:
    """Close a session."""
    if not session_manager.close_session(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
    return {"success": True, "message": f"{session_id} closed"}
