"""
HTTP API Routes for PokerBots.

These routes handle session setup and state queries.
Interactive hands are played over the WebSocket.
"""

from typing import Dict, Any, List, Optional

from fastapi import APIRouter, HTTPException

from pokerbots.agents.scripted import PassiveController
from pokerbots.analytics import hand_feedback
from pokerbots.core.errors import PokerError
from pokerbots.core.session import PokerSession
from pokerbots.server.schemas import (
    StartSessionRequest, BuyBackRequest, AutoplayRequest,
    SessionStateSchema, BetSchema, AutoplayResponse,
)
from pokerbots.server.websocket import session_manager, session_state

router = APIRouter()


def get_session(session_id: str) -> PokerSession:
    """Look up a session or answer 404."""
    session = session_manager.get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return session


@router.post("/sessions", response_model=SessionStateSchema)
async def start_session(req: StartSessionRequest) -> Dict[str, Any]:
    """
    Start a new session.

    Seats the human and the bots; hands are played over /ws/{session_id}
    or through /sessions/{session_id}/autoplay.
    """
    try:
        session_id = session_manager.create_session(
            n_bots=req.n_bots,
            starting_chips=req.starting_chips,
            difficulty=req.difficulty,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return session_state(session_id, session_manager.get_session(session_id))


@router.get("/sessions/{session_id}", response_model=SessionStateSchema)
async def get_session_state(session_id: str) -> Dict[str, Any]:
    """Get the session summary: players, chips and hand count."""
    return session_state(session_id, get_session(session_id))


@router.get("/sessions/{session_id}/history", response_model=List[BetSchema])
async def get_bet_history(session_id: str) -> List[Dict[str, Any]]:
    """Every bet recorded in the session, oldest first."""
    return [bet.to_dict() for bet in get_session(session_id).bet_history]


@router.post("/sessions/{session_id}/buy_back", response_model=SessionStateSchema)
async def buy_back(session_id: str, req: Optional[BuyBackRequest] = None) -> Dict[str, Any]:
    """Add chips to the human's balance."""
    session = get_session(session_id)
    try:
        session.buy_back(req.amount if req else None)
    except PokerError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return session_state(session_id, session)


@router.post("/sessions/{session_id}/autoplay", response_model=AutoplayResponse)
async def autoplay(session_id: str, req: Optional[AutoplayRequest] = None) -> Dict[str, Any]:
    """
    Play hands with the human always checking or calling.

    Stops early once every bot is eliminated or the human is broke.
    """
    session = get_session(session_id)
    hands = req.hands if req else 1
    controller = PassiveController()

    results = []
    try:
        for _ in range(hands):
            if results and (session.is_finished or session.needs_buy_back):
                break
            result = session.play_hand(controller)
            human = session.registry.human
            results.append({
                **result.to_dict(),
                "feedback": hand_feedback(result, human.chips, human.name),
            })
    except PokerError as e:
        raise HTTPException(status_code=400, detail=e.message)

    return {
        "session_id": session_id,
        "results": results,
        "chips": session.chip_totals(),
        "finished": session.is_finished,
    }


@router.delete("/sessions/{session_id}")
async def end_session(session_id: str) -> Dict[str, Any]:
    """Forget a session."""
    if not session_manager.remove_session(session_id):
        raise HTTPException(status_code=404, detail=f"Session not found: {session_id}")
    return {"success": True, "message": f"Session {session_id} ended"}
