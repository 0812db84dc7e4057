"""
WebSocket handling for real-time play.

This module provides:
- SessionManager: Keeps the running sessions by ID
- WebSocketController: Answers the engine's questions with messages from the
  connected client
- WebSocket endpoint: Plays hands on request and relays prompts and results

The round engine is synchronous and blocks while waiting for the human, so
each hand runs in a worker thread. Prompts are sent back through the event
loop and decisions flow into the worker through a queue.
"""

from __future__ import annotations
from dataclasses import asdict
from typing import Dict, Optional, Any
import asyncio
import logging
import queue
import random

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import BaseModel, ValidationError

from pokerbots.agents.base import Decision, HumanController
from pokerbots.analytics import hand_feedback
from pokerbots.core.engine import ActionResult, RaiseBounds, RoundContext
from pokerbots.core.errors import PokerError
from pokerbots.core.rules import ActionType, Difficulty
from pokerbots.core.session import PokerSession
from pokerbots.server.schemas import (
    WSDecisionMessage, WSPromptMessage, WSRejectedMessage, WSResultMessage, WSErrorMessage,
)


logger = logging.getLogger(__name__)

# Seconds to wait for a decision before folding for the human
DECISION_TIMEOUT = 300.0

NOT_AN_OBJECT = "Messages must be JSON objects"


class WebSocketController(HumanController):
    """
    Bridges the engine's worker thread and a WebSocket client.

    Usage:
        controller = WebSocketController(websocket, asyncio.get_running_loop())
        # from the event loop, for every {"type": "decision"} message:
        controller.submit(WSDecisionMessage.model_validate(message))
    """

    def __init__(
        self,
        websocket: WebSocket,
        loop: asyncio.AbstractEventLoop,
        timeout: float = DECISION_TIMEOUT,
    ):
        self._websocket = websocket
        self._loop = loop
        self._decisions: queue.Queue = queue.Queue()
        self.timeout = timeout
        self.closed = False

    def submit(self, message: WSDecisionMessage) -> None:
        """Hand a decision message to the waiting engine."""
        self._decisions.put(message)

    def close(self) -> None:
        """Stop waiting for the client; later questions are answered with a fold."""
        self.closed = True
        self._decisions.put(WSDecisionMessage(action=ActionType.FOLD.value))

    def _send(self, message: BaseModel) -> None:
        if self.closed:
            return
        future = asyncio.run_coroutine_threadsafe(
            self._websocket.send_json(message.model_dump(exclude_none=True)), self._loop
        )
        future.result()

    def _wait(self) -> Optional[WSDecisionMessage]:
        if self.closed:
            return None
        try:
            return self._decisions.get(timeout=self.timeout)
        except queue.Empty:
            logger.warning(f"No decision within {self.timeout}s, folding for the human")
            return None

    def request_round_action(self, context: RoundContext) -> Decision:
        self._send(WSPromptMessage(kind="round", context=context.to_dict()))
        message = self._wait()
        if message is None:
            return ActionType.FOLD
        return message.action or ""

    def request_response_action(self, amount: int, context: RoundContext) -> Decision:
        self._send(WSPromptMessage(kind="response", amount=amount, context=context.to_dict()))
        message = self._wait()
        if message is None:
            return ActionType.FOLD
        return message.action or ""

    def request_raise_amount(self, bounds: RaiseBounds) -> int:
        self._send(WSPromptMessage(kind="raise_amount", bounds=asdict(bounds)))
        message = self._wait()
        if message is None:
            return bounds.minimum
        if message.amount is None:
            # Zero is always rejected, so the client is asked again
            return 0
        return message.amount

    def reject(self, result: ActionResult) -> None:
        self._send(WSRejectedMessage(
            message=result.message,
            error=result.error.kind.value if result.error else None,
        ))


class SessionManager:
    """
    Manages running sessions.

    Usage:
        manager = SessionManager()
        session_id = manager.create_session(n_bots=5, starting_chips=150)
        session = manager.get_session(session_id)
    """

    def __init__(self):
        self.sessions: Dict[str, PokerSession] = {}
        self._session_counter = 0

    def create_session(
        self,
        n_bots: int,
        starting_chips: int,
        difficulty: int = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
    ) -> str:
        """Start a new session and return its ID."""
        session = PokerSession(n_bots, starting_chips, Difficulty(difficulty), rng=rng)

        self._session_counter += 1
        session_id = f"session-{self._session_counter}"
        self.sessions[session_id] = session
        logger.info(f"Created {session_id} with {n_bots} bots")

        return session_id

    def get_session(self, session_id: str) -> Optional[PokerSession]:
        """Get a session by ID."""
        return self.sessions.get(session_id)

    def remove_session(self, session_id: str) -> bool:
        """Forget a session. Returns False if it did not exist."""
        if session_id not in self.sessions:
            return False
        del self.sessions[session_id]
        logger.info(f"Removed {session_id}")
        return True


# Global session manager instance
session_manager = SessionManager()


def session_state(session_id: str, session: PokerSession) -> Dict[str, Any]:
    return {"session_id": session_id, **session.get_state()}


async def _send_error(websocket: WebSocket, message: str, error: Optional[str] = None) -> None:
    await websocket.send_json(
        WSErrorMessage(message=message, error=error).model_dump(exclude_none=True)
    )


async def _play_hand(
    websocket: WebSocket,
    session: PokerSession,
    controller: WebSocketController,
) -> None:
    """Run one hand in a worker thread, feeding it the client's decisions."""
    hand_task = asyncio.ensure_future(asyncio.to_thread(session.play_hand, controller))

    while not hand_task.done():
        receive_task = asyncio.ensure_future(websocket.receive_json())
        done, _ = await asyncio.wait(
            {hand_task, receive_task}, return_when=asyncio.FIRST_COMPLETED
        )
        if receive_task not in done:
            receive_task.cancel()
            continue

        try:
            message = receive_task.result()
        except WebSocketDisconnect:
            controller.close()
            await asyncio.wait({hand_task})
            raise
        except ValueError:
            await _send_error(websocket, NOT_AN_OBJECT)
            continue

        if not isinstance(message, dict):
            await _send_error(websocket, NOT_AN_OBJECT)
            continue
        if message.get("type") != "decision":
            await _send_error(websocket, "A hand is in progress")
            continue
        try:
            controller.submit(WSDecisionMessage.model_validate(message))
        except ValidationError:
            # Rejected by the engine and asked again
            controller.submit(WSDecisionMessage())

    try:
        result = hand_task.result()
    except PokerError as e:
        await _send_error(websocket, e.message, e.kind.value)
        return

    human = session.registry.human
    message = WSResultMessage(
        result=result.to_dict(),
        chips=session.chip_totals(),
        feedback=hand_feedback(result, human.chips, human.name),
    )
    await websocket.send_json(message.model_dump())


async def websocket_endpoint(websocket: WebSocket, session_id: str):
    """
    WebSocket endpoint for playing a session.

    Protocol:
    1. Client connects to /ws/{session_id}; server sends the session state
    2. Client sends {"type": "play_hand"}
    3. Server sends {"type": "prompt", "kind": "round" | "response" | "raise_amount", ...}
    4. Client answers {"type": "decision", "action": "call", "amount": 0}
    5. Server sends {"type": "result", ...} when the hand is over
    Also accepted between hands: {"type": "buy_back", "amount": 150},
    {"type": "get_state"}.
    """
    await websocket.accept()

    session = session_manager.get_session(session_id)
    if session is None:
        await _send_error(websocket, "Session not found")
        await websocket.close()
        return

    controller = WebSocketController(websocket, asyncio.get_running_loop())
    logger.info(f"Client connected to {session_id}")

    try:
        await websocket.send_json({"type": "state", **session_state(session_id, session)})

        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                message = None
            if not isinstance(message, dict):
                await _send_error(websocket, NOT_AN_OBJECT)
                continue
            msg_type = message.get("type", "")

            if msg_type == "play_hand":
                await _play_hand(websocket, session, controller)
            elif msg_type == "buy_back":
                try:
                    session.buy_back(message.get("amount"))
                except PokerError as e:
                    await _send_error(websocket, e.message, e.kind.value)
                    continue
                await websocket.send_json({"type": "state", **session_state(session_id, session)})
            elif msg_type == "get_state":
                await websocket.send_json({"type": "state", **session_state(session_id, session)})
            elif msg_type == "decision":
                await _send_error(websocket, "No decision pending")
            else:
                await _send_error(websocket, f"Unknown message type: {msg_type}")

    except WebSocketDisconnect:
        logger.info(f"WebSocket disconnected from {session_id}")
    finally:
        controller.close()
