"""
PokerBots Server - FastAPI + WebSocket Server Layer
"""

from pokerbots.server.app import app, create_app

__all__ = ["app", "create_app"]
