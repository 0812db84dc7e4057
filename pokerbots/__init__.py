"""
PokerBots - One human against a table of random bots

A simplified Texas Hold'em game with:
- Pure Python game core (hand evaluator, betting-round state machine)
- Pluggable human controllers (terminal, WebSocket, scripted)
- FastAPI + WebSocket server and a terminal front end

Usage:
    from pokerbots.core import start_session, play_hand
    from pokerbots.agents import PassiveController
"""

__version__ = "0.1.0"

from pokerbots.core.card import Card, Deck
from pokerbots.core.player import Player
from pokerbots.core.hand import HandRank, evaluate_hand
from pokerbots.core.session import PokerSession, start_session, play_hand

__all__ = [
    "Card",
    "Deck",
    "Player",
    "HandRank",
    "evaluate_hand",
    "PokerSession",
    "start_session",
    "play_hand",
    "__version__",
]
