"""
PokerBots Core - Pure Python Game Logic

This module contains the deck, hand evaluator, pot, players, round engine
and session, without any I/O or network dependencies.
"""

from pokerbots.core.card import Card, Deck, Rank, Suit
from pokerbots.core.hand import HandRank, HandValue, evaluate_hand
from pokerbots.core.pot import Bet, Pot
from pokerbots.core.player import Player, PlayerKind, PlayerRegistry
from pokerbots.core.rules import RoundState, ActionType, Difficulty
from pokerbots.core.engine import RoundEngine, ActionResult, RaiseBounds, RoundContext
from pokerbots.core.showdown import determine_winners, distribute_pot
from pokerbots.core.session import (
    PokerSession, HandResult,
    start_session, play_hand, session_chip_totals, bet_history, buy_back,
)
from pokerbots.core.errors import (
    ErrorKind, PokerError, InvalidAction, InvalidBetAmount,
    InsufficientFunds, DeckExhausted, SessionFinished, HandInProgress,
)

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "HandRank",
    "HandValue",
    "evaluate_hand",
    "Bet",
    "Pot",
    "Player",
    "PlayerKind",
    "PlayerRegistry",
    "RoundState",
    "ActionType",
    "Difficulty",
    "RoundEngine",
    "ActionResult",
    "RaiseBounds",
    "RoundContext",
    "determine_winners",
    "distribute_pot",
    "PokerSession",
    "HandResult",
    "start_session",
    "play_hand",
    "session_chip_totals",
    "bet_history",
    "buy_back",
    "ErrorKind",
    "PokerError",
    "InvalidAction",
    "InvalidBetAmount",
    "InsufficientFunds",
    "DeckExhausted",
    "SessionFinished",
    "HandInProgress",
]
