"""
Error types for the poker engine.

Human input errors are not raised through the engine: they are wrapped in an
ActionResult and handed back to the controller, which is asked again.
The exception classes below are still used as those error values, and are
raised directly for API misuse and for fatal deck conditions.
"""

from enum import Enum


class ErrorKind(Enum):
    """Categories of engine errors."""
    INVALID_ACTION = "INVALID_ACTION"
    INVALID_BET_AMOUNT = "INVALID_BET_AMOUNT"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    DECK_EXHAUSTED = "DECK_EXHAUSTED"
    SESSION_FINISHED = "SESSION_FINISHED"
    HAND_IN_PROGRESS = "HAND_IN_PROGRESS"


class PokerError(Exception):
    """Base class for all engine errors."""
    kind: ErrorKind

    @property
    def message(self) -> str:
        return str(self)


class InvalidAction(PokerError, ValueError):
    """Action outside {fold, check, call, raise} or not legal right now."""
    kind = ErrorKind.INVALID_ACTION


class InvalidBetAmount(PokerError, ValueError):
    """Non-positive amount, more than the balance, or more than any opponent holds."""
    kind = ErrorKind.INVALID_BET_AMOUNT


class InsufficientFunds(PokerError):
    """Raise attempted without chips beyond the call amount."""
    kind = ErrorKind.INSUFFICIENT_FUNDS


class DeckExhausted(PokerError):
    """Not enough cards left to satisfy a reservation or deal."""
    kind = ErrorKind.DECK_EXHAUSTED


class SessionFinished(PokerError):
    """Every bot has been eliminated; no more hands can be played."""
    kind = ErrorKind.SESSION_FINISHED


class HandInProgress(PokerError):
    """A hand of this session is already being played."""
    kind = ErrorKind.HAND_IN_PROGRESS
