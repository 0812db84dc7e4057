"""
Pot and bet ledger.

Every chip committed during a session is recorded as an immutable Bet.
The running total is cleared between hands; the history is kept for the
whole session so it can be reported at the end.
"""

from __future__ import annotations
from typing import List, Tuple
from dataclasses import dataclass
import logging


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Bet:
    """A single chip contribution."""
    amount: int
    player_name: str

    def to_dict(self) -> dict:
        return {"player": self.player_name, "amount": self.amount}


class Pot:
    """
    The chips in play for the current hand plus the session bet history.

    Invariant: total == sum of the amounts contributed since the last
    clear_total().
    """

    def __init__(self):
        self._total = 0
        self._history: List[Bet] = []

    def contribute(self, player_name: str, amount: int) -> Bet:
        """
        Record a contribution.

        The amount is validated by the caller against the player's balance.
        """
        bet = Bet(amount=amount, player_name=player_name)
        self._history.append(bet)
        self._total += amount
        logger.debug(f"{player_name} added {amount} chips to the pot (total {self._total})")
        return bet

    @property
    def total(self) -> int:
        """Chips in the pot for the current hand."""
        return self._total

    def snapshot_total(self) -> int:
        return self._total

    def snapshot_history(self) -> Tuple[Bet, ...]:
        """All bets made this session, oldest first."""
        return tuple(self._history)

    @property
    def history(self) -> Tuple[Bet, ...]:
        return self.snapshot_history()

    def rollback(self, mark: int) -> List[Bet]:
        """
        Remove every bet recorded after the first `mark` ones.

        The removed amounts leave the total too.

        Returns:
            The removed bets, oldest first
        """
        removed = self._history[mark:]
        del self._history[mark:]
        self._total -= sum(bet.amount for bet in removed)
        return removed

    def clear_total(self) -> None:
        """Reset the hand total; the bet history is kept."""
        self._total = 0

    def __repr__(self) -> str:
        return f"Pot(total={self._total}, bets={len(self._history)})"
