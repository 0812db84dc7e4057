"""
Player and PlayerRegistry for the bot poker game.

A player is either the single human or one of the bots. Both share the same
capabilities (balance, hole cards, bet, receive); the kind tag is only
consulted where the human needs its decision callbacks.

Chips only change through:
- bet(): decrements, clamped to the balance (all-in)
- receive(): increments
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any, Tuple
from dataclasses import dataclass
from enum import Enum
import logging
import random

from pokerbots.core.card import Card, Deck
from pokerbots.core.rules import BOT_NAMES, HUMAN_NAME


logger = logging.getLogger(__name__)


class PlayerKind(Enum):
    """Who controls a player."""
    HUMAN = "HUMAN"
    BOT = "BOT"


@dataclass
class Player:
    """
    A seat at the table.

    Attributes:
        name: Unique name (the human is always HUMAN_NAME)
        chips: Current chip balance, never negative
        kind: HUMAN or BOT
        hole_cards: The player's two private cards
    """
    name: str
    chips: int
    kind: PlayerKind = PlayerKind.BOT
    hole_cards: Tuple[Card, ...] = ()

    def deal_cards(self, card1: Card, card2: Card) -> None:
        """Replace the hole cards."""
        self.hole_cards = (card1, card2)

    def bet(self, amount: int) -> int:
        """
        Take chips from the balance.

        Args:
            amount: Amount to bet

        Returns:
            Actual amount bet (the whole balance if it is smaller)
        """
        if amount <= 0:
            return 0

        actual_amount = min(amount, self.chips)
        self.chips -= actual_amount
        return actual_amount

    def receive(self, amount: int) -> None:
        """Add winnings or refunds to the balance."""
        if amount > 0:
            self.chips += amount

    @property
    def is_human(self) -> bool:
        return self.kind == PlayerKind.HUMAN

    @property
    def is_bot(self) -> bool:
        return self.kind == PlayerKind.BOT

    @property
    def is_broke(self) -> bool:
        return self.chips <= 0

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "name": self.name,
            "kind": self.kind.value,
            "chips": self.chips,
        }
        if not hide_cards and self.hole_cards:
            result["cards"] = [card.to_dict() for card in self.hole_cards]
        return result

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.hole_cards) if self.hole_cards else "??"
        return f"{self.name} [{cards_str}] ${self.chips}"


class PlayerRegistry:
    """
    Owns the human and the bot roster for a session.

    Bots are only removed between hands, via remove_broke_bots().
    """

    def __init__(self, human: Player, bots: List[Player]):
        names = [human.name] + [b.name for b in bots]
        if len(set(names)) != len(names):
            raise ValueError("Player names must be unique")
        self.human = human
        self._bots = list(bots)

    @classmethod
    def create(
        cls,
        num_bots: int,
        human_chips: int,
        bot_chips: int,
        rng: Optional[random.Random] = None,
    ) -> PlayerRegistry:
        """
        Seat a human and num_bots bots with names drawn from the name pool.

        Bots beyond the pool size are named "Bot-<n>".
        """
        names = list(BOT_NAMES)
        (rng or random).shuffle(names)
        bots = []
        for i in range(num_bots):
            name = names.pop() if names else f"Bot-{i + 1}"
            bots.append(Player(name=name, chips=bot_chips, kind=PlayerKind.BOT))
        human = Player(name=HUMAN_NAME, chips=human_chips, kind=PlayerKind.HUMAN)
        return cls(human, bots)

    @property
    def bots(self) -> List[Player]:
        """Bots still seated, in roster order (a copy)."""
        return list(self._bots)

    @property
    def players(self) -> List[Player]:
        """Human first, then bots in roster order."""
        return [self.human] + self._bots

    @property
    def num_players(self) -> int:
        return 1 + len(self._bots)

    def get(self, name: str) -> Optional[Player]:
        """Get player by name."""
        for player in self.players:
            if player.name == name:
                return player
        return None

    def deal(self, deck: Deck) -> None:
        """Deal a fresh hole pair to every seated player, human first."""
        for player in self.players:
            player.deal_cards(*deck.deal_hole_pair())

    def chip_totals(self) -> Dict[str, int]:
        """Current balance of every seated player."""
        return {player.name: player.chips for player in self.players}

    def remove_broke_bots(self) -> List[str]:
        """
        Drop bots with no chips left.

        Returns:
            Names of the removed bots
        """
        removed = [b.name for b in self._bots if b.is_broke]
        if removed:
            self._bots = [b for b in self._bots if not b.is_broke]
            logger.info(f"Bots eliminated: {', '.join(removed)}")
        return removed

    def __repr__(self) -> str:
        return f"PlayerRegistry(human={self.human.chips}, bots={len(self._bots)})"
