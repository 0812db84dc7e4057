"""
Card and Deck classes for the bot poker game.

Ranks carry their numeric poker value (2-14, Ace high) so hand evaluation
can use them directly as tie-break values.

The Deck keeps its cards in disjoint partitions:
- pool: cards not yet set aside
- reserve: cards set aside for the current hand (hole cards + board)
- community: board cards revealed so far
- dealt: hole cards handed to players
"""

from __future__ import annotations
import logging
import random
from typing import List, Optional, Tuple
from enum import IntEnum

from pokerbots.core.errors import DeckExhausted
from pokerbots.core.rules import (
    FLOP_CARDS, TURN_CARDS, RIVER_CARDS, TOTAL_COMMUNITY_CARDS, reserve_size,
)


logger = logging.getLogger(__name__)


class Suit(IntEnum):
    """Card suits."""
    HEARTS = 0    # ♥
    DIAMONDS = 1  # ♦
    CLUBS = 2     # ♣
    SPADES = 3    # ♠


class Rank(IntEnum):
    """Card ranks valued 2 (lowest) to 14 (Ace)."""
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


# String mappings
SUIT_SYMBOLS = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

SUIT_CHARS = {
    Suit.HEARTS: "h",
    Suit.DIAMONDS: "d",
    Suit.CLUBS: "c",
    Suit.SPADES: "s",
}

RANK_CHARS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

# Reverse mappings
CHAR_TO_RANK = {v: k for k, v in RANK_CHARS.items()}
CHAR_TO_RANK["T"] = Rank.TEN  # Also accept "T"
CHAR_TO_SUIT = {v: k for k, v in SUIT_CHARS.items()}
SYMBOL_TO_SUIT = {v: k for k, v in SUIT_SYMBOLS.items()}


class Card:
    """
    An immutable playing card with value semantics.

    Cards can be created from:
    - Rank and Suit enums: Card(Rank.ACE, Suit.SPADES)
    - String notation: Card.from_string("AS"), Card.from_string("10h"),
      Card.from_string("Q♥")
    """

    __slots__ = ("_rank", "_suit")

    def __init__(self, rank: Rank, suit: Suit):
        object.__setattr__(self, "_rank", Rank(rank))
        object.__setattr__(self, "_suit", Suit(suit))

    def __setattr__(self, name, value):
        raise AttributeError("Card is immutable")

    @property
    def rank(self) -> Rank:
        return self._rank

    @property
    def suit(self) -> Suit:
        return self._suit

    @classmethod
    def from_string(cls, s: str) -> Card:
        """
        Create a card from string notation.

        Accepts formats:
        - "AS", "Kh", "10d", "Td", "2c" (rank + suit char, any case)
        - "A♠", "K♥", "10♦", "2♣" (rank + suit symbol)
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        rank_part = s[:-1].upper()
        suit_part = s[-1]

        if rank_part not in CHAR_TO_RANK:
            raise ValueError(f"Invalid rank: {rank_part}")
        rank = CHAR_TO_RANK[rank_part]

        if suit_part.lower() in CHAR_TO_SUIT:
            suit = CHAR_TO_SUIT[suit_part.lower()]
        elif suit_part in SYMBOL_TO_SUIT:
            suit = SYMBOL_TO_SUIT[suit_part]
        else:
            raise ValueError(f"Invalid suit: {suit_part}")

        return cls(rank, suit)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Card):
            return self._rank == other._rank and self._suit == other._suit
        return False

    def __hash__(self) -> int:
        return hash((self._rank, self._suit))

    def __lt__(self, other: Card) -> bool:
        """Compare by rank only (for sorting)."""
        return self._rank < other._rank

    def __repr__(self) -> str:
        return f"Card({RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]})"

    def __str__(self) -> str:
        return f"{RANK_CHARS[self._rank]}{SUIT_SYMBOLS[self._suit]}"

    @property
    def short_str(self) -> str:
        """Short string like 'As', '10h'."""
        return f"{RANK_CHARS[self._rank]}{SUIT_CHARS[self._suit]}"

    @property
    def color(self) -> str:
        """Return 'red' for hearts/diamonds, 'black' for clubs/spades."""
        return "red" if self._suit in (Suit.HEARTS, Suit.DIAMONDS) else "black"

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "rank": RANK_CHARS[self._rank],
            "suit": SUIT_SYMBOLS[self._suit],
            "text": str(self),
            "color": self.color,
        }


def full_deck() -> List[Card]:
    """All 52 cards in suit-then-rank order."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


class Deck:
    """
    A 52-card deck with a per-hand reserve.

    Usage:
        deck = Deck(num_players=4)
        hole = deck.deal_hole_pair()
        deck.reveal_flop()
        deck.reveal_turn()
        deck.reveal_river()
        board = deck.community_cards
        deck.reset()
        deck.recreate(num_players=3)
    """

    def __init__(
        self,
        num_players: int,
        num_community: int = TOTAL_COMMUNITY_CARDS,
        rng: Optional[random.Random] = None,
    ):
        """
        Build, shuffle and reserve cards for the first hand.

        Args:
            num_players: Players receiving hole cards (human + bots)
            num_community: Board cards to reserve
            rng: Random source for shuffling (defaults to the random module)

        Raises:
            DeckExhausted: If num_community + 2 * num_players exceeds 52
        """
        self.num_players = num_players
        self.num_community = num_community
        self._rng = rng or random
        self._clear()
        self.recreate()

    def _clear(self) -> None:
        self._pool: List[Card] = []
        self._reserve: List[Card] = []
        self._community: List[Card] = []
        self._dealt: List[Card] = []
        self.flop_revealed = False
        self.turn_revealed = False
        self.river_revealed = False

    def recreate(self, num_players: Optional[int] = None) -> None:
        """
        Regenerate all 52 cards, shuffle, and fill the reserve for a new hand.

        Args:
            num_players: New player count (keeps the previous one if omitted)
        """
        if num_players is not None:
            self.num_players = num_players
        self._clear()
        self._pool = full_deck()
        self._rng.shuffle(self._pool)
        self.reserve(self.num_players, self.num_community)

    def reserve(self, num_players: int, num_community: int) -> None:
        """
        Move num_community + 2 * num_players cards from the pool to the reserve.

        Raises:
            DeckExhausted: If the pool holds fewer cards
        """
        needed = reserve_size(num_players, num_community)
        if needed > len(self._pool):
            raise DeckExhausted(
                f"Cannot reserve {needed} cards, only {len(self._pool)} remain"
            )
        for _ in range(needed):
            self._reserve.append(self._pool.pop())
        logger.debug(f"Reserved {needed} cards for {num_players} players")

    def _take(self) -> Card:
        if not self._reserve:
            raise DeckExhausted("No reserved cards left")
        return self._reserve.pop()

    def deal_hole_pair(self) -> Tuple[Card, Card]:
        """
        Deal two hole cards from the reserve.

        Raises:
            DeckExhausted: If fewer than two reserved cards remain
        """
        if len(self._reserve) < 2:
            raise DeckExhausted(
                f"Cannot deal hole cards, only {len(self._reserve)} reserved"
            )
        pair = (self._take(), self._take())
        self._dealt.extend(pair)
        return pair

    def _reveal(self, count: int) -> List[Card]:
        if count > len(self._reserve):
            raise DeckExhausted(
                f"Cannot reveal {count} cards, only {len(self._reserve)} reserved"
            )
        revealed = [self._take() for _ in range(count)]
        self._community.extend(revealed)
        return revealed

    def reveal_flop(self) -> List[Card]:
        """Reveal the flop (3 cards). No-op if already revealed this hand."""
        if self.flop_revealed:
            return []
        revealed = self._reveal(FLOP_CARDS)
        self.flop_revealed = True
        return revealed

    def reveal_turn(self) -> List[Card]:
        """Reveal the turn (1 card), after the flop. No-op if already revealed."""
        if self.turn_revealed:
            return []
        revealed = self.reveal_flop()
        revealed += self._reveal(TURN_CARDS)
        self.turn_revealed = True
        return revealed

    def reveal_river(self) -> List[Card]:
        """Reveal the river (1 card), after the turn. No-op if already revealed."""
        if self.river_revealed:
            return []
        revealed = self.reveal_turn()
        revealed += self._reveal(RIVER_CARDS)
        self.river_revealed = True
        return revealed

    def reveal_remaining(self) -> List[Card]:
        """Reveal whatever board cards are still hidden."""
        return self.reveal_river()

    def reset(self) -> None:
        """
        Clear every partition and reveal flag.

        Cards are regenerated by the next recreate(), not reused.
        """
        self._clear()

    @property
    def community_cards(self) -> List[Card]:
        """Board cards revealed so far (a copy)."""
        return self._community.copy()

    @property
    def pool(self) -> List[Card]:
        return self._pool.copy()

    @property
    def reserved(self) -> List[Card]:
        return self._reserve.copy()

    @property
    def dealt_cards(self) -> List[Card]:
        """Hole cards handed out this hand."""
        return self._dealt.copy()

    @property
    def remaining(self) -> int:
        """Number of cards left in the pool."""
        return len(self._pool)

    def __len__(self) -> int:
        return len(self._pool)

    def __repr__(self) -> str:
        return (
            f"Deck(pool={len(self._pool)}, reserve={len(self._reserve)}, "
            f"community={len(self._community)})"
        )


def parse_cards(cards_str: str) -> List[Card]:
    """
    Parse multiple cards from a string.

    Accepts formats:
    - "AH KH 10H" (space-separated)
    - "AH,KH,10H" (comma-separated)
    - "A♠ K♥ 10♦" (with symbols)

    Returns:
        List of Card objects
    """
    tokens = cards_str.replace(",", " ").split()
    return [Card.from_string(token) for token in tokens]
