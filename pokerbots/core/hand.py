"""
Hand Evaluation for the bot poker game.

This module evaluates two hole cards plus 0-5 community cards and returns
the hand's category together with a single tie-break rank.

Hand Rankings (best to worst):
1. Royal Flush: 10 J Q K A of one suit
2. Straight Flush: 5 consecutive cards of one suit
3. Four of a Kind: 4 cards of same rank
4. Full House: 3 of a kind + pair (or two sets of trips)
5. Flush: 5 cards of same suit
6. Straight: 5 consecutive ranks
7. Three of a Kind: 3 cards of same rank
8. Two Pair: exactly 2 different pairs (three pairs score as One Pair)
9. One Pair: 2 cards of same rank
10. High Card: No made hand

Hands compare as (category, tie_break) pairs. There is no kicker
comparison beyond the tie-break rank, so e.g. two pairs of Kings tie
regardless of the remaining cards.

Note: Ace can be low in A-2-3-4-5 straight (wheel).
"""

from __future__ import annotations
from typing import Iterable, List, NamedTuple, Optional, Sequence
from enum import IntEnum
from collections import Counter

from pokerbots.core.card import Card, Rank


class HandRank(IntEnum):
    """Hand categories from worst (lowest value) to best (highest value)."""
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8
    ROYAL_FLUSH = 9


# Hand rank names for display
HAND_RANK_NAMES = {
    HandRank.ROYAL_FLUSH: "Royal Flush",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FLUSH: "Flush",
    HandRank.STRAIGHT: "Straight",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.PAIR: "Pair",
    HandRank.HIGH_CARD: "High Card",
}

STRAIGHT_LENGTH = 5
FLUSH_LENGTH = 5


class HandValue(NamedTuple):
    """
    Result of a hand evaluation.

    Tuple ordering is the hand ordering: a higher category always wins,
    and within a category the higher tie_break wins.
    """
    rank: HandRank
    tie_break: int

    @property
    def name(self) -> str:
        return HAND_RANK_NAMES[self.rank]

    def describe(self) -> str:
        """Human-readable form like 'Full House (2)'."""
        return f"{self.name} ({_rank_name(self.tie_break)})"


def evaluate_hand(
    card1: Card,
    card2: Card,
    community_cards: Sequence[Card] = (),
) -> HandValue:
    """
    Evaluate two hole cards against the revealed community cards.

    Args:
        card1: First hole card
        card2: Second hole card
        community_cards: 0-5 revealed board cards

    Returns:
        HandValue of the best category the cards satisfy

    Raises:
        ValueError: If more than 5 community cards are given
    """
    if len(community_cards) > 5:
        raise ValueError(f"At most 5 community cards, got {len(community_cards)}")
    return evaluate_cards([card1, card2, *community_cards])


def evaluate_cards(cards: Iterable[Card]) -> HandValue:
    """
    Evaluate any collection of cards.

    Categories are checked best-first; the first one satisfied is returned
    with its defining rank as the tie-break.
    """
    cards = list(cards)
    if not cards:
        raise ValueError("Cannot evaluate an empty hand")

    rank_counts = Counter(int(c.rank) for c in cards)
    suit_counts = Counter(c.suit for c in cards)

    quads = _ranks_with_count(rank_counts, 4)
    trips = _ranks_with_count(rank_counts, 3)
    pairs = _ranks_with_count(rank_counts, 2)

    straight_flush_high = _best_straight_flush(cards, suit_counts)
    if straight_flush_high is not None:
        if straight_flush_high == Rank.ACE:
            return HandValue(HandRank.ROYAL_FLUSH, int(Rank.ACE))
        return HandValue(HandRank.STRAIGHT_FLUSH, straight_flush_high)

    if quads:
        return HandValue(HandRank.FOUR_OF_A_KIND, quads[0])

    if (trips and pairs) or len(trips) >= 2:
        return HandValue(HandRank.FULL_HOUSE, trips[0])

    flush_high = _best_flush(cards, suit_counts)
    if flush_high is not None:
        return HandValue(HandRank.FLUSH, flush_high)

    straight_high = _best_straight(rank_counts)
    if straight_high is not None:
        return HandValue(HandRank.STRAIGHT, straight_high)

    if trips:
        return HandValue(HandRank.THREE_OF_A_KIND, trips[0])

    if len(pairs) == 2:
        return HandValue(HandRank.TWO_PAIR, pairs[0])

    if pairs:
        return HandValue(HandRank.PAIR, pairs[0])

    return HandValue(HandRank.HIGH_CARD, max(rank_counts))


def _ranks_with_count(rank_counts: Counter, count: int) -> List[int]:
    """Ranks appearing exactly 'count' times, highest first."""
    return sorted((r for r, c in rank_counts.items() if c == count), reverse=True)


def _best_straight(ranks: Iterable[int]) -> Optional[int]:
    """
    Find the highest run of 5 consecutive ranks.

    Returns:
        The top rank of the run (5 for the wheel), or None
    """
    unique = set(ranks)
    if Rank.ACE in unique:
        unique.add(1)  # Ace plays low in the wheel

    for high in range(int(Rank.ACE), STRAIGHT_LENGTH - 1, -1):
        if all(high - i in unique for i in range(STRAIGHT_LENGTH)):
            return high
    return None


def _best_flush(cards: List[Card], suit_counts: Counter) -> Optional[int]:
    """Highest rank in a suit holding 5+ cards, or None."""
    best = None
    for suit, count in suit_counts.items():
        if count >= FLUSH_LENGTH:
            high = max(int(c.rank) for c in cards if c.suit == suit)
            best = high if best is None else max(best, high)
    return best


def _best_straight_flush(cards: List[Card], suit_counts: Counter) -> Optional[int]:
    """Top rank of the highest straight whose five cards share one suit."""
    best = None
    for suit, count in suit_counts.items():
        if count < FLUSH_LENGTH:
            continue
        high = _best_straight(int(c.rank) for c in cards if c.suit == suit)
        if high is not None and (best is None or high > best):
            best = high
    return best


def compare_hands(value1: HandValue, value2: HandValue) -> int:
    """
    Compare two evaluated hands.

    Returns:
        1 if value1 wins, -1 if value2 wins, 0 if tie
    """
    if value1 > value2:
        return 1
    elif value1 < value2:
        return -1
    else:
        return 0


def _rank_name(rank: int) -> str:
    """Get the name of a rank value (2-14)."""
    names = {
        2: "Two", 3: "Three", 4: "Four", 5: "Five", 6: "Six", 7: "Seven",
        8: "Eight", 9: "Nine", 10: "Ten", 11: "Jack", 12: "Queen",
        13: "King", 14: "Ace",
    }
    return names.get(rank, str(rank))
