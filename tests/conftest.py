"""
Pytest configuration and shared fixtures for PokerBots tests.
"""

import random
from collections import deque

import pytest
from pokerbots.core.card import Card, Rank, Suit, parse_cards
from pokerbots.core.player import Player, PlayerKind, PlayerRegistry
from pokerbots.core.rules import HUMAN_NAME


# Draws used when a ScriptedRandom runs out of scripted values:
# bots check on their turn, call every bet and raise the smallest amount.
PASSIVE_DRAWS = {(1, 5): 1, (1, 3): 2, (5, 20): 5}


class ScriptedRandom(random.Random):
    """
    Deterministic random source for engine and session tests.

    Args:
        deal: Cards in the order the deck hands them out (human hole cards,
            bot hole cards in roster order, flop, turn, river). Either Card
            objects or a string for parse_cards().
        draws: Values returned by randint(), in order
        blinds: (big blind name, small blind name) for sample()
    """

    def __init__(self, deal=None, draws=(), blinds=None):
        super().__init__(0)
        if isinstance(deal, str):
            deal = parse_cards(deal)
        self.deal = list(deal) if deal else None
        self.draws = deque(draws)
        self.blinds = blinds
        self.randint_calls = []

    def shuffle(self, x, *args, **kwargs):
        # Bot names keep pool order; decks are stacked so that `deal` comes out first.
        if not self.deal or not x or not isinstance(x[0], Card):
            return
        rest = [c for c in x if c not in self.deal]
        x[:] = rest + self.deal

    def sample(self, population, k, *args, **kwargs):
        population = list(population)
        if self.blinds and k == 2:
            by_name = {p.name: p for p in population}
            return [by_name[name] for name in self.blinds]
        return population[:k]

    def randint(self, a, b):
        self.randint_calls.append((a, b))
        if self.draws:
            return self.draws.popleft()
        return PASSIVE_DRAWS.get((a, b), a)


@pytest.fixture
def cards():
    """Parse a card string: cards("AS KH 10d")."""
    return parse_cards


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


@pytest.fixture
def human():
    """The human player with 150 chips."""
    return Player(name=HUMAN_NAME, chips=150, kind=PlayerKind.HUMAN)


@pytest.fixture
def registry():
    """A human and two bots, 150 chips each."""
    human = Player(name=HUMAN_NAME, chips=150, kind=PlayerKind.HUMAN)
    bots = [Player(name="Alice", chips=150), Player(name="Bence", chips=150)]
    return PlayerRegistry(human, bots)


@pytest.fixture
def sample_hand():
    """Pair of aces with king, queen, jack."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.ACE, Suit.HEARTS),
        Card(Rank.KING, Suit.DIAMONDS),
        Card(Rank.QUEEN, Suit.CLUBS),
        Card(Rank.JACK, Suit.SPADES),
    ]


@pytest.fixture
def royal_flush():
    """Create a royal flush hand."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.KING, Suit.SPADES),
        Card(Rank.QUEEN, Suit.SPADES),
        Card(Rank.JACK, Suit.SPADES),
        Card(Rank.TEN, Suit.SPADES),
    ]


@pytest.fixture
def wheel_straight():
    """Create a wheel straight (A-2-3-4-5)."""
    return [
        Card(Rank.ACE, Suit.SPADES),
        Card(Rank.TWO, Suit.HEARTS),
        Card(Rank.THREE, Suit.DIAMONDS),
        Card(Rank.FOUR, Suit.CLUBS),
        Card(Rank.FIVE, Suit.SPADES),
    ]
