"""
Tests for Card and Deck classes.
"""

import pytest
from pokerbots.core.card import Card, Deck, Rank, Suit, full_deck, parse_cards
from pokerbots.core.errors import DeckExhausted


class TestCard:
    """Tests for Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_from_string(self):
        """Test creating cards from string notation."""
        card1 = Card.from_string("As")
        assert card1.rank == Rank.ACE
        assert card1.suit == Suit.SPADES

        # With symbol
        card2 = Card.from_string("K♥")
        assert card2.rank == Rank.KING
        assert card2.suit == Suit.HEARTS

        # Ten, both notations
        assert Card.from_string("10d") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("Td") == Card(Rank.TEN, Suit.DIAMONDS)

    def test_invalid_card_string(self):
        """Test that malformed strings are rejected."""
        for text in ("", "A", "1s", "Ax", "11h"):
            with pytest.raises(ValueError):
                Card.from_string(text)

    def test_card_equality(self):
        """Test card equality."""
        card1 = Card(Rank.ACE, Suit.SPADES)
        card2 = Card(Rank.ACE, Suit.SPADES)
        card3 = Card(Rank.ACE, Suit.HEARTS)

        assert card1 == card2
        assert card1 != card3
        assert hash(card1) == hash(card2)

    def test_card_is_immutable(self):
        """Test that a card cannot be modified."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.TWO

    def test_card_comparison(self):
        """Test cards sort by rank."""
        two = Card(Rank.TWO, Suit.SPADES)
        ace = Card(Rank.ACE, Suit.HEARTS)
        assert two < ace
        assert sorted([ace, two]) == [two, ace]

    def test_card_string_representation(self):
        """Test card string output."""
        card = Card(Rank.TEN, Suit.HEARTS)
        assert str(card) == "10♥"
        assert card.short_str == "10h"
        assert repr(card) == "Card(10h)"

    def test_card_color(self):
        """Test card colors."""
        assert Card(Rank.ACE, Suit.HEARTS).color == "red"
        assert Card(Rank.ACE, Suit.DIAMONDS).color == "red"
        assert Card(Rank.ACE, Suit.CLUBS).color == "black"
        assert Card(Rank.ACE, Suit.SPADES).color == "black"

    def test_card_to_dict(self):
        """Test JSON form of a card."""
        assert Card(Rank.QUEEN, Suit.CLUBS).to_dict() == {
            "rank": "Q",
            "suit": "♣",
            "text": "Q♣",
            "color": "black",
        }

    def test_parse_cards(self):
        """Test parsing several cards at once."""
        assert parse_cards("AS KH 10d") == parse_cards("AS,KH,10d")
        assert parse_cards("AS KH 10d") == [
            Card(Rank.ACE, Suit.SPADES),
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.TEN, Suit.DIAMONDS),
        ]


class TestDeck:
    """Tests for Deck class."""

    def test_full_deck(self):
        """Test the 52 distinct cards."""
        cards = full_deck()
        assert len(cards) == 52
        assert len(set(cards)) == 52

    def test_new_deck_reserves_cards(self):
        """Test that construction reserves board plus two cards per player."""
        deck = Deck(num_players=4)
        assert len(deck.reserved) == 5 + 2 * 4
        assert deck.remaining == 52 - 13
        assert len(deck) == deck.remaining
        assert deck.community_cards == []

    def test_partitions_cover_52_unique_cards(self):
        """Test that pool, reserve, board and dealt cards never overlap."""
        deck = Deck(num_players=3)
        deck.deal_hole_pair()
        deck.deal_hole_pair()
        deck.reveal_flop()

        cards = deck.pool + deck.reserved + deck.community_cards + deck.dealt_cards
        assert len(cards) == 52
        assert len(set(cards)) == 52

    def test_deal_hole_pair(self):
        """Test dealing hole cards from the reserve."""
        deck = Deck(num_players=2)
        first = deck.deal_hole_pair()
        second = deck.deal_hole_pair()

        assert len(first) == 2
        assert set(first).isdisjoint(second)
        assert deck.dealt_cards == list(first) + list(second)
        assert len(deck.reserved) == 5

    def test_reveal_order(self):
        """Test flop, turn and river sizes."""
        deck = Deck(num_players=2)
        deck.deal_hole_pair()
        deck.deal_hole_pair()

        assert len(deck.reveal_flop()) == 3
        assert len(deck.reveal_turn()) == 1
        assert len(deck.reveal_river()) == 1
        assert len(deck.community_cards) == 5
        assert deck.flop_revealed and deck.turn_revealed and deck.river_revealed

    def test_reveal_is_idempotent(self):
        """Test that revealing a stage twice does nothing."""
        deck = Deck(num_players=2)
        deck.reveal_flop()
        assert deck.reveal_flop() == []
        assert len(deck.community_cards) == 3

    def test_reveal_river_reveals_earlier_stages(self):
        """Test that jumping to the river still shows five cards."""
        deck = Deck(num_players=2)
        revealed = deck.reveal_river()
        assert len(revealed) == 5
        assert deck.community_cards == revealed

    def test_reveal_remaining(self):
        """Test running out the rest of the board."""
        deck = Deck(num_players=2)
        deck.reveal_flop()
        assert len(deck.reveal_remaining()) == 2
        assert len(deck.community_cards) == 5
        assert deck.reveal_remaining() == []

    def test_reserve_too_large(self):
        """Test that 24 players cannot be seated."""
        with pytest.raises(DeckExhausted):
            Deck(num_players=24)

    def test_twenty_one_players_fit(self):
        """Test the largest table (human plus 20 bots)."""
        deck = Deck(num_players=21)
        assert len(deck.reserved) == 47
        assert deck.remaining == 5

    def test_deal_without_reserve(self):
        """Test that dealing past the reserve fails."""
        deck = Deck(num_players=1, num_community=0)
        deck.deal_hole_pair()
        with pytest.raises(DeckExhausted):
            deck.deal_hole_pair()

    def test_reset_and_recreate(self):
        """Test starting a new hand with fewer players."""
        deck = Deck(num_players=4)
        deck.deal_hole_pair()
        deck.reveal_river()

        deck.reset()
        assert deck.remaining == 0
        assert deck.reserved == []
        assert deck.community_cards == []
        assert not deck.flop_revealed

        deck.recreate(num_players=2)
        assert deck.num_players == 2
        assert len(deck.reserved) == 9
        assert deck.remaining == 43

    def test_shuffle_uses_injected_rng(self, scripted_rng):
        """Test that a stacked source deals the expected cards."""
        rng = scripted_rng(deal="AS KS 2h 3h 4h 5h 6h 7h 8h")
        deck = Deck(num_players=2, rng=rng)
        assert deck.deal_hole_pair() == (Card.from_string("AS"), Card.from_string("KS"))
        assert deck.deal_hole_pair() == (Card.from_string("2h"), Card.from_string("3h"))
        assert deck.reveal_flop() == parse_cards("4h 5h 6h")
