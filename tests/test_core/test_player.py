"""
Tests for players and the player registry.
"""

import pytest
from pokerbots.core.card import Deck
from pokerbots.core.player import Player, PlayerKind, PlayerRegistry
from pokerbots.core.rules import BOT_NAMES, HUMAN_NAME


class TestPlayer:
    """Tests for Player class."""

    def test_bet_within_balance(self):
        """Test a normal bet."""
        player = Player(name="Alice", chips=100)
        assert player.bet(30) == 30
        assert player.chips == 70

    def test_bet_clamps_to_balance(self):
        """Test that an oversized bet goes all-in and leaves exactly zero."""
        player = Player(name="Alice", chips=40)
        assert player.bet(100) == 40
        assert player.chips == 0
        assert player.is_broke

    def test_non_positive_bet(self):
        """Test that zero or negative bets take nothing."""
        player = Player(name="Alice", chips=40)
        assert player.bet(0) == 0
        assert player.bet(-5) == 0
        assert player.chips == 40

    def test_receive(self):
        """Test adding chips."""
        player = Player(name="Alice", chips=0)
        player.receive(25)
        assert player.chips == 25
        assert not player.is_broke

    def test_kind(self, human):
        """Test the human/bot tag."""
        assert human.is_human and not human.is_bot
        bot = Player(name="Alice", chips=10)
        assert bot.is_bot and bot.kind == PlayerKind.BOT

    def test_to_dict_hides_cards(self, cards):
        """Test that hole cards are only shown on request."""
        player = Player(name="Alice", chips=10)
        player.deal_cards(*cards("AS KS"))
        assert "cards" not in player.to_dict()
        assert len(player.to_dict(hide_cards=False)["cards"]) == 2


class TestPlayerRegistry:
    """Tests for PlayerRegistry class."""

    def test_create(self, scripted_rng):
        """Test seating a human and bots."""
        registry = PlayerRegistry.create(
            num_bots=3, human_chips=150, bot_chips=300, rng=scripted_rng()
        )
        assert registry.num_players == 4
        assert registry.human.name == HUMAN_NAME
        assert registry.human.chips == 150
        assert all(bot.chips == 300 for bot in registry.bots)
        assert [p.name for p in registry.players][0] == HUMAN_NAME

    def test_bot_names_are_unique(self):
        """Test that every bot gets its own name from the pool."""
        registry = PlayerRegistry.create(num_bots=20, human_chips=10, bot_chips=10)
        names = [bot.name for bot in registry.bots]
        assert len(set(names)) == 20
        assert set(names) == set(BOT_NAMES)

    def test_duplicate_names_rejected(self, human):
        """Test that two seats cannot share a name."""
        with pytest.raises(ValueError):
            PlayerRegistry(human, [Player("Alice", 10), Player("Alice", 10)])

    def test_bots_is_a_copy(self, registry):
        """Test that callers cannot edit the roster."""
        registry.bots.clear()
        assert len(registry.bots) == 2

    def test_get(self, registry):
        """Test lookup by name."""
        assert registry.get("Alice").name == "Alice"
        assert registry.get(HUMAN_NAME) is registry.human
        assert registry.get("Nobody") is None

    def test_deal(self, registry):
        """Test that everyone gets two distinct cards."""
        deck = Deck(registry.num_players)
        registry.deal(deck)
        dealt = [card for p in registry.players for card in p.hole_cards]
        assert len(dealt) == 6
        assert len(set(dealt)) == 6

    def test_chip_totals(self, registry):
        """Test the balance mapping."""
        assert registry.chip_totals() == {HUMAN_NAME: 150, "Alice": 150, "Bence": 150}

    def test_remove_broke_bots(self, registry):
        """Test that bots without chips leave the roster."""
        registry.get("Alice").chips = 0
        assert registry.remove_broke_bots() == ["Alice"]
        assert [bot.name for bot in registry.bots] == ["Bence"]
        assert registry.remove_broke_bots() == []

    def test_broke_human_stays(self, registry):
        """Test that the human is never removed."""
        registry.human.chips = 0
        registry.remove_broke_bots()
        assert registry.human.chips == 0
        assert registry.num_players == 3
