"""
Tests for the pot and bet history.
"""

from pokerbots.core.pot import Bet, Pot


class TestPot:
    """Tests for Pot class."""

    def test_empty_pot(self):
        """Test a new pot."""
        pot = Pot()
        assert pot.total == 0
        assert pot.snapshot_total() == 0
        assert pot.snapshot_history() == ()

    def test_total_is_sum_of_contributions(self):
        """Test that the total tracks every contribution."""
        pot = Pot()
        amounts = [15, 7, 30, 1]
        for i, amount in enumerate(amounts):
            pot.contribute(f"P{i}", amount)

        assert pot.total == sum(amounts)
        assert [bet.amount for bet in pot.history] == amounts

    def test_contribute_returns_bet(self):
        """Test the recorded bet."""
        pot = Pot()
        bet = pot.contribute("Alice", 20)
        assert bet == Bet(amount=20, player_name="Alice")
        assert bet.to_dict() == {"player": "Alice", "amount": 20}

    def test_clear_total_keeps_history(self):
        """Test that clearing the hand total leaves the session history."""
        pot = Pot()
        pot.contribute("Human", 10)
        pot.contribute("Alice", 10)

        pot.clear_total()
        assert pot.total == 0
        assert len(pot.snapshot_history()) == 2

        pot.contribute("Alice", 5)
        assert pot.total == 5
        assert len(pot.snapshot_history()) == 3

    def test_history_is_read_only(self):
        """Test that snapshots cannot change the pot."""
        pot = Pot()
        pot.contribute("Human", 10)
        history = pot.snapshot_history()
        assert isinstance(history, tuple)
        assert history[0].player_name == "Human"

    def test_rollback(self):
        """Test that bets after a mark leave the history and the total."""
        pot = Pot()
        pot.contribute("Human", 10)
        pot.clear_total()
        pot.contribute("Human", 15)
        pot.contribute("Alice", 7)

        removed = pot.rollback(1)
        assert removed == [Bet(15, "Human"), Bet(7, "Alice")]
        assert pot.total == 0
        assert pot.snapshot_history() == (Bet(10, "Human"),)
        assert pot.rollback(1) == []
