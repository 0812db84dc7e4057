"""
Tests for showdown winner determination and pot distribution.

These tests verify:
- Hands are ranked best first, ties keep seating order
- Every player tied with the best hand wins
- Even splits with odd chips to the first winners
- Partial pots for bot winners and the refund of the shortfall
"""

from pokerbots.core.hand import HandRank
from pokerbots.core.player import Player, PlayerKind
from pokerbots.core.rules import HUMAN_NAME
from pokerbots.core.showdown import determine_winners, distribute_pot, rank_players


def seat(name, hole, cards, chips=100):
    kind = PlayerKind.HUMAN if name == HUMAN_NAME else PlayerKind.BOT
    player = Player(name=name, chips=chips, kind=kind)
    player.deal_cards(*cards(hole))
    return player


class TestWinnerDetermination:
    """Tests for ranking the remaining players."""

    def test_best_hand_wins(self, cards):
        """Aces beat kings."""
        board = cards("2c 7d 9s Jh 3c")
        players = [
            seat(HUMAN_NAME, "Ks Kh", cards),
            seat("Alice", "As Ah", cards),
        ]
        result = determine_winners(players, board)

        assert result.winners == ["Alice"]
        assert result.best == (HandRank.PAIR, 14)
        assert result.value_of(HUMAN_NAME) == (HandRank.PAIR, 13)
        assert result.value_of("Nobody") is None

    def test_rankings_best_first(self, cards):
        """Rankings are sorted by category, then tie-break."""
        board = cards("2c 7d 9s Jh 3c")
        players = [
            seat(HUMAN_NAME, "4s 5h", cards),
            seat("Alice", "Js Jd", cards),
            seat("Bence", "Qs Qh", cards),
        ]
        ranked = rank_players(players, board)
        assert [name for name, _ in ranked] == ["Alice", "Bence", HUMAN_NAME]
        assert ranked[0][1].rank == HandRank.THREE_OF_A_KIND

    def test_tie_shares_the_win(self, cards):
        """The board plays for everyone: all tie."""
        board = cards("As Ks Qs Js 10s")
        players = [
            seat(HUMAN_NAME, "2c 3d", cards),
            seat("Alice", "4c 5d", cards),
            seat("Bence", "6c 7d", cards),
        ]
        result = determine_winners(players, board)
        assert result.winners == [HUMAN_NAME, "Alice", "Bence"]
        assert result.best == (HandRank.ROYAL_FLUSH, 14)

    def test_same_tie_break_ties_without_kickers(self, cards):
        """Equal pairs tie even with different kickers."""
        board = cards("Kd 8c 2s 5h 9d")
        players = [
            seat(HUMAN_NAME, "Ks Ah", cards),
            seat("Alice", "Kc 3h", cards),
        ]
        assert determine_winners(players, board).winners == [HUMAN_NAME, "Alice"]

    def test_no_players(self, cards):
        """An empty table has no winner."""
        result = determine_winners([], cards("2c 7d 9s Jh 3c"))
        assert result.winners == []
        assert result.best is None


class TestPotDistribution:
    """Tests for distribute_pot."""

    def test_single_winner_takes_pot(self):
        """The whole pot goes to the only winner."""
        dist = distribute_pot([HUMAN_NAME], [HUMAN_NAME, "Alice"], 100, {"Alice": 150})
        assert dist.payouts == {HUMAN_NAME: 100}
        assert dist.capped == []
        assert dist.total_paid == 100

    def test_even_split_with_odd_chips(self):
        """Odd chips go to the first winners in seating order."""
        dist = distribute_pot(
            [HUMAN_NAME, "Alice", "Bence"],
            [HUMAN_NAME, "Alice", "Bence"],
            100,
            {"Alice": 150, "Bence": 150},
        )
        assert dist.payouts == {HUMAN_NAME: 34, "Alice": 33, "Bence": 33}
        assert dist.total_paid == 100

    def test_bot_winner_within_cap(self):
        """A bot whose share is below its cap is paid in full."""
        dist = distribute_pot(["Alice"], [HUMAN_NAME, "Alice"], 200, {"Alice": 150})
        assert dist.payouts == {"Alice": 200}
        assert dist.capped == []

    def test_capped_bot_winner(self):
        """A short-stacked bot winner gets its cap; the rest is refunded."""
        # cap = 5 * max(2 // 2, 3) = 15
        dist = distribute_pot(
            ["Alice"],
            [HUMAN_NAME, "Alice", "Bence"],
            100,
            {"Alice": 5, "Bence": 150},
        )
        assert dist.capped == ["Alice"]
        assert dist.payouts == {"Alice": 15, HUMAN_NAME: 43, "Bence": 42}
        assert dist.total_paid == 100
        assert dist.undistributed == 0

    def test_human_never_capped(self):
        """The human wins the whole pot however small the stack was."""
        dist = distribute_pot([HUMAN_NAME], [HUMAN_NAME, "Alice"], 1000, {"Alice": 1})
        assert dist.payouts == {HUMAN_NAME: 1000}
        assert dist.capped == []

    def test_every_contender_capped(self):
        """With nobody to refund, the excess stays undistributed."""
        # cap = 5 * max(2 // 2, 2) = 10 each
        dist = distribute_pot(
            ["Alice", "Bence"],
            ["Alice", "Bence"],
            100,
            {"Alice": 5, "Bence": 5},
        )
        assert dist.payouts == {"Alice": 10, "Bence": 10}
        assert dist.undistributed == 80

    def test_chips_conserved(self):
        """Payouts add up to the pot whenever someone can be refunded."""
        for total in (1, 7, 99, 1000):
            dist = distribute_pot(
                ["Alice", "Bence"],
                [HUMAN_NAME, "Alice", "Bence", "Carol"],
                total,
                {"Alice": 3, "Bence": 200, "Carol": 50},
            )
            assert dist.total_paid + dist.undistributed == total
            assert dist.undistributed == 0

    def test_empty_pot(self):
        """Nothing to pay."""
        dist = distribute_pot([HUMAN_NAME], [HUMAN_NAME], 0, {})
        assert dist.payouts == {}
        assert dist.total_paid == 0
