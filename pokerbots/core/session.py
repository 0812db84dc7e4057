"""
Game session: the interface the front ends talk to.

A session seats one human and a number of bots, then plays hands on demand.
Each hand:
1. Deals hole cards from the reserved deck (recreated for every hand after
   the first)
2. Runs the RoundEngine through pre-flop, flop, turn and river
3. Evaluates the remaining hands and distributes the pot
4. Eliminates broke bots, clears the pot total and resets the deck

Usage:
    session = start_session(n_bots=5, starting_chips=150, difficulty=2,
                            controller=my_controller)
    result = play_hand(session)
    chips = session_chip_totals(session)
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple, Any, TYPE_CHECKING
from dataclasses import dataclass, field
import logging
import random
import threading

from pokerbots.core.card import Card, Deck
from pokerbots.core.engine import RoundEngine
from pokerbots.core.errors import (
    HandInProgress, InsufficientFunds, InvalidBetAmount, SessionFinished,
)
from pokerbots.core.hand import HandValue, evaluate_hand
from pokerbots.core.player import PlayerRegistry
from pokerbots.core.pot import Bet, Pot
from pokerbots.core.rules import (
    Difficulty, MIN_BOTS, MAX_BOTS, TOTAL_COMMUNITY_CARDS, bot_starting_chips,
)
from pokerbots.core.showdown import determine_winners, distribute_pot

if TYPE_CHECKING:
    from pokerbots.agents.base import HumanController


logger = logging.getLogger(__name__)


@dataclass
class HandResult:
    """Outcome of one hand."""
    hand_number: int
    winner_names: List[str]
    final_pot: int
    remaining_players: List[str]
    community_cards: List[Card] = field(default_factory=list)
    rankings: List[Tuple[str, HandValue]] = field(default_factory=list)
    payouts: Dict[str, int] = field(default_factory=dict)
    capped_winners: List[str] = field(default_factory=list)
    eliminated_bots: List[str] = field(default_factory=list)
    human_folded: bool = False
    human_hand: Optional[HandValue] = None
    ended_early: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "hand_number": self.hand_number,
            "winners": list(self.winner_names),
            "pot": self.final_pot,
            "remaining_players": list(self.remaining_players),
            "board": [c.to_dict() for c in self.community_cards],
            "rankings": [
                {"name": name, "hand": value.name, "tie_break": value.tie_break}
                for name, value in self.rankings
            ],
            "payouts": dict(self.payouts),
            "capped_winners": list(self.capped_winners),
            "eliminated_bots": list(self.eliminated_bots),
            "human_folded": self.human_folded,
            "human_hand": self.human_hand.name if self.human_hand else None,
            "ended_early": self.ended_early,
        }


class PokerSession:
    """
    One human against a roster of bots, played hand by hand.

    Attributes:
        starting_chips: Human starting chips (also the default buy-back)
        difficulty: Difficulty tier, sizing bot stacks, blinds and raises
        hand_number: Hands played so far
    """

    def __init__(
        self,
        n_bots: int,
        starting_chips: int,
        difficulty: Difficulty = Difficulty.MEDIUM,
        controller: Optional[HumanController] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Seat the players and build the deck for the first hand.

        Raises:
            ValueError: If n_bots is outside 1-20, starting_chips is not
                positive or difficulty is not 1-4
        """
        if n_bots < MIN_BOTS or n_bots > MAX_BOTS:
            raise ValueError(f"Number of bots must be {MIN_BOTS}-{MAX_BOTS}")
        if starting_chips <= 0:
            raise ValueError("Starting chips must be positive")

        self.starting_chips = starting_chips
        self.difficulty = Difficulty(difficulty)
        self.controller = controller
        self._rng = rng or random

        self.registry = PlayerRegistry.create(
            num_bots=n_bots,
            human_chips=starting_chips,
            bot_chips=bot_starting_chips(starting_chips, self.difficulty),
            rng=self._rng,
        )
        self.deck = Deck(self.registry.num_players, TOTAL_COMMUNITY_CARDS, rng=self._rng)
        self.pot = Pot()
        self.hand_number = 0
        self.last_result: Optional[HandResult] = None
        self._deck_ready = True
        self._hand_lock = threading.Lock()

        logger.info(
            f"Session started: {n_bots} bots, {starting_chips} chips, "
            f"difficulty {self.difficulty.name}"
        )

    @property
    def is_finished(self) -> bool:
        """True once every bot has been eliminated."""
        return not self.registry.bots

    @property
    def needs_buy_back(self) -> bool:
        """True while the human has no chips."""
        return self.registry.human.chips <= 0

    def play_hand(self, controller: Optional[HumanController] = None) -> HandResult:
        """
        Play one full hand.

        Only one hand of a session runs at a time. If the hand fails part
        way, every bet made in it is refunded and the deck is reset.

        Args:
            controller: Overrides the session controller for this hand

        Raises:
            HandInProgress: If another hand of this session is running
            SessionFinished: If no bots are left
            InsufficientFunds: If the human must buy back first
            ValueError: If no controller is available
        """
        controller = controller or self.controller
        if controller is None:
            raise ValueError("A human controller is required to play a hand")
        if not self._hand_lock.acquire(blocking=False):
            raise HandInProgress("A hand is already being played in this session")
        try:
            return self._play_hand(controller)
        finally:
            self._hand_lock.release()

    def _play_hand(self, controller: HumanController) -> HandResult:
        if self.is_finished:
            raise SessionFinished("All bots have been defeated")
        if self.needs_buy_back:
            raise InsufficientFunds("The human has no chips left; buy back to continue")

        if not self._deck_ready:
            self.deck.recreate(self.registry.num_players)
        self._deck_ready = False
        self.hand_number += 1
        mark = len(self.pot.history)
        logger.info(f"Starting hand #{self.hand_number}")

        pre_hand_bot_stacks = {bot.name: bot.chips for bot in self.registry.bots}

        try:
            self.registry.deal(self.deck)
            engine = RoundEngine(
                self.registry, self.deck, self.pot, controller,
                starting_chips=self.starting_chips,
                difficulty=self.difficulty,
                rng=self._rng,
            )
            contenders = engine.play()
            community = self.deck.community_cards
            final_pot = self.pot.total

            showdown = determine_winners(contenders, community)
            distribution = distribute_pot(
                showdown.winners,
                [p.name for p in contenders],
                final_pot,
                pre_hand_bot_stacks,
            )
        except Exception:
            self._abort_hand(mark)
            raise

        for name, amount in distribution.payouts.items():
            self.registry.get(name).receive(amount)

        human = self.registry.human
        result = HandResult(
            hand_number=self.hand_number,
            winner_names=list(showdown.winners),
            final_pot=final_pot,
            remaining_players=[p.name for p in contenders],
            community_cards=community,
            rankings=showdown.rankings,
            payouts=dict(distribution.payouts),
            capped_winners=list(distribution.capped),
            human_folded=not engine.human_live,
            human_hand=evaluate_hand(*human.hole_cards, community),
            ended_early=engine.ended_early,
        )

        result.eliminated_bots = self.registry.remove_broke_bots()
        self.pot.clear_total()
        self.deck.reset()

        logger.info(
            f"Hand #{self.hand_number} over: pot {final_pot}, "
            f"winners {', '.join(result.winner_names)}"
        )
        self.last_result = result
        controller.on_hand_end(result)
        return result

    def _abort_hand(self, mark: int) -> None:
        """Refund the bets of a failed hand and put the deck back."""
        refunded = self.pot.rollback(mark)
        for bet in refunded:
            self.registry.get(bet.player_name).receive(bet.amount)
        self.pot.clear_total()
        self.deck.reset()
        logger.warning(
            f"Hand #{self.hand_number} aborted, refunded "
            f"{sum(bet.amount for bet in refunded)} chips"
        )
        self.hand_number -= 1

    def chip_totals(self) -> Dict[str, int]:
        """Balance of every seated player."""
        return self.registry.chip_totals()

    @property
    def bet_history(self) -> Tuple[Bet, ...]:
        return self.pot.snapshot_history()

    def buy_back(self, amount: Optional[int] = None) -> int:
        """
        Give the human more chips.

        Args:
            amount: Chips to add (defaults to the starting chips)

        Returns:
            The human's new balance
        """
        amount = self.starting_chips if amount is None else amount
        if amount <= 0:
            raise InvalidBetAmount("Buy-back amount must be positive")
        self.registry.human.receive(amount)
        logger.info(f"Human bought back {amount} chips")
        return self.registry.human.chips

    def get_state(self) -> Dict[str, Any]:
        """Session summary for front ends."""
        return {
            "hand_number": self.hand_number,
            "difficulty": self.difficulty.value,
            "starting_chips": self.starting_chips,
            "players": [p.to_dict() for p in self.registry.players],
            "finished": self.is_finished,
            "needs_buy_back": self.needs_buy_back,
        }


def start_session(
    n_bots: int,
    starting_chips: int,
    difficulty: Difficulty = Difficulty.MEDIUM,
    controller: Optional[HumanController] = None,
    rng: Optional[random.Random] = None,
) -> PokerSession:
    """Create a session; see PokerSession."""
    return PokerSession(n_bots, starting_chips, difficulty, controller=controller, rng=rng)


def play_hand(session: PokerSession, controller: Optional[HumanController] = None) -> HandResult:
    return session.play_hand(controller)


def session_chip_totals(session: PokerSession) -> Dict[str, int]:
    return session.chip_totals()


def bet_history(session: PokerSession) -> Tuple[Bet, ...]:
    return session.bet_history


def buy_back(session: PokerSession, amount: Optional[int] = None) -> int:
    return session.buy_back(amount)
