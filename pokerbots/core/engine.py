"""
Round Engine - State Machine Implementation.

This module drives one hand of the bot poker game through its four betting
rounds (pre-flop, flop, turn, river) and stops at the showdown.
It handles:
- Random blind assignment and the response pass it triggers
- The human's turn and the bots' turn on every later round
- Response passes after a raise (bots fold or call, the human answers)
- Early termination when a single side is left or every bot is broke

The engine performs no I/O. Human decisions come from a controller object
(see pokerbots.agents.base.HumanController); invalid answers are returned to
the controller as failed ActionResults and the question is asked again.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple, Any, TYPE_CHECKING
from dataclasses import dataclass, field
import logging
import random

from pokerbots.core.card import Card, Deck
from pokerbots.core.errors import (
    PokerError, InvalidAction, InvalidBetAmount, InsufficientFunds,
)
from pokerbots.core.player import Player, PlayerRegistry
from pokerbots.core.pot import Pot
from pokerbots.core.rules import (
    RoundState, ActionType, Difficulty, BETTING_ROUNDS,
    ROUND_ACTIONS, RESPONSE_ACTIONS,
    BOT_ACTION_CHOICES, BOT_RESPONSE_CHOICES, BOT_RAISE_DRAW,
    blind_amounts, bot_turn_action, bot_response_action, bot_raise_amount,
    parse_action,
)

if TYPE_CHECKING:
    from pokerbots.agents.base import HumanController


logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of resolving a human decision."""
    success: bool
    message: str
    action_type: Optional[ActionType] = None
    amount: int = 0
    error: Optional[PokerError] = None

    @classmethod
    def failure(cls, error: PokerError) -> ActionResult:
        return cls(False, str(error), error=error)


@dataclass
class RaiseBounds:
    """Valid range for a human raise."""
    minimum: int
    maximum: int
    chips: int
    to_call: int = 0
    max_opponent_chips: int = 0
    max_opponent_name: Optional[str] = None


@dataclass
class RoundContext:
    """What the human can see when asked to act."""
    state: RoundState
    hole_cards: Tuple[Card, ...]
    community_cards: List[Card]
    chips: int
    pot_total: int
    opponents: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state": self.state.value,
            "hand": [c.to_dict() for c in self.hole_cards],
            "board": [c.to_dict() for c in self.community_cards],
            "chips": self.chips,
            "pot": self.pot_total,
            "opponents": dict(self.opponents),
        }


class RoundEngine:
    """
    Plays the betting rounds of a single hand.

    Usage:
        engine = RoundEngine(registry, deck, pot, controller,
                             starting_chips=150, difficulty=Difficulty.MEDIUM)
        contenders = engine.play()
        # engine.state is RoundState.SHOWDOWN and the board is complete
    """

    def __init__(
        self,
        registry: PlayerRegistry,
        deck: Deck,
        pot: Pot,
        controller: HumanController,
        starting_chips: int,
        difficulty: Difficulty = Difficulty.MEDIUM,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            registry: Seated players with hole cards already dealt
            deck: Deck with the hand's cards reserved
            pot: Pot receiving every contribution
            controller: Source of the human's decisions
            starting_chips: Session starting chips (sizes blinds and bot raises)
            difficulty: Session difficulty
            rng: Random source (defaults to the random module)
        """
        self.registry = registry
        self.deck = deck
        self.pot = pot
        self.controller = controller
        self.starting_chips = starting_chips
        self.difficulty = Difficulty(difficulty)
        self._rng = rng or random

        self.state = RoundState.PRE_FLOP
        self.human = registry.human
        self.human_live = True
        self.live_bots: List[Player] = registry.bots

        self.big_blind_player: Optional[str] = None
        self.small_blind_player: Optional[str] = None
        self.ended_early = False

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def play(self) -> List[Player]:
        """
        Run the hand up to the showdown.

        Returns:
            Players still in the hand (human first, then bots in roster order)
        """
        for state in BETTING_ROUNDS:
            self.state = state
            logger.info(f"Round {state.value} begins, pot {self.pot.total}")

            if state == RoundState.PRE_FLOP:
                self._post_blinds()
            else:
                self._reveal(state)

            if self._all_bots_broke():
                logger.info("No bot has chips left, running out the board")
                self._fast_forward()
                break

            if state != RoundState.PRE_FLOP:
                self._turn_pass()

            if self._single_survivor():
                logger.info("Single side left in the hand, running out the board")
                self._fast_forward()
                break

        self.state = RoundState.SHOWDOWN
        return self.contenders

    @property
    def contenders(self) -> List[Player]:
        """Players who have not folded."""
        players = [self.human] if self.human_live else []
        return players + list(self.live_bots)

    def _reveal(self, state: RoundState) -> None:
        if state == RoundState.FLOP:
            cards = self.deck.reveal_flop()
        elif state == RoundState.TURN:
            cards = self.deck.reveal_turn()
        else:
            cards = self.deck.reveal_river()
        logger.info(f"{state.value}: {' '.join(str(c) for c in cards)}")

    def _fast_forward(self) -> None:
        self.ended_early = True
        self.deck.reveal_remaining()

    def _all_bots_broke(self) -> bool:
        return max((b.chips for b in self.live_bots), default=0) == 0

    def _single_survivor(self) -> bool:
        if self.human_live:
            return not self.live_bots
        return len(self.live_bots) == 1

    def _human_can_act(self) -> bool:
        return self.human_live and self.human.chips > 0

    # ------------------------------------------------------------------
    # Chips
    # ------------------------------------------------------------------

    def _commit(self, player: Player, amount: int) -> int:
        """Take up to amount from the player and put it in the pot."""
        actual = player.bet(amount)
        if actual > 0:
            self.pot.contribute(player.name, actual)
            if player.chips == 0:
                logger.info(f"{player.name} is ALL IN with {actual}")
        return actual

    def _max_opponent(self) -> Tuple[int, Optional[str]]:
        if not self.live_bots:
            return 0, None
        richest = max(self.live_bots, key=lambda b: b.chips)
        return richest.chips, richest.name

    # ------------------------------------------------------------------
    # Pre-flop
    # ------------------------------------------------------------------

    def _post_blinds(self) -> None:
        """Pick two random players, post the blinds and answer the big blind."""
        big_blind, small_blind = blind_amounts(self.starting_chips, self.difficulty)
        eligible = [p for p in self.registry.players if p.chips > 0]
        if len(eligible) < 2:
            logger.warning("Not enough players with chips to post blinds")
            return

        big_player, small_player = self._rng.sample(eligible, 2)
        self.big_blind_player = big_player.name
        self.small_blind_player = small_player.name

        big_paid = self._commit(big_player, big_blind)
        small_paid = self._commit(small_player, small_blind)
        logger.info(
            f"Blinds posted: BB {big_player.name}={big_paid} "
            f"SB {small_player.name}={small_paid}"
        )

        self._response_pass(
            big_paid,
            raiser=big_player.name,
            credits={small_player.name: small_paid},
        )

    # ------------------------------------------------------------------
    # Turn pass (flop, turn, river)
    # ------------------------------------------------------------------

    def _turn_pass(self) -> None:
        """Human acts first; bots act only if the human did not raise."""
        bots_responded = False
        if self._human_can_act():
            bots_responded = self._human_turn()
        if self.live_bots and not bots_responded:
            self._bot_turn()

    def _bot_turn(self) -> None:
        """
        Let bots act in roster order until one raises.

        Only one raise is resolved per pass.
        """
        for bot in list(self.live_bots):
            draw = self._rng.randint(1, BOT_ACTION_CHOICES)
            if bot_turn_action(draw) == ActionType.CHECK or bot.chips <= 0:
                logger.debug(f"Bot {bot.name} checks")
                continue

            amount = bot_raise_amount(
                self._rng.randint(*BOT_RAISE_DRAW), self.starting_chips, self.difficulty
            )
            paid = self._commit(bot, amount)
            logger.info(f"Bot {bot.name} raises {paid}")
            self._response_pass(paid, raiser=bot.name)
            break

    def _response_pass(
        self,
        amount: int,
        raiser: str,
        credits: Optional[Dict[str, int]] = None,
    ) -> None:
        """
        Every other live player answers a bet of the given amount.

        Bots fold or call at random; folds are applied after the pass.
        The human, if live and solvent, then folds, calls or re-raises.

        Args:
            amount: Chips each responder must match
            raiser: Name of the player who made the bet
            credits: Chips already posted toward this bet (the small blind)
        """
        credits = credits or {}
        folded = []
        for bot in self.live_bots:
            if bot.name == raiser or bot.chips <= 0:
                continue
            owed = max(amount - credits.get(bot.name, 0), 0)
            draw = self._rng.randint(1, BOT_RESPONSE_CHOICES)
            if bot_response_action(draw) == ActionType.FOLD:
                logger.debug(f"Bot {bot.name} folds")
                folded.append(bot.name)
            else:
                paid = self._commit(bot, owed)
                logger.debug(f"Bot {bot.name} calls {paid}")

        if folded:
            self.live_bots = [b for b in self.live_bots if b.name not in folded]

        if raiser != self.human.name and self._human_can_act():
            owed = max(amount - credits.get(self.human.name, 0), 0)
            if owed > 0:
                self._human_response(owed)

    # ------------------------------------------------------------------
    # Human decisions
    # ------------------------------------------------------------------

    def context(self) -> RoundContext:
        """Snapshot of the table from the human's seat."""
        return RoundContext(
            state=self.state,
            hole_cards=self.human.hole_cards,
            community_cards=self.deck.community_cards,
            chips=self.human.chips,
            pot_total=self.pot.total,
            opponents={b.name: b.chips for b in self.live_bots},
        )

    def _ask(self, resolve) -> ActionResult:
        """Ask the controller until resolve() returns a successful result."""
        while True:
            result = resolve()
            if result.success:
                return result
            logger.debug(f"Rejected human input: {result.message}")
            self.controller.reject(result)

    def _human_turn(self) -> bool:
        """
        Ask the human to fold, check or raise.

        Returns:
            True if the human raised (the bots already responded)
        """
        result = self._ask(self._resolve_round_action)
        return result.action_type == ActionType.RAISE

    def _human_response(self, amount: int) -> None:
        """Ask the human to fold, call or raise against a bet."""
        self._ask(lambda: self._resolve_response_action(amount))

    def _resolve_round_action(self) -> ActionResult:
        try:
            action = parse_action(self.controller.request_round_action(self.context()))
        except ValueError as e:
            return ActionResult.failure(InvalidAction(f"Invalid action: {e}"))

        if action not in ROUND_ACTIONS:
            return ActionResult.failure(
                InvalidAction(f"Cannot {action.value.lower()} now, choose fold, check or raise")
            )

        if action == ActionType.FOLD:
            self.human_live = False
            logger.info("Human folds")
            return ActionResult(True, "Folded", ActionType.FOLD)

        if action == ActionType.CHECK:
            logger.info("Human checks")
            return ActionResult(True, "Checked", ActionType.CHECK)

        max_chips, max_name = self._max_opponent()
        bounds = RaiseBounds(
            minimum=1,
            maximum=min(self.human.chips, max_chips),
            chips=self.human.chips,
            max_opponent_chips=max_chips,
            max_opponent_name=max_name,
        )
        amount = self.controller.request_raise_amount(bounds)
        error = self._validate_raise(amount, self.human.chips, max_chips)
        if error is not None:
            return ActionResult.failure(error)

        paid = self._commit(self.human, amount)
        logger.info(f"Human raises {paid}")
        self._response_pass(paid, raiser=self.human.name)
        return ActionResult(True, f"Raised {paid}", ActionType.RAISE, paid)

    def _resolve_response_action(self, amount: int) -> ActionResult:
        try:
            action = parse_action(
                self.controller.request_response_action(amount, self.context())
            )
        except ValueError as e:
            return ActionResult.failure(InvalidAction(f"Invalid action: {e}"))

        if action not in RESPONSE_ACTIONS:
            return ActionResult.failure(
                InvalidAction(f"Cannot {action.value.lower()} now, choose fold, call or raise")
            )

        if action == ActionType.FOLD:
            self.human_live = False
            logger.info("Human folds")
            return ActionResult(True, "Folded", ActionType.FOLD)

        if action == ActionType.CALL:
            paid = self._commit(self.human, amount)
            logger.info(f"Human calls {paid}")
            return ActionResult(True, f"Called {paid}", ActionType.CALL, paid)

        if self.human.chips <= amount:
            return ActionResult.failure(
                InsufficientFunds("You don't have enough chips to raise!")
            )

        available = self.human.chips - amount
        max_chips, max_name = self._max_opponent()
        bounds = RaiseBounds(
            minimum=1,
            maximum=min(available, max_chips),
            chips=self.human.chips,
            to_call=amount,
            max_opponent_chips=max_chips,
            max_opponent_name=max_name,
        )
        extra = self.controller.request_raise_amount(bounds)
        error = self._validate_raise(extra, available, max_chips)
        if error is not None:
            return ActionResult.failure(error)

        paid = self._commit(self.human, amount)
        paid += self._commit(self.human, extra)
        logger.info(f"Human calls {amount} and raises {extra}")
        self._response_pass(extra, raiser=self.human.name)
        return ActionResult(True, f"Raised {extra}", ActionType.RAISE, paid)

    @staticmethod
    def _validate_raise(amount: Any, available: int, max_opponent_chips: int) -> Optional[PokerError]:
        """Check a raise amount against the balance and the richest opponent."""
        if isinstance(amount, bool) or not isinstance(amount, int):
            return InvalidBetAmount(f"Invalid bet amount: {amount!r}")
        if amount <= 0:
            return InvalidBetAmount("Bet amount must be positive")
        if amount > available:
            return InvalidBetAmount(f"Cannot bet more than {available} chips")
        if amount > max_opponent_chips:
            return InvalidBetAmount(
                f"Cannot bet more than the richest opponent ({max_opponent_chips} chips)"
            )
        return None
