"""
Game rules and constants.

This module collects the table rules of the bot poker game:

1. Two random players post the blinds at the start of every hand.
   Big blind = starting chips / 10, small blind = big blind / 2, both tripled
   at the Impossible difficulty.

2. Bots act at random: on their turn they check 4 times out of 5 and raise
   otherwise; facing a bet they fold 1 time out of 3 and call otherwise.

3. Raise sizes scale with the starting chips, with extra multipliers at the
   top of the draw range.

4. A bot winner whose even share of the pot exceeds its pre-hand stack times
   max(initial bots / 2, final players) only receives that capped amount.
"""

from enum import Enum, IntEnum
from typing import Tuple, Union


class RoundState(Enum):
    """Phases of a hand, advancing strictly forward."""
    PRE_FLOP = "PRE_FLOP"
    FLOP = "FLOP"
    TURN = "TURN"
    RIVER = "RIVER"
    SHOWDOWN = "SHOWDOWN"


BETTING_ROUNDS = (
    RoundState.PRE_FLOP,
    RoundState.FLOP,
    RoundState.TURN,
    RoundState.RIVER,
)


class ActionType(Enum):
    """Possible player actions."""
    FOLD = "FOLD"
    CHECK = "CHECK"
    CALL = "CALL"
    RAISE = "RAISE"


# Legal human actions per decision point
ROUND_ACTIONS = (ActionType.FOLD, ActionType.CHECK, ActionType.RAISE)
RESPONSE_ACTIONS = (ActionType.FOLD, ActionType.CALL, ActionType.RAISE)


class Difficulty(IntEnum):
    """Game difficulty tiers."""
    EASY = 1
    MEDIUM = 2
    HARD = 3
    IMPOSSIBLE = 4


# Deck and dealing
DECK_SIZE = 52
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Session settings
HUMAN_NAME = "Human"
MIN_BOTS = 1
MAX_BOTS = 20
DEFAULT_BOTS = 5
MIN_STARTING_CHIPS = 10
MAX_STARTING_CHIPS = 10000
DEFAULT_STARTING_CHIPS = 150
DEFAULT_DIFFICULTY = Difficulty.MEDIUM

# Bot behaviour
BOT_ACTION_CHOICES = 5     # 1-4 check, 5 raise
BOT_RESPONSE_CHOICES = 3   # 1 fold, 2-3 call
BOT_RAISE_DRAW = (5, 20)
BOT_RAISE_FACTOR = 0.005
IMPOSSIBLE_MULTIPLIER = 3

BOT_NAMES = (
    "Alice", "Bence", "Carol", "David", "Eve", "Frank", "Grace", "Helen",
    "Ivan", "Judy", "Karl", "Laura", "Mike", "Nancy", "Oscar", "Paul",
    "Quincy", "Rita", "Steve", "Tina",
)

# Bot stack multipliers relative to the human's starting chips
_BOT_STACK_FACTORS = {
    Difficulty.EASY: 0.5,
    Difficulty.MEDIUM: 1,
    Difficulty.HARD: 2,
    Difficulty.IMPOSSIBLE: 10,
}


def parse_action(action: Union[ActionType, str]) -> ActionType:
    """
    Convert a controller answer to an ActionType.

    Accepts ActionType members or case-insensitive names ("fold", "Raise").

    Raises:
        ValueError: If the answer does not name an action.
    """
    if isinstance(action, ActionType):
        return action
    if not isinstance(action, str):
        raise ValueError(f"Unknown action: {action!r}")
    return ActionType(action.strip().upper())


def blind_amounts(starting_chips: int, difficulty: Difficulty) -> Tuple[int, int]:
    """
    Calculate the big and small blind for a session.

    Returns:
        Tuple of (big_blind, small_blind)
    """
    big_blind = starting_chips // 10
    small_blind = big_blind // 2
    if difficulty == Difficulty.IMPOSSIBLE:
        big_blind *= IMPOSSIBLE_MULTIPLIER
        small_blind *= IMPOSSIBLE_MULTIPLIER
    return big_blind, small_blind


def bot_starting_chips(starting_chips: int, difficulty: Difficulty) -> int:
    """Starting stack for every bot at the given difficulty."""
    return int(starting_chips * _BOT_STACK_FACTORS[Difficulty(difficulty)])


def bot_turn_action(draw: int) -> ActionType:
    """Map a 1-5 draw to a bot's turn action."""
    return ActionType.RAISE if draw == BOT_ACTION_CHOICES else ActionType.CHECK


def bot_response_action(draw: int) -> ActionType:
    """Map a 1-3 draw to a bot's response to a bet."""
    return ActionType.FOLD if draw == 1 else ActionType.CALL


def bot_raise_amount(draw: int, starting_chips: int, difficulty: Difficulty) -> int:
    """
    Size a bot raise from a draw in BOT_RAISE_DRAW.

    The result is not clamped to the bot's balance; the caller does that.
    """
    base = draw + BOT_RAISE_FACTOR * starting_chips * draw
    if difficulty == Difficulty.IMPOSSIBLE:
        amount = int(base * IMPOSSIBLE_MULTIPLIER)
    else:
        amount = int(base)

    _, high = BOT_RAISE_DRAW
    if draw == high - 1:
        amount *= 5
    elif draw == high:
        amount *= 2
    return amount


def partial_pot_cap(
    pre_hand_stack: int,
    initial_bot_count: int,
    final_player_count: int,
) -> int:
    """
    Maximum a bot winner can take from the pot.

    Args:
        pre_hand_stack: The bot's chips when the hand started
        initial_bot_count: Bots seated when the hand started
        final_player_count: Players still in at showdown
    """
    return pre_hand_stack * max(initial_bot_count // 2, final_player_count)


def reserve_size(num_players: int, num_community: int = TOTAL_COMMUNITY_CARDS) -> int:
    """Cards set aside for one hand: two per player plus the board."""
    return num_community + HOLE_CARDS * num_players
