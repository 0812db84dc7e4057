#!/usr/bin/env python3
"""
PokerBots - Terminal Front End

Play against the bots from a terminal.

Usage:
    pokerbots [--bots N] [--games N] [--chips N] [--difficulty 1-4] [--verbose]
"""

from __future__ import annotations
from typing import Callable, List, Optional
import argparse
import logging

from pokerbots.agents.base import Decision, HumanController
from pokerbots.analytics import hand_feedback
from pokerbots.core.engine import ActionResult, RaiseBounds, RoundContext
from pokerbots.core.rules import (
    Difficulty, MIN_BOTS, MAX_BOTS, DEFAULT_BOTS,
    MIN_STARTING_CHIPS, MAX_STARTING_CHIPS, DEFAULT_STARTING_CHIPS,
    DEFAULT_DIFFICULTY,
)
from pokerbots.core.session import HandResult, PokerSession


logger = logging.getLogger(__name__)


def _cards(cards) -> str:
    return " ".join(str(c) for c in cards) or "-"


class ConsoleController(HumanController):
    """Reads the human's decisions from the terminal."""

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        print_fn: Callable[..., None] = print,
    ):
        self._input = input_fn
        self._print = print_fn

    def _show(self, context: RoundContext) -> None:
        self._print()
        self._print(f"--- {context.state.value} ---")
        self._print(f"Board: {_cards(context.community_cards)}")
        self._print(f"Your hand: {_cards(context.hole_cards)}")
        self._print(f"Your chips: {context.chips}   Pot: {context.pot_total}")
        opponents = ", ".join(f"{name} ({chips})" for name, chips in context.opponents.items())
        self._print(f"Opponents: {opponents or '-'}")

    def request_round_action(self, context: RoundContext) -> Decision:
        self._show(context)
        return self._input("Your move [fold/check/raise]: ").strip()

    def request_response_action(self, amount: int, context: RoundContext) -> Decision:
        self._show(context)
        return self._input(f"{amount} chips to stay in [fold/call/raise]: ").strip()

    def request_raise_amount(self, bounds: RaiseBounds) -> int:
        answer = self._input(f"Raise by how much? ({bounds.minimum}-{bounds.maximum}): ")
        try:
            return int(answer.strip())
        except ValueError:
            return 0

    def reject(self, result: ActionResult) -> None:
        self._print(f"Invalid input: {result.message}")

    def on_hand_end(self, result: HandResult) -> None:
        self._print()
        self._print(f"=== Hand #{result.hand_number} ===")
        self._print(f"Board: {_cards(result.community_cards)}")
        for name, value in result.rankings:
            self._print(f"  {name}: {value.describe()}")
        self._print(f"Winner(s): {', '.join(result.winner_names)}   Pot: {result.final_pot}")
        for name, amount in result.payouts.items():
            self._print(f"  {name} wins {amount}")
        for name in result.eliminated_bots:
            self._print(f"  {name} is out of chips and leaves the table")


def _bounded_int(low: int, high: Optional[int] = None) -> Callable[[str], int]:
    def convert(text: str) -> int:
        try:
            value = int(text)
        except ValueError:
            raise argparse.ArgumentTypeError(f"not an integer: {text}")
        if value < low or (high is not None and value > high):
            limit = f"{low}-{high}" if high is not None else f">= {low}"
            raise argparse.ArgumentTypeError(f"must be {limit}, got {value}")
        return value
    return convert


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Texas Hold'em against bots")
    parser.add_argument(
        "--bots", type=_bounded_int(MIN_BOTS, MAX_BOTS), default=DEFAULT_BOTS,
        help=f"Number of bots ({MIN_BOTS}-{MAX_BOTS})",
    )
    parser.add_argument(
        "--games", type=_bounded_int(1), default=1,
        help="Maximum number of hands to play",
    )
    parser.add_argument(
        "--chips", type=_bounded_int(MIN_STARTING_CHIPS, MAX_STARTING_CHIPS),
        default=DEFAULT_STARTING_CHIPS,
        help=f"Starting chips ({MIN_STARTING_CHIPS}-{MAX_STARTING_CHIPS})",
    )
    parser.add_argument(
        "--difficulty", type=_bounded_int(1, 4), default=int(DEFAULT_DIFFICULTY),
        help="1 easy, 2 medium, 3 hard, 4 impossible",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every bet")
    return parser


def _offer_buy_back(
    session: PokerSession,
    input_fn: Callable[[str], str],
    print_fn: Callable[..., None],
) -> bool:
    """Ask a broke human to buy back in. Returns False if they quit."""
    while True:
        answer = input_fn(
            f"You are out of chips. Buy back {session.starting_chips} chips? [y/n]: "
        ).strip().lower()
        if answer in ("y", "yes"):
            session.buy_back()
            print_fn(f"You now have {session.registry.human.chips} chips.")
            return True
        if answer in ("n", "no", "q", "quit"):
            return False


def run_games(
    session: PokerSession,
    games: int,
    input_fn: Callable[[str], str] = input,
    print_fn: Callable[..., None] = print,
) -> List[HandResult]:
    """Play up to `games` hands, handling buy-backs and the end of the table."""
    results: List[HandResult] = []
    while len(results) < games:
        if session.needs_buy_back and not _offer_buy_back(session, input_fn, print_fn):
            break

        result = session.play_hand()
        results.append(result)

        human = session.registry.human
        for line in hand_feedback(result, human.chips, human.name):
            print_fn(line)
        print_fn(f"Your chips: {human.chips}")

        if session.is_finished:
            print_fn("Congratulations! All bots have been defeated.")
            break
    return results


def print_bet_history(session: PokerSession, print_fn: Callable[..., None] = print) -> None:
    print_fn()
    print_fn("Betting history:")
    for bet in session.bet_history:
        print_fn(f"  {bet.player_name}: {bet.amount}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    controller = ConsoleController()
    session = PokerSession(
        args.bots, args.chips, Difficulty(args.difficulty), controller=controller
    )
    logger.debug(f"Playing up to {args.games} hands")

    try:
        run_games(session, args.games)
    except (KeyboardInterrupt, EOFError):
        print()
        print("Game interrupted.")
    print_bet_history(session)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
