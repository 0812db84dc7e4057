"""
Showdown and pot distribution.

Winners are the players whose (category, tie_break) equals the best one at
the table. The pot is split evenly among them; odd chips go one at a time to
the winners in seating order.

A bot winner whose share exceeds its partial-pot cap (see
rules.partial_pot_cap) is paid the cap instead, and the shortfall is split
evenly among every other player still in the hand, winners and losers alike.
The human is never capped.
"""

from __future__ import annotations
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from dataclasses import dataclass, field
import logging

from pokerbots.core.card import Card
from pokerbots.core.hand import HandValue, evaluate_hand
from pokerbots.core.player import Player
from pokerbots.core.rules import partial_pot_cap


logger = logging.getLogger(__name__)


@dataclass
class ShowdownResult:
    """Ranked hands of the players still in at the showdown."""
    rankings: List[Tuple[str, HandValue]] = field(default_factory=list)
    winners: List[str] = field(default_factory=list)

    @property
    def best(self) -> Optional[HandValue]:
        return self.rankings[0][1] if self.rankings else None

    def value_of(self, name: str) -> Optional[HandValue]:
        for player_name, value in self.rankings:
            if player_name == name:
                return value
        return None


@dataclass
class Distribution:
    """How a pot was paid out."""
    payouts: Dict[str, int] = field(default_factory=dict)
    capped: List[str] = field(default_factory=list)
    undistributed: int = 0

    @property
    def total_paid(self) -> int:
        return sum(self.payouts.values())


def rank_players(
    players: Sequence[Player],
    community_cards: Sequence[Card],
) -> List[Tuple[str, HandValue]]:
    """
    Evaluate every player's hand against the board.

    Returns:
        (name, value) pairs, best hand first; ties keep seating order
    """
    evaluated = [
        (player.name, evaluate_hand(*player.hole_cards, community_cards))
        for player in players
    ]
    return sorted(evaluated, key=lambda item: item[1], reverse=True)


def determine_winners(
    players: Sequence[Player],
    community_cards: Sequence[Card],
) -> ShowdownResult:
    """Rank the remaining players and collect everyone tied with the best hand."""
    rankings = rank_players(players, community_cards)
    if not rankings:
        return ShowdownResult()

    best = rankings[0][1]
    winners = [name for name, value in rankings if value == best]

    logger.info(f"Winners: {', '.join(winners)} with {best.describe()}")
    return ShowdownResult(rankings=rankings, winners=winners)


def _split_evenly(amount: int, names: Sequence[str], payouts: Dict[str, int]) -> None:
    """Add amount // len(names) to each name; odd chips go to the first names."""
    if not names or amount <= 0:
        return
    share, remainder = divmod(amount, len(names))
    for i, name in enumerate(names):
        payouts[name] = payouts.get(name, 0) + share + (1 if i < remainder else 0)


def distribute_pot(
    winner_names: Sequence[str],
    final_player_names: Sequence[str],
    total: int,
    pre_hand_bot_stacks: Mapping[str, int],
) -> Distribution:
    """
    Decide how much each player receives from the pot.

    Args:
        winner_names: Players tied with the best hand
        final_player_names: Every player still in at the showdown, in seating order
        total: Pot total
        pre_hand_bot_stacks: Chips of every bot seated when the hand started
            (the human is never listed, so is never capped)

    Returns:
        Distribution with the payouts; chips are not applied to players here
    """
    distribution = Distribution()
    if not winner_names or total <= 0:
        distribution.undistributed = max(total, 0)
        return distribution

    share = total // len(winner_names)
    initial_bot_count = len(pre_hand_bot_stacks)
    capped_total = 0

    for name in winner_names:
        if name not in pre_hand_bot_stacks:
            continue
        cap = partial_pot_cap(
            pre_hand_bot_stacks[name], initial_bot_count, len(final_player_names)
        )
        if share > cap:
            distribution.payouts[name] = cap
            distribution.capped.append(name)
            capped_total += cap
            logger.info(f"Bot {name} receives a partial pot: {cap} chips")

    if not distribution.capped:
        _split_evenly(total, winner_names, distribution.payouts)
    else:
        refunded = [n for n in final_player_names if n not in distribution.capped]
        _split_evenly(total - capped_total, refunded, distribution.payouts)
        if not refunded:
            distribution.undistributed = total - capped_total

    for name, amount in distribution.payouts.items():
        logger.debug(f"{name} receives {amount} chips")
    return distribution
