"""
Post-hand feedback for the human player.

Compares the human's hand category with the winning one and returns short
pieces of advice. The human's hand is judged even after a fold, against
what the showdown would have been.
"""

from __future__ import annotations
from typing import List, Optional, Sequence, Tuple

from pokerbots.core.hand import HandRank, HandValue
from pokerbots.core.rules import HUMAN_NAME
from pokerbots.core.session import HandResult


def hand_feedback(
    result: HandResult,
    human_chips: int,
    human_name: str = HUMAN_NAME,
) -> List[str]:
    """
    Advice for the human after a hand.

    Args:
        result: The finished hand
        human_chips: The human's balance after the pot was paid out
        human_name: Name of the human player

    Returns:
        Lines of feedback (empty if the human's hand is unknown)
    """
    if result.human_hand is None:
        return []
    if result.human_folded:
        return _folded_feedback(result, human_name)
    if human_name in result.winner_names:
        return _won_feedback(result, human_chips, human_name)
    return _lost_feedback(result)


def _runner_up(rankings: Sequence[Tuple[str, HandValue]]) -> Optional[HandValue]:
    return rankings[1][1] if len(rankings) > 1 else None


def _won_feedback(result: HandResult, human_chips: int, human_name: str) -> List[str]:
    human = result.human_hand
    runner_up = _runner_up(result.rankings)
    if runner_up is None:
        return ["Great job! Analytics show that you played a very good game!"]

    difference = human.rank - runner_up.rank
    if result.final_pot < 0.5 * human_chips:
        if difference > 1:
            return [
                "Great job!",
                "Next time consider making bigger bets in a similar situation, "
                "because you had a much better hand rank.",
            ]
        return ["Great job!", "It was a well balanced risk-reward betting ratio."]

    if difference >= 1:
        return ["Great job! Analytics show that you played a very good game!"]
    if result.rankings[0][1].rank >= HandRank.THREE_OF_A_KIND:
        return [
            "It was a RISKY RAISE that you made.",
            "Other players had the same hand rank, but it was a strong one.",
            "Overall, such a raising strategy is likely to be profitable in the long run!",
        ]
    return [
        "It was a RISKY RAISE that you made.",
        "The risk-reward ratio was not the best, you got a bit fortunate with the win.",
        "There is a high chance that such a strategy would not be profitable in the long run!",
    ]


def _lost_feedback(result: HandResult) -> List[str]:
    human = result.human_hand
    best = result.rankings[0][1] if result.rankings else human
    difference = best.rank - human.rank

    if difference > 1:
        return [
            "The winning hand was more than one rank above yours.",
            "It was a VERY BAD MOVE! In a similar situation consider folding as early as possible.",
        ]
    if difference == 1:
        return [
            "The winning hand was one rank above yours.",
            "Try to be more aware of other players' possible hands and fold early "
            "when your hand is not strong.",
        ]
    return [
        "You were UNLUCKY this game. Opponents had the same hand rank with a higher card.",
        "With a bit more luck next time you would probably win!",
    ]


def _folded_feedback(result: HandResult, human_name: str) -> List[str]:
    human = result.human_hand
    ranked = sorted(
        list(result.rankings) + [(human_name, human)],
        key=lambda item: item[1],
        reverse=True,
    )
    best = ranked[0][1]
    would_have_won = human == best

    if would_have_won:
        runner_up = _runner_up(ranked)
        difference = human.rank - runner_up.rank if runner_up else 0
        lines = ["You would have been the winner..."]
        if difference > 1:
            lines.append(
                "You folded when YOU HAD THE BEST CARDS! A VERY BAD FOLD decision!"
            )
        elif difference == 1:
            lines.append(
                "It would have been a strong win. Next time you can be more "
                "confident with similar cards."
            )
        else:
            lines.append(
                "It would have been a close one. Next time you can try to play "
                "more aggressively in similar scenarios!"
            )
        if runner_up is not None:
            lines.append(
                f"Your hand: {human.describe()}, best opponent: {runner_up.describe()}"
            )
        return lines

    if human.rank == best.rank:
        lines = [
            "The winner had the same hand rank with a higher card.",
            "GOOD FOLD decision, you were unlucky this game.",
        ]
    else:
        lines = ["The winner's hand was better, so it was a GOOD DECISION to FOLD."]
    lines.append(f"Your hand: {human.describe()}, winning hand: {best.describe()}")
    return lines
