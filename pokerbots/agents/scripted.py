"""
Non-interactive Controller Implementations.

Controllers that answer for the human without a person at the keyboard.
Useful for testing, automated play and server-side autoplay.
"""

from __future__ import annotations
from collections import deque
from typing import Iterable, List, Optional, Union
import random

from pokerbots.agents.base import Decision, HumanController
from pokerbots.core.engine import ActionResult, RaiseBounds, RoundContext
from pokerbots.core.rules import ActionType


class ScriptedController(HumanController):
    """
    Replays a fixed list of answers in order.

    Actions and raise amounts share one queue, in the order the engine asks
    for them: e.g. ["raise", 10, "call", "check"].

    Attributes:
        rejections: Every failed ActionResult passed back by the engine
        results: Every HandResult seen
    """

    def __init__(self, answers: Iterable[Union[Decision, int]] = ()):
        self._answers = deque(answers)
        self.rejections: List[ActionResult] = []
        self.results = []
        self.prompts: List[str] = []

    def push(self, *answers: Union[Decision, int]) -> None:
        """Queue more answers."""
        self._answers.extend(answers)

    @property
    def remaining(self) -> int:
        return len(self._answers)

    def _next(self, prompt: str):
        self.prompts.append(prompt)
        if not self._answers:
            raise RuntimeError(f"No scripted answer left for {prompt}")
        return self._answers.popleft()

    def request_round_action(self, context: RoundContext) -> Decision:
        return self._next("round")

    def request_response_action(self, amount: int, context: RoundContext) -> Decision:
        return self._next("response")

    def request_raise_amount(self, bounds: RaiseBounds) -> int:
        return self._next("raise_amount")

    def reject(self, result: ActionResult) -> None:
        self.rejections.append(result)

    def on_hand_end(self, result) -> None:
        self.results.append(result)


class PassiveController(HumanController):
    """
    Always checks or calls.

    Useful for testing and as a simple baseline.
    """

    def request_round_action(self, context: RoundContext) -> Decision:
        return ActionType.CHECK

    def request_response_action(self, amount: int, context: RoundContext) -> Decision:
        return ActionType.CALL

    def request_raise_amount(self, bounds: RaiseBounds) -> int:
        return bounds.minimum


class RandomController(HumanController):
    """
    Picks random legal answers.

    The controller has configurable tendencies:
    - fold_probability: How likely to fold
    - raise_probability: How likely to raise instead of checking/calling
    """

    def __init__(
        self,
        fold_probability: float = 0.1,
        raise_probability: float = 0.2,
        rng: Optional[random.Random] = None,
    ):
        """
        Args:
            fold_probability: Probability of folding (0-1)
            raise_probability: Probability of raising (0-1)
            rng: Random source (defaults to the random module)
        """
        self.fold_probability = fold_probability
        self.raise_probability = raise_probability
        self._rng = rng or random

    def _choose(self, passive: ActionType, can_raise: bool) -> ActionType:
        roll = self._rng.random()
        if roll < self.fold_probability:
            return ActionType.FOLD
        if can_raise and roll < self.fold_probability + self.raise_probability:
            return ActionType.RAISE
        return passive

    def request_round_action(self, context: RoundContext) -> Decision:
        can_raise = bool(context.opponents) and max(context.opponents.values()) > 0
        return self._choose(ActionType.CHECK, can_raise)

    def request_response_action(self, amount: int, context: RoundContext) -> Decision:
        can_raise = (
            context.chips > amount
            and bool(context.opponents)
            and max(context.opponents.values()) > 0
        )
        return self._choose(ActionType.CALL, can_raise)

    def request_raise_amount(self, bounds: RaiseBounds) -> int:
        if bounds.maximum <= bounds.minimum:
            return bounds.minimum
        # Bias towards smaller raises
        upper = max(bounds.minimum, bounds.maximum // 4)
        return self._rng.randint(bounds.minimum, upper)
