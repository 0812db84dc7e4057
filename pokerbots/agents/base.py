"""
Human Controller Interface for PokerBots.

The round engine never reads input itself. Whenever the human has to act it
calls one of the request_* methods of a controller, which may block on a
terminal, a WebSocket or a test script.

Usage:
    class MyController(HumanController):
        def request_round_action(self, context):
            return "check"

        def request_response_action(self, amount, context):
            return "call"

        def request_raise_amount(self, bounds):
            return bounds.minimum
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Union, TYPE_CHECKING

from pokerbots.core.rules import ActionType

if TYPE_CHECKING:
    from pokerbots.core.engine import ActionResult, RaiseBounds, RoundContext
    from pokerbots.core.session import HandResult


Decision = Union[ActionType, str]


class HumanController(ABC):
    """
    Abstract source of the human player's decisions.

    Answers may be ActionType members or their names in any case
    ("fold", "CHECK"). Invalid answers are passed back through reject()
    and the same question is asked again.
    """

    @abstractmethod
    def request_round_action(self, context: RoundContext) -> Decision:
        """
        Choose an action on the human's turn (flop, turn or river).

        Legal answers: fold, check, raise. A raise is followed by
        request_raise_amount().

        Args:
            context: Hole cards, board, chips, pot and live opponents
        """
        pass

    @abstractmethod
    def request_response_action(self, amount: int, context: RoundContext) -> Decision:
        """
        Answer a bet of the given amount.

        Legal answers: fold, call, raise. Calling commits
        min(amount, chips); raising commits the amount plus the extra
        chips returned by request_raise_amount().

        Args:
            amount: Chips needed to stay in
            context: Hole cards, board, chips, pot and live opponents
        """
        pass

    @abstractmethod
    def request_raise_amount(self, bounds: RaiseBounds) -> int:
        """
        Choose how many chips to raise.

        Args:
            bounds: minimum/maximum valid raise plus the figures they come from
        """
        pass

    def reject(self, result: ActionResult) -> None:
        """
        Called when the last answer was invalid, before asking again.

        Override to show result.message to the user.
        """
        pass

    def on_hand_end(self, result: HandResult) -> None:
        """
        Called when a hand ends.

        Args:
            result: Winners, pot, payouts and rankings of the hand
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
