"""
PokerBots Agents - Human Decision Controllers

This module provides the controller interface the round engine asks for the
human's decisions, plus non-interactive implementations.
"""

from pokerbots.agents.base import HumanController
from pokerbots.agents.scripted import (
    ScriptedController, PassiveController, RandomController,
)

__all__ = [
    "HumanController",
    "ScriptedController",
    "PassiveController",
    "RandomController",
]
