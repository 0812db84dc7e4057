"""
Fixtures for server tests.
"""

import pytest
from fastapi.testclient import TestClient

from pokerbots.server.app import create_app
from pokerbots.server.websocket import session_manager


@pytest.fixture
def client():
    """HTTP and WebSocket test client."""
    return TestClient(create_app())


@pytest.fixture
def stacked_session(scripted_rng):
    """Register a heads-up session where the human holds aces against king high."""

    def create():
        rng = scripted_rng(deal="AS AH 2c 7d Kd 9s 5c 3h Jc")
        return session_manager.create_session(n_bots=1, starting_chips=150, rng=rng)

    return create
