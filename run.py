#!/usr/bin/env python3
"""
Start the PokerBots server from a source checkout.

Usage:
    python run.py [--host HOST] [--port PORT] [--reload] [--log-level LEVEL]

Same options as the `pokerbots-server` console script.
"""

from pokerbots.server.app import main


if __name__ == "__main__":
    main()
