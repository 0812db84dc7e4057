"""
FastAPI application for PokerBots.

create_app() wires together:
- HTTP routes for starting, reading and autoplaying sessions
- The /ws/{session_id} endpoint where the human plays hands live
- A /health check reporting the version and the number of open sessions

main() is both the `pokerbots-server` console script and what run.py calls.
"""

from typing import List, Optional
import argparse
import logging

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pokerbots import __version__
from pokerbots.core.rules import MAX_BOTS, MIN_BOTS
from pokerbots.server.routes import router
from pokerbots.server.websocket import DECISION_TIMEOUT, session_manager, websocket_endpoint

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]

logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Replace the import-time logging setup with the given level."""
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT, force=True)


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Sessions live in the module-level session manager, so every app built
    here shares them.
    """
    app = FastAPI(
        title="PokerBots",
        description="Texas Hold'em against bots with an HTTP and WebSocket API",
        version=__version__,
    )

    # Browser clients are served from elsewhere
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    app.websocket("/ws/{session_id}")(websocket_endpoint)

    @app.get("/health")
    async def health():
        return {
            "status": "ok",
            "version": __version__,
            "sessions": len(session_manager.sessions),
        }

    @app.on_event("startup")
    async def startup_event():
        logger.info(
            f"PokerBots {__version__} ready: tables of {MIN_BOTS}-{MAX_BOTS} bots, "
            f"human decisions time out after {DECISION_TIMEOUT:.0f}s"
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        dropped = len(session_manager.sessions)
        session_manager.sessions.clear()
        logger.info(f"PokerBots shutting down, dropped {dropped} open sessions")

    return app


app = create_app()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="PokerBots server")
    parser.add_argument("--host", default="127.0.0.1", help="Host to bind to")
    parser.add_argument("--port", type=int, default=8000, help="Port to bind to")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument(
        "--log-level", default="INFO", choices=LOG_LEVELS, type=str.upper,
        help="Logging level for the server and the engine",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Parse the command line and serve the app with uvicorn."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    uvicorn.run(
        "pokerbots.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level.lower(),
    )


if __name__ == "__main__":
    main()
