"""Development entrypoint for the Stellarion combat API."""

from __future__ import annotations

import argparse

import uvicorn

from stellarion.api.app import app
from stellarion.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Run the Stellarion combat API server")
    parser.add_argument("--host", default="127.0.0.1", help="Host interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="TCP port to listen on")
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable autoreload (dev mode)",
    )
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        help="Log level for the server (defaults to STELLARION_LOG_LEVEL)",
    )
    args = parser.parse_args()

    if args.reload:
        uvicorn.run(
            "stellarion.api.app:app",
            host=args.host,
            port=args.port,
            reload=True,
            log_level=args.log_level,
        )
    else:
        uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level)


if __name__ == "__main__":
    main()
