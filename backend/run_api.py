#!/usr/bin/env python
"""
Start the Userbase API under uvicorn.

Refuses to start when the database URL or the security secrets are missing,
rather than failing on the first request.

Usage:
    python run_api.py
    python run_api.py --reload --log-level debug
"""

import argparse
import logging
import sys

import uvicorn

from shared.config import Settings, get_settings

logger = logging.getLogger("run_api")

REQUIRED_SETTINGS = {
    "database_url": "USERBASE_DATABASE_URL",
    "password_salt": "USERBASE_PASSWORD_SALT",
    "jwt_secret": "USERBASE_JWT_SECRET",
}


def missing_settings(settings: Settings) -> list[str]:
    """Environment variable names for required settings that are empty."""
    return [env for field, env in REQUIRED_SETTINGS.items() if not getattr(settings, field)]


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Start the Userbase API")
    parser.add_argument("--host", default=settings.host, help="Interface to bind")
    parser.add_argument("--port", type=int, default=settings.port, help="Port to bind")
    parser.add_argument("--reload", action="store_true", default=settings.reload, help="Restart on code changes")
    parser.add_argument("--log-level", default=settings.log_level.lower(), help="uvicorn log level")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper())

    missing = missing_settings(settings)
    if missing:
        logger.error(f"Missing configuration: {', '.join(missing)}")
        return 1

    uvicorn.run(
        "api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
