#!/usr/bin/env python3
"""Apply Alembic migrations, reporting failures to Logfire."""

import argparse
import sys
from pathlib import Path

import logfire
from alembic import command
from alembic.config import Config

from invitely.config import Settings
from invitely.util.observability import configure_logfire

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Upgrade the Invitely database")
    parser.add_argument(
        "revision", nargs="?", default="head", help="Target revision (default: head)"
    )
    args = parser.parse_args(argv)

    settings = Settings()
    configure_logfire(settings)

    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option("script_location", str(ALEMBIC_INI.parent / "migrations"))

    with logfire.span("Database migration", revision=args.revision):
        try:
            command.upgrade(alembic_cfg, args.revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                error=str(e),
                error_type=type(e).__name__,
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than start on a broken schema
            raise

    logfire.info("Database migrations completed", revision=args.revision)
    return 0


if __name__ == "__main__":
    sys.exit(main())
