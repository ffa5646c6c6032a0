#!/usr/bin/env python3
"""Apply database migrations, reporting failures to Logfire."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from ziora.config import Settings
from ziora.util.observability import configure_logfire


def main() -> int:
    """Upgrade the schema to head."""
    settings = Settings()
    configure_logfire(settings)

    try:
        with logfire.span("migrations.upgrade"):
            alembic_cfg = Config("alembic.ini")
            command.upgrade(alembic_cfg, "head")

        logfire.info("Database schema is up to date")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # The app must not start against a half-migrated schema
        raise


if __name__ == "__main__":
    sys.exit(main())
