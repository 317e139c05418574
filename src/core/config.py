"""
Configuration settings for the application, read from environment variables.
"""

import logging
import os

DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./quoridor.db")
SQL_ECHO = os.environ.get("SQL_ECHO", "False").lower() == "true"

# Rooms nobody touched for this long are treated as gone.
ROOM_TTL_SECONDS = int(os.environ.get("ROOM_TTL_SECONDS", str(60 * 30)))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Call once from the application entrypoint. Library modules only create their own loggers."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
