"""
Application settings, read from environment variables (a local `.env` file is picked up as well).

CHESSROOM_DATABASE_URL    SQLAlchemy URL of the room store
CHESSROOM_ECHO_SQL        "true" to log every SQL statement
CHESSROOM_LOG_LEVEL       logging level name
CHESSROOM_CAPTURE_POLICY  "capture" (standard chess) or "blocking" (no piece can ever be taken)
"""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import find_dotenv, load_dotenv

from chessroom.chess.occupancy import CapturePolicy

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


@dataclass(frozen=True)
class Settings:
    database_url: str = "sqlite:///./chessroom.db"
    echo_sql: bool = False
    log_level: str = "INFO"
    capture_policy: CapturePolicy = CapturePolicy.CAPTURE

    @classmethod
    def from_env(cls) -> "Settings":
        # .env of the working directory. Variables already set in the environment win
        load_dotenv(find_dotenv(usecwd=True))
        return cls(
            database_url=os.getenv("CHESSROOM_DATABASE_URL", cls.database_url),
            echo_sql=os.getenv("CHESSROOM_ECHO_SQL", "false").lower() in ("1", "true", "yes"),
            log_level=os.getenv("CHESSROOM_LOG_LEVEL", cls.log_level).upper(),
            capture_policy=CapturePolicy(
                os.getenv("CHESSROOM_CAPTURE_POLICY", cls.capture_policy.value).lower()
            ),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


def configure_logging(level: str) -> None:
    """Process-wide format, package-wide level. Modules just use logging.getLogger(__name__)."""
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger("chessroom").setLevel(level)
