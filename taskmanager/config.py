"""Runtime configuration for the task manager backend."""

import logging
import os
from dataclasses import dataclass, field
from typing import List

from dotenv import load_dotenv

load_dotenv()


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Application settings."""
    database_url: str = "sqlite:///./database.db"
    sql_echo: bool = False
    cors_allowed_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"
    bcrypt_rounds: int = 12

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./database.db"),
            sql_echo=os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes"),
            cors_allowed_origins=_split_origins(
                os.getenv("CORS_ALLOWED_ORIGINS", "http://localhost:3000")
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            bcrypt_rounds=int(os.getenv("BCRYPT_ROUNDS", "12")),
        )


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger.

    Safe to call more than once; later calls only adjust the level.
    """
    root = logging.getLogger()
    root.setLevel(level)
    if any(getattr(h, "_taskmanager", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)-7s %(name)s: %(message)s")
    )
    handler._taskmanager = True
    root.addHandler(handler)
