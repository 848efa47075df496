"""Runtime configuration read from environment variables."""

from __future__ import annotations

import logging
import os

from pydantic import BaseModel, Field

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseModel):
    database_url: str | None = None  # unset -> in-memory store
    rooms_file: str | None = None
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        origins = os.getenv("ROOMBOOKING_CORS_ORIGINS") or "*"
        return cls(
            database_url=os.getenv("ROOMBOOKING_DATABASE_URL") or None,
            rooms_file=os.getenv("ROOMBOOKING_ROOMS_FILE") or None,
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=(os.getenv("ROOMBOOKING_LOG_LEVEL") or "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
