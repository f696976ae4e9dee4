"""Runtime settings read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    seed: Optional[int] = None
    output_dir: str = "./output"
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default=("http://localhost:3000",))
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        seed = os.environ.get("TRADECOACH_SEED", "").strip()
        origins = os.environ.get("TRADECOACH_CORS_ORIGINS", "http://localhost:3000")
        return cls(
            seed=int(seed) if seed else None,
            output_dir=os.environ.get("TRADECOACH_OUTPUT_DIR", "./output"),
            log_level=os.environ.get("TRADECOACH_LOG_LEVEL", "INFO").upper(),
            cors_origins=tuple(o.strip() for o in origins.split(",") if o.strip()),
            host=os.environ.get("TRADECOACH_HOST", "127.0.0.1"),
            port=int(os.environ.get("TRADECOACH_PORT", "8000")),
        )


def configure_logging(level: str = "INFO"):
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
