"""
Configuration and logging setup.

Settings are read from environment variables. Library modules only create their own loggers
(`logging.getLogger(__name__)`); the host application decides whether to call `configure_logging()`.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Self

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    log_level: str
    log_format: str

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> Self:
        """Build settings from (a copy of) the environment. Unknown log levels fall back to the default."""
        env = os.environ if environ is None else environ
        log_level = env.get("CHESS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if log_level not in logging.getLevelNamesMapping():
            log_level = DEFAULT_LOG_LEVEL
        log_format = env.get("CHESS_LOG_FORMAT", DEFAULT_LOG_FORMAT)
        return cls(log_level=log_level, log_format=log_format)


def load_settings() -> Settings:
    return Settings.from_env()


SETTINGS = load_settings()


def configure_logging(settings: Settings = SETTINGS) -> None:
    """Attach a stream handler to the root logger of the `src` package."""
    logger = logging.getLogger("src")
    logger.setLevel(settings.log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.log_format))
        logger.addHandler(handler)
