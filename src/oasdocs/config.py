"""CLI configuration via dataclass, built once per invocation."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from oasdocs.types import DEFAULT_INDENT

logger = logging.getLogger(__name__)

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_VALID_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _level_from_env() -> str:
    """Read ``OASDOCS_LOG_LEVEL``, falling back to WARNING if unset or unknown."""
    env_level = os.getenv("OASDOCS_LOG_LEVEL", "").strip().upper()
    if not env_level:
        return "WARNING"
    if env_level not in _VALID_LEVELS:
        logger.warning(
            "Ignoring OASDOCS_LOG_LEVEL=%r; expected one of %s",
            env_level,
            sorted(_VALID_LEVELS),
        )
        return "WARNING"
    return env_level


@dataclass
class CLIConfig:
    """Settings shared by every subcommand.

    ``color`` of ``None`` lets click decide based on whether the stream is a
    terminal.  ``log_level`` priority (highest wins):
    ``verbose`` > constructor arg > ``OASDOCS_LOG_LEVEL`` env var > WARNING.
    A bad constructor value raises; a bad env value is ignored with a warning.
    """

    color: bool | None = None
    indent: int = DEFAULT_INDENT
    verbose: bool = False
    log_level: str | None = None

    def __post_init__(self) -> None:
        if self.verbose:
            self.log_level = "DEBUG"
        elif self.log_level is not None:
            self.log_level = self.log_level.upper()
            if self.log_level not in _VALID_LEVELS:
                raise ValueError(
                    f"Invalid log level '{self.log_level}'. "
                    f"Must be one of: {sorted(_VALID_LEVELS)}"
                )
        else:
            self.log_level = _level_from_env()
        if self.indent < 0:
            raise ValueError(f"indent must be >= 0, got {self.indent}")

    def configure_logging(self) -> None:
        """Send log records to stderr at the configured level."""
        logging.basicConfig(level=logging.WARNING, format=_LOG_FORMAT)
        logging.getLogger("oasdocs").setLevel(getattr(logging, self.log_level))
        logger.debug("Logging configured at %s", self.log_level)
