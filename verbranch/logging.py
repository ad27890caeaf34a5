"""Logging for action runs.

Records are written to stderr. Stdout belongs to the output sink (when
GITHUB_OUTPUT is unset) and the ``::error::`` annotation, so log lines never
mix with either.

Level comes from logging.level / LOGGING_LEVEL. When the runner has step debug
logging enabled (RUNNER_DEBUG=1) DEBUG is used whatever the configured level.
"""

import logging
import os
import sys
from typing import IO, Mapping

from verbranch.config import LoggingConfig

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}

DEFAULT_LEVEL = "INFO"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
RUNNER_DEBUG_ENV = "RUNNER_DEBUG"


def _resolve_level(level: str) -> int:
    """Unknown names fall back to INFO."""
    return LEVELS.get(level.upper().strip(), logging.INFO)


class VerbranchLogging:
    """Root logger setup for one run."""

    def __init__(self, config: LoggingConfig, env: Mapping[str, str] | None = None) -> None:
        env = os.environ if env is None else env
        if env.get(RUNNER_DEBUG_ENV) == "1":
            self._level = logging.DEBUG
        else:
            self._level = _resolve_level(config.level)
        self._format = config.format or DEFAULT_FORMAT

    @property
    def level(self) -> int:
        return self._level

    def setup(self, stream: IO[str] | None = None) -> logging.Handler:
        """Replace root handlers with one stream handler (stderr by default) and return it."""
        handler = logging.StreamHandler(sys.stderr if stream is None else stream)
        handler.setFormatter(logging.Formatter(self._format))
        logging.basicConfig(level=self._level, handlers=[handler], force=True)
        return handler
