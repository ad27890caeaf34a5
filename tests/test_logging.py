"""Tests for verbranch.logging (level, format and stream of the root handler)."""

import io
import logging
import sys

from verbranch.config import LoggingConfig
from verbranch.logging import (
    DEFAULT_FORMAT,
    DEFAULT_LEVEL,
    LEVELS,
    VerbranchLogging,
    _resolve_level,
)


def test_default_level_is_info() -> None:
    assert DEFAULT_LEVEL == "INFO"


class TestResolveLevel:
    """_resolve_level maps level names to logging constants."""

    def test_known_levels(self) -> None:
        for name, value in LEVELS.items():
            assert _resolve_level(name) == value

    def test_case_and_whitespace_normalized(self) -> None:
        assert _resolve_level(" debug ") == logging.DEBUG

    def test_unknown_level_returns_info(self) -> None:
        assert _resolve_level("TRACE") == logging.INFO
        assert _resolve_level("") == logging.INFO


class TestVerbranchLogging:
    def test_setup_sets_root_level_and_format(self) -> None:
        custom = "%(levelname)s || %(message)s"
        handler = VerbranchLogging(LoggingConfig(level="WARNING", format=custom), env={}).setup()
        root = logging.root
        assert root.level == logging.WARNING
        assert root.handlers == [handler]
        assert handler.formatter._fmt == custom

    def test_empty_format_uses_default(self) -> None:
        handler = VerbranchLogging(LoggingConfig(level="INFO", format=""), env={}).setup()
        assert handler.formatter._fmt == DEFAULT_FORMAT

    def test_records_go_to_stderr_by_default(self) -> None:
        handler = VerbranchLogging(LoggingConfig(), env={}).setup()
        assert handler.stream is sys.stderr

    def test_records_written_to_given_stream(self) -> None:
        buf = io.StringIO()
        VerbranchLogging(LoggingConfig(level="INFO", format="%(name)s: %(message)s"), env={}).setup(stream=buf)

        logging.getLogger("verbranch.services.refs").info("Branch ref %s created", "refs/heads/rel_1.3.0")
        logging.getLogger("verbranch.services.refs").debug("hidden")

        assert buf.getvalue() == "verbranch.services.refs: Branch ref refs/heads/rel_1.3.0 created\n"

    def test_runner_debug_forces_debug_level(self) -> None:
        logs = VerbranchLogging(LoggingConfig(level="ERROR"), env={"RUNNER_DEBUG": "1"})
        assert logs.level == logging.DEBUG

    def test_runner_debug_other_values_ignored(self) -> None:
        logs = VerbranchLogging(LoggingConfig(level="WARNING"), env={"RUNNER_DEBUG": "0"})
        assert logs.level == logging.WARNING
