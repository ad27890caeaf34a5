"""Output and failure sinks of a workflow step.

Outputs are appended to the file named by GITHUB_OUTPUT; outside of a
workflow run they are printed as ``key=value`` lines instead.
"""

import sys
import uuid
from pathlib import Path
from typing import Mapping, TextIO


def format_output(key: str, value: str) -> str:
    """One GITHUB_OUTPUT entry; multi-line values use the heredoc form."""
    if "\n" not in value:
        return f"{key}={value}\n"
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    return f"{key}<<{delimiter}\n{value}\n{delimiter}\n"


def write_outputs(
    outputs: Mapping[str, str],
    output_file: Path | str | None = None,
    stream: TextIO | None = None,
) -> None:
    entries = "".join(format_output(k, v) for k, v in outputs.items())
    if output_file:
        with open(output_file, "a", encoding="utf-8") as f:
            f.write(entries)
        return
    (stream or sys.stdout).write(entries)


def set_failed(message: str, stream: TextIO | None = None) -> int:
    """Report the terminal failure as a workflow error annotation; returns the exit code."""
    escaped = message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
    (stream or sys.stdout).write(f"::error::{escaped}\n")
    return 1
