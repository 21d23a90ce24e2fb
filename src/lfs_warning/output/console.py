"""Console output using GitHub Actions workflow commands.

Outside of Actions the commands still print as readable lines.
"""

import json
import os
import sys
import uuid
from typing import Any


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def info(message: str) -> None:
    print(message)


def debug(message: str) -> None:
    print(f"::debug::{_escape_data(message)}")


def warning(message: str) -> None:
    print(f"::warning::{_escape_data(message)}")


def error(message: str) -> None:
    print(f"::error::{_escape_data(message)}", file=sys.stderr)


def set_failed(message: str) -> None:
    """Report a failing run; the caller decides the exit code."""
    error(message)


def set_output(name: str, value: Any) -> None:
    """Publish a step output.

    Non-string values are JSON encoded. Writes to ``$GITHUB_OUTPUT`` when
    the runner provides it, otherwise prints ``name=value`` for local runs.
    """
    text = value if isinstance(value, str) else json.dumps(value)
    output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        print(f"{name}={text}")
        return

    with open(output_file, "a", encoding="utf-8") as f:
        if "\n" in text:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
        else:
            f.write(f"{name}={text}\n")
