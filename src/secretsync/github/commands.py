"""GitHub Actions workflow commands and step outputs."""

import json
import os
import sys
import uuid
from pathlib import Path
from typing import Any, Optional, TextIO


def to_command_value(value: Any) -> str:
    """Serialise a value the way the Actions toolkit does."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(",", ":"))


def escape_data(value: Any) -> str:
    return to_command_value(value).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: Any) -> str:
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def issue_command(command: str, message: Any = "", properties: Optional[dict] = None, stream: Optional[TextIO] = None) -> None:
    """Print ``::command prop=value::message`` to stdout."""
    stream = stream or sys.stdout
    rendered = ""
    if properties:
        rendered = " " + ",".join(f"{k}={escape_property(v)}" for k, v in properties.items() if v is not None)
    print(f"::{command}{rendered}::{escape_data(message)}", file=stream, flush=True)


def set_output(name: str, value: Any, path: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    """Record a step output.

    Appends to the GITHUB_OUTPUT file using a random heredoc delimiter; without
    an output file the legacy ``set-output`` command is printed instead.
    """
    path = path or os.environ.get("GITHUB_OUTPUT")
    serialized = to_command_value(value)

    if not path:
        issue_command("set-output", serialized, {"name": name}, stream=stream)
        return

    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in serialized:
        raise ValueError("Unexpected input: output value contains the delimiter")

    with Path(path).open("a", encoding="utf-8") as fh:
        fh.write(f"{name}<<{delimiter}\n{serialized}\n{delimiter}\n")


def set_failed(message: str, stream: Optional[TextIO] = None) -> int:
    """Emit an error annotation and return the failing exit code."""
    issue_command("error", message, stream=stream)
    return 1
