"""Parsing of the ``KEY=VALUE`` secrets list."""

import structlog
from pydantic import BaseModel, Field

from .errors import SecretsFormatError

logger = structlog.get_logger("secrets.parser")


class SecretEntry(BaseModel):
    """Desired state of one secret."""

    model_config = {"frozen": True}

    key: str
    value: str = Field(default="", repr=False)


def parse_secrets(raw: str) -> list[SecretEntry]:
    """Parse a comma-separated ``KEY=VALUE`` list.

    Segments are trimmed and empty ones dropped. Each segment is split on the
    first ``=``; a segment without ``=`` gets an empty value. When a key appears
    more than once the last value wins and the key keeps its first position.
    """
    positions: dict[str, int] = {}
    ordered: list[SecretEntry] = []

    for segment in (raw or "").split(","):
        segment = segment.strip()
        if not segment:
            continue

        key, _, value = segment.partition("=")
        entry = SecretEntry(key=key.strip(), value=value.strip())

        if entry.key in positions:
            logger.warning("Duplicate secret key, last value wins", key=entry.key)
            ordered[positions[entry.key]] = entry
            continue

        if entry.key:
            positions[entry.key] = len(ordered)
        ordered.append(entry)

    return ordered


def validate_entries(entries: list[SecretEntry]) -> None:
    """Fail before any remote call if an entry has an empty key."""
    for position, entry in enumerate(entries, start=1):
        if not entry.key:
            raise SecretsFormatError(
                f"Invalid secrets format: Found an entry with an empty key (entry {position})."
            )


def load_entries(raw: str) -> list[SecretEntry]:
    """Parse and validate in one step."""
    entries = parse_secrets(raw)
    validate_entries(entries)
    return entries
