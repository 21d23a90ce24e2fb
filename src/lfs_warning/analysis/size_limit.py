"""Parse human-entered file size limits into byte counts."""

import re

from lfs_warning.errors import LfsWarningError

DEFAULT_FILE_SIZE_LIMIT = "10mb"

UNIT_MULTIPLIERS: dict[str, int] = {
    "b": 1,
    "kb": 1024,
    "mb": 1024 * 1024,
    "gb": 1024 * 1024 * 1024,
}

_SIZE_PATTERN = re.compile(r"^\s*(\d+)\s*([kmg]?b)?\s*$", re.IGNORECASE)


class InvalidThresholdError(LfsWarningError):
    """Raised when a file size limit cannot be parsed."""


def parse_size_limit(value: str) -> int:
    """Convert a size limit such as ``"10mb"`` or ``"500"`` to bytes.

    Accepts a non-negative integer optionally followed by ``b``, ``kb``,
    ``mb`` or ``gb`` (case-insensitive). Units are binary multiples.

    Raises:
        InvalidThresholdError: If the value is not an integer with an
            optional recognized unit.
    """
    match = _SIZE_PATTERN.match(value or "")
    if not match:
        raise InvalidThresholdError(
            f"Invalid filesizelimit {value!r}: expected an integer optionally "
            "followed by b, kb, mb or gb (e.g. 500, 5b, 250kb, 10mb)"
        )

    number, unit = match.groups()
    multiplier = UNIT_MULTIPLIERS[unit.lower()] if unit else 1
    return int(number) * multiplier
