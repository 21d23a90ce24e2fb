"""Glob pattern matching for exclusion, inclusion and binary patterns."""

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import lru_cache

from lfs_warning.errors import LfsWarningError


class InvalidPatternError(LfsWarningError):
    """Raised when a configured glob cannot be compiled."""

    def __init__(self, message: str, pattern: str):
        super().__init__(message)
        self.pattern = pattern


@dataclass
class PatternSet:
    """The three pattern lists a check run is configured with."""

    exclusion: list[str] = field(default_factory=list)
    inclusion: list[str] = field(default_factory=list)
    binary_extension: list[str] = field(default_factory=list)

    def validate(self) -> None:
        """Compile every pattern, raising InvalidPatternError on the first bad one."""
        for pattern in [*self.exclusion, *self.inclusion, *self.binary_extension]:
            if pattern.strip():
                compile_pattern(pattern)


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` groups into separate patterns.

    Nested groups are expanded innermost-last; a brace without a matching
    close or without a comma is kept literally.
    """
    depth = 0
    start = -1
    for i, char in enumerate(pattern):
        if char == "{":
            if depth == 0:
                start = i
            depth += 1
        elif char == "}" and depth > 0:
            depth -= 1
            if depth == 0:
                options = _split_top_level(pattern[start + 1:i])
                if len(options) < 2:
                    continue
                prefix, suffix = pattern[:start], pattern[i + 1:]
                expanded = []
                for option in options:
                    expanded.extend(expand_braces(prefix + option + suffix))
                return expanded
    return [pattern]


def _split_top_level(body: str) -> list[str]:
    """Split a brace body on commas that are not inside a nested group."""
    parts = []
    depth = 0
    current = []
    for char in body:
        if char == "," and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
        current.append(char)
    parts.append("".join(current))
    return parts


def _translate(pattern: str) -> str:
    """Translate a single brace-free glob into a regular expression."""
    out = []
    i = 0
    n = len(pattern)
    while i < n:
        char = pattern[i]
        if char == "*":
            if pattern.startswith("**", i):
                at_segment_start = i == 0 or pattern[i - 1] == "/"
                i += 2
                if at_segment_start and i < n and pattern[i] == "/":
                    # "**/" matches zero or more whole directories
                    out.append("(?:.*/)?")
                    i += 1
                else:
                    out.append(".*")
                continue
            out.append("[^/]*")
        elif char == "?":
            out.append("[^/]")
        elif char == "[":
            end = pattern.find("]", i + 2)
            if end == -1:
                out.append(re.escape(char))
            else:
                body = pattern[i + 1:end]
                if body.startswith("!"):
                    body = "^" + body[1:]
                out.append("[" + body.replace("\\", "\\\\") + "]")
                i = end
        else:
            out.append(re.escape(char))
        i += 1
    return "".join(out)


@lru_cache(maxsize=512)
def compile_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a glob (with brace groups) into an anchored regex."""
    alternatives = [_translate(p) for p in expand_braces(pattern.strip())]
    try:
        return re.compile(r"\A(?:" + "|".join(alternatives) + r")\Z")
    except re.error as e:
        raise InvalidPatternError(f"Invalid glob pattern {pattern!r}: {e}", pattern) from e


def matches(path: str, patterns: Sequence[str]) -> bool:
    """Return True if ``path`` matches any of ``patterns``.

    An empty pattern list never matches.
    """
    if not patterns:
        return False
    normalized = path.replace("\\", "/").lstrip("/")
    return any(compile_pattern(p).match(normalized) for p in patterns if p.strip())
