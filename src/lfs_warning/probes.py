"""Per-path probes backed by git and grep.

The classifier only depends on the two protocols below; the concrete
probes shell out to the working tree checked out at the commit under test.
"""

import subprocess
from pathlib import Path
from typing import Protocol

from lfs_warning.errors import LfsWarningError

LFS_FILTER_NAME = "lfs"

# Bytes read by ContentTextProbe, same window grep uses for its binary check
SNIFF_BYTES = 8192


class ProbeFailureError(LfsWarningError):
    """Raised when a probe could not produce an answer for a path."""

    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class AttributeProber(Protocol):
    """Answers whether a path is declared as LFS-filtered."""

    def is_lfs_filtered(self, path: str) -> bool: ...


class TextProbe(Protocol):
    """Answers whether a path's content looks binary."""

    def looks_binary(self, path: str) -> bool: ...


def _run(args: list[str], path: str, cwd: Path) -> subprocess.CompletedProcess:
    try:
        return subprocess.run(
            args,
            capture_output=True,
            text=True,
            cwd=cwd,
        )
    except (FileNotFoundError, PermissionError) as e:
        raise ProbeFailureError(f"Could not run {args[0]}: {e}", path) from e


class GitAttributeProber:
    """Reads the ``filter`` attribute with ``git check-attr``."""

    def __init__(self, workdir: Path | str = "."):
        self.workdir = Path(workdir)

    def is_lfs_filtered(self, path: str) -> bool:
        result = _run(["git", "check-attr", "filter", "--", path], path, self.workdir)
        if result.returncode != 0:
            raise ProbeFailureError(
                f"git check-attr failed for {path}: {result.stderr.strip()}", path
            )
        return parse_filter_attribute(result.stdout) == LFS_FILTER_NAME


def parse_filter_attribute(output: str) -> str | None:
    """Extract the filter value from ``git check-attr filter`` output.

    Output lines look like ``<path>: filter: lfs``. Returns None when the
    attribute is ``unspecified`` or ``unset``.
    """
    for line in output.splitlines():
        _, sep, value = line.rpartition(": filter: ")
        if not sep:
            continue
        value = value.strip()
        if value in ("unspecified", "unset"):
            return None
        return value
    return None


class GrepTextProbe:
    """Uses ``grep -IL .`` to list files that contain no text lines.

    Paths missing from the working tree are reported as not binary.

    grep exits 1 when it lists nothing, which just means the file is text.
    Exit status 2 or above is an actual error.
    """

    def __init__(self, workdir: Path | str = "."):
        self.workdir = Path(workdir)

    def looks_binary(self, path: str) -> bool:
        # Deleted in the pull request, nothing left to inspect
        if not (self.workdir / path).exists():
            return False
        result = _run(["grep", "-IL", ".", "--", path], path, self.workdir)
        if result.returncode > 1:
            raise ProbeFailureError(
                f"grep failed for {path}: {result.stderr.strip()}", path
            )
        return path in result.stdout.splitlines()


class ContentTextProbe:
    """Native NUL-byte heuristic, no external process.

    Paths missing from the working tree are reported as not binary.
    """

    def __init__(self, workdir: Path | str = "."):
        self.workdir = Path(workdir)

    def looks_binary(self, path: str) -> bool:
        try:
            with open(self.workdir / path, "rb") as fh:
                chunk = fh.read(SNIFF_BYTES)
        except FileNotFoundError:
            return False
        except OSError as e:
            raise ProbeFailureError(f"Could not read {path}: {e}", path) from e
        # grep -IL also lists empty files, keep the same answer
        return not chunk or b"\0" in chunk


def build_text_probe(kind: str, workdir: Path | str = ".") -> TextProbe:
    """Create the text probe named in configuration."""
    if kind == "grep":
        return GrepTextProbe(workdir)
    if kind == "native":
        return ContentTextProbe(workdir)
    raise ValueError(f"Unknown binary_probe {kind!r}: expected 'grep' or 'native'")
