"""Decide which changed files should have been stored in LFS."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from lfs_warning.analysis.patterns import PatternSet, matches
from lfs_warning.probes import AttributeProber, TextProbe

LFS_POINTER_SIGNATURE = "version https://git-lfs.github.com/spec/v1"


@dataclass(frozen=True)
class ChangedFile:
    """A file touched by the pull request."""

    path: str
    blob_size: int | None = None
    patch: str | None = None


@dataclass
class ClassificationResult:
    """Flagged paths, one list per problem category."""

    oversized: list[str] = field(default_factory=list)
    misdeclared_lfs: list[str] = field(default_factory=list)
    suspected_binary: list[str] = field(default_factory=list)
    pattern_flagged: list[str] = field(default_factory=list)

    def buckets(self) -> list[list[str]]:
        """Buckets in reporting order."""
        return [
            self.oversized,
            self.misdeclared_lfs,
            self.suspected_binary,
            self.pattern_flagged,
        ]

    @property
    def is_empty(self) -> bool:
        return not any(self.buckets())


def has_pointer_signature(patch: str | None) -> bool:
    """Whether the diff shows an LFS pointer rather than real content."""
    return bool(patch) and LFS_POINTER_SIGNATURE in patch


def remove_excluded(
    files: Iterable[ChangedFile],
    exclusion_patterns: list[str],
    log: Callable[[str], None] | None = None,
) -> list[ChangedFile]:
    """Drop files matching any exclusion pattern."""
    kept = []
    for f in files:
        if matches(f.path, exclusion_patterns):
            if log:
                log(f"{f.path} has been excluded from LFS warning")
            continue
        kept.append(f)
    return kept


def classify_files(
    files: list[ChangedFile],
    patterns: PatternSet,
    threshold: int,
    attributes: AttributeProber,
    text_probe: TextProbe,
    log: Callable[[str], None] | None = None,
) -> ClassificationResult:
    """Sort changed files into the four problem buckets.

    Each file goes through size, LFS attribute and binary content checks
    in that order and lands in at most one of the first three buckets.
    Files matching an inclusion or binary pattern are then flagged when
    they are not LFS-filtered and were not already reported.

    Args:
        files: Changed files with blob sizes and patches.
        patterns: Exclusion, inclusion and binary-extension patterns.
        threshold: Size limit in bytes; larger blobs are oversized.
        attributes: Answers whether a path is LFS-filtered.
        text_probe: Answers whether a path's content looks binary.
        log: Optional sink for per-file diagnostics.
    """
    emit = log or (lambda _msg: None)
    candidates = remove_excluded(files, patterns.exclusion, emit)
    result = ClassificationResult()

    # The attribute lookup is needed by both passes, ask git once per path
    filtered_cache: dict[str, bool] = {}

    def is_filtered(path: str) -> bool:
        if path not in filtered_cache:
            filtered_cache[path] = attributes.is_lfs_filtered(path)
        return filtered_cache[path]

    for f in candidates:
        if f.blob_size is not None and f.blob_size > threshold:
            result.oversized.append(f.path)
            continue

        if is_filtered(f.path):
            if not has_pointer_signature(f.patch):
                emit(f"File is tracked in LFS but was checked in as content: {f.path}")
                result.misdeclared_lfs.append(f.path)
        elif text_probe.looks_binary(f.path):
            emit(f"File is considered binary but not LFS tracked: {f.path}")
            result.suspected_binary.append(f.path)

    already_flagged = set(result.oversized)
    already_flagged.update(result.misdeclared_lfs)
    already_flagged.update(result.suspected_binary)

    for f in candidates:
        in_inclusion = matches(f.path, patterns.inclusion)
        in_binary = matches(f.path, patterns.binary_extension)
        if not (in_inclusion or in_binary):
            continue
        if in_binary:
            emit(f"{f.path} matches a binary file extension pattern.")
        if f.path in already_flagged or is_filtered(f.path):
            continue
        emit(f"File matches a pattern but is not LFS tracked: {f.path}")
        result.pattern_flagged.append(f.path)
        already_flagged.add(f.path)

    return result
