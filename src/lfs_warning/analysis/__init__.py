"""Size limit parsing, pattern matching and file classification."""

from lfs_warning.analysis.file_classifier import (
    LFS_POINTER_SIGNATURE,
    ChangedFile,
    ClassificationResult,
    classify_files,
)
from lfs_warning.analysis.patterns import InvalidPatternError, PatternSet, matches
from lfs_warning.analysis.size_limit import InvalidThresholdError, parse_size_limit

__all__ = [
    "LFS_POINTER_SIGNATURE",
    "ChangedFile",
    "ClassificationResult",
    "classify_files",
    "InvalidPatternError",
    "PatternSet",
    "matches",
    "InvalidThresholdError",
    "parse_size_limit",
]
