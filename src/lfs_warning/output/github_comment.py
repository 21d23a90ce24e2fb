"""GitHub comment formatting for LFS warnings."""

from lfs_warning.analysis.file_classifier import ClassificationResult


def format_as_markdown(result: ClassificationResult, threshold: int) -> str:
    """Render non-empty buckets as GitHub-flavored markdown."""
    lines = []

    lines.append("## :warning: Possible file(s) that should be tracked in LFS detected :warning:")
    lines.append("")

    if result.oversized:
        lines.append(
            f"The following file(s) exceeds the file size limit: {threshold} bytes, "
            "as set in the .yml configuration files:"
        )
        lines.append("")
        lines.extend(_bullets(result.oversized))
        lines.append("")
        lines.append("Consider using git-lfs to manage large files.")
        lines.append("")

    if result.misdeclared_lfs:
        lines.append(
            "The following file(s) are tracked in LFS and were likely accidentally checked in:"
        )
        lines.append("")
        lines.extend(_bullets(result.misdeclared_lfs))
        lines.append("")
        lines.append("Install git-lfs locally and re-add these files so they are stored as pointers.")
        lines.append("")

    if result.suspected_binary:
        lines.append("The following file(s) look binary but are not tracked in LFS:")
        lines.append("")
        lines.extend(_bullets(result.suspected_binary))
        lines.append("")

    if result.pattern_flagged:
        lines.append(
            "The following file(s) match a configured LFS file pattern but are not tracked in LFS:"
        )
        lines.append("")
        lines.extend(_bullets(result.pattern_flagged))
        lines.append("")

    return "\n".join(lines).rstrip() + "\n"


def _bullets(paths: list[str]) -> list[str]:
    return [f"- `{p}`" for p in paths]


def flatten(result: ClassificationResult) -> list[str]:
    """All flagged paths in bucket order, without duplicates."""
    seen: set[str] = set()
    flat = []
    for bucket in result.buckets():
        for path in bucket:
            if path not in seen:
                seen.add(path)
                flat.append(path)
    return flat
