"""Output module for comments and workflow console messages."""

from lfs_warning.output.github_comment import flatten, format_as_markdown

__all__ = ["flatten", "format_as_markdown"]
