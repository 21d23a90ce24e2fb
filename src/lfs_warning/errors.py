"""Base error for the LFS warning check."""


class LfsWarningError(Exception):
    """Raised for any condition that should fail the check run."""
