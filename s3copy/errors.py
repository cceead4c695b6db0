"""Exception hierarchy for s3copy."""

from typing import Any, Dict, Optional


class CopyError(Exception):
    """Base error; the dispatcher turns it into a non-zero exit status."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class UsageError(CopyError):
    """The invocation itself is wrong; nothing was transferred."""


class TransferError(CopyError):
    """A local or remote I/O operation failed."""
