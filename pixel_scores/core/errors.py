"""Error taxonomy shared by the service and HTTP layers."""

from __future__ import annotations


class PixelScoresError(Exception):
    """Base class for errors raised by the score store."""


class InvalidInput(PixelScoresError):
    """Submission payload is malformed; nothing was persisted."""


class StorageError(PixelScoresError):
    """The database rejected or failed an operation."""


__all__ = ["InvalidInput", "PixelScoresError", "StorageError"]
