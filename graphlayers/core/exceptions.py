"""Common exception base class.

Every error raised by graphlayers derives from :class:`GraphLayersError`, so
callers can catch the whole family with a single ``except`` clause.
"""

from __future__ import annotations

from typing import Any


class GraphLayersError(Exception):
    """Base exception for all graphlayers errors.

    Attributes:
        message: Human-readable error message.
        error_code: Machine-readable error code.
        details: Additional error context as dictionary.
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


__all__ = [
    "GraphLayersError",
]
