"""Deterministic extern JS URI error contracts."""

from __future__ import annotations

from enum import StrEnum


class JsUriErrorCode(StrEnum):
    """Stable URI processing error codes."""

    MALFORMED_URI = "malformed_uri"


class JsUriError(RuntimeError):
    """URI processing failure with stable deterministic code."""

    def __init__(
        self,
        code: JsUriErrorCode,
        message: str,
        *,
        data: dict[str, object] | None = None,
    ) -> None:
        """Create URI processing failure.

        Args:
            code: Stable error code.
            message: Human-readable error message.
            data: Optional structured payload for diagnostics.
        """
        super().__init__(message)
        self.code = code
        self.data = data or {}


class MalformedUriError(JsUriError):
    """Raised when an inbound URI does not match the extern JS resource pattern."""

    def __init__(self, message: str, *, uri: str) -> None:
        """Create malformed-URI error.

        Args:
            message: Human-readable error message.
            uri: Offending inbound URI.
        """
        super().__init__(JsUriErrorCode.MALFORMED_URI, message, data={"uri": uri})
        self.uri = uri
