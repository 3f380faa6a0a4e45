"""Extern JS URI query vocabulary and closed status variants."""

from __future__ import annotations

from enum import StrEnum


class UriParam(StrEnum):
    """Query parameter keys shared by URI build and parse."""

    CONTAINER = "container"
    GADGET = "gadget"
    REFRESH = "refresh"
    DEBUG = "debug"
    NO_CACHE = "nocache"
    VERSION = "v"
    CONTAINER_MODE = "c"
    JSLOAD = "jsload"
    ONLOAD = "onload"
    NO_HINT = "nohint"
    LOADED_LIBS = "loaded"


class RenderingContext(StrEnum):
    """Embedding mode carried in the ``c`` query parameter."""

    GADGET = "0"
    CONTAINER = "1"
    CONFIGURED_GADGET = "2"

    @classmethod
    def from_param(cls, value: str | None) -> RenderingContext:
        """Map a raw ``c`` value to a context, defaulting to ``GADGET``.

        Args:
            value: Raw query parameter value, or None when absent.

        Returns:
            Matching rendering context.
        """
        if value is None:
            return cls.GADGET
        try:
            return cls(value)
        except ValueError:
            return cls.GADGET


class ValidityStatus(StrEnum):
    """Cache validity attached to an inbound request."""

    VALID_VERSIONED = "valid_versioned"
    VALID_UNVERSIONED = "valid_unversioned"
    INVALID_VERSION = "invalid_version"
    MALFORMED = "malformed"


class VersionVerdict(StrEnum):
    """Outcome of checking a presented version token."""

    CURRENT = "current"
    STALE = "stale"
    UNRECOGNIZED = "unrecognized"


FLAG_ON = "1"
FLAG_OFF = "0"
LIB_DELIMITER = ":"
LOADED_DELIMITER = "!"
JS_SUFFIX = ".js"
DEFAULT_CONTAINER = "default"
