"""Stable hashing of version scopes and library bodies."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping, Sequence

from pydantic import JsonValue


def sha256_bytes(data: bytes) -> str:
    """Return the hex SHA-256 digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


def hash_payload(payload: Mapping[str, JsonValue]) -> str:
    """Hash a JSON mapping independently of its key order.

    Keys are sorted and separators compacted before hashing, so two payloads
    with equal content always share a digest. NaN and infinities are refused.

    Args:
        payload: JSON-ready mapping.

    Returns:
        Hex-encoded SHA-256 digest.

    Raises:
        ValueError: If the payload holds a non-finite float.
    """
    raw = json.dumps(
        payload,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return sha256_bytes(raw.encode("utf-8"))


def scope_payload(
    gadget: str | None, container: str, libs: Sequence[str]
) -> dict[str, JsonValue]:
    """Build the mapping that identifies a version token's scope.

    Library order is kept, so ``a:b`` and ``b:a`` are distinct scopes.
    """
    return {"gadget": gadget, "container": container, "libs": list(libs)}
