"""Last-modified timestamp versioner."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from jsuri.canonical import hash_payload, scope_payload
from jsuri.libraries import LibraryResolver
from jsuri.params import VersionVerdict

_LOGGER = logging.getLogger(__name__)
_SCOPE_CHARS = 8
_TOKEN_PATTERN = re.compile(rf"^\d+-[0-9a-f]{{{_SCOPE_CHARS}}}$")


class TimestampVersioner:
    """Token ``<newest mtime>-<fingerprint>`` over the requested libraries.

    The fingerprint hashes the scope together with every library's own
    modification time, so touching any one library changes the token even
    when a newer library still leads it. Content edits that keep a file's
    mtime are not detected.
    """

    def __init__(self, resolver: LibraryResolver) -> None:
        self._resolver = resolver

    def _mtimes(self, libs: Sequence[str]) -> list[int | None]:
        mtimes: list[int | None] = []
        for name in libs:
            state = self._resolver.resolve(name)
            mtimes.append(state.last_modified if state is not None else None)
        return mtimes

    def compute_version(
        self, gadget: str | None, container: str, libs: Sequence[str]
    ) -> str:
        mtimes = self._mtimes(libs)
        payload = scope_payload(gadget, container, libs)
        payload["mtimes"] = mtimes
        newest = max((mtime for mtime in mtimes if mtime is not None), default=0)
        return f"{newest}-{hash_payload(payload)[:_SCOPE_CHARS]}"

    def validate_version(
        self,
        gadget: str | None,
        container: str,
        libs: Sequence[str],
        token: str | None,
    ) -> VersionVerdict:
        if not token or not _TOKEN_PATTERN.match(token):
            return VersionVerdict.UNRECOGNIZED
        if token == self.compute_version(gadget, container, libs):
            return VersionVerdict.CURRENT
        _LOGGER.debug("Stale timestamp token %s for libs %s", token, list(libs))
        return VersionVerdict.STALE
