"""Content-digest versioner."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from jsuri.canonical import hash_payload, scope_payload
from jsuri.libraries import LibraryResolver
from jsuri.params import VersionVerdict

_LOGGER = logging.getLogger(__name__)
MIN_TOKEN_LENGTH = 8
MAX_TOKEN_LENGTH = 64
DEFAULT_TOKEN_LENGTH = 32


class ContentHashVersioner:
    """Fingerprint the scope together with every requested library's digest.

    Unknown libraries contribute a null digest, so registering one later
    changes the token.
    """

    def __init__(
        self, resolver: LibraryResolver, *, token_length: int = DEFAULT_TOKEN_LENGTH
    ) -> None:
        """Create versioner.

        Args:
            resolver: Library-state source.
            token_length: Hex characters of the SHA-256 digest kept in tokens.

        Raises:
            ValueError: If ``token_length`` is outside 8..64.
        """
        if not MIN_TOKEN_LENGTH <= token_length <= MAX_TOKEN_LENGTH:
            raise ValueError(
                f"token_length must be between {MIN_TOKEN_LENGTH} and "
                f"{MAX_TOKEN_LENGTH}, got {token_length}"
            )
        self._resolver = resolver
        self._token_length = token_length
        self._token_pattern = re.compile(rf"^[0-9a-f]{{{token_length}}}$")

    def compute_version(
        self, gadget: str | None, container: str, libs: Sequence[str]
    ) -> str:
        digests: list[str | None] = []
        for name in libs:
            state = self._resolver.resolve(name)
            digests.append(state.digest if state is not None else None)
        payload = scope_payload(gadget, container, libs)
        payload["digests"] = digests
        return hash_payload(payload)[: self._token_length]

    def validate_version(
        self,
        gadget: str | None,
        container: str,
        libs: Sequence[str],
        token: str | None,
    ) -> VersionVerdict:
        if not token or not self._token_pattern.match(token):
            return VersionVerdict.UNRECOGNIZED
        if token == self.compute_version(gadget, container, libs):
            return VersionVerdict.CURRENT
        _LOGGER.debug("Stale content token %s for libs %s", token, list(libs))
        return VersionVerdict.STALE
