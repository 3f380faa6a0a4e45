"""Versioner contract for extern JS URIs."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from jsuri.params import VersionVerdict


class Versioner(Protocol):
    """Computes and validates version tokens for a library set.

    Tokens are scoped to ``(gadget, container, libs)``. Implementations are
    pure functions of externally observed library state and must be safe to
    call concurrently without locking.
    """

    def compute_version(
        self, gadget: str | None, container: str, libs: Sequence[str]
    ) -> str:
        """Return the current version token for the scope.

        Args:
            gadget: Originating gadget identity, if any.
            container: Container the bundle is served for.
            libs: Requested libraries in request order.
        """

    def validate_version(
        self,
        gadget: str | None,
        container: str,
        libs: Sequence[str],
        token: str | None,
    ) -> VersionVerdict:
        """Classify a presented token against current state.

        Args:
            gadget: Originating gadget identity, if any.
            container: Container the bundle is served for.
            libs: Requested libraries in request order.
            token: Token taken from an inbound URI; may be absent or garbage.
        """
