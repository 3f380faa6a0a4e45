"""Versioner that never asserts a version."""

from __future__ import annotations

from collections.abc import Sequence

from jsuri.params import VersionVerdict


class NoOpVersioner:
    """Emit no token and treat every presented token as unrecognized."""

    def compute_version(
        self, gadget: str | None, container: str, libs: Sequence[str]
    ) -> str:
        return ""

    def validate_version(
        self,
        gadget: str | None,
        container: str,
        libs: Sequence[str],
        token: str | None,
    ) -> VersionVerdict:
        return VersionVerdict.UNRECOGNIZED
