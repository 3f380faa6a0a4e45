"""Library-state resolution consumed by versioners."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field

from jsuri.canonical import sha256_bytes
from jsuri.params import JS_SUFFIX

_LOGGER = logging.getLogger(__name__)


class LibraryState(BaseModel):
    """Point-in-time fingerprint of one script library."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(min_length=1)
    digest: str = Field(min_length=1)
    last_modified: int = Field(default=0, ge=0)


class LibraryResolver(Protocol):
    """Source of current library state, keyed by library name."""

    def resolve(self, name: str) -> LibraryState | None:
        """Return current state for ``name``, or None when the library is unknown.

        Args:
            name: Library name as it appears in a request.
        """


class InMemoryLibraryRegistry:
    """Resolver backed by an in-process mapping of library contents.

    Each ``register`` call swaps in a new immutable ``LibraryState``; readers
    never observe a partially updated entry.
    """

    def __init__(self, contents: Mapping[str, str | bytes] | None = None) -> None:
        """Seed registry with initial library contents.

        Args:
            contents: Optional mapping of library name to script body.
        """
        self._states: dict[str, LibraryState] = {}
        for name, body in (contents or {}).items():
            self.register(name, body)

    def register(
        self, name: str, content: str | bytes, *, last_modified: int | None = None
    ) -> LibraryState:
        """Register or replace a library body.

        Args:
            name: Library name.
            content: Script body.
            last_modified: Epoch seconds; defaults to now.

        Returns:
            The state now served for ``name``.
        """
        raw = content.encode("utf-8") if isinstance(content, str) else content
        state = LibraryState(
            name=name,
            digest=sha256_bytes(raw),
            last_modified=int(time.time()) if last_modified is None else last_modified,
        )
        self._states[name] = state
        return state

    def unregister(self, name: str) -> None:
        self._states.pop(name, None)

    def resolve(self, name: str) -> LibraryState | None:
        return self._states.get(name)


class DirectoryLibraryRegistry:
    """Resolver reading ``<root>/<name>.js`` files on each lookup."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def _path_for(self, name: str) -> Path | None:
        try:
            candidate = (self._root / f"{name}{JS_SUFFIX}").resolve()
            root = self._root.resolve()
        except (OSError, ValueError) as exc:
            _LOGGER.warning("Unusable library name %r: %s", name, exc)
            return None
        if not candidate.is_relative_to(root):
            _LOGGER.warning("Library name escapes library root: %s", name)
            return None
        return candidate

    def resolve(self, name: str) -> LibraryState | None:
        """Fingerprint the library file for ``name``.

        Args:
            name: Library name; resolved relative to the registry root.

        Returns:
            Library state, or None when no readable file exists.
        """
        path = self._path_for(name)
        if path is None or not path.is_file():
            return None
        try:
            raw = path.read_bytes()
            mtime = int(path.stat().st_mtime)
        except OSError as exc:
            _LOGGER.warning("Unable to read library %s: %s", path, exc)
            return None
        return LibraryState(name=name, digest=sha256_bytes(raw), last_modified=mtime)
