"""Extern JS request descriptors."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from jsuri.params import DEFAULT_CONTAINER, RenderingContext, ValidityStatus

# Blank names and callbacks are not representable in an extern URI.
NonEmptyStr = Annotated[str, Field(min_length=1)]


def _ordered_unique(names: Iterable[str]) -> tuple[str, ...]:
    """Collapse repeated names, keeping first-seen order."""
    seen: dict[str, None] = {}
    for name in names:
        seen.setdefault(name, None)
    return tuple(seen)


class ProxyRequestBase(BaseModel):
    """Scalar fields shared by every proxied resource request."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    container: str = Field(default=DEFAULT_CONTAINER, min_length=1)
    gadget: NonEmptyStr | None = None
    refresh: int | None = Field(default=None, ge=0)
    debug: bool = False
    no_cache: bool = False


class JsRequest(BaseModel):
    """Immutable description of one extern JS bundle request.

    Outbound requests are built by callers that want to link to a bundle and
    carry no ``status`` or ``orig_uri``. Inbound requests are produced by
    ``JsUriManager.process_extern_uri`` and always carry both.

    Only ``jsload`` and ``nohint`` may be adjusted after construction, and
    only through ``with_jsload``/``with_nohint`` which return a new value.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    libs: tuple[NonEmptyStr, ...] = ()
    loaded_libs: frozenset[NonEmptyStr] = frozenset()
    context: RenderingContext = RenderingContext.GADGET
    onload: NonEmptyStr | None = None
    jsload: bool = False
    nohint: bool = False
    orig_uri: str | None = None
    status: ValidityStatus | None = None
    base: ProxyRequestBase = Field(default_factory=ProxyRequestBase)

    @field_validator("libs", mode="before")
    @classmethod
    def _normalize_libs(cls, value: object) -> object:
        if value is None:
            return ()
        if isinstance(value, str):
            raise ValueError("libs must be a sequence of library names")
        if isinstance(value, Iterable):
            return _ordered_unique(value)
        return value

    @field_validator("loaded_libs", mode="before")
    @classmethod
    def _normalize_loaded_libs(cls, value: object) -> object:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            raise ValueError("loaded_libs must be a collection of library names")
        return value

    @property
    def container(self) -> str:
        return self.base.container

    @property
    def gadget(self) -> str | None:
        return self.base.gadget

    @property
    def refresh(self) -> int | None:
        return self.base.refresh

    @property
    def debug(self) -> bool:
        return self.base.debug

    @property
    def no_cache(self) -> bool:
        return self.base.no_cache

    def with_jsload(self, jsload: bool) -> JsRequest:
        """Return a copy with the deferred-load flag replaced.

        Args:
            jsload: Whether the bundle should be fetched asynchronously.

        Returns:
            Updated request; ``self`` when the flag is unchanged.
        """
        if jsload == self.jsload:
            return self
        return self.model_copy(update={"jsload": jsload})

    def with_nohint(self, nohint: bool) -> JsRequest:
        """Return a copy with the suppress-hint flag replaced.

        Args:
            nohint: Whether optional client hints are omitted.

        Returns:
            Updated request; ``self`` when the flag is unchanged.
        """
        if nohint == self.nohint:
            return self
        return self.model_copy(update={"nohint": nohint})

    def delta_libs(self) -> tuple[str, ...]:
        """Requested libraries the client has not already loaded."""
        return tuple(lib for lib in self.libs if lib not in self.loaded_libs)
