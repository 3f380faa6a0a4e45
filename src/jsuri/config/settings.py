"""Extern JS URI settings models and loading helpers."""

from __future__ import annotations

import json
from enum import StrEnum
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jsuri.libraries import LibraryResolver
from jsuri.params import DEFAULT_CONTAINER
from jsuri.versioning import (
    ContentHashVersioner,
    NoOpVersioner,
    TimestampVersioner,
    Versioner,
)
from jsuri.versioning.content_hash import (
    DEFAULT_TOKEN_LENGTH,
    MAX_TOKEN_LENGTH,
    MIN_TOKEN_LENGTH,
)

DEFAULT_JS_PATH = "/gadgets/js"


class VersionerKind(StrEnum):
    """Supported versioner strategy identifiers."""

    CONTENT_HASH = "content_hash"
    TIMESTAMP = "timestamp"
    NOOP = "noop"
    NONE = "none"


class ContainerUriSettings(BaseModel):
    """Per-container overrides for where extern JS is served."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    js_host: str | None = None
    js_path: str | None = Field(default=None, pattern=r"^/")


class ResolvedUriSettings(BaseModel):
    """Effective host and path for one container."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    container: str
    js_host: str
    js_path: str


class JsUriSettings(BaseModel):
    """Root extern JS URI configuration model."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    default_container: str = Field(default=DEFAULT_CONTAINER, min_length=1)
    js_host: str = ""
    js_path: str = Field(default=DEFAULT_JS_PATH, pattern=r"^/")
    versioner: VersionerKind = VersionerKind.CONTENT_HASH
    token_length: int = Field(
        default=DEFAULT_TOKEN_LENGTH, ge=MIN_TOKEN_LENGTH, le=MAX_TOKEN_LENGTH
    )
    containers: dict[str, ContainerUriSettings] = Field(default_factory=dict)

    def for_container(self, container: str | None) -> ResolvedUriSettings:
        """Merge the container's overrides over the global defaults.

        Args:
            container: Container name; None selects ``default_container``.

        Returns:
            Effective settings. Unknown containers use the global defaults.
        """
        name = container or self.default_container
        override = self.containers.get(name, ContainerUriSettings())
        js_host = override.js_host if override.js_host is not None else self.js_host
        js_path = override.js_path if override.js_path is not None else self.js_path
        return ResolvedUriSettings(
            container=name,
            js_host=js_host.rstrip("/"),
            js_path=js_path.rstrip("/") or "/",
        )


class JsUriConfigError(RuntimeError):
    """Raised when URI config cannot be decoded or validated."""


def _decode_config_payload(path: Path) -> dict[str, object]:
    """Decode URI config payload from JSON or YAML.

    Args:
        path: Config file path.

    Returns:
        Parsed mapping payload.

    Raises:
        JsUriConfigError: If decode fails or payload is not an object.
    """
    raw = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise JsUriConfigError(f"Invalid URI config JSON: {exc}") from exc
    else:
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise JsUriConfigError(f"Invalid URI config YAML: {exc}") from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise JsUriConfigError("Invalid URI config payload: root must be an object")
    return payload


def load_js_uri_config(path: Path) -> JsUriSettings:
    """Load URI config from disk, defaulting when missing.

    Args:
        path: Config file path.

    Returns:
        Parsed config payload, or defaults when file does not exist.

    Raises:
        JsUriConfigError: If payload decode or validation fails.
    """
    if not path.exists():
        return JsUriSettings()
    payload = _decode_config_payload(path)
    try:
        return JsUriSettings.model_validate(payload)
    except ValidationError as exc:
        raise JsUriConfigError(f"Invalid URI config payload: {exc}") from exc


def build_versioner(
    settings: JsUriSettings, resolver: LibraryResolver
) -> Versioner | None:
    """Instantiate the configured versioner strategy.

    Args:
        settings: Loaded URI settings.
        resolver: Library-state source for fingerprinting.

    Returns:
        Versioner, or None when versioning is disabled.
    """
    if settings.versioner == VersionerKind.CONTENT_HASH:
        return ContentHashVersioner(resolver, token_length=settings.token_length)
    if settings.versioner == VersionerKind.TIMESTAMP:
        return TimestampVersioner(resolver)
    if settings.versioner == VersionerKind.NOOP:
        return NoOpVersioner()
    return None
