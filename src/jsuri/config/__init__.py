"""Extern JS URI configuration loading."""

from jsuri.config.settings import (
    DEFAULT_JS_PATH,
    ContainerUriSettings,
    JsUriConfigError,
    JsUriSettings,
    ResolvedUriSettings,
    VersionerKind,
    build_versioner,
    load_js_uri_config,
)

__all__ = [
    "DEFAULT_JS_PATH",
    "ContainerUriSettings",
    "JsUriConfigError",
    "JsUriSettings",
    "ResolvedUriSettings",
    "VersionerKind",
    "build_versioner",
    "load_js_uri_config",
]
