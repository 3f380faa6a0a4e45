"""Versioned extern JS URI generation and cache validation."""

from jsuri.config import JsUriConfigError, JsUriSettings, load_js_uri_config
from jsuri.errors import JsUriError, JsUriErrorCode, MalformedUriError
from jsuri.libraries import (
    DirectoryLibraryRegistry,
    InMemoryLibraryRegistry,
    LibraryResolver,
    LibraryState,
)
from jsuri.manager import JsUriManager
from jsuri.models import JsRequest, ProxyRequestBase
from jsuri.params import RenderingContext, UriParam, ValidityStatus, VersionVerdict
from jsuri.versioning import (
    ContentHashVersioner,
    NoOpVersioner,
    TimestampVersioner,
    Versioner,
)

__all__ = [
    "ContentHashVersioner",
    "DirectoryLibraryRegistry",
    "InMemoryLibraryRegistry",
    "JsRequest",
    "JsUriConfigError",
    "JsUriError",
    "JsUriErrorCode",
    "JsUriManager",
    "JsUriSettings",
    "LibraryResolver",
    "LibraryState",
    "MalformedUriError",
    "NoOpVersioner",
    "ProxyRequestBase",
    "RenderingContext",
    "TimestampVersioner",
    "UriParam",
    "ValidityStatus",
    "VersionVerdict",
    "Versioner",
    "load_js_uri_config",
]
