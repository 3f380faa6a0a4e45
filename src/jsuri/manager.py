"""Build and interpret versioned extern JS URIs."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import NoReturn
from urllib.parse import (
    SplitResult,
    parse_qs,
    quote,
    unquote,
    urlencode,
    urlsplit,
    urlunsplit,
)

from jsuri.config import JsUriSettings, ResolvedUriSettings
from jsuri.errors import MalformedUriError
from jsuri.models import JsRequest, ProxyRequestBase
from jsuri.params import (
    FLAG_OFF,
    FLAG_ON,
    JS_SUFFIX,
    LIB_DELIMITER,
    LOADED_DELIMITER,
    RenderingContext,
    UriParam,
    ValidityStatus,
    VersionVerdict,
)
from jsuri.versioning import Versioner

_LOGGER = logging.getLogger(__name__)
_VERDICT_STATUS = {
    VersionVerdict.CURRENT: ValidityStatus.VALID_VERSIONED,
    VersionVerdict.STALE: ValidityStatus.INVALID_VERSION,
    VersionVerdict.UNRECOGNIZED: ValidityStatus.VALID_UNVERSIONED,
}
_DEFAULT_PORTS = {"http": 80, "https": 443}


def _join_libs(libs: Iterable[str]) -> str:
    return LIB_DELIMITER.join(quote(lib, safe="") for lib in libs)


def _split_libs(segment: str) -> list[str]:
    return [unquote(part) for part in segment.split(LIB_DELIMITER) if part]


def _flag(value: bool) -> str:
    return FLAG_ON if value else FLAG_OFF


def _split_host(js_host: str) -> tuple[str, str]:
    """Return ``(scheme, netloc)`` for a configured host.

    Hosts may be given as ``https://cdn.example.com``, ``//cdn.example.com``
    or a bare ``cdn.example.com``.
    """
    if not js_host:
        return "", ""
    if "//" not in js_host:
        return "", js_host
    parts = urlsplit(js_host)
    return parts.scheme, parts.netloc


class JsUriManager:
    """Generate extern JS URIs and classify them when they come back.

    Holds only construction-time configuration, so one instance can be shared
    by every concurrent request.
    """

    def __init__(
        self,
        settings: JsUriSettings | None = None,
        versioner: Versioner | None = None,
    ) -> None:
        """Create manager.

        Args:
            settings: Host and path configuration; defaults when omitted.
            versioner: Optional version token strategy.
        """
        self._settings = settings or JsUriSettings()
        self._versioner = versioner

    @property
    def settings(self) -> JsUriSettings:
        return self._settings

    @property
    def versioner(self) -> Versioner | None:
        return self._versioner

    def make_extern_uri(self, request: JsRequest) -> str:
        """Build the extern JS URI for ``request``.

        ``loaded_libs`` never affects the generated URI, and no version is
        attached when the request asks to bypass caches.

        Args:
            request: Outbound request descriptor.

        Returns:
            Absolute or host-relative URI without a fragment.
        """
        resolved = self._settings.for_container(request.container)
        path = f"{self._path_root(resolved)}{_join_libs(request.libs)}{JS_SUFFIX}"

        query: list[tuple[str, str]] = [
            (UriParam.CONTAINER, request.container),
            (UriParam.NO_CACHE, _flag(request.no_cache)),
            (UriParam.DEBUG, _flag(request.debug)),
            (UriParam.CONTAINER_MODE, request.context.value),
        ]
        if request.gadget is not None:
            query.append((UriParam.GADGET, request.gadget))
        if request.onload is not None:
            query.append((UriParam.ONLOAD, request.onload))
        if request.jsload:
            query.append((UriParam.JSLOAD, FLAG_ON))
        if request.nohint:
            query.append((UriParam.NO_HINT, FLAG_ON))
        if request.refresh is not None:
            query.append((UriParam.REFRESH, str(request.refresh)))
        if self._versioner is not None and not request.no_cache:
            token = self._versioner.compute_version(
                request.gadget, request.container, request.libs
            )
            if token:
                query.append((UriParam.VERSION, token))

        scheme, netloc = _split_host(resolved.js_host)
        uri = urlunsplit((scheme, netloc, path, urlencode(query), ""))
        _LOGGER.debug("Built extern JS uri %s", uri)
        return uri

    def process_extern_uri(self, uri: str) -> JsRequest:
        """Parse an inbound extern JS URI and attach its cache validity.

        Args:
            uri: URI as re-presented by a client or cache.

        Returns:
            Inbound request with ``status`` and ``orig_uri`` set.

        Raises:
            MalformedUriError: If the URI does not address the extern JS
                resource for its container.
        """
        try:
            parts = urlsplit(uri)
            params = parse_qs(parts.query, keep_blank_values=True)
        except ValueError as exc:
            self._reject(uri, f"Unparsable extern JS uri: {exc}")

        def first(key: UriParam) -> str | None:
            values = params.get(key)
            return values[0] if values else None

        container = first(UriParam.CONTAINER) or self._settings.default_container
        resolved = self._settings.for_container(container)
        libs, loaded = self._parse_path(uri, parts, resolved)
        libs = list(dict.fromkeys(libs))
        loaded.update(_split_libs(first(UriParam.LOADED_LIBS) or ""))

        malformed = False
        refresh: int | None = None
        raw_refresh = first(UriParam.REFRESH)
        if raw_refresh is not None:
            if raw_refresh.isascii() and raw_refresh.isdigit():
                refresh = int(raw_refresh)
            else:
                malformed = True

        base = ProxyRequestBase(
            container=container,
            gadget=first(UriParam.GADGET) or None,
            refresh=refresh,
            debug=first(UriParam.DEBUG) == FLAG_ON,
            no_cache=first(UriParam.NO_CACHE) == FLAG_ON,
        )

        if malformed:
            status = ValidityStatus.MALFORMED
            _LOGGER.warning("Malformed refresh value %r in %s", raw_refresh, uri)
        else:
            status = self._validate(base, libs, first(UriParam.VERSION))

        request = JsRequest(
            libs=libs,
            loaded_libs=frozenset(loaded),
            context=RenderingContext.from_param(first(UriParam.CONTAINER_MODE)),
            onload=first(UriParam.ONLOAD) or None,
            jsload=first(UriParam.JSLOAD) == FLAG_ON,
            nohint=first(UriParam.NO_HINT) == FLAG_ON,
            orig_uri=uri,
            status=status,
            base=base,
        )
        _LOGGER.debug("Processed extern JS uri %s -> %s", uri, status)
        return request

    @staticmethod
    def _path_root(resolved: ResolvedUriSettings) -> str:
        if resolved.js_path == "/":
            return "/"
        return f"{resolved.js_path}/"

    def _check_host(
        self, uri: str, parts: SplitResult, resolved: ResolvedUriSettings
    ) -> None:
        """Reject an authority other than the container's configured host.

        Hostnames compare case-insensitively; a missing port stands for the
        scheme's default port.
        """
        if not parts.netloc or not resolved.js_host:
            return
        scheme, netloc = _split_host(resolved.js_host)
        expected = urlsplit(f"//{netloc}")
        try:
            port = parts.port or _DEFAULT_PORTS.get(parts.scheme)
            expected_port = expected.port or _DEFAULT_PORTS.get(scheme)
        except ValueError as exc:
            self._reject(uri, f"Invalid port in extern JS uri: {exc}")
        if parts.hostname != expected.hostname:
            self._reject(uri, f"Unexpected host {parts.netloc!r} for extern JS uri")
        if port is not None and expected_port is not None and port != expected_port:
            self._reject(uri, f"Unexpected port {port} for extern JS uri")

    def _parse_path(
        self, uri: str, parts: SplitResult, resolved: ResolvedUriSettings
    ) -> tuple[list[str], set[str]]:
        """Extract requested and already-loaded libraries from the path.

        Raises:
            MalformedUriError: On host mismatch, foreign prefix or missing suffix.
        """
        self._check_host(uri, parts, resolved)
        path = parts.path
        if not path:
            self._reject(uri, "Extern JS uri has no path")
        root = self._path_root(resolved)
        if not path.startswith(root):
            self._reject(uri, f"Extern JS path must start with {root!r}")
        body = path[len(root) :]
        if not body.endswith(JS_SUFFIX):
            self._reject(uri, f"Extern JS path must end with {JS_SUFFIX!r}")
        body = body[: -len(JS_SUFFIX)]
        libs_segment, _, loaded_segment = body.partition(LOADED_DELIMITER)
        return _split_libs(libs_segment), set(_split_libs(loaded_segment))

    @staticmethod
    def _reject(uri: str, message: str) -> NoReturn:
        _LOGGER.warning("%s: %s", message, uri)
        raise MalformedUriError(message, uri=uri)

    def _validate(
        self, base: ProxyRequestBase, libs: list[str], token: str | None
    ) -> ValidityStatus:
        if self._versioner is None or not token:
            return ValidityStatus.VALID_UNVERSIONED
        verdict = self._versioner.validate_version(
            base.gadget, base.container, libs, token
        )
        if verdict == VersionVerdict.STALE:
            _LOGGER.debug("Stale version %s for libs %s", token, libs)
        return _VERDICT_STATUS[verdict]
