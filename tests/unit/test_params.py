"""Unit tests for URI vocabulary enums."""

from __future__ import annotations

import pytest

from jsuri.params import RenderingContext, UriParam


@pytest.mark.unit
@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, RenderingContext.GADGET),
        ("0", RenderingContext.GADGET),
        ("1", RenderingContext.CONTAINER),
        ("2", RenderingContext.CONFIGURED_GADGET),
        ("", RenderingContext.GADGET),
        ("container", RenderingContext.GADGET),
    ],
)
def test_rendering_context_from_param(
    raw: str | None, expected: RenderingContext
) -> None:
    """Unknown or absent container-mode values fall back to gadget."""
    assert RenderingContext.from_param(raw) == expected


@pytest.mark.unit
def test_query_keys_are_stable() -> None:
    """Wire keys must not drift; caches key on them."""
    assert {param.value for param in UriParam} == {
        "container",
        "gadget",
        "refresh",
        "debug",
        "nocache",
        "v",
        "c",
        "jsload",
        "onload",
        "nohint",
        "loaded",
    }
