"""Unit tests for extern JS URI config loading."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from jsuri.config import (
    DEFAULT_JS_PATH,
    JsUriConfigError,
    JsUriSettings,
    VersionerKind,
    build_versioner,
    load_js_uri_config,
)
from jsuri.libraries import InMemoryLibraryRegistry
from jsuri.versioning import ContentHashVersioner, NoOpVersioner, TimestampVersioner


@pytest.mark.unit
def test_load_config_defaults_when_missing(tmp_path: Path) -> None:
    """Missing config file should yield deterministic defaults."""
    config = load_js_uri_config(tmp_path / "missing.yaml")

    assert config.default_container == "default"
    assert config.js_host == ""
    assert config.js_path == DEFAULT_JS_PATH
    assert config.versioner == VersionerKind.CONTENT_HASH
    assert config.token_length == 32
    assert config.containers == {}


@pytest.mark.unit
def test_load_config_reads_yaml_containers(tmp_path: Path) -> None:
    """YAML payload should parse container overrides."""
    config_path = tmp_path / "jsuri.yaml"
    config_path.write_text(
        yaml.safe_dump(
            {
                "versioner": "timestamp",
                "containers": {
                    "accel": {"js_host": "https://cdn.example.com/", "js_path": "/js/"}
                },
            },
            sort_keys=False,
        ),
        encoding="utf-8",
    )

    config = load_js_uri_config(config_path)
    accel = config.for_container("accel")
    fallback = config.for_container("unknown")

    assert config.versioner == VersionerKind.TIMESTAMP
    assert accel.js_host == "https://cdn.example.com"
    assert accel.js_path == "/js"
    assert fallback.js_host == ""
    assert fallback.js_path == DEFAULT_JS_PATH


@pytest.mark.unit
def test_for_container_defaults_name() -> None:
    """None resolves to the configured default container."""
    settings = JsUriSettings(default_container="main")

    assert settings.for_container(None).container == "main"


@pytest.mark.unit
def test_load_config_reads_json(tmp_path: Path) -> None:
    """JSON payload should parse versioner and token length."""
    config_path = tmp_path / "jsuri.json"
    config_path.write_text('{"versioner":"none","token_length":16}', encoding="utf-8")

    config = load_js_uri_config(config_path)

    assert config.versioner == VersionerKind.NONE
    assert config.token_length == 16


@pytest.mark.unit
def test_load_config_rejects_invalid_json(tmp_path: Path) -> None:
    """Invalid JSON should raise deterministic config error."""
    config_path = tmp_path / "jsuri.json"
    config_path.write_text("{not-json", encoding="utf-8")

    with pytest.raises(JsUriConfigError, match="Invalid URI config JSON"):
        load_js_uri_config(config_path)


@pytest.mark.unit
def test_load_config_rejects_non_object_root(tmp_path: Path) -> None:
    """List roots are not valid configs."""
    config_path = tmp_path / "jsuri.yaml"
    config_path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(JsUriConfigError, match="root must be an object"):
        load_js_uri_config(config_path)


@pytest.mark.unit
@pytest.mark.parametrize(
    "payload",
    [
        "token_length: 4\n",
        "js_path: gadgets/js\n",
        "versioner: md5\n",
        "unexpected: true\n",
    ],
)
def test_load_config_rejects_invalid_values(tmp_path: Path, payload: str) -> None:
    """Validation failures surface as config errors."""
    config_path = tmp_path / "jsuri.yaml"
    config_path.write_text(payload, encoding="utf-8")

    with pytest.raises(JsUriConfigError, match="Invalid URI config payload"):
        load_js_uri_config(config_path)


@pytest.mark.unit
def test_empty_yaml_yields_defaults(tmp_path: Path) -> None:
    """An empty file is an empty mapping."""
    config_path = tmp_path / "jsuri.yaml"
    config_path.write_text("", encoding="utf-8")

    assert load_js_uri_config(config_path) == JsUriSettings()


@pytest.mark.unit
def test_build_versioner_maps_kinds() -> None:
    """Each versioner kind maps to its strategy; none disables versioning."""
    resolver = InMemoryLibraryRegistry()

    content = build_versioner(JsUriSettings(token_length=10), resolver)
    timestamp = build_versioner(
        JsUriSettings(versioner=VersionerKind.TIMESTAMP), resolver
    )
    noop = build_versioner(JsUriSettings(versioner=VersionerKind.NOOP), resolver)
    disabled = build_versioner(JsUriSettings(versioner=VersionerKind.NONE), resolver)

    assert isinstance(content, ContentHashVersioner)
    assert len(content.compute_version(None, "default", ["x"])) == 10
    assert isinstance(timestamp, TimestampVersioner)
    assert isinstance(noop, NoOpVersioner)
    assert disabled is None
