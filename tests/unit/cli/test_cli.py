"""Unit tests for jsuri CLI command entrypoints."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from jsuri.cli import app

_RUNNER = CliRunner()


def _common(libs_dir: Path, config: Path) -> list[str]:
    """Shared directory/config options for a CLI invocation."""
    return ["--libs-dir", str(libs_dir), "--config", str(config)]


@pytest.mark.unit
def test_build_prints_versioned_uri(libs_dir: Path, tmp_path: Path) -> None:
    """`jsuri build` prints a versioned URI with libs in order."""
    result = _RUNNER.invoke(
        app,
        ["build", "core", "util", *_common(libs_dir, tmp_path / "missing.yaml")],
    )

    assert result.exit_code == 0
    uri = result.stdout.strip()
    assert uri.startswith("/gadgets/js/core:util.js?container=default")
    assert "&v=" in uri


@pytest.mark.unit
def test_build_then_inspect_reports_versioned(libs_dir: Path, tmp_path: Path) -> None:
    """A freshly built URI inspects as valid_versioned."""
    # Arrange - build a URI against the libs directory
    common = _common(libs_dir, tmp_path / "missing.yaml")
    built = _RUNNER.invoke(
        app, ["build", "core", "--context", "container", "--jsload", *common]
    )
    uri = built.stdout.strip()

    # Act - inspect it as JSON
    result = _RUNNER.invoke(app, ["inspect", uri, "--json", *common])

    # Assert - fields round-trip and status is versioned
    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["libs"] == ["core"]
    assert payload["context"] == "1"
    assert payload["jsload"] is True
    assert payload["status"] == "valid_versioned"
    assert payload["orig_uri"] == uri


@pytest.mark.unit
def test_inspect_reports_stale_after_edit(libs_dir: Path, tmp_path: Path) -> None:
    """Editing a library file turns an issued URI into invalid_version."""
    common = _common(libs_dir, tmp_path / "missing.yaml")
    uri = _RUNNER.invoke(app, ["build", "core", *common]).stdout.strip()

    (libs_dir / "core.js").write_text("var core = 42;", encoding="utf-8")
    result = _RUNNER.invoke(app, ["inspect", uri, *common])

    assert result.exit_code == 0
    assert "invalid_version" in result.stdout


@pytest.mark.unit
def test_inspect_malformed_exits_nonzero(libs_dir: Path, tmp_path: Path) -> None:
    """Malformed URIs exit 1 with the stable error code."""
    result = _RUNNER.invoke(
        app,
        ["inspect", "/wrong/core.js", *_common(libs_dir, tmp_path / "missing.yaml")],
    )

    assert result.exit_code == 1
    assert "malformed_uri" in result.stdout


@pytest.mark.unit
def test_version_command_and_disabled_versioning(
    libs_dir: Path, tmp_path: Path
) -> None:
    """`jsuri version` prints a token, or exits 1 when versioning is off."""
    enabled = _RUNNER.invoke(
        app, ["version", "core", *_common(libs_dir, tmp_path / "missing.yaml")]
    )
    config = tmp_path / "jsuri.yaml"
    config.write_text(yaml.safe_dump({"versioner": "none"}), encoding="utf-8")
    disabled = _RUNNER.invoke(app, ["version", "core", *_common(libs_dir, config)])

    assert enabled.exit_code == 0
    assert len(enabled.stdout.strip()) == 32
    assert disabled.exit_code == 1
    assert "disabled" in disabled.stdout


@pytest.mark.unit
def test_invalid_config_exits_two(libs_dir: Path, tmp_path: Path) -> None:
    """Config errors surface with exit code 2."""
    config = tmp_path / "jsuri.yaml"
    config.write_text("token_length: 1\n", encoding="utf-8")

    result = _RUNNER.invoke(app, ["build", "core", *_common(libs_dir, config)])

    assert result.exit_code == 2
    assert "Invalid URI config payload" in result.stdout
