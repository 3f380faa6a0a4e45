"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from jsuri.libraries import InMemoryLibraryRegistry
from jsuri.manager import JsUriManager
from jsuri.versioning import ContentHashVersioner


@pytest.fixture
def registry() -> InMemoryLibraryRegistry:
    """In-memory library state with two stable libraries."""
    registry = InMemoryLibraryRegistry()
    registry.register("core", "var core = 1;", last_modified=1_700_000_000)
    registry.register("util", "var util = 1;", last_modified=1_700_000_100)
    return registry


@pytest.fixture
def versioned_manager(registry: InMemoryLibraryRegistry) -> JsUriManager:
    """Manager with default settings and a content-hash versioner."""
    return JsUriManager(versioner=ContentHashVersioner(registry))


@pytest.fixture
def libs_dir(tmp_path: Path) -> Path:
    """Temporary library directory with core.js and util.js."""
    root = tmp_path / "libs"
    root.mkdir()
    (root / "core.js").write_text("var core = 1;", encoding="utf-8")
    (root / "util.js").write_text("var util = 1;", encoding="utf-8")
    return root
