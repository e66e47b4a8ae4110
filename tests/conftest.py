"""Core test fixtures for the lingobox project."""

import json
import logging
import os
from collections.abc import Generator
from pathlib import Path
from unittest.mock import Mock

import pytest
from typer.testing import CliRunner

from lingobox.core.logging import configure_structlog
from lingobox.i18n.models import EmittedArtifact, I18nOptions, LocaleOptions
from lingobox.protocols import FileAdapterProtocol


MAIN_JS = 'const title = $localize`:@@title:Hello`;\nconsole.log(title);\n'
MAIN_MAP = json.dumps({"version": 3, "sources": ["main.ts"], "mappings": "AAAA"})
LAZY_JS = "export const greet = (name) => $localize`:@@greeting:Hi ${name}:NAME:!`;\n"
RUNTIME_JS = "(function(){ /* runtime */ })();\n"
STYLES_CSS = "body { color: red; }\n"


# ---- Base Fixtures ----


@pytest.fixture
def cli_runner() -> CliRunner:
    """Return a Typer CLI test runner."""
    return CliRunner(env={"COLUMNS": "200"})


@pytest.fixture
def mock_file_adapter() -> Mock:
    """Create a mock file adapter for testing."""
    adapter = Mock(spec=FileAdapterProtocol)
    return adapter


# ---- Test Isolation Fixtures ----


@pytest.fixture(autouse=True)
def isolated_environment(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[None, None, None]:
    """Keep user configuration and logging state out of every test.

    - XDG_CONFIG_HOME points at an empty temporary directory
    - LINGOBOX_ environment variables are removed
    - root logger handlers added by the code under test are dropped afterwards
    """
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    for key in list(os.environ):
        if key.startswith("LINGOBOX_"):
            monkeypatch.delenv(key, raising=False)

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    configure_structlog(logging.WARNING)

    yield

    for handler in list(root_logger.handlers):
        if handler not in handlers:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)


# ---- Emitted Build Fixtures ----


@pytest.fixture
def emitted_path(tmp_path: Path) -> Path:
    """Intermediate directory holding a small emitted build."""
    root = tmp_path / "dist" / ".tmp"
    (root / "assets").mkdir(parents=True)
    (root / "main.js").write_text(MAIN_JS, encoding="utf-8")
    (root / "main.js.map").write_text(MAIN_MAP, encoding="utf-8")
    (root / "lazy.js").write_text(LAZY_JS, encoding="utf-8")
    (root / "runtime.js").write_text(RUNTIME_JS, encoding="utf-8")
    (root / "styles.css").write_text(STYLES_CSS, encoding="utf-8")
    (root / "assets" / "logo.svg").write_text("<svg/>", encoding="utf-8")
    return root


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    return tmp_path / "dist" / "browser"


@pytest.fixture
def emitted_files() -> list[EmittedArtifact]:
    """Manifest entries matching ``emitted_path``."""
    return [
        EmittedArtifact(name="main", file="main.js"),
        EmittedArtifact(name="lazy", file="lazy.js"),
        EmittedArtifact(name="runtime", file="runtime.js"),
        EmittedArtifact(name="styles", file="styles.css", asset=True),
        EmittedArtifact(file="assets/logo.svg", asset=True),
    ]


@pytest.fixture
def i18n_options() -> I18nOptions:
    """French and German, German missing the greeting message."""
    return I18nOptions(
        source_locale="en-US",
        inline_locales=["fr", "de"],
        locales={
            "fr": LocaleOptions(
                translation={"title": "Bonjour", "greeting": "Salut {$NAME} !"}
            ),
            "de": LocaleOptions(translation={"title": "Hallo"}),
        },
    )
