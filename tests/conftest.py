"""Pytest configuration and fixtures for CSS::Tiny tests."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from css_tiny.config import CssTinyConfig, StorageConfig
from css_tiny.storage import StylesheetStorage

_ENV_VARS = (
    "LOG_LEVEL",
    "LOG_FILE",
    "LOG_FORMAT",
    "CSS_TINY_ENCODING",
    "CSS_TINY_FILE_MODE",
    "CSS_TINY_LOCK",
)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def sample_css() -> str:
    """Sample stylesheet in the style the module was written for."""
    return "H1 { color: blue }\nH2 { color: red; font-family: Arial }\n.this, .that { color: yellow }\n"


@pytest.fixture
def sample_styles() -> dict:
    """The mapping ``sample_css`` parses to."""
    return {
        "H1": {"color": "blue"},
        "H2": {"color": "red", "font-family": "Arial"},
        ".this": {"color": "yellow"},
        ".that": {"color": "yellow"},
    }


@pytest.fixture
def canonical_css() -> str:
    """``sample_css`` as the serializer writes it."""
    return (
        ".that {\n"
        "\tcolor: yellow;\n"
        "}\n"
        ".this {\n"
        "\tcolor: yellow;\n"
        "}\n"
        "H1 {\n"
        "\tcolor: blue;\n"
        "}\n"
        "H2 {\n"
        "\tcolor: red;\n"
        "\tfont-family: Arial;\n"
        "}\n"
    )


@pytest.fixture
def sample_css_file(temp_dir: Path, sample_css: str) -> Path:
    """Create a temporary stylesheet file with sample content."""
    css_file = temp_dir / "style.css"
    css_file.write_text(sample_css)
    return css_file


@pytest.fixture
def invalid_css_file(temp_dir: Path) -> Path:
    """Create a temporary stylesheet file that does not parse."""
    css_file = temp_dir / "invalid.css"
    css_file.write_text("H1 { color: blue }\nH2 color: red }\n")
    return css_file


@pytest.fixture
def test_config() -> CssTinyConfig:
    """Test configuration."""
    return CssTinyConfig(storage=StorageConfig(encoding="utf-8", file_mode=0o644, lock=True))


@pytest.fixture
def storage(test_config: CssTinyConfig) -> StylesheetStorage:
    """Storage instance for testing."""
    return StylesheetStorage(test_config.storage)


@pytest.fixture(autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Keep configuration environment variables and log handlers out of other tests."""
    saved = {name: os.environ.pop(name) for name in _ENV_VARS if name in os.environ}

    yield

    for name in _ENV_VARS:
        os.environ.pop(name, None)
    os.environ.update(saved)
    logger = logging.getLogger("css_tiny")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
