"""
Test Configuration
==================

Pytest configuration with fixtures shared by unit and integration tests.
"""

import pytest
from pathlib import Path
from typing import Generator

from pydantic_settings import SettingsConfigDict

import tablesnap.config.settings as settings_module
from tablesnap.config.settings import Settings
from tablesnap.core.rendering.fonts import PillowTextMeasurer, load_font
from tablesnap.core.rendering.png_generator import PNGTableGenerator
from tablesnap.models.schemas import RenderOptions, ThemeName

from tests.utils.data_generators import TableTextGenerator
from tests.utils.mocks import FixedWidthMeasurer


# Test settings override
class TestSettings(Settings):
    """Test-specific settings."""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "DEBUG"
    emoji_enabled: bool = False
    emoji_cache_dir: Path = Path("./test_tmp/twemoji")

    model_config = SettingsConfigDict(env_file=".env.test", env_prefix="TABLESNAP_")


@pytest.fixture(scope="session")
def test_settings() -> TestSettings:
    """Test settings fixture."""
    return TestSettings()


@pytest.fixture(scope="session", autouse=True)
def override_settings(test_settings: TestSettings) -> Generator[TestSettings, None, None]:
    """Make get_settings() return the test settings everywhere."""
    previous = settings_module.settings
    settings_module.settings = test_settings
    yield test_settings
    settings_module.settings = previous


@pytest.fixture
def fixed_measurer() -> FixedWidthMeasurer:
    """Deterministic measurer: 7px per character, 16px line height."""
    return FixedWidthMeasurer(char_width=7.0, line_height=16.0)


@pytest.fixture(scope="session")
def default_font() -> PillowTextMeasurer:
    """Pillow's bundled font at 14pt, independent of installed system fonts."""
    return load_font(14, candidates=())


@pytest.fixture
def render_options() -> RenderOptions:
    """Light theme options rendered with the bundled default font."""
    return RenderOptions(theme=ThemeName.LIGHT, font_size=14, padding=10)


@pytest.fixture
def generator(test_settings: TestSettings) -> PNGTableGenerator:
    """Pipeline without emoji lookup."""
    return PNGTableGenerator(settings=test_settings)


@pytest.fixture
def simple_table() -> str:
    return TableTextGenerator.simple_table()


@pytest.fixture
def ragged_table() -> str:
    return TableTextGenerator.ragged_table()


@pytest.fixture
def status_table() -> str:
    return TableTextGenerator.status_table()
