"""
Test cases for planmatrix settings.
"""

import pytest

import sys
sys.path.insert(0, 'src')

from dotenv import load_dotenv

import planmatrix as pm
from planmatrix.config import PlanSettings, DEFAULT_COLUMN_WIDTH
from planmatrix.plan import Plan, Name, Map

ENV_VARS = (
    "PLANMATRIX_COLUMN_WIDTH",
    "PLANMATRIX_DEAD_COLUMN_ELIMINATION",
    "PLANMATRIX_FILTER_HOISTING",
)


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    pm.settings.reset()
    yield
    pm.settings.reset()


class TestPlanSettings:
    """Test the settings dataclass."""

    def test_defaults(self):
        config = PlanSettings()
        assert config.column_width == DEFAULT_COLUMN_WIDTH == 11
        assert config.dead_column_elimination is True
        assert config.filter_hoisting is True
        assert config.enabled_rule_names() == ["DeadColumnElimination", "FilterHoisting"]

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PLANMATRIX_COLUMN_WIDTH", "14")
        monkeypatch.setenv("PLANMATRIX_FILTER_HOISTING", "off")
        config = PlanSettings()
        assert config.column_width == 14
        assert config.filter_hoisting is False
        assert config.enabled_rule_names() == ["DeadColumnElimination"]

    def test_explicit_values_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("PLANMATRIX_COLUMN_WIDTH", "14")
        assert PlanSettings(column_width=6).column_width == 6

    def test_reads_dotenv_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("PLANMATRIX_COLUMN_WIDTH=20\nPLANMATRIX_DEAD_COLUMN_ELIMINATION=no\n")
        # Registered with monkeypatch so the loaded values are undone afterwards
        monkeypatch.setenv("PLANMATRIX_COLUMN_WIDTH", "11")
        monkeypatch.setenv("PLANMATRIX_DEAD_COLUMN_ELIMINATION", "yes")
        load_dotenv(dotenv_path=str(env_file), override=True)

        config = PlanSettings()
        assert config.column_width == 20
        assert config.dead_column_elimination is False

    def test_rejects_non_positive_width(self):
        with pytest.raises(ValueError):
            PlanSettings(column_width=0)

    def test_rejects_bad_flag(self, monkeypatch):
        monkeypatch.setenv("PLANMATRIX_FILTER_HOISTING", "maybe")
        with pytest.raises(ValueError):
            PlanSettings()


class TestSettingsModule:
    """Test the global settings API."""

    def test_get_config_defaults(self):
        assert pm.settings.get_config().column_width == 11

    def test_configure(self):
        config = pm.settings.configure(column_width=5)
        assert pm.settings.get_config() is config
        assert str(Plan([[Name("a"), Map()]])) == 'Name("a")Map  \n'

    def test_reset(self):
        pm.settings.configure(column_width=5)
        pm.settings.reset()
        assert pm.settings.get_config().column_width == 11
