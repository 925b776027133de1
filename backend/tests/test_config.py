"""
Tests for environment-driven settings.
"""

import pytest
import sys
import os

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import get_settings, DEFAULT_SCORES_PATH

ENV_VARS = [
    'GRIDSNAKE_SCORES_PATH',
    'GRIDSNAKE_GRID_SIZE',
    'GRIDSNAKE_TICK_SECONDS',
    'GRIDSNAKE_LEDGER_CAPACITY',
    'GRIDSNAKE_LOG_LEVEL',
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestGetSettings:
    """Tests for get_settings()."""

    def test_defaults(self):
        """Unset variables fall back to the game defaults."""
        settings = get_settings()
        assert settings.scores_path == DEFAULT_SCORES_PATH
        assert settings.grid_size == 32
        assert settings.tick_seconds == 0.15
        assert settings.ledger_capacity == 5
        assert settings.log_level == "INFO"

    def test_overrides(self, monkeypatch):
        """Every variable can be overridden."""
        monkeypatch.setenv('GRIDSNAKE_SCORES_PATH', '/tmp/scores.json')
        monkeypatch.setenv('GRIDSNAKE_GRID_SIZE', '16')
        monkeypatch.setenv('GRIDSNAKE_TICK_SECONDS', '0.1')
        monkeypatch.setenv('GRIDSNAKE_LEDGER_CAPACITY', '10')
        monkeypatch.setenv('GRIDSNAKE_LOG_LEVEL', 'debug')

        settings = get_settings()

        assert settings.scores_path == '/tmp/scores.json'
        assert settings.grid_size == 16
        assert settings.tick_seconds == 0.1
        assert settings.ledger_capacity == 10
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("raw", ["0", "none", "Unbounded"])
    def test_unbounded_capacity(self, monkeypatch, raw):
        """Zero or 'none' means keep every score."""
        monkeypatch.setenv('GRIDSNAKE_LEDGER_CAPACITY', raw)
        assert get_settings().ledger_capacity is None

    def test_blank_value_uses_default(self, monkeypatch):
        """Empty strings are treated as unset."""
        monkeypatch.setenv('GRIDSNAKE_GRID_SIZE', '  ')
        assert get_settings().grid_size == 32

    def test_non_numeric_rejected(self, monkeypatch):
        """A non-numeric grid size raises ValueError naming the variable."""
        monkeypatch.setenv('GRIDSNAKE_GRID_SIZE', 'big')
        with pytest.raises(ValueError, match='GRIDSNAKE_GRID_SIZE'):
            get_settings()

    def test_grid_too_small(self, monkeypatch):
        """Boards too small for the starting layout are rejected."""
        monkeypatch.setenv('GRIDSNAKE_GRID_SIZE', '4')
        with pytest.raises(ValueError):
            get_settings()

    def test_non_positive_tick(self, monkeypatch):
        """Tick interval must be positive."""
        monkeypatch.setenv('GRIDSNAKE_TICK_SECONDS', '0')
        with pytest.raises(ValueError):
            get_settings()

    def test_negative_capacity(self, monkeypatch):
        """Negative capacity is rejected."""
        monkeypatch.setenv('GRIDSNAKE_LEDGER_CAPACITY', '-3')
        with pytest.raises(ValueError):
            get_settings()
