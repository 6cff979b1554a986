"""Tests for the configuration singleton."""

from pipestep.utils.config import Config, get_config


def test_config_is_singleton():
    """Test that every access returns the same instance."""
    assert Config() is get_config()


def test_config_stepping_values():
    """Test values loaded from config.yaml."""
    cfg = get_config()

    assert cfg.get_padding() == 6
    assert cfg.get_preview_rows() == 6
    assert cfg.get_separator_char() == "="
    assert cfg.get_indent() == "  "
    assert cfg["stepping.padding"] == 6


def test_config_missing_key_returns_default():
    """Test dotted lookup of keys that do not exist."""
    cfg = get_config()

    assert cfg.get("stepping.nonexistent") is None
    assert cfg.get("nonexistent.key", 42) == 42
    assert cfg.get("stepping.padding.too_deep", "x") == "x"


def test_config_display_options():
    """Test pandas option names built from the display section."""
    options = get_config().get_display_options()

    assert options["display.max_columns"] == 15
    assert all(key.startswith("display.") for key in options)
