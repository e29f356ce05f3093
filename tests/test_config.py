from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from arithcode.config import Config, SUPPORTED_LOG_LEVELS, get_config


def test_config_singleton():
    """get_config should return the same singleton instance across calls."""

    c1 = get_config()
    c2 = get_config()
    assert c1 is c2
    assert isinstance(c1, Config)


def test_unit_interval_defaults():
    assert Config.DEFAULT_LOWER_BOUND == 0.0
    assert Config.DEFAULT_UPPER_BOUND == 1.0


def test_boundary_defaults():
    """Decoding stays strict; the last partition boundary is snapped."""

    assert Config.STRICT_BOUNDARIES is True
    assert Config.SNAP_FINAL_BOUNDARY is True


def test_precision_bits_binary64():
    assert Config.FLOAT_PRECISION_BITS == 52


def test_results_dir_is_path():
    assert isinstance(Config.RESULTS_DIR, Path)


def test_config_is_frozen():
    with pytest.raises(FrozenInstanceError):
        get_config().STRICT_BOUNDARIES = False  # type: ignore[misc]


def test_log_levels():
    assert "DEBUG" in SUPPORTED_LOG_LEVELS and "WARNING" in SUPPORTED_LOG_LEVELS
