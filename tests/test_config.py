import importlib
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from design_rules import config


@pytest.fixture
def reload_config(monkeypatch):
    """Reload config under patched env vars; restore the real values afterwards."""
    def _reload(**env):
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        return importlib.reload(config)

    yield _reload
    monkeypatch.undo()
    importlib.reload(config)


def test_non_numeric_value_falls_back_with_warning(monkeypatch, caplog):
    monkeypatch.setenv("DESIGN_RULES_MAX_COLORS", "six")
    with caplog.at_level(logging.WARNING, logger="design_rules.config"):
        assert config._env_number("DESIGN_RULES_MAX_COLORS", 6) == 6
    assert "DESIGN_RULES_MAX_COLORS" in caplog.text


def test_empty_value_uses_default_quietly(monkeypatch, caplog):
    monkeypatch.setenv("DESIGN_RULES_ALPHA_THRESHOLD", "  ")
    with caplog.at_level(logging.WARNING, logger="design_rules.config"):
        assert config._env_number("DESIGN_RULES_ALPHA_THRESHOLD", 128) == 128
    assert caplog.records == []


def test_float_delay_is_parsed(reload_config):
    cfg = reload_config(DESIGN_RULES_ANALYSIS_DELAY="0.25")
    assert cfg.ANALYSIS_DELAY == 0.25


def test_zero_stride_is_clamped_to_one(reload_config):
    cfg = reload_config(DESIGN_RULES_SAMPLE_STRIDE="0")
    assert cfg.SAMPLE_STRIDE == 1


def test_invalid_stride_falls_back_to_ten(reload_config, caplog):
    with caplog.at_level(logging.WARNING, logger="design_rules.config"):
        cfg = reload_config(DESIGN_RULES_SAMPLE_STRIDE="ten")
    assert cfg.SAMPLE_STRIDE == 10
    assert "DESIGN_RULES_SAMPLE_STRIDE" in caplog.text


def test_unknown_log_level_falls_back_to_info(reload_config, caplog):
    with caplog.at_level(logging.WARNING, logger="design_rules.config"):
        cfg = reload_config(DESIGN_RULES_LOG_LEVEL="verbose")
    assert cfg.LOG_LEVEL == "INFO"
    assert "DESIGN_RULES_LOG_LEVEL" in caplog.text
    assert logging.getLevelName(cfg.LOG_LEVEL) == logging.INFO


def test_known_log_level_is_normalized(reload_config):
    cfg = reload_config(DESIGN_RULES_LOG_LEVEL=" debug ")
    assert cfg.LOG_LEVEL == "DEBUG"


def _import_in_subprocess(code, **env):
    root = Path(__file__).resolve().parents[1]
    full_env = dict(os.environ, PYTHONPATH=str(root), **env)
    return subprocess.run([sys.executable, "-c", code], cwd=root, env=full_env, capture_output=True, text=True)


def test_service_starts_with_unknown_log_level():
    result = _import_in_subprocess("import design_rules.main", DESIGN_RULES_LOG_LEVEL="verbose")
    assert result.returncode == 0, result.stderr
    assert "DESIGN_RULES_LOG_LEVEL" in result.stderr


def test_renderer_does_not_pull_in_image_stack():
    code = "import sys, design_rules.rules; assert 'numpy' not in sys.modules and 'PIL' not in sys.modules"
    result = _import_in_subprocess(code)
    assert result.returncode == 0, result.stderr
