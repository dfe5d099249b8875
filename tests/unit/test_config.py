"""
Environment-driven configuration test cases
"""
import pytest

from utils import config


@pytest.mark.parametrize("value", ["1", "true", "YES", " on "])
def test_env_flag_truthy(monkeypatch, value):
    monkeypatch.setenv("DEALLS_TEST_FLAG", value)
    assert config.env_flag("DEALLS_TEST_FLAG") is True


@pytest.mark.parametrize("value", ["0", "false", "no", "", "maybe"])
def test_env_flag_falsy(monkeypatch, value):
    monkeypatch.setenv("DEALLS_TEST_FLAG", value)
    assert config.env_flag("DEALLS_TEST_FLAG") is False


def test_env_flag_default(monkeypatch):
    monkeypatch.delenv("DEALLS_TEST_FLAG", raising=False)
    assert config.env_flag("DEALLS_TEST_FLAG", "1") is True


def test_env_int_and_float_fall_back_on_bad_values(monkeypatch):
    monkeypatch.setenv("DEALLS_TEST_NUM", "not-a-number")
    assert config.env_int("DEALLS_TEST_NUM", 10000) == 10000
    assert config.env_float("DEALLS_TEST_NUM", 5.0) == 5.0

    monkeypatch.setenv("DEALLS_TEST_NUM", "2500")
    assert config.env_int("DEALLS_TEST_NUM", 10000) == 2500
    assert config.env_float("DEALLS_TEST_NUM", 5.0) == 2500.0


def test_expected_homepage_texts():
    assert config.EXPECTED_TITLE.search("Lowongan Kerja Terbaru 2026 | Dealls")
    assert config.EXPECTED_HEADING == "Cari Lowongan Kerja Pakai Dealls"


def test_browser_launch_args(monkeypatch):
    monkeypatch.setattr(config, "MAXIMIZE_BROWSER", False)
    monkeypatch.setattr(config, "PW_WINDOW_SIZE", "1200,900")
    monkeypatch.setattr(config, "PW_WINDOW_POS", "")
    assert config.browser_launch_args() == ["--window-size=1200,900"]

    monkeypatch.setattr(config, "MAXIMIZE_BROWSER", True)
    assert config.browser_launch_args() == ["--start-maximized"]
