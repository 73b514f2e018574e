"""Tests for configuration loading."""

from pathlib import Path

import pytest

from eanlookup.config import load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("EANLOOKUP_CONFIG", "EAN_SEARCH_TOKEN", "EANLOOKUP_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    settings = load_settings(tmp_path / "absent.yaml")
    assert settings.token is None
    assert settings.timeout == 180


def test_load_from_file(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("token: abc\ntimeout: 20\n")
    settings = load_settings(path)
    assert settings.token == "abc"
    assert settings.timeout == 20


def test_path_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("token: from-file\n")
    monkeypatch.setenv("EANLOOKUP_CONFIG", str(path))
    assert load_settings().token == "from-file"


def test_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("token: from-file\ntimeout: 20\n")
    monkeypatch.setenv("EAN_SEARCH_TOKEN", "from-env")
    monkeypatch.setenv("EANLOOKUP_TIMEOUT", "5")
    settings = load_settings(path)
    assert settings.token == "from-env"
    assert settings.timeout == 5


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_settings(path).timeout == 180


@pytest.mark.parametrize("content", ["- just\n- a list\n", "timeout: [unclosed\n", "timeout: soon\n"])
def test_invalid_config_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_settings(path)
