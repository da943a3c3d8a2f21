import json

import pytest

from fiveinrow.engine.config import Difficulty
from fiveinrow.settings import SETTINGS_ENV, load_difficulty, save_difficulty, settings_path


def test_missing_file_defaults_to_medium(tmp_path):
    assert load_difficulty(tmp_path / "nope.json") is Difficulty.MEDIUM


def test_save_and_load(tmp_path):
    path = tmp_path / "settings.json"
    assert save_difficulty(3, path) is Difficulty.EXPERT
    assert load_difficulty(path) is Difficulty.EXPERT
    with open(path) as f:
        assert json.load(f) == {"difficulty": 3}


def test_save_creates_parent_dir(tmp_path):
    path = tmp_path / "a" / "b" / "settings.json"
    save_difficulty(Difficulty.EASY, path)
    assert load_difficulty(path) is Difficulty.EASY


@pytest.mark.parametrize("content", ["not json", '{"difficulty": 9}', '{"level": 1}', "[]"])
def test_bad_file_defaults_to_medium(tmp_path, content):
    path = tmp_path / "settings.json"
    path.write_text(content)
    assert load_difficulty(path) is Difficulty.MEDIUM


def test_save_rejects_invalid(tmp_path):
    with pytest.raises(ValueError):
        save_difficulty(5, tmp_path / "settings.json")


def test_env_override(tmp_path, monkeypatch):
    path = tmp_path / "custom.json"
    monkeypatch.setenv(SETTINGS_ENV, str(path))
    assert settings_path() == path
    save_difficulty(Difficulty.HARD)
    assert load_difficulty() is Difficulty.HARD
