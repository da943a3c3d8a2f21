"""Persisted user settings (currently just the difficulty level)."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

from fiveinrow.engine.config import Difficulty

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parents[1] / "settings.json"
SETTINGS_ENV = "FIVEINROW_SETTINGS"

DEFAULT_DIFFICULTY = Difficulty.MEDIUM


def settings_path() -> Path:
    override = os.environ.get(SETTINGS_ENV)
    return Path(override) if override else DEFAULT_SETTINGS_PATH


def load_difficulty(path: Optional[Path] = None) -> Difficulty:
    """Stored difficulty, or MEDIUM when missing or unreadable."""
    path = path or settings_path()
    try:
        with open(path) as f:
            return Difficulty(int(json.load(f)["difficulty"]))
    except FileNotFoundError:
        return DEFAULT_DIFFICULTY
    except (OSError, ValueError, KeyError, TypeError) as exc:
        logger.warning("Ignoring unreadable settings %s: %s", path, exc)
        return DEFAULT_DIFFICULTY


def save_difficulty(difficulty: int, path: Optional[Path] = None) -> Difficulty:
    level = Difficulty(difficulty)
    path = path or settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump({"difficulty": int(level)}, f)
    return level
