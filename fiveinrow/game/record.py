"""Save and load games as JSON records holding the packed board bytes."""

from __future__ import annotations

import base64
import json
import logging
import os
import time
from pathlib import Path
from typing import Iterable, Optional

from .board import Board
from .codec import decode_game, encode_game
from .types import Player

logger = logging.getLogger(__name__)

SAVED_GAMES_DIR = Path(__file__).resolve().parents[2] / "saved_games"


def _ensure_dir(directory: Path) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _record_path(directory: Path, game_id: int) -> Path:
    return directory / f"{game_id}.json"


def save_game(
    board: Board,
    side_to_move: Player,
    title: str = "",
    ai_player: bool = True,
    game_id: Optional[int] = None,
    directory: Optional[Path] = None,
) -> dict:
    """Save a game to a JSON file. Returns the stored record."""
    directory = _ensure_dir(directory or SAVED_GAMES_DIR)
    now_ms = int(time.time() * 1000)
    if game_id is None:
        game_id = now_ms
    if not title:
        title = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(now_ms / 1000))

    record = {
        "id": game_id,
        "title": title,
        "time": now_ms,
        "data": base64.b64encode(encode_game(board, side_to_move)).decode("ascii"),
        "ai_player": ai_player,
    }
    with open(_record_path(directory, game_id), "w") as f:
        json.dump(record, f, indent=2)
    return record


def load_game(game_id: int, directory: Optional[Path] = None) -> dict:
    """Load a game record from a JSON file. Returns the parsed dict."""
    with open(_record_path(directory or SAVED_GAMES_DIR, game_id)) as f:
        return json.load(f)


def list_saved_games(directory: Optional[Path] = None) -> list[dict]:
    """Return all saved records, newest first."""
    directory = _ensure_dir(directory or SAVED_GAMES_DIR)
    records = []
    for name in sorted(os.listdir(directory)):
        if not name.endswith(".json"):
            continue
        try:
            with open(directory / name) as f:
                record = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Skipping unreadable saved game %s: %s", name, exc)
            continue
        if not isinstance(record, dict) or "id" not in record:
            logger.warning("Skipping malformed saved game %s", name)
            continue
        records.append(record)
    records.sort(key=lambda r: (r.get("time", 0), r.get("id", 0)), reverse=True)
    return records


def rename_game(game_id: int, title: str, directory: Optional[Path] = None) -> dict:
    directory = directory or SAVED_GAMES_DIR
    record = load_game(game_id, directory)
    record["title"] = title
    with open(_record_path(directory, game_id), "w") as f:
        json.dump(record, f, indent=2)
    return record


def remove_games(game_ids: Iterable[int], directory: Optional[Path] = None) -> None:
    directory = directory or SAVED_GAMES_DIR
    for game_id in game_ids:
        path = _record_path(directory, game_id)
        if path.exists():
            path.unlink()


def restore_game(record: dict) -> tuple[Board, Player]:
    """Rebuild the board and side to move from a record.

    Undersized or corrupt data (bad base64, wrong types, bad cell codes)
    resets to an empty board with Black to move.
    """
    try:
        data = base64.b64decode(record.get("data", ""), validate=True)
        return decode_game(data)
    except (ValueError, TypeError) as exc:
        logger.warning("Resetting corrupt saved game %s: %s", record.get("id"), exc)
        return Board(), Player.BLACK
