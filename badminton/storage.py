import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from badminton.config import STORAGE_KEY
from badminton.exceptions import StateLoadError
from badminton.models import MatchState

logger = logging.getLogger(__name__)


def _read_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise StateLoadError(f"Cannot read {path}: {e}") from e

    if not isinstance(data, dict):
        raise StateLoadError(f"{path} does not hold a JSON object")

    return data


def load_state(path: Path, key: str = STORAGE_KEY) -> Optional[Dict[str, Any]]:
    """
    Return the saved state blob, or None when there is no usable one.

    A corrupt file counts as "nothing saved": it is logged, never raised.
    """
    if not path.exists():
        return None

    try:
        blob = _read_file(path).get(key)
    except StateLoadError as e:
        logger.warning("Failed to load game state: %s", e)
        return None

    if blob is None:
        return None

    if not isinstance(blob, dict):
        logger.warning("Failed to load game state: %r in %s is not an object", key, path)
        return None

    return blob


def save_state(path: Path, match: MatchState, key: str = STORAGE_KEY) -> bool:
    """
    Write `match` under `key`, keeping any other keys in the file.
    Returns False (and logs) when the write fails.
    """
    data: Dict[str, Any] = {}
    if path.exists():
        try:
            data = _read_file(path)
        except StateLoadError as e:
            logger.warning("Overwriting unreadable save file: %s", e)

    data[key] = match.to_dict()

    tmp = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=4)
        os.replace(tmp, path)
    except OSError as e:
        if tmp.exists():
            tmp.unlink()
        logger.error("Failed to save game state to %s: %s", path, e)
        return False

    return True
