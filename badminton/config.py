import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Rules (fixed, independent of the announcement style)
MAX_POINTS = 21
DEUCE_POINTS = 20
POINT_CAP = 30
MAX_SETS = 3
HISTORY_LIMIT = 50

# Persistence
STORAGE_KEY = "badminton-score-v1"
SAVE_FILE = Path(os.getenv("BADMINTON_SAVE_FILE") or PROJECT_ROOT / "matches" / "scoreboard.json")
EXPORT_DIR = Path(os.getenv("BADMINTON_EXPORT_DIR") or PROJECT_ROOT / "exports")

# Defaults
DEFAULT_PLAYER_NAMES = {"player1": "Player 1", "player2": "Player 2"}
DEFAULT_LANGUAGE = "ko"
DEFAULT_SCORES_MODE = "bwf"

LOG_LEVEL = (os.getenv("BADMINTON_LOG_LEVEL") or "WARNING").upper()
