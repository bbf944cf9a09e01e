import re
from datetime import date
from pathlib import Path
from typing import Optional

import cv2
import numpy as np

from badminton.models import MatchSummary


BACKGROUND = (46, 26, 26)  # #1a1a2e
WHITE = (255, 255, 255)
GREY = (136, 136, 136)
GOLD = (0, 215, 255)


def summary_filename(summary: MatchSummary, today: Optional[date] = None) -> str:
    today = today or date.today()
    p1 = re.sub(r"[\s/\\]", "_", summary.player_names.player1)
    p2 = re.sub(r"[\s/\\]", "_", summary.player_names.player2)
    return f"badminton_{p1}_vs_{p2}_{today.isoformat()}.png"


class MatchSummaryRenderer:

    def __init__(self, summary: MatchSummary, width: int = 640, row_height: int = 50):
        self.summary = summary
        self.width = width
        self.row_height = row_height

        if not self.summary.is_finished:
            raise ValueError("Match is not finished")

    def render(self) -> np.ndarray:
        height = 260 + self.row_height * len(self.summary.set_scores)
        frame = np.full((height, self.width, 3), BACKGROUND, dtype=np.uint8)

        self._draw_centered(frame, self.summary.winner_name or "", 60, 1.4, GOLD, 3)
        self._draw_centered(frame, "Wins!", 105, 0.9, WHITE, 2)
        self._draw_centered(frame, "Set Scores", 150, 0.7, GREY, 1)

        y = 150 + self.row_height
        for index, set_score in enumerate(self.summary.set_scores, 1):
            self._draw_set_row(frame, index, set_score.player1, set_score.player2, y)
            y += self.row_height

        sets = self.summary.sets
        final_text = f"Final: {sets.player1} - {sets.player2}"
        self._draw_centered(frame, final_text, y + 30, 1.0, WHITE, 2)

        return frame

    def save(self, directory: Path, today: Optional[date] = None) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / summary_filename(self.summary, today)

        if not cv2.imwrite(str(path), self.render()):
            raise RuntimeError(f"Cannot write image: {path}")

        return path

    # ----------------------------------------------------
    # DRAWING
    # ----------------------------------------------------

    def _draw_centered(self, frame, text: str, y: int, scale: float, color, thickness: int):
        font = cv2.FONT_HERSHEY_SIMPLEX
        (text_width, _), _ = cv2.getTextSize(text, font, scale, thickness)
        x = max(10, (self.width - text_width) // 2)
        cv2.putText(frame, text, (x, y), font, scale, color, thickness, cv2.LINE_AA)

    def _draw_set_row(self, frame, index: int, score_1: int, score_2: int, y: int):
        font = cv2.FONT_HERSHEY_SIMPLEX
        center = self.width // 2

        # row background
        overlay = frame.copy()
        cv2.rectangle(
            overlay,
            (center - 160, y - self.row_height + 15),
            (center + 160, y + 10),
            WHITE,
            -1,
        )
        alpha = 0.05
        cv2.addWeighted(overlay, alpha, frame, 1 - alpha, 0, frame)

        color_1 = GOLD if score_1 > score_2 else WHITE
        color_2 = GOLD if score_2 > score_1 else WHITE

        left = str(score_1)
        (left_width, _), _ = cv2.getTextSize(left, font, 0.9, 2)
        cv2.putText(frame, left, (center - 70 - left_width, y), font, 0.9, color_1, 2, cv2.LINE_AA)

        label = f"Set {index}"
        (label_width, _), _ = cv2.getTextSize(label, font, 0.6, 1)
        cv2.putText(frame, label, (center - label_width // 2, y), font, 0.6, GREY, 1, cv2.LINE_AA)

        cv2.putText(frame, str(score_2), (center + 70, y), font, 0.9, color_2, 2, cv2.LINE_AA)
