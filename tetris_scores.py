"""High score persistence (a single integer in a JSON file)"""
import json
import logging
import os
from typing import Optional

log = logging.getLogger(__name__)

SCORE_KEY = "top_score"


class HighScoreStore:
    """Keeps the best score under SCORE_KEY. path=None keeps it in memory only."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.value = 0

    def load(self) -> int:
        if self.path is None or not os.path.exists(self.path):
            return self.value
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
            self.value = max(0, int(data.get(SCORE_KEY, 0)))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            log.warning("could not read high score from %s: %s", self.path, e)
            self.value = 0
        return self.value

    def submit(self, score: int) -> bool:
        """Record score if it beats the stored one. Returns True when it did."""
        if score <= self.value:
            return False
        self.value = score
        if self.path is not None:
            try:
                os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
                with open(self.path, "w", encoding="utf-8") as f:
                    json.dump({SCORE_KEY: score}, f)
            except OSError as e:
                log.warning("could not save high score to %s: %s", self.path, e)
        return True
