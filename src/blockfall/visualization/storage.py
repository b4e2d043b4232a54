from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

logger = logging.getLogger(__name__)

BEST_SCORE_KEY = "bestScore"


def default_path() -> Path:
    return Path(os.environ.get("BLOCKFALL_HOME", Path.home() / ".blockfall")) / "best_score.json"


class BestScoreStore:
    """Single-integer key-value store for the best score.

    Failures never reach the game: reads fall back to 0 and failed writes
    are logged and dropped.
    """

    def __init__(self, path: Optional[Union[str, Path]] = None) -> None:
        self.path = Path(path) if path is not None else default_path()

    def get(self) -> int:
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
            return int(data.get(BEST_SCORE_KEY, 0))
        except FileNotFoundError:
            return 0
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            logger.warning("Could not read best score from %s: %s", self.path, exc)
            return 0

    def set(self, best: int) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp = self.path.with_suffix(".tmp")
            with open(tmp, "w", encoding="utf-8") as fh:
                json.dump({BEST_SCORE_KEY: int(best)}, fh)
            os.replace(tmp, self.path)
        except OSError as exc:
            logger.warning("Could not save best score %d to %s: %s", best, self.path, exc)
            return False
        return True
