"""Persistence for the single best-score record."""

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class BestScoreStore:
    """Reads and writes ``{"best_score": int}`` in one JSON file.

    A missing or unreadable record counts as zero; write failures are
    logged and swallowed so the game loop never sees them.
    """

    KEY = "best_score"

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> int:
        """Load the stored best score, or 0."""
        if not self.path.exists():
            logger.info(f"No best score at {self.path}, starting from 0")
            return 0

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read best score from {self.path}: {e}")
            return 0

        value = data.get(self.KEY) if isinstance(data, dict) else None
        # bool is an int subclass, reject it explicitly
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            logger.warning(f"Ignoring corrupt best score record: {data!r}")
            return 0

        logger.info(f"Loaded best score {value}")
        return value

    def save(self, value: int) -> bool:
        """Persist a new best score. Returns True on success."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump({self.KEY: int(value)}, f)
        except OSError as e:
            logger.error(f"Failed to save best score: {e}")
            return False

        logger.debug(f"Saved best score {value} to {self.path}")
        return True
