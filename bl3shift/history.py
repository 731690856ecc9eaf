"""On-disk record of codes already redeemed, one JSON file per user"""

import hashlib
import json
import logging
from pathlib import Path
from typing import Optional

from .exceptions import HistoryError
from .logs import log_warning
from .models import RedemptionHistory

logger = logging.getLogger(__name__)


class HistoryStore:
    """Loads and saves RedemptionHistory files in a directory"""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    @staticmethod
    def key_for(email: str) -> str:
        """Opaque per-user key, the login itself is never written to disk"""
        return hashlib.md5(email.encode("utf-8")).hexdigest()

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}-shift-codes.json"

    def load(self, key: str) -> Optional[RedemptionHistory]:
        """Previously saved history, None when there is none.

        A corrupt file is reported and ignored. Starting over only causes
        redundant attempts, which come back as already redeemed.
        """
        path = self.path_for(key)
        if not path.exists():
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            log_warning(f"Ignoring unreadable redeemed codes file {path}: {e}")
            return None

        if not isinstance(data, dict) or not all(
            isinstance(platforms, list) and all(isinstance(p, str) for p in platforms)
            for platforms in data.values()
        ):
            log_warning(f"Ignoring malformed redeemed codes file {path}")
            return None

        logger.debug("Loaded %d redeemed codes from %s", len(data), path)
        return RedemptionHistory(data)

    def save(self, key: str, history: RedemptionHistory):
        path = self.path_for(key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(history.to_dict(), indent=2, sort_keys=True), encoding="utf-8")
        except (OSError, TypeError) as e:
            raise HistoryError(f"could not backup list of redeemed SHIFT codes: {e}") from e
        logger.debug("Saved %d redeemed codes to %s", len(history), path)
