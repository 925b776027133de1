"""
Score repository for the persisted high-score file.
"""

import json
import logging
import os
from typing import List

from domain.score_record import ScoreRecord
from .base import BaseRepository

logger = logging.getLogger(__name__)


class ScoreRepository(BaseRepository):
    """
    Repository for the JSON score file.

    The file holds a JSON array of {name, points, moves, fruits} objects,
    ordered best first.
    """

    def read_all(self) -> List[ScoreRecord]:
        """
        Read every stored record.

        Returns:
            Records in file order.

        Raises:
            FileNotFoundError: if the file does not exist
            ValueError: if the file is not valid JSON or a record is malformed
        """
        with self.reader() as f:
            data = json.load(f)

        if not isinstance(data, list):
            raise ValueError(f"Expected a list of scores in {self.path}, got {type(data).__name__}")

        return [ScoreRecord.from_dict(item) for item in data]

    def write_all(self, records: List[ScoreRecord]) -> None:
        """
        Replace the file with `records`.

        Raises:
            OSError: if the file cannot be written
        """
        payload = [record.to_dict() for record in records]
        with self.writer() as f:
            json.dump(payload, f, indent=2)
            f.write("\n")
        logger.debug(f"Wrote {len(records)} scores to {self.path}")

    def quarantine(self) -> str:
        """
        Move an unreadable file aside so it can be inspected later.

        Returns:
            The path the file was moved to.
        """
        target = f"{self.path}.corrupt"
        os.replace(self.path, target)
        return target
