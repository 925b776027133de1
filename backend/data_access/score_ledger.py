"""
Score ledger - the ranked, persisted list of finished games.

Records are kept sorted best first. A bounded ledger only admits a new
record whose points are at least the lowest kept record's points, evicting
that lowest record to make room.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union

from domain.constants import DEFAULT_SCORES, LEDGER_CAPACITY
from domain.score_record import ScoreRecord
from .repositories import ScoreRepository

logger = logging.getLogger(__name__)


def default_records() -> List[ScoreRecord]:
    """Placeholder entries used to seed a fresh installation."""
    return [ScoreRecord(name=name, points=points) for name, points in DEFAULT_SCORES]


class ScoreLedger:
    """
    Ordered collection of ScoreRecords, descending by points.

    Attributes:
        capacity: maximum number of records kept, or None for unbounded
        records: the sorted records (read via iteration / indexing)
    """

    def __init__(
        self,
        repository: Union[ScoreRepository, str, Path],
        capacity: Optional[int] = LEDGER_CAPACITY,
        records: Optional[List[ScoreRecord]] = None
    ):
        if capacity is not None and capacity < 1:
            raise ValueError(f"Ledger capacity must be positive or None, got {capacity}")
        if not isinstance(repository, ScoreRepository):
            repository = ScoreRepository(repository)
        self.repository = repository
        self.capacity = capacity
        self._records: List[ScoreRecord] = []
        for record in records or []:
            self.insert(record)

    # -------------------------------------------------------------------------
    # Ranking
    # -------------------------------------------------------------------------

    @property
    def records(self) -> List[ScoreRecord]:
        return list(self._records)

    @property
    def lowest(self) -> Optional[ScoreRecord]:
        return self._records[-1] if self._records else None

    def is_full(self) -> bool:
        return self.capacity is not None and len(self._records) >= self.capacity

    def insert(self, record: ScoreRecord) -> bool:
        """
        Insert a record, keeping the ledger sorted and bounded.

        Returns:
            True if the record was kept, False if it was discarded.
        """
        if self.is_full():
            if record.points < self._records[-1].points:
                logger.debug(f"Discarding score {record.points} for {record.name!r}: below lowest kept")
                return False
            evicted = self._records.pop()
            logger.debug(f"Evicting {evicted.name!r} ({evicted.points}) for {record.name!r} ({record.points})")

        self._records.append(record)
        # list.sort is stable, so equal scores keep their arrival order
        self._records.sort(key=lambda r: r.points, reverse=True)
        return True

    def top_n(self, n: int) -> List[ScoreRecord]:
        if n < 0:
            raise ValueError(f"n must be non-negative, got {n}")
        return self._records[:n]

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self) -> None:
        """
        Overwrite the score file with the full ordered list.

        Raises:
            OSError: if the file cannot be written; in-memory state is kept
        """
        self.repository.write_all(self._records)

    def load(self) -> None:
        """
        Replace in-memory records with the file's content.

        A missing file is seeded with the default entries, which are
        persisted straight away. An unreadable file is moved aside and
        seeded the same way. If the seed cannot be written, or the file
        exists but cannot be read at all, the ledger keeps the defaults in
        memory only.
        """
        try:
            stored = self.repository.read_all()
        except FileNotFoundError:
            logger.info(f"No score file at {self.repository.path}, seeding defaults")
            self._seed()
            return
        except ValueError as e:
            logger.warning(f"Score file {self.repository.path} is unreadable ({e}), seeding defaults")
            try:
                moved_to = self.repository.quarantine()
                logger.warning(f"Moved unreadable score file to {moved_to}")
            except OSError as move_error:
                logger.error(f"Could not move unreadable score file aside: {move_error}")
            self._seed()
            return
        except OSError as e:
            # Unreadable path (directory, permissions): keep defaults in memory only
            logger.warning(f"Cannot read score file {self.repository.path} ({e}), using defaults without saving")
            self._seed(persist=False)
            return

        self._records = []
        for record in stored:
            self.insert(record)
        logger.info(f"Loaded {len(self._records)} scores from {self.repository.path}")

    def record_game(self, record: ScoreRecord) -> bool:
        """
        Insert a finished game's record and persist the ledger.

        Returns:
            True if the record made it into the ledger.

        Raises:
            OSError: if the ledger could not be saved
        """
        kept = self.insert(record)
        if kept:
            logger.info(f"New high score: {record.name!r} with {record.points} points")
        self.save()
        return kept

    def _seed(self, persist: bool = True) -> None:
        self._records = []
        for record in default_records():
            self.insert(record)
        if not persist:
            return
        try:
            self.save()
        except OSError as e:
            logger.error(f"Could not persist default scores to {self.repository.path}: {e}")

    # -------------------------------------------------------------------------
    # Container helpers
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ScoreRecord]:
        return iter(list(self._records))

    def __getitem__(self, index: int) -> ScoreRecord:
        return self._records[index]

    def __repr__(self):
        scores = [r.points for r in self._records]
        return f"<ScoreLedger capacity={self.capacity}, scores={scores}>"
