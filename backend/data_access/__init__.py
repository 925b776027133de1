"""
Data access layer for the GridSnake score file.

This module provides the ranked score ledger and the file repository it
persists through.
"""

from domain.constants import LEDGER_CAPACITY
from .repositories import ScoreRepository
from .score_ledger import ScoreLedger, default_records


def open_ledger(path, capacity=LEDGER_CAPACITY) -> ScoreLedger:
    """Create a ledger backed by `path` and load it (seeding if absent)."""
    ledger = ScoreLedger(ScoreRepository(path), capacity=capacity)
    ledger.load()
    return ledger


__all__ = [
    'ScoreRepository',
    'ScoreLedger',
    'default_records',
    'open_ledger',
]
