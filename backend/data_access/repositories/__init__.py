"""
Repository pattern implementations for file access.
"""

from .base import BaseRepository
from .score_repository import ScoreRepository

__all__ = [
    'BaseRepository',
    'ScoreRepository',
]
