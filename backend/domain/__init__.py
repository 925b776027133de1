"""
Domain entities for the GridSnake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (score files, rendering, input).
"""

from .constants import UP, DOWN, LEFT, RIGHT, VALID_MOVES, GRID_SIZE
from .grid import step, start_body, start_fruit, OPPOSITE
from .fruit import Fruit
from .snake import Snake, CONTINUING, COLLIDED
from .score_record import ScoreRecord
from .board_view import BoardView

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'GRID_SIZE',
    'step', 'start_body', 'start_fruit', 'OPPOSITE',
    'Fruit',
    'Snake', 'CONTINUING', 'COLLIDED',
    'ScoreRecord',
    'BoardView',
]
