"""
Fruit entity - the single piece of food on the board.
"""

from typing import Optional, Tuple

from .constants import FRUIT_START_VALUE, GRID_SIZE
from .grid import start_fruit


class Fruit:
    """
    The active fruit.

    Attributes:
        position: (row, col) of the fruit
        value: points awarded when eaten
    """

    def __init__(self, position: Optional[Tuple[int, int]] = None, value: int = FRUIT_START_VALUE):
        self.position = tuple(position) if position is not None else start_fruit(GRID_SIZE)
        self.value = value

    def move_to(self, position: Tuple[int, int]) -> None:
        self.position = tuple(position)

    def __repr__(self):
        return f"<Fruit position={self.position}, value={self.value}>"
