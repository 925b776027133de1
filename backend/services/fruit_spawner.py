"""
Fruit placement and value ramp.
"""

import random
from typing import Container, Optional, Tuple

from domain.constants import GRID_SIZE, FRUIT_VALUE_STEP, LEVEL_UP_FACTOR
from domain.fruit import Fruit


class FruitSpawner:
    """
    Places fruit on free cells and raises its value as the score grows.

    Args:
        size: board dimension
        rng: random source, injectable so games can be seeded
    """

    def __init__(self, size: int = GRID_SIZE, rng: Optional[random.Random] = None):
        self.size = size
        self.rng = rng or random.Random()

    def respawn(self, forbidden: Container[Tuple[int, int]]) -> Tuple[int, int]:
        """
        Return a random (row, col) that is not in `forbidden`.

        Row and column are sampled independently until a free cell comes
        up. A completely full board would never return.
        """
        while True:
            row = self.rng.randrange(self.size)
            col = self.rng.randrange(self.size)
            if (row, col) not in forbidden:
                return (row, col)

    def maybe_level_up(self, fruit: Fruit, score: int) -> bool:
        """
        Raise the fruit's value once the score reaches 20x its value.

        Returns:
            True if the value was raised.
        """
        if score >= LEVEL_UP_FACTOR * fruit.value:
            fruit.value += FRUIT_VALUE_STEP
            return True
        return False
