"""
Game session - runs one game of snake from start to collision.

Manages:
  - The snake and its logs
  - The single fruit, its placement and value
  - Growth on eating
  - The final ScoreRecord handed to the ledger
"""

import logging
from typing import Optional

from domain.constants import GRID_SIZE
from domain.fruit import Fruit
from domain.grid import start_fruit
from domain.score_record import ScoreRecord
from domain.snake import Snake, COLLIDED
from .fruit_spawner import FruitSpawner

logger = logging.getLogger(__name__)

# Outcomes of GameSession.tick()
MOVED = "moved"
ATE = "ate"
CRASHED = "crashed"


class GameSession:
    """
    One game in progress.

    Attributes:
        snake: the player's snake
        fruit: the active fruit
        spawner: places fruit and ramps its value
        game_over: set once the snake has collided
        ticks: number of ticks played
    """

    def __init__(
        self,
        name: str,
        size: int = GRID_SIZE,
        spawner: Optional[FruitSpawner] = None
    ):
        self.size = size
        self.snake = Snake(name=name, size=size)
        self.fruit = Fruit(start_fruit(size))
        self.spawner = spawner or FruitSpawner(size)
        self.game_over = False
        self.ticks = 0

    def turn(self, direction: str) -> bool:
        if self.game_over:
            return False
        return self.snake.turn(direction)

    def tick(self) -> str:
        """
        Execute one tick:
          1) Advance the snake
          2) On collision, log the fruit's resting place and end the game
          3) On reaching the fruit, score it, move it and maybe raise its value
          4) Otherwise drop the tail

        Returns:
            MOVED, ATE or CRASHED
        """
        if self.game_over:
            raise ValueError("Game is already over. Start a new session.")

        self.ticks += 1
        if self.snake.advance() == COLLIDED:
            # Keeps the fruit log one entry ahead so replays can draw the last fruit
            self.snake.record_fruit(self.fruit.position)
            self.game_over = True
            logger.info(f"Game over for {self.snake.name!r}: {self.snake.points} points after {self.ticks} ticks")
            return CRASHED

        if self.snake.head == self.fruit.position:
            self._eat_fruit()
            return ATE

        self.snake.pop_tail()
        return MOVED

    def _eat_fruit(self) -> None:
        self.snake.add_points(self.fruit.value)
        self.snake.record_fruit(self.fruit.position)
        self.fruit.move_to(self.spawner.respawn(self.snake.positions))
        if self.spawner.maybe_level_up(self.fruit, self.snake.points):
            logger.debug(f"Fruit value raised to {self.fruit.value} at {self.snake.points} points")

    def result(self) -> ScoreRecord:
        return self.snake.snapshot()

    def __repr__(self):
        return (
            f"<GameSession name={self.snake.name!r}, ticks={self.ticks}, "
            f"points={self.snake.points}, game_over={self.game_over}>"
        )
