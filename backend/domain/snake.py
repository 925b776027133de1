"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple, Optional

from .constants import GRID_SIZE, START_DIRECTION, VALID_MOVES
from .grid import step, start_body
from .score_record import ScoreRecord

# Outcomes of Snake.advance()
CONTINUING = "continuing"
COLLIDED = "collided"


class Snake:
    """
    Represents the player's snake on a toroidal board.

    Attributes:
        name: player name recorded with the final score
        positions: deque of (row, col) from head at index 0 to tail at the end
        direction: current heading, one of UP/DOWN/LEFT/RIGHT
        points: accumulated score
        moves: every head position visited, including a colliding one
        fruits: every fruit position eaten, plus the resting fruit at game end
        size: board dimension
    """

    def __init__(
        self,
        name: str = "",
        positions: Optional[List[Tuple[int, int]]] = None,
        direction: str = START_DIRECTION,
        size: int = GRID_SIZE
    ):
        if direction not in VALID_MOVES:
            raise ValueError(f"Unknown direction: {direction!r}")
        self.name = name
        self.positions = deque(positions if positions is not None else start_body(size))
        self.direction = direction
        self.size = size
        self.points = 0
        self.moves: List[Tuple[int, int]] = []
        self.fruits: List[Tuple[int, int]] = []

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    def turn(self, direction: str) -> bool:
        """
        Change heading unless it would reverse straight into the neck.

        The check compares the cell the head would step into against the
        segment right behind the head, so several turns queued inside one
        tick can never fold the snake back onto itself.

        Returns:
            True if the heading was changed.
        """
        if direction not in VALID_MOVES:
            raise ValueError(f"Unknown direction: {direction!r}")
        if len(self.positions) > 1 and step(self.head, direction, self.size) == self.positions[1]:
            return False
        self.direction = direction
        return True

    def advance(self) -> str:
        """
        Move the head one cell forward.

        The tail is not removed here: growth depends on the fruit, which the
        caller owns, so the caller pops the tail when nothing was eaten.
        The body is tested before any tail removal, so the cell the tail is
        about to vacate still counts as occupied.

        Returns:
            COLLIDED if the new head lands on the body, else CONTINUING.
            The new head is logged and pushed in both cases.
        """
        new_head = step(self.head, self.direction, self.size)
        collided = new_head in self.positions

        self.positions.appendleft(new_head)
        self.moves.append(new_head)

        return COLLIDED if collided else CONTINUING

    def pop_tail(self) -> Tuple[int, int]:
        return self.positions.pop()

    def add_points(self, points: int) -> None:
        if points < 0:
            raise ValueError(f"Points must be non-negative, got {points}")
        self.points += points

    def record_fruit(self, position: Tuple[int, int]) -> None:
        self.fruits.append(tuple(position))

    def snapshot(self) -> ScoreRecord:
        """Project the current name, score and logs into a ScoreRecord."""
        return ScoreRecord(
            name=self.name,
            points=self.points,
            moves=list(self.moves),
            fruits=list(self.fruits),
        )

    def __repr__(self):
        return (
            f"<Snake name={self.name!r}, head={self.head}, length={len(self.positions)}, "
            f"direction={self.direction}, points={self.points}>"
        )
