"""
Toroidal grid arithmetic.

Cells are (row, col) pairs. Moving past an edge wraps to the opposite edge.
"""

from typing import List, Tuple

from .constants import UP, DOWN, LEFT, RIGHT, GRID_SIZE

Cell = Tuple[int, int]

OPPOSITE = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}


def step(cell: Cell, direction: str, size: int = GRID_SIZE) -> Cell:
    """
    Return the wrapped neighbour of `cell` in `direction`.

    Args:
        cell: (row, col) to move from
        direction: One of UP, DOWN, LEFT, RIGHT
        size: Grid dimension N (the board is N x N)

    Returns:
        The neighbouring (row, col), wrapped modulo `size`.
    """
    row, col = cell
    if direction == UP:
        return ((row + size - 1) % size, col)
    if direction == DOWN:
        return ((row + 1) % size, col)
    if direction == LEFT:
        return (row, (col + size - 1) % size)
    if direction == RIGHT:
        return (row, (col + 1) % size)
    raise ValueError(f"Unknown direction: {direction!r}")


def start_body(size: int = GRID_SIZE) -> List[Cell]:
    """Starting snake body for a board of `size`, head first, facing UP."""
    col = size // 2
    return [(size - 4, col), (size - 3, col), (size - 2, col)]


def start_fruit(size: int = GRID_SIZE) -> Cell:
    """Starting fruit position for a board of `size`."""
    return (size // 3, size // 2)
