"""
BoardView - a read-only snapshot of what a screen shows.
"""

from typing import List, Tuple, Optional


class BoardView:
    """
    What the rendering collaborator needs for one frame.

    Attributes:
        size: board dimension (size x size)
        body: list of (row, col), head first; may be empty on menu screens
        fruit: (row, col) of the fruit, or None when there is nothing to draw
        header: short text drawn above the board (score, player name)
        overlay: lines drawn on top of the board (prompts, score table)
        menu: selectable items drawn in a panel
        selected: index into `menu` of the highlighted item
    """

    def __init__(
        self,
        size: int,
        body: Optional[List[Tuple[int, int]]] = None,
        fruit: Optional[Tuple[int, int]] = None,
        header: str = "",
        overlay: Optional[List[str]] = None,
        menu: Optional[List[str]] = None,
        selected: Optional[int] = None
    ):
        self.size = size
        self.body = list(body or [])
        self.fruit = fruit
        self.header = header
        self.overlay = list(overlay or [])
        self.menu = list(menu or [])
        self.selected = selected

    @property
    def head(self) -> Optional[Tuple[int, int]]:
        return self.body[0] if self.body else None

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = fruit
        o = snake body
        H = snake head
        Row 0 is printed at the top, matching the UP = row - 1 convention.
        """
        board = [['.' for _ in range(self.size)] for _ in range(self.size)]

        if self.fruit is not None:
            fr, fc = self.fruit
            board[fr][fc] = 'F'

        # Draw tail first so the head wins on a collision frame
        for row, col in reversed(self.body[1:]):
            board[row][col] = 'o'
        if self.head is not None:
            hr, hc = self.head
            board[hr][hc] = 'H'

        result = []
        if self.header:
            result.append(self.header)
        for row in range(self.size):
            result.append(f"{row:2d} {''.join(board[row])}")
        result.extend(self.overlay)

        return "\n".join(result)

    def __repr__(self):
        return (
            f"<BoardView header={self.header!r}, length={len(self.body)}, "
            f"fruit={self.fruit}, overlay={len(self.overlay)} lines>"
        )
