"""
Replay engine - rebuilds a past game from its move and fruit logs.

The engine does not re-run scoring or collisions. Each tick it takes the
next logged head position; if that position is also the next logged fruit,
the body keeps its tail (growth), otherwise the tail is dropped. Identical
logs always produce identical frames.
"""

import logging
from collections import deque
from typing import Generic, Iterator, List, Optional, Sequence, Tuple, TypeVar

from domain.board_view import BoardView
from domain.constants import GRID_SIZE, TICK_SECONDS
from domain.grid import start_body
from domain.score_record import ScoreRecord
from .tick_clock import TickClock

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Replay states
AWAITING_START = "awaiting_start"
PLAYING = "playing"
PAUSED = "paused"
ENDED = "ended"


class LogCursor(Generic[T]):
    """Restartable, finite cursor over a log with peek-next semantics."""

    def __init__(self, items: Sequence[T]):
        self._items = list(items)
        self._index = 0

    def peek(self) -> Optional[T]:
        """Next item without consuming it, or None when exhausted."""
        if self._index < len(self._items):
            return self._items[self._index]
        return None

    def advance(self) -> T:
        if self.exhausted:
            raise IndexError("Cursor is exhausted")
        item = self._items[self._index]
        self._index += 1
        return item

    @property
    def exhausted(self) -> bool:
        return self._index >= len(self._items)

    @property
    def position(self) -> int:
        return self._index

    def reset(self) -> None:
        self._index = 0

    def __len__(self) -> int:
        return len(self._items)


def check_fits_board(record: ScoreRecord, size: int) -> None:
    """
    Make sure every logged cell lies on a size x size board.

    Records do not store the board they were played on, so a game from a
    larger board cannot be drawn on a smaller one.

    Raises:
        ValueError: if a move or fruit cell is outside [0, size)
    """
    for cell in record.moves + record.fruits:
        row, col = cell
        if not (0 <= row < size and 0 <= col < size):
            raise ValueError(
                f"Score entry {record.name!r} ({record.points} points) was recorded on a larger board: "
                f"cell {cell} does not fit a {size}x{size} grid"
            )


class ReplayEngine:
    """
    Plays back a ScoreRecord.

    States: AWAITING_START -> PLAYING <-> PAUSED, and PLAYING -> ENDED
    once every move has been consumed.

    Attributes:
        record: the game being replayed
        body: reconstructed snake, head first
        state: current replay state
        ticks: number of moves applied so far
    """

    def __init__(
        self,
        record: ScoreRecord,
        size: int = GRID_SIZE,
        start_positions: Optional[List[Tuple[int, int]]] = None,
        tick_seconds: float = TICK_SECONDS,
        ticker: Optional[TickClock] = None,
        start_paused: bool = True
    ):
        check_fits_board(record, size)
        self.record = record
        self.size = size
        self.start_positions = list(start_positions) if start_positions is not None else start_body(size)
        self.ticker = ticker or TickClock(tick_seconds)
        self.start_paused = start_paused
        self.moves: LogCursor[Tuple[int, int]] = LogCursor(record.moves)
        self.fruits: LogCursor[Tuple[int, int]] = LogCursor(record.fruits)
        self.restart()

    def restart(self) -> None:
        """Rewind both logs and the body to the start of the game."""
        self.moves.reset()
        self.fruits.reset()
        self.body = deque(self.start_positions)
        self.ticks = 0
        if self.moves.exhausted:
            self.state = ENDED
        elif self.start_paused:
            self.state = AWAITING_START
        else:
            self.state = PLAYING
        self.ticker.reset()

    @property
    def ended(self) -> bool:
        return self.state == ENDED

    @property
    def current_fruit(self) -> Optional[Tuple[int, int]]:
        """The fruit to draw: the next one the snake will eat."""
        return self.fruits.peek()

    def toggle_pause(self) -> str:
        if self.state in (AWAITING_START, PAUSED):
            self.state = PLAYING
        elif self.state == PLAYING:
            self.state = PAUSED
        return self.state

    def step(self) -> bool:
        """
        Apply the next logged move, regardless of the clock.

        Returns:
            True if the body grew on this move.

        Raises:
            ValueError: if the replay has already ended
        """
        if self.state == ENDED:
            raise ValueError("Replay has ended. Call restart() to play again.")

        grew = self.moves.peek() == self.fruits.peek()
        if grew:
            self.fruits.advance()
        elif self.body:
            self.body.pop()

        self.body.appendleft(self.moves.advance())
        self.ticks += 1

        if self.moves.exhausted:
            self.state = ENDED
            logger.debug(f"Replay of {self.record.name!r} ended after {self.ticks} moves")
        return grew

    def update(self, now: Optional[float] = None) -> bool:
        """
        Apply one move if the replay is playing and a tick interval has elapsed.

        Returns:
            True if a move was applied.
        """
        if self.state != PLAYING:
            return False
        if not self.ticker.ready(now):
            return False
        self.step()
        return True

    def view(self, overlay: Optional[List[str]] = None) -> BoardView:
        return BoardView(
            size=self.size,
            body=list(self.body),
            fruit=self.current_fruit,
            header=f"{self.record.name}  {self.record.points}",
            overlay=overlay,
        )

    def frames(self) -> Iterator[BoardView]:
        """
        Yield every frame of the replay, starting position first.

        Runs on a separate engine so the live playback state is untouched.
        """
        engine = ReplayEngine(
            self.record,
            size=self.size,
            start_positions=self.start_positions,
            ticker=TickClock(self.ticker.interval, clock=self.ticker.clock),
            start_paused=False,
        )
        yield engine.view()
        while not engine.ended:
            engine.step()
            yield engine.view()
