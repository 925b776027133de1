"""
Screen state machine - which screen is active and how input moves between them.

Each screen owns its own state (menu selection, game session, replay).
Leaving a screen drops that state; the only write that survives is the
ledger update at the end of a game.
"""

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from data_access.score_ledger import ScoreLedger
from domain.board_view import BoardView
from domain.constants import (
    UP, DOWN, GRID_SIZE, TICK_SECONDS, NAME_MAX_LENGTH, LEDGER_DISPLAY_COUNT,
)
from domain.score_record import ScoreRecord
from .fruit_spawner import FruitSpawner
from .game_session import GameSession, CRASHED
from .replay_engine import ReplayEngine, ENDED as REPLAY_ENDED, PLAYING as REPLAY_PLAYING
from .tick_clock import TickClock

logger = logging.getLogger(__name__)

# Input event kinds
DIRECTION = "direction"
PAUSE = "pause"
CONFIRM = "confirm"
CANCEL = "cancel"
CHAR = "char"
BACKSPACE = "backspace"
PEEK_SCORES = "peek_scores"

MENU_ITEMS = ["Name", "Highscores", "Quit"]
MENU_NAME, MENU_HIGHSCORES, MENU_QUIT = range(3)


class Screen(Enum):
    MENU = "menu"
    PLAYING = "playing"
    PAUSED = "paused"
    HIGHSCORE_BROWSE = "highscore_browse"
    REPLAY = "replay"
    GAME_OVER = "game_over"
    QUIT = "quit"


@dataclass(frozen=True)
class InputEvent:
    """A discrete input produced by the host: kind plus optional value."""
    kind: str
    value: Any = None


def format_score_line(record: ScoreRecord) -> str:
    return f"{record.name:<12}{record.points}"


class ScreenMachine:
    """
    Drives the game's screens from input events and clock ticks.

    Attributes:
        state: the active Screen
        name: player name typed on the menu
        session: current GameSession while playing, paused or game over
        replay: current ReplayEngine while on the replay screen
        last_record: the record produced by the most recent finished game, None if abandoned
        browse_notice: message shown on the highscore list when a replay cannot open
    """

    def __init__(
        self,
        ledger: ScoreLedger,
        size: int = GRID_SIZE,
        tick_seconds: float = TICK_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        rng: Optional[random.Random] = None
    ):
        self.ledger = ledger
        self.size = size
        self.tick_seconds = tick_seconds
        self.clock = clock
        self.rng = rng or random.Random()

        self.state = Screen.MENU
        self.name = ""
        self.menu_index = MENU_NAME
        self.browse_index = 0
        self.browse_notice: Optional[str] = None
        self.session: Optional[GameSession] = None
        self.replay: Optional[ReplayEngine] = None
        self.ticker: Optional[TickClock] = None
        self.peeking = False
        self.last_record: Optional[ScoreRecord] = None
        self.last_kept = False
        self.save_failed = False

        self._handlers: Dict[Screen, Callable[[InputEvent], None]] = {
            Screen.MENU: self._handle_menu,
            Screen.PLAYING: self._handle_playing,
            Screen.PAUSED: self._handle_paused,
            Screen.GAME_OVER: self._handle_game_over,
            Screen.HIGHSCORE_BROWSE: self._handle_browse,
            Screen.REPLAY: self._handle_replay,
        }

    @property
    def running(self) -> bool:
        return self.state != Screen.QUIT

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _enter(self, state: Screen) -> None:
        if state != self.state:
            logger.debug(f"Screen {self.state.value} -> {state.value}")
        self.state = state

    def _start_game(self) -> None:
        self.session = GameSession(self.name, size=self.size, spawner=FruitSpawner(self.size, self.rng))
        self.ticker = TickClock(self.tick_seconds, clock=self.clock)
        self.peeking = False
        self.last_record = None
        self.last_kept = False
        self.save_failed = False
        logger.info(f"Starting new game for {self.name!r}")
        # New games open paused, waiting for the player to confirm
        self._enter(Screen.PAUSED)

    def _abandon_game(self) -> None:
        logger.info("Game abandoned, score not recorded")
        self.peeking = False
        self._enter(Screen.GAME_OVER)

    def _finish_game(self) -> None:
        record = self.session.result()
        self.last_record = record
        self.peeking = False
        try:
            self.last_kept = self.ledger.record_game(record)
        except OSError as e:
            self.save_failed = True
            logger.error(f"Could not save score for {record.name!r}: {e}")
        self._enter(Screen.GAME_OVER)

    def _open_highscores(self) -> None:
        self.ledger.load()
        self.browse_index = 0
        self.browse_notice = None
        self._enter(Screen.HIGHSCORE_BROWSE)

    def _browse_records(self) -> List[ScoreRecord]:
        return self.ledger.top_n(LEDGER_DISPLAY_COUNT)

    def _open_replay(self, record: ScoreRecord) -> None:
        try:
            self.replay = ReplayEngine(
                record,
                size=self.size,
                ticker=TickClock(self.tick_seconds, clock=self.clock),
            )
        except ValueError as e:
            logger.warning(f"Cannot replay {record.name!r}: {e}")
            self.browse_notice = "Replay needs a larger board."
            return
        logger.info(f"Replaying {record.name!r} ({record.points} points, {len(record.moves)} moves)")
        self._enter(Screen.REPLAY)

    # -------------------------------------------------------------------------
    # Input
    # -------------------------------------------------------------------------

    def handle(self, event: InputEvent) -> None:
        handler = self._handlers.get(self.state)
        if handler is not None:
            handler(event)

    def _handle_menu(self, event: InputEvent) -> None:
        if event.kind == DIRECTION and event.value == UP:
            self.menu_index = (self.menu_index - 1) % len(MENU_ITEMS)
        elif event.kind == DIRECTION and event.value == DOWN:
            self.menu_index = (self.menu_index + 1) % len(MENU_ITEMS)
        elif event.kind == CHAR and self.menu_index == MENU_NAME:
            char = event.value or ""
            if len(char) == 1 and char.isalpha() and len(self.name) < NAME_MAX_LENGTH:
                self.name += char
        elif event.kind == BACKSPACE and self.menu_index == MENU_NAME:
            self.name = self.name[:-1]
        elif event.kind == CONFIRM:
            if self.menu_index == MENU_NAME:
                self._start_game()
            elif self.menu_index == MENU_HIGHSCORES:
                self._open_highscores()
            else:
                self._enter(Screen.QUIT)
        elif event.kind == CANCEL:
            self._enter(Screen.QUIT)

    def _handle_playing(self, event: InputEvent) -> None:
        if event.kind == DIRECTION:
            self.session.turn(event.value)
        elif event.kind in (CONFIRM, PAUSE):
            self._enter(Screen.PAUSED)
        elif event.kind == CANCEL:
            self._abandon_game()
        elif event.kind == PEEK_SCORES:
            self.peeking = bool(event.value)

    def _handle_paused(self, event: InputEvent) -> None:
        if event.kind in (CONFIRM, PAUSE):
            self._enter(Screen.PLAYING)
        elif event.kind == CANCEL:
            self._abandon_game()
        elif event.kind == PEEK_SCORES:
            self.peeking = bool(event.value)

    def _handle_game_over(self, event: InputEvent) -> None:
        if event.kind in (CONFIRM, CANCEL):
            self.session = None
            self.ticker = None
            self.menu_index = MENU_NAME
            self._enter(Screen.MENU)

    def _handle_browse(self, event: InputEvent) -> None:
        records = self._browse_records()
        self.browse_notice = None
        # One extra slot for "Return"
        slots = len(records) + 1
        if event.kind == DIRECTION and event.value == UP:
            self.browse_index = (self.browse_index - 1) % slots
        elif event.kind == DIRECTION and event.value == DOWN:
            self.browse_index = (self.browse_index + 1) % slots
        elif event.kind == CONFIRM:
            if self.browse_index < len(records):
                self._open_replay(records[self.browse_index])
            else:
                self._enter(Screen.MENU)
        elif event.kind == CANCEL:
            self._enter(Screen.MENU)

    def _handle_replay(self, event: InputEvent) -> None:
        if event.kind in (CONFIRM, PAUSE):
            self.replay.toggle_pause()
        elif event.kind == CANCEL:
            self.replay = None
            self._enter(Screen.HIGHSCORE_BROWSE)

    # -------------------------------------------------------------------------
    # Clock
    # -------------------------------------------------------------------------

    def update(self, now: Optional[float] = None) -> bool:
        """
        Advance the active screen by at most one tick.

        Returns:
            True if game or replay state changed.
        """
        if now is None:
            now = self.clock()

        if self.state == Screen.PLAYING:
            if self.peeking or not self.ticker.ready(now):
                return False
            if self.session.tick() == CRASHED:
                self._finish_game()
            return True

        if self.state == Screen.REPLAY:
            return self.replay.update(now)

        return False

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _score_table(self) -> List[str]:
        return [format_score_line(r) for r in self.ledger.top_n(LEDGER_DISPLAY_COUNT)]

    def view(self) -> BoardView:
        """What the renderer should draw for the active screen."""
        if self.state == Screen.MENU:
            items = [self.name or MENU_ITEMS[MENU_NAME]] + MENU_ITEMS[1:]
            return BoardView(self.size, menu=items, selected=self.menu_index)

        if self.state == Screen.HIGHSCORE_BROWSE:
            items = self._score_table() + ["Return"]
            notice = [self.browse_notice] if self.browse_notice else None
            return BoardView(self.size, menu=items, selected=self.browse_index, overlay=notice)

        if self.state == Screen.REPLAY:
            overlay: List[str] = []
            if self.replay.state == REPLAY_ENDED:
                overlay = ["Replay ended!", "Press Esc to return."]
            elif self.replay.state != REPLAY_PLAYING:
                overlay = ["Press enter to continue!"]
            return self.replay.view(overlay)

        if self.state in (Screen.PLAYING, Screen.PAUSED, Screen.GAME_OVER):
            snake = self.session.snake
            overlay = []
            if self.state == Screen.GAME_OVER:
                if self.last_record is None:
                    overlay = ["Game abandoned", "Press enter to start a new game!"]
                else:
                    overlay = [f"Game over! {snake.points} points", "Press enter to start a new game!"]
                if self.save_failed:
                    overlay.append("Score could not be saved.")
            elif self.peeking:
                overlay = self._score_table()
            elif self.state == Screen.PAUSED:
                overlay = ["Press enter to continue!"]
            return BoardView(
                self.size,
                body=list(snake.positions),
                fruit=self.session.fruit.position,
                header=f"Points: {snake.points}",
                overlay=overlay,
            )

        return BoardView(self.size)
