"""
Tests for screen transitions and input handling.
"""

import pytest
import random
import sys
import os
from unittest.mock import patch

# Add backend to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data_access import open_ledger
from domain import Snake, ScoreRecord, UP, DOWN, LEFT
from services.screen_machine import (
    ScreenMachine, Screen, InputEvent, format_score_line,
    DIRECTION, PAUSE, CONFIRM, CANCEL, CHAR, BACKSPACE, PEEK_SCORES,
    MENU_HIGHSCORES, MENU_QUIT,
)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def machine(tmp_path, clock):
    ledger = open_ledger(tmp_path / "Highscores.json")
    return ScreenMachine(ledger, tick_seconds=0.15, clock=clock, rng=random.Random(7))


def press(machine, kind, value=None):
    machine.handle(InputEvent(kind, value))


def type_name(machine, text):
    for char in text:
        press(machine, CHAR, char)


def start_playing(machine):
    press(machine, CONFIRM)  # menu -> paused
    press(machine, CONFIRM)  # paused -> playing


def crash_next_tick(machine, points=0):
    """Swap in a snake whose next move hits its own tail."""
    snake = Snake(machine.name, positions=[(5, 5), (5, 6), (6, 6), (6, 5)], direction=DOWN)
    snake.points = points
    machine.session.snake = snake


class TestMenu:
    """Tests for the menu screen."""

    def test_starts_on_menu(self, machine):
        """The machine opens on the menu with the name slot selected."""
        assert machine.state == Screen.MENU
        assert machine.running is True
        assert machine.view().menu == ["Name", "Highscores", "Quit"]

    def test_typing_name(self, machine):
        """Only single letters are accepted into the name."""
        type_name(machine, "Ann1!")
        assert machine.name == "Ann"
        assert machine.view().menu[0] == "Ann"

    def test_name_length_capped(self, machine):
        """Names stop growing at eleven characters."""
        type_name(machine, "abcdefghijklmnop")
        assert machine.name == "abcdefghijk"

    def test_backspace(self, machine):
        """Backspace removes the last character."""
        type_name(machine, "Bob")
        press(machine, BACKSPACE)
        assert machine.name == "Bo"

    def test_typing_ignored_off_name_slot(self, machine):
        """Letters only edit the name while it is selected."""
        press(machine, DIRECTION, DOWN)
        type_name(machine, "x")
        assert machine.name == ""

    def test_navigation_wraps(self, machine):
        """Up from the first item lands on the last."""
        press(machine, DIRECTION, UP)
        assert machine.menu_index == MENU_QUIT
        press(machine, DIRECTION, DOWN)
        assert machine.menu_index == 0

    def test_quit_item(self, machine):
        """Confirming Quit stops the machine."""
        press(machine, DIRECTION, UP)
        press(machine, CONFIRM)
        assert machine.state == Screen.QUIT
        assert machine.running is False

    def test_cancel_quits(self, machine):
        """Escape on the menu quits."""
        press(machine, CANCEL)
        assert machine.state == Screen.QUIT


class TestPlaying:
    """Tests for a game in progress."""

    def test_new_game_opens_paused(self, machine):
        """Confirming the name starts a paused game."""
        type_name(machine, "Ann")
        press(machine, CONFIRM)

        assert machine.state == Screen.PAUSED
        assert machine.session.snake.name == "Ann"
        assert machine.view().overlay == ["Press enter to continue!"]

    def test_paused_game_does_not_tick(self, machine, clock):
        """No moves while paused."""
        press(machine, CONFIRM)
        assert machine.update(1.0) is False
        assert machine.session.ticks == 0

    def test_ticks_follow_clock(self, machine, clock):
        """The snake moves once per elapsed interval."""
        start_playing(machine)

        assert machine.update(0.1) is False
        assert machine.update(0.15) is True
        assert machine.session.snake.head == (27, 16)
        assert machine.view().header == "Points: 0"

    def test_direction_input_turns(self, machine):
        """Direction events steer the snake."""
        start_playing(machine)
        press(machine, DIRECTION, LEFT)
        assert machine.session.snake.direction == LEFT

    def test_pause_toggle(self, machine):
        """Pause moves between PLAYING and PAUSED."""
        start_playing(machine)
        press(machine, PAUSE)
        assert machine.state == Screen.PAUSED
        press(machine, PAUSE)
        assert machine.state == Screen.PLAYING

    def test_peek_freezes_ticks(self, machine):
        """Holding the score overlay stops the game clock."""
        start_playing(machine)
        press(machine, PEEK_SCORES, True)

        assert machine.update(1.0) is False
        assert machine.view().overlay[0] == format_score_line(machine.ledger[0])

        press(machine, PEEK_SCORES, False)
        assert machine.update(2.0) is True

    def test_cancel_abandons_without_recording(self, machine, tmp_path):
        """Escape ends the game without touching the ledger."""
        start_playing(machine)
        machine.session.snake.points = 999
        before = (tmp_path / "Highscores.json").read_text(encoding="utf-8")

        press(machine, CANCEL)

        assert machine.state == Screen.GAME_OVER
        assert machine.last_record is None
        assert machine.ledger[0].points == 250
        assert (tmp_path / "Highscores.json").read_text(encoding="utf-8") == before

    def test_abandoned_game_says_so(self, machine):
        """The game-over screen after Escape does not claim a recorded score."""
        start_playing(machine)
        machine.session.snake.points = 40

        press(machine, CANCEL)

        overlay = machine.view().overlay
        assert overlay[0] == "Game abandoned"
        assert not any("points" in line for line in overlay)


class TestGameOver:
    """Tests for the end of a game."""

    def test_crash_records_high_score(self, machine):
        """A crash with a qualifying score enters the ledger."""
        type_name(machine, "Ann")
        start_playing(machine)
        crash_next_tick(machine, points=300)

        assert machine.update(0.15) is True

        assert machine.state == Screen.GAME_OVER
        assert machine.last_kept is True
        assert machine.ledger[0].name == "Ann"
        assert machine.view().overlay[0] == "Game over! 300 points"

    def test_crash_low_score_not_kept(self, machine):
        """A crash below the lowest score is not kept."""
        start_playing(machine)
        crash_next_tick(machine, points=0)
        machine.update(0.15)

        assert machine.state == Screen.GAME_OVER
        assert machine.last_kept is False
        assert [r.points for r in machine.ledger] == [250, 200, 150, 100, 50]

    def test_save_failure_reported(self, machine):
        """A failed save still ends the game and shows a notice."""
        start_playing(machine)
        crash_next_tick(machine, points=300)

        with patch.object(machine.ledger.repository, "write_all", side_effect=OSError("disk full")):
            machine.update(0.15)

        assert machine.state == Screen.GAME_OVER
        assert machine.save_failed is True
        assert "Score could not be saved." in machine.view().overlay

    def test_confirm_returns_to_menu(self, machine):
        """Confirm on the game-over screen goes back to the menu."""
        start_playing(machine)
        press(machine, CANCEL)
        press(machine, CONFIRM)

        assert machine.state == Screen.MENU
        assert machine.session is None

    def test_name_kept_for_next_game(self, machine):
        """The typed name survives a return to the menu."""
        type_name(machine, "Ann")
        start_playing(machine)
        press(machine, CANCEL)
        press(machine, CONFIRM)
        press(machine, CONFIRM)

        assert machine.state == Screen.PAUSED
        assert machine.session.snake.name == "Ann"


class TestHighscores:
    """Tests for the highscore browser and replay screens."""

    def open_browser(self, machine):
        machine.menu_index = MENU_HIGHSCORES
        press(machine, CONFIRM)

    def test_open_browser(self, machine):
        """The browser lists the top scores plus Return."""
        self.open_browser(machine)

        assert machine.state == Screen.HIGHSCORE_BROWSE
        items = machine.view().menu
        assert len(items) == 6
        assert items[0] == format_score_line(machine.ledger[0])
        assert items[-1] == "Return"

    def test_browser_picks_up_file_changes(self, machine):
        """Opening the browser reloads the score file."""
        machine.ledger.repository.write_all([ScoreRecord("Zed", 999)])
        self.open_browser(machine)
        assert machine.ledger[0].name == "Zed"

    def test_return_slot(self, machine):
        """Up from the first entry wraps to Return, which goes back to the menu."""
        self.open_browser(machine)
        press(machine, DIRECTION, UP)
        assert machine.browse_index == 5
        press(machine, CONFIRM)
        assert machine.state == Screen.MENU

    def test_replay_of_seeded_entry_ends_immediately(self, machine):
        """Seeded entries have no moves, so their replay is already over."""
        self.open_browser(machine)
        press(machine, CONFIRM)

        assert machine.state == Screen.REPLAY
        assert machine.view().overlay == ["Replay ended!", "Press Esc to return."]

    def test_replay_plays_recorded_game(self, machine, clock):
        """A recorded game replays after confirm and returns on Escape."""
        machine.ledger.record_game(ScoreRecord("Ann", 300, moves=[(27, 16), (26, 16)], fruits=[(10, 16)]))
        self.open_browser(machine)
        press(machine, CONFIRM)

        assert machine.view().overlay == ["Press enter to continue!"]
        press(machine, CONFIRM)
        assert machine.update(0.15) is True
        assert machine.view().body[0] == (27, 16)

        press(machine, CANCEL)
        assert machine.state == Screen.HIGHSCORE_BROWSE
        assert machine.replay is None

    def test_oversized_record_stays_on_list(self, tmp_path, clock):
        """A game from a larger board is refused with a notice on a smaller board."""
        ledger = open_ledger(tmp_path / "Highscores.json")
        ledger.record_game(ScoreRecord("Ann", 300, moves=[(27, 16), (26, 16)], fruits=[(10, 16)]))
        machine = ScreenMachine(ledger, size=16, tick_seconds=0.15, clock=clock)
        self.open_browser(machine)

        press(machine, CONFIRM)

        assert machine.state == Screen.HIGHSCORE_BROWSE
        assert machine.replay is None
        assert machine.view().overlay == ["Replay needs a larger board."]

        press(machine, DIRECTION, DOWN)
        assert machine.view().overlay == []

    def test_unreadable_score_path_does_not_crash(self, tmp_path, clock):
        """Opening the list with an unreadable score path shows the defaults."""
        scores_path = tmp_path / "Highscores.json"
        scores_path.mkdir()
        machine = ScreenMachine(open_ledger(scores_path), tick_seconds=0.15, clock=clock)

        self.open_browser(machine)

        assert machine.state == Screen.HIGHSCORE_BROWSE
        assert machine.view().menu[0] == format_score_line(ScoreRecord("Anaconda", 250))
