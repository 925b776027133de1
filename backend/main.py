"""
GridSnake interactive window.

Usage:
    python main.py
    python main.py --scores ./Highscores.json --tick 0.1 --seed 42

The window is a thin host: it turns pygame key events into InputEvents,
lets the ScreenMachine tick on wall-clock time, and blits the frame the
FrameRenderer draws for the active screen.
"""

import argparse
import logging
import random
import sys
import time
from typing import Optional

import pygame

from config import LOG_FORMAT, get_settings
from data_access import open_ledger
from domain.constants import UP, DOWN, LEFT, RIGHT
from services.frame_renderer import FrameRenderer
from services.screen_machine import (
    ScreenMachine, Screen, InputEvent,
    DIRECTION, PAUSE, CONFIRM, CANCEL, CHAR, BACKSPACE, PEEK_SCORES,
)

logger = logging.getLogger(__name__)

FPS = 60

ARROW_KEYS = {
    pygame.K_UP: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_RIGHT: RIGHT,
}

WASD_KEYS = {
    pygame.K_w: UP,
    pygame.K_s: DOWN,
    pygame.K_a: LEFT,
    pygame.K_d: RIGHT,
}


def translate_event(event: pygame.event.Event, screen: Screen) -> Optional[InputEvent]:
    """
    Map a pygame event to an InputEvent for the active screen.

    Letters are name input on the menu and WASD steering everywhere else.
    """
    if event.type == pygame.KEYUP and event.key == pygame.K_TAB:
        return InputEvent(PEEK_SCORES, False)
    if event.type != pygame.KEYDOWN:
        return None

    if event.key in ARROW_KEYS:
        return InputEvent(DIRECTION, ARROW_KEYS[event.key])
    if event.key == pygame.K_RETURN:
        return InputEvent(CONFIRM)
    if event.key == pygame.K_ESCAPE:
        return InputEvent(CANCEL)
    if event.key == pygame.K_TAB:
        return InputEvent(PEEK_SCORES, True)

    if screen == Screen.MENU:
        if event.key == pygame.K_BACKSPACE:
            return InputEvent(BACKSPACE)
        if event.unicode and event.unicode.isalpha():
            return InputEvent(CHAR, event.unicode)
        return None

    if event.key in WASD_KEYS:
        return InputEvent(DIRECTION, WASD_KEYS[event.key])
    if event.key == pygame.K_p:
        return InputEvent(PAUSE)
    return None


def run(machine: ScreenMachine, renderer: FrameRenderer) -> None:
    pygame.init()
    try:
        window = pygame.display.set_mode(renderer.frame_size)
        pygame.display.set_caption("Snake")
        clock = pygame.time.Clock()

        while machine.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    logger.info("Window closed")
                    return
                translated = translate_event(event, machine.state)
                if translated is not None:
                    machine.handle(translated)

            machine.update(time.monotonic())

            frame = renderer.render(machine.view())
            surface = pygame.image.frombytes(frame.tobytes(), frame.size, "RGB")
            window.blit(surface, (0, 0))
            pygame.display.flip()
            clock.tick(FPS)
    finally:
        pygame.quit()


def main():
    parser = argparse.ArgumentParser(description="Play GridSnake.")
    parser.add_argument("--scores", type=str, default=None,
                        help="Path to the high score file (default: GRIDSNAKE_SCORES_PATH or Highscores.json)")
    parser.add_argument("--tick", type=float, default=None,
                        help="Seconds between snake moves (default: GRIDSNAKE_TICK_SECONDS or 0.15)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for fruit placement")
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    scores_path = args.scores or settings.scores_path
    tick_seconds = args.tick if args.tick is not None else settings.tick_seconds
    if tick_seconds <= 0:
        parser.error("--tick must be positive")

    try:
        ledger = open_ledger(scores_path, capacity=settings.ledger_capacity)
        machine = ScreenMachine(
            ledger,
            size=settings.grid_size,
            tick_seconds=tick_seconds,
            rng=random.Random(args.seed),
        )
        run(machine, FrameRenderer(settings.grid_size))
    except KeyboardInterrupt:
        logger.info("\nCancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
