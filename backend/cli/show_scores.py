#!/usr/bin/env python3
"""
CLI tool to list the GridSnake high scores or replay one in the terminal

Usage:
    python show_scores.py
    python show_scores.py --replay 1
    python show_scores.py --replay 2 --delay 0.05
"""

import os
import sys
import time
import argparse
import logging

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import LOG_FORMAT, get_settings  # noqa: E402
from data_access import open_ledger  # noqa: E402
from data_access.score_ledger import ScoreLedger  # noqa: E402
from services.replay_engine import ReplayEngine  # noqa: E402
from services.screen_machine import format_score_line  # noqa: E402

logger = logging.getLogger(__name__)


def print_table(ledger: ScoreLedger) -> None:
    print(f"{'#':<4}{'Name':<12}{'Points':<8}Moves")
    for rank, record in enumerate(ledger, start=1):
        print(f"{rank:<4}{format_score_line(record):<20}{len(record.moves)}")


def print_replay(ledger: ScoreLedger, rank: int, size: int, delay: float) -> None:
    if not 1 <= rank <= len(ledger):
        raise ValueError(f"Rank {rank} out of range, ledger has {len(ledger)} entries")

    engine = ReplayEngine(ledger[rank - 1], size=size, start_paused=False)
    for frame_number, view in enumerate(engine.frames()):
        print(f"\nFrame {frame_number}")
        print(view.print_board())
        if delay > 0:
            time.sleep(delay)
    print("\nReplay ended!")


def main():
    parser = argparse.ArgumentParser(
        description='List GridSnake high scores or replay one as text',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--scores', type=str,
                        help='Path to the high score file (default: GRIDSNAKE_SCORES_PATH or Highscores.json)')
    parser.add_argument('--replay', type=int, metavar='RANK',
                        help='Print every frame of the game at this rank (1 is best)')
    parser.add_argument('--delay', type=float, default=0.0,
                        help='Seconds to wait between replay frames (default: 0)')
    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        ledger = open_ledger(args.scores or settings.scores_path, capacity=settings.ledger_capacity)
        if args.replay is None:
            print_table(ledger)
        else:
            print_replay(ledger, args.replay, settings.grid_size, args.delay)
    except KeyboardInterrupt:
        logger.info("\nCancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
