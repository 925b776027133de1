#!/usr/bin/env python3
"""
CLI tool to generate videos from GridSnake high score replays

Usage:
    python generate_video.py [--rank N]
    python generate_video.py --scores <path_to_Highscores.json> --rank N

Examples:
    # Export the best game in the default score file
    python generate_video.py

    # Export the third-best game
    python generate_video.py --rank 3

    # Custom output path
    python generate_video.py --rank 2 --output ./my_video.mp4

    # Custom video settings
    python generate_video.py --fps 4 --cell-size 30
"""

import os
import sys
import argparse
import logging

# Add parent directory to path for imports
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import LOG_FORMAT, get_settings  # noqa: E402
from data_access import open_ledger  # noqa: E402
from services.frame_renderer import CELL_SIZE  # noqa: E402
from services.replay_video import ReplayVideoGenerator, DEFAULT_FPS  # noqa: E402

logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description='Generate MP4 videos from GridSnake high score replays',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    parser.add_argument(
        '--scores',
        type=str,
        help='Path to the high score file (default: GRIDSNAKE_SCORES_PATH or Highscores.json)'
    )
    parser.add_argument(
        '--rank',
        type=int,
        default=1,
        help='Ledger rank to export, 1 is the best game (default: 1)'
    )
    parser.add_argument(
        '--output', '-o',
        type=str,
        help='Output video file path (default: temp directory)'
    )
    parser.add_argument(
        '--fps',
        type=int,
        default=DEFAULT_FPS,
        help=f'Frames per second (default: {DEFAULT_FPS})'
    )
    parser.add_argument(
        '--cell-size',
        type=int,
        default=CELL_SIZE,
        help=f'Size of each grid cell in pixels (default: {CELL_SIZE})'
    )

    args = parser.parse_args()

    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    try:
        ledger = open_ledger(args.scores or settings.scores_path, capacity=settings.ledger_capacity)
        if not 1 <= args.rank <= len(ledger):
            raise ValueError(f"Rank {args.rank} out of range, ledger has {len(ledger)} entries")

        record = ledger[args.rank - 1]
        if not record.moves:
            raise ValueError(f"Entry {args.rank} ({record.name!r}) has no recorded moves to replay")

        generator = ReplayVideoGenerator(
            size=settings.grid_size,
            fps=args.fps,
            cell_size=args.cell_size
        )

        logger.info(f"Generating video for rank {args.rank}: {record.name!r} with {record.points} points...")
        video_path = generator.generate_video(record, output_path=args.output)

        logger.info(f"[OK] Video generated successfully: {video_path}")
        logger.info("Done!")

    except KeyboardInterrupt:
        logger.info("\nCancelled by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
