"""
Video export for GridSnake replays

Generates an MP4 from a stored ScoreRecord by:
1. Reconstructing every frame with the ReplayEngine
2. Rendering each frame using the Pillow FrameRenderer
3. Encoding frames to video using MoviePy/FFmpeg
"""

import logging
import os
import tempfile
from typing import List, Optional

import numpy as np
from moviepy import ImageSequenceClip

from domain.constants import GRID_SIZE, TICK_SECONDS
from domain.score_record import ScoreRecord
from .frame_renderer import FrameRenderer, CELL_SIZE
from .replay_engine import ReplayEngine

logger = logging.getLogger(__name__)

# One replay tick per frame by default
DEFAULT_FPS = round(1 / TICK_SECONDS)


class ReplayVideoGenerator:
    """Generate MP4 videos from score ledger replays"""

    def __init__(self, size: int = GRID_SIZE, fps: int = DEFAULT_FPS, cell_size: int = CELL_SIZE):
        if fps <= 0:
            raise ValueError(f"fps must be positive, got {fps}")
        self.size = size
        self.fps = fps
        self.renderer = FrameRenderer(size, cell_size=cell_size)

    def render_frames(self, record: ScoreRecord) -> List[np.ndarray]:
        """Render every replay frame as an RGB array."""
        engine = ReplayEngine(record, size=self.size, start_paused=False)
        frames = []
        for i, view in enumerate(engine.frames()):
            if i % 50 == 0:
                logger.info(f"Rendering frame {i + 1}/{len(record.moves) + 1}")
            frames.append(np.array(self.renderer.render(view)))
        return frames

    def generate_video(self, record: ScoreRecord, output_path: Optional[str] = None) -> str:
        """
        Generate a video from a score record's replay

        Args:
            record: The game to replay
            output_path: Optional output path (if None, uses temp file)

        Returns:
            Path to the generated video file
        """
        logger.info(f"Starting video generation for {record.name!r} ({record.points} points)")

        frames = self.render_frames(record)
        logger.info(f"Rendered {len(frames)} frames, creating video...")

        if output_path is None:
            safe_name = "".join(c for c in record.name if c.isalnum()) or "player"
            output_path = os.path.join(tempfile.gettempdir(), f"{safe_name}_{record.points}_replay.mp4")

        clip = ImageSequenceClip(frames, fps=self.fps)
        clip.write_videofile(
            output_path,
            codec='libx264',
            audio=False,
            logger=None
        )

        logger.info(f"Video created successfully at {output_path}")
        return output_path
