"""
Frame rendering for GridSnake

Draws a BoardView to an RGB image with Pillow. The same frames are blitted
by the interactive window and encoded by the replay video exporter.

Layout matches the classic window:
- Black background with a dark grid
- Dark green body, bright green head, red fruit
- Blue header text above the board
- Grey panel with selectable boxes for menus
- White prompt lines over the board
"""

import logging
from typing import List, Tuple

from PIL import Image, ImageDraw, ImageFont

from domain.board_view import BoardView

logger = logging.getLogger(__name__)

CELL_SIZE = 20
OFFSET_X = 40
OFFSET_Y = 60
FONT_CANDIDATES = ["DejaVuSans.ttf", "/System/Library/Fonts/Helvetica.ttc", "Arial.ttf"]


class ColorScheme:
    """Color configuration matching the classic window"""

    BACKGROUND = "#000000"
    GRID_LINE = "#505050"
    BODY = "#006429"
    HEAD = "#00E430"
    FRUIT = "#E62937"
    HEADER_TEXT = "#0079F1"
    PROMPT_TEXT = "#FFFFFF"
    PROMPT_BG = "#202020"
    PANEL_BG = "#505050"
    MENU_BOX = "#0052AC"
    MENU_BOX_SELECTED = "#006429"
    MENU_TEXT = "#E62937"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple"""
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def _load_font(size: int):
    for candidate in FONT_CANDIDATES:
        try:
            return ImageFont.truetype(candidate, size)
        except OSError:
            continue
    logger.debug("No TrueType font found, using Pillow's default font")
    return ImageFont.load_default()


class FrameRenderer:
    """Render BoardViews to Pillow images"""

    def __init__(self, size: int, cell_size: int = CELL_SIZE, offset_x: int = OFFSET_X, offset_y: int = OFFSET_Y):
        self.size = size
        self.cell_size = cell_size
        self.offset_x = offset_x
        self.offset_y = offset_y

        board_px = size * cell_size
        self.width = 2 * offset_x + board_px
        self.height = offset_y + board_px + offset_x // 2

        self.font_large = _load_font(max(12, cell_size * 2))
        self.font_medium = _load_font(max(10, int(cell_size * 1.5)))

    @property
    def frame_size(self) -> Tuple[int, int]:
        return (self.width, self.height)

    def render(self, view: BoardView) -> Image.Image:
        """Render a single frame"""
        img = Image.new('RGB', self.frame_size, hex_to_rgb(ColorScheme.BACKGROUND))
        draw = ImageDraw.Draw(img)

        self._draw_grid(draw)

        if view.fruit is not None:
            self._draw_cell(draw, view.fruit, hex_to_rgb(ColorScheme.FRUIT))
        for cell in view.body[1:]:
            self._draw_cell(draw, cell, hex_to_rgb(ColorScheme.BODY))
        if view.head is not None:
            self._draw_cell(draw, view.head, hex_to_rgb(ColorScheme.HEAD))

        if view.header:
            self._draw_centered(draw, view.header, self.offset_y // 2, self.font_medium,
                                hex_to_rgb(ColorScheme.HEADER_TEXT))

        if view.menu:
            self._draw_menu(draw, view.menu, view.selected)

        if view.overlay:
            self._draw_overlay(draw, view.overlay)

        return img

    def _cell_origin(self, cell: Tuple[int, int]) -> Tuple[int, int]:
        row, col = cell
        return (self.offset_x + col * self.cell_size, self.offset_y + row * self.cell_size)

    def _draw_grid(self, draw: ImageDraw.ImageDraw):
        board_px = self.size * self.cell_size
        color = hex_to_rgb(ColorScheme.GRID_LINE)
        for i in range(self.size + 1):
            x = self.offset_x + i * self.cell_size
            y = self.offset_y + i * self.cell_size
            draw.line([x, self.offset_y, x, self.offset_y + board_px], fill=color, width=1)
            draw.line([self.offset_x, y, self.offset_x + board_px, y], fill=color, width=1)

    def _draw_cell(self, draw: ImageDraw.ImageDraw, cell: Tuple[int, int], color: Tuple[int, int, int], padding: int = 1):
        """Draw a single cell (for snake body or fruit)"""
        x, y = self._cell_origin(cell)
        size = self.cell_size
        draw.rectangle([x + padding, y + padding, x + size - padding, y + size - padding], fill=color)

    def _text_width(self, draw: ImageDraw.ImageDraw, text: str, font) -> int:
        bbox = draw.textbbox((0, 0), text, font=font)
        return bbox[2] - bbox[0]

    def _draw_centered(self, draw: ImageDraw.ImageDraw, text: str, y: int, font, fill):
        text_width = self._text_width(draw, text, font)
        draw.text((self.width // 2 - text_width // 2, y), text, fill=fill, font=font)

    def _draw_menu(self, draw: ImageDraw.ImageDraw, items: List[str], selected):
        board_px = self.size * self.cell_size
        margin = board_px // 12
        left = self.offset_x + margin
        right = self.offset_x + board_px - margin
        top = self.offset_y + margin
        bottom = self.offset_y + board_px - margin
        draw.rectangle([left, top, right, bottom], fill=hex_to_rgb(ColorScheme.PANEL_BG))

        slot = (bottom - top) // max(len(items), 1)
        box_height = max(self.cell_size, int(slot * 0.7))
        for i, item in enumerate(items):
            box_top = top + i * slot + (slot - box_height) // 2
            color = ColorScheme.MENU_BOX_SELECTED if i == selected else ColorScheme.MENU_BOX
            draw.rectangle([left + margin, box_top, right - margin, box_top + box_height], fill=hex_to_rgb(color))
            self._draw_centered(draw, item, box_top + box_height // 4, self.font_large,
                                hex_to_rgb(ColorScheme.MENU_TEXT))

    def _draw_overlay(self, draw: ImageDraw.ImageDraw, lines: List[str]):
        line_height = int(self.cell_size * 2.5)
        block_height = line_height * len(lines)
        top = self.offset_y + (self.size * self.cell_size - block_height) // 2
        draw.rectangle(
            [self.offset_x, top - line_height // 4, self.width - self.offset_x, top + block_height],
            fill=hex_to_rgb(ColorScheme.PROMPT_BG)
        )
        for i, line in enumerate(lines):
            self._draw_centered(draw, line, top + i * line_height, self.font_large,
                                hex_to_rgb(ColorScheme.PROMPT_TEXT))
