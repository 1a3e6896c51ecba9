#!/usr/bin/env python3
"""
🐧 RasterLog - Truecolor Rendering Module
=========================================
Copyright (c) 2025 PNGN-Tec LLC

Half-Block Color Rendering
==========================
Packs two sample rows into every printed line: the top sample becomes the
cell background and the bottom sample the foreground of a lower half block.

    ESC[48;2;R;G;Bm  top sample (background)
    ESC[38;2;R;G;Bm  bottom sample (foreground)
    ▄                lower half block

Alpha is premultiplied upstream, so a transparent sample is black. An odd
final row is drawn as a full cell of its own color. Every line is closed with
a reset so no color leaks into the next log entry.
"""

import logging
from typing import List, Tuple

import numpy as np

# Configure logging
logger = logging.getLogger('rasterlog_color')

LOWER_HALF_BLOCK = "\u2584"


class ANSI:
    RESET = "\033[0m"

    @staticmethod
    def fg(rgb: Tuple[int, int, int]) -> str:
        """24-bit foreground color"""
        r, g, b = rgb
        return f"\033[38;2;{r};{g};{b}m"

    @staticmethod
    def bg(rgb: Tuple[int, int, int]) -> str:
        """24-bit background color"""
        r, g, b = rgb
        return f"\033[48;2;{r};{g};{b}m"


def _cell(top: Tuple[int, int, int], bottom: Tuple[int, int, int]) -> str:
    return ANSI.bg(top) + ANSI.fg(bottom) + LOWER_HALF_BLOCK


def render_color(rgb: np.ndarray) -> List[str]:
    """
    Render RGB samples as half-block lines.

    Args:
        rgb: (height, width, 3) integer triples

    Returns:
        ceil(height / 2) body lines, each opening with a truecolor background
    """
    height, width = rgb.shape[:2]
    lines = []

    for y in range(0, height, 2):
        # An odd final row repeats itself as the bottom half
        below = y + 1 if y + 1 < height else y
        parts = []
        for x in range(width):
            top = tuple(int(v) for v in rgb[y, x])
            bottom = tuple(int(v) for v in rgb[below, x])
            parts.append(_cell(top, bottom))
        lines.append("".join(parts) + ANSI.RESET)

    logger.debug(f"Rendered {width}x{height} samples as {len(lines)} color lines")
    return lines
