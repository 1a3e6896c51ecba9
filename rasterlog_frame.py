#!/usr/bin/env python3
"""
🐧 RasterLog - Frame Formatting Module
======================================
Copyright (c) 2025 PNGN-Tec LLC

Assembles rendered body lines into a titled box and hands it to a log sink.

    ╔════════════════════╗
    ║ tensor[1 15 20 1]  ║
    ╠════════════════════╣
    ║  ..::--==++**##%%@@║
    ╚════════════════════╝

The inner width is the wider of the grid and the title (plus one space on
each side). Title width is measured in terminal columns so names with wide
glyphs keep the right border aligned.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from rasterlog_validate import format_dims
from rasterlog_width import get_width, pad_to_width

# Configure logging
logger = logging.getLogger('rasterlog_frame')

BORDERS = {'tl': '╔', 'tr': '╗', 'bl': '╚', 'br': '╝', 'h': '═', 'v': '║',
           'ml': '╠', 'mr': '╣'}


@dataclass(frozen=True)
class RenderedFrame:
    """
    A complete frame ready for the sink.

    lines holds every printed line including borders; body holds the grid
    lines alone, without borders or padding.
    """
    lines: Tuple[str, ...]
    body: Tuple[str, ...]
    title: str

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def build_title(name: str, dims: Sequence[int], channel: Optional[int] = None) -> str:
    """Frame title: name[d0 d1 ...], with ', channel k =' when isolating a channel"""
    title = f"{name}{format_dims(dims)}"
    if channel is not None:
        title += f", channel {channel} ="
    return title


def build_frame(title: str, body: Sequence[str], columns: int) -> RenderedFrame:
    """
    Wrap body lines in a titled box.

    Args:
        title: Title text
        body: Body lines, each `columns` terminal cells wide
        columns: Visual width of every body line

    Returns:
        RenderedFrame
    """
    inner_width = max(columns, get_width(title) + 2)
    horizontal = BORDERS['h'] * inner_width
    body_padding = ' ' * (inner_width - columns)

    lines = [
        BORDERS['tl'] + horizontal + BORDERS['tr'],
        BORDERS['v'] + ' ' + pad_to_width(title, inner_width - 1) + BORDERS['v'],
        BORDERS['ml'] + horizontal + BORDERS['mr'],
    ]
    for row in body:
        lines.append(BORDERS['v'] + row + body_padding + BORDERS['v'])
    lines.append(BORDERS['bl'] + horizontal + BORDERS['br'])

    return RenderedFrame(lines=tuple(lines), body=tuple(body), title=title)


# ============================================================================
# LOG SINKS
# ============================================================================

class LogSink:
    """Receives formatted lines; severity is a stdlib logging level"""

    def emit(self, severity: int, text: str):
        raise NotImplementedError


class LoggerSink(LogSink):
    """Sink backed by a stdlib logger"""

    def __init__(self, logger_or_name='RasterLog.Terminal'):
        if isinstance(logger_or_name, logging.Logger):
            self.logger = logger_or_name
        else:
            self.logger = logging.getLogger(logger_or_name)

    def emit(self, severity: int, text: str):
        self.logger.log(severity, text)


def emit_frame(frame: RenderedFrame, sink: LogSink, single_message: bool = False):
    """
    Send a frame to a sink at INFO severity.

    One sink call per line, or one multi-line message when single_message
    is set.
    """
    if single_message:
        sink.emit(logging.INFO, frame.text)
        return

    for line in frame.lines:
        sink.emit(logging.INFO, line)
