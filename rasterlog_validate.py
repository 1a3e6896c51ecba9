#!/usr/bin/env python3
"""
🐧 RasterLog - Shape Validation Module
======================================
Copyright (c) 2025 PNGN-Tec LLC

Accepts or rejects a BufferView before any rendering work starts.

Checks run in a fixed order:
1. Empty buffers are accepted as-is (rendered with the empty marker)
2. Element type must be float32 or uint8
3. Rank and extents must fit the view's layout
4. A requested channel must exist
"""

import logging
from dataclasses import dataclass
from typing import Optional

from rasterlog_buffer import BufferView, Layout

# Configure logging
logger = logging.getLogger('rasterlog_validate')


# ============================================================================
# EXCEPTIONS
# ============================================================================

class RenderRejected(ValueError):
    """A buffer that cannot be drawn"""


class UnsupportedElementType(RenderRejected):
    def __init__(self, view: BufferView):
        super().__init__(f"cannot log {view.kind} of type {view.dtype_name}")


class UnsupportedShape(RenderRejected):
    def __init__(self, view: BufferView):
        super().__init__(f"cannot log {view.kind} with shape {format_dims(view.dims)}")


class ChannelOutOfRange(RenderRejected):
    def __init__(self, view: BufferView, channel: int, channels: int):
        super().__init__(
            f"cannot log channel {channel} of {view.kind} with {channels} channels")


def format_dims(dims) -> str:
    """Format extents the way frame titles show them: [d0 d1 ...]"""
    return "[" + " ".join(str(d) for d in dims) + "]"


# ============================================================================
# VALIDATED VIEW
# ============================================================================

@dataclass(frozen=True)
class ValidatedView:
    """A view that passed validation, with its spatial extents resolved"""
    view: BufferView
    height: int = 0
    width: int = 0
    channels: int = 0
    channel: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self.view.is_empty


def _extents(view: BufferView):
    """Get (height, width, channels) for a view, or None if its rank does not fit."""
    dims = view.dims

    if view.layout is Layout.TENSOR:
        if len(dims) == 4 and dims[0] == 1:
            return dims[1], dims[2], dims[3]
    elif view.layout is Layout.ROWS_COLS:
        if len(dims) == 2:
            return dims[0], dims[1], 1
        if len(dims) == 3:
            return dims[0], dims[1], dims[2]
    elif view.layout is Layout.XYC:
        if len(dims) == 1:
            return 1, dims[0], 1
        if len(dims) == 2:
            return dims[1], dims[0], 1
        if len(dims) == 3:
            return dims[1], dims[0], dims[2]

    return None


def validate(view: BufferView, channel: Optional[int] = None) -> ValidatedView:
    """
    Validate a view for rendering.

    Args:
        view: View to check
        channel: Optional channel to isolate

    Returns:
        ValidatedView with resolved extents

    Raises:
        UnsupportedElementType: Element type is not float32 or uint8
        UnsupportedShape: Rank or extents do not fit the layout
        ChannelOutOfRange: Requested channel does not exist
    """
    if view.is_empty:
        return ValidatedView(view=view, channel=channel)

    if view.element_kind is None:
        raise UnsupportedElementType(view)

    extents = _extents(view)
    if extents is None:
        raise UnsupportedShape(view)
    height, width, channels = extents

    if channel is not None and not 0 <= channel < channels:
        raise ChannelOutOfRange(view, channel, channels)

    logger.debug(f"Accepted {view.kind}{format_dims(view.dims)}: "
                 f"{width}x{height}, {channels} channel(s)")
    return ValidatedView(view=view, height=height, width=width,
                         channels=channels, channel=channel)
