#!/usr/bin/env python3
"""
🐧 RasterLog - Terminal Raster Logging
======================================
Copyright (c) 2025 PNGN-Tec LLC

Core Features
=============
- Renders tensors, images, matrices and raw pixel buffers into log lines
- ASCII density ramp or 24-bit half-block color output
- Downsampling to a bounded terminal grid with cell aspect correction
- Channel isolation for multi-channel tensors
- Rejections reported as a single warning, never raised to the caller

Rendering Pipeline
==================
buffer -> BufferView -> validate -> plan_grid -> resample -> quantize
       -> density ramp / half-block color -> titled frame -> log sink

Module Interface
================
- render(): Build a RenderedFrame from a RenderRequest (raises on rejection)
- log_view(): Render and emit any BufferView
- log_tensor(), log_tensor_channel(), log_image(), log_mat(), log_buffer():
  Adapter shortcuts for the supported buffer types

Example Usage
=============
```python
import numpy as np
from rasterlog_terminal import log_tensor, log_tensor_channel

heatmap = np.random.rand(1, 64, 64, 3).astype(np.float32)
log_tensor(heatmap, "heatmap")
log_tensor_channel(heatmap, 2, "heatmap")
```
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from rasterlog_buffer import BufferView, from_buffer, from_image, from_mat, from_tensor
from rasterlog_color import render_color
from rasterlog_config import RasterLogConfig, color_supported, get_config
from rasterlog_density import (
    MAX_COLOR_CHANNELS, color_triples, quantize, render_density, select_channel
)
from rasterlog_frame import (
    LoggerSink, LogSink, RenderedFrame, build_frame, build_title, emit_frame
)
from rasterlog_scale import plan_grid, resample
from rasterlog_validate import RenderRejected, validate
from rasterlog_width import get_width

# Configure logging
logger = logging.getLogger('RasterLog.Terminal.Render')


@dataclass(frozen=True)
class RenderRequest:
    """
    One render call.

    color_capable is resolved by the caller; rendering never reads the
    environment itself.
    """
    view: BufferView
    display_name: Optional[str] = None
    channel_index: Optional[int] = None
    color_capable: bool = False


def render(request: RenderRequest, config: Optional[RasterLogConfig] = None) -> RenderedFrame:
    """
    Render a request into a frame.

    Args:
        request: View, display name, channel selector and color flag
        config: Configuration to use (active configuration if None)

    Returns:
        RenderedFrame

    Raises:
        RenderRejected: The view cannot be drawn
    """
    config = config or get_config()
    rendering = config.rendering
    view = request.view

    validated = validate(view, request.channel_index)
    title = build_title(request.display_name or view.kind, view.dims, request.channel_index)

    if validated.is_empty:
        marker = rendering.empty_marker
        return build_frame(title, [marker], get_width(marker))

    channels = 1 if request.channel_index is not None else validated.channels
    use_color = request.color_capable and channels <= MAX_COLOR_CHANNELS
    if request.color_capable and not use_color:
        logger.debug(f"No color mapping for {channels} channels, using density ramp")

    context = plan_grid(
        validated.width, validated.height,
        rendering.max_columns, rendering.max_rows,
        row_aspect=1 if use_color else rendering.char_aspect,
        char_aspect=rendering.char_aspect,
        algorithm=rendering.scaling_algorithm,
    )

    grid = select_channel(view.grid(), request.channel_index)
    quantized = quantize(resample(grid, context), view.element_kind)

    if use_color:
        body = render_color(color_triples(quantized))
    else:
        body = render_density(quantized, rendering.ramp)

    return build_frame(title, body, context.target_width)


def log_view(view: BufferView,
             name: Optional[str] = None,
             channel: Optional[int] = None,
             sink: Optional[LogSink] = None,
             color: Optional[bool] = None,
             config: Optional[RasterLogConfig] = None) -> Optional[RenderedFrame]:
    """
    Render a view and emit it to a sink.

    Args:
        view: View to log
        name: Display name (adapter default if None)
        channel: Channel to isolate (all channels if None)
        sink: Destination (logger named by the output config if None)
        color: Force color on/off (terminal capability if None)
        config: Configuration to use (active configuration if None)

    Returns:
        The emitted frame, or None if the view was rejected
    """
    config = config or get_config()
    sink = sink or LoggerSink(config.output.logger_name)
    if color is None:
        color = color_supported(config=config.output)

    request = RenderRequest(view=view, display_name=name,
                            channel_index=channel, color_capable=color)
    try:
        frame = render(request, config)
    except RenderRejected as e:
        sink.emit(logging.WARNING, str(e))
        return None

    emit_frame(frame, sink, config.output.single_message)
    return frame


def log_tensor(tensor: Any, name: Optional[str] = None, **kwargs) -> Optional[RenderedFrame]:
    """Log a [1 height width channels] tensor."""
    return log_view(from_tensor(tensor), name, **kwargs)


def log_tensor_channel(tensor: Any, channel: int, name: Optional[str] = None,
                       **kwargs) -> Optional[RenderedFrame]:
    """Log one channel of a [1 height width channels] tensor."""
    return log_view(from_tensor(tensor), name, channel=channel, **kwargs)


def log_image(image: Any, name: Optional[str] = None, **kwargs) -> Optional[RenderedFrame]:
    """Log a PIL image."""
    return log_view(from_image(image), name, **kwargs)


def log_mat(mat: Any, name: Optional[str] = None, **kwargs) -> Optional[RenderedFrame]:
    """Log a [rows cols] or [rows cols channels] matrix."""
    return log_view(from_mat(mat), name, **kwargs)


def log_buffer(buffer: Any, name: Optional[str] = None, **kwargs) -> Optional[RenderedFrame]:
    """Log a Halide-style raw buffer indexed (x[, y[, c]])."""
    return log_view(from_buffer(buffer), name, **kwargs)
