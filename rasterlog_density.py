#!/usr/bin/env python3
"""
🐧 RasterLog - Density Mapping Module
=====================================
Copyright (c) 2025 PNGN-Tec LLC

Maps sample grids onto a density ramp of glyphs and onto RGB triples.

Quantization:
- float32 samples: NaN reads as 0, clamped to [0, 1], scaled by 255 and truncated
- uint8 samples: used as-is
- results always lie in [0, 255]

Channel policy (ASCII density byte):
- 1 channel: the channel itself
- 2 channels: integer mean of both
- 3 channels: integer mean of red, green, blue
- 4 channels: integer mean of red, green, blue; alpha 0 draws a blank cell
- 5+ channels: integer mean of all channels

Channel policy (color triple):
- 1 channel: gray (v, v, v)
- 2 channels: (c0, c1, 0)
- 3 channels: (r, g, b)
- 4 channels: (r, g, b) premultiplied by alpha, alpha 0 is black
- 5+ channels: no color mapping
"""

import logging
from typing import List, Optional, Tuple

import numpy as np

from rasterlog_buffer import ElementKind
from rasterlog_config import DENSITY_RAMP

# Configure logging
logger = logging.getLogger('rasterlog_density')

# Widest channel count with a color mapping
MAX_COLOR_CHANNELS = 4


def quantize(grid: np.ndarray, element_kind: ElementKind) -> np.ndarray:
    """
    Quantize samples in element units to integer bytes 0..255.

    Args:
        grid: (height, width, channels) samples
        element_kind: Element type the samples came from

    Returns:
        Integer array of the same shape
    """
    if element_kind is ElementKind.FLOAT32:
        scaled = np.clip(np.nan_to_num(grid, nan=0.0), 0.0, 1.0) * 255.0
    else:
        scaled = np.clip(grid, 0.0, 255.0)
    return np.floor(scaled).astype(np.int64)


def select_channel(quantized: np.ndarray, channel: Optional[int]) -> np.ndarray:
    """Isolate one channel, keeping the channel axis"""
    if channel is None:
        return quantized
    return quantized[:, :, channel:channel + 1]


def density_bytes(quantized: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Reduce quantized channels to one density byte per cell.

    Returns:
        (density, visible) arrays of shape (height, width)
    """
    channels = quantized.shape[2]
    visible = np.ones(quantized.shape[:2], dtype=bool)

    if channels == 4:
        density = quantized[:, :, :3].sum(axis=2) // 3
        visible = quantized[:, :, 3] > 0
    else:
        density = quantized.sum(axis=2) // channels

    return density, visible


def ramp_index(density: np.ndarray, ramp_length: int = len(DENSITY_RAMP)) -> np.ndarray:
    """Index into a ramp for each density byte: min(n-1, b*n//255)"""
    return np.minimum(ramp_length - 1, density * ramp_length // 255)


def render_density(quantized: np.ndarray, ramp: str = DENSITY_RAMP) -> List[str]:
    """
    Render quantized samples as ramp glyphs, one string per grid row.

    Args:
        quantized: (height, width, channels) byte grid
        ramp: Glyphs from least to most dense

    Returns:
        Body lines
    """
    density, visible = density_bytes(quantized)
    glyphs = np.array(list(ramp))[ramp_index(density, len(ramp))]
    glyphs[~visible] = ramp[0]
    return ["".join(row) for row in glyphs]


def color_triples(quantized: np.ndarray) -> np.ndarray:
    """
    Map quantized samples to RGB triples.

    Args:
        quantized: (height, width, channels) byte grid with at most 4 channels

    Returns:
        (height, width, 3) integer triples; fully transparent samples are black

    Raises:
        ValueError: More channels than a color mapping exists for
    """
    height, width, channels = quantized.shape

    if channels == 1:
        return np.repeat(quantized, 3, axis=2)
    if channels == 2:
        return np.concatenate([quantized, np.zeros((height, width, 1), dtype=quantized.dtype)], axis=2)
    if channels == 3:
        return quantized
    if channels == 4:
        alpha = quantized[:, :, 3:4]
        return quantized[:, :, :3] * alpha // 255
    raise ValueError(f"No color mapping for {channels} channels")
