#!/usr/bin/env python3
"""
🐧 RasterLog - Grid Scaling Module
==================================
Copyright (c) 2025 PNGN-Tec LLC

Terminal Grid Downsampling
==========================
Shrinks arbitrarily large sample grids to fit the terminal budget while
keeping the picture's proportions and visual structure.

Core Features:
- One uniform scale factor for both axes, computed with exact rationals
- Character cell aspect correction (a cell is taller than it is wide)
- Multi-algorithm representative sampling (nearest, bilinear, area)
- Pass-through when the grid already fits

Sampling Model:
Output cell i along an axis of source extent N and output extent n covers
the source block [floor(i*N/n), floor((i+1)*N/n)) and is represented by a
sample taken at the block centroid (i + 0.5) * N / n - 0.5. Every source
sample lies in exactly one block. All channels of a cell share the same
sampling position.

Module Interface:
- ScalingContext: Source and target extents for one render
- plan_grid(): Choose the output grid for a source grid
- resample(): Apply a ScalingContext to a (height, width, channels) array
"""

import logging
import math
from dataclasses import dataclass
from fractions import Fraction

import numpy as np

from rasterlog_config import ScalingAlgorithm, CHAR_ASPECT

# Configure logging
logger = logging.getLogger('rasterlog_scale')


@dataclass(frozen=True)
class ScalingContext:
    """
    Context for grid scaling operations.

    Defines source and target extents of one render. Target extents are
    counted in samples; the color renderer later packs two sample rows
    per printed line.
    """
    # Source dimensions
    source_width: int
    source_height: int

    # Target dimensions
    target_width: int
    target_height: int

    # Algorithm
    algorithm: ScalingAlgorithm = ScalingAlgorithm.BILINEAR

    @property
    def scale_x(self) -> float:
        """Horizontal scaling factor"""
        return self.target_width / self.source_width if self.source_width > 0 else 1.0

    @property
    def scale_y(self) -> float:
        """Vertical scaling factor"""
        return self.target_height / self.source_height if self.source_height > 0 else 1.0

    @property
    def needs_scaling(self) -> bool:
        """Check if scaling is needed"""
        return (self.source_width != self.target_width or
                self.source_height != self.target_height)

    @property
    def total_cells(self) -> int:
        """Total cells in the output grid"""
        return self.target_width * self.target_height


def plan_grid(width: int, height: int, max_columns: int, max_rows: int,
              row_aspect: int = 1, char_aspect: int = CHAR_ASPECT,
              algorithm: ScalingAlgorithm = ScalingAlgorithm.BILINEAR) -> ScalingContext:
    """
    Choose the output grid for a width x height source.

    Args:
        width: Source width in samples
        height: Source height in samples
        max_columns: Column budget
        max_rows: Printed row budget
        row_aspect: Source rows folded into one output row
        char_aspect: Terminal cell height divided by its width
        algorithm: Representative-sample rule

    Returns:
        ScalingContext describing the output grid
    """
    scale = min(Fraction(1),
                Fraction(max_columns, width),
                Fraction(max_rows * char_aspect, height))

    columns = max(1, math.floor(width * scale))
    rows = max(1, math.floor(height * scale / row_aspect))

    context = ScalingContext(source_width=width, source_height=height,
                             target_width=columns, target_height=rows,
                             algorithm=algorithm)

    logger.debug(f"Planned {columns}x{rows} grid for {width}x{height} source "
                 f"(scale_x={context.scale_x:.3f}, scale_y={context.scale_y:.3f}, "
                 f"{context.total_cells} cells)")

    return context


# ============================================================================
# REPRESENTATIVE SAMPLING
# ============================================================================

def _centroids(source: int, target: int) -> np.ndarray:
    """Block centroids of target cells in source sample coordinates"""
    return (np.arange(target) + 0.5) * source / target - 0.5


def _nearest_axis(grid: np.ndarray, source: int, target: int, axis: int) -> np.ndarray:
    index = np.clip(np.floor(_centroids(source, target) + 0.5).astype(int), 0, source - 1)
    return np.take(grid, index, axis=axis)


def _bilinear_axis(grid: np.ndarray, source: int, target: int, axis: int) -> np.ndarray:
    position = np.clip(_centroids(source, target), 0, source - 1)
    lower = np.floor(position).astype(int)
    upper = np.minimum(lower + 1, source - 1)
    weight = position - lower

    shape = [1] * grid.ndim
    shape[axis] = target
    weight = weight.reshape(shape)

    low = np.take(grid, lower, axis=axis)
    return low + (np.take(grid, upper, axis=axis) - low) * weight


def _area_axis(grid: np.ndarray, source: int, target: int, axis: int) -> np.ndarray:
    starts = (np.arange(target) * source) // target
    counts = np.diff(np.append(starts, source))

    shape = [1] * grid.ndim
    shape[axis] = target

    return np.add.reduceat(grid, starts, axis=axis) / counts.reshape(shape)


ALGORITHM_MAP = {
    ScalingAlgorithm.NEAREST: _nearest_axis,
    ScalingAlgorithm.BILINEAR: _bilinear_axis,
    ScalingAlgorithm.AREA: _area_axis,
}


def resample(grid: np.ndarray, context: ScalingContext) -> np.ndarray:
    """
    Downsample a (height, width, channels) grid according to context.

    Args:
        grid: Source samples in element units
        context: Planned scaling

    Returns:
        (target_height, target_width, channels) array
    """
    if not context.needs_scaling:
        return grid

    sample_axis = ALGORITHM_MAP[context.algorithm]

    result = grid
    if context.target_height != context.source_height:
        result = sample_axis(result, context.source_height, context.target_height, axis=0)
    if context.target_width != context.source_width:
        result = sample_axis(result, context.source_width, context.target_width, axis=1)

    return result
