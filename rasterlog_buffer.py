#!/usr/bin/env python3
"""
🐧 RasterLog - Buffer Adapter Module
====================================
Copyright (c) 2025 PNGN-Tec LLC

Uniform Buffer Views
====================
Every loggable object is reduced to a BufferView before any rendering work
happens, so the validator, the downsampler and the renderers never look at
a concrete external type.

Supported Sources
=================
- Tensors: numpy arrays shaped [batch height width channels]
- Images: PIL images (modes L, LA, RGB, RGBA, F)
- Matrices: numpy arrays shaped [rows cols] or [rows cols channels]
- Raw buffers: Halide-style numpy arrays indexed (x[, y[, c]]) in any
  memory order (planar or interleaved)

Element Types
=============
Only float32 (nominal range 0..1) and uint8 (0..255) elements can be drawn.
Views over other element types are still built so that the validator can
report the offending type by name.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

import numpy as np
from PIL import Image

# Configure logging
logger = logging.getLogger('rasterlog_buffer')

# PIL modes that map onto drawable element types
SUPPORTED_IMAGE_MODES = ('L', 'LA', 'RGB', 'RGBA', 'F')


class ElementKind(Enum):
    """Drawable element types"""
    FLOAT32 = "float32"
    UINT8 = "uint8"

    @property
    def full_scale(self) -> float:
        """Element value that maps to full intensity"""
        return 255.0 if self is ElementKind.UINT8 else 1.0

    @classmethod
    def from_dtype_name(cls, name: str) -> Optional['ElementKind']:
        for kind in cls:
            if kind.value == name:
                return kind
        return None


class Layout(Enum):
    """How a view's dims map onto height, width and channels"""
    TENSOR = "tensor"          # (batch, height, width, channels)
    ROWS_COLS = "rows_cols"    # (rows, cols[, channels])
    XYC = "xyc"                # (x[, y[, c]])


@dataclass(frozen=True)
class BufferView:
    """
    Read-only view over a loggable buffer.

    Borrowed for the duration of one render call. dims are kept exactly
    as the caller's object reports them since they appear in the title.
    """
    kind: str
    dims: Tuple[int, ...]
    dtype_name: str
    data: Optional[np.ndarray]
    layout: Layout

    @property
    def element_kind(self) -> Optional[ElementKind]:
        return ElementKind.from_dtype_name(self.dtype_name)

    @property
    def rank(self) -> int:
        return len(self.dims)

    @property
    def size(self) -> int:
        # Views over undrawable images carry no data but still have extents
        if self.data is None:
            return int(np.prod(self.dims)) if self.dims else 0
        return int(self.data.size)

    @property
    def is_empty(self) -> bool:
        return self.size == 0

    def _drawable(self) -> ElementKind:
        kind = self.element_kind
        if kind is None or self.data is None:
            from rasterlog_validate import UnsupportedElementType
            raise UnsupportedElementType(self)
        return kind

    def grid(self) -> np.ndarray:
        """
        Get the view as a (height, width, channels) float64 array.

        Values stay in element units (0..1 for float32, 0..255 for uint8);
        quantization happens later.

        Raises:
            UnsupportedElementType: The view holds no drawable elements
        """
        self._drawable()
        data = np.asarray(self.data, dtype=np.float64)

        if self.layout is Layout.TENSOR:
            grid = data[0]
        elif self.layout is Layout.ROWS_COLS:
            grid = data if data.ndim == 3 else data[:, :, np.newaxis]
        elif data.ndim == 1:
            grid = data[np.newaxis, :, np.newaxis]
        elif data.ndim == 2:
            grid = data.T[:, :, np.newaxis]
        else:
            grid = data.transpose(1, 0, 2)

        return grid

    def _index(self, y: int, x: int, c: int) -> Tuple[int, ...]:
        """Map a (row, column, channel) position onto an index into data."""
        ndim = self.data.ndim
        if self.layout is Layout.TENSOR:
            return (0, y, x, c)
        if self.layout is Layout.ROWS_COLS:
            return (y, x, c) if ndim == 3 else (y, x)
        if ndim == 1:
            return (x,)
        return (x, y, c) if ndim == 3 else (x, y)

    def sample(self, y: int, x: int, c: int = 0) -> float:
        """
        Get one element normalized to [0, 1] (NaN reads as 0).

        Reads the element in place without building the grid.

        Raises:
            UnsupportedElementType: The view holds no drawable elements
        """
        full_scale = self._drawable().full_scale
        value = float(self.data[self._index(y, x, c)]) / full_scale
        if value != value:
            return 0.0
        return min(1.0, max(0.0, value))


# ============================================================================
# ADAPTERS
# ============================================================================

def _empty_view(kind: str, layout: Layout) -> BufferView:
    return BufferView(kind=kind, dims=(), dtype_name='', data=None, layout=layout)


def _array_view(obj: Any, kind: str, layout: Layout) -> BufferView:
    if obj is None:
        return _empty_view(kind, layout)

    data = np.asarray(obj)
    return BufferView(
        kind=kind,
        dims=tuple(int(d) for d in data.shape),
        dtype_name=data.dtype.name,
        data=data,
        layout=layout,
    )


def from_tensor(tensor: Any) -> BufferView:
    """Adapt a [batch height width channels] tensor."""
    return _array_view(tensor, 'tensor', Layout.TENSOR)


def from_mat(mat: Any) -> BufferView:
    """Adapt a [rows cols] or [rows cols channels] matrix."""
    return _array_view(mat, 'mat', Layout.ROWS_COLS)


def from_buffer(buffer: Any) -> BufferView:
    """Adapt a Halide-style raw buffer indexed (x[, y[, c]])."""
    return _array_view(buffer, 'buffer', Layout.XYC)


def from_image(image: Optional[Image.Image]) -> BufferView:
    """
    Adapt a PIL image.

    dims are reported as (height, width, channels). Unsupported modes keep
    the mode name as the element type so the rejection can name it, and
    their pixels are never read.
    """
    if image is None:
        return _empty_view('image', Layout.ROWS_COLS)

    width, height = image.size
    channels = len(image.getbands())
    dims = (height, width, channels)

    if image.mode not in SUPPORTED_IMAGE_MODES:
        logger.debug(f"Image mode {image.mode} has no drawable element type")
        return BufferView(kind='image', dims=dims, dtype_name=image.mode,
                          data=None, layout=Layout.ROWS_COLS)

    data = np.asarray(image).reshape(dims)
    return BufferView(kind='image', dims=dims, dtype_name=data.dtype.name,
                      data=data, layout=Layout.ROWS_COLS)
