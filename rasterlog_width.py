#!/usr/bin/env python3
"""
🐧 RasterLog - Width Calculation Module
=======================================
Copyright (c) 2025 PNGN-Tec LLC

Visual Width Calculation System
================================
Terminal column measurement for frame titles so that the right border of
a logged frame lines up even when a display name contains wide glyphs
(CJK, emoji) or zero-width combining marks.

Technical Implementation
========================
- wcwidth for per-character and per-string widths
- Control characters excluded from the measured width
- Thread-safe LRU cache of measured strings

Module Interface
================
- WidthCalculator: Cached calculator
- get_width(): Simple function for single strings
- pad_to_width(): Right-pad text to a number of terminal columns
- clear_default_cache(): Clear the default calculator cache
"""

import threading
import logging
from typing import Dict, Union
from collections import OrderedDict

from wcwidth import wcwidth, wcswidth

# Configure logging
logger = logging.getLogger('rasterlog_width')

DEFAULT_CACHE_SIZE = 256


class WidthCalculator:
    """
    Thread-safe text width calculator with caching.

    Frame titles repeat across calls (same display name, same dims), so
    measured strings are kept in a small LRU cache.
    """

    def __init__(self, cache_size: int = DEFAULT_CACHE_SIZE):
        self._string_cache = OrderedDict()
        self._cache_size = cache_size
        self._lock = threading.Lock()

        # Statistics
        self.stats = {
            'cache_hits': 0,
            'cache_misses': 0,
            'control_chars_handled': 0,
            'cache_evictions': 0,
        }

        logger.debug(f"WidthCalculator initialized with cache_size={cache_size}")

    def get_width(self, text: str) -> int:
        """
        Get visual width of text in terminal columns.

        Args:
            text: Text to measure

        Returns:
            Visual width in columns (0 for empty/control-only text)
        """
        if not text:
            return 0

        with self._lock:
            if text in self._string_cache:
                self._string_cache.move_to_end(text)
                self.stats['cache_hits'] += 1
                return self._string_cache[text]
            self.stats['cache_misses'] += 1

        width = self._calculate_width(text)

        with self._lock:
            while len(self._string_cache) >= self._cache_size:
                self._string_cache.popitem(last=False)
                self.stats['cache_evictions'] += 1
            self._string_cache[text] = width

        return width

    def _calculate_width(self, text: str) -> int:
        # Fast path: wcswidth returns -1 when control characters are present
        width = wcswidth(text)
        if width >= 0:
            return width

        with self._lock:
            self.stats['control_chars_handled'] += 1
        return sum(max(0, wcwidth(char)) for char in text)

    def clear_cache(self):
        """Clear all cached widths."""
        with self._lock:
            self._string_cache.clear()

    def get_stats(self) -> Dict[str, Union[int, float]]:
        """Get calculator statistics including hit rate and current size."""
        with self._lock:
            stats = self.stats.copy()
            stats['cache_entries'] = len(self._string_cache)

        total_requests = stats['cache_hits'] + stats['cache_misses']
        stats['cache_hit_rate'] = stats['cache_hits'] / total_requests if total_requests else 0.0

        return stats


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

_default_calculator = None
_calculator_lock = threading.Lock()

def _get_default_calculator() -> WidthCalculator:
    global _default_calculator

    if _default_calculator is None:
        with _calculator_lock:
            if _default_calculator is None:
                _default_calculator = WidthCalculator()

    return _default_calculator


def get_width(text: str) -> int:
    """
    Get visual width of text using default calculator.

    Example:
        >>> get_width("mat[10 10 2]")
        12
        >>> get_width("图像[4 4]")
        9
    """
    return _get_default_calculator().get_width(text)


def pad_to_width(text: str, width: int, fill: str = ' ') -> str:
    """
    Right-pad text with fill characters up to the given column count.

    Text already at least that wide is returned unchanged.
    """
    return text + fill * max(0, width - get_width(text))


def clear_default_cache():
    """Clear the default calculator's cache."""
    if _default_calculator is not None:
        _default_calculator.clear_cache()
