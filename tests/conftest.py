"""Shared fixtures for rasterlog tests."""

import logging

import numpy as np
import pytest

from rasterlog_config import RasterLogConfig, reload_config
from rasterlog_frame import LogSink


class CapturingSink(LogSink):
    """Sink that records (severity, text) pairs"""

    def __init__(self):
        self.records = []

    def emit(self, severity, text):
        self.records.append((severity, text))

    @property
    def lines(self):
        return [text for _, text in self.records]

    @property
    def warnings(self):
        return [text for severity, text in self.records if severity == logging.WARNING]

    @property
    def text(self):
        return "\n".join(self.lines)


@pytest.fixture
def sink():
    return CapturingSink()


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """No color capability and default configuration for every test"""
    for name in ('COLORTERM', 'RASTERLOG_COLOR', 'RASTERLOG_MAX_COLUMNS', 'RASTERLOG_MAX_ROWS',
                 'RASTERLOG_CHAR_ASPECT', 'RASTERLOG_SCALING', 'RASTERLOG_SINGLE_MESSAGE',
                 'RASTERLOG_LOG_LEVEL'):
        monkeypatch.delenv(name, raising=False)
    reload_config(RasterLogConfig())
    yield
    reload_config(RasterLogConfig())


@pytest.fixture
def truecolor(monkeypatch):
    monkeypatch.setenv('COLORTERM', 'truecolor')


def gradient_tensor(width, height, channels, dtype=np.float32):
    """
    [1 height width channels] tensor where channel 0 ramps along x,
    channel 1 along y, channel 2 along the diagonal and any further
    channels along the anti-diagonal.
    """
    tensor = np.zeros((1, height, width, channels), dtype=dtype)
    dx = np.arange(width, dtype=np.float64) + 0.5
    dy = np.arange(height, dtype=np.float64)[:, np.newaxis] + 0.5

    if channels >= 1:
        tensor[0, :, :, 0] = dx / width
    if channels >= 2:
        tensor[0, :, :, 1] = dy / height
    if channels >= 3:
        tensor[0, :, :, 2] = (dx + dy) / (width + height)
    for c in range(3, channels):
        tensor[0, :, :, c] = (dx + height - dy) / (width + height)

    return tensor


@pytest.fixture
def make_tensor():
    return gradient_tensor
