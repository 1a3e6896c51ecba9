"""Command line example script."""

import logging

import numpy as np
from PIL import Image

from conftest import gradient_tensor
from example_image_log import main, make_gradient


def _messages(caplog):
    return [record.getMessage() for record in caplog.records if record.name == 'RasterLog.Terminal']


def test_make_gradient_matches_fixture_builder():
    assert np.array_equal(make_gradient(7, 5, 4), gradient_tensor(7, 5, 4))


def test_gradient_run(caplog):
    with caplog.at_level(logging.INFO, logger='RasterLog.Terminal'):
        assert main(['--size', '20', '15', '--channels', '1', '--no-color']) == 0

    assert "║  ..::--==++**##%%@@║" in _messages(caplog)


def test_image_run(caplog, tmp_path):
    path = tmp_path / "square.png"
    Image.new('RGB', (8, 8), (255, 255, 255)).save(path)

    with caplog.at_level(logging.INFO, logger='RasterLog.Terminal'):
        assert main([str(path), '--name', 'square', '--no-color']) == 0

    messages = _messages(caplog)
    assert "║ square[8 8 3] ║" in messages
    assert "║@@@@@@@@       ║" in messages


def test_palette_image_is_converted(caplog, tmp_path):
    path = tmp_path / "palette.png"
    Image.new('P', (4, 2)).save(path)

    with caplog.at_level(logging.INFO, logger='RasterLog.Terminal'):
        assert main([str(path), '--no-color']) == 0

    assert "image[2 4 4]" in "\n".join(_messages(caplog))


def test_rejected_channel_exits_nonzero(caplog):
    with caplog.at_level(logging.INFO, logger='RasterLog.Terminal'):
        assert main(['--channels', '3', '--channel', '5']) == 1

    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings == ["cannot log channel 5 of tensor with 3 channels"]


def test_color_flag_forces_escapes(caplog):
    with caplog.at_level(logging.INFO, logger='RasterLog.Terminal'):
        assert main(['--size', '4', '4', '--channels', '2', '--color']) == 0

    assert any(message.startswith("║\x1b[48;2;") for message in _messages(caplog))
