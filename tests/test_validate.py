"""Shape and type validation."""

import numpy as np
import pytest

from rasterlog_buffer import from_buffer, from_mat, from_tensor
from rasterlog_validate import (
    ChannelOutOfRange, RenderRejected, UnsupportedElementType, UnsupportedShape, format_dims, validate
)


def test_format_dims():
    assert format_dims((1, 15, 20, 3)) == "[1 15 20 3]"
    assert format_dims(()) == "[]"


def test_tensor_extents():
    validated = validate(from_tensor(np.zeros((1, 15, 20, 3), dtype=np.float32)))
    assert (validated.height, validated.width, validated.channels) == (15, 20, 3)


def test_buffer_extents():
    validated = validate(from_buffer(np.zeros((20, 15), dtype=np.uint8)))
    assert (validated.height, validated.width, validated.channels) == (15, 20, 1)


def test_empty_skips_all_checks():
    view = from_tensor(np.zeros((0,), dtype=np.int64))
    assert validate(view, channel=9).is_empty


def test_type_is_checked_before_shape():
    with pytest.raises(UnsupportedElementType, match="cannot log tensor of type int16"):
        validate(from_tensor(np.zeros((2, 2), dtype=np.int16)))


@pytest.mark.parametrize("view", [
    from_tensor(np.zeros((1, 2, 3), dtype=np.float32)),
    from_tensor(np.zeros((2, 2, 2, 1), dtype=np.float32)),
    from_mat(np.zeros((4,), dtype=np.uint8)),
    from_mat(np.zeros((1, 2, 3, 4), dtype=np.uint8)),
    from_buffer(np.zeros((2, 2, 2, 2), dtype=np.uint8)),
])
def test_unsupported_shapes(view):
    with pytest.raises(UnsupportedShape, match=r"cannot log \w+ with shape \["):
        validate(view)


def test_channel_equal_to_count_is_rejected():
    view = from_tensor(np.zeros((1, 2, 2, 3), dtype=np.float32))
    with pytest.raises(ChannelOutOfRange, match="cannot log channel 3 of tensor with 3 channels"):
        validate(view, channel=3)


def test_negative_channel_is_rejected():
    with pytest.raises(ChannelOutOfRange):
        validate(from_mat(np.zeros((2, 2), dtype=np.uint8)), channel=-1)


def test_rejections_are_value_errors():
    assert issubclass(RenderRejected, ValueError)
    for cls in (UnsupportedElementType, UnsupportedShape, ChannelOutOfRange):
        assert issubclass(cls, RenderRejected)
