#!/usr/bin/env python3
"""
🖼️ RasterLog - Image Logging Example
====================================
Copyright (c) 2025 PNGN-Tec LLC
"""

import argparse
import logging
from typing import Optional

import numpy as np
from PIL import Image

from rasterlog_buffer import SUPPORTED_IMAGE_MODES
from rasterlog_config import ColorMode, RasterLogConfig, RenderingConfig, OutputConfig, ScalingAlgorithm
from rasterlog_terminal import log_image, log_tensor, log_tensor_channel


def make_gradient(width: int, height: int, channels: int) -> np.ndarray:
    tensor = np.zeros((1, height, width, channels), dtype=np.float32)
    dx = np.arange(width) + 0.5
    dy = np.arange(height)[:, np.newaxis] + 0.5

    if channels >= 1:
        tensor[0, :, :, 0] = dx / width
    if channels >= 2:
        tensor[0, :, :, 1] = dy / height
    if channels >= 3:
        tensor[0, :, :, 2] = (dx + dy) / (width + height)
    for c in range(3, channels):
        tensor[0, :, :, c] = (dx + height - dy) / (width + height)

    return tensor


def build_config(args) -> RasterLogConfig:
    color_mode = ColorMode.AUTO
    if args.color:
        color_mode = ColorMode.ALWAYS
    elif args.no_color:
        color_mode = ColorMode.NEVER

    config = RasterLogConfig(
        rendering=RenderingConfig(
            max_columns=args.max_columns,
            max_rows=args.max_rows,
            scaling_algorithm=ScalingAlgorithm(args.scaling),
        ),
        output=OutputConfig(color_mode=color_mode, single_message=args.single_message),
    )
    config.validate()
    return config


def main(argv: Optional[list] = None):
    parser = argparse.ArgumentParser(description='Log an image or a synthetic gradient as terminal raster art')
    parser.add_argument('image', nargs='?', help='Image file (a gradient tensor is logged if omitted)')
    parser.add_argument('--name', default=None)
    parser.add_argument('--channel', type=int, default=None)
    parser.add_argument('--channels', type=int, default=3, help='Channels of the synthetic gradient')
    parser.add_argument('--size', type=int, nargs=2, default=(40, 40), metavar=('WIDTH', 'HEIGHT'))
    parser.add_argument('--max-columns', type=int, default=120)
    parser.add_argument('--max-rows', type=int, default=60)
    parser.add_argument('--scaling', choices=[a.value for a in ScalingAlgorithm], default='bilinear')
    parser.add_argument('--color', action='store_true')
    parser.add_argument('--no-color', action='store_true')
    parser.add_argument('--single-message', action='store_true')
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(message)s')
    config = build_config(args)

    if args.image:
        with Image.open(args.image) as image:
            if image.mode not in SUPPORTED_IMAGE_MODES:
                image = image.convert('RGBA')
            frame = log_image(image, args.name, channel=args.channel, config=config)
    else:
        tensor = make_gradient(args.size[0], args.size[1], args.channels)
        if args.channel is not None:
            frame = log_tensor_channel(tensor, args.channel, args.name, config=config)
        else:
            frame = log_tensor(tensor, args.name, config=config)

    return 0 if frame is not None else 1


if __name__ == "__main__":
    raise SystemExit(main())
