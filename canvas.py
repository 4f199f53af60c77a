import logging
import os

import numpy as np
from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

# how much darker the seed image gets, on a 0-255 scale
BRIGHTNESS_OFFSET = 50


class SeedImageError(RuntimeError):
    """Seed image is missing, unreadable or cannot be decoded."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


def triangle_vertices(width, height):
    """
    Corners of the triangle for a width x height canvas.

    Returns (bottom_left, bottom_right, top) as (x, y) int tuples. On canvases
    narrower or shorter than 10 px the formulas land one past the edge, so
    each coordinate is clamped into the canvas.
    """
    max_x, max_y = width - 1, height - 1
    positions = (
        (width // 10, height - height // 10),
        (width - width // 10, height - height // 10),
        (width // 2, height // 10),
    )
    return tuple((min(x, max_x), min(y, max_y)) for x, y in positions)


def start_cursor(width, height):
    return width // 2, max(height // 2 - 1, 0)


def blank_canvas(width, height):
    return np.zeros((height, width, 3), dtype=np.uint8)


def as_image(image):
    """Wrap decoded pixel data (PIL image or array) as a PIL image."""
    if isinstance(image, Image.Image):
        return image
    try:
        arr = np.asarray(image)
        if arr.dtype != np.uint8:
            arr = np.clip(arr, 0, 255).astype(np.uint8)
        return Image.fromarray(arr)
    except (TypeError, ValueError) as e:
        raise SeedImageError(f"Could not interpret seed image data: {e}") from e


def fit_image(image, width, height):
    img = as_image(image)
    if img.size != (width, height):
        logger.debug(f"Resizing seed image from {img.size[0]}x{img.size[1]} to {width}x{height}")
        img = img.resize((width, height))
    return img


def seed_canvas(image, width, height):
    """
    Canvas built from a decoded seed image: resized to width x height,
    turned grayscale, darkened by BRIGHTNESS_OFFSET and expanded back to RGB.
    """
    img = fit_image(image, width, height)

    gray = np.asarray(img.convert("L"), dtype=np.int16)
    gray = np.clip(gray - BRIGHTNESS_OFFSET, 0, 255).astype(np.uint8)

    return np.repeat(gray[:, :, np.newaxis], 3, axis=2)


def load_seed_image(path, width, height):
    """Decode the image at *path* as RGB, resized to width x height."""
    if not os.path.exists(path):
        raise SeedImageError(f"Seed image not found: {path}", path=path)
    try:
        with Image.open(path) as img:
            img = img.convert("RGB")
    except (UnidentifiedImageError, OSError) as e:
        raise SeedImageError(f"Failed to read seed image {path}: {e}", path=path) from e

    logger.info(f"Loaded seed image {path}")
    return fit_image(img, width, height)
