import logging
import string

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255)

HEX_DIGITS = set(string.hexdigits)


def resolve_color(value=None):
    """
    Turn a hex color string into an (r, g, b) tuple.

    Accepts "rgb" or "rrggbb", optionally prefixed with '#'. Invalid input
    never raises: a warning is logged and white is returned instead.

    Parameters
    ----------
    value : str or None
        Hex color as given by the user.

    Returns
    -------
    tuple
        Three ints in 0-255.
    """
    if value is None:
        logger.info("No color provided, using white")
        return WHITE

    if value == "":
        logger.warning("no color provided.")
        return WHITE

    hex_str = value[1:] if value.startswith("#") else value

    if len(hex_str) not in (3, 6):
        logger.warning(f"Invalid color length {len(hex_str)} for '{value}', expected 3 or 6 hex digits")
        return WHITE

    # shorthand "abc" -> "aabbcc"
    if len(hex_str) == 3:
        hex_str = "".join(c * 2 for c in hex_str)

    groups = [hex_str[i:i + 2] for i in range(0, 6, 2)]

    for group in groups:
        bad = [c for c in group if c not in HEX_DIGITS]
        if bad:
            logger.warning(f"Illegal character '{bad[0]}' in color '{value}'")
            return WHITE

    try:
        r, g, b = (int(group, 16) for group in groups)
    except ValueError:
        logger.warning("unknown error.")
        return WHITE

    return r, g, b


class ConstantColor:
    """Same color at every coordinate."""

    def __init__(self, rgb=WHITE):
        self.rgb = tuple(int(c) for c in rgb)

    def color_at(self, x, y):
        return self.rgb

    def __repr__(self):
        return f"ConstantColor({self.rgb})"


class ImageSampledColor:
    """Color taken from a source image at the pixel being plotted."""

    def __init__(self, pixels):
        if isinstance(pixels, Image.Image):
            pixels = np.asarray(pixels.convert("RGB"))
        pixels = np.asarray(pixels, dtype=np.uint8)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) pixel array, got shape {pixels.shape}")
        self.pixels = pixels

    @property
    def size(self):
        h, w, _ = self.pixels.shape
        return w, h

    def color_at(self, x, y):
        r, g, b = self.pixels[y, x]
        return int(r), int(g), int(b)

    def __repr__(self):
        w, h = self.size
        return f"ImageSampledColor({w}x{h})"


def color_source_for(color=None, image=None):
    """Pick the color source for a run: image sampling wins over a hex color."""
    if image is not None:
        if color is not None:
            logger.info(f"Ignoring color '{color}' because an image was supplied")
        return ImageSampledColor(image)
    return ConstantColor(resolve_color(color))
