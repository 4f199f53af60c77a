"""
Chaos-game Sierpinski triangle generator
----------------------------------------

Repeatedly plots the midpoint between the current point and a randomly
chosen corner of a triangle. Midpoints use integer division, never floats.

Dependencies:
-------------
numpy, Pillow
"""

import logging
import random

from canvas import blank_canvas, fit_image, seed_canvas, start_cursor, triangle_vertices
from color_source import ConstantColor, ImageSampledColor, WHITE

PROGRESS_BATCH = 1000


class NullProgress:
    """Progress observer that ignores everything."""

    def update(self, n):
        pass

    def close(self):
        pass


class ChaosGamePlotter:
    """
    Plots the random walk into an existing canvas.

    Parameters
    ----------
    rng : object with randint(a, b), optional
        Source of vertex choices. Defaults to a fresh random.Random().
    progress : object with update(n) and close(), optional
        Receives a tick of `batch` every `batch` dots. A tqdm bar works.
    logger : logging.Logger, optional
    batch : int
        Dots between progress ticks.
    """

    def __init__(self, rng=None, progress=None, logger=None, batch=PROGRESS_BATCH):
        self.rng = rng if rng is not None else random.Random()
        self.progress = progress if progress is not None else NullProgress()
        self.logger = logger if logger is not None else logging.getLogger(__name__)
        self.batch = batch

    def plot(self, canvas, vertices, dots, color):
        if dots < 0:
            raise ValueError(f"dots must be >= 0, got {dots}")

        height, width = canvas.shape[:2]

        self.logger.info("Placing corners")
        for x, y in vertices:
            canvas[y, x] = color.color_at(x, y)

        x, y = start_cursor(width, height)

        self.logger.info("Placing dots")
        randint = self.rng.randint
        for i in range(1, dots + 1):
            n = randint(0, 2)
            canvas[y, x] = color.color_at(x, y)
            vx, vy = vertices[n]
            x = (x + vx) // 2
            y = (y + vy) // 2
            if i % self.batch == 0:
                self.progress.update(self.batch)
        self.progress.close()

        return canvas


def generate(width, height, dots, canvas_seed=None, color=None, *, rng=None, progress=None, logger=None):
    """
    Render a Sierpinski triangle with `dots` random-walk points.

    Parameters
    ----------
    width, height : int
        Canvas size in pixels, both > 0.
    dots : int
        Number of walk points, >= 0. Three corner pixels are always drawn too.
    canvas_seed : PIL.Image.Image or array, optional
        Decoded image blended under the fractal (grayscale, darkened).
    color : color source, optional
        Anything with color_at(x, y). Defaults to sampling the seed image when
        there is one, otherwise plain white.

    Returns
    -------
    numpy.ndarray
        (height, width, 3) uint8 canvas.
    """
    log = logger if logger is not None else logging.getLogger(__name__)

    if int(width) <= 0 or int(height) <= 0:
        raise ValueError(f"width and height must be positive, got {width}x{height}")
    if int(dots) < 0:
        raise ValueError(f"dots must be >= 0, got {dots}")
    width, height, dots = int(width), int(height), int(dots)

    log.info(f"Creating a Sierpinski triangle with {dots} points on a {width}x{height} image")
    vertices = triangle_vertices(width, height)

    log.info("Creating image")
    if canvas_seed is not None:
        canvas = seed_canvas(canvas_seed, width, height)
    else:
        canvas = blank_canvas(width, height)

    if color is None:
        if canvas_seed is not None:
            color = ImageSampledColor(fit_image(canvas_seed, width, height))
        else:
            color = ConstantColor(WHITE)

    plotter = ChaosGamePlotter(rng=rng, progress=progress, logger=log)
    return plotter.plot(canvas, vertices, dots, color)
