#!/usr/bin/env python3
"""Render a Sierpinski triangle with the chaos game and save it as an image.

Examples::

    sierpinski -W 1920 -H 1080 -d 5000000
    sierpinski -W 800 -H 800 -d 200000 --color "#f80" -o orange.png
    sierpinski -W 1920 -H 1080 -d 3000000 --image photo.jpg --wallpaper
    sierpinski --config sierpinski.yml --seed 42
"""

import argparse
import logging
import os
import random
import sys

from PIL import Image
from tqdm import tqdm

from canvas import SeedImageError, load_seed_image
from chaos_game import generate
from color_source import color_source_for
from render_config import ConfigError, RenderConfig, load_config
from wallpaper import WallpaperError, set_wallpaper

logger = logging.getLogger(__name__)


def setup_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def build_parser():
    parser = argparse.ArgumentParser(
        description="Create a Sierpinski triangle using the chaos game",
    )
    parser.add_argument("-W", "--width", type=int, help="Width of the image (in pixels)")
    parser.add_argument("-H", "--height", type=int, help="Height of the image (in pixels)")
    parser.add_argument("-d", "--dots", type=int, help="Number of dots to draw on the image")
    parser.add_argument("-o", "--output", metavar="FILE", help="The path of the output image")
    parser.add_argument("--image", metavar="PATH", help="Image to blend under the triangle; dots take its colors")
    parser.add_argument("--color", metavar="HEX", help="Dot color as rgb or rrggbb hex, e.g. '#ff8800'")
    parser.add_argument(
        "--wallpaper",
        action="store_const",
        const=True,
        default=None,
        help="Set the generated image as wallpaper",
    )
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible image")
    parser.add_argument("--config", metavar="FILE", help="YAML file with default settings")
    parser.add_argument("--show", action="store_true", help="Show the result in a window")
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def show_image(img, title):
    import matplotlib.pyplot as plt

    plt.figure(figsize=(8, 8))
    plt.imshow(img)
    plt.title(title)
    plt.axis("off")
    plt.show()


def render(cfg, show_progress=True):
    """Run one render described by *cfg* and return the PIL image."""
    seed_img = None
    if cfg.image:
        seed_img = load_seed_image(cfg.image, cfg.width, cfg.height)

    color = color_source_for(color=cfg.color, image=seed_img)
    rng = random.Random(cfg.seed)

    with tqdm(total=cfg.dots, unit="dots", disable=not show_progress) as bar:
        canvas = generate(cfg.width, cfg.height, cfg.dots, canvas_seed=seed_img, color=color,
                          rng=rng, progress=bar, logger=logger)
    return Image.fromarray(canvas)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    try:
        cfg = load_config(args.config) if args.config else RenderConfig.from_mapping({})
    except ConfigError as e:
        logger.error(str(e))
        return 1

    cfg = cfg.merged({
        "width": args.width,
        "height": args.height,
        "dots": args.dots,
        "output": args.output,
        "image": args.image,
        "color": args.color,
        "wallpaper": args.wallpaper,
        "seed": args.seed,
    })

    missing = [name for name in ("width", "height", "dots") if getattr(cfg, name) is None]
    if missing:
        parser.error(f"missing required values: {', '.join('--' + m for m in missing)}")

    try:
        img = render(cfg, show_progress=not args.no_progress)
    except (SeedImageError, ValueError) as e:
        logger.error(str(e))
        return 1

    save_path = cfg.output or cfg.default_output()
    logger.info("Saving image")
    try:
        img.save(save_path)
    except (OSError, ValueError) as e:
        logger.error(f"Could not save {save_path}: {e}")
        return 1
    logger.info(f"Saved {save_path}")

    if cfg.wallpaper:
        logger.info("Setting image as wallpaper")
        try:
            set_wallpaper(os.path.abspath(save_path))
        except WallpaperError as e:
            logger.error(str(e))
            return 1

    if args.show:
        show_image(img, os.path.basename(save_path))

    return 0


if __name__ == "__main__":
    sys.exit(main())
