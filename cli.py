#!/usr/bin/env python3
"""
Command line meme generator

Usage:
    python cli.py -i photo.jpg -t "top text" -b "bottom text" -o meme.png
"""

import argparse
import sys
from pathlib import Path
from loguru import logger

from modules import Ingestor, Renderer, Exporter
from utils.exceptions import FontLoadError, ImageLoadError, ImageSaveError


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Caption an image with top and bottom meme text")
    parser.add_argument("-i", "--image", required=True, help="Base image path or http(s) URL")
    parser.add_argument("-t", "--top", default="", help="Top caption")
    parser.add_argument("-b", "--bottom", default="", help="Bottom caption")
    parser.add_argument("-o", "--output", default="meme.png", help="Output file (default: meme.png)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    try:
        renderer = Renderer()
        image = Ingestor().load(args.image)
    except (FontLoadError, ImageLoadError) as e:
        logger.error(e.message)
        return 1

    meme = renderer.render(image, top=args.top, bottom=args.bottom)

    output = Path(args.output)
    try:
        Exporter(output_dir=output.resolve().parent).save(meme, output)
    except ImageSaveError as e:
        logger.error(e.message)
        return 1
    except OSError as e:
        logger.error(f"Cannot use output directory {output.parent}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
