import argparse
import logging
import os
import sys
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from models.errors import DecodeError, EncodeError
from models.pixel_transform import PixelTransform
from services.image_service import ImageService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="recolor",
        description="Recolour an image file (grayscale or sepia) and save it.",
    )
    ap.add_argument("input", help="source image (jpg, png, bmp, gif, ...)")
    ap.add_argument("output", help="destination; its extension picks the format")
    ap.add_argument("--transform", default=PixelTransform.AVERAGE.value,
                    choices=[t.value for t in PixelTransform])
    ap.add_argument("--codec", default=None, choices=["pillow", "opencv"],
                    help="image codec (default: $IMAGE_CODEC or pillow)")
    ap.add_argument("--verbose", "-v", action="store_true", help="debug logging")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    log_format = '%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s'
    level_name = "DEBUG" if args.verbose else os.getenv("LOG_LEVEL", "INFO").strip().upper()
    level = logging.getLevelName(level_name)  # int for known names
    bad_level = not isinstance(level, int)
    logging.basicConfig(
        level=logging.INFO if bad_level else level,
        format=log_format,
        datefmt='%H:%M:%S'
    )
    if bad_level:
        logger.error(f"Config error: invalid LOG_LEVEL {level_name!r}")
        return 1

    try:
        service = ImageService(codec=args.codec)
    except ValueError as err:
        logger.error(f"Config error: {err}")
        return 1

    try:
        service.recolor_file(args.input, args.output, args.transform)
    except DecodeError as err:
        logger.error(f"DecodeError: {args.input}: {err}")
        return 1
    except EncodeError as err:
        logger.error(f"EncodeError: {args.output}: {err}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
