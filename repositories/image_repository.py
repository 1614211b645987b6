from pathlib import Path
from typing import Union
import logging
import os
from dotenv import load_dotenv

from models.errors import DecodeError, EncodeError, ShapeViolation
from models.pixel_grid import PixelGrid
from repositories.codec import Codec, get_codec

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O between encoded images and PixelGrid entities.
    The output format is taken from the destination's extension.
    """
    def __init__(self, codec: Union[Codec, str, None] = None, jpeg_quality: int = None):
        if jpeg_quality is None:
            jpeg_quality = int(os.getenv("JPEG_QUALITY", "95"))
        if codec is None or isinstance(codec, str):
            codec = get_codec(codec or os.getenv("IMAGE_CODEC", "pillow"), jpeg_quality=jpeg_quality)
        self.codec = codec

    def supported_formats(self) -> list[str]:
        return sorted(self.codec.formats)

    # ─── Decode ───────────────────────────────────────────────────────
    def load_bytes(self, data: bytes) -> PixelGrid:
        pixels = self.codec.decode(data)
        return PixelGrid.from_array(pixels)

    def load(self, path: Union[str, Path]) -> PixelGrid:
        path = Path(path)
        try:
            with path.open("rb") as fh:
                data = fh.read()
        except OSError as exc:
            raise DecodeError(f"Image not found or unreadable: {path}") from exc

        try:
            grid = self.load_bytes(data)
        except DecodeError as exc:
            raise DecodeError(f"Unrecognised image format: {path}") from exc

        logger.debug(f"Loaded {path} ({grid.width}x{grid.height}) via {self.codec.name}")
        return grid

    # ─── Encode ───────────────────────────────────────────────────────
    @staticmethod
    def _as_grid(grid) -> PixelGrid:
        """Accept a PixelGrid or plain nested rows; malformed input is an EncodeError."""
        try:
            if isinstance(grid, PixelGrid):
                grid.validate()
                return grid
            return PixelGrid.from_rows(grid)
        except ShapeViolation as exc:
            raise EncodeError(f"Malformed pixel grid: {exc}") from exc

    def encode_bytes(self, grid, fmt: str) -> bytes:
        fmt = fmt.lower()
        if not self.codec.supports(fmt):
            raise EncodeError(
                f"Unsupported output format {fmt!r} "
                f"(supported: {', '.join(self.supported_formats())})"
            )
        grid = self._as_grid(grid)
        if grid.is_empty:
            raise EncodeError(f"Cannot encode an empty {grid.width}x{grid.height} grid")
        return self.codec.encode(grid.pixels, fmt)

    def save(self, path: Union[str, Path], grid) -> None:
        path = Path(path)
        fmt = path.suffix[1:]
        if not fmt:
            raise EncodeError(f"No file extension to choose an output format from: {path}")

        data = self.encode_bytes(grid, fmt)

        # write beside the target, then swap in
        tmp_path = path.with_name(f".{path.name}.{os.getpid()}.part")
        try:
            with tmp_path.open("wb") as fh:
                fh.write(data)
            os.replace(tmp_path, path)
        except OSError as exc:
            tmp_path.unlink(missing_ok=True)
            raise EncodeError(f"Could not write image: {path}") from exc

        logger.debug(f"Saved {path} as {fmt.lower()} ({len(data)} bytes) via {self.codec.name}")
