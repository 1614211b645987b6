from pathlib import Path
from typing import Union
import logging
from dotenv import load_dotenv

from models.pixel_grid import PixelGrid
from models.pixel_transform import PixelTransform
from repositories.codec import Codec
from repositories.image_repository import ImageRepository

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


# ─── Grid operations (no I/O) ─────────────────────────────────────────
def copy(grid: PixelGrid) -> PixelGrid:
    """Independent copy: equal cells, separate storage."""
    grid.validate()
    return grid.copy()


def apply_transform(grid: PixelGrid, transform: PixelTransform) -> None:
    """
    Replace every cell with transform(cell), in place.
    Cells are independent, so the whole grid is recoloured in one array pass.
    Dimensions never change.
    """
    grid.validate()
    grid.pixels[...] = transform.apply_array(grid.pixels)


def apply_grayscale_average(grid: PixelGrid) -> None:
    apply_transform(grid, PixelTransform.AVERAGE)


def apply_grayscale_lightness(grid: PixelGrid) -> None:
    apply_transform(grid, PixelTransform.LIGHTNESS)


def apply_grayscale_luminosity(grid: PixelGrid) -> None:
    apply_transform(grid, PixelTransform.LUMINOSITY)


def apply_sepia(grid: PixelGrid) -> None:
    apply_transform(grid, PixelTransform.SEPIA)


# ─── File helpers (default repository per call) ──────────────────────
def load(path: Union[str, Path]) -> PixelGrid:
    return ImageRepository().load(path)


def save(path: Union[str, Path], grid: PixelGrid) -> None:
    ImageRepository().save(path, grid)


class ImageService:
    """Business-level load / recolour / save. Codec details stay in the repository."""
    def __init__(self, codec: Union[Codec, str, None] = None):
        self.image_repository = ImageRepository(codec)

    def load(self, path: Union[str, Path]) -> PixelGrid:
        """Load a single image from disk into a PixelGrid."""
        return self.image_repository.load(path)

    def save(self, path: Union[str, Path], grid: PixelGrid) -> None:
        """Encode the grid in the format named by the path's extension."""
        self.image_repository.save(path, grid)

    @staticmethod
    def copy(grid: PixelGrid) -> PixelGrid:
        return copy(grid)

    @staticmethod
    def apply(grid: PixelGrid, transform: Union[PixelTransform, str]) -> None:
        if isinstance(transform, str):
            transform = PixelTransform.from_name(transform)
        apply_transform(grid, transform)

    def recolor_file(
            self,
            src: Union[str, Path],
            dst: Union[str, Path],
            transform: Union[PixelTransform, str],
    ) -> PixelGrid:
        """
        Load `src`, recolour it, save to `dst`.

        Returns:
            PixelGrid: the recoloured grid that was written.
        """
        grid = self.load(src)
        self.apply(grid, transform)
        self.save(dst, grid)
        logger.info(f"Recoloured {src} -> {dst} ({grid.width}x{grid.height})")
        return grid
