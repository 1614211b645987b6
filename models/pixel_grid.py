from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence, Union
import numpy as np

from models.color_triple import ColorTriple
from models.errors import ShapeViolation

Cell = Union[ColorTriple, Sequence[int]]


def _coerce_cell(cell: Cell, y: int, x: int) -> ColorTriple:
    if isinstance(cell, ColorTriple):
        return cell
    try:
        r, g, b = cell
    except (TypeError, ValueError) as exc:
        raise ShapeViolation(f"cell ({y}, {x}) is not an RGB triple: {cell!r}") from exc
    try:
        return ColorTriple(r, g, b)
    except ValueError as exc:
        raise ShapeViolation(f"cell ({y}, {x}): {exc}") from exc


@dataclass(eq=False, repr=False)
class PixelGrid:
    """
    Row-major 2-D grid of RGB pixels.
    Height and width come from the backing array, so every row always has
    exactly `width` cells. Build through the from_* factories.
    """
    pixels: np.ndarray  # Shape (H, W, 3), dtype uint8, RGB order.

    def __post_init__(self):
        self.validate()

    # ── Factories ────────────────────────────────────────────────────
    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Cell]]) -> "PixelGrid":
        """
        Build from nested rows of ColorTriple (or plain (r, g, b) tuples).
        Raises ShapeViolation when the rows are not all the same length
        or a cell is not a valid RGB triple.
        """
        try:
            rows = [list(row) for row in rows]
        except TypeError as exc:
            raise ShapeViolation(f"rows must be an iterable of iterables: {exc}") from exc
        width = len(rows[0]) if rows else 0
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ShapeViolation(
                    f"row {y} has {len(row)} cells, expected {width}"
                )

        pixels = np.zeros((len(rows), width, 3), dtype=np.uint8)
        for y, row in enumerate(rows):
            for x, cell in enumerate(row):
                pixels[y, x] = _coerce_cell(cell, y, x).as_tuple()
        return cls(pixels)

    @classmethod
    def from_array(cls, arr) -> "PixelGrid":
        """Copy an (H, W, 3) integer array into a new grid."""
        arr = np.asarray(arr)
        if arr.ndim != 3 or arr.shape[2] != 3:
            raise ShapeViolation(f"expected an (H, W, 3) array, got shape {arr.shape}")
        if arr.dtype != np.uint8:
            if not np.issubdtype(arr.dtype, np.integer):
                raise ShapeViolation(f"expected integer channels, got dtype {arr.dtype}")
            if arr.size and (arr.min() < 0 or arr.max() > 255):
                raise ShapeViolation("channel values must be in [0, 255]")
        return cls(np.array(arr, dtype=np.uint8, copy=True))

    @classmethod
    def blank(cls, height: int, width: int,
              fill: ColorTriple = ColorTriple(0, 0, 0)) -> "PixelGrid":
        if height < 0 or width < 0:
            raise ShapeViolation(f"negative dimensions: {height}x{width}")
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[...] = fill.as_tuple()
        return cls(pixels)

    # ── Shape ────────────────────────────────────────────────────────
    def validate(self) -> None:
        """Fail fast if the backing storage is not an (H, W, 3) uint8 array."""
        pixels = self.pixels
        if not isinstance(pixels, np.ndarray):
            raise ShapeViolation(f"pixels must be a numpy array, got {type(pixels).__name__}")
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ShapeViolation(f"pixels must have shape (H, W, 3), got {pixels.shape}")
        if pixels.dtype != np.uint8:
            raise ShapeViolation(f"pixels must be uint8, got {pixels.dtype}")

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def shape(self) -> tuple[int, int]:
        return self.height, self.width

    @property
    def is_empty(self) -> bool:
        return self.height == 0 or self.width == 0

    # ── Cell access ──────────────────────────────────────────────────
    def __getitem__(self, key):
        if isinstance(key, tuple):
            y, x = key
            r, g, b = self.pixels[y, x]
            return ColorTriple(int(r), int(g), int(b))
        return tuple(ColorTriple(int(r), int(g), int(b)) for r, g, b in self.pixels[key])

    def __setitem__(self, key: tuple[int, int], color: ColorTriple) -> None:
        if not isinstance(color, ColorTriple):
            raise TypeError(f"cells hold ColorTriple values, got {type(color).__name__}")
        y, x = key
        self.pixels[y, x] = color.as_tuple()

    def __len__(self) -> int:
        return self.height

    def __iter__(self) -> Iterator[tuple[ColorTriple, ...]]:
        for y in range(self.height):
            yield self[y]

    def rows(self) -> list[list[ColorTriple]]:
        return [list(row) for row in self]

    # ── Value semantics ──────────────────────────────────────────────
    def copy(self) -> "PixelGrid":
        """Independent grid: same dimensions, equal cells, separate storage."""
        return PixelGrid(self.pixels.copy())

    def __eq__(self, other):
        if not isinstance(other, PixelGrid):
            return NotImplemented
        return self.pixels.shape == other.pixels.shape and np.array_equal(self.pixels, other.pixels)

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"PixelGrid(height={self.height}, width={self.width})"
