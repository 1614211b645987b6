"""
Per-pixel recolouring strategies.

Each kernel works on a float64 (..., 3) RGB array and returns uint8 of the
same shape, so one pass recolours a whole grid. Calling a member on a single
ColorTriple runs the same kernel on a 1-element array.
Rounding is half-up: floor(x + 0.5).
"""
from __future__ import annotations
from enum import Enum
import numpy as np

from models.color_triple import ColorTriple
from models.errors import ShapeViolation


def _round_half_up(values: np.ndarray) -> np.ndarray:
    return np.floor(values + 0.5)


def _replicate(gray: np.ndarray) -> np.ndarray:
    return np.repeat(np.asarray(gray)[..., np.newaxis], 3, axis=-1).astype(np.uint8)


def _average(rgb: np.ndarray) -> np.ndarray:
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    return _replicate(_round_half_up((r + g + b) / 3))


def _lightness(rgb: np.ndarray) -> np.ndarray:
    brightest = rgb.max(axis=-1)
    darkest = rgb.min(axis=-1)
    return _replicate(_round_half_up((brightest + darkest) / 2))


def _luminosity(rgb: np.ndarray) -> np.ndarray:
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    return _replicate(_round_half_up(0.21 * r + 0.72 * g + 0.07 * b))


def _sepia(rgb: np.ndarray) -> np.ndarray:
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    toned = np.stack([
        0.393 * r + 0.769 * g + 0.189 * b,
        0.349 * r + 0.686 * g + 0.168 * b,
        0.272 * r + 0.534 * g + 0.131 * b,
    ], axis=-1)
    return np.minimum(_round_half_up(toned), 255).astype(np.uint8)


class PixelTransform(Enum):
    AVERAGE = "average"
    LIGHTNESS = "lightness"
    LUMINOSITY = "luminosity"
    SEPIA = "sepia"

    @classmethod
    def from_name(cls, name: str) -> "PixelTransform":
        try:
            return cls(name.strip().lower())
        except ValueError:
            known = ", ".join(t.value for t in cls)
            raise ValueError(f"Unknown transform {name!r} (expected one of: {known})") from None

    @property
    def is_grayscale(self) -> bool:
        return self is not PixelTransform.SEPIA

    def apply_array(self, rgb) -> np.ndarray:
        """Recolour every pixel of an (..., 3) array; returns a new uint8 array."""
        rgb = np.asarray(rgb)
        if rgb.ndim == 0 or rgb.shape[-1] != 3:
            raise ShapeViolation(f"expected (..., 3) RGB values, got shape {rgb.shape}")
        return _KERNELS[self](rgb.astype(np.float64))

    def __call__(self, color: ColorTriple) -> ColorTriple:
        r, g, b = self.apply_array(np.array(color.as_tuple(), dtype=np.uint8))
        return ColorTriple(int(r), int(g), int(b))


_KERNELS = {
    PixelTransform.AVERAGE: _average,
    PixelTransform.LIGHTNESS: _lightness,
    PixelTransform.LUMINOSITY: _luminosity,
    PixelTransform.SEPIA: _sepia,
}
