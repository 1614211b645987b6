from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class ColorTriple:
    """
    Immutable 8-bit RGB value. Stored by value in every grid cell.
    """
    red: int
    green: int
    blue: int

    def __post_init__(self):
        for name in ("red", "green", "blue"):
            value = getattr(self, name)
            # bool is an int subclass, but True is not a channel value
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an int, got {value!r}")
            if not 0 <= value <= 255:
                raise ValueError(f"{name} must be in [0, 255], got {value}")

    @classmethod
    def gray(cls, value: int) -> "ColorTriple":
        return cls(value, value, value)

    @classmethod
    def from_packed(cls, packed: int) -> "ColorTriple":
        """Build from a packed 0xAARRGGBB / 0xRRGGBB int. The alpha byte is ignored."""
        return cls((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF)

    @property
    def packed(self) -> int:
        return (self.red << 16) | (self.green << 8) | self.blue

    def as_tuple(self) -> tuple[int, int, int]:
        return self.red, self.green, self.blue
