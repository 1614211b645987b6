from .color_triple import ColorTriple
from .errors import DecodeError, EncodeError, ImageUtilsError, ShapeViolation
from .pixel_grid import PixelGrid
from .pixel_transform import PixelTransform
