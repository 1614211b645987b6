class ImageUtilsError(Exception):
    """Base class for every failure raised by the pixel-grid utilities."""


class DecodeError(ImageUtilsError):
    """Input file missing, unreadable, or not a format the codec recognises."""


class EncodeError(ImageUtilsError):
    """Output unwritable, unsupported target format, or malformed grid."""


class ShapeViolation(ImageUtilsError, ValueError):
    """A grid whose rows are not uniform (or whose cells are not RGB)."""
