# repositories/codec.py
"""
Codec port: encoded bytes <-> (H, W, 3) uint8 RGB arrays.

• Only this module touches Pillow / OpenCV.
• Alpha is dropped on decode and never written on encode.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from io import BytesIO
import cv2
import numpy as np
from PIL import Image as PILImage, UnidentifiedImageError

from models.errors import DecodeError, EncodeError


class Codec(ABC):
    """Narrow decode / encode interface. `formats` are lower-case extensions."""
    name = "codec"
    formats: frozenset = frozenset()

    def __init__(self, jpeg_quality: int = 95):
        self.jpeg_quality = jpeg_quality

    def supports(self, fmt: str) -> bool:
        return fmt.lower() in self.formats

    @abstractmethod
    def decode(self, data: bytes) -> np.ndarray:
        ...

    @abstractmethod
    def encode(self, pixels: np.ndarray, fmt: str) -> bytes:
        ...


class PillowCodec(Codec):
    name = "pillow"
    _PIL_FORMATS = {
        "png": "PNG",
        "jpg": "JPEG",
        "jpeg": "JPEG",
        "bmp": "BMP",
        "gif": "GIF",
        "tif": "TIFF",
        "tiff": "TIFF",
        "webp": "WEBP",
    }
    formats = frozenset(_PIL_FORMATS)

    def decode(self, data: bytes) -> np.ndarray:
        try:
            with PILImage.open(BytesIO(data)) as img:
                rgb = img.convert("RGB")
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise DecodeError(f"Pillow could not decode image data: {exc}") from exc
        return np.asarray(rgb, dtype=np.uint8)

    def encode(self, pixels: np.ndarray, fmt: str) -> bytes:
        pil_format = self._PIL_FORMATS.get(fmt.lower())
        if pil_format is None:
            raise EncodeError(f"Unsupported output format for Pillow: {fmt!r}")

        if not pixels.flags['C_CONTIGUOUS']:
            pixels = np.ascontiguousarray(pixels)
        img = PILImage.fromarray(pixels)

        params = {"quality": self.jpeg_quality} if pil_format in ("JPEG", "WEBP") else {}
        buffer = BytesIO()
        try:
            img.save(buffer, format=pil_format, **params)
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"Pillow could not encode {fmt!r}: {exc}") from exc
        return buffer.getvalue()


class OpenCVCodec(Codec):
    name = "opencv"
    formats = frozenset({"png", "jpg", "jpeg", "bmp", "tif", "tiff", "webp"})

    def decode(self, data: bytes) -> np.ndarray:
        buf = np.frombuffer(data, dtype=np.uint8)
        try:
            arr_bgr = cv2.imdecode(buf, cv2.IMREAD_COLOR)
        except cv2.error as exc:
            raise DecodeError(f"OpenCV could not decode image data: {exc}") from exc
        if arr_bgr is None:
            raise DecodeError("OpenCV could not decode image data")
        return cv2.cvtColor(arr_bgr, cv2.COLOR_BGR2RGB)

    def _params(self, fmt: str) -> list[int]:
        if fmt in ("jpg", "jpeg"):
            return [cv2.IMWRITE_JPEG_QUALITY, self.jpeg_quality]
        if fmt == "webp":
            return [cv2.IMWRITE_WEBP_QUALITY, self.jpeg_quality]
        return []

    def encode(self, pixels: np.ndarray, fmt: str) -> bytes:
        fmt = fmt.lower()
        if fmt not in self.formats:
            raise EncodeError(f"Unsupported output format for OpenCV: {fmt!r}")

        arr_bgr = cv2.cvtColor(np.ascontiguousarray(pixels), cv2.COLOR_RGB2BGR)
        try:
            ok, buf = cv2.imencode(f".{fmt}", arr_bgr, self._params(fmt))
        except cv2.error as exc:
            raise EncodeError(f"OpenCV could not encode {fmt!r}: {exc}") from exc
        if not ok:
            raise EncodeError(f"OpenCV could not encode {fmt!r}")
        return buf.tobytes()


_CODECS = {codec.name: codec for codec in (PillowCodec, OpenCVCodec)}


def get_codec(name: str, jpeg_quality: int = 95) -> Codec:
    try:
        codec_cls = _CODECS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"Unknown codec {name!r} (expected one of: {', '.join(_CODECS)})") from None
    return codec_cls(jpeg_quality=jpeg_quality)
