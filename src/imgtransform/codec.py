"""
Capacidad de códec de imágenes basada en Pillow.

Este módulo encapsula todas las primitivas de imagen que necesita el servicio,
de forma que el pipeline de transformación no dependa directamente de Pillow.

Responsabilidades:
- Decodificar bytes a un raster en memoria
- Recortar y redimensionar rasters
- Codificar el resultado como JPEG
"""

import struct
from io import BytesIO

from PIL import Image


class TransformError(Exception):
    """Base class for failures while transforming an image."""


class DecodeError(TransformError):
    """The request body is not a valid or supported image."""


class CropError(TransformError):
    """The crop rectangle does not overlap the decoded image."""


class ResizeError(TransformError):
    """The raster could not be resampled to the requested size."""


class EncodeError(TransformError):
    """The transformed raster could not be written as JPEG."""


# Modes the JPEG writer accepts as they are
JPEG_MODES = ("RGB", "L", "CMYK")


def fit_dimensions(width: int, height: int, box_width: int, box_height: int) -> tuple[int, int]:
    """
    Largest size with the same aspect ratio that fits inside the box.
    Each side is rounded and kept at least one pixel wide.
    """
    ratio = min(box_width / width, box_height / height)
    return max(round(width * ratio), 1), max(round(height * ratio), 1)


class PillowCodec:

    def __init__(self, resample: Image.Resampling = Image.Resampling.LANCZOS):
        self.resample = resample

    def decode(self, data: bytes) -> Image.Image:
        try:
            img = Image.open(BytesIO(data))
            img.load()
        except (
            OSError,
            ValueError,
            SyntaxError,
            EOFError,
            struct.error,
            Image.DecompressionBombError,
        ) as e:
            raise DecodeError(str(e)) from e
        return img

    def crop(self, img: Image.Image, x: int, y: int, width: int, height: int) -> Image.Image:
        # Clamp the rectangle to the raster instead of padding it
        x = min(x, img.width)
        y = min(y, img.height)
        width = min(width, img.width - x)
        height = min(height, img.height - y)
        if width == 0 or height == 0:
            raise CropError(
                f"crop origin ({x}, {y}) lies outside the {img.width}x{img.height} image"
            )
        return img.crop((x, y, x + width, y + height))

    def resize(self, img: Image.Image, width: int, height: int) -> Image.Image:
        return self._resample(img, fit_dimensions(img.width, img.height, width, height))

    def resize_exact(self, img: Image.Image, width: int, height: int) -> Image.Image:
        return self._resample(img, (width, height))

    def _resample(self, img: Image.Image, size: tuple[int, int]) -> Image.Image:
        try:
            return img.resize(size, self.resample)
        except (OverflowError, ValueError, MemoryError) as e:
            raise ResizeError(f"Error resizing to {size[0]}x{size[1]}: {e}") from e

    def encode_jpeg(self, img: Image.Image, quality: int) -> bytes:
        if img.width == 0 or img.height == 0:
            raise EncodeError(f"cannot encode an empty {img.width}x{img.height} image")
        output_buffer = BytesIO()
        try:
            if img.mode not in JPEG_MODES:
                img = img.convert("RGB")
            img.save(output_buffer, format="JPEG", quality=quality)
        except (OSError, ValueError) as e:
            raise EncodeError(f"Error encoding JPEG: {e}") from e
        return output_buffer.getvalue()
