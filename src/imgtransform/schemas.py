"""
Modelos de datos y validación

Define los tipos utilizados para:
- Representar los formatos de imagen declarados por el cliente
- Describir la transformación solicitada a través de las cabeceras
- Informar de cabeceras mal formadas en modo estricto
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_COMPRESSION = 80


class HeaderPolicy(str, Enum):
    LENIENT = "lenient"
    STRICT = "strict"


class ImageFormat(str, Enum):
    JPEG = "jpeg"
    PNG = "png"
    GIF = "gif"
    BMP = "bmp"
    UNKNOWN = "unknown"

    @classmethod
    def from_mime(cls, mime: Optional[str], default: "ImageFormat") -> "ImageFormat":
        """
        Map a MIME type string to a format, falling back to ``default``.
        The lookup is exact after lower-casing, so parameters such as
        ``; charset=...`` do not match.
        """
        if mime is None:
            return default
        return MIME_FORMATS.get(mime.lower(), default)


MIME_FORMATS: dict[str, ImageFormat] = {
    "image/jpeg": ImageFormat.JPEG,
    "image/png": ImageFormat.PNG,
    "image/gif": ImageFormat.GIF,
    "image/bmp": ImageFormat.BMP,
}


class TransformConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    declared_input_format: ImageFormat = ImageFormat.UNKNOWN
    compression: int = Field(default=DEFAULT_COMPRESSION, ge=1, le=100)
    desired_output_format: ImageFormat = ImageFormat.JPEG
    output_width: int = Field(default=0, ge=0)
    output_height: int = Field(default=0, ge=0)
    crop_offset_x: int = Field(default=0, ge=0)
    crop_offset_y: int = Field(default=0, ge=0)
    crop_width: int = Field(default=0, ge=0)
    crop_height: int = Field(default=0, ge=0)
    ignore_aspect_ratio: bool = False

    @property
    def wants_crop(self) -> bool:
        return self.crop_width != 0 and self.crop_height != 0

    @property
    def wants_resize(self) -> bool:
        return self.output_width != 0 and self.output_height != 0


class HeaderIssue(BaseModel):
    header: str
    value: str
    reason: str
