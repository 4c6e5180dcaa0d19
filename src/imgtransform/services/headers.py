"""
Construcción de la configuración de transformación

Lee un conjunto fijo de cabeceras de la petición y produce un
TransformConfig completo, aplicando valores por defecto y límites.

Las cabeceras mal formadas nunca detienen la petición en modo permisivo:
la funcionalidad afectada (recorte, redimensionado) se desactiva. En modo
estricto se rechazan con la lista de problemas encontrados.
"""

import logging
from typing import Mapping, Optional

from imgtransform.schemas import (DEFAULT_COMPRESSION, HeaderIssue,
                                  HeaderPolicy, ImageFormat, TransformConfig)
from imgtransform.utils import parse_crop_result, parse_size_result, parse_uint

logger = logging.getLogger(__name__)


class HeaderValidationError(ValueError):
    def __init__(self, issues: list[HeaderIssue]):
        self.issues = issues
        super().__init__(
            "; ".join(f"{issue.header}: {issue.reason}" for issue in issues)
        )


def parse_compression(value: Optional[str]) -> tuple[int, Optional[str]]:
    """
    Return the JPEG quality for an ``X-Compress`` value and the reason it was
    defaulted, if it was. Our range is 1 - 100, anything else means 80.
    """
    if value is None:
        return DEFAULT_COMPRESSION, None
    compression, defaulted = parse_uint(value.strip())
    if defaulted:
        return DEFAULT_COMPRESSION, "not an integer"
    if compression == 0 or compression > 100:
        return DEFAULT_COMPRESSION, "out of range 1-100"
    return compression, None


def build_transform_config(
    headers: Mapping[str, str], policy: HeaderPolicy = HeaderPolicy.LENIENT
) -> TransformConfig:
    """
    Build the transformation for a request from its headers.

    ``headers`` must do case-insensitive lookups, as Starlette's Headers do.
    """
    issues: list[HeaderIssue] = []

    def note(header: str, value: str, reason: str):
        issues.append(HeaderIssue(header=header, value=value, reason=reason))

    # Informational only, the decoder guesses the real format
    input_format = ImageFormat.from_mime(headers.get("Content-Type"), ImageFormat.UNKNOWN)
    output_format = ImageFormat.from_mime(headers.get("Accept"), ImageFormat.JPEG)

    raw_compress = headers.get("X-Compress")
    compression, reason = parse_compression(raw_compress)
    if reason:
        note("X-Compress", raw_compress, reason)

    width, height = 0, 0
    raw_size = headers.get("X-Size")
    if raw_size is not None:
        (width, height), defaulted = parse_size_result(raw_size)
        if defaulted:
            note("X-Size", raw_size, "expected <width>x<height>")

    raw_ignore = headers.get("X-ignore-Aspect-Ratio")
    ignore_aspect_ratio = raw_ignore == "true"
    if raw_ignore is not None and raw_ignore not in ("true", "false"):
        note("X-ignore-Aspect-Ratio", raw_ignore, "expected true or false")

    x, y, crop_width, crop_height = 0, 0, 0, 0
    raw_crop = headers.get("X-Crop")
    if raw_crop is not None:
        (x, y, crop_width, crop_height), defaulted = parse_crop_result(raw_crop)
        if defaulted:
            note("X-Crop", raw_crop, "expected <x>p<y>p<width>x<height>")

    if issues:
        if policy == HeaderPolicy.STRICT:
            raise HeaderValidationError(issues)
        for issue in issues:
            logger.debug("Defaulted header %s=%r: %s", issue.header, issue.value, issue.reason)

    return TransformConfig(
        declared_input_format=input_format,
        compression=compression,
        desired_output_format=output_format,
        output_width=width,
        output_height=height,
        crop_offset_x=x,
        crop_offset_y=y,
        crop_width=crop_width,
        crop_height=crop_height,
        ignore_aspect_ratio=ignore_aspect_ratio,
    )
