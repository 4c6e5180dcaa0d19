"""
Servicios de procesamiento de imágenes

Aplica un TransformConfig a los bytes recibidos, en un orden fijo:
decodificar -> recortar -> redimensionar -> codificar.

Los pasos de recorte y redimensionado son opcionales; la decodificación y
la codificación se ejecutan siempre. La salida es siempre JPEG.
"""

import logging

from imgtransform.codec import (CropError, DecodeError, EncodeError,
                                PillowCodec, ResizeError)
from imgtransform.schemas import ImageFormat, TransformConfig

logger = logging.getLogger(__name__)


def transform_image(body: bytes, config: TransformConfig, codec: PillowCodec) -> bytes:
    try:
        img = codec.decode(body)
    except DecodeError as e:
        logger.info("Could not decode %d byte upload: %s", len(body), e)
        raise

    if config.wants_crop:
        try:
            img = codec.crop(
                img,
                config.crop_offset_x,
                config.crop_offset_y,
                config.crop_width,
                config.crop_height,
            )
        except CropError as e:
            logger.info("Rejected crop: %s", e)
            raise

    if config.wants_resize:
        try:
            if config.ignore_aspect_ratio:
                img = codec.resize_exact(img, config.output_width, config.output_height)
            else:
                img = codec.resize(img, config.output_width, config.output_height)
        except ResizeError:
            logger.exception(
                "Resizing a %dx%d raster to %dx%d failed",
                img.width,
                img.height,
                config.output_width,
                config.output_height,
            )
            raise

    if config.desired_output_format != ImageFormat.JPEG:
        logger.debug(
            "Requested %s output, encoding JPEG", config.desired_output_format.value
        )

    try:
        return codec.encode_jpeg(img, config.compression)
    except EncodeError:
        logger.exception(
            "JPEG encoding failed for a %dx%d %s raster", img.width, img.height, img.mode
        )
        raise
