"""
Proporciona instancias compartidas que pueden ser inyectadas en cualquier punto de la aplicación

Gestiona:
- Códec de imágenes
- Política de lectura de cabeceras
- Ciclo de vida de la aplicación

El códec no guarda estado entre peticiones, por lo que una sola instancia
puede atender peticiones concurrentes.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Request

from imgtransform.codec import PillowCodec
from imgtransform.config import get_settings
from imgtransform.schemas import HeaderPolicy

logger = logging.getLogger(__name__)

codec = PillowCodec()


def get_codec() -> PillowCodec:
    return codec


def get_header_policy(request: Request) -> HeaderPolicy:
    return request.app.state.header_policy


@asynccontextmanager
async def lifespan(app):

    settings = get_settings()
    logger.info("Listening on http://%s:%d", settings.host, settings.port)
    yield

    logger.info("Image transform service shutting down.")
