import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

import imgtransform.routers.api as transform_router
from imgtransform.config import get_settings
from imgtransform.deps import lifespan
from imgtransform.schemas import HeaderPolicy


async def not_found_handler(request: Request, exc: StarletteHTTPException):
    # Anything but GET and POST, preflights included, is answered like an unknown route
    if exc.status_code in (404, 405):
        return Response(status_code=404)
    return await http_exception_handler(request, exc)


def create_app(header_policy: Optional[HeaderPolicy] = None) -> FastAPI:

    if header_policy is None:
        header_policy = get_settings().header_policy

    # No docs routes, every GET path answers with the usage text
    app = FastAPI(
        title="Image Transform API",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.header_policy = header_policy

    app.add_exception_handler(StarletteHTTPException, not_found_handler)
    app.include_router(transform_router.get_router())
    return app


logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)
