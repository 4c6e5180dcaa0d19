from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool

from imgtransform.codec import PillowCodec, TransformError
from imgtransform.config import GET_RESPONSE_TEXT
from imgtransform.deps import get_codec, get_header_policy
from imgtransform.schemas import HeaderPolicy
from imgtransform.services.headers import (HeaderValidationError,
                                           build_transform_config)
from imgtransform.services.images import transform_image

router = APIRouter()


@router.get("/{path:path}")
async def usage(path: str):
    return PlainTextResponse(GET_RESPONSE_TEXT)


@router.post("/{path:path}")
async def transform(
    request: Request,
    path: str,
    codec: PillowCodec = Depends(get_codec),
    policy: HeaderPolicy = Depends(get_header_policy),
):
    """Transform the uploaded image as described by the request headers."""
    body = await request.body()

    try:
        config = build_transform_config(request.headers, policy)
    except HeaderValidationError as e:
        raise HTTPException(
            status_code=400, detail=[issue.model_dump() for issue in e.issues]
        ) from e

    try:
        data = await run_in_threadpool(transform_image, body, config, codec)
    except TransformError as e:
        return PlainTextResponse(str(e), status_code=500)

    return Response(content=data, media_type="image/jpeg")


def get_router():
    return router
