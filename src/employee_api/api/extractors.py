"""
Request body extractors

Path and query values are decoded by FastAPI's own typed parameters; bodies
go through these helpers so size limits are enforced while reading.
"""

import logging
from typing import AsyncIterator, Awaitable, Callable, Type, TypeVar

import pydantic
from fastapi import Request
from pydantic import BaseModel
from starlette.requests import ClientDisconnect

from employee_api.config.settings import MAX_PAYLOAD_SIZE
from employee_api.utils.errors import (
    PayloadTooLargeError,
    RequestAbortedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


async def accumulate_body(chunks: AsyncIterator[bytes], limit: int = MAX_PAYLOAD_SIZE) -> bytes:
    """
    Collect body chunks into one buffer, failing as soon as the total would
    pass limit. No further chunks are read after an overflow.
    """
    body = bytearray()
    async for chunk in chunks:
        if len(body) + len(chunk) > limit:
            raise PayloadTooLargeError()
        body.extend(chunk)
    return bytes(body)


async def read_bounded_body(request: Request, limit: int = MAX_PAYLOAD_SIZE) -> bytes:
    """Read the request body with a byte ceiling"""
    try:
        return await accumulate_body(request.stream(), limit)
    except ClientDisconnect as e:
        logger.info(f"Client disconnected while sending body to {request.url.path}")
        raise RequestAbortedError() from e


def decode_json(body: bytes, model: Type[M]) -> M:
    """Parse and validate a JSON document into model"""
    try:
        return model.model_validate_json(body)
    except pydantic.ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc']) or 'body'}: {err['msg']}"
            for err in e.errors()
        )
        raise ValidationError(f"Invalid JSON body - {details}") from e


def json_body(model: Type[M]) -> Callable[[Request], Awaitable[M]]:
    """
    Dependency factory: decode the whole body as model

    The limit comes from settings.json_body_limit. A declared Content-Length
    over the limit is rejected before any of the body is read.
    """
    async def extract(request: Request) -> M:
        limit = request.app.state.settings.json_body_limit

        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > limit:
            raise PayloadTooLargeError(f"JSON payload exceeds {limit} bytes")

        body = await read_bounded_body(request, limit)
        return decode_json(body, model)

    extract.__name__ = f"json_body_{model.__name__}"
    return extract
