"""
Protocol demonstration routes: path/query/body extraction, streaming,
error injection and header-guarded resources
"""

import logging
from typing import AsyncIterator

from fastapi import APIRouter, Depends, Path, Query, Request, Response
from fastapi.responses import PlainTextResponse, StreamingResponse

from employee_api.api.extractors import decode_json, json_body, read_bounded_body
from employee_api.api.guards import ContentTypeGuard, guarded_route
from employee_api.models.common import UserInfo
from employee_api.utils.errors import DemoError

router = APIRouter()
logger = logging.getLogger(__name__)

# Only reachable with content-type: application/json; anything else falls through to 404
json_users = APIRouter(
    prefix="/users",
    route_class=guarded_route(ContentTypeGuard("application/json")),
)

text_resource = APIRouter(route_class=guarded_route(ContentTypeGuard("text/plain")))


@router.get("/index.html", response_class=PlainTextResponse)
async def index():
    return "Hello world!"


@router.get("/users/q", response_class=PlainTextResponse)
async def query(name: str = Query(...)):
    return f"Welcome {name}!"


@router.get("/users/{user_id}/{friend}", response_class=PlainTextResponse)
async def path(
    user_id: int = Path(..., ge=0, le=4_294_967_295),
    friend: str = Path(...),
):
    return f"Welcome {friend}! user_id:{user_id}"


@json_users.post("/payload", response_model=UserInfo)
async def payload(request: Request):
    """Read the raw body under the 256 KiB ceiling, then decode it"""
    body = await read_bounded_body(request)
    return decode_json(body, UserInfo)


@json_users.post("/json", response_model=UserInfo)
async def json_echo(info: UserInfo = Depends(json_body(UserInfo))):
    return info


async def _stream_body() -> AsyncIterator[bytes]:
    yield b"test"


@router.get("/stream")
async def stream():
    return StreamingResponse(_stream_body(), media_type="application/octet-stream")


@router.get("/error")
async def error():
    err = DemoError("test error")
    logger.info(str(err))
    raise err


@text_resource.get("/resource")
async def resource():
    return Response(status_code=200)
