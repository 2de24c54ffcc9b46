"""
Bounded body accumulator, JSON decoding and header guards
"""

import json

import pytest
from starlette.datastructures import Headers

from employee_api.api.extractors import accumulate_body, decode_json
from employee_api.api.guards import ContentTypeGuard, HeaderGuard
from employee_api.config.settings import MAX_PAYLOAD_SIZE
from employee_api.models.common import UserInfo
from employee_api.utils.errors import PayloadTooLargeError, ValidationError


class ChunkSource:
    """Async chunk iterator that records how many chunks were pulled"""

    def __init__(self, chunks):
        self.chunks = list(chunks)
        self.pulled = 0

    def __aiter__(self):
        return self

    async def __anext__(self):
        if self.pulled >= len(self.chunks):
            raise StopAsyncIteration
        chunk = self.chunks[self.pulled]
        self.pulled += 1
        return chunk


class TestAccumulateBody:

    @pytest.mark.asyncio
    async def test_joins_chunks(self):
        source = ChunkSource([b'{"user_id": ', b'1, "friend": ', b'"bob"}'])
        assert await accumulate_body(source) == b'{"user_id": 1, "friend": "bob"}'

    @pytest.mark.asyncio
    async def test_exact_limit_is_accepted(self):
        source = ChunkSource([b"a" * 100, b"b" * 28])
        body = await accumulate_body(source, limit=128)
        assert len(body) == 128

    @pytest.mark.asyncio
    async def test_overflow_stops_reading(self):
        chunk = b"x" * 65_536
        source = ChunkSource([chunk] * 10)

        with pytest.raises(PayloadTooLargeError) as info:
            await accumulate_body(source)

        assert info.value.message == "overflow"
        assert info.value.status_code == 400
        # Four chunks fill 256 KiB exactly; the fifth overflows and nothing after it is read
        assert source.pulled == 5

    @pytest.mark.asyncio
    async def test_overflow_before_decode_of_valid_json(self):
        document = json.dumps({"user_id": 1, "friend": "f" * (MAX_PAYLOAD_SIZE + 10)}).encode()
        source = ChunkSource([document[i:i + 4096] for i in range(0, len(document), 4096)])

        with pytest.raises(PayloadTooLargeError):
            await accumulate_body(source)

    @pytest.mark.asyncio
    async def test_empty_body(self):
        assert await accumulate_body(ChunkSource([])) == b""


class TestDecodeJson:

    def test_valid(self):
        info = decode_json(b'{"user_id": 3, "friend": "ann"}', UserInfo)
        assert info == UserInfo(user_id=3, friend="ann")

    @pytest.mark.parametrize("body", [
        b"not json",
        b'{"user_id": "three", "friend": "ann"}',
        b'{"friend": "ann"}',
        b'{"user_id": -1, "friend": "ann"}',
        b"",
    ])
    def test_invalid(self, body):
        with pytest.raises(ValidationError):
            decode_json(body, UserInfo)


class TestGuards:

    @pytest.mark.parametrize("value,expected", [
        ("application/json", True),
        ("application/json; charset=utf-8", True),
        ("Application/JSON", True),
        ("text/plain", False),
        ("application/jsonp", False),
    ])
    def test_content_type_guard(self, value, expected):
        guard = ContentTypeGuard("application/json")
        assert guard(Headers({"content-type": value})) is expected

    def test_content_type_guard_missing_header(self):
        assert ContentTypeGuard("application/json")(Headers({})) is False

    def test_header_guard_exact_match(self):
        guard = HeaderGuard("X-Api-Version", "2")
        assert guard(Headers({"x-api-version": "2"}))
        assert not guard(Headers({"x-api-version": "20"}))
