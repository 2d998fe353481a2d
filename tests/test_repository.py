"""Tests for the httpx-backed ConversationAPI."""

import json

import httpx
import pytest

from fast_intercom_conversations.models import PageParams
from fast_intercom_conversations.payloads import ConversationListParams, Reply
from fast_intercom_conversations.repository import ConversationAPI


class RecordingTransport:
    """Answer every request with a canned response and remember the requests."""

    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


def make_api(handler) -> ConversationAPI:
    return ConversationAPI(
        "test_token",
        base_url="https://intercom.test",
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_list_sends_query_params(conversation_json):
    handler = RecordingTransport(
        {"pages": {"page": 1, "per_page": 20, "total_pages": 1}, "conversations": [conversation_json]}
    )
    params = ConversationListParams(
        pages=PageParams(page=1, per_page=20), type="admin", admin_id="814860", open=False
    )

    async with make_api(handler) as api:
        result = await api.list(params)

    request = handler.requests[0]
    assert request.method == "GET"
    assert request.url.path == "/conversations"
    assert dict(request.url.params) == {
        "page": "1",
        "per_page": "20",
        "type": "admin",
        "admin_id": "814860",
        "open": "false",
    }
    assert result.conversations[0].id == "conv_1"


@pytest.mark.asyncio
async def test_request_headers(conversation_json):
    handler = RecordingTransport(conversation_json)

    async with make_api(handler) as api:
        await api.find("conv_1")

    headers = handler.requests[0].headers
    assert headers["Authorization"] == "Bearer test_token"
    assert headers["Accept"] == "application/json"
    assert headers["Intercom-Version"] == "2.13"


@pytest.mark.asyncio
async def test_find(conversation_json):
    handler = RecordingTransport(conversation_json)

    async with make_api(handler) as api:
        conversation = await api.find("conv_1")

    assert handler.requests[0].method == "GET"
    assert handler.requests[0].url.path == "/conversations/conv_1"
    assert conversation.conversation_message.subject == "Billing question"


@pytest.mark.asyncio
async def test_read_marks_conversation_read(conversation_json):
    handler = RecordingTransport({**conversation_json, "read": True})

    async with make_api(handler) as api:
        conversation = await api.read("conv_1")

    request = handler.requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/conversations/conv_1"
    assert json.loads(request.content) == {"read": True}
    assert conversation.read is True


@pytest.mark.asyncio
async def test_reply_posts_payload(conversation_json):
    handler = RecordingTransport(conversation_json)
    reply = Reply(type="admin", reply_type="comment", body="hello", admin_id="814860")

    async with make_api(handler) as api:
        await api.reply("conv_1", reply)

    request = handler.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/conversations/conv_1/reply"
    assert json.loads(request.content) == {
        "type": "admin",
        "message_type": "comment",
        "body": "hello",
        "admin_id": "814860",
    }


@pytest.mark.asyncio
async def test_http_error_is_raised_unchanged():
    handler = RecordingTransport(
        {"type": "error.list", "errors": [{"code": "not_found", "message": "Resource Not Found"}]},
        status_code=404,
    )

    async with make_api(handler) as api:
        with pytest.raises(httpx.HTTPStatusError) as exc_info:
            await api.find("missing")

    assert exc_info.value.response.status_code == 404
