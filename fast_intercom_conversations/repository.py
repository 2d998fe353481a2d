"""HTTP access to the Intercom conversations endpoints."""

import logging
from typing import Any, Protocol

import httpx

from .models import Conversation, ConversationList
from .payloads import ConversationListParams, Reply

logger = logging.getLogger(__name__)


class ConversationRepository(Protocol):
    """The four calls ConversationService needs from the API."""

    async def list(self, params: ConversationListParams) -> ConversationList: ...

    async def find(self, conversation_id: str) -> Conversation: ...

    async def read(self, conversation_id: str) -> Conversation: ...

    async def reply(self, conversation_id: str, reply: Reply) -> Conversation: ...


class ConversationAPI:
    """ConversationRepository backed by the Intercom REST API."""

    def __init__(
        self,
        access_token: str,
        base_url: str = "https://api.intercom.io",
        api_version: str = "2.13",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_version = api_version
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
                "Content-Type": "application/json",
                "Intercom-Version": api_version,
            },
            timeout=timeout,
            transport=transport,
        )

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, str] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Make a request and return the decoded JSON body."""
        logger.debug(f"{method} {endpoint} params={params}")
        response = await self.client.request(
            method=method, url=endpoint, params=params, json=json_data
        )
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Intercom API error: {e.response.status_code} - {e.response.text}"
            )
            raise
        return response.json()

    async def list(self, params: ConversationListParams) -> ConversationList:
        data = await self._request("GET", "/conversations", params=params.to_query())
        return ConversationList.from_dict(data)

    async def find(self, conversation_id: str) -> Conversation:
        data = await self._request("GET", f"/conversations/{conversation_id}")
        return Conversation.from_dict(data)

    async def read(self, conversation_id: str) -> Conversation:
        data = await self._request(
            "PUT", f"/conversations/{conversation_id}", json_data={"read": True}
        )
        return Conversation.from_dict(data)

    async def reply(self, conversation_id: str, reply: Reply) -> Conversation:
        data = await self._request(
            "POST", f"/conversations/{conversation_id}/reply", json_data=reply.to_dict()
        )
        return Conversation.from_dict(data)

    async def aclose(self):
        await self.client.aclose()

    async def __aenter__(self) -> "ConversationAPI":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()
