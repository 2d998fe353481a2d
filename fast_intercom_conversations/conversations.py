"""Conversation operations on top of a ConversationRepository."""

import logging
from collections.abc import Iterable

from .models import Conversation, ConversationList, MessagePerson, PageParams, User
from .payloads import (
    ConversationListParams,
    ConversationListState,
    ReplyType,
    build_assignment,
    build_reply,
    require_admin,
)
from .repository import ConversationRepository

logger = logging.getLogger(__name__)


class ConversationService:
    """List, fetch and act on conversations.

    Holds no state besides the repository; every method makes exactly one
    repository call and lets its errors propagate.
    """

    def __init__(self, repository: ConversationRepository):
        self.repository = repository

    async def list_all(
        self, page_params: PageParams | None = None, display_as: str = ""
    ) -> ConversationList:
        """List all conversations."""
        params = ConversationListParams(
            pages=page_params or PageParams(), display_as=display_as
        )
        return await self.repository.list(params)

    async def list_by_admin(
        self,
        admin_id: str,
        order: str = "",
        sort: str = "",
        state: ConversationListState = ConversationListState.SHOW_ALL,
        page_params: PageParams | None = None,
        display_as: str = "",
    ) -> ConversationList:
        """List conversations assigned to an admin."""
        open_flag = None
        state_filter = ""
        if state is ConversationListState.SHOW_OPEN:
            open_flag, state_filter = True, "open"
        elif state is ConversationListState.SHOW_CLOSED:
            open_flag, state_filter = False, "closed"

        params = ConversationListParams(
            pages=page_params or PageParams(),
            type="admin",
            admin_id=admin_id,
            order=order,
            sort=sort,
            open=open_flag,
            state=state_filter,
            display_as=display_as,
        )
        logger.debug(f"Listing conversations for admin {admin_id} ({state.name})")
        return await self.repository.list(params)

    async def list_by_user(
        self,
        user: User,
        state: ConversationListState = ConversationListState.SHOW_ALL,
        page_params: PageParams | None = None,
        display_as: str = "",
    ) -> ConversationList:
        """List conversations started by a user."""
        params = ConversationListParams(
            pages=page_params or PageParams(),
            type="user",
            intercom_user_id=user.id,
            user_id=user.user_id,
            email=user.email,
            unread=True if state is ConversationListState.SHOW_UNREAD else None,
            display_as=display_as,
        )
        return await self.repository.list(params)

    async def find(self, conversation_id: str) -> Conversation:
        return await self.repository.find(conversation_id)

    async def mark_read(self, conversation_id: str) -> Conversation:
        """Mark a conversation as read by its user."""
        return await self.repository.read(conversation_id)

    async def reply(
        self,
        conversation_id: str,
        author: MessagePerson,
        reply_type: ReplyType,
        body: str,
    ) -> Conversation:
        return await self._reply(conversation_id, author, reply_type, body, None)

    async def reply_with_attachment_urls(
        self,
        conversation_id: str,
        author: MessagePerson,
        reply_type: ReplyType,
        body: str,
        attachment_urls: Iterable[str],
    ) -> Conversation:
        """Reply to a conversation, attaching files by URL."""
        return await self._reply(
            conversation_id, author, reply_type, body, attachment_urls
        )

    async def assign(
        self, conversation_id: str, assigner: MessagePerson, assignee: MessagePerson
    ) -> Conversation:
        """Assign a conversation to another admin.

        Raises:
            AssignPreconditionError: if either party is not an Admin. Nothing
                is sent in that case.
        """
        reply = build_assignment(assigner, assignee)
        logger.debug(
            f"Assigning conversation {conversation_id} to admin {reply.assignee_id}"
        )
        return await self.repository.reply(conversation_id, reply)

    async def open(self, conversation_id: str, opener: MessagePerson) -> Conversation:
        """Open a conversation (without a body).

        Raises:
            AdminRequiredError: if the opener is not an Admin.
        """
        require_admin("opener", opener)
        return await self._reply(conversation_id, opener, ReplyType.OPEN, "", None)

    async def close(self, conversation_id: str, closer: MessagePerson) -> Conversation:
        """Close a conversation (without a body).

        Raises:
            AdminRequiredError: if the closer is not an Admin.
        """
        require_admin("closer", closer)
        return await self._reply(conversation_id, closer, ReplyType.CLOSE, "", None)

    async def _reply(
        self,
        conversation_id: str,
        author: MessagePerson,
        reply_type: ReplyType,
        body: str,
        attachment_urls: Iterable[str] | None,
    ) -> Conversation:
        reply = build_reply(author, reply_type, body, attachment_urls)
        logger.debug(
            f"Sending {reply.reply_type} from {reply.type} to conversation {conversation_id}"
        )
        return await self.repository.reply(conversation_id, reply)
