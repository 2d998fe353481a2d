"""Query parameters and reply bodies sent to the conversations API."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .models import (
    Admin,
    AdminRequiredError,
    AssignPreconditionError,
    MessagePerson,
    PageParams,
    message_address,
)


class ReplyType(str, Enum):
    """Kind of conversation part a reply creates.

    The values are sent verbatim as ``message_type``.
    """

    COMMENT = "comment"
    NOTE = "note"
    ASSIGN = "assignment"
    OPEN = "open"
    CLOSE = "close"


class ConversationListState(Enum):
    """Server-side filter for conversation lists.

    SHOW_OPEN and SHOW_CLOSED only apply to admin queries, SHOW_UNREAD only
    to user queries. Other combinations are sent without a filter.
    """

    SHOW_ALL = "all"
    SHOW_OPEN = "open"
    SHOW_CLOSED = "closed"
    SHOW_UNREAD = "unread"


@dataclass(frozen=True)
class ConversationListParams:
    """Query parameters for ``GET /conversations``. Every field is optional."""

    pages: PageParams = field(default_factory=PageParams)
    type: str = ""
    admin_id: str = ""
    intercom_user_id: str = ""
    user_id: str = ""
    email: str = ""
    open: bool | None = None
    unread: bool | None = None
    display_as: str = ""
    order: str = ""
    sort: str = ""
    state: str = ""

    def to_query(self) -> dict[str, str]:
        """Render as query parameters, omitting unset fields.

        ``None`` means unset, so ``open=False`` is still sent. A zero page or
        page size is unset too.
        """
        values: dict[str, Any] = {
            "page": self.pages.page or None,
            "per_page": self.pages.per_page or None,
            "type": self.type,
            "admin_id": self.admin_id,
            "intercom_user_id": self.intercom_user_id,
            "user_id": self.user_id,
            "email": self.email,
            "open": self.open,
            "unread": self.unread,
            "display_as": self.display_as,
            "order": self.order,
            "sort": self.sort,
            "state": self.state,
        }
        query = {}
        for key, value in values.items():
            if value is None or value == "":
                continue
            if isinstance(value, bool):
                query[key] = "true" if value else "false"
            else:
                query[key] = str(value)
        return query


@dataclass(frozen=True)
class Reply:
    """Body of ``POST /conversations/{id}/reply``.

    Exactly one identity slot is populated: ``admin_id`` for admins, the
    user triple for users.
    """

    type: str
    reply_type: str
    body: str = ""
    admin_id: str = ""
    intercom_user_id: str = ""
    user_id: str = ""
    email: str = ""
    assignee_id: str = ""
    attachment_urls: tuple[str, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"type": self.type, "message_type": self.reply_type}
        optional = {
            "body": self.body,
            "assignee_id": self.assignee_id,
            "admin_id": self.admin_id,
            "intercom_user_id": self.intercom_user_id,
            "email": self.email,
            "user_id": self.user_id,
        }
        payload.update({key: value for key, value in optional.items() if value})
        if self.attachment_urls:
            payload["attachment_urls"] = list(self.attachment_urls)
        return payload


def build_reply(
    author: MessagePerson,
    reply_type: ReplyType,
    body: str = "",
    attachment_urls: Iterable[str] | None = None,
) -> Reply:
    """Build the reply payload for a comment, note, open or close action."""
    address = message_address(author)
    urls = tuple(attachment_urls) if attachment_urls is not None else None
    common = {
        "type": address.type,
        "reply_type": ReplyType(reply_type).value,
        "body": body,
        "attachment_urls": urls,
    }
    if address.type == "admin":
        return Reply(admin_id=address.id, **common)
    return Reply(
        intercom_user_id=address.id,
        user_id=address.user_id,
        email=address.email,
        **common,
    )


def require_admin(
    role: str,
    person: MessagePerson,
    error: type[AdminRequiredError] = AdminRequiredError,
) -> Admin:
    """Return ``person`` if it is an admin, otherwise raise ``error``."""
    if not isinstance(person, Admin):
        raise error(role, person)
    return person


def build_assignment(assigner: MessagePerson, assignee: MessagePerson) -> Reply:
    """Build the payload assigning a conversation from one admin to another."""
    assigner = require_admin("assigner", assigner, AssignPreconditionError)
    assignee = require_admin("assignee", assignee, AssignPreconditionError)
    return Reply(
        type="admin",
        reply_type=ReplyType.ASSIGN.value,
        admin_id=message_address(assigner).id,
        assignee_id=message_address(assignee).id,
    )
