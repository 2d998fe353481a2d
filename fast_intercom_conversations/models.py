"""Data models for Intercom conversations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from urllib.parse import quote


class AdminRequiredError(ValueError):
    """Raised when a party that must be an admin is not one."""

    def __init__(self, role: str, person: Any):
        super().__init__(
            f"{role} must be an Admin, got {type(person).__name__}"
        )
        self.role = role  # 'assigner', 'assignee', 'opener' or 'closer'
        self.person = person


class AssignPreconditionError(AdminRequiredError):
    """Raised when the assigner or assignee of an assignment is not an admin."""


def _timestamp(value: Any) -> datetime | None:
    """Convert a Unix timestamp from the API into an aware UTC datetime."""
    if not value:
        return None
    return datetime.fromtimestamp(int(value), tz=UTC)


@dataclass(frozen=True)
class Admin:
    """An Intercom teammate."""

    id: str
    name: str | None = None
    email: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "Admin | None":
        if not data or data.get("id") is None:
            return None
        return cls(
            id=str(data["id"]),
            name=data.get("name"),
            email=data.get("email"),
        )


@dataclass(frozen=True)
class User:
    """An Intercom end user. Any of the three identifiers may be empty."""

    id: str = ""  # Intercom's internal id
    user_id: str = ""  # external id assigned by the workspace
    email: str = ""
    name: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "User | None":
        if not data:
            return None
        return cls(
            id=str(data.get("id") or ""),
            user_id=str(data.get("user_id") or ""),
            email=data.get("email") or "",
            name=data.get("name"),
        )


MessagePerson = Admin | User


@dataclass(frozen=True)
class MessageAddress:
    """Normalized reference to the admin or user behind an action."""

    type: str  # 'admin' | 'user'
    id: str = ""
    user_id: str = ""
    email: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "MessageAddress | None":
        if not data:
            return None
        return cls(
            type=data.get("type", ""),
            id=str(data.get("id") or ""),
            user_id=str(data.get("user_id") or ""),
            email=data.get("email") or "",
        )


def message_address(person: MessagePerson) -> MessageAddress:
    """Resolve an admin or user into the address used to attribute an action."""
    if isinstance(person, Admin):
        return MessageAddress(type="admin", id=person.id)
    if isinstance(person, User):
        return MessageAddress(
            type="user", id=person.id, user_id=person.user_id, email=person.email
        )
    raise TypeError(f"Expected Admin or User, got {type(person).__name__}")


@dataclass(frozen=True)
class Attachment:
    name: str
    url: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Attachment":
        return cls(name=data.get("name", ""), url=data.get("url", ""))


def _attachments(items: list[dict[str, Any]] | None) -> tuple[Attachment, ...]:
    return tuple(Attachment.from_dict(item) for item in items or [])


@dataclass(frozen=True)
class Tag:
    id: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Tag":
        return cls(id=str(data.get("id", "")), name=data.get("name", ""))


@dataclass(frozen=True)
class Customer:
    type: str
    id: str


@dataclass(frozen=True)
class Teammate:
    type: str
    id: str


def _reference(cls, data: dict[str, Any] | None):
    if not data:
        return None
    return cls(type=data.get("type", ""), id=str(data.get("id", "")))


@dataclass(frozen=True)
class ConversationRating:
    """Customer satisfaction rating left on a conversation."""

    rating: int | None = None
    remark: str = ""
    created_at: datetime | None = None
    customer: Customer | None = None
    teammate: Teammate | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ConversationRating | None":
        if not data:
            return None
        return cls(
            rating=data.get("rating"),
            remark=data.get("remark") or "",
            created_at=_timestamp(data.get("created_at")),
            customer=_reference(Customer, data.get("customer")),
            teammate=_reference(Teammate, data.get("teammate")),
        )


@dataclass(frozen=True)
class ConversationMessage:
    """The message that started a conversation."""

    subject: str = ""
    body: str = ""
    author: MessageAddress | None = None
    url: str = ""
    attachments: tuple[Attachment, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ConversationMessage":
        data = data or {}
        return cls(
            subject=data.get("subject") or "",
            body=data.get("body") or "",
            author=MessageAddress.from_dict(data.get("author")),
            url=data.get("url") or "",
            attachments=_attachments(data.get("attachments")),
        )


@dataclass(frozen=True)
class ConversationPart:
    """A reply, note or assignment within a conversation."""

    id: str
    part_type: str
    body: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    notified_at: datetime | None = None
    assigned_to: Admin | None = None
    author: MessageAddress | None = None
    attachments: tuple[Attachment, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConversationPart":
        return cls(
            id=str(data.get("id", "")),
            part_type=data.get("part_type") or "",
            body=data.get("body") or "",
            created_at=_timestamp(data.get("created_at")),
            updated_at=_timestamp(data.get("updated_at")),
            notified_at=_timestamp(data.get("notified_at")),
            assigned_to=Admin.from_dict(data.get("assigned_to")),
            author=MessageAddress.from_dict(data.get("author")),
            attachments=_attachments(data.get("attachments")),
        )


@dataclass(frozen=True)
class Conversation:
    """An Intercom conversation between a user and the team."""

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    user: User | None = None
    assignee: Admin | None = None
    open: bool = False
    read: bool = False
    conversation_message: ConversationMessage = field(
        default_factory=ConversationMessage
    )
    conversation_parts: tuple[ConversationPart, ...] = ()
    tags: tuple[Tag, ...] | None = None
    conversation_rating: ConversationRating | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Conversation":
        # Both collections arrive wrapped in a typed list envelope
        parts = (data.get("conversation_parts") or {}).get("conversation_parts") or []
        tags = data.get("tags")
        return cls(
            id=str(data["id"]),
            created_at=_timestamp(data.get("created_at")),
            updated_at=_timestamp(data.get("updated_at")),
            user=User.from_dict(data.get("user")),
            assignee=Admin.from_dict(data.get("assignee")),
            open=bool(data.get("open", False)),
            read=bool(data.get("read", False)),
            conversation_message=ConversationMessage.from_dict(
                data.get("conversation_message")
            ),
            conversation_parts=tuple(ConversationPart.from_dict(p) for p in parts),
            tags=(
                tuple(Tag.from_dict(t) for t in tags.get("tags") or [])
                if tags is not None
                else None
            ),
            conversation_rating=ConversationRating.from_dict(
                data.get("conversation_rating")
            ),
        )

    def get_url(self, app_id: str) -> str:
        """Generate clickable Intercom URL for this conversation."""
        base_url = f"https://app.intercom.com/a/inbox/{app_id}/inbox/search/conversation/{self.id}"
        if self.user and self.user.email:
            return f"{base_url}?query={quote(self.user.email)}"
        return base_url


@dataclass(frozen=True)
class PageParams:
    """Pagination cursor sent with list requests and echoed back in results.

    A ``page`` or ``per_page`` of 0 counts as unset and is not sent.
    """

    page: int | None = None
    per_page: int | None = None
    total_pages: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "PageParams":
        data = data or {}
        return cls(
            page=data.get("page"),
            per_page=data.get("per_page"),
            total_pages=data.get("total_pages"),
        )


@dataclass(frozen=True)
class ConversationList:
    """One page of conversations."""

    pages: PageParams = field(default_factory=PageParams)
    conversations: tuple[Conversation, ...] = ()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConversationList":
        return cls(
            pages=PageParams.from_dict(data.get("pages")),
            conversations=tuple(
                Conversation.from_dict(c) for c in data.get("conversations") or []
            ),
        )
