"""fast-intercom-conversations - typed access to Intercom conversations."""

__version__ = "0.1.0"
__description__ = "Client for listing, replying to and managing Intercom conversations"

from .config import Config
from .conversations import ConversationService
from .models import (
    Admin,
    AdminRequiredError,
    AssignPreconditionError,
    Conversation,
    ConversationList,
    ConversationMessage,
    ConversationPart,
    ConversationRating,
    MessageAddress,
    PageParams,
    User,
    message_address,
)
from .payloads import (
    ConversationListParams,
    ConversationListState,
    Reply,
    ReplyType,
    build_assignment,
    build_reply,
)
from .repository import ConversationAPI, ConversationRepository

__all__ = [
    "Admin",
    "AdminRequiredError",
    "AssignPreconditionError",
    "Config",
    "Conversation",
    "ConversationAPI",
    "ConversationList",
    "ConversationListParams",
    "ConversationListState",
    "ConversationMessage",
    "ConversationPart",
    "ConversationRating",
    "ConversationRepository",
    "ConversationService",
    "MessageAddress",
    "PageParams",
    "Reply",
    "ReplyType",
    "User",
    "build_assignment",
    "build_reply",
    "message_address",
]
