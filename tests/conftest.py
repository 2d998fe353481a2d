"""Test configuration and fixtures for fast-intercom-conversations."""

from unittest.mock import AsyncMock, Mock

import pytest

from fast_intercom_conversations.conversations import ConversationService
from fast_intercom_conversations.models import Admin, Conversation, ConversationList, User
from fast_intercom_conversations.repository import ConversationAPI


@pytest.fixture
def conversation_json():
    """A conversation as returned by GET /conversations/{id}."""
    return {
        "type": "conversation",
        "id": "conv_1",
        "created_at": 1700000000,
        "updated_at": 1700003600,
        "open": True,
        "read": False,
        "user": {"type": "user", "id": "5310d8e7", "user_id": "ext_42", "email": "jane@example.com"},
        "assignee": {"type": "admin", "id": "814860", "name": "Sam"},
        "conversation_message": {
            "subject": "Billing question",
            "body": "<p>Why was I charged twice?</p>",
            "author": {"type": "user", "id": "5310d8e7"},
            "url": "https://example.com/billing",
            "attachments": [{"name": "invoice.pdf", "url": "https://files.example.com/invoice.pdf"}],
        },
        "conversation_parts": {
            "type": "conversation_part.list",
            "conversation_parts": [
                {
                    "id": "part_1",
                    "part_type": "assignment",
                    "body": None,
                    "created_at": 1700000100,
                    "updated_at": 1700000100,
                    "notified_at": 1700000100,
                    "assigned_to": {"type": "admin", "id": "814860"},
                    "author": {"type": "admin", "id": "991267"},
                    "attachments": [],
                },
                {
                    "id": "part_2",
                    "part_type": "comment",
                    "body": "<p>Looking into it</p>",
                    "created_at": 1700000200,
                    "updated_at": 1700000200,
                    "notified_at": 1700000300,
                    "assigned_to": None,
                    "author": {"type": "admin", "id": "814860"},
                    "attachments": [],
                },
            ],
        },
        "tags": {"type": "tag.list", "tags": [{"id": "17", "name": "billing"}]},
        "conversation_rating": {
            "rating": 5,
            "remark": "Quick and helpful",
            "created_at": 1700003000,
            "customer": {"type": "user", "id": "5310d8e7"},
            "teammate": {"type": "admin", "id": "814860"},
        },
    }


@pytest.fixture
def conversation(conversation_json):
    return Conversation.from_dict(conversation_json)


@pytest.fixture
def admin():
    return Admin(id="814860", name="Sam")


@pytest.fixture
def other_admin():
    return Admin(id="991267", name="Alex")


@pytest.fixture
def user():
    return User(id="5310d8e7", user_id="ext_42", email="jane@example.com")


@pytest.fixture
def mock_repository(conversation):
    """Provide a mock ConversationAPI whose calls resolve to test data."""
    repository = Mock(spec=ConversationAPI)
    repository.list = AsyncMock(return_value=ConversationList(conversations=(conversation,)))
    repository.find = AsyncMock(return_value=conversation)
    repository.read = AsyncMock(return_value=conversation)
    repository.reply = AsyncMock(return_value=conversation)
    return repository


@pytest.fixture
def service(mock_repository):
    return ConversationService(mock_repository)
