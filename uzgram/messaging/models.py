"""Chat and message models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class MessageRole(str, Enum):
    user = "user"
    assistant = "assistant"
    system = "system"


class ChatType(str, Enum):
    private = "private"
    group = "group"
    channel = "channel"


@dataclass
class Message:
    """A message stored in a chat.  ``timestamp`` is an ISO-8601 string."""

    id: str
    text: str
    sender: MessageRole = MessageRole.user
    timestamp: str = ""
    author_id: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.sender, str):
            self.sender = MessageRole(self.sender)


@dataclass
class Chat:
    """A private chat, group or channel."""

    id: str
    name: str
    type: ChatType = ChatType.private
    owner_id: str = ""
    avatar: str = ""
    messages: list[Message] = field(default_factory=list)
    members: list[str] = field(default_factory=list)
    admins: list[str] = field(default_factory=list)
    co_owners: list[str] = field(default_factory=list)
    last_message: str = ""
    last_message_time: Optional[str] = None
    unread_count: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.type, str):
            self.type = ChatType(self.type)

    def append(self, message: Message) -> None:
        self.messages.append(message)
        self.last_message = message.text
        self.last_message_time = message.timestamp
