"""File-based JSON storage for chats and their messages."""

from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

from uzgram.messaging.models import Chat, ChatType, Message, MessageRole


class ChatStore:
    """File-based storage for chats.

    Storage path: ``<base_dir>/chats.json`` -- list of chat dicts with their
    messages inline.
    """

    def __init__(self, base_dir: Optional[str | Path] = None) -> None:
        if base_dir is None:
            self._base = Path.home() / ".uzgram" / "chats"
        else:
            self._base = Path(base_dir)
        self._base.mkdir(parents=True, exist_ok=True)
        self._chats_path = self._base / "chats.json"

    def _read_json(self) -> list[dict]:
        if not self._chats_path.exists():
            return []
        try:
            data = json.loads(self._chats_path.read_text(encoding="utf-8"))
            return data if isinstance(data, list) else []
        except (json.JSONDecodeError, OSError):
            return []

    def _write_json(self, data: list[dict]) -> None:
        self._chats_path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False, default=str), encoding="utf-8"
        )

    @staticmethod
    def _chat_from_dict(d: dict) -> Chat:
        return Chat(
            id=d["id"],
            name=d.get("name", ""),
            type=ChatType(d.get("type", "private")),
            owner_id=d.get("owner_id", ""),
            avatar=d.get("avatar", ""),
            messages=[
                Message(
                    id=m["id"],
                    text=m.get("text", ""),
                    sender=MessageRole(m.get("sender", "user")),
                    timestamp=m.get("timestamp", ""),
                    author_id=m.get("author_id", ""),
                )
                for m in d.get("messages", [])
            ],
            members=list(d.get("members", [])),
            admins=list(d.get("admins", [])),
            co_owners=list(d.get("co_owners", [])),
            last_message=d.get("last_message", ""),
            last_message_time=d.get("last_message_time"),
            unread_count=int(d.get("unread_count", 0)),
        )

    @staticmethod
    def _chat_to_dict(c: Chat) -> dict:
        data = asdict(c)
        data["type"] = c.type.value
        for m in data["messages"]:
            m["sender"] = MessageRole(m["sender"]).value
        return data

    def create(self, chat: Chat) -> Chat:
        """Persist a new chat.  Ids are unique."""
        rows = self._read_json()
        if any(r["id"] == chat.id for r in rows):
            raise ValueError(f"Chat {chat.id} already exists")
        rows.append(self._chat_to_dict(chat))
        self._write_json(rows)
        return chat

    def get(self, chat_id: str) -> Optional[Chat]:
        for d in self._read_json():
            if d["id"] == chat_id:
                return self._chat_from_dict(d)
        return None

    def require(self, chat_id: str) -> Chat:
        chat = self.get(chat_id)
        if chat is None:
            raise ValueError(f"Chat {chat_id} not found")
        return chat

    def list_chats(self) -> list[Chat]:
        return [self._chat_from_dict(d) for d in self._read_json()]

    def save(self, chat: Chat) -> Chat:
        rows = self._read_json()
        for i, d in enumerate(rows):
            if d["id"] == chat.id:
                rows[i] = self._chat_to_dict(chat)
                self._write_json(rows)
                return chat
        raise ValueError(f"Chat {chat.id} not found")

    def append_message(self, chat_id: str, message: Message) -> Chat:
        chat = self.require(chat_id)
        chat.append(message)
        return self.save(chat)
