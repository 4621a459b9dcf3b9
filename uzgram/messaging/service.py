"""Moderated send path.

Every outgoing message passes through :meth:`MessageService.send_message`:

1. blank text is ignored;
2. an account that is currently blocked cannot send, and its text is not
   classified again;
3. the text is classified;
4. clean text is appended to the chat, anything else is discarded and the
   account is suspended.

Classification finishes before anything downstream (storage, auto-replies)
sees the message.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from uzgram.accounts.models import Account
from uzgram.accounts.store import AccountStore
from uzgram.messaging.models import Message, MessageRole
from uzgram.messaging.store import ChatStore
from uzgram.moderation.classifier import ContentClassifier
from uzgram.moderation.models import OffenseLevel
from uzgram.moderation.suspension import (
    effective_level,
    is_currently_blocked,
    suspend,
    suspension_message,
)
from uzgram.security.audit_log import (
    ACCOUNT_SUSPENDED,
    MESSAGE_ACCEPTED,
    MESSAGE_REJECTED,
    AuditLogger,
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SendOutcome(str, Enum):
    accepted = "accepted"
    empty = "empty"
    blocked = "blocked"
    rejected = "rejected"


@dataclass
class SendResult:
    """What happened to a send attempt."""

    outcome: SendOutcome
    level: OffenseLevel = OffenseLevel.none
    message: Optional[Message] = None
    notice: str = ""

    @property
    def accepted(self) -> bool:
        return self.outcome == SendOutcome.accepted


def block_notice(account: Account, now: datetime) -> Optional[str]:
    """User-facing explanation for a currently blocked account, else None."""
    record = account.suspension
    if not is_currently_blocked(record, now):
        return None
    return suspension_message(record.block_reason, effective_level(record))


class MessageService:
    """Gate between the compose box and chat storage."""

    def __init__(
        self,
        accounts: AccountStore,
        chats: ChatStore,
        classifier: Optional[ContentClassifier] = None,
        audit: Optional[AuditLogger] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._accounts = accounts
        self._chats = chats
        self._classifier = classifier or ContentClassifier()
        self._audit = audit
        self._clock = clock

    def _log(self, account_id: str, action: str, chat_id: str, details: dict, success: bool, now: datetime) -> None:
        if self._audit is None:
            return
        self._audit.log_event(
            actor=account_id,
            action=action,
            resource_type="chat",
            resource_id=chat_id,
            details=details,
            success=success,
            when=now,
        )

    def send_message(self, account_id: str, chat_id: str, text: str) -> SendResult:
        """Run *text* through moderation and store it if it is clean."""
        if not text.strip():
            return SendResult(outcome=SendOutcome.empty)

        account = self._accounts.require(account_id)
        chat = self._chats.require(chat_id)
        now = self._clock()

        notice = block_notice(account, now)
        if notice is not None:
            self._log(
                account_id,
                MESSAGE_REJECTED,
                chat.id,
                {"cause": "account_blocked", "length": len(text)},
                False,
                now,
            )
            return SendResult(
                outcome=SendOutcome.blocked,
                level=effective_level(account.suspension),
                notice=notice,
            )

        result = self._classifier.classify(text)

        if not result.level.is_violation:
            message = Message(
                id=uuid.uuid4().hex[:12],
                text=text,
                sender=MessageRole.user,
                timestamp=now.isoformat(),
                author_id=account_id,
            )
            self._chats.append_message(chat.id, message)
            self._log(account_id, MESSAGE_ACCEPTED, chat.id, {"message_id": message.id}, True, now)
            return SendResult(outcome=SendOutcome.accepted, message=message)

        record = suspend(result.level, result.reason, now)
        account.apply_suspension(record, now)
        self._accounts.save(account)

        details = {"level": result.level.value, "reason": result.reason, "length": len(text)}
        self._log(account_id, MESSAGE_REJECTED, chat.id, details, False, now)
        if self._audit is not None:
            self._audit.log_event(
                actor=account_id,
                action=ACCOUNT_SUSPENDED,
                resource_type="account",
                resource_id=account_id,
                details={
                    "level": result.level.value,
                    "reason": result.reason,
                    "blocked_until": record.blocked_until.isoformat() if record.blocked_until else None,
                },
                when=now,
            )
        return SendResult(
            outcome=SendOutcome.rejected,
            level=result.level,
            notice=suspension_message(result.reason, result.level),
        )
