"""Account domain model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from uzgram.moderation.models import SuspensionRecord, require_aware


class AppLanguage(str, Enum):
    """Display language of the messenger."""

    uz = "uz"
    ru = "ru"
    en = "en"


@dataclass
class Account:
    """A messenger account.

    The moderation state lives in ``suspension`` and is only written through
    :meth:`apply_suspension` and :meth:`lift_suspension`.
    """

    id: str
    name: str
    language: AppLanguage = AppLanguage.uz
    username: str = ""
    bio: str = ""
    phone: str = ""
    email: str = ""
    contacts: list[str] = field(default_factory=list)
    is_premium: bool = False
    created_at: str = ""
    suspension: SuspensionRecord = field(default_factory=SuspensionRecord)

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc).isoformat()
        if isinstance(self.language, str):
            self.language = AppLanguage(self.language)

    @property
    def is_flagged(self) -> bool:
        """True when a block is stamped on the account, expired or not."""
        return self.suspension.is_blocked or self.suspension.is_permanently_blocked

    def apply_suspension(self, record: SuspensionRecord, now: datetime) -> None:
        """Overwrite the moderation sub-record with a block written at *now*.

        A temporary block must still be running at *now*.
        """
        require_aware(now)
        if not record.is_blocked:
            raise ValueError("apply_suspension requires a blocking record")
        if not record.is_permanently_blocked and record.blocked_until <= now:
            raise ValueError(
                f"temporary block already expired at write time ({record.blocked_until.isoformat()})"
            )
        self.suspension = record

    def lift_suspension(self) -> None:
        """Clear any block on the account."""
        self.suspension = self.suspension.clear()
