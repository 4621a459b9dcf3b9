"""Data models for the content moderation system."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Optional


def require_aware(value: datetime, name: str = "now") -> datetime:
    """Return *value*, raising ValueError if it carries no timezone."""
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be a timezone-aware datetime, got naive {value.isoformat()}")
    return value


class OffenseLevel(str, Enum):
    """Offense severity, most to least severe."""

    critical_perm = "critical_perm"
    severe_24h = "severe_24h"
    warning_12h = "warning_12h"
    none = "none"

    @property
    def severity(self) -> int:
        """Return numeric rank for comparison (higher = more severe)."""
        return {
            OffenseLevel.critical_perm: 30,
            OffenseLevel.severe_24h: 20,
            OffenseLevel.warning_12h: 10,
            OffenseLevel.none: 0,
        }[self]

    @property
    def is_violation(self) -> bool:
        return self is not OffenseLevel.none

    @property
    def is_permanent(self) -> bool:
        return self is OffenseLevel.critical_perm


@dataclass(frozen=True)
class ClassificationResult:
    """Result of classifying a piece of message text."""

    level: OffenseLevel
    reason: str = ""

    def __post_init__(self) -> None:
        if self.level.is_violation != bool(self.reason):
            raise ValueError(
                f"reason must be non-empty exactly when level is a violation (level={self.level.value})"
            )

    @property
    def allowed(self) -> bool:
        return not self.level.is_violation


CLEAN = ClassificationResult(level=OffenseLevel.none)


@dataclass(frozen=True)
class SuspensionRecord:
    """Moderation sub-record of an account.

    ``blocked_until`` is an aware datetime for temporary blocks and ``None``
    for permanent ones.  ``level`` remembers which offense caused the block.
    """

    is_blocked: bool = False
    is_permanently_blocked: bool = False
    block_reason: str = ""
    blocked_until: Optional[datetime] = None
    level: OffenseLevel = OffenseLevel.none

    def __post_init__(self) -> None:
        if self.is_permanently_blocked:
            if not self.is_blocked:
                raise ValueError("a permanent block must also set is_blocked")
            if self.blocked_until is not None:
                raise ValueError("a permanent block has no expiry")
        elif self.is_blocked and self.blocked_until is None:
            raise ValueError("a temporary block needs blocked_until")
        if self.blocked_until is not None:
            require_aware(self.blocked_until, "blocked_until")
        if self.is_blocked and not self.block_reason:
            raise ValueError("a block needs a reason")
        if not self.is_blocked and (self.blocked_until is not None or self.block_reason):
            raise ValueError("an unblocked record carries no reason or expiry")

    def clear(self) -> SuspensionRecord:
        """Return the unblocked record."""
        return replace(
            self,
            is_blocked=False,
            is_permanently_blocked=False,
            block_reason="",
            blocked_until=None,
            level=OffenseLevel.none,
        )

    def to_dict(self) -> dict:
        return {
            "is_blocked": self.is_blocked,
            "is_permanently_blocked": self.is_permanently_blocked,
            "block_reason": self.block_reason,
            "blocked_until": self.blocked_until.isoformat() if self.blocked_until else None,
            "level": self.level.value,
        }

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> SuspensionRecord:
        if not d:
            return cls()
        until = d.get("blocked_until")
        return cls(
            is_blocked=bool(d.get("is_blocked", False)),
            is_permanently_blocked=bool(d.get("is_permanently_blocked", False)),
            block_reason=d.get("block_reason", ""),
            blocked_until=datetime.fromisoformat(until) if until else None,
            level=OffenseLevel(d.get("level", "none")),
        )
