"""Suspension policy — expiry and wording for each offense level.

Nothing here clears a block.  Expiry of a temporary block is interpreted at
read time through :func:`is_currently_blocked`; lifting a block is an
explicit action of the account owner's application.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from uzgram.moderation.models import OffenseLevel, SuspensionRecord, require_aware

# None means permanent.  Every violation level must have an entry.
_DURATIONS: dict[OffenseLevel, Optional[timedelta]] = {
    OffenseLevel.critical_perm: None,
    OffenseLevel.severe_24h: timedelta(hours=24),
    OffenseLevel.warning_12h: timedelta(hours=12),
}

_MESSAGES: dict[OffenseLevel, str] = {
    OffenseLevel.critical_perm: 'Your account has been PERMANENTLY blocked because of "{reason}".',
    OffenseLevel.severe_24h: 'Your account has been blocked for 24 hours because of "{reason}".',
    OffenseLevel.warning_12h: 'Your account has been blocked for 12 hours because of "{reason}".',
}


def _require_violation(level: OffenseLevel, table: dict) -> None:
    if not level.is_violation:
        raise ValueError("no suspension applies to offense level 'none'")
    if level not in table:
        raise ValueError(f"no suspension policy defined for offense level {level.value!r}")


def suspension_expiry(level: OffenseLevel, now: datetime) -> Optional[datetime]:
    """Return when a suspension for *level* ends, or None if permanent."""
    _require_violation(level, _DURATIONS)
    require_aware(now)
    duration = _DURATIONS[level]
    if duration is None:
        return None
    return now + duration


def suspension_message(reason: str, level: OffenseLevel) -> str:
    """Return the user-facing explanation for a block."""
    _require_violation(level, _MESSAGES)
    return _MESSAGES[level].format(reason=reason)


def suspend(level: OffenseLevel, reason: str, now: datetime) -> SuspensionRecord:
    """Build the suspension record written after a violation."""
    return SuspensionRecord(
        is_blocked=True,
        is_permanently_blocked=level.is_permanent,
        block_reason=reason,
        blocked_until=suspension_expiry(level, now),
        level=level,
    )


def is_currently_blocked(record: SuspensionRecord, now: datetime) -> bool:
    """True while *record* still gates the account at *now*.

    *now* must be timezone-aware; a naive value raises ValueError.
    """
    require_aware(now)
    if record.is_permanently_blocked:
        return True
    if not record.is_blocked or record.blocked_until is None:
        return False
    return now < record.blocked_until


def remaining(record: SuspensionRecord, now: datetime) -> Optional[timedelta]:
    """Time left on a temporary block; None when permanent or not blocked."""
    if not is_currently_blocked(record, now) or record.blocked_until is None:
        return None
    return record.blocked_until - now


def effective_level(record: SuspensionRecord) -> OffenseLevel:
    """Offense level to describe *record* with.

    Records written before ``level`` was stored only know whether the block
    is permanent; temporary ones are described as 12-hour blocks.
    """
    if record.level.is_violation:
        return record.level
    if record.is_permanently_blocked:
        return OffenseLevel.critical_perm
    if record.is_blocked:
        return OffenseLevel.warning_12h
    return OffenseLevel.none
