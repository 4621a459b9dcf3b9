"""Tests for the suspension policy."""

from datetime import datetime, timedelta, timezone

import pytest

from uzgram.moderation.models import OffenseLevel, SuspensionRecord
from uzgram.moderation.suspension import (
    effective_level,
    is_currently_blocked,
    remaining,
    suspend,
    suspension_expiry,
    suspension_message,
)

NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


# --- Expiry ---


def test_expiry_warning():
    assert suspension_expiry(OffenseLevel.warning_12h, NOW) == NOW + timedelta(hours=12)


def test_expiry_severe():
    assert suspension_expiry(OffenseLevel.severe_24h, NOW) == NOW + timedelta(hours=24)


def test_expiry_permanent():
    assert suspension_expiry(OffenseLevel.critical_perm, NOW) is None


def test_expiry_rejects_none_level():
    with pytest.raises(ValueError):
        suspension_expiry(OffenseLevel.none, NOW)


# --- Messages ---


def test_message_wording_per_level():
    perm = suspension_message("dangerous threat or terrorism indicators", OffenseLevel.critical_perm)
    day = suspension_message("fraud attempt detected", OffenseLevel.severe_24h)
    half = suspension_message("inappropriate language used", OffenseLevel.warning_12h)

    assert "PERMANENTLY" in perm
    assert '"dangerous threat or terrorism indicators"' in perm
    assert "24 hours" in day
    assert '"fraud attempt detected"' in day
    assert "12 hours" in half
    assert '"inappropriate language used"' in half


def test_every_violation_level_has_wording():
    for level in OffenseLevel:
        if level.is_violation:
            assert suspension_message("x", level)


def test_message_rejects_none_level():
    with pytest.raises(ValueError):
        suspension_message("", OffenseLevel.none)


# --- Records ---


def test_suspend_permanent_record():
    record = suspend(OffenseLevel.critical_perm, "dangerous threat or terrorism indicators", NOW)
    assert record.is_blocked
    assert record.is_permanently_blocked
    assert record.blocked_until is None
    assert record.level == OffenseLevel.critical_perm


def test_suspend_temporary_record():
    record = suspend(OffenseLevel.severe_24h, "fraud attempt detected", NOW)
    assert record.is_blocked
    assert not record.is_permanently_blocked
    assert record.blocked_until == NOW + timedelta(hours=24)


def test_record_invariants_enforced():
    with pytest.raises(ValueError):
        SuspensionRecord(is_blocked=False, is_permanently_blocked=True, block_reason="x")
    with pytest.raises(ValueError):
        SuspensionRecord(is_blocked=True, is_permanently_blocked=True, block_reason="x", blocked_until=NOW)
    with pytest.raises(ValueError):
        SuspensionRecord(is_blocked=True, block_reason="x")
    with pytest.raises(ValueError):
        SuspensionRecord(is_blocked=True, blocked_until=NOW)


def test_record_dict_round_trip_keeps_expiry():
    record = suspend(OffenseLevel.warning_12h, "inappropriate language used", NOW)
    assert SuspensionRecord.from_dict(record.to_dict()) == record
    assert SuspensionRecord.from_dict(None) == SuspensionRecord()


# --- Read-time expiry ---


def test_temporary_block_expires_at_read_time():
    record = suspend(OffenseLevel.warning_12h, "inappropriate language used", NOW)
    assert is_currently_blocked(record, NOW)
    assert is_currently_blocked(record, NOW + timedelta(hours=11, minutes=59))
    assert not is_currently_blocked(record, NOW + timedelta(hours=12))
    # The record itself is not downgraded.
    assert record.is_blocked


def test_permanent_block_never_expires():
    record = suspend(OffenseLevel.critical_perm, "dangerous threat or terrorism indicators", NOW)
    assert is_currently_blocked(record, NOW + timedelta(days=3650))


def test_unblocked_record():
    assert not is_currently_blocked(SuspensionRecord(), NOW)
    assert remaining(SuspensionRecord(), NOW) is None


def test_remaining():
    record = suspend(OffenseLevel.severe_24h, "fraud attempt detected", NOW)
    assert remaining(record, NOW + timedelta(hours=20)) == timedelta(hours=4)
    assert remaining(record, NOW + timedelta(hours=25)) is None


def test_clear():
    record = suspend(OffenseLevel.critical_perm, "dangerous threat or terrorism indicators", NOW)
    assert record.clear() == SuspensionRecord()


def test_effective_level_for_records_without_level():
    legacy_temp = SuspensionRecord(is_blocked=True, block_reason="r", blocked_until=NOW)
    legacy_perm = SuspensionRecord(is_blocked=True, is_permanently_blocked=True, block_reason="r")
    assert effective_level(legacy_temp) == OffenseLevel.warning_12h
    assert effective_level(legacy_perm) == OffenseLevel.critical_perm
    assert effective_level(SuspensionRecord()) == OffenseLevel.none


# --- Timezones ---


def test_naive_now_rejected():
    record = suspend(OffenseLevel.warning_12h, "inappropriate language used", NOW)
    naive = NOW.replace(tzinfo=None)
    with pytest.raises(ValueError):
        is_currently_blocked(record, naive)
    with pytest.raises(ValueError):
        is_currently_blocked(SuspensionRecord(), naive)
    with pytest.raises(ValueError):
        suspension_expiry(OffenseLevel.severe_24h, naive)


def test_naive_blocked_until_rejected():
    with pytest.raises(ValueError):
        SuspensionRecord(is_blocked=True, block_reason="x", blocked_until=NOW.replace(tzinfo=None))


def test_other_timezones_compare_correctly():
    tashkent = timezone(timedelta(hours=5))
    record = suspend(OffenseLevel.warning_12h, "inappropriate language used", NOW)
    assert is_currently_blocked(record, (NOW + timedelta(hours=11)).astimezone(tashkent))
    assert not is_currently_blocked(record, (NOW + timedelta(hours=13)).astimezone(tashkent))
