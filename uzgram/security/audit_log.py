"""Audit logging for moderation decisions.

Provides file-based JSON audit logging with filtering and export.  Events
are stored as daily ``*.jsonl`` files under ``~/.uzgram/audit_logs/``.
Message text is never written; rejected messages are discarded for good.
"""

from __future__ import annotations

import csv
import io
import json
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

# Actions written by the send workflow and the unblock command.
MESSAGE_ACCEPTED = "message.accepted"
MESSAGE_REJECTED = "message.rejected"
ACCOUNT_SUSPENDED = "account.suspended"
ACCOUNT_UNBLOCKED = "account.unblocked"


@dataclass
class AuditEntry:
    """A single audit log entry."""

    id: str
    timestamp: str
    actor: str
    action: str
    resource_type: str
    resource_id: str
    details: dict[str, Any] = field(default_factory=dict)
    success: bool = True


class AuditLogger:
    """File-based JSON audit logger."""

    def __init__(self, base_dir: Optional[str | Path] = None) -> None:
        self._base_dir = Path(base_dir) if base_dir else Path.home() / ".uzgram" / "audit_logs"
        self._base_dir.mkdir(parents=True, exist_ok=True)

    def _log_file_for_date(self, dt: datetime) -> Path:
        return self._base_dir / f"{dt.strftime('%Y-%m-%d')}.jsonl"

    def _read_all_entries(self) -> list[AuditEntry]:
        entries: list[AuditEntry] = []
        for path in sorted(self._base_dir.glob("*.jsonl")):
            try:
                lines = path.read_text(encoding="utf-8").splitlines()
            except OSError:
                continue
            for line in lines:
                if not line.strip():
                    continue
                try:
                    entries.append(AuditEntry(**json.loads(line)))
                except (json.JSONDecodeError, TypeError):
                    continue
        return entries

    def log_event(
        self,
        actor: str,
        action: str,
        resource_type: str,
        resource_id: str,
        details: Optional[dict[str, Any]] = None,
        success: bool = True,
        when: Optional[datetime] = None,
    ) -> AuditEntry:
        """Record an audit event and return the created entry."""
        when = when or datetime.now(timezone.utc)
        entry = AuditEntry(
            id=uuid.uuid4().hex[:16],
            timestamp=when.isoformat(),
            actor=actor,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            details=details or {},
            success=success,
        )
        with self._log_file_for_date(when).open("a", encoding="utf-8") as fh:
            fh.write(json.dumps(asdict(entry), ensure_ascii=False) + "\n")
        return entry

    def get_events(
        self,
        *,
        actor: Optional[str] = None,
        action: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
        limit: int = 200,
    ) -> list[AuditEntry]:
        """Return filtered audit events, newest first."""
        entries = self._read_all_entries()

        if actor:
            entries = [e for e in entries if e.actor == actor]
        if action:
            entries = [e for e in entries if e.action == action]
        if start_date:
            entries = [e for e in entries if e.timestamp >= start_date]
        if end_date:
            # A bare YYYY-MM-DD includes the whole day.
            cut = len(end_date) if len(end_date) == 10 else None
            entries = [e for e in entries if e.timestamp[:cut] <= end_date]

        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return entries[:limit]

    def export_events(self, fmt: str = "json", **filters: Any) -> str:
        """Export audit events as ``json`` or ``csv``."""
        entries = self.get_events(**filters)

        if fmt == "csv":
            buf = io.StringIO()
            writer = csv.writer(buf, lineterminator="\n")
            writer.writerow(["id", "timestamp", "actor", "action", "resource_type", "resource_id", "success"])
            for e in entries:
                writer.writerow([e.id, e.timestamp, e.actor, e.action, e.resource_type, e.resource_id, e.success])
            return buf.getvalue().rstrip("\n")

        return json.dumps([asdict(e) for e in entries], indent=2, ensure_ascii=False)
