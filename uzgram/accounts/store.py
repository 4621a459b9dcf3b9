"""File-based JSON storage for accounts.

Provides a DB-ready interface backed by a simple JSON file under
``~/.uzgram/accounts/``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from uzgram.accounts.models import Account, AppLanguage
from uzgram.moderation.models import SuspensionRecord


class AccountStore:
    """File-based storage for accounts.

    Storage path: ``<base_dir>/accounts.json`` -- list of account dicts.
    """

    def __init__(self, base_dir: Optional[str | Path] = None) -> None:
        if base_dir is None:
            self._base = Path.home() / ".uzgram" / "accounts"
        else:
            self._base = Path(base_dir)
        self._base.mkdir(parents=True, exist_ok=True)
        self._accounts_path = self._base / "accounts.json"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _read_json(self) -> list[dict]:
        if not self._accounts_path.exists():
            return []
        try:
            data = json.loads(self._accounts_path.read_text(encoding="utf-8"))
            return data if isinstance(data, list) else []
        except (json.JSONDecodeError, OSError):
            return []

    def _write_json(self, data: list[dict]) -> None:
        self._accounts_path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False, default=str), encoding="utf-8"
        )

    @staticmethod
    def _account_from_dict(d: dict) -> Account:
        lang = d.get("language", "uz")
        try:
            lang = AppLanguage(lang)
        except ValueError:
            lang = AppLanguage.uz
        return Account(
            id=d["id"],
            name=d.get("name", ""),
            language=lang,
            username=d.get("username", ""),
            bio=d.get("bio", ""),
            phone=d.get("phone", ""),
            email=d.get("email", ""),
            contacts=list(d.get("contacts", [])),
            is_premium=bool(d.get("is_premium", False)),
            created_at=d.get("created_at", ""),
            suspension=SuspensionRecord.from_dict(d.get("suspension")),
        )

    @staticmethod
    def _account_to_dict(a: Account) -> dict:
        return {
            "id": a.id,
            "name": a.name,
            "language": a.language.value,
            "username": a.username,
            "bio": a.bio,
            "phone": a.phone,
            "email": a.email,
            "contacts": a.contacts,
            "is_premium": a.is_premium,
            "created_at": a.created_at,
            "suspension": a.suspension.to_dict(),
        }

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(self, account: Account) -> Account:
        """Persist a new account.  Ids are unique."""
        rows = self._read_json()
        if any(r["id"] == account.id for r in rows):
            raise ValueError(f"Account {account.id} already exists")
        rows.append(self._account_to_dict(account))
        self._write_json(rows)
        return account

    def get(self, account_id: str) -> Optional[Account]:
        for d in self._read_json():
            if d["id"] == account_id:
                return self._account_from_dict(d)
        return None

    def require(self, account_id: str) -> Account:
        account = self.get(account_id)
        if account is None:
            raise ValueError(f"Account {account_id} not found")
        return account

    def list_accounts(self) -> list[Account]:
        return [self._account_from_dict(d) for d in self._read_json()]

    def save(self, account: Account) -> Account:
        """Replace the stored copy of an existing account."""
        rows = self._read_json()
        for i, d in enumerate(rows):
            if d["id"] == account.id:
                rows[i] = self._account_to_dict(account)
                self._write_json(rows)
                return account
        raise ValueError(f"Account {account.id} not found")

    def delete(self, account_id: str) -> bool:
        rows = self._read_json()
        kept = [d for d in rows if d["id"] != account_id]
        if len(kept) == len(rows):
            return False
        self._write_json(kept)
        return True

    def unblock(self, account_id: str) -> Account:
        """Explicitly lift the block on *account_id*."""
        account = self.require(account_id)
        account.lift_suspension()
        return self.save(account)
