"""Application settings.

Settings come from an optional YAML file and are then overridden by
environment variables:

- ``UZGRAM_HOME`` -- data directory (default ``~/.uzgram``)
- ``UZGRAM_WORDLISTS`` -- YAML word-list file extending the built-in lists
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

from uzgram.moderation.wordlists import DEFAULT_WORDLISTS, WordLists, load_wordlists


@dataclass
class Settings:
    home: Path
    wordlists_path: Optional[Path] = None
    # When False the word-list file replaces the defaults instead of extending them.
    extend_default_wordlists: bool = True

    @property
    def accounts_dir(self) -> Path:
        return self.home / "accounts"

    @property
    def chats_dir(self) -> Path:
        return self.home / "chats"

    @property
    def audit_dir(self) -> Path:
        return self.home / "audit_logs"

    def wordlists(self) -> WordLists:
        if self.wordlists_path is None:
            return DEFAULT_WORDLISTS
        loaded = load_wordlists(self.wordlists_path)
        if self.extend_default_wordlists:
            return DEFAULT_WORDLISTS.merged_with(loaded)
        return loaded


def load_settings(path: str | Path | None = None) -> Settings:
    """Load settings from *path* (YAML, optional) and the environment."""
    data: dict = {}
    if path is not None:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    home = os.environ.get("UZGRAM_HOME") or data.get("home") or Path.home() / ".uzgram"
    wordlists = os.environ.get("UZGRAM_WORDLISTS") or data.get("wordlists")
    return Settings(
        home=Path(home).expanduser(),
        wordlists_path=Path(wordlists).expanduser() if wordlists else None,
        extend_default_wordlists=bool(data.get("extend_default_wordlists", True)),
    )
