"""Word lists — the phrase configuration that drives the classifier.

Lists are organised as ``category -> locale -> ordered phrases`` and can be
loaded from YAML so the same engine can be extended or localised without
touching the matching code.  Example file::

    threat:
      uz: ["o'ldiraman", "portlataman"]
    scam:
      en: ["scam", "winner"]
    profanity:
      ru: ["дурак"]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping

import yaml


class Category(Enum):
    """Phrase category, in the order the classifier checks them."""

    THREAT = "threat"
    SCAM = "scam"
    PROFANITY = "profanity"


@dataclass(frozen=True)
class WordLists:
    """Phrase lists keyed by category and locale."""

    lists: Mapping[Category, Mapping[str, tuple[str, ...]]] = field(default_factory=dict)

    def phrases(self, category: Category) -> tuple[str, ...]:
        """Return every phrase of *category*, all locales together."""
        out: list[str] = []
        for locale_phrases in self.lists.get(category, {}).values():
            for phrase in locale_phrases:
                if phrase not in out:
                    out.append(phrase)
        return tuple(out)

    def locales(self, category: Category) -> list[str]:
        return list(self.lists.get(category, {}).keys())

    def merged_with(self, other: WordLists) -> WordLists:
        """Return new lists where *other*'s phrases extend ours."""
        merged: dict[Category, dict[str, tuple[str, ...]]] = {
            cat: dict(by_locale) for cat, by_locale in self.lists.items()
        }
        for cat, by_locale in other.lists.items():
            target = merged.setdefault(cat, {})
            for locale, phrases in by_locale.items():
                existing = target.get(locale, ())
                target[locale] = existing + tuple(p for p in phrases if p not in existing)
        return WordLists(lists=merged)

    def to_dict(self) -> dict:
        return {
            cat.value: {locale: list(phrases) for locale, phrases in by_locale.items()}
            for cat, by_locale in self.lists.items()
        }


def _phrase_tuple(where: str, phrases) -> tuple[str, ...]:
    # A bare string is one phrase, never a sequence of characters.
    if phrases is None:
        return ()
    if isinstance(phrases, str):
        phrases = [phrases]
    if not isinstance(phrases, (list, tuple)):
        raise ValueError(f"{where}: expected a list of phrases, got {type(phrases).__name__}")
    out: list[str] = []
    for p in phrases:
        if not isinstance(p, str):
            raise ValueError(f"{where}: phrase {p!r} is not a string (quote it in YAML)")
        if p.strip():
            out.append(p.lower())
    return tuple(out)


def build_wordlists(data: Mapping[str, Mapping[str, Iterable[str]]]) -> WordLists:
    """Build word lists from plain mappings, lower-casing every phrase.

    Raises ValueError for unknown categories and for any shape other than
    ``category -> locale -> list of strings``.
    """
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValueError("word lists must map categories to locales")
    lists: dict[Category, dict[str, tuple[str, ...]]] = {}
    for cat_name, by_locale in data.items():
        try:
            category = Category(cat_name)
        except ValueError:
            raise ValueError(f"Unknown word list category: {cat_name}") from None
        if by_locale is None:
            by_locale = {}
        if not isinstance(by_locale, Mapping):
            raise ValueError(
                f"{cat_name}: expected a mapping of locale to phrases, got {type(by_locale).__name__}"
            )
        lists[category] = {
            str(locale): _phrase_tuple(f"{cat_name}.{locale}", phrases)
            for locale, phrases in by_locale.items()
        }
    return WordLists(lists=lists)


def load_wordlists(path: str | Path) -> WordLists:
    """Load word lists from a YAML file."""
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return build_wordlists(data)


def dump_wordlists(wordlists: WordLists, path: str | Path) -> None:
    """Write word lists to a YAML file."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(wordlists.to_dict(), f, allow_unicode=True, sort_keys=False)


DEFAULT_WORDLISTS = build_wordlists(
    {
        "threat": {
            "uz": ["o'ldiraman", "portlataman"],
            "en": ["kill you", "terror"],
            "ru": ["убью", "взорву"],
        },
        "scam": {
            "en": ["scam", "fake click", "winner"],
            "uz": ["karta raqami", "pul yutdingiz"],
        },
        "profanity": {
            "uz": ["yomon", "haqorat", "so'kish", "iflos", "jinni"],
            "ru": ["плохой", "мат", "дурак", "оскорбление"],
            "en": ["badword", "idiot", "stupid", "curse"],
        },
    }
)
