"""Content classifier — maps message text to an offense level.

Matching is plain substring containment on the lower-cased text: a phrase
matches anywhere, including inside a longer word ("terror" flags
"terrorist", "мат" flags "математика").  False positives of that kind are
accepted behaviour.  Categories are checked from most to least severe and
the first hit wins.
"""

from __future__ import annotations

from typing import Optional

from uzgram.moderation.models import CLEAN, ClassificationResult, OffenseLevel
from uzgram.moderation.wordlists import DEFAULT_WORDLISTS, Category, WordLists

# Checked in this order; the first category with a hit decides.
_RULES: list[tuple[Category, OffenseLevel, str]] = [
    (Category.THREAT, OffenseLevel.critical_perm, "dangerous threat or terrorism indicators"),
    (Category.SCAM, OffenseLevel.severe_24h, "fraud attempt detected"),
    (Category.PROFANITY, OffenseLevel.warning_12h, "inappropriate language used"),
]


class ContentClassifier:
    """Stateless classifier over injectable word lists."""

    def __init__(self, wordlists: WordLists | None = None) -> None:
        self._wordlists = wordlists if wordlists is not None else DEFAULT_WORDLISTS
        self._rules = [
            (category, level, reason, self._wordlists.phrases(category))
            for category, level, reason in _RULES
        ]

    @property
    def wordlists(self) -> WordLists:
        return self._wordlists

    def _first_hit(self, text: str):
        lowered = text.lower()
        for category, level, reason, phrases in self._rules:
            for phrase in phrases:
                if phrase in lowered:
                    return category, level, reason, phrase
        return None

    def matched_phrase(self, text: str) -> Optional[tuple[Category, str]]:
        """Return ``(category, phrase)`` of the deciding hit, or None."""
        hit = self._first_hit(text)
        if hit is None:
            return None
        return hit[0], hit[3]

    def classify(self, text: str) -> ClassificationResult:
        """Classify *text*.  Total over all strings; never raises."""
        hit = self._first_hit(text)
        if hit is None:
            return CLEAN
        _, level, reason, _ = hit
        return ClassificationResult(level=level, reason=reason)


_default = ContentClassifier()


def classify(text: str) -> ClassificationResult:
    """Classify *text* against the built-in word lists."""
    return _default.classify(text)
