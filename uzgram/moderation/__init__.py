"""Content moderation — the send-path gate of the messenger.

This package provides:
- Classification: map outgoing message text to an offense level
- Word lists: per-category, per-locale phrase configuration
- Suspension policy: expiry and user-facing wording for each offense level
"""

from uzgram.moderation.classifier import ContentClassifier, classify
from uzgram.moderation.models import ClassificationResult, OffenseLevel, SuspensionRecord
from uzgram.moderation.suspension import (
    is_currently_blocked,
    suspend,
    suspension_expiry,
    suspension_message,
)
from uzgram.moderation.wordlists import DEFAULT_WORDLISTS, Category, WordLists, load_wordlists

__all__ = [
    "Category",
    "ClassificationResult",
    "ContentClassifier",
    "DEFAULT_WORDLISTS",
    "OffenseLevel",
    "SuspensionRecord",
    "WordLists",
    "classify",
    "is_currently_blocked",
    "load_wordlists",
    "suspend",
    "suspension_expiry",
    "suspension_message",
]
