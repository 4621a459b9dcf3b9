"""Accounts — the user entity that owns a moderation sub-record."""
