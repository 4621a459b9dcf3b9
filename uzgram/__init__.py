"""Uzgram — moderation core of the Uzgram messaging demo."""

__version__ = "0.1.0"
