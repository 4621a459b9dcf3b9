"""Messaging — chats, messages and the moderated send path."""
