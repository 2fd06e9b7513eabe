"""Conversational client for the TalkQL natural-language query service."""

__version__ = "0.1.0"
