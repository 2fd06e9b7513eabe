"""Logging and tracing bootstrap."""
