"""Shared infrastructure: log sanitization and tracing."""
