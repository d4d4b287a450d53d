"""Shared utilities: configuration, credentials, errors, formatting and logging."""
