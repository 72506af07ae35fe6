"""Shared utilities: structured logging and JWT helpers."""
