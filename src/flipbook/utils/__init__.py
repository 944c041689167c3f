"""Shared helpers: errors, constants and logging."""
