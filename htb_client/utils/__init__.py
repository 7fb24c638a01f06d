"""Shared helpers: environment config and logging."""
