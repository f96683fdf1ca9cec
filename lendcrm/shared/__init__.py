"""Shared helpers used across layers (logging, datetime)."""
