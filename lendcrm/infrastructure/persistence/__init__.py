"""Persistence: record stores over the managed backend's data API."""
