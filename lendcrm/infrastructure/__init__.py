"""Infrastructure layer: backend client, cache, persistence, security."""
