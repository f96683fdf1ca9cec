"""Cache protocol for record stores (DIP). Default implementation: RecordCache."""

from typing import Protocol


class RecordCacheProtocol[V](Protocol):
    """Per-accessor cache of records keyed by identifier."""

    def get(self, key: str) -> V | None:
        """Return the live cached value or None (expired entries count as absent)."""
        ...

    def set(self, key: str, value: V) -> None:
        """Store value stamped with the current time."""
        ...

    def delete(self, key: str) -> None:
        """Remove key if present."""
        ...

    def clear(self) -> None:
        """Drop every entry."""
        ...
