"""Small utility helpers."""

from lendcrm.shared.utils.datetime import ensure_utc, utc_now

__all__ = ["ensure_utc", "utc_now"]
