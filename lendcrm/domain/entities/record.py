"""Record base model shared by every table a record store can wrap."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class Record(BaseModel):
    """A backend row: mandatory unique id, optional timestamps, any other fields.

    Subclasses declare their columns; undeclared columns are kept as extras
    so a generic store never drops data it does not know about.
    """

    model_config = ConfigDict(extra="allow")

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v: Any) -> Any:
        """Accept numeric primary keys (bigserial tables) as opaque strings."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


# Fields the backend assigns; never sent on create
SYSTEM_FIELDS = frozenset({"id", "created_at", "updated_at"})
