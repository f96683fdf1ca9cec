"""Turn accessor Results into values or raised domain exceptions."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from lendcrm.application.result import Result
from lendcrm.domain.entities.record import SYSTEM_FIELDS
from lendcrm.domain.exceptions import RecordValidationException, ResourceNotFoundException


def unwrap[T](
    result: Result[T],
    resource_type: str | None = None,
    resource_id: str | None = None,
) -> T:
    """Return the Ok value, or raise the Err's exception.

    When resource_type/resource_id are given, a backend "no such row" error
    is raised as ResourceNotFoundException instead.
    """
    if result.is_ok:
        return result.value
    error = result.error
    if resource_type and resource_id is not None and getattr(error, "not_found", False):
        raise ResourceNotFoundException(resource_type, resource_id) from error
    raise error


def writable_fields(
    data: Mapping[str, Any] | BaseModel,
    *,
    exclude: frozenset[str] = frozenset(),
    exclude_unset: bool = True,
) -> dict[str, Any]:
    """Copy of the client-supplied fields minus backend-assigned and excluded ones.

    Pydantic models contribute only explicitly set fields unless
    exclude_unset is False (creates, where model defaults must be sent).
    """
    if isinstance(data, BaseModel):
        raw = data.model_dump(mode="json", exclude_unset=exclude_unset)
    elif isinstance(data, Mapping):
        raw = dict(data)
    else:
        raise RecordValidationException()
    blocked = SYSTEM_FIELDS | exclude
    return {key: value for key, value in raw.items() if key not in blocked}
