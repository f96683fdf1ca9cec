"""Operation result returned by record stores: Ok(value) or Err(error).

Record store operations never raise past their own boundary; callers
inspect the result (or call unwrap() to re-raise the carried error).
"""

from dataclasses import dataclass
from typing import Literal, NoReturn

from lendcrm.domain.exceptions import LendCrmException


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Successful operation carrying its value."""

    value: T

    @property
    def is_ok(self) -> Literal[True]:
        return True

    @property
    def error(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err:
    """Failed operation carrying the error that ended it."""

    error: LendCrmException

    @property
    def is_ok(self) -> Literal[False]:
        return False

    @property
    def value(self) -> None:
        return None

    def unwrap(self) -> NoReturn:
        """Raise the carried error."""
        raise self.error


type Result[T] = Ok[T] | Err
