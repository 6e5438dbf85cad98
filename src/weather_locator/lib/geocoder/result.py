"""Tagged success/failure result returned at the resolution seams."""

from dataclasses import dataclass
from typing import Generic, TypeVar

from weather_locator.lib.geocoder.errors import GeocodeError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful resolution carrying its value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed resolution carrying the classified error."""

    error: GeocodeError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def code(self) -> str:
        return self.error.code

    @property
    def message(self) -> str:
        return str(self.error)
