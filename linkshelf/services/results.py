"""Explicit result type for read paths that must not raise."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class ReadResult(Generic[T]):
    """Either data from the store or the error that prevented reading it.

    Lets callers tell "the user has no links" apart from "the store is
    unreachable" without the read path raising.
    """

    data: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """True when the read succeeded."""
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        """Return the data, or ``default`` if the read failed."""
        if self.error is not None or self.data is None:
            return default
        return self.data
