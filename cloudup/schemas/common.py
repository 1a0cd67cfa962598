from dataclasses import dataclass
from typing import Generic, TypeVar

from cloudup.core.errors import CloudupError

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T | None = None
    error: str | None = None
    cause: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str, cause: Exception | None = None) -> "Result[T]":
        return cls(error=error, cause=cause)

    def unwrap(self) -> T:
        if self.ok:
            return self.value  # type: ignore[return-value]
        if self.cause is not None:
            raise self.cause
        raise CloudupError(self.error)
