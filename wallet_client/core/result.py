from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    network = "network"
    unauthenticated = "unauthenticated"
    validation = "validation"
    not_found = "not_found"


@dataclass
class Result(Generic[T]):
    """Outcome of a wallet operation: a value, or an error kind plus message."""
    value: Optional[T] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str, status_code: Optional[int] = None) -> "Result[T]":
        return cls(error_kind=kind, message=message, status_code=status_code)

    def unwrap(self) -> T:
        if not self.ok:
            raise ValueError(f"Result is an error ({self.error_kind.value}): {self.message}")
        return self.value
