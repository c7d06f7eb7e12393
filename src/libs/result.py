"""
Result type shared by use cases.

Use cases return ``Result`` values instead of raising for expected business
failures; the API layer maps ``Error.code`` to an HTTP status.
"""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Error:
    code: str
    message: str


class Result(Generic[T]):
    def __init__(self, value: Optional[T] = None, error: Optional[Error] = None):
        self._value = value
        self._error = error

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    @property
    def value(self) -> T:
        if self._error is not None:
            raise ValueError(f"Result is an error: {self._error.code}")
        return self._value

    @property
    def error(self) -> Error:
        if self._error is None:
            raise ValueError("Result is not an error")
        return self._error


class Return:
    @staticmethod
    def ok(value: T) -> Result[T]:
        return Result(value=value)

    @staticmethod
    def err(error: Error) -> Result:
        return Result(error=error)
