from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


class Result(Generic[T, E]):
    """
    Ok/Err result for operations whose failure the caller must handle.

    Used on the I/O edge: reading the input file either yields the text
    or an error message the CLI reports before exiting non-zero.

        r = read_log_file(path)
        if r.is_err():
            logger.error("%s", r.error)
            raise SystemExit(1)
        text = r.value
    """

    def is_ok(self) -> bool:
        raise NotImplementedError

    def is_err(self) -> bool:
        raise NotImplementedError

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        """Apply fn(value) only on Ok; Err passes through."""
        raise NotImplementedError

    def map_err(self, fn: Callable[[E], F]) -> Result[T, F]:
        """Transform the error on Err; Ok passes through."""
        raise NotImplementedError

    def unwrap_or(self, default: T) -> T:
        raise NotImplementedError


@dataclass(frozen=True)
class Ok(Result[T, E]):
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        return Ok(fn(self.value))

    def map_err(self, fn: Callable[[E], F]) -> Result[T, F]:
        return Ok(self.value)  # type: ignore[return-value]

    def unwrap_or(self, default: T) -> T:
        return self.value


@dataclass(frozen=True)
class Err(Result[T, E]):
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> Result[U, E]:
        return Err(self.error)  # type: ignore[return-value]

    def map_err(self, fn: Callable[[E], F]) -> Result[T, F]:
        return Err(fn(self.error))

    def unwrap_or(self, default: T) -> T:
        return default


def ok(value: T) -> Result[T, Any]:
    return Ok(value)


def err(error: E) -> Result[Any, E]:
    return Err(error)
