"""Minimal Result type for expected failures.

Services return ``Result[T, E]`` instead of raising for failures the user can
act on. Callers either ``match`` on ``Ok``/``Err`` or check with
``isinstance(result, Err)``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

__all__ = ["Err", "Ok", "Result"]

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E


Result = Ok[T] | Err[E]
