"""Ok/Err values for fallible release steps.

Reading the catalog, reading release.json and checking a releasing set all
return ``Ok(value)`` or ``Err(error)``; callers branch with ``isinstance`` or
``match`` instead of catching exceptions::

    match load_catalog(path):
        case Ok(catalog):
            ...
        case Err(error):
            print(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Ok", "Err", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E


type Result[T, E] = Ok[T] | Err[E]
