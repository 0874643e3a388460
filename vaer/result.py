"""
A minimal result type for operations that report failures as values.

    match await probe.current_city_name():
        case Ok(place):
            ...
        case Err(error):
            ...
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E


type Result[T, E] = Ok[T] | Err[E]
