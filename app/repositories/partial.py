"""
Field-level update values for PATCH semantics.

A field is either UNCHANGED (omitted by the client) or SetTo(value) (present,
possibly empty). Repositories write only SetTo fields.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


class Unchanged:
    """Marker for a field the client did not send."""

    _instance: "Unchanged | None" = None

    def __new__(cls) -> "Unchanged":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNCHANGED"


UNCHANGED = Unchanged()


@dataclass(frozen=True)
class SetTo(Generic[T]):
    """Explicit new value for a field."""

    value: T


FieldUpdate = Union[Unchanged, SetTo[T]]


def changed_values(changes: Mapping[str, FieldUpdate[Any]]) -> dict[str, Any]:
    """Column -> value for every SetTo entry; UNCHANGED entries are dropped."""
    values: dict[str, Any] = {}
    for column, update in changes.items():
        if isinstance(update, SetTo):
            values[column] = update.value
        elif not isinstance(update, Unchanged):
            raise TypeError(f"{column}: expected SetTo or UNCHANGED, got {type(update).__name__}")
    return values
