"""Ordered merge comparison of two catalog collections.

Both inputs must already be sorted by the same key and hold each key at
most once. The walk never re-sorts and does not check this precondition.
"""

import operator
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Action(Enum):
    """Action needed to turn the source object into the target object."""

    NONE = ""
    ADD = "ADD"
    REMOVE = "REMOVE"
    MODIFY = "MODIFY"


@dataclass(frozen=True)
class Classification(Generic[T]):
    """One element of the union of both collections."""

    action: Action
    source: T | None = None
    target: T | None = None

    @property
    def object(self) -> T:
        """The target object when there is one, else the source object."""
        return self.target if self.target is not None else self.source  # type: ignore[return-value]


def _default_key(obj: Any) -> Any:
    return obj.key


def classify(
    source: Sequence[T],
    target: Sequence[T],
    key: Callable[[T], Any] = _default_key,
    same: Callable[[T, T], bool] = operator.eq,
) -> Iterator[Classification[T]]:
    """Walk two sorted sequences once, classifying every key.

    Args:
        source: Objects as they exist now, sorted by key.
        target: Objects as they should be, sorted by key.
        key: Returns the sort key of an object.
        same: Decides if two objects with equal keys have identical content.

    Yields:
        One Classification per distinct key, in key order.
    """
    i = j = 0
    while i < len(source) or j < len(target):
        if i == len(source):
            yield Classification(Action.ADD, target=target[j])
            j += 1
        elif j == len(target):
            yield Classification(Action.REMOVE, source=source[i])
            i += 1
        else:
            a, b = source[i], target[j]
            ka, kb = key(a), key(b)
            if ka == kb:
                action = Action.NONE if same(a, b) else Action.MODIFY
                yield Classification(action, source=a, target=b)
                i += 1
                j += 1
            elif ka < kb:
                yield Classification(Action.REMOVE, source=a)
                i += 1
            else:
                yield Classification(Action.ADD, target=b)
                j += 1
