"""Base class for generated enumeration types."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Enumeration(ABC):
    """A wrapped enumeration value compared by its underlying value.

    Subclasses define which values are legal through :meth:`validate`.
    """

    def __init__(self, value: Any = 0):
        self.value = value

    @abstractmethod
    def validate(self) -> bool:
        """Return whether the held value is a legal literal."""

    @staticmethod
    def _other(other):
        return other.value if isinstance(other, Enumeration) else other

    def __eq__(self, other):
        return self.value == self._other(other)

    def __ne__(self, other):
        return self.value != self._other(other)

    def __lt__(self, other):
        return self.value < self._other(other)

    def __le__(self, other):
        return self.value <= self._other(other)

    def __gt__(self, other):
        return self.value > self._other(other)

    def __ge__(self, other):
        return self.value >= self._other(other)

    def __hash__(self) -> int:
        return hash(self.value)

    def __int__(self) -> int:
        return int(self.value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"