"""Integers bound to a declared range."""

from __future__ import annotations

import functools
from typing import ClassVar


@functools.total_ordering
class RangedInteger:
    """An integer whose permitted range is fixed by its class.

    Declare a range with ``class Percent(RangedInteger, minimum=0, maximum=100)``.
    Out-of-range values are accepted; :meth:`validate` reports them.
    """

    minimum: ClassVar[int]
    maximum: ClassVar[int]

    def __init_subclass__(cls, *, minimum: int | None = None, maximum: int | None = None, **kwargs):
        super().__init_subclass__(**kwargs)
        if minimum is not None:
            cls.minimum = minimum
        if maximum is not None:
            cls.maximum = maximum
        if not hasattr(cls, "minimum") or not hasattr(cls, "maximum"):
            raise TypeError(f"{cls.__name__} needs both minimum and maximum")

    def __init__(self, value: int | None = None):
        cls = type(self)
        if not hasattr(cls, "minimum"):
            raise TypeError("RangedInteger must be subclassed with a range")
        self.value = cls.minimum if value is None else int(value)

    def validate(self) -> bool:
        """Return whether the value lies within the declared range."""
        return self.minimum <= self.value <= self.maximum

    @staticmethod
    def _other(other):
        if isinstance(other, RangedInteger):
            return other.value
        if isinstance(other, int):
            return other
        return NotImplemented

    def __eq__(self, other):
        value = self._other(other)
        return value if value is NotImplemented else self.value == value

    def __lt__(self, other):
        value = self._other(other)
        return value if value is NotImplemented else self.value < value

    __hash__ = None

    def __int__(self) -> int:
        return self.value

    def __index__(self) -> int:
        return self.value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value})"