"""A value paired with the deployment settings used to serialise it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")
D = TypeVar("D")


@dataclass
class Deployable(Generic[T, D]):
    """Holds a value together with its (optional) deployment description."""

    value: Optional[T] = None
    depl: Optional[D] = None

    def __post_init__(self) -> None:
        if isinstance(self.value, Deployable):
            raise TypeError("a Deployable cannot wrap another Deployable")

    def unwrap(self) -> Any:
        """Return the wrapped value."""
        return self.value