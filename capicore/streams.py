"""Abstract value streams that wire formats implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from capicore.deployable import Deployable


class OutputStream(ABC):
    """Writes values to a wire format.

    A concrete stream implements :meth:`write_value` for the value kinds it
    supports and :meth:`has_error` to report a failed write. Values wrapped
    in a :class:`Deployable` are written with their own deployment.
    """

    @abstractmethod
    def write_value(self, value: Any, depl: Any = None) -> "OutputStream":
        """Write ``value`` using the deployment ``depl`` and return the stream."""

    @abstractmethod
    def has_error(self) -> bool:
        """Return whether a write has failed."""

    def write(self, value: Any) -> "OutputStream":
        """Write ``value`` with its own deployment, or none, and return the stream."""
        if isinstance(value, Deployable):
            self.write_value(value.value, value.depl)
        else:
            self.write_value(value, None)
        return self

    def __lshift__(self, value: Any) -> "OutputStream":
        return self.write(value)


class InputStream(ABC):
    """Reads values from a wire format.

    A concrete stream implements :meth:`read_value`, which returns a value
    of the requested type, and :meth:`has_error` to report a failed read.
    """

    @abstractmethod
    def read_value(self, value_type: Any, depl: Any = None) -> Any:
        """Read and return a value of ``value_type`` using the deployment ``depl``."""

    @abstractmethod
    def has_error(self) -> bool:
        """Return whether a read has failed."""

    def read(self, value_type: Any) -> Any:
        """Read a value of ``value_type``.

        If ``value_type`` is a :class:`Deployable` whose value names the
        type, that deployment is used and the result comes back wrapped in
        a :class:`Deployable` carrying the same deployment.
        """
        if isinstance(value_type, Deployable):
            value = self.read_value(value_type.value, value_type.depl)
            return Deployable(value, value_type.depl)
        return self.read_value(value_type, None)