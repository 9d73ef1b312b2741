"""Service-side building blocks: stubs and the adapters that serve them."""

from __future__ import annotations

import weakref
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import Any, Optional


class StubAdapter:
    """Connects a stub to a transport; knows the address it is served at."""

    def __init__(self, address: Any = None):
        self._address = address

    @property
    def address(self) -> Any:
        """The address the adapter serves."""
        return self._address


class StubBase(ABC):
    """Common base of all stubs."""

    @abstractmethod
    def has_element(self, element_id: int) -> bool:
        """Return whether the stub offers the element with this id."""


class Stub(StubBase):
    """A stub served through a :class:`StubAdapter`.

    The stub holds its adapter only weakly. Implementations of
    :meth:`init_stub_adapter` call :meth:`_remember_adapter` and return the
    handler for remote events.
    """

    def __init__(self) -> None:
        self._stub_adapter: Optional[weakref.ReferenceType] = None

    @abstractmethod
    def init_stub_adapter(self, adapter: StubAdapter) -> Any:
        """Attach ``adapter`` and return the remote event handler."""

    def _remember_adapter(self, adapter: StubAdapter) -> None:
        if not isinstance(adapter, StubAdapter):
            raise TypeError(f"{type(adapter).__name__} is not a StubAdapter")
        self._stub_adapter = weakref.ref(adapter)

    def get_stub_adapter(self) -> Optional[StubAdapter]:
        """Return the adapter, or None if there is none or it is gone."""
        if self._stub_adapter is None:
            return None
        return self._stub_adapter()


class SelectiveBroadcastSubscriptionEvent(IntEnum):
    """Change in a client's subscription to a selective broadcast."""

    SUBSCRIBED = 0
    UNSUBSCRIBED = 1