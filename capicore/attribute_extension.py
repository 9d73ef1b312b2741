"""Extensions that add behaviour on top of a proxy attribute."""

from __future__ import annotations

from typing import Any

from capicore.types import CallStatus

_MISSING = object()


class AttributeExtension:
    """Base for objects that extend an existing attribute."""

    def __init__(self, base_attribute: Any):
        self._base_attribute = base_attribute

    @property
    def base_attribute(self) -> Any:
        """The attribute being extended."""
        return self._base_attribute


class AttributeCacheExtension(AttributeExtension):
    """Keeps the last value an observable attribute reported.

    An attribute is observable when it has a ``changed_event`` offering
    ``subscribe(callback)``. For other attributes no cache is kept and
    reading it raises :class:`TypeError`.
    """

    def __init__(self, base_attribute: Any):
        super().__init__(base_attribute)
        self._cached = _MISSING
        event = getattr(base_attribute, "changed_event", None)
        self.observable = event is not None and callable(getattr(event, "subscribe", None))
        if self.observable:
            event.subscribe(self.on_value_update)

    def get_cached_value(self, default: Any = None) -> Any:
        """Return the cached value, or ``default`` while none has arrived."""
        if not self.observable:
            raise TypeError("attribute is not observable; no cache is kept")
        return default if self._cached is _MISSING else self._cached

    def on_value_update(self, value: Any) -> None:
        """Store a value reported by the attribute."""
        if self._cached is not _MISSING and self._cached == value:
            return
        self._cached = value

    def value_retrieved(self, status: CallStatus, value: Any) -> None:
        """Store a value fetched by a call, if the call succeeded."""
        if status == CallStatus.SUCCESS:
            self.on_value_update(value)