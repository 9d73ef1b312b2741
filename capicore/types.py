"""Basic types shared across the framework."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum, IntEnum

DEFAULT_SEND_TIMEOUT_MS = 5000
"""Default call timeout in milliseconds; -1 means wait forever."""

ByteBuffer = bytearray


class CallStatus(IntEnum):
    """Outcome of a remote call."""

    SUCCESS = 0
    OUT_OF_MEMORY = 1
    NOT_AVAILABLE = 2
    CONNECTION_FAILED = 3
    REMOTE_ERROR = 4
    UNKNOWN = 5
    INVALID_VALUE = 6
    SUBSCRIPTION_REFUSED = 7
    SERIALIZATION_ERROR = 8


class AvailabilityStatus(IntEnum):
    """Availability of a remote service."""

    UNKNOWN = 0
    AVAILABLE = 1
    NOT_AVAILABLE = 2


@dataclass
class CallInfo:
    """Per-call options: timeout in milliseconds and sender id."""

    timeout: int = DEFAULT_SEND_TIMEOUT_MS
    sender: int = 0


class ClientId(ABC):
    """Identifies a client sending a call to a stub.

    Subclasses supply equality, a hash code and the client's credentials.
    Instances can be kept in sets, which then hold each client once.
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # Defining __eq__ in a subclass would otherwise drop hashability.
        if cls.__dict__.get("__hash__", ...) is None:
            cls.__hash__ = ClientId.__hash__

    @abstractmethod
    def __eq__(self, other: object) -> bool:
        ...

    def __hash__(self) -> int:
        return self.hash_code()

    @abstractmethod
    def hash_code(self) -> int:
        """Return a hash consistent with equality."""

    @property
    @abstractmethod
    def uid(self) -> int:
        """User id of the client."""

    @property
    @abstractmethod
    def gid(self) -> int:
        """Group id of the client."""


def enum_hash(value: Enum | int) -> int:
    """Hash an enumeration by its integral value."""
    return int(value.value if isinstance(value, Enum) else value)