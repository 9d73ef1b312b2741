"""Structured values and the helpers that move them through streams."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Sequence

from capicore.streams import InputStream, OutputStream


class Struct:
    """A structure whose members are held, in order, in :attr:`values`.

    Subclasses may declare ``field_types``. A struct built without
    arguments then holds a default value of each type, and reading it
    from a stream asks for exactly those types. Without declared types
    the type of each current member is used.
    """

    field_types: ClassVar[tuple[type, ...]] = ()

    def __init__(self, *values: Any):
        cls = type(self)
        if values:
            if cls.field_types and len(values) != len(cls.field_types):
                raise TypeError(
                    f"{cls.__name__} takes {len(cls.field_types)} values, got {len(values)}"
                )
            self.values: list[Any] = list(values)
        else:
            self.values = [field_type() for field_type in cls.field_types]

    def _member_types(self) -> list[type]:
        declared = type(self).field_types
        if declared:
            return list(declared)
        return [type(value) for value in self.values]

    def __len__(self) -> int:
        return len(self.values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Struct):
            return NotImplemented
        return type(self) is type(other) and self.values == other.values

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        members = ", ".join(repr(value) for value in self.values)
        return f"{type(self).__name__}({members})"


class PolymorphicStruct(ABC):
    """Base of structures that are exchanged through a common base type.

    Each concrete structure identifies itself with a serial number.
    """

    @abstractmethod
    def get_serial(self) -> int:
        """Return the serial number identifying the concrete type."""


def _member_deployments(depl: Any, count: int) -> list[Any]:
    """Spread a struct deployment over its members.

    A deployment given as a :class:`Struct` or a sequence supplies one
    deployment per member; any other deployment leaves members without one.
    """
    if depl is None:
        return [None] * count
    if isinstance(depl, Struct):
        members = list(depl.values)
    elif isinstance(depl, (tuple, list)):
        members = list(depl)
    else:
        return [None] * count
    if len(members) != count:
        raise ValueError(
            f"deployment describes {len(members)} members, struct has {count}"
        )
    return members


def write_struct(output: OutputStream, struct: Struct, depl: Any = None) -> OutputStream:
    """Write the members of ``struct`` in order and return the stream."""
    deployments = _member_deployments(depl, len(struct.values))
    for value, member_depl in zip(struct.values, deployments):
        output.write_value(value, member_depl)
    return output


def read_struct(input_: InputStream, struct: Struct, depl: Any = None) -> Struct:
    """Read the members of ``struct`` in order, replacing its values."""
    member_types = struct._member_types()
    deployments = _member_deployments(depl, len(member_types))
    values = [
        input_.read_value(member_type, member_depl)
        for member_type, member_depl in zip(member_types, deployments)
    ]
    if len(struct.values) != len(values):
        struct.values = values
    else:
        struct.values[:] = values
    return struct


def serialize_arguments(output: OutputStream, *args: Any) -> bool:
    """Write each argument in turn; return False as soon as a write fails."""
    for argument in args:
        output.write(argument)
        if output.has_error():
            return False
    return True


def deserialize_arguments(input_: InputStream, *args: Any) -> tuple[Any, ...]:
    """Read one value for each requested type and return them in order.

    A type may be wrapped in a deployable to read it with a deployment.
    Raises :class:`ValueError` naming the argument at which reading failed.
    """
    values = []
    for position, value_type in enumerate(args):
        values.append(input_.read(value_type))
        if input_.has_error():
            raise ValueError(f"failed to deserialize argument {position}")
    return tuple(values)