from typing import Any

import pytest

from capicore.deployable import Deployable
from capicore.serialization import (
    PolymorphicStruct,
    Struct,
    deserialize_arguments,
    read_struct,
    serialize_arguments,
    write_struct,
)
from capicore.streams import InputStream, OutputStream


class RecordingOutput(OutputStream):
    def __init__(self, fail_on=None):
        self.written = []
        self.fail_on = fail_on
        self.error = False

    def write_value(self, value: Any, depl: Any = None):
        self.written.append((value, depl))
        if self.fail_on is not None and value == self.fail_on:
            self.error = True
        return self

    def has_error(self) -> bool:
        return self.error


class QueueInput(InputStream):
    def __init__(self, items):
        self.items = list(items)
        self.requests = []
        self.error = False

    def read_value(self, value_type: Any, depl: Any = None):
        self.requests.append((value_type, depl))
        if not self.items:
            self.error = True
            return value_type()
        value = self.items.pop(0)
        if not isinstance(value, value_type):
            self.error = True
        return value

    def has_error(self) -> bool:
        return self.error


class Point(Struct):
    field_types = (int, int, str)


class Shape(PolymorphicStruct):
    def get_serial(self) -> int:
        return 7


def test_struct_defaults_from_field_types():
    point = Point()
    assert point.values == [0, 0, ""]
    output = RecordingOutput()
    write_struct(output, point)
    assert output.written == [(0, None), (0, None), ("", None)]


def test_struct_rejects_wrong_number_of_values():
    with pytest.raises(TypeError):
        Point(1, 2)
    assert Struct(1, 2).values == [1, 2]


def test_struct_equality():
    assert Point(1, 2, "a") == Point(1, 2, "a")
    assert not Point(1, 2, "a") == Point(1, 3, "a")
    assert Struct(1, 2) == Struct(1, 2)
    assert not Struct(1, 2) == Struct(1, 3)


def test_write_struct_writes_members_in_order():
    output = RecordingOutput()
    result = write_struct(output, Point(3, 4, "p"))
    assert result is output
    assert output.written == [(3, None), (4, None), ("p", None)]


def test_write_struct_spreads_deployments():
    output = RecordingOutput()
    write_struct(output, Point(3, 4, "p"), ("d0", "d1", "d2"))
    assert [depl for _, depl in output.written] == ["d0", "d1", "d2"]


def test_write_struct_with_struct_deployment():
    output = RecordingOutput()
    write_struct(output, Struct(1, 2), Struct("x", "y"))
    assert output.written == [(1, "x"), (2, "y")]


def test_non_struct_deployment_leaves_members_without_one():
    output = RecordingOutput()
    write_struct(output, Struct(1, 2), object())
    assert [depl for _, depl in output.written] == [None, None]


def test_deployment_length_mismatch():
    with pytest.raises(ValueError):
        write_struct(RecordingOutput(), Point(1, 2, "a"), ("d0",))


def test_read_struct_fills_members():
    input_ = QueueInput([10, 20, "name"])
    point = Point()
    result = read_struct(input_, point)
    assert result is point
    assert point.values == [10, 20, "name"]
    assert [t for t, _ in input_.requests] == [int, int, str]


def test_read_struct_uses_current_member_types():
    input_ = QueueInput([2.5, "b"])
    struct = Struct(0.0, "a")
    read_struct(input_, struct, ["f", "s"])
    assert struct.values == [2.5, "b"]
    assert input_.requests == [(float, "f"), (str, "s")]


def test_struct_round_trip():
    output = RecordingOutput()
    write_struct(output, Point(5, 6, "q"))
    restored = read_struct(QueueInput([v for v, _ in output.written]), Point())
    assert restored == Point(5, 6, "q")


def test_polymorphic_struct_serial():
    assert Shape().get_serial() == 7
    with pytest.raises(TypeError):
        PolymorphicStruct()


def test_serialize_arguments_success():
    output = RecordingOutput()
    assert serialize_arguments(output, 1, "two", Deployable(3, "depl")) is True
    assert output.written == [(1, None), ("two", None), (3, "depl")]


def test_serialize_arguments_none_is_success():
    output = RecordingOutput()
    assert serialize_arguments(output) is True
    assert output.written == []


def test_serialize_arguments_stops_at_error():
    output = RecordingOutput(fail_on="bad")
    assert serialize_arguments(output, 1, "bad", 3) is False
    assert [v for v, _ in output.written] == [1, "bad"]


def test_deserialize_arguments_returns_values():
    input_ = QueueInput([1, "x"])
    assert deserialize_arguments(input_, int, str) == (1, "x")


def test_deserialize_arguments_with_deployable():
    input_ = QueueInput([4])
    (value,) = deserialize_arguments(input_, Deployable(int, "dep"))
    assert value == Deployable(4, "dep")
    assert input_.requests == [(int, "dep")]


def test_deserialize_arguments_raises_on_error():
    input_ = QueueInput([1, 2])
    with pytest.raises(ValueError):
        deserialize_arguments(input_, int, str, int)
    assert len(input_.requests) == 2