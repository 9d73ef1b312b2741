from collections import deque

import pytest

from capicore.deployable import Deployable
from capicore.streams import InputStream, OutputStream


class RecordingOutput(OutputStream):
    def __init__(self):
        self.written = []
        self.error = False

    def write_value(self, value, depl=None):
        if value is None:
            self.error = True
        else:
            self.written.append((value, depl))
        return self

    def has_error(self):
        return self.error


class ListInput(InputStream):
    def __init__(self, values):
        self.values = deque(values)
        self.error = False
        self.requests = []

    def read_value(self, value_type, depl=None):
        self.requests.append((value_type, depl))
        if not self.values:
            self.error = True
            return value_type()
        value = self.values.popleft()
        if not isinstance(value, value_type):
            self.error = True
            return value_type()
        return value

    def has_error(self):
        return self.error


def test_base_classes_are_abstract():
    with pytest.raises(TypeError):
        OutputStream()
    with pytest.raises(TypeError):
        InputStream()


def test_write_plain_value_has_no_deployment():
    out = RecordingOutput()
    OutputStream.write(out, 7)
    assert out.written == [(7, None)]
    assert out.has_error() is False


def test_write_deployable_uses_its_deployment():
    out = RecordingOutput()
    depl = object()
    out.write(Deployable("abc", depl))
    assert out.written == [("abc", depl)]


def test_write_returns_stream_for_chaining():
    out = RecordingOutput()
    result = OutputStream.write(out, 1).write("x").write(2.5)
    assert result is out
    assert [value for value, _ in out.written] == [1, "x", 2.5]


def test_lshift_operator_chains_writes():
    out = RecordingOutput()
    result = OutputStream.__lshift__(out, True) << [1, 2] << {"k": 3}
    assert result is out
    assert out.written == [(True, None), ([1, 2], None), ({"k": 3}, None)]


def test_write_error_is_reported():
    out = RecordingOutput()
    OutputStream.write(out, 1).write(None)
    assert out.has_error() is True
    assert out.written == [(1, None)]


def test_read_plain_type():
    inp = ListInput([5, "hello"])
    assert InputStream.read(inp, int) == 5
    assert InputStream.read(inp, str) == "hello"
    assert inp.requests == [(int, None), (str, None)]
    assert inp.has_error() is False


def test_read_deployable_passes_deployment_and_wraps_result():
    depl = object()
    inp = ListInput([42])
    result = inp.read(Deployable(int, depl))
    assert result == Deployable(42, depl)
    assert inp.requests == [(int, depl)]


def test_read_type_mismatch_sets_error():
    inp = ListInput(["not an int"])
    assert InputStream.read(inp, int) == 0
    assert inp.has_error() is True


def test_read_past_end_sets_error():
    inp = ListInput([])
    assert InputStream.read(inp, float) == 0.0
    assert inp.has_error() is True


def test_round_trip_through_recorded_values():
    out = RecordingOutput()
    values = [3, "abc", 1.5, [1, 2, 3]]
    for value in values:
        OutputStream.write(out, value)
    inp = ListInput([value for value, _ in out.written])
    read_back = [InputStream.read(inp, type(value)) for value in values]
    assert read_back == values
    assert inp.has_error() is False