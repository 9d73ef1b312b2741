import pytest

from capicore.ranged import RangedInteger


class Percent(RangedInteger, minimum=0, maximum=100):
    pass


class Offset(RangedInteger, minimum=-10, maximum=10):
    pass


def test_default_is_minimum():
    assert Percent().value == Percent.minimum
    assert int(Offset()) == -10
    assert RangedInteger.validate(Offset()) is True


@pytest.mark.parametrize("value, valid", [(0, True), (100, True), (50, True), (-1, False), (101, False)])
def test_validate(value, valid):
    assert RangedInteger.validate(Percent(value)) is valid


def test_out_of_range_is_stored():
    p = Percent(150)
    assert p.value == 150
    assert RangedInteger.validate(p) is False


def test_comparison_with_ranged_and_int():
    assert Percent(10) == Percent(10)
    assert Percent(10) == 10
    assert Percent(10) < Percent(20)
    assert Percent(30) > 20
    assert Percent(30) >= Percent(30)
    assert Percent(30) <= 30
    assert Percent(5) != 6
    assert RangedInteger.validate(Percent(30)) is True


def test_assignment_changes_value():
    p = Percent(1)
    p.value = 99
    assert p == 99
    assert RangedInteger.validate(p) is True
    p.value = 200
    assert RangedInteger.validate(p) is False


def test_usable_as_index():
    items = ["a", "b", "c"]
    index = Percent(2)
    assert items[index] == "c"
    assert RangedInteger.validate(index) is True


def test_base_class_requires_range():
    with pytest.raises(TypeError):
        RangedInteger(3)


def test_subclass_without_bounds_rejected():
    with pytest.raises(TypeError):
        type("Broken", (RangedInteger,), {}, minimum=0)
    complete = type("Complete", (RangedInteger,), {}, minimum=0, maximum=5)
    assert RangedInteger.validate(complete(5)) is True
    assert RangedInteger.validate(complete(6)) is False


def test_not_hashable():
    value = Percent(1)
    assert RangedInteger.validate(value) is True
    with pytest.raises(TypeError):
        hash(value)