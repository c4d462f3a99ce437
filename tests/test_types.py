import math

from pylox.types import NIL, NilVal, format_number, is_truthy, to_string, type_name, values_equal


def test_nil_is_a_singleton():
    assert NilVal() is NIL
    assert repr(NIL) == 'nil'


def test_truthiness():
    assert not is_truthy(NIL)
    assert not is_truthy(False)
    assert is_truthy(True)
    assert is_truthy(0.0)
    assert is_truthy('')


def test_equality_never_mixes_kinds():
    assert values_equal(NIL, NIL)
    assert values_equal(1.0, 1.0)
    assert values_equal('a', 'a')
    assert not values_equal(True, 1.0)
    assert not values_equal(False, 0.0)
    assert not values_equal('1', 1.0)
    assert not values_equal(NIL, False)


def test_format_number():
    assert format_number(3.0) == '3'
    assert format_number(2.5) == '2.5'
    assert format_number(-0.0) == '-0'
    assert format_number(math.inf) == 'inf'
    assert format_number(-math.inf) == '-inf'
    assert format_number(math.nan) == 'NaN'
    assert format_number(1e21) == '1000000000000000000000'
    assert format_number(1e-07) == '0.0000001'
    assert format_number(1.5e-06) == '0.0000015'
    assert format_number(-0.25) == '-0.25'


def test_to_string_and_type_name():
    assert to_string(NIL) == 'nil'
    assert to_string(True) == 'true'
    assert to_string('hi') == 'hi'
    assert [type_name(v) for v in (NIL, False, 1.0, 's')] == ['nil', 'boolean', 'number', 'string']
