import math

import pytest

from rollscope.analysis.numbers import (
    display_string,
    format_number,
    format_thresholds,
    formatted_value,
    is_chartable,
    is_finite_number,
    parse_threshold,
    round_number,
)


@pytest.mark.parametrize(
    'value, expected',
    [
        (0, True),
        (4, True),
        (-2.5, True),
        ('4.25', True),
        (' 7 ', True),
        ('', False),
        ('abc', False),
        ('1_000', False),
        (math.inf, False),
        (math.nan, False),
        ('Infinity', False),
        (True, False),
        (None, False),
        ([1], False),
    ],
)
def test_is_finite_number(value, expected):
    assert is_finite_number(value) is expected


class TestRoundNumber:
    @pytest.mark.parametrize(
        'value, expected',
        [
            (4, 4.0),
            (4.256, 4.26),
            (0.125, 0.13),
            (-0.125, -0.13),
            (5.005, 5.0),
            (1.005, 1.0),
            (14.399999999999999, 14.4),
            ('3.14159', 3.14),
        ],
    )
    def test_two_decimals_half_away_from_zero(self, value, expected):
        assert round_number(value) == expected

    @pytest.mark.parametrize('value', [0.001, 5.005, 2.675, -17.3049, 123456.789, 1e-9])
    def test_idempotent(self, value):
        assert round_number(round_number(value)) == round_number(value)

    def test_negative_zero_is_normalised(self):
        assert math.copysign(1, round_number(-0.001)) == 1

    @pytest.mark.parametrize('value', [1e307, -1e307, 1.7e308, '1e307'])
    def test_values_too_large_to_scale_are_returned_as_is(self, value):
        assert round_number(value) == float(value)

    def test_infinity_passes_through(self):
        assert round_number(math.inf) == math.inf


def test_format_thresholds():
    assert format_thresholds([0.951, 10, 2.5]) == [0.95, 10.0, 2.5]
    assert format_thresholds([]) == []


@pytest.mark.parametrize(
    'value, expected',
    [
        (4.0, '4'),
        (4, '4'),
        (0.5, '0.5'),
        (-3.0, '-3'),
    ],
)
def test_format_number(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize(
    'value, expected',
    [
        (None, 'null'),
        (True, 'true'),
        (4.0, '4'),
        ('x', 'x'),
        ([1, None, 'a'], '1,,a'),
        ([1, [2, 3]], '1,2,3'),
        ({'a': 1, 'b': [2]}, '{"a":1,"b":[2]}'),
        ({'région': 'é'}, '{"région":"é"}'),
    ],
)
def test_display_string(value, expected):
    assert display_string(value) == expected


def test_formatted_value():
    assert formatted_value(3.14159) == 3.14
    assert formatted_value('2') == 2.0
    assert formatted_value(None) is None
    assert formatted_value('slow') == 'slow'
    assert formatted_value(False) == 'false'


def test_is_chartable():
    assert is_chartable(None)
    assert is_chartable(3)
    assert not is_chartable('slow')
    assert not is_chartable({'a': 1})


@pytest.mark.parametrize(
    'literal, expected',
    [('5', 5.0), ('0', 0.0), ('-1.5', -1.5), ('5abc', None), ('{{args.x}}', None), ('NaN', None)],
)
def test_parse_threshold(literal, expected):
    assert parse_threshold(literal) == expected
