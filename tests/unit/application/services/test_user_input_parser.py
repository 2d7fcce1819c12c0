import pytest

from link_budget.application.services.user_input_parser import (
    MetricPrefixParser,
    format_metric_prefixed,
    parse_metric_prefixed,
)
from link_budget.domain.exceptions import InvalidMagnitude, ParseError


@pytest.fixture
def parser():
    return MetricPrefixParser()


@pytest.mark.parametrize(
    "input_string, expected",
    [
        ("20e6", 20e6),
        ("2.4e9", 2.4e9),
        ("1000", 1000.0),
        ("-3.5", -3.5),
        (".5", 0.5),
        ("20M", 20e6),
        ("20 M", 20e6),
        ("  2.4G  ", 2.4e9),
        ("868.1M", 868.1e6),
        ("125k", 125e3),
        ("125K", 125e3),
        ("1T", 1e12),
        ("3P", 3e15),
        ("1E", 1e18),
        ("1Z", 1e21),
        ("1Y", 1e24),
        ("1.5e3k", 1.5e6),
    ],
)
def test_parse_valid(parser, input_string, expected):
    assert parser.parse(input_string) == pytest.approx(expected)


@pytest.mark.parametrize(
    "input_string",
    [
        "",
        "   ",
        "MHz",
        "20 MHz",
        "20m",  # milli is not a frequency prefix
        "20u",
        "2,4G",
        "1.2.3",
        "nan",
        "inf",
        "1e400",
        "G20",
    ],
)
def test_parse_invalid(parser, input_string):
    with pytest.raises(InvalidMagnitude):
        parser.parse(input_string)


def test_parse_rejects_non_text(parser):
    with pytest.raises(InvalidMagnitude):
        parser.parse(20e6)


def test_invalid_magnitude_is_a_value_error():
    assert issubclass(InvalidMagnitude, ParseError)
    assert issubclass(InvalidMagnitude, ValueError)


@pytest.mark.parametrize(
    "value, expected",
    [
        (20e6, "20.0 M"),
        (2.4e9, "2.4 G"),
        (868.1e6, "868.1 M"),
        (1000.0, "1.0 k"),
        (999.0, "999.0 "),
        (500.0, "500.0 "),
        (-0.5, "-0.5 "),
        (999.96, "1.0 k"),
        (0.0, "0.0 "),
        (-5e3, "-5.0 k"),
        (1e24, "1.0 Y"),
        (999.96e3, "1.0 M"),
        (5e27, "5000.0 Y"),
    ],
)
def test_format(value, expected):
    assert format_metric_prefixed(value) == expected


def test_format_precision():
    assert format_metric_prefixed(2.4e9, precision=3) == "2.400 G"


@pytest.mark.parametrize("value", [1e3, 20e6, 2.4e9, 5.8e9, 60e9, 3.3e12])
def test_parse_inverts_format(value):
    assert parse_metric_prefixed(format_metric_prefixed(value, precision=6)) == pytest.approx(value)


def test_format_non_finite():
    assert format_metric_prefixed(float("inf")) == "inf "


def test_format_unprefixed_uses_precision():
    assert format_metric_prefixed(500.0, precision=3) == "500.000 "
    assert parse_metric_prefixed(format_metric_prefixed(12.5)) == pytest.approx(12.5)
