import csv
import io
import itertools

import pytest

from pg_neptune.schema import DataType, classify, format_value, widen, widen_all


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", DataType.NONE),
        ("null", DataType.NONE),
        (None, DataType.NONE),
        ("true", DataType.BOOLEAN),
        ("FALSE", DataType.BOOLEAN),
        ("42", DataType.INTEGER),
        ("-7", DataType.INTEGER),
        ("+0", DataType.INTEGER),
        ("9223372036854775807", DataType.INTEGER),
        ("9223372036854775808", DataType.STRING),
        ("3.14", DataType.FLOAT),
        ("-.5", DataType.FLOAT),
        ("1e10", DataType.FLOAT),
        ("2.5E-3", DataType.FLOAT),
        ("2020-01-31", DataType.DATE),
        ("2020-01-31T10:15:00Z", DataType.DATE),
        ("2020-01-31T10:15:00.123+02:00", DataType.DATE),
        ("2020-02-30", DataType.STRING),
        ("John", DataType.STRING),
        (" 42", DataType.STRING),
        ("1,000", DataType.STRING),
        ("yes", DataType.STRING),
    ],
)
def test_classify(text, expected):
    assert classify(text) is expected


def test_classify_is_deterministic():
    for text in ["1", "1.0", "true", "2021-05-05", "x"]:
        assert classify(text) is classify(text)


def test_widen_identity_and_conflicts():
    assert widen(DataType.NONE, DataType.INTEGER) is DataType.INTEGER
    assert widen(DataType.DATE, DataType.NONE) is DataType.DATE
    assert widen(DataType.INTEGER, DataType.FLOAT) is DataType.FLOAT
    assert widen(DataType.FLOAT, DataType.INTEGER) is DataType.FLOAT
    assert widen(DataType.BOOLEAN, DataType.INTEGER) is DataType.STRING
    assert widen(DataType.DATE, DataType.FLOAT) is DataType.STRING
    assert widen(DataType.STRING, DataType.NONE) is DataType.STRING


def test_widen_never_narrows_after_string():
    t = widen(DataType.INTEGER, DataType.BOOLEAN)
    for observed in DataType:
        t = widen(t, observed)
        assert t is DataType.STRING


@pytest.mark.parametrize(
    "observations",
    [
        [DataType.INTEGER, DataType.FLOAT, DataType.NONE],
        [DataType.INTEGER, DataType.BOOLEAN, DataType.NONE],
        [DataType.DATE, DataType.NONE, DataType.DATE],
        [DataType.INTEGER, DataType.INTEGER, DataType.FLOAT, DataType.STRING],
    ],
)
def test_widen_is_order_independent(observations):
    results = {widen_all(p) for p in itertools.permutations(observations)}
    assert len(results) == 1


@pytest.mark.parametrize("text", ["42", "-1", "3.5", "1e3", "true", "False", "2020-01-01", "2020-01-01T00:00:00Z"])
def test_format_non_string_round_trips(text):
    assert format_value(text, classify(text)) == text


def test_format_string_doubles_quotes():
    text = '{"hobby" : "watching "Flash""}'
    formatted = format_value(text, DataType.STRING)

    assert formatted == '"{""hobby"" : ""watching ""Flash""""}"'
    assert next(csv.reader(io.StringIO(formatted))) == [text]


def test_format_neutral_is_empty():
    assert format_value("", DataType.NONE) == ""
    assert format_value("null", DataType.NONE) == ""


def test_neptune_type_names():
    assert DataType.BOOLEAN.type_name == "Bool"
    assert DataType.INTEGER.type_name == "Long"
    assert DataType.FLOAT.type_name == "Double"
    assert DataType.DATE.type_name == "Date"
    assert DataType.STRING.type_name == "String"
