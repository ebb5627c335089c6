from __future__ import annotations

import re
from datetime import date
from enum import Enum
from functools import reduce
from typing import Iterable, Optional


class DataType(Enum):
    """
    Scalar types recognised in Neo4j export cells.

    NONE is the neutral element: it is what an empty cell carries and it never
    changes the type already accumulated by a column. STRING is the top.
    """

    NONE = "None"
    BOOLEAN = "Boolean"
    INTEGER = "Integer"
    FLOAT = "Float"
    DATE = "Date"
    STRING = "String"

    @property
    def type_name(self) -> str:
        """Type name used in Neptune Gremlin load-format column headings."""
        return _NEPTUNE_TYPE_NAMES[self]

    @property
    def is_numeric(self) -> bool:
        return self in _NUMERIC


_NEPTUNE_TYPE_NAMES = {
    DataType.NONE: "String",
    DataType.BOOLEAN: "Bool",
    DataType.INTEGER: "Long",
    DataType.FLOAT: "Double",
    DataType.DATE: "Date",
    DataType.STRING: "String",
}

_NUMERIC = frozenset({DataType.INTEGER, DataType.FLOAT})

NULL_LITERALS = frozenset({"", "null"})

_LONG_MIN = -(2 ** 63)
_LONG_MAX = 2 ** 63 - 1

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?")
_DATE_RE = re.compile(
    r"(\d{4}-\d{2}-\d{2})"
    r"(?:[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?)?"
)


def _is_calendar_date(ymd: str) -> bool:
    try:
        date.fromisoformat(ymd)
    except ValueError:
        return False
    return True


def classify(text: Optional[str]) -> DataType:
    """
    Classify a single cell by syntactic inspection.

    The check order matters: "1" is an Integer, never a Float, and
    "2020-01-01" is a Date, never a String. Whitespace is significant, so
    " 1" is a String.

    Args:
        text (Optional[str]): Raw cell text.

    Returns:
        DataType: The narrowest type the text conforms to.
    """
    if text is None or text in NULL_LITERALS:
        return DataType.NONE

    if text.lower() in ("true", "false"):
        return DataType.BOOLEAN

    if _INT_RE.fullmatch(text):
        if len(text.lstrip("+-")) <= 19 and _LONG_MIN <= int(text) <= _LONG_MAX:
            return DataType.INTEGER
        return DataType.STRING

    if _FLOAT_RE.fullmatch(text):
        return DataType.FLOAT

    m = _DATE_RE.fullmatch(text)
    if m and _is_calendar_date(m.group(1)):
        return DataType.DATE

    return DataType.STRING


def widen(current: DataType, observed: DataType) -> DataType:
    """
    Least upper bound of two observed types.

    Integer and Float widen to Float; every other disagreement widens to
    String, and String absorbs everything after that.
    """
    if current is observed:
        return current
    if current is DataType.NONE:
        return observed
    if observed is DataType.NONE:
        return current
    if current.is_numeric and observed.is_numeric:
        return DataType.FLOAT
    return DataType.STRING


def widen_all(types: Iterable[DataType], start: DataType = DataType.NONE) -> DataType:
    return reduce(widen, types, start)


def format_value(value: str, data_type: DataType) -> str:
    """
    Render a value for the Neptune CSV dialect.

    Strings are always quoted with embedded quotes doubled; neutral values
    become an empty cell; everything else is emitted verbatim.
    """
    if data_type is DataType.NONE:
        return ""
    if data_type is DataType.STRING:
        return '"' + value.replace('"', '""') + '"'
    return value
