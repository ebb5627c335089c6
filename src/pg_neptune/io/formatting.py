from __future__ import annotations

from typing import Iterable

from pg_neptune.schema.datatypes import DataType, format_value

DEFAULT_MULTI_VALUE_SEPARATOR = ";"
FIELD_DELIMITER = ","

_TOKEN_SPECIALS = (",", '"', "\n", "\r")


def escape_separator(value: str, separator: str = DEFAULT_MULTI_VALUE_SEPARATOR) -> str:
    """Backslash-escape literal occurrences of the multi-value separator."""
    if not separator:
        return value
    return value.replace(separator, "\\" + separator)


def format_multi_values(
    values: Iterable[str],
    data_type: DataType = DataType.STRING,
    separator: str = DEFAULT_MULTI_VALUE_SEPARATOR,
) -> str:
    """
    Join several values into one Neptune cell.

    Each value has the separator escaped before joining, then the joined
    text is quoted exactly like a single value of the same type.

    Args:
        values (Iterable[str]): Values of one cell, in output order.
        data_type (DataType): Widened type of the values.
        separator (str): Multi-value separator; empty means plain concatenation.

    Returns:
        str: Rendered cell.
    """
    joined = separator.join(escape_separator(v, separator) for v in values)
    return format_value(joined, data_type)


def format_token(text: str) -> str:
    """
    Render an id/label/endpoint cell.

    Tokens are written raw unless they would break the record, in which
    case they get the same quoting as a string value.
    """
    if not text:
        return text
    if any(c in text for c in _TOKEN_SPECIALS) or text != text.strip():
        return format_value(text, DataType.STRING)
    return text


def format_record(fields: Iterable[str]) -> str:
    """Join already-rendered fields into one CSV record (no line terminator)."""
    return FIELD_DELIMITER.join(fields)
