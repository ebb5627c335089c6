from __future__ import annotations

import json
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pg_neptune.errors import DuplicatePropertyValueError, MultiValuedPropertyError
from pg_neptune.io.formatting import (
    DEFAULT_MULTI_VALUE_SEPARATOR,
    escape_separator,
    format_multi_values,
)
from pg_neptune.schema.datatypes import NULL_LITERALS, DataType, classify, format_value, widen_all
from pg_neptune.schema.models import PropertyValue


class MultiValuedNodePropertyPolicy(Enum):
    LEAVE_AS_STRING = "LeaveAsString"
    HALT = "Halt"
    PUT_IN_SET_IGNORING_DUPLICATES = "PutInSetIgnoringDuplicates"
    PUT_IN_SET_BUT_HALT_IF_DUPLICATES = "PutInSetButHaltIfDuplicates"


class MultiValuedRelationshipPropertyPolicy(Enum):
    # Neptune edges have single cardinality, so no set policies here
    LEAVE_AS_STRING = "LeaveAsString"
    HALT = "Halt"


MultiValuedPolicy = Union[MultiValuedNodePropertyPolicy, MultiValuedRelationshipPropertyPolicy]

_SET_POLICIES = frozenset(
    {
        MultiValuedNodePropertyPolicy.PUT_IN_SET_IGNORING_DUPLICATES,
        MultiValuedNodePropertyPolicy.PUT_IN_SET_BUT_HALT_IF_DUPLICATES,
    }
)


def _element_text(element: Any) -> str:
    if isinstance(element, bool):
        return "true" if element else "false"
    if isinstance(element, str):
        return element
    if isinstance(element, (int, float)):
        return str(element)
    return json.dumps(element, separators=(",", ":"))


def split_list_cell(raw: str) -> Optional[List[str]]:
    """
    Return the elements of a list-valued cell, or None for a scalar cell.

    The APOC CSV export writes list properties as JSON arrays, e.g.
    `["a","b"]` or `[1,2]`. Bracketed text that is not a JSON list is a
    scalar. `null` elements are dropped.
    """
    s = raw.strip()
    if not (s.startswith("[") and s.endswith("]")):
        return None
    try:
        parsed = json.loads(s)
    except ValueError:
        return None
    if not isinstance(parsed, list):
        return None
    return [_element_text(e) for e in parsed if e is not None]


class PropertyValueParser:
    """
    Turn raw property cells into typed, rendered `PropertyValue`s.

    The multi-valued policy is resolved to a handler once, here; parsing a
    cell never compares policy names.
    """

    def __init__(
        self,
        policy: MultiValuedPolicy = MultiValuedNodePropertyPolicy.PUT_IN_SET_IGNORING_DUPLICATES,
        semicolon_replacement: str = " ",
        infer_types: bool = False,
        multi_value_separator: str = DEFAULT_MULTI_VALUE_SEPARATOR,
    ):
        if multi_value_separator and multi_value_separator in semicolon_replacement:
            raise ValueError(
                f"Replacement string cannot contain the multi-value separator {multi_value_separator!r}"
            )
        self.policy = policy
        self.semicolon_replacement = semicolon_replacement
        self.infer_types = infer_types
        self.multi_value_separator = multi_value_separator

        handlers: Dict[str, Callable[[str, List[str]], PropertyValue]] = {
            "LeaveAsString": self._leave_as_string,
            "Halt": self._halt,
            "PutInSetIgnoringDuplicates": self._put_in_set_ignoring_duplicates,
            "PutInSetButHaltIfDuplicates": self._put_in_set_but_halt_if_duplicates,
        }
        self._parse_list = handlers[policy.value]

        # a set column may turn multi-valued on any later row, so every value
        # it holds must already carry escaped separators
        self._escape_values = policy in _SET_POLICIES

    def parse(self, raw: Optional[str]) -> PropertyValue:
        """
        Parse one property cell.

        Args:
            raw (Optional[str]): Cell text as exported.

        Returns:
            PropertyValue: Parsed value, already rendered for output.

        Raises:
            MultiValuedPropertyError: list cell under the Halt policy.
            DuplicatePropertyValueError: repeated element under
                PutInSetButHaltIfDuplicates.
        """
        raw = "" if raw is None else raw
        elements = split_list_cell(raw)
        if elements is None:
            return self._scalar(raw, raw)
        return self._parse_list(raw, elements)

    # ------------------------------------------------------------------

    def _type_of(self, text: str) -> DataType:
        if self.infer_types:
            return classify(text)
        return DataType.NONE if text in NULL_LITERALS else DataType.STRING

    def _scalar(self, raw: str, text: str) -> PropertyValue:
        data_type = self._type_of(text)
        if self._escape_values:
            text = escape_separator(text, self.multi_value_separator)
        return PropertyValue(raw=raw, data_type=data_type, value=format_value(text, data_type))

    def _collection(self, raw: str, values: List[str]) -> PropertyValue:
        if not values:
            return self._scalar(raw, "")
        if len(values) == 1:
            return self._scalar(raw, values[0])
        data_type = widen_all(self._type_of(v) for v in values)
        rendered = format_multi_values(values, data_type, self.multi_value_separator)
        return PropertyValue(raw=raw, data_type=data_type, value=rendered, is_multi_valued=True)

    def _leave_as_string(self, raw: str, elements: List[str]) -> PropertyValue:
        text = raw
        if self.multi_value_separator:
            text = raw.replace(self.multi_value_separator, self.semicolon_replacement)
        return PropertyValue(
            raw=raw,
            data_type=DataType.STRING,
            value=format_value(text, DataType.STRING),
        )

    def _halt(self, raw: str, elements: List[str]) -> PropertyValue:
        if len(elements) > 1:
            raise MultiValuedPropertyError(raw, self.policy)
        return self._collection(raw, elements)

    def _put_in_set_ignoring_duplicates(self, raw: str, elements: List[str]) -> PropertyValue:
        return self._collection(raw, list(dict.fromkeys(elements)))

    def _put_in_set_but_halt_if_duplicates(self, raw: str, elements: List[str]) -> PropertyValue:
        unique = list(dict.fromkeys(elements))
        if len(unique) != len(elements):
            raise DuplicatePropertyValueError(raw, self.policy)
        return self._collection(raw, unique)
