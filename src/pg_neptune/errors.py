from __future__ import annotations

from typing import Any, Optional, Sequence


class ConversionError(Exception):
    """Base class for every fatal condition raised during a conversion run."""


class ConfigurationError(ConversionError):
    """Raised when a conversion-config document has an unusable shape."""


class ConfigurationViolationError(ConversionError):
    """
    A property cell broke the configured multi-valued property policy.

    The parser raises these without knowing where the cell came from; the
    vertex/edge transcoders re-raise them through `at()` so the message
    names the column and the input row.
    """

    reason = "multi-valued property policy violated"

    def __init__(
        self,
        value: str,
        policy: Any,
        column: Optional[str] = None,
        row_number: Optional[int] = None,
    ):
        self.value = value
        self.policy = policy
        self.column = column
        self.row_number = row_number
        super().__init__(self._message())

    def _message(self) -> str:
        policy_name = getattr(self.policy, "value", self.policy)
        parts = [f"{self.reason} (policy={policy_name})"]
        if self.row_number is not None:
            parts.append(f"row {self.row_number}")
        if self.column is not None:
            parts.append(f"column '{self.column}'")
        parts.append(f"value {self.value!r}")
        return ", ".join(parts)

    def at(self, column: str, row_number: Optional[int]) -> "ConfigurationViolationError":
        return type(self)(self.value, self.policy, column=column, row_number=row_number)


class MultiValuedPropertyError(ConfigurationViolationError):
    reason = "multi-valued property found"


class DuplicatePropertyValueError(ConfigurationViolationError):
    reason = "duplicate value in multi-valued property"


class UnparseableRecordError(ConversionError):
    """Raised for a data row that is neither a vertex nor an edge row."""

    def __init__(self, row_number: Optional[int], row: Sequence[str]):
        self.row_number = row_number
        self.row = list(row)
        where = f"row {row_number}" if row_number is not None else "row"
        super().__init__(f"Unable to parse {where}: {self.row!r}")


class MalformedCsvError(ConversionError):
    """Raised when the export cannot be tokenized, e.g. a row with more fields than the header."""

    def __init__(self, file_path: str, detail: str):
        self.file_path = file_path
        self.detail = detail
        super().__init__(f"Malformed CSV in {file_path}: {detail}")
