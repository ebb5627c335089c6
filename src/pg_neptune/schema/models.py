from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple, Union

from pg_neptune.schema.datatypes import DataType, widen


class Token(Enum):
    """
    Structural (non-property) columns of a Neo4j export and the Neptune
    heading each one is written under.
    """

    ID = "_id"
    LABELS = "_labels"
    EDGE_ID = "~id"
    START = "_start"
    END = "_end"
    TYPE = "_type"

    @property
    def heading(self) -> str:
        return _TOKEN_HEADINGS[self]


_TOKEN_HEADINGS = {
    Token.ID: "~id",
    Token.LABELS: "~label",
    Token.EDGE_ID: "~id",
    Token.START: "~from",
    Token.END: "~to",
    Token.TYPE: "~label",
}


@dataclass(frozen=True)
class PropertyValue:
    """
    One parsed property cell.

    Attributes:
        raw: Cell text exactly as read from the export.
        data_type: Type of the cell (widened across elements for lists).
        value: Text to write into the Neptune CSV, already quoted/escaped.
        is_multi_valued: True when the cell produced more than one value.
    """

    raw: str
    data_type: DataType
    value: str
    is_multi_valued: bool = False


@dataclass
class PropertyHeader:
    """
    Running schema of one property column.

    Mutated as rows stream past; the type only ever widens and the
    multi-valued flag, once set, stays set.
    """

    name: str
    data_type: DataType = DataType.NONE
    is_multi_valued: bool = False

    def observe(self, value: PropertyValue) -> None:
        if value.is_multi_valued:
            self.is_multi_valued = True
        self.data_type = widen(self.data_type, value.data_type)

    @property
    def heading(self) -> str:
        if self.data_type is DataType.NONE and not self.is_multi_valued:
            return self.name
        suffix = "[]" if self.is_multi_valued else ""
        return f"{self.name}:{self.data_type.type_name}{suffix}"


Header = Union[Token, PropertyHeader]


class Headers:
    """Column descriptors addressed by position; order is fixed at parse time."""

    def __init__(self) -> None:
        self._headers: List[Header] = []

    def add(self, header: Header) -> None:
        self._headers.append(header)

    def __getitem__(self, index: int) -> Header:
        return self._headers[index]

    def __len__(self) -> int:
        return len(self._headers)

    def __iter__(self) -> Iterator[Header]:
        return iter(self._headers)

    def index_of(self, token: Token) -> int:
        for i, h in enumerate(self._headers):
            if h is token:
                return i
        return -1

    def properties(self) -> Tuple[PropertyHeader, ...]:
        return tuple(h for h in self._headers if isinstance(h, PropertyHeader))

    def values(self) -> List[str]:
        return [h.heading for h in self._headers]
