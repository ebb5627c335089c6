from __future__ import annotations

import itertools
from typing import Iterator, List, Optional, Sequence

from pg_neptune.errors import ConfigurationViolationError
from pg_neptune.io.formatting import format_token
from pg_neptune.rules.conversion_config import ConversionConfig
from pg_neptune.rules.label_mapper import LabelMapper
from pg_neptune.rules.record_filter import RecordFilter
from pg_neptune.schema.models import Headers, PropertyHeader, Token
from pg_neptune.transcode.property_parser import PropertyValueParser
from pg_neptune.transcode.vertex_metadata import EDGE_BLOCK_MARKER, cell_at

DEFAULT_EDGE_ID_PREFIX = "e"

_EDGE_TOKENS = {
    Token.START.value: Token.START,
    Token.END.value: Token.END,
    Token.TYPE.value: Token.TYPE,
}


class EdgeMetadata:
    """
    Column plan and running schema for the edge block of a Neo4j export.

    The edge block starts at `_start` and runs to the last header column.
    Neo4j relationships carry no id of their own, so every written edge gets
    a generated `~id` as its first output field.
    """

    @classmethod
    def parse(
        cls,
        header_row: Sequence[str],
        parser: PropertyValueParser,
        config: Optional[ConversionConfig] = None,
        record_filter: Optional[RecordFilter] = None,
        id_prefix: str = DEFAULT_EDGE_ID_PREFIX,
    ) -> "EdgeMetadata":
        headers = Headers()
        headers.add(Token.EDGE_ID)
        first_column_index = -1

        for index, name in enumerate(header_row):
            if first_column_index < 0:
                if name.lower() != EDGE_BLOCK_MARKER:
                    continue
                first_column_index = index

            token = _EDGE_TOKENS.get(name.lower())
            headers.add(token if token is not None else PropertyHeader(name))

        last_column_index = len(header_row) - 1 if first_column_index >= 0 else -1
        return cls(headers, first_column_index, last_column_index, parser, config, record_filter, id_prefix)

    def __init__(
        self,
        headers: Headers,
        first_column_index: int,
        last_column_index: int,
        parser: PropertyValueParser,
        config: Optional[ConversionConfig] = None,
        record_filter: Optional[RecordFilter] = None,
        id_prefix: str = DEFAULT_EDGE_ID_PREFIX,
    ):
        config = config or ConversionConfig()
        self._headers = headers
        self.first_column_index = first_column_index
        self.last_column_index = last_column_index
        self._parser = parser
        self._label_mapper = LabelMapper(config)
        self.record_filter = record_filter or RecordFilter(config)
        self._id_prefix = id_prefix
        self._ids = itertools.count()

    def headers(self) -> List[str]:
        return self._headers.values()

    def is_edge(self, row: Sequence[str]) -> bool:
        first = self.first_column_index
        return first >= 0 and len(row) > first and row[first] != ""

    def to_fields(self, row: Sequence[str], row_number: Optional[int] = None) -> Optional[Iterator[str]]:
        """
        Transcode an edge row.

        Args:
            row (Sequence[str]): Data row cells.
            row_number (Optional[int]): Input position, used in error messages.

        Returns:
            Optional[Iterator[str]]: Rendered output fields (generated id
            first), or None when the record filter excludes the row.
        """
        if self.record_filter.should_skip_edge(row, self):
            return None
        edge_id = f"{self._id_prefix}{next(self._ids)}"
        return self._iter_fields(edge_id, row, row_number)

    def _iter_fields(self, edge_id: str, row: Sequence[str], row_number: Optional[int]) -> Iterator[str]:
        yield format_token(edge_id)

        # headers[0] is the generated id, so column i maps to headers[i - first + 1]
        offset = 1 - self.first_column_index
        for index in range(self.first_column_index, self.last_column_index + 1):
            header = self._headers[index + offset]
            cell = cell_at(row, index)

            if header is Token.TYPE:
                yield format_token(self._label_mapper.map_edge_label(cell))
            elif isinstance(header, Token):
                yield format_token(cell)
            else:
                try:
                    value = self._parser.parse(cell)
                except ConfigurationViolationError as err:
                    raise err.at(header.name, row_number) from err
                header.observe(value)
                yield value.value
