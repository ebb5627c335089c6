from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from pg_neptune.errors import ConfigurationViolationError
from pg_neptune.io.formatting import format_token
from pg_neptune.rules.conversion_config import ConversionConfig
from pg_neptune.rules.label_mapper import LabelMapper
from pg_neptune.rules.record_filter import RecordFilter
from pg_neptune.schema.models import Headers, PropertyHeader, Token
from pg_neptune.transcode.property_parser import PropertyValueParser

EDGE_BLOCK_MARKER = "_start"


def cell_at(row: Sequence[str], index: int) -> str:
    return row[index] if index < len(row) else ""


class VertexMetadata:
    """
    Column plan and running schema for the vertex block of a Neo4j export.

    The vertex block is every column before `_start`. Rows are transcoded
    lazily; consuming a row's fields is what updates the property headers,
    so `headers()` is only final once every emitted row has been consumed.
    """

    @classmethod
    def parse(
        cls,
        header_row: Sequence[str],
        parser: PropertyValueParser,
        config: Optional[ConversionConfig] = None,
        record_filter: Optional[RecordFilter] = None,
    ) -> "VertexMetadata":
        headers = Headers()
        last_column_index = -1

        for name in header_row:
            if name.lower() == EDGE_BLOCK_MARKER:
                break
            last_column_index += 1

            if name == Token.ID.value:
                headers.add(Token.ID)
            elif name == Token.LABELS.value:
                headers.add(Token.LABELS)
            else:
                headers.add(PropertyHeader(name))

        return cls(headers, last_column_index, parser, config, record_filter)

    def __init__(
        self,
        headers: Headers,
        last_column_index: int,
        parser: PropertyValueParser,
        config: Optional[ConversionConfig] = None,
        record_filter: Optional[RecordFilter] = None,
    ):
        config = config or ConversionConfig()
        self._headers = headers
        self.last_column_index = last_column_index
        self._parser = parser
        self._label_mapper = LabelMapper(config)
        self.record_filter = record_filter or RecordFilter(config)

        id_index = headers.index_of(Token.ID)
        label_index = headers.index_of(Token.LABELS)
        self._id_index = id_index if id_index >= 0 else 0
        self._label_index = label_index if label_index >= 0 else None

    def headers(self) -> List[str]:
        return self._headers.values()

    def is_vertex(self, row: Sequence[str]) -> bool:
        return bool(row) and row[0] != ""

    def to_fields(self, row: Sequence[str], row_number: Optional[int] = None) -> Optional[Iterator[str]]:
        """
        Transcode a vertex row.

        Args:
            row (Sequence[str]): Data row cells.
            row_number (Optional[int]): Input position, used in error messages.

        Returns:
            Optional[Iterator[str]]: Rendered output fields, or None when the
            record filter excludes the row.
        """
        if self.record_filter.should_skip_vertex(row, self._id_index, self._label_index):
            return None
        return self._iter_fields(row, row_number)

    def _iter_fields(self, row: Sequence[str], row_number: Optional[int]) -> Iterator[str]:
        for index in range(self.last_column_index + 1):
            header = self._headers[index]
            cell = cell_at(row, index)

            if header is Token.LABELS:
                yield format_token(self._label_mapper.map_vertex_labels(cell))
            elif header is Token.ID:
                yield format_token(cell)
            else:
                try:
                    value = self._parser.parse(cell)
                except ConfigurationViolationError as err:
                    raise err.at(header.name, row_number) from err
                header.observe(value)
                yield value.value
