"""
I/O utilities for reading Neo4j exports and writing Neptune load files.

This package provides:
- Streaming, chunked reading of the Neo4j CSV export (pandas backed)
- The output formatter for Neptune cells and records (quoting, multi-value
  joining and separator escaping)
- An output sink that streams body rows and writes the discovered header
  once the input is exhausted

Notes:
- `__all__` defines the supported public surface; anything not listed should
  be treated as internal.
"""

from pg_neptune.io.csv_tools import iter_records
from pg_neptune.io.formatting import (
    DEFAULT_MULTI_VALUE_SEPARATOR,
    escape_separator,
    format_multi_values,
    format_token,
    format_record,
)
from pg_neptune.io.output import OutputFile, create_output_directory

__all__ = [
    "iter_records",
    "DEFAULT_MULTI_VALUE_SEPARATOR",
    "escape_separator",
    "format_multi_values",
    "format_token",
    "format_record",
    "OutputFile",
    "create_output_directory",
]
