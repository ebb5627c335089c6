from __future__ import annotations

from typing import Any, Iterator, List

import pandas as pd

from pg_neptune.errors import MalformedCsvError

DEFAULT_CHUNKSIZE = 100_000


def _cell(v: Any) -> str:
    # short rows are padded by pandas with NaN
    if v is None:
        return ""
    if isinstance(v, float) and pd.isna(v):
        return ""
    return str(v)


def iter_records(
    file_path: str,
    delimiter: str = ",",
    chunksize: int = DEFAULT_CHUNKSIZE,
) -> Iterator[List[str]]:
    """
    Stream the rows of a Neo4j CSV export, header row first.

    The export is read in chunks so arbitrarily large files never have to
    be materialized. Every cell is returned as the exact text found in the
    file: no type coercion, no NA detection, so an empty cell stays "" and
    the literal "null" stays "null".

    Args:
        file_path (str): Path to the CSV file.
        delimiter (str): Column delimiter.
        chunksize (int): Number of rows per chunk.

    Returns:
        Iterator[List[str]]: One list of cell strings per input row.

    Raises:
        MalformedCsvError: a row cannot be tokenized against the header.
    """
    try:
        reader = pd.read_csv(
            file_path,
            header=None,
            chunksize=chunksize,
            sep=delimiter,
            engine="python",
            quotechar='"',
            doublequote=True,
            dtype=str,
            na_filter=False,
            skip_blank_lines=True,
            encoding="utf-8-sig",
        )
    except pd.errors.EmptyDataError:
        return
    except pd.errors.ParserError as e:
        raise MalformedCsvError(file_path, str(e)) from e

    try:
        for chunk in reader:
            for row in chunk.itertuples(index=False, name=None):
                yield [_cell(v) for v in row]
    except pd.errors.ParserError as e:
        raise MalformedCsvError(file_path, str(e)) from e
