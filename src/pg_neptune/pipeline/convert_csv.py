from __future__ import annotations

import os
import shutil
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Iterator, List, NamedTuple, Optional, Sequence

from dotenv import load_dotenv

from pg_neptune.errors import ConfigurationError, UnparseableRecordError
from pg_neptune.io.csv_tools import DEFAULT_CHUNKSIZE, iter_records
from pg_neptune.io.formatting import DEFAULT_MULTI_VALUE_SEPARATOR
from pg_neptune.io.output import OutputFile, create_output_directory
from pg_neptune.rules.conversion_config import ConversionConfig
from pg_neptune.rules.record_filter import RecordFilter
from pg_neptune.transcode.edge_metadata import DEFAULT_EDGE_ID_PREFIX, EdgeMetadata
from pg_neptune.transcode.property_parser import (
    MultiValuedNodePropertyPolicy,
    MultiValuedRelationshipPropertyPolicy,
    PropertyValueParser,
)
from pg_neptune.transcode.vertex_metadata import VertexMetadata

VERTEX = "vertex"
EDGE = "edge"


@dataclass
class ConvertConfig:
    """
    Configuration container for a Neo4j CSV conversion.

    This dataclass holds every tunable parameter of the conversion engine
    and of the file-based pipeline around it.
    """

    # property parsing
    node_property_policy: MultiValuedNodePropertyPolicy = (
        MultiValuedNodePropertyPolicy.PUT_IN_SET_IGNORING_DUPLICATES
    )
    relationship_property_policy: MultiValuedRelationshipPropertyPolicy = (
        MultiValuedRelationshipPropertyPolicy.LEAVE_AS_STRING
    )
    semicolon_replacement: str = " "
    infer_types: bool = False

    # output
    edge_id_prefix: str = DEFAULT_EDGE_ID_PREFIX

    # reading
    delimiter: str = ","
    chunksize: int = DEFAULT_CHUNKSIZE

    # logging
    verbose: bool = True

    @classmethod
    def from_env(cls, **overrides) -> "ConvertConfig":
        """
        Build a config from environment variables (a `.env` file is honoured).

        Recognised variables: NEPTUNE_NODE_PROPERTY_POLICY,
        NEPTUNE_RELATIONSHIP_PROPERTY_POLICY, NEPTUNE_SEMICOLON_REPLACEMENT,
        NEPTUNE_INFER_TYPES, NEPTUNE_CSV_CHUNKSIZE. Keyword overrides win.

        Raises:
            ConfigurationError: a variable holds an unusable value.
        """
        load_dotenv()
        cfg = cls()

        node_policy = os.getenv("NEPTUNE_NODE_PROPERTY_POLICY")
        if node_policy:
            cfg.node_property_policy = _env_enum(
                "NEPTUNE_NODE_PROPERTY_POLICY", node_policy, MultiValuedNodePropertyPolicy
            )
        rel_policy = os.getenv("NEPTUNE_RELATIONSHIP_PROPERTY_POLICY")
        if rel_policy:
            cfg.relationship_property_policy = _env_enum(
                "NEPTUNE_RELATIONSHIP_PROPERTY_POLICY", rel_policy, MultiValuedRelationshipPropertyPolicy
            )
        replacement = os.getenv("NEPTUNE_SEMICOLON_REPLACEMENT")
        if replacement is not None:
            if DEFAULT_MULTI_VALUE_SEPARATOR in replacement:
                raise ConfigurationError(
                    f"NEPTUNE_SEMICOLON_REPLACEMENT cannot contain {DEFAULT_MULTI_VALUE_SEPARATOR!r}"
                )
            cfg.semicolon_replacement = replacement
        infer = os.getenv("NEPTUNE_INFER_TYPES")
        if infer:
            cfg.infer_types = infer.strip().lower() in ("1", "true", "yes", "on")
        chunksize = os.getenv("NEPTUNE_CSV_CHUNKSIZE")
        if chunksize:
            try:
                cfg.chunksize = int(chunksize)
            except ValueError as e:
                raise ConfigurationError(f"NEPTUNE_CSV_CHUNKSIZE must be an integer, got {chunksize!r}") from e
            if cfg.chunksize < 1:
                raise ConfigurationError(f"NEPTUNE_CSV_CHUNKSIZE must be positive, got {chunksize!r}")

        for k, v in overrides.items():
            if v is not None:
                setattr(cfg, k, v)
        return cfg


def _env_enum(name: str, value: str, enum_cls):
    try:
        return enum_cls(value)
    except ValueError as e:
        choices = ", ".join(p.value for p in enum_cls)
        raise ConfigurationError(f"{name}={value!r} is not one of: {choices}") from e


# ============================================================
# Logging helper
# ============================================================

def _p(verbose: bool, *args, **kwargs):
    """Conditional print helper for verbose logging."""
    if verbose:
        print(*args, **kwargs)


# ============================================================
# Row-level engine
# ============================================================

@dataclass
class ConversionStats:
    vertices: int = 0
    edges: int = 0
    skipped_vertices: int = 0
    skipped_edges: int = 0


class ConvertedRow(NamedTuple):
    """One input data row after transcoding; `fields` is None when skipped."""

    kind: str
    row_number: int
    fields: Optional[Iterator[str]]

    @property
    def skipped(self) -> bool:
        return self.fields is None


class CsvConverter:
    """
    Single-pass Neo4j export -> Neptune transcoder.

    Built from the header row. `rows()` streams converted data rows; once
    the input (and every emitted row's fields) has been consumed,
    `vertex_headers()` and `edge_headers()` return the discovered schema.
    Vertex and edge transcoders share one record filter so vertex skips
    propagate to incident edges.
    """

    def __init__(
        self,
        header_row: Sequence[str],
        config: Optional[ConvertConfig] = None,
        conversion_config: Optional[ConversionConfig] = None,
    ):
        cfg = config or ConvertConfig()
        conversion_config = conversion_config or ConversionConfig()

        try:
            node_parser = PropertyValueParser(cfg.node_property_policy, cfg.semicolon_replacement, cfg.infer_types)
            edge_parser = PropertyValueParser(
                cfg.relationship_property_policy, cfg.semicolon_replacement, cfg.infer_types
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        self.record_filter = RecordFilter(conversion_config)
        self.vertex_metadata = VertexMetadata.parse(
            header_row,
            node_parser,
            conversion_config,
            self.record_filter,
        )
        self.edge_metadata = EdgeMetadata.parse(
            header_row,
            edge_parser,
            conversion_config,
            self.record_filter,
            id_prefix=cfg.edge_id_prefix,
        )
        self.stats = ConversionStats()

    def convert(self, row: Sequence[str], row_number: int) -> ConvertedRow:
        """
        Classify and transcode one data row.

        Raises:
            UnparseableRecordError: the row is neither a vertex nor an edge.
        """
        if self.vertex_metadata.is_vertex(row):
            fields = self.vertex_metadata.to_fields(row, row_number)
            if fields is None:
                self.stats.skipped_vertices += 1
            else:
                self.stats.vertices += 1
            return ConvertedRow(VERTEX, row_number, fields)

        if self.edge_metadata.is_edge(row):
            fields = self.edge_metadata.to_fields(row, row_number)
            if fields is None:
                self.stats.skipped_edges += 1
            else:
                self.stats.edges += 1
            return ConvertedRow(EDGE, row_number, fields)

        raise UnparseableRecordError(row_number, row)

    def rows(self, records: Iterable[Sequence[str]], first_row_number: int = 2) -> Iterator[ConvertedRow]:
        for row_number, row in enumerate(records, start=first_row_number):
            yield self.convert(row, row_number)

    def vertex_headers(self) -> List[str]:
        return self.vertex_metadata.headers()

    def edge_headers(self) -> List[str]:
        return self.edge_metadata.headers()

    @property
    def skipped_vertex_ids(self) -> FrozenSet[str]:
        return self.record_filter.skipped_vertex_ids


# ============================================================
# File pipeline
# ============================================================

@dataclass
class ConversionResult:
    output_directory: Optional[str]
    stats: ConversionStats = field(default_factory=ConversionStats)
    skipped_vertex_ids: FrozenSet[str] = frozenset()


def run_convert_csv(
    input_file: str,
    output_root: str,
    config: Optional[ConvertConfig] = None,
    conversion_config: Optional[ConversionConfig] = None,
) -> ConversionResult:
    """
    Convert a Neo4j `apoc.export.csv.all` file into Neptune load files.

    Writes `vertices.csv` and `edges.csv` into a new timestamped folder
    under `output_root`. Bodies are streamed while the input is read; each
    file's header is written last, once the column types are known.

    Args:
        input_file (str): Path to the Neo4j CSV export.
        output_root (str): Directory under which the run folder is created.
        config (Optional[ConvertConfig]): Conversion configuration.
        conversion_config (Optional[ConversionConfig]): Label/skip rules.

    Returns:
        ConversionResult: Output folder, counters and skipped vertex ids.
        The output folder is None when the input has no header row.
    """
    cfg = config or ConvertConfig()
    conversion_config = conversion_config or ConversionConfig()

    records = iter_records(input_file, delimiter=cfg.delimiter, chunksize=cfg.chunksize)
    header_row = next(records, None)
    if header_row is None:
        _p(cfg.verbose, f" Error: '{input_file}' is empty, nothing to convert.")
        return ConversionResult(output_directory=None)

    converter = CsvConverter(header_row, cfg, conversion_config)
    _p(cfg.verbose, f"--- Converting Neo4j export: {input_file} ---")
    _p(cfg.verbose, f"   {converter.record_filter.skip_statistics()}")

    output_directory = create_output_directory(output_root)

    try:
        with OutputFile(output_directory, "vertices") as vertex_file, OutputFile(output_directory, "edges") as edge_file:
            for converted in converter.rows(records):
                if converted.kind == VERTEX:
                    vertex_file.print_record(converted.fields)
                else:
                    edge_file.print_record(converted.fields)

            vertex_file.print_headers(converter.vertex_headers())
            edge_file.print_headers(converter.edge_headers())
    except Exception:
        # an aborted run leaves no partial output behind
        shutil.rmtree(output_directory, ignore_errors=True)
        raise

    stats = converter.stats
    _p(cfg.verbose, f"Vertices: {stats.vertices}")
    _p(cfg.verbose, f"Edges   : {stats.edges}")
    if converter.record_filter.has_skip_rules():
        _p(cfg.verbose, f"Skipped vertices: {stats.skipped_vertices}")
        _p(cfg.verbose, f"Skipped edges   : {stats.skipped_edges}")
        _p(cfg.verbose, f"Distinct skipped vertex ids: {len(converter.skipped_vertex_ids)}")
    _p(cfg.verbose, f"Output  : {output_directory}")

    return ConversionResult(
        output_directory=output_directory,
        stats=stats,
        skipped_vertex_ids=converter.skipped_vertex_ids,
    )
