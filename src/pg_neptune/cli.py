from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from pg_neptune.errors import ConversionError
from pg_neptune.pipeline.convert_csv import ConvertConfig, run_convert_csv
from pg_neptune.rules.conversion_config import ConversionConfig
from pg_neptune.transcode.property_parser import (
    MultiValuedNodePropertyPolicy,
    MultiValuedRelationshipPropertyPolicy,
)


def _no_separator(value: str) -> str:
    if ";" in value:
        raise argparse.ArgumentTypeError("Replacement string cannot contain a semi-colon.")
    return value


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="pg-neptune-convert",
        description=(
            "Convert a CSV file exported from Neo4j via 'apoc.export.csv.all' "
            "into Neptune Gremlin load-format vertex and edge CSV files"
        ),
    )
    ap.add_argument("-i", "--input", required=True, help="Path to Neo4j CSV file")
    ap.add_argument("-d", "--dir", required=True, help="Root directory for output")
    ap.add_argument(
        "--node-property-policy",
        choices=[p.value for p in MultiValuedNodePropertyPolicy],
        default=None,
        help="Conversion policy for multi-valued node properties (default: PutInSetIgnoringDuplicates)",
    )
    ap.add_argument(
        "--relationship-property-policy",
        choices=[p.value for p in MultiValuedRelationshipPropertyPolicy],
        default=None,
        help="Conversion policy for multi-valued relationship properties (default: LeaveAsString)",
    )
    ap.add_argument(
        "--semi-colon-replacement",
        type=_no_separator,
        default=None,
        help="Replacement for semi-colon character in multi-value string properties (default: ' ')",
    )
    ap.add_argument("--infer-types", action="store_true", help="Infer data types for CSV column headings")
    ap.add_argument("--conversion-config", default=None, help="YAML file with label mappings and skip rules")
    ap.add_argument("--quiet", action="store_true", help="Only print the output directory")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = ConvertConfig.from_env(
            node_property_policy=(
                MultiValuedNodePropertyPolicy(args.node_property_policy) if args.node_property_policy else None
            ),
            relationship_property_policy=(
                MultiValuedRelationshipPropertyPolicy(args.relationship_property_policy)
                if args.relationship_property_policy
                else None
            ),
            semicolon_replacement=args.semi_colon_replacement,
            infer_types=True if args.infer_types else None,
            verbose=False if args.quiet else None,
        )
        conversion_config = ConversionConfig.from_file(args.conversion_config)
        result = run_convert_csv(args.input, args.dir, cfg, conversion_config)
    except ConversionError as e:
        print(f"An error occurred while running convert-csv: {e}", file=sys.stderr)
        return 1

    if result.output_directory is None:
        return 1
    print(result.output_directory)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
