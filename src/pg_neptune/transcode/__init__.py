"""
Row transcoders for the Neo4j -> Neptune conversion.

`VertexMetadata` and `EdgeMetadata` are built once from the export's header
row. They classify data rows, consult the record filter, and turn each kept
row into Neptune output fields while the column descriptors accumulate the
discovered schema (types and multi-valuedness).
"""

from pg_neptune.transcode.property_parser import (
    MultiValuedNodePropertyPolicy,
    MultiValuedRelationshipPropertyPolicy,
    PropertyValueParser,
    split_list_cell,
)
from pg_neptune.transcode.vertex_metadata import VertexMetadata
from pg_neptune.transcode.edge_metadata import EdgeMetadata

__all__ = [
    "MultiValuedNodePropertyPolicy",
    "MultiValuedRelationshipPropertyPolicy",
    "PropertyValueParser",
    "split_list_cell",
    "VertexMetadata",
    "EdgeMetadata",
]
