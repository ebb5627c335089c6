from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, FrozenSet, Iterable, Mapping, Optional

import yaml

from pg_neptune.errors import ConfigurationError


def _first(d: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in d:
            return d[k]
    return None


def _as_label_map(obj: Any) -> Mapping[str, str]:
    if not isinstance(obj, Mapping):
        return {}
    return {str(k): str(v) for k, v in obj.items() if v is not None}


def _as_str_set(obj: Any) -> FrozenSet[str]:
    # YAML happily yields ints for numeric ids; ids are compared as text
    if not isinstance(obj, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(str(v) for v in obj if v is not None)


@dataclass(frozen=True)
class ConversionConfig:
    """
    Label remapping and record-skipping rules for one conversion run.

    An empty config (the default) makes every mapping and filtering step an
    identity pass-through.

    Expected YAML format (camelCase keys are accepted as well):

        vertex_labels:
          OldVertexLabel: NewVertexLabel
        edge_labels:
          OLD_EDGE_TYPE: NEW_EDGE_TYPE
        skip_vertices:
          by_id: ["vertex_id_1", 42]
          by_label: [LabelToSkip]
        skip_edges:
          by_label: [RELATIONSHIP_TYPE_TO_SKIP]
    """

    vertex_labels: Mapping[str, str] = field(default_factory=dict)
    edge_labels: Mapping[str, str] = field(default_factory=dict)
    skip_vertex_ids: FrozenSet[str] = frozenset()
    skip_vertex_labels: FrozenSet[str] = frozenset()
    skip_edge_labels: FrozenSet[str] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertex_labels", MappingProxyType(dict(self.vertex_labels)))
        object.__setattr__(self, "edge_labels", MappingProxyType(dict(self.edge_labels)))
        object.__setattr__(self, "skip_vertex_ids", frozenset(self.skip_vertex_ids))
        object.__setattr__(self, "skip_vertex_labels", frozenset(self.skip_vertex_labels))
        object.__setattr__(self, "skip_edge_labels", frozenset(self.skip_edge_labels))

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "ConversionConfig":
        """
        Build a config from an already-parsed document.

        Sections with an unexpected shape are ignored.
        """
        if data is None:
            return cls()
        if not isinstance(data, Mapping):
            raise ConfigurationError(
                f"Conversion config must be a mapping, got {type(data).__name__}"
            )

        skip_vertices = _first(data, "skip_vertices", "skipVertices")
        if not isinstance(skip_vertices, Mapping):
            skip_vertices = {}
        skip_edges = _first(data, "skip_edges", "skipEdges")
        if not isinstance(skip_edges, Mapping):
            skip_edges = {}

        return cls(
            vertex_labels=_as_label_map(_first(data, "vertex_labels", "vertexLabels")),
            edge_labels=_as_label_map(_first(data, "edge_labels", "edgeLabels")),
            skip_vertex_ids=_as_str_set(_first(skip_vertices, "by_id", "byId")),
            skip_vertex_labels=_as_str_set(_first(skip_vertices, "by_label", "byLabel")),
            skip_edge_labels=_as_str_set(_first(skip_edges, "by_label", "byLabel")),
        )

    @classmethod
    def from_file(cls, path: Optional[str]) -> "ConversionConfig":
        """
        Load a YAML conversion config.

        Args:
            path (Optional[str]): Path to the YAML file. `None` or a path
                that does not exist yields an empty config.

        Returns:
            ConversionConfig: Parsed configuration.
        """
        if not path or not os.path.exists(path):
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid conversion config {path}: {e}") from e
        return cls.from_dict(data)

    def has_vertex_mappings(self) -> bool:
        return bool(self.vertex_labels)

    def has_edge_mappings(self) -> bool:
        return bool(self.edge_labels)

    def has_vertex_skip_rules(self) -> bool:
        return bool(self.skip_vertex_ids or self.skip_vertex_labels)

    def has_skip_rules(self) -> bool:
        return self.has_vertex_skip_rules() or bool(self.skip_edge_labels)


def labels_of(raw: Optional[str]) -> Iterable[str]:
    """Split a Neo4j `_labels` cell (":A:B") into trimmed, non-empty labels."""
    if not raw:
        return ()
    return [s.strip() for s in raw.split(":") if s.strip()]
