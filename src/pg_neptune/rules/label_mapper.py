from __future__ import annotations

from typing import Optional

from pg_neptune.rules.conversion_config import ConversionConfig, labels_of

NEPTUNE_LABEL_SEPARATOR = ";"


class LabelMapper:
    """Rewrite vertex labels and edge types using the configured dictionaries."""

    def __init__(self, config: Optional[ConversionConfig] = None):
        config = config or ConversionConfig()
        self._vertex_labels = config.vertex_labels
        self._edge_labels = config.edge_labels

    def map_vertex_labels(self, raw: Optional[str]) -> Optional[str]:
        """
        Map a colon-separated Neo4j label list to Neptune's `;` form.

        Each label is looked up independently and kept as-is when no
        mapping exists. Empty segments from leading, trailing or doubled
        colons are dropped. Null and blank input are returned unchanged.

        Args:
            raw (Optional[str]): Labels as exported, e.g. ":Person:Company".

        Returns:
            Optional[str]: Mapped labels, e.g. "Individual;Organization".
        """
        if raw is None or not raw.strip():
            return raw
        return NEPTUNE_LABEL_SEPARATOR.join(
            self._vertex_labels.get(label, label) for label in labels_of(raw)
        )

    def map_edge_label(self, raw: Optional[str]) -> Optional[str]:
        if raw is None or not raw.strip():
            return raw
        label = raw.strip()
        return self._edge_labels.get(label, label)

    def has_vertex_mappings(self) -> bool:
        return bool(self._vertex_labels)

    def has_edge_mappings(self) -> bool:
        return bool(self._edge_labels)
