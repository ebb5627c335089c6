from __future__ import annotations

from typing import FrozenSet, Optional, Sequence, Set

from pg_neptune.rules.conversion_config import ConversionConfig, labels_of


class RecordFilter:
    """
    Decide which vertex and edge rows are excluded from the output.

    Besides the configured rules, the filter remembers every vertex id it has
    excluded; an edge touching one of those vertices is excluded as well.
    Vertex decisions must therefore be taken before the edges that reference
    them are evaluated. An edge seen before its endpoint vertex is kept.
    """

    def __init__(self, config: Optional[ConversionConfig] = None):
        config = config or ConversionConfig()
        self._skip_vertex_ids = config.skip_vertex_ids
        self._skip_vertex_labels = config.skip_vertex_labels
        self._skip_edge_labels = config.skip_edge_labels
        self._skipped_vertex_ids: Set[str] = set()

    def has_skip_rules(self) -> bool:
        return bool(self._skip_vertex_ids or self._skip_vertex_labels or self._skip_edge_labels)

    def has_vertex_skip_rules(self) -> bool:
        return bool(self._skip_vertex_ids or self._skip_vertex_labels)

    def should_skip_vertex(
        self,
        row: Sequence[str],
        id_index: int = 0,
        label_index: Optional[int] = 1,
    ) -> bool:
        """
        Check a vertex row against the id and label rules.

        A match records the vertex id so incident edges are skipped later.

        Args:
            row (Sequence[str]): Vertex row cells.
            id_index (int): Position of the `_id` column.
            label_index (Optional[int]): Position of the `_labels` column.

        Returns:
            bool: True if the row must not be written.
        """
        if not self.has_vertex_skip_rules():
            return False

        vertex_id = row[id_index]

        if vertex_id in self._skip_vertex_ids:
            self._skipped_vertex_ids.add(vertex_id)
            return True

        if self._skip_vertex_labels and label_index is not None and label_index < len(row):
            for label in labels_of(row[label_index]):
                if label in self._skip_vertex_labels:
                    self._skipped_vertex_ids.add(vertex_id)
                    return True

        return False

    def should_skip_edge(self, row: Sequence[str], layout) -> bool:
        """
        Check an edge row against skipped endpoints and edge-label rules.

        Args:
            row (Sequence[str]): Edge row cells.
            layout: Edge column plan exposing `first_column_index`, the
                position of `_start` (followed by `_end` and `_type`).

        Returns:
            bool: True if the row must not be written. Rows too short to
            hold the start/end/type triple are never skipped.
        """
        if not self.has_skip_rules():
            return False

        first = layout.first_column_index
        if first < 0 or len(row) <= first + 2:
            return False

        start_id, end_id, edge_type = row[first], row[first + 1], row[first + 2]

        if start_id in self._skipped_vertex_ids or end_id in self._skipped_vertex_ids:
            return True

        edge_type = edge_type.strip() if edge_type else ""
        return bool(edge_type) and edge_type in self._skip_edge_labels

    @property
    def skipped_vertex_ids(self) -> FrozenSet[str]:
        return frozenset(self._skipped_vertex_ids)

    def skip_statistics(self) -> str:
        if not self.has_skip_rules():
            return "No skip rules configured"

        parts = []
        if self._skip_vertex_ids:
            parts.append(f"{len(self._skip_vertex_ids)} vertex IDs")
        if self._skip_vertex_labels:
            parts.append(f"{len(self._skip_vertex_labels)} vertex labels")
        if self._skip_edge_labels:
            parts.append(f"{len(self._skip_edge_labels)} edge labels")
        return "Skip rules: " + ", ".join(parts)
