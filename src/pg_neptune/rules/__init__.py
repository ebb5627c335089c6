"""
Label remapping and record filtering rules.

These components are driven by a single, read-only `ConversionConfig`
loaded once per run. With no config every rule is a no-op.
"""

from pg_neptune.rules.conversion_config import ConversionConfig, labels_of
from pg_neptune.rules.label_mapper import LabelMapper
from pg_neptune.rules.record_filter import RecordFilter

__all__ = [
    "ConversionConfig",
    "labels_of",
    "LabelMapper",
    "RecordFilter",
]
