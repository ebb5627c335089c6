"""
Pipeline orchestration for the Neo4j -> Neptune conversion.

Pipeline stages are intentionally not imported at package level; import
`pg_neptune.pipeline.convert_csv` explicitly.
"""

__all__ = []
