"""
Neo4j -> Amazon Neptune CSV conversion.

Reads the flat CSV produced by Neo4j's `apoc.export.csv.all`, discovers
column types and multi-valued properties in a single pass, applies label
mappings and skip rules, and writes Neptune Gremlin load-format CSV.

Sub-packages:
- schema: type engine and column descriptors
- io: CSV reading, output formatting and output files
- rules: conversion config, label mapping, record filtering
- transcode: property parsing and the vertex/edge transcoders
- pipeline: end-to-end conversion (imported explicitly)
"""

__version__ = "0.1.0"
