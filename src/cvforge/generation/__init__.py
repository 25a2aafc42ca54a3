"""CV generation: the façade over normalization, context and backends."""

from cvforge.generation.pipeline import CVGenerator

__all__ = [
    "CVGenerator",
]
