"""Cypher tool specs and handlers: read and write queries, schema inspection, GDS procedure listing."""

__version__ = "0.1.0"
__all__ = ["types", "params", "schema", "cypher", "gds"]