"""The get-schema tool: reduce the database's meta schema to a compact, token-aware form."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from cyphertools.types import (
    CallToolRequest,
    Record,
    ToolAnnotations,
    ToolDependencies,
    ToolResult,
    ToolSpec,
    error_result,
    text_result,
)

logger = logging.getLogger(__name__)

SCHEMA_QUERY = """
        CALL apoc.meta.schema({sample: $sampleSize})
        YIELD value
        UNWIND keys(value) as key
        WITH key, value[key] as value
        RETURN key, value { .properties, .type, .relationships } as value
    """

EMPTY_SCHEMA_MESSAGE = (
    "The get-schema tool executed successfully; however, since the Neo4j instance "
    "contains no data, no schema information was returned."
)


class SchemaError(ValueError):
    """Raised when the meta schema returned by the database has an unexpected shape."""


@dataclass
class Relationship:
    """A relationship seen from a node: its direction, target labels and property types."""

    direction: str
    labels: list[str] = field(default_factory=list)
    properties: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "direction": self.direction,
            "labels": list(self.labels) if self.labels else None,
        }
        if self.properties:
            result["properties"] = dict(sorted(self.properties.items()))
        return result


@dataclass
class SchemaDetail:
    """Kind of a schema entry with its property types and relationships."""

    type: str
    properties: dict[str, str] = field(default_factory=dict)
    relationships: dict[str, Relationship] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"type": self.type}
        if self.properties:
            result["properties"] = dict(sorted(self.properties.items()))
        if self.relationships:
            result["relationships"] = {
                name: rel.to_dict() for name, rel in sorted(self.relationships.items())
            }
        return result


@dataclass
class SchemaItem:
    """One entry of the simplified schema: a node label or relationship type."""

    key: str
    value: SchemaDetail

    def to_dict(self) -> dict[str, Any]:
        return {"key": self.key, "value": self.value.to_dict()}


def simplify_properties(raw_props: Any) -> dict[str, str]:
    """Keep only the type name of each property.

    Entries that are not mappings are skipped; a mapping without a string
    ``type`` or a ``raw_props`` that is not a mapping raises SchemaError.
    """
    if not isinstance(raw_props, dict):
        raise SchemaError("invalid properties returned")
    clean: dict[str, str] = {}
    for name, details in raw_props.items():
        if not isinstance(details, dict):
            continue
        type_name = details.get("type")
        if not isinstance(type_name, str):
            raise SchemaError("invalid properties returned")
        clean[name] = type_name
    return clean


def _simplify_relationship(details: Any) -> Relationship:
    if not isinstance(details, dict):
        raise SchemaError("invalid relationship returned")
    direction = details.get("direction")
    if not isinstance(direction, str):
        raise SchemaError("invalid direction returned")
    raw_labels = details.get("labels")
    if not isinstance(raw_labels, (list, tuple)):
        raise SchemaError("invalid relationship labels returned")
    labels = [label for label in raw_labels if isinstance(label, str)]
    try:
        properties = simplify_properties(details.get("properties"))
    except SchemaError:
        raise SchemaError("invalid relationship properties returned") from None
    return Relationship(direction=direction, labels=labels, properties=properties)


def _process_record(record: Record) -> SchemaItem:
    try:
        key = record.get("key")
    except KeyError:
        raise SchemaError("missing 'key' column in record") from None
    if not isinstance(key, str):
        raise SchemaError("invalid key returned")
    try:
        data = record.get("value")
    except KeyError:
        raise SchemaError("missing 'value' column in record") from None
    if not isinstance(data, dict):
        raise SchemaError("invalid value returned")

    item_type = data.get("type")
    if not isinstance(item_type, str):
        raise SchemaError("invalid type returned")

    properties = simplify_properties(data.get("properties"))

    relationships: dict[str, Relationship] = {}
    raw_rels = data.get("relationships")
    if isinstance(raw_rels, dict):
        relationships = {
            name: _simplify_relationship(details) for name, details in raw_rels.items()
        }

    return SchemaItem(
        key=key,
        value=SchemaDetail(
            type=item_type, properties=properties, relationships=relationships
        ),
    )


def process_cypher_schema(records: Sequence[Record]) -> list[SchemaItem]:
    """Turn meta schema records into simplified schema items, in record order."""
    return [_process_record(record) for record in records]


def get_schema_handler(
    deps: ToolDependencies, schema_sample_size: int
) -> Callable[..., ToolResult]:
    """Return the handler of the get-schema tool."""

    def handle(request: Optional[CallToolRequest] = None) -> ToolResult:
        return _handle_get_schema(deps, schema_sample_size)

    return handle


def _handle_get_schema(deps: ToolDependencies, schema_sample_size: int) -> ToolResult:
    if deps.db_service is None:
        message = "database service is not initialized"
        logger.error(message)
        return error_result(message)

    logger.info("retrieving schema from the database")
    try:
        records = deps.db_service.execute_read_query(
            SCHEMA_QUERY, {"sampleSize": schema_sample_size}
        )
    except Exception as exc:
        logger.error("failed to execute schema query: %s", exc)
        return error_result(str(exc))

    if not records:
        logger.warning("schema is empty, no data in the database")
        return text_result(EMPTY_SCHEMA_MESSAGE)

    try:
        items = process_cypher_schema(records)
    except SchemaError as exc:
        logger.error("failed to process get-schema Cypher query: %s", exc)
        return error_result(str(exc))

    try:
        payload = json.dumps(
            [item.to_dict() for item in items],
            separators=(",", ":"),
            ensure_ascii=False,
        )
    except (TypeError, ValueError) as exc:
        logger.error("failed to serialize structured schema: %s", exc)
        return error_result(str(exc))
    return text_result(payload)


def get_schema_spec() -> ToolSpec:
    """Return the spec of the get-schema tool."""
    return ToolSpec(
        name="get-schema",
        description=(
            "Retrieve the schema information from the Neo4j database, including node "
            "labels, relationship types, and property keys.\n"
            "If the database contains no data, no schema information is returned."
        ),
        annotations=ToolAnnotations(
            title="Get Neo4j Schema",
            read_only_hint=True,
            idempotent_hint=True,
            destructive_hint=False,
            open_world_hint=True,
        ),
    )