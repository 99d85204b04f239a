"""The list-gds-procedures tool."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from cyphertools.types import (
    CallToolRequest,
    ToolAnnotations,
    ToolDependencies,
    ToolResult,
    ToolSpec,
    error_result,
    text_result,
)

logger = logging.getLogger(__name__)

LIST_GDS_PROCEDURES_QUERY = """
CALL gds.list() YIELD name, description, signature, type
WHERE type = "procedure"
AND name CONTAINS "stream"
AND NOT (name CONTAINS "estimate")
RETURN name, description, signature, type"""

SERVICE_NOT_INITIALIZED = "Database service is not initialized"


def list_gds_procedures_handler(deps: ToolDependencies) -> Callable[..., ToolResult]:
    """Return the handler of the list-gds-procedures tool."""

    def handle(request: Optional[CallToolRequest] = None) -> ToolResult:
        return _handle_list_gds_procedures(deps)

    return handle


def _handle_list_gds_procedures(deps: ToolDependencies) -> ToolResult:
    service = deps.db_service
    if service is None:
        logger.error(SERVICE_NOT_INITIALIZED)
        return error_result(SERVICE_NOT_INITIALIZED)

    try:
        records = service.execute_read_query(LIST_GDS_PROCEDURES_QUERY, None)
    except Exception as exc:
        logger.error("failed to execute list gds procedures query: %s", exc)
        return error_result(
            f"failed to execute list-gds-procedure query: {exc}. Ensure that the "
            "Graph Data Science (GDS) library is installed and properly configured "
            "in your Neo4j database"
        )

    try:
        response = service.records_to_json(records)
    except Exception as exc:
        logger.error("failed to format list-gds-procedures results to JSON: %s", exc)
        return error_result(str(exc))

    return text_result(response)


def list_gds_procedures_spec() -> ToolSpec:
    """Return the spec of the list-gds-procedures tool."""
    return ToolSpec(
        name="list-gds-procedures",
        description=(
            "Use this tool to discover what graph science and analytics functions are "
            "available in the current Neo4j environment. "
            "It returns a structured list describing each function — what it does, how "
            "to use it, the inputs it needs, and what kind of results it produces. "
            "Do this before any reasoning, query generation, or analysis so you know "
            "what capabilities exist. "
            "Graph science and analytics functions help you with centrality, community "
            "detection, similarity, path finding, and identifying dependencies between "
            "nodes. "
            "The tool helps you understand the analytical capabilities of the system so "
            "that you can plan or compose the right graph science operations "
            "automatically. "
            "An empty response indicates that GDS is not installed and the user should "
            "be told to install it. "
            "Remember to use unique names for graph data science projections to avoid "
            "collisions and to drop them afterwards to save memory. "
            "You must always tell the user the function you will use."
        ),
        annotations=ToolAnnotations(
            title="List available Neo4j GDS procedures",
            read_only_hint=True,
            idempotent_hint=True,
            destructive_hint=False,
            open_world_hint=True,
        ),
    )