"""The read-cypher and write-cypher tools."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from cyphertools.params import ArgumentError, bind_arguments, cypher_input_schema
from cyphertools.types import (
    CallToolRequest,
    QueryType,
    ToolAnnotations,
    ToolDependencies,
    ToolResult,
    ToolSpec,
    error_result,
    text_result,
)

logger = logging.getLogger(__name__)

SERVICE_NOT_INITIALIZED = "Database service is not initialized"
EMPTY_QUERY_MESSAGE = "Query parameter is required and cannot be empty"
READ_ONLY_REJECTION = (
    "read-cypher can only run read-only Cypher statements. For write operations "
    "(CREATE, MERGE, DELETE, SET, etc...), schema/admin commands, or PROFILE "
    "queries, use write-cypher instead."
)


def read_cypher_handler(deps: ToolDependencies) -> Callable[..., ToolResult]:
    """Return the handler of the read-cypher tool."""

    def handle(request: Optional[CallToolRequest] = None) -> ToolResult:
        return _handle_read_cypher(request or CallToolRequest(), deps)

    return handle


def write_cypher_handler(deps: ToolDependencies) -> Callable[..., ToolResult]:
    """Return the handler of the write-cypher tool."""

    def handle(request: Optional[CallToolRequest] = None) -> ToolResult:
        return _handle_write_cypher(request or CallToolRequest(), deps)

    return handle


def _handle_read_cypher(request: CallToolRequest, deps: ToolDependencies) -> ToolResult:
    service = deps.db_service
    if service is None:
        logger.error(SERVICE_NOT_INITIALIZED)
        return error_result(SERVICE_NOT_INITIALIZED)

    try:
        args = bind_arguments(request.arguments)
    except ArgumentError as exc:
        logger.error("error binding arguments: %s", exc)
        return error_result(str(exc))

    logger.info("executing read cypher query: %s", args.query)
    if not args.query:
        logger.error(EMPTY_QUERY_MESSAGE)
        return error_result(EMPTY_QUERY_MESSAGE)

    try:
        query_type = service.get_query_type(args.query, args.params)
    except Exception as exc:
        logger.error("error classifying cypher query: %s", exc)
        return error_result(str(exc))

    if query_type != QueryType.READ_ONLY:
        logger.error("rejected non-read query (type=%r): %s", query_type, args.query)
        return error_result(READ_ONLY_REJECTION)

    try:
        records = service.execute_read_query(args.query, args.params)
    except Exception as exc:
        logger.error("error executing cypher query: %s", exc)
        return error_result(str(exc))

    try:
        response = service.records_to_json(records)
    except Exception as exc:
        logger.error("error formatting query results: %s", exc)
        return error_result(str(exc))

    return text_result(response)


def _handle_write_cypher(request: CallToolRequest, deps: ToolDependencies) -> ToolResult:
    service = deps.db_service
    if service is None:
        logger.error(SERVICE_NOT_INITIALIZED)
        return error_result(SERVICE_NOT_INITIALIZED)

    try:
        args = bind_arguments(request.arguments)
    except ArgumentError as exc:
        logger.error("error binding arguments: %s", exc)
        return error_result(str(exc))

    if not args.query:
        logger.error(EMPTY_QUERY_MESSAGE)
        return error_result(EMPTY_QUERY_MESSAGE)

    logger.info("executing write cypher query: %s", args.query)
    try:
        records = service.execute_write_query(args.query, args.params)
    except Exception as exc:
        logger.error("error executing cypher query: %s", exc)
        return error_result(str(exc))

    try:
        response = service.records_to_json(records)
    except Exception as exc:
        logger.error("error formatting query results: %s", exc)
        return error_result(str(exc))

    return text_result(response)


def read_cypher_spec() -> ToolSpec:
    """Return the spec of the read-cypher tool."""
    return ToolSpec(
        name="read-cypher",
        description=(
            "read-cypher can run only read-only Cypher statements. For write operations "
            "(CREATE, MERGE, DELETE, SET, etc...), schema/admin commands, or PROFILE "
            "queries, use write-cypher instead."
        ),
        input_schema=cypher_input_schema(),
        annotations=ToolAnnotations(
            title="Read Cypher",
            read_only_hint=True,
            destructive_hint=False,
            idempotent_hint=True,
            open_world_hint=True,
        ),
    )


def write_cypher_spec() -> ToolSpec:
    """Return the spec of the write-cypher tool."""
    return ToolSpec(
        name="write-cypher",
        description=(
            "write-cypher executes any arbitrary Cypher query, with write access, "
            "against the user-configured Neo4j database."
        ),
        input_schema=cypher_input_schema(),
        annotations=ToolAnnotations(
            title="Write Cypher",
            read_only_hint=False,
            destructive_hint=True,
            idempotent_hint=False,
            open_world_hint=True,
        ),
    )