"""Shared types for the Cypher tools: records, requests, results, specs and dependencies."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Protocol, Sequence, runtime_checkable


class QueryType(str, enum.Enum):
    """Kind of a Cypher statement as reported by the database planner."""

    UNKNOWN = ""
    READ_ONLY = "r"
    READ_WRITE = "rw"
    WRITE_ONLY = "w"
    SCHEMA_WRITE = "s"


@dataclass(frozen=True)
class Record:
    """One result row: column names paired with their values."""

    keys: tuple[str, ...]
    values: tuple[Any, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "keys", tuple(self.keys))
        object.__setattr__(self, "values", tuple(self.values))
        if len(self.keys) != len(self.values):
            raise ValueError(
                f"record has {len(self.keys)} keys but {len(self.values)} values"
            )

    def get(self, key: str) -> Any:
        """Return the value of column ``key``; raise KeyError if there is no such column."""
        try:
            index = self.keys.index(key)
        except ValueError:
            raise KeyError(key) from None
        return self.values[index]


@dataclass(frozen=True)
class CallToolRequest:
    """A request to run a tool, carrying the raw arguments sent by the client."""

    name: str = ""
    arguments: Any = None


@dataclass(frozen=True)
class ToolResult:
    """Text outcome of a tool call; ``is_error`` marks a failure reported to the client."""

    text: str
    is_error: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Return the result in its wire form."""
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


def text_result(text: str) -> ToolResult:
    """Build a successful result holding ``text``."""
    return ToolResult(text=text, is_error=False)


def error_result(message: str) -> ToolResult:
    """Build an error result holding ``message``."""
    return ToolResult(text=message, is_error=True)


@dataclass(frozen=True)
class ToolAnnotations:
    """Behavioural hints a tool advertises to clients."""

    title: str = ""
    read_only_hint: bool = False
    destructive_hint: bool = True
    idempotent_hint: bool = False
    open_world_hint: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "readOnlyHint": self.read_only_hint,
            "destructiveHint": self.destructive_hint,
            "idempotentHint": self.idempotent_hint,
            "openWorldHint": self.open_world_hint,
        }


def _empty_object_schema() -> dict[str, Any]:
    return {"type": "object", "properties": {}}


@dataclass(frozen=True)
class ToolSpec:
    """Name, description, input schema and annotations of a tool."""

    name: str
    description: str = ""
    input_schema: dict[str, Any] = field(default_factory=_empty_object_schema)
    annotations: ToolAnnotations = field(default_factory=ToolAnnotations)

    def to_dict(self) -> dict[str, Any]:
        """Return the spec in its wire form."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
            "annotations": self.annotations.to_dict(),
        }


@runtime_checkable
class DatabaseService(Protocol):
    """Operations the tools need from a graph database connection."""

    def execute_read_query(
        self, query: str, params: Optional[dict[str, Any]]
    ) -> Sequence[Record]:
        """Run ``query`` in a read transaction and return its records."""

    def execute_write_query(
        self, query: str, params: Optional[dict[str, Any]]
    ) -> Sequence[Record]:
        """Run ``query`` in a write transaction and return its records."""

    def get_query_type(
        self, query: str, params: Optional[dict[str, Any]]
    ) -> QueryType:
        """Classify ``query`` without running it."""

    def records_to_json(self, records: Sequence[Record]) -> str:
        """Serialise ``records`` to a JSON document."""


@dataclass
class ToolDependencies:
    """Everything the tool handlers depend on."""

    db_service: Optional[DatabaseService] = None
    analytics_service: Any = None
    schema_sample_size: int = 0


Handler = Callable[[CallToolRequest], ToolResult]