# cyphertools

Tool handlers that sit between a tool-calling client and a graph database
that speaks Cypher. Each tool comes in two parts:

- A *spec*, a `ToolSpec` that holds the tool's name, description, input schema
  and hints.
- A *handler*, a callable that takes a `CallToolRequest` and returns a
  `ToolResult`.

| Tool                  | Spec                               | Handler                                      |
|-----------------------|------------------------------------|----------------------------------------------|
| `get-schema`          | `schema.get_schema_spec()`         | `schema.get_schema_handler(deps, size)`      |
| `read-cypher`         | `cypher.read_cypher_spec()`        | `cypher.read_cypher_handler(deps)`           |
| `write-cypher`        | `cypher.write_cypher_spec()`       | `cypher.write_cypher_handler(deps)`          |
| `list-gds-procedures` | `gds.list_gds_procedures_spec()`   | `gds.list_gds_procedures_handler(deps)`      |

`ToolSpec.to_dict()` and `ToolResult.to_dict()` give the wire form of specs
and results:

- A spec has `name`, `description`, `inputSchema` and `annotations`.
- A result has `content` as a single text item, plus `isError`.

## Installing

```
pip install cyphertools
```

## Connecting a database

The handlers reach the database through `cyphertools.types.DatabaseService`.
This is a typing `Protocol`, so any object that has the following methods
will do, whether or not it subclasses the protocol:

- `execute_read_query(query, params)` returns a sequence of `Record`.
- `execute_write_query(query, params)` returns a sequence of `Record`.
- `get_query_type(query, params)` returns a `QueryType`.
- `records_to_json(records)` returns a JSON string.

A `Record` pairs column names (`keys`) with their `values`.
`Record.get(key)` raises `KeyError` when there is no such column.

Pass your service to the handlers inside a `ToolDependencies`:

```python
from cyphertools.types import CallToolRequest, ToolDependencies
from cyphertools.cypher import read_cypher_handler

deps = ToolDependencies(db_service=my_service)
handler = read_cypher_handler(deps)

result = handler(CallToolRequest(arguments={
    "query": "MATCH (p:Person {name: $name}) RETURN p",
    "params": {"name": "Alice"},
}))
print(result.is_error, result.text)
```

### Errors

A handler reports failures as a `ToolResult` with `is_error` set and the
message as its text. This covers:

- a missing service;
- bad arguments;
- exceptions raised by the service;
- a malformed schema.

You can also build results yourself with `text_result` and `error_result`.

### Calling without a request

Handlers may be called with no request at all. This is the same as a request
with no arguments.

## Tool behaviour

### read-cypher

1. Rejects an empty or missing query.
2. Asks `get_query_type` about the statement.
3. Rejects anything that is not `QueryType.READ_ONLY`, with a message that
   points to write-cypher.
4. Runs the statement with `execute_read_query` and returns
   `records_to_json` of the records.

### write-cypher

Rejects an empty query. Otherwise it runs the statement with
`execute_write_query`.

### Arguments

Arguments are bound by `params.bind_arguments`, which returns a `CypherInput`
with `query` and `params`:

- Field names match case-insensitively, and unknown fields are ignored.
- A missing query gives `""`. Missing params give `None`.
- Arguments that are not a mapping raise `params.ArgumentError`, and so does a
  params value that is not an object.
- Whole numbers become `int`, including floats such as `1.0`. This keeps
  values such as `LIMIT $n` valid.
- Numbers with a fractional part stay `float`.
- The rule applies inside nested objects and lists too.

### Raw JSON parameters

`params.parse_params` decodes a JSON object of parameters from text.

- Numbers written without a fraction or exponent become `int`, as long as they
  fit in 64 bits.
- Numbers written with a decimal point, such as `10.0`, stay `float`.

`params.convert_numbers` applies that same rule to `Decimal` values in nested
data.

### Input schema

`params.cypher_input_schema()` is the input schema shared by read-cypher and
write-cypher.

### get-schema

`get-schema` runs `apoc.meta.schema` with the given sample size. It passes the
records to `schema.process_cypher_schema`, which returns one `SchemaItem` for
each record. Each item holds:

- the key;
- the type;
- a map of property names to type names;
- for nodes, the relationships, each with its direction, target labels and
  property types.

The result is a compact JSON list. Empty property and relationship maps are
left out.

If the database returns no records, the tool returns a short explanatory
message instead. Records of an unexpected shape raise `schema.SchemaError`
inside the handler, and the handler reports that as an error result.

### list-gds-procedures

`list-gds-procedures` lists the Graph Data Science procedures whose names
contain `stream` but not `estimate`. If the query fails, the error message
suggests checking that GDS is installed.

## What this package does not do

This package holds the tools only. It does not include:

- a tool-protocol server or transport to expose them to clients;
- a command-line program;
- a database driver.

You supply the `DatabaseService` and whatever serves the specs and handlers.

## Running the tests

```
pip install "cyphertools[test]"
pytest
```