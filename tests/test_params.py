from decimal import Decimal

import pytest

from cyphertools.params import (
    ArgumentError,
    CypherInput,
    bind_arguments,
    convert_numbers,
    cypher_input_schema,
    parse_params,
)


def _assert_same(actual, expected):
    assert type(actual) is type(expected), (actual, expected)
    if isinstance(expected, dict):
        assert actual.keys() == expected.keys()
        for key in expected:
            _assert_same(actual[key], expected[key])
    elif isinstance(expected, list):
        assert len(actual) == len(expected)
        for got, want in zip(actual, expected):
            _assert_same(got, want)
    else:
        assert actual == expected


BIND_CASES = [
    (
        {"query": "MATCH (n) WHERE n.id = $id RETURN n", "params": {"id": 1}},
        "MATCH (n) WHERE n.id = $id RETURN n",
        {"id": 1},
    ),
    (
        {"query": "MATCH (n) WHERE n.value = $value RETURN n", "params": {"value": 1.5}},
        "MATCH (n) WHERE n.value = $value RETURN n",
        {"value": 1.5},
    ),
    (
        {"query": "MATCH (n) WHERE n.limit = $limit RETURN n", "params": {"limit": 1.0}},
        "MATCH (n) WHERE n.limit = $limit RETURN n",
        {"limit": 1},
    ),
    (
        {
            "query": "MATCH (n) WHERE n.id = $id AND n.value = $value RETURN n",
            "params": {"id": 1, "value": 2.5},
        },
        "MATCH (n) WHERE n.id = $id AND n.value = $value RETURN n",
        {"id": 1, "value": 2.5},
    ),
    (
        {
            "query": "MATCH (n) WHERE n.data = $data RETURN n",
            "params": {"data": {"count": 10, "ratio": 0.5, "threshold": 5.0}},
        },
        "MATCH (n) WHERE n.data = $data RETURN n",
        {"data": {"count": 10, "ratio": 0.5, "threshold": 5}},
    ),
    (
        {"query": "MATCH (n) WHERE n.list IN $list RETURN n", "params": {"list": [1, 2.0, 3.5]}},
        "MATCH (n) WHERE n.list IN $list RETURN n",
        {"list": [1, 2, 3.5]},
    ),
    (
        {
            "query": "MATCH (n) WHERE n.complex = $complex RETURN n",
            "params": {
                "complex": {
                    "level1": {"level2": [{"value": 42, "ratio": 0.75}, 1.0, 2.5]}
                }
            },
        },
        "MATCH (n) WHERE n.complex = $complex RETURN n",
        {"complex": {"level1": {"level2": [{"value": 42, "ratio": 0.75}, 1, 2.5]}}},
    ),
    ({"query": "MATCH (n) RETURN n", "params": {}}, "MATCH (n) RETURN n", {}),
    ({"query": "MATCH (n) RETURN n"}, "MATCH (n) RETURN n", None),
    (
        {"query": "MATCH (n) WHERE n.name = $name RETURN n", "params": {"name": "Alice"}},
        "MATCH (n) WHERE n.name = $name RETURN n",
        {"name": "Alice"},
    ),
    (
        {"query": "MATCH (n) WHERE n.active = $active RETURN n", "params": {"active": True}},
        "MATCH (n) WHERE n.active = $active RETURN n",
        {"active": True},
    ),
    (
        {"query": "MATCH (n) WHERE n.optional = $optional RETURN n", "params": {"optional": None}},
        "MATCH (n) WHERE n.optional = $optional RETURN n",
        {"optional": None},
    ),
    (
        {
            "query": "MATCH (n) WHERE n.bignum = $bignum RETURN n",
            "params": {"bignum": 1000000000000000000},
        },
        "MATCH (n) WHERE n.bignum = $bignum RETURN n",
        {"bignum": 1000000000000000000},
    ),
    (
        {"query": "MATCH (n) LIMIT $limit", "params": {"limit": 0}},
        "MATCH (n) LIMIT $limit",
        {"limit": 0},
    ),
    (
        {"query": "MATCH (n) LIMIT $limit", "params": {"limit": 0.0}},
        "MATCH (n) LIMIT $limit",
        {"limit": 0},
    ),
    (
        {
            "query": "MATCH (n) WHERE n.balance = $balance AND n.adjustment = $adjustment RETURN n",
            "params": {"balance": -100, "adjustment": -1.5},
        },
        "MATCH (n) WHERE n.balance = $balance AND n.adjustment = $adjustment RETURN n",
        {"balance": -100, "adjustment": -1.5},
    ),
    (
        {"query": "CREATE (n:Node) SET n.count = $count RETURN n", "params": {"count": 5}},
        "CREATE (n:Node) SET n.count = $count RETURN n",
        {"count": 5},
    ),
    (
        {
            "query": "CREATE (n:Node {name: $name, score: $score}) RETURN n",
            "params": {"name": "test", "score": 42.0},
        },
        "CREATE (n:Node {name: $name, score: $score}) RETURN n",
        {"name": "test", "score": 42},
    ),
]


@pytest.mark.parametrize("arguments, want_query, want_params", BIND_CASES)
def test_bind_arguments(arguments, want_query, want_params):
    bound = bind_arguments(arguments)
    assert bound.query == want_query
    _assert_same(bound.params, want_params)


def test_bind_arguments_rejects_string():
    with pytest.raises(ArgumentError):
        bind_arguments("invalid string instead of map")


def test_bind_arguments_rejects_list():
    with pytest.raises(ArgumentError):
        bind_arguments(["invalid", "array"])


def test_bind_arguments_missing_query_is_empty():
    bound = bind_arguments({"params": {"id": 1}})
    assert bound.query == ""
    _assert_same(bound.params, {"id": 1})


def test_bind_arguments_none_gives_empty_input():
    assert bind_arguments(None) == CypherInput(query="", params=None)


def test_bind_arguments_rejects_non_string_query():
    with pytest.raises(ArgumentError):
        bind_arguments({"query": 12})


def test_bind_arguments_rejects_non_object_params():
    with pytest.raises(ArgumentError):
        bind_arguments({"query": "MATCH (n) RETURN n", "params": [1, 2]})


def test_bind_arguments_rejects_nan():
    with pytest.raises(ArgumentError):
        bind_arguments({"query": "RETURN $x", "params": {"x": float("nan")}})


def test_bind_arguments_ignores_unknown_fields():
    bound = bind_arguments({"invalid_field": "value"})
    assert bound == CypherInput()


def test_limit_scenario():
    bound = bind_arguments(
        {"query": "MATCH(n) RETURN n LIMIT $limit", "params": {"limit": 1}}
    )
    assert bound.query == "MATCH(n) RETURN n LIMIT $limit"
    limit = bound.params["limit"]
    assert type(limit) is int
    assert limit == 1


CONVERT_CASES = [
    (Decimal("42"), 42),
    (Decimal("3.14"), 3.14),
    (Decimal("10.0"), 10.0),
    (Decimal("0"), 0),
    (Decimal("0.0"), 0.0),
    (Decimal("-42"), -42),
    (Decimal("-3.14"), -3.14),
    ("hello", "hello"),
    (True, True),
    (None, None),
    (
        {"count": Decimal("10"), "ratio": Decimal("0.5"), "name": "test"},
        {"count": 10, "ratio": 0.5, "name": "test"},
    ),
    ({"outer": {"inner": Decimal("42")}}, {"outer": {"inner": 42}}),
    ([Decimal("1"), Decimal("2.0"), Decimal("3.5")], [1, 2.0, 3.5]),
    (
        {
            "items": [
                {"id": Decimal("1"), "score": Decimal("9.5")},
                {"id": Decimal("2"), "score": Decimal("10.0")},
            ]
        },
        {"items": [{"id": 1, "score": 9.5}, {"id": 2, "score": 10.0}]},
    ),
    ({}, {}),
    ([], []),
]


@pytest.mark.parametrize("value, expected", CONVERT_CASES)
def test_convert_numbers(value, expected):
    _assert_same(convert_numbers(value), expected)


def test_parse_params_keeps_literal_form():
    result = parse_params('{"a": 1, "b": 10.0, "c": [2, 3.5], "d": "x"}')
    _assert_same(result, {"a": 1, "b": 10.0, "c": [2, 3.5], "d": "x"})


def test_parse_params_out_of_range_integer_becomes_float():
    result = parse_params('{"n": 9223372036854775808}')
    _assert_same(result, {"n": 9223372036854775808.0})


def test_parse_params_null_is_none():
    assert parse_params("null") is None


def test_parse_params_rejects_array():
    with pytest.raises(ArgumentError):
        parse_params("[1, 2]")


def test_parse_params_rejects_invalid_json():
    with pytest.raises(ArgumentError):
        parse_params("{not json")


def test_cypher_input_schema_fields():
    schema = cypher_input_schema()
    assert schema["required"] == ["query"]
    assert schema["properties"]["query"]["default"] == "MATCH(n) RETURN n"
    assert schema["properties"]["query"]["description"] == "The Cypher query to execute"
    assert (
        schema["properties"]["params"]["description"]
        == "Parameters to pass to the Cypher query"
    )


def test_cypher_input_schema_is_fresh_each_call():
    first = cypher_input_schema()
    first["properties"].pop("query")
    assert "query" in cypher_input_schema()["properties"]