# tests/test_params.py
from __future__ import annotations

from urllib.parse import parse_qsl

from renderapi.core.domain.params import (
    ParamMode,
    build_query_string,
    filter_params,
    with_default_limit,
)


def test_absent_and_empty_sequences_are_dropped() -> None:
    out = filter_params({"name": None, "type": [], "env": (), "id": "x"})
    assert out == {"id": "x"}


def test_default_limit_is_injected_before_filtering() -> None:
    query = build_query_string(with_default_limit({"limit": None, "id": "x"}))
    pairs = dict(parse_qsl(query))
    assert pairs == {"limit": "100", "id": "x"}
    assert "limit=None" not in query
    assert "limit=&" not in query and not query.endswith("limit=")


def test_caller_limit_is_kept() -> None:
    assert with_default_limit({"limit": "15"})["limit"] == "15"
    assert with_default_limit({"limit": ""})["limit"] == "100"
    assert with_default_limit(None, 20) == {"limit": "20"}


def test_sequence_becomes_single_comma_joined_parameter() -> None:
    query = build_query_string({"resource": ["a", "b", "c"]})
    assert query == "resource=a%2Cb%2Cc"
    assert query.count("resource=") == 1


def test_strings_are_scalars_not_sequences() -> None:
    assert filter_params({"name": "abc"}) == {"name": "abc"}
    assert filter_params({"name": ""}) == {"name": ""}


def test_query_mode_stringifies_scalars() -> None:
    out = filter_params({"startTime": 1700000000, "ratio": 0.5, "suspended": False})
    assert out == {"startTime": "1700000000", "ratio": "0.5", "suspended": "false"}


def test_json_mode_keeps_lists_and_native_scalars() -> None:
    out = filter_params(
        {"resource": ("srv-a", "srv-b"), "count": 3, "skip": None, "tags": []},
        ParamMode.JSON,
    )
    assert out == {"resource": ["srv-a", "srv-b"], "count": 3}


def test_filter_does_not_mutate_caller_bag() -> None:
    bag = {"limit": None, "name": None, "resource": ["a"]}
    snapshot = dict(bag)
    with_default_limit(bag)
    filter_params(bag)
    build_query_string(bag)
    assert bag == snapshot


def test_order_of_keys_is_preserved() -> None:
    query = build_query_string({"b": "2", "a": "1", "c": None, "d": "4"})
    assert [k for k, _ in parse_qsl(query)] == ["b", "a", "d"]
