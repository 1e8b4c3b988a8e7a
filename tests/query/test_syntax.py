"""Tests for clause parsing and value coercion."""

from __future__ import annotations

from typing import Any

import pytest

from firebase_tools_cli.exceptions import (
    InvalidDirectionError,
    InvalidLimitError,
    MalformedClauseError,
    UnknownOperatorError,
)
from firebase_tools_cli.query.descriptor import QueryDescriptor
from firebase_tools_cli.query.operators import QueryOperator, SortDirection
from firebase_tools_cli.query.syntax import (
    parse_limit,
    parse_order,
    parse_query,
    parse_where,
)
from firebase_tools_cli.query.values import coerce_value

# ══════════════════════════════════════════════════════════════════════
# Value coercion
# ══════════════════════════════════════════════════════════════════════


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("true", True),
        ("false", False),
        ("null", None),
        ("18", 18),
        ("-3.5", -3.5),
        ("1e3", 1000.0),
        ("123456789012345", 123456789012345),
        ("1234567890123456", "1234567890123456"),
        ("1e400", "1e400"),
        ("TRUE", "TRUE"),
        ("0x10", "0x10"),
        ("Ada", "Ada"),
        ("", ""),
    ],
)
def test_coerce_value(raw: str, expected: Any) -> None:
    result = coerce_value(raw)
    assert result == expected
    assert type(result) is type(expected)


# ══════════════════════════════════════════════════════════════════════
# Where clauses
# ══════════════════════════════════════════════════════════════════════


class TestParseWhere:
    def test_three_segments(self) -> None:
        clause = parse_where("age,>=,18")
        assert clause.field_path == "age"
        assert clause.operator is QueryOperator.GE
        assert clause.raw_value == "18"
        assert clause.value == 18

    def test_segments_are_stripped(self) -> None:
        clause = parse_where(" name , == , Ada ")
        assert clause.field_path == "name"
        assert clause.operator is QueryOperator.EQ
        assert clause.value == "Ada"

    def test_nested_field_path(self) -> None:
        clause = parse_where("profile/address/city,==,Paris")
        assert clause.segments == ["profile", "address", "city"]

    @pytest.mark.parametrize(
        ("token", "operator"),
        [
            ("=", QueryOperator.EQ),
            ("array_contains", QueryOperator.ARRAY_CONTAINS),
            ("array-contains-any", QueryOperator.ARRAY_CONTAINS_ANY),
            ("not_in", QueryOperator.NOT_IN),
            ("IN", QueryOperator.IN),
        ],
    )
    def test_operator_aliases(self, token: str, operator: QueryOperator) -> None:
        assert parse_where(f"f,{token},x").operator is operator

    def test_too_few_segments(self) -> None:
        with pytest.raises(MalformedClauseError):
            parse_where("age,>=")

    def test_value_with_comma_is_rejected(self) -> None:
        with pytest.raises(MalformedClauseError, match="cannot contain commas"):
            parse_where("name,==,Smith, John")

    def test_empty_field(self) -> None:
        with pytest.raises(MalformedClauseError):
            parse_where(",==,1")

    def test_empty_operator(self) -> None:
        with pytest.raises(MalformedClauseError):
            parse_where("age, ,1")

    def test_unknown_operator_suggests(self) -> None:
        with pytest.raises(UnknownOperatorError) as exc_info:
            parse_where("tags,array-contain,x")
        err = exc_info.value
        assert isinstance(err, MalformedClauseError)
        assert "array-contains" in err.suggestions
        assert err.to_dict()["error"] == "OPERATOR_NOT_FOUND"

    def test_to_text_echoes_raw_value(self) -> None:
        assert parse_where("age,>=,018").to_text() == "age,>=,018"


# ══════════════════════════════════════════════════════════════════════
# Order and limit
# ══════════════════════════════════════════════════════════════════════


class TestParseOrder:
    def test_default_direction(self) -> None:
        order = parse_order("age")
        assert order.field_path == "age"
        assert order.direction is SortDirection.ASC

    def test_direction_is_case_insensitive(self) -> None:
        assert parse_order("age,DESC").descending

    def test_empty_direction_defaults_to_asc(self) -> None:
        assert parse_order("age,").direction is SortDirection.ASC

    def test_invalid_direction(self) -> None:
        with pytest.raises(InvalidDirectionError):
            parse_order("age,up")

    def test_empty_field(self) -> None:
        with pytest.raises(MalformedClauseError):
            parse_order(",asc")

    def test_too_many_segments(self) -> None:
        with pytest.raises(MalformedClauseError):
            parse_order("age,asc,extra")


class TestParseLimit:
    @pytest.mark.parametrize(("raw", "expected"), [("10", 10), (5, 5), (" 3 ", 3)])
    def test_valid(self, raw: Any, expected: int) -> None:
        assert parse_limit(raw) == expected

    @pytest.mark.parametrize(
        "raw", ["0", "-1", "abc", "2.5", "", "²", "③", "١٢", 0, -4, True]
    )
    def test_invalid(self, raw: Any) -> None:
        with pytest.raises(InvalidLimitError):
            parse_limit(raw)

    def test_descriptor_rejects_non_positive_limit(self) -> None:
        with pytest.raises(InvalidLimitError):
            QueryDescriptor(limit=0)


def test_parse_query_echo() -> None:
    descriptor = parse_query(where="age,>=,18", order_by="age,desc", limit="5")
    assert descriptor.echo() == {
        "where": "age,>=,18",
        "orderBy": "age,desc",
        "limit": 5,
    }


def test_parse_query_empty() -> None:
    assert parse_query().is_empty
