from __future__ import annotations

import pytest

from dialogix.ingest.normalize import (
    FirstRowSchema,
    UnionSchema,
    canonical_key,
    get_schema_policy,
    normalize_rows,
)


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Total Sales", "total_sales"),
        ("Region  ID", "region_id"),
        ("Unit\tPrice", "unit_price"),
        ("already_clean", "already_clean"),
        (" Leading", "_leading"),
        ("Unnamed: 1", "unnamed:_1"),
    ],
)
def test_canonical_key(header: str, expected: str) -> None:
    assert canonical_key(header) == expected


def test_null_like_values_collapse_to_none() -> None:
    table = normalize_rows([{"A": "", "B": None, "C": "x", "D": float("nan"), "E": 0}])

    assert table.rows == [{"a": None, "b": None, "c": "x", "d": None, "e": 0}]
    assert "" not in table.rows[0].values()


def test_first_row_schema_drops_late_keys_and_fills_missing() -> None:
    raw = [
        {"Name": "a", "Score": "1"},
        {"Name": "b", "Extra": "zzz"},
    ]
    table = normalize_rows(raw, FirstRowSchema())

    assert table.columns == ["name", "score"]
    assert table.rows == [
        {"name": "a", "score": "1"},
        {"name": "b", "score": None},
    ]


def test_union_schema_keeps_every_key_in_first_seen_order() -> None:
    raw = [
        {"Name": "a", "Score": "1"},
        {"Name": "b", "Extra": "zzz"},
    ]
    table = normalize_rows(raw, UnionSchema())

    assert table.columns == ["name", "score", "extra"]
    assert table.rows[0] == {"name": "a", "score": "1", "extra": None}
    assert all(list(r.keys()) == table.columns for r in table.rows)


def test_headers_colliding_after_canonicalization_keep_later_value() -> None:
    table = normalize_rows([{"Total Sales": "1", "total  sales": "2"}])

    assert table.columns == ["total_sales"]
    assert table.rows == [{"total_sales": "2"}]


def test_zero_rows_give_empty_table() -> None:
    table = normalize_rows([])

    assert table.columns == []
    assert table.rows == []
    assert table.row_count == 0


def test_get_schema_policy() -> None:
    assert isinstance(get_schema_policy("first_row"), FirstRowSchema)
    assert isinstance(get_schema_policy("UNION"), UnionSchema)
    with pytest.raises(ValueError):
        get_schema_policy("majority")
