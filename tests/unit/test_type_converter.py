"""
Unit tests for JSON-safe conversion of driver values.
"""

import json
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from uuid import UUID

from sqltester.utils.type_converter import convert_rows_to_serializable, convert_to_serializable


def test_scalars_pass_through():
    for value in (None, True, 0, 1.5, "text"):
        assert convert_to_serializable(value) == value


def test_decimal():
    assert convert_to_serializable(Decimal("10")) == 10
    assert isinstance(convert_to_serializable(Decimal("10.00")), int)
    assert convert_to_serializable(Decimal("1.25")) == 1.25


def test_non_finite_numbers_become_none():
    for value in (float("inf"), float("-inf"), float("nan"),
                  Decimal("Infinity"), Decimal("-Infinity"), Decimal("NaN"), Decimal("sNaN")):
        assert convert_to_serializable(value) is None

    row = convert_rows_to_serializable([{"x": float("nan"), "y": Decimal("Infinity")}])
    assert json.dumps(row, allow_nan=False) == '[{"x": null, "y": null}]'


def test_temporal_values():
    assert convert_to_serializable(datetime(2024, 1, 2, 3, 4, 5)) == "2024-01-02T03:04:05"
    assert convert_to_serializable(date(2024, 1, 2)) == "2024-01-02"
    assert convert_to_serializable(time(3, 4)) == "03:04:00"
    assert convert_to_serializable(timedelta(hours=1, seconds=30)) == 3630.0


def test_uuid_and_bytes():
    uid = UUID("12345678-1234-5678-1234-567812345678")
    assert convert_to_serializable(uid) == str(uid)
    assert convert_to_serializable(b"abc") == "abc"
    assert convert_to_serializable(b"\xff\x00") == "ff00"
    assert convert_to_serializable(memoryview(b"hi")) == "hi"


def test_nested_and_unknown():
    value = {"tags": ("a", Decimal("2")), "when": {date(2024, 1, 1)}}
    assert convert_to_serializable(value) == {"tags": ["a", 2], "when": ["2024-01-01"]}
    assert convert_to_serializable(object()).startswith("<object object")


def test_rows_keep_order_and_are_json_dumpable():
    rows = [{"b": Decimal("1.5"), "a": datetime(2024, 5, 1)}]

    converted = convert_rows_to_serializable(rows)

    assert list(converted[0].keys()) == ["b", "a"]
    json.dumps(converted)
