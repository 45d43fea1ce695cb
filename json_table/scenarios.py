"""Scenario definitions for challenging flattening cases.

This module defines JSON documents that exercise the awkward corners of
turning a tree into a table: missing keys, repeating groups, nested groups,
arrays mixing scalars and objects, filters and formatting flags. Scenarios
that carry ``expected`` rows double as regression fixtures.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from .table import TableRows


@dataclass(frozen=True)
class Scenario:
    """A flattening scenario.

    Attributes
    ----------
    name : str
        Unique identifier for the scenario.
    description : str
        Human-readable description of what the scenario tests.
    data : Any
        JSON-like data structure to flatten.
    query : str, optional
        Comma-separated path prefixes to keep (default: keep all).
    options : str, optional
        Comma-separated formatting flags (default: none).
    expected : TableRows | None, optional
        Rows :func:`json_table.flatten_to_table` must return, when pinned.
    """
    name: str
    description: str
    data: Any
    query: str = ""
    options: str = ""
    expected: Optional[TableRows] = None


def get_scenarios() -> List[Scenario]:
    """Get all available flattening scenarios.

    Returns
    -------
    List[Scenario]
        Scenario definitions covering various JSON structures.
    """
    return [
        Scenario(
            name="nested_objects",
            description="Nested objects with scalar fields.",
            data={"order": {"id": 42, "meta": {"source": "api"}}, "customer": "acme"},
            expected=[
                ["Order Id", "Order Meta Source", "Customer"],
                ["42", "api", "acme"],
            ],
        ),
        Scenario(
            name="list_of_primitives",
            description="Array of primitives joined into a single cell.",
            data={"tags": ["blue", "green", "red"], "active": True},
            expected=[["Tags", "Active"], ["blue, green, red", "true"]],
        ),
        Scenario(
            name="repeating_group",
            description="Array of objects expanded into one row per object.",
            data={
                "order_id": 1001,
                "items": [
                    {"sku": "A1", "qty": 2},
                    {"sku": "B2", "qty": 1},
                ],
            },
            expected=[
                ["Order Id", "Items Sku", "Items Qty"],
                ["1001", "A1", "2"],
                ["", "B2", "1"],
            ],
        ),
        Scenario(
            name="field_after_group",
            description="A scalar that follows a repeating group lands on the next free row.",
            data={"items": [{"sku": "A"}, {"sku": "B"}], "total": 2},
            expected=[["Items Sku", "Total"], ["A", ""], ["B", ""], ["", "2"]],
        ),
        Scenario(
            name="heterogeneous_records",
            description="Root array of records with differing keys.",
            data=[
                {"name": "Ada", "age": 36},
                {"name": "Linus", "langs": ["c", "python"]},
            ],
            expected=[
                ["Name", "Age", "Langs"],
                ["Ada", "36", ""],
                ["Linus", "", "c, python"],
            ],
        ),
        Scenario(
            name="nested_groups",
            description="Repeating group inside a repeating group.",
            data={
                "id": "t",
                "lines": [
                    {"n": 1, "parts": [{"p": "x"}, {"p": "y"}]},
                    {"n": 2},
                ],
            },
            expected=[
                ["Id", "Lines N", "Lines Parts P"],
                ["t", "1", "x"],
                ["", "", "y"],
                ["", "2", ""],
            ],
        ),
        Scenario(
            name="mixed_array",
            description="Array mixing scalars and objects; scalars stay at the array path.",
            data={"values": [1, {"a": 2}, 3]},
            expected=[["", "A"], ["1", ""], ["", "2"], ["3", ""]],
        ),
        Scenario(
            name="empty_and_null_handling",
            description="Empty arrays and objects add nothing; nulls become empty cells.",
            data={
                "id": 1,
                "empty_list": [],
                "null_field": None,
                "nested": {"present": "value"},
                "optional": {},
            },
            expected=[["Id", "Null Field", "Nested Present"], ["1", "", "value"]],
        ),
        Scenario(
            name="raw_prefix_query",
            description="Query prefixes match raw text, so /name also keeps /name_full.",
            data={"name": "Ada", "name_full": "Ada Lovelace", "age": 36},
            query="/name",
            expected=[["", "Full"], ["Ada", "Ada Lovelace"]],
        ),
        Scenario(
            name="raw_headers_no_truncate",
            description="Raw path headers and untruncated values.",
            data={"person": {"name": "Ada", "bio": "x" * 300}},
            options="rawHeaders,noTruncate",
            expected=[["/person/name", "/person/bio"], ["Ada", "x" * 300]],
        ),
        Scenario(
            name="no_headers",
            description="Header row suppressed.",
            data=[{"sku": "A"}, {"sku": "B"}],
            options="noHeaders",
            expected=[["A"], ["B"]],
        ),
        Scenario(
            name="debug_location",
            description="Cells tagged with their row and column.",
            data={"a": 1, "b": None},
            options="debugLocation",
            expected=[["[0,0]A", "[0,1]B"], ["[1,0]1", ""]],
        ),
        Scenario(
            name="root_scalar",
            description="A bare scalar document becomes a single unnamed column.",
            data="hello",
            expected=[[""], ["hello"]],
        ),
    ]
