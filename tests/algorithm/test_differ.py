"""Tests for DocumentDiffer.

Verifies paths, absent-side handling, list and selectable-list rules,
the skip set (checkbox keys included) and excluded sections, normalization
failures, and section reports.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import Any

import pytest

from json_form_diff.algorithm.config import EngineConfig
from json_form_diff.algorithm.differ import DocumentDiffer, scalars_equal
from json_form_diff.result import FieldDifference
from json_form_diff.tree.builder import NodeBuilder

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def differ() -> DocumentDiffer:
    return DocumentDiffer()


@dataclass
class Client:
    name: str
    phone: str


MASTER: dict[str, Any] = {
    "_id": {"$oid": "65f0c0ffee"},
    "clientInformation": {
        "companyName": "Acme",
        "contacts": [{"name": "Jo", "phone": "555-0100"}],
        "channels": {"ach": {"selected": True}, "card": {"selected": False}},
    },
    "paymentRules": {
        "days": [
            {"viewValue": "Mon", "selected": True},
            {"viewValue": "Tue", "selected": False},
        ],
        "frequency": {"value": "monthly"},
    },
    "revisionHistory": [{"by": "admin", "at": "2024-01-01"}],
}


# ---------------------------------------------------------------------------
# Equality
# ---------------------------------------------------------------------------


class TestNoDifferences:
    def test_identical_documents(self, differ: DocumentDiffer) -> None:
        assert differ.diff(MASTER, copy.deepcopy(MASTER)) == []

    def test_empty_documents(self, differ: DocumentDiffer) -> None:
        assert differ.diff({}, {}) == []

    def test_diff_is_repeatable(self, differ: DocumentDiffer) -> None:
        override = copy.deepcopy(MASTER)
        override["clientInformation"]["companyName"] = "Acme Corp"
        assert differ.diff(MASTER, override) == differ.diff(MASTER, override)

    def test_diff_does_not_mutate_inputs(self, differ: DocumentDiffer) -> None:
        before = copy.deepcopy(MASTER)
        differ.diff(MASTER, {})
        assert MASTER == before

    def test_absent_and_null_are_equal(self, differ: DocumentDiffer) -> None:
        assert differ.diff({"s": {"a": None}}, {"s": {}}) == []
        assert differ.diff({"s": None}, {}) == []


# ---------------------------------------------------------------------------
# Paths and scalar values
# ---------------------------------------------------------------------------


class TestScalarDifferences:
    def test_changed_scalar_reported_with_full_path(self, differ: DocumentDiffer) -> None:
        override = copy.deepcopy(MASTER)
        override["clientInformation"]["contacts"][0]["phone"] = "555-0199"
        assert differ.diff(MASTER, override) == [
            FieldDifference(
                "clientInformation.contacts[0].phone", "555-0100", "555-0199"
            )
        ]

    def test_type_mismatch_is_a_difference(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff({"s": {"a": 1}}, {"s": {"a": "1"}})
        assert diffs == [FieldDifference("s.a", 1, "1")]

    def test_bool_and_int_differ(self, differ: DocumentDiffer) -> None:
        assert differ.diff({"s": {"a": True}}, {"s": {"a": 1}}) != []

    def test_int_and_float_differ(self, differ: DocumentDiffer) -> None:
        assert differ.diff({"s": {"a": 1}}, {"s": {"a": 1.0}}) == [
            FieldDifference("s.a", 1, 1.0)
        ]

    def test_object_versus_scalar(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff({"s": {"a": {"b": 1}}}, {"s": {"a": "b"}})
        assert diffs == [FieldDifference("s.a", {"b": 1}, "b")]

    def test_scalar_section(self, differ: DocumentDiffer) -> None:
        assert differ.diff({"s": 1}, {"s": 2}) == [FieldDifference("s", 1, 2)]

    @pytest.mark.parametrize(
        ("left", "right", "expected"),
        [
            (1, 1.0, False),
            (1.5, 1.5, True),
            (True, 1, False),
            (0, False, False),
            ("a", "a", True),
            (None, None, True),
            ("1", 1, False),
        ],
    )
    def test_scalars_equal(self, left: Any, right: Any, expected: bool) -> None:
        assert scalars_equal(left, right) is expected


# ---------------------------------------------------------------------------
# Absent sides
# ---------------------------------------------------------------------------


class TestAbsentSides:
    def test_section_only_in_master(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff({"s": {"a": 1}}, {})
        assert diffs == [FieldDifference("s", {"a": 1}, None)]

    def test_section_only_in_override(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff({}, {"s": {"a": 1}})
        assert diffs == [FieldDifference("s", None, {"a": 1})]

    def test_key_only_in_master(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff({"s": {"a": 1, "b": {"c": 2}}}, {"s": {"a": 1}})
        assert diffs == [FieldDifference("s.b", {"c": 2}, None)]

    def test_key_only_in_override_not_descended(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff({"s": {}}, {"s": {"b": {"c": 2, "d": 3}}})
        assert diffs == [FieldDifference("s.b", None, {"c": 2, "d": 3})]

    def test_order_is_master_keys_then_new_keys(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff(
            {"s": {"b": 1, "a": 1}},
            {"s": {"z": 1, "a": 2, "b": 2}},
        )
        assert [d.field_path for d in diffs] == ["s.b", "s.a", "s.z"]


# ---------------------------------------------------------------------------
# Lists
# ---------------------------------------------------------------------------


class TestLists:
    def test_length_mismatch_reported_once(self, differ: DocumentDiffer) -> None:
        a = {"name": "Jo"}
        b = {"name": "Al"}
        diffs = differ.diff({"items": [a]}, {"items": [a, b]})
        assert diffs == [FieldDifference("items", [a], [a, b])]

    def test_equal_length_compared_positionally(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff(
            {"s": {"tags": ["a", "b", "c"]}},
            {"s": {"tags": ["a", "x", "c"]}},
        )
        assert diffs == [FieldDifference("s.tags[1]", "b", "x")]

    def test_reordered_list_differs_per_position(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff({"s": {"tags": ["a", "b"]}}, {"s": {"tags": ["b", "a"]}})
        assert [d.field_path for d in diffs] == ["s.tags[0]", "s.tags[1]"]

    def test_nested_list_of_objects(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff(
            {"s": {"fees": [{"amount": 5}, {"amount": 7}]}},
            {"s": {"fees": [{"amount": 5}, {"amount": 8}]}},
        )
        assert diffs == [FieldDifference("s.fees[1].amount", 7, 8)]


class TestSelectableLists:
    def test_selection_order_matters(self, differ: DocumentDiffer) -> None:
        a = {"viewValue": "A", "selected": True}
        b = {"viewValue": "B", "selected": True}
        diffs = differ.diff({"s": {"pick": [a, b]}}, {"s": {"pick": [b, a]}})
        assert diffs == [
            FieldDifference(
                "s.pick", {"viewValues": ["A", "B"]}, {"viewValues": ["B", "A"]}
            )
        ]

    def test_unselected_options_ignored(self, differ: DocumentDiffer) -> None:
        master = [
            {"viewValue": "Mon", "selected": True},
            {"viewValue": "Tue", "selected": False},
        ]
        override = [{"viewValue": "Mon", "selected": True}]
        assert differ.diff({"s": {"days": master}}, {"s": {"days": override}}) == []

    def test_changed_selection(self, differ: DocumentDiffer) -> None:
        override = copy.deepcopy(MASTER)
        override["paymentRules"]["days"][1]["selected"] = True
        assert differ.diff(MASTER, override) == [
            FieldDifference(
                "paymentRules.days",
                {"viewValues": ["Mon"]},
                {"viewValues": ["Mon", "Tue"]},
            )
        ]


# ---------------------------------------------------------------------------
# Checkbox and choice fields
# ---------------------------------------------------------------------------


class TestChoiceFields:
    def test_checkbox_toggle_not_compared(self, differ: DocumentDiffer) -> None:
        """selected is a skip-set name, so toggling an option is no difference."""
        override = copy.deepcopy(MASTER)
        override["clientInformation"]["channels"]["card"]["selected"] = True
        assert differ.diff(MASTER, override) == []

    def test_wrapped_value_change_not_compared(self, differ: DocumentDiffer) -> None:
        override = copy.deepcopy(MASTER)
        override["paymentRules"]["frequency"]["value"] = "weekly"
        assert differ.diff(MASTER, override) == []

    def test_skip_names_ignored_at_any_depth(self, differ: DocumentDiffer) -> None:
        master = {"s": {"ach": {"selected": True}, "card": {"value": False}}}
        override = {"s": {"ach": {"selected": False}, "card": {"value": True}}}
        assert differ.diff(master, override) == []

    def test_choice_field_other_members_still_compared(
        self, differ: DocumentDiffer
    ) -> None:
        diffs = differ.diff(
            {"s": {"f": {"value": "x", "note": "a"}}},
            {"s": {"f": {"value": "x", "note": "b"}}},
        )
        assert diffs == [FieldDifference("s.f.note", "a", "b")]


# ---------------------------------------------------------------------------
# Skip set and excluded sections
# ---------------------------------------------------------------------------


class TestSkippedNames:
    def test_bookkeeping_fields_ignored(self, differ: DocumentDiffer) -> None:
        diffs = differ.diff(
            {"s": {"_id": 1, "updatedAt": "a", "name": "x"}},
            {"s": {"_id": 2, "updatedAt": "b", "name": "x"}},
        )
        assert diffs == []

    def test_bookkeeping_sections_ignored(self, differ: DocumentDiffer) -> None:
        assert differ.diff({"_id": "a"}, {"_id": "b"}) == []

    def test_revision_history_never_compared(self, differ: DocumentDiffer) -> None:
        override = copy.deepcopy(MASTER)
        override["revisionHistory"].append({"by": "site", "at": "2024-02-01"})
        assert differ.diff(MASTER, override) == []

    def test_custom_excluded_sections(self) -> None:
        config = EngineConfig(excluded_sections=frozenset({"audit"}))
        differ = DocumentDiffer(config=config)
        assert differ.diff({"audit": 1}, {"audit": 2}) == []
        assert differ.diff({"revisionHistory": 1}, {"revisionHistory": 2}) != []


# ---------------------------------------------------------------------------
# Normalization failures
# ---------------------------------------------------------------------------


class TestNormalizationFailure:
    def test_bad_section_reported_whole(
        self, differ: DocumentDiffer, caplog: pytest.LogCaptureFixture
    ) -> None:
        bad = {"a": {1, 2}}
        with caplog.at_level(logging.WARNING, logger="json_form_diff"):
            diffs = differ.diff(
                {"s": bad, "t": {"x": 1}}, {"s": {"a": 1}, "t": {"x": 2}}
            )
        assert diffs == [
            FieldDifference("s", bad, {"a": 1}),
            FieldDifference("t.x", 1, 2),
        ]
        assert "Failed to normalize section s" in caplog.text


# ---------------------------------------------------------------------------
# Pre-built nodes
# ---------------------------------------------------------------------------


class TestDiffNodes:
    def test_diff_nodes(self, differ: DocumentDiffer) -> None:
        builder = NodeBuilder()
        master = builder.build({"a": 1}, "root")
        override = builder.build({"a": 2}, "root")
        assert differ.diff_nodes(master, override) == [FieldDifference("root.a", 1, 2)]

    def test_diff_nodes_with_missing_side(self, differ: DocumentDiffer) -> None:
        override = NodeBuilder().build({"a": 2}, "root")
        assert differ.diff_nodes(None, override) == [
            FieldDifference("root", None, {"a": 2})
        ]
        assert differ.diff_nodes(None, None) == []


# ---------------------------------------------------------------------------
# Section reports
# ---------------------------------------------------------------------------


class TestSectionReport:
    def test_flags_per_top_level_field(self, differ: DocumentDiffer) -> None:
        report = differ.section_report(
            {"sec": {"a": 1, "b": {"c": 2}, "_id": 1}},
            {"sec": {"a": 1, "b": {"c": 3}, "d": "x", "_id": 2}},
            "sec",
        )
        assert report.field_flags == {"a": False, "b": True, "d": True}
        assert report.master_present and report.override_present
        assert report.has_differences

    def test_prefix_does_not_leak_to_sibling(self, differ: DocumentDiffer) -> None:
        report = differ.section_report(
            {"sec": {"a": 1, "ab": 1}}, {"sec": {"a": 1, "ab": 2}}, "sec"
        )
        assert report.field_flags == {"a": False, "ab": True}

    def test_equal_section(self, differ: DocumentDiffer) -> None:
        report = differ.section_report({"sec": {"a": 1}}, {"sec": {"a": 1}}, "sec")
        assert report.field_flags == {"a": False}
        assert not report.has_differences

    def test_section_missing_on_one_side(self, differ: DocumentDiffer) -> None:
        report = differ.section_report({"sec": {"a": 1}}, {}, "sec")
        assert report.field_flags == {}
        assert report.master_present
        assert not report.override_present
        assert report.has_differences

    def test_section_missing_on_both_sides(self, differ: DocumentDiffer) -> None:
        report = differ.section_report({}, {}, "sec")
        assert report.field_flags == {}
        assert not report.has_differences

    def test_unreadable_section_flags_every_field(self, differ: DocumentDiffer) -> None:
        report = differ.section_report(
            {"sec": {"a": {1, 2}, "b": 1}}, {"sec": {"a": 1, "b": 1}}, "sec"
        )
        assert report.field_flags == {"a": True, "b": True}
        assert report.section_differs

    def test_dataclass_section(self, differ: DocumentDiffer) -> None:
        report = differ.section_report(
            {"client": Client("Acme", "1")}, {"client": Client("Acme", "2")}, "client"
        )
        assert report.field_flags == {"name": False, "phone": True}
        assert not report.section_differs
        assert report.has_differences

    def test_scalar_section_flagged_whole(self, differ: DocumentDiffer) -> None:
        report = differ.section_report({"sec": "x"}, {"sec": "y"}, "sec")
        assert report.field_flags == {}
        assert report.section_differs
        assert report.has_differences

    def test_equal_scalar_section(self, differ: DocumentDiffer) -> None:
        report = differ.section_report({"sec": "x"}, {"sec": "x"}, "sec")
        assert not report.has_differences
