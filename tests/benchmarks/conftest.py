"""Deterministic form generators for performance benchmarks.

All generators produce fixed, reproducible forms. No random values.
Three tiers: 10-field flat, 100-field nested, 1000-field multi-section.
Each tier provides a master form and an edited site copy of it.

Forms mix the recurring shapes (checkbox groups, selectable lists, lists of
objects, wrapped values) so every branch of the counter and differ is timed.
"""

from __future__ import annotations

import copy
from typing import Any

import pytest


def generate_flat_section(num_fields: int, prefix: str = "field") -> dict[str, Any]:
    """Generate a flat section with every third field left empty."""
    return {
        f"{prefix}{i}": "" if i % 3 == 0 else f"value {i}" for i in range(num_fields)
    }


def _make_nested_section(index: int) -> dict[str, Any]:
    """Generate one section of roughly 20 fields across all shapes."""
    return {
        "details": generate_flat_section(8, prefix=f"detail{index}_"),
        "channels": {f"option{j}": {"selected": j == index % 4} for j in range(4)},
        "days": [
            {"viewValue": day, "selected": j % 2 == 0}
            for j, day in enumerate(["Mon", "Tue", "Wed", "Thu", "Fri"])
        ],
        "contacts": [
            {"name": f"Contact {index}.{j}", "email": "", "phone": f"555-01{j:02d}"}
            for j in range(3)
        ],
        "frequency": {"value": "monthly"},
    }


def _make_form(num_sections: int) -> dict[str, Any]:
    form: dict[str, Any] = {"_id": {"$oid": "65f0c0ffee"}}
    for i in range(num_sections):
        form[f"section{i}"] = _make_nested_section(i)
    form["revisionHistory"] = [{"by": "admin", "note": f"rev {i}"} for i in range(20)]
    return form


def _edit(form: dict[str, Any]) -> dict[str, Any]:
    """Return a site copy with a handful of edits spread over the form."""
    edited = copy.deepcopy(form)
    for name, section in edited.items():
        if not name.startswith("section"):
            continue
        section["contacts"][0]["email"] = "edited@example.com"
        section["days"][1]["selected"] = True
    return edited


def _pair(form: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    return form, _edit(form)


# --- Fixtures for each size tier ---


@pytest.fixture
def pair_10field() -> tuple[dict[str, Any], dict[str, Any]]:
    """10-field single flat section."""
    form = {"clientInformation": generate_flat_section(10)}
    edited = copy.deepcopy(form)
    edited["clientInformation"]["field0"] = "filled"
    return form, edited


@pytest.fixture
def pair_100field() -> tuple[dict[str, Any], dict[str, Any]]:
    """~100-field form: 5 nested sections."""
    return _pair(_make_form(5))


@pytest.fixture
def pair_1000field() -> tuple[dict[str, Any], dict[str, Any]]:
    """~1000-field form: 50 nested sections."""
    return _pair(_make_form(50))
