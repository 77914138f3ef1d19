"""EngineConfig: immutable settings shared by the counting and diffing passes.

The defaults describe the conventions of onboarding form documents: the
bookkeeping field names that are never scored or compared, the section that is
never diffed, and the key names used by checkbox and multi-select shapes.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_SKIP_FIELDS: frozenset[str] = frozenset(
    {
        "_id",
        "createdAt",
        "updatedAt",
        "class",
        "$oid",
        "$date",
        "selected",
        "value",
    }
)

DEFAULT_EXCLUDED_SECTIONS: frozenset[str] = frozenset({"revisionHistory"})


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable configuration for FieldCounter, DocumentDiffer and ScoreAggregator.

    Attributes:
        skip_fields: Field names that are never counted or diffed, at any
            depth.  Must contain ``selected_key`` and ``value_key``, which are
            consumed by the checkbox rules instead of being fields themselves.
        excluded_sections: Section names the differ never compares.
        selected_key: Key carrying the checked state of a checkbox option.
        value_key: Alternate key carrying a checkbox option's state or a
            wrapped field value.
        view_value_key: Key carrying the display label of a selectable option.
    """

    skip_fields: frozenset[str] = DEFAULT_SKIP_FIELDS
    excluded_sections: frozenset[str] = DEFAULT_EXCLUDED_SECTIONS
    selected_key: str = "selected"
    value_key: str = "value"
    view_value_key: str = "viewValue"

    def __post_init__(self) -> None:
        # Accept any iterable of names but store frozensets.
        object.__setattr__(self, "skip_fields", frozenset(self.skip_fields))
        object.__setattr__(self, "excluded_sections", frozenset(self.excluded_sections))
        for name in ("selected_key", "value_key", "view_value_key"):
            if not getattr(self, name):
                msg = f"{name} must be a non-empty string"
                raise ValueError(msg)
        if len({self.selected_key, self.value_key, self.view_value_key}) != 3:
            msg = (
                "selected_key, value_key and view_value_key must be distinct, got "
                f"{self.selected_key!r}, {self.value_key!r}, {self.view_value_key!r}"
            )
            raise ValueError(msg)
        missing = {self.selected_key, self.value_key} - self.skip_fields
        if missing:
            msg = f"skip_fields must include the checkbox keys, missing {sorted(missing)}"
            raise ValueError(msg)

    def should_skip(self, field_name: str) -> bool:
        """Return True if ``field_name`` is bookkeeping and must be ignored."""
        return field_name in self.skip_fields
