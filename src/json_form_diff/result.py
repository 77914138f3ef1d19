"""Result dataclasses returned by the scoring and diffing passes.

All results are frozen: they are built fresh per call and safe to hand across
threads when per-site work is fanned out.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = [
    "FieldDifference",
    "ScoreResult",
    "SectionReport",
    "SiteDifference",
]


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Field counts for one traversal, combined additively with ``+``.

    Attributes:
        total_fields:  Number of fields found (>= 0).
        filled_fields: Number of those fields holding a value
            (0 <= filled_fields <= total_fields).
    """

    total_fields: int = 0
    filled_fields: int = 0

    def __post_init__(self) -> None:
        if self.total_fields < 0:
            msg = f"total_fields must be >= 0, got {self.total_fields}"
            raise ValueError(msg)
        if not 0 <= self.filled_fields <= self.total_fields:
            msg = (
                f"filled_fields must be in [0, {self.total_fields}], "
                f"got {self.filled_fields}"
            )
            raise ValueError(msg)

    @classmethod
    def single(cls, filled: bool) -> ScoreResult:
        """Return the result of a single field, filled or not."""
        return cls(total_fields=1, filled_fields=1 if filled else 0)

    def __add__(self, other: ScoreResult) -> ScoreResult:
        if not isinstance(other, ScoreResult):
            return NotImplemented
        return ScoreResult(
            total_fields=self.total_fields + other.total_fields,
            filled_fields=self.filled_fields + other.filled_fields,
        )

    def percentage(self, precision: int | None = None) -> float:
        """Return the filled share in [0, 100]; 0.0 when there are no fields.

        Args:
            precision: Decimal places to round to.  None leaves the value
                unrounded.
        """
        if self.total_fields == 0:
            return 0.0
        pct = (self.filled_fields / self.total_fields) * 100
        return pct if precision is None else round(pct, precision)


@dataclass(frozen=True, slots=True)
class FieldDifference:
    """One disagreement between a master form and an override form.

    Attributes:
        field_path:     Dot/bracket path of the field, rooted at the section name
                        (e.g. ``"paymentChannels.fees[0].amount"``).
        master_value:   The master's value as plain Python data (None if absent).
        override_value: The override's value as plain Python data (None if absent).
    """

    field_path: str
    master_value: Any
    override_value: Any


@dataclass(frozen=True, slots=True)
class SiteDifference:
    """All differences between the master form and one site's override form."""

    site_id: str
    site_name: str
    differences: list[FieldDifference] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SectionReport:
    """Per-field difference flags for a single named section.

    Attributes:
        section_name:     The compared section.
        field_flags:      Field name -> True when that field (or anything under
                          it) differs.  Empty when a side is missing.
        master_present:   Whether the master has the section.
        override_present: Whether the override has the section.
        section_differs:  True when a difference was reported for the section
                          as a whole (scalar or unreadable sections).
    """

    section_name: str
    field_flags: dict[str, bool]
    master_present: bool
    override_present: bool
    section_differs: bool = False

    @property
    def has_differences(self) -> bool:
        if self.master_present != self.override_present or self.section_differs:
            return True
        return any(self.field_flags.values())
