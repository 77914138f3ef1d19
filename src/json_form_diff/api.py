"""Public API functions for json-form-diff.

Each call creates fresh engine objects (FieldCounter, ScoreAggregator,
DocumentDiffer) so that no state is shared between calls; every function is
safe to call concurrently from many request handlers.
"""

from __future__ import annotations

from typing import Any

from json_form_diff.algorithm.config import EngineConfig
from json_form_diff.algorithm.counter import FieldCounter
from json_form_diff.algorithm.differ import DocumentDiffer
from json_form_diff.protocols import FormLoader
from json_form_diff.result import FieldDifference, ScoreResult, SectionReport
from json_form_diff.scorer import ScoreAggregator, Sections
from json_form_diff.tree.builder import sections_of

__all__ = [
    "compare_section",
    "completion_score",
    "count_fields",
    "diff_forms",
    "diff_from_loader",
]


def count_fields(value: Any, config: EngineConfig | None = None) -> ScoreResult:
    """Return the total and filled field counts of one form value.

    Args:
        value:  A section, a whole form, or any nested part of one.
        config: Engine settings. Defaults to ``EngineConfig()`` when None.

    Returns:
        A ``ScoreResult``; ``ScoreResult(0, 0)`` for None.

    Raises:
        NormalizationError: If ``value`` contains unsupported types.
    """
    return FieldCounter(config=config).count_value(value)


def completion_score(
    sections: Sections,
    precision: int | None = None,
    config: EngineConfig | None = None,
) -> float:
    """Return the completion percentage of a form in [0, 100].

    Args:
        sections:  Mapping of section name to section value (a form), or an
                   iterable of ``(name, value)`` pairs.  A dataclass form is
                   accepted too.
        precision: Decimal places to round to. None leaves the value unrounded.
        config:    Engine settings. Defaults to ``EngineConfig()`` when None.

    Returns:
        0.0 when the form holds no fields; otherwise filled / total * 100.
    """
    return ScoreAggregator(config=config).score(sections, precision=precision)


def diff_forms(
    master: Any,
    override: Any,
    config: EngineConfig | None = None,
) -> list[FieldDifference]:
    """Return the field-level differences between a master and an override form.

    Args:
        master:   The master form: mapping of section name to value, a
                  dataclass, or None (no sections).
        override: The override form, same shapes accepted.
        config:   Engine settings. Defaults to ``EngineConfig()`` when None.

    Returns:
        The differences; an empty list when the forms are equivalent.
    """
    return DocumentDiffer(config=config).diff(sections_of(master), sections_of(override))


def compare_section(
    master: Any,
    override: Any,
    section_name: str,
    config: EngineConfig | None = None,
) -> SectionReport:
    """Return a per-field "differs" map for one section of two forms."""
    return DocumentDiffer(config=config).section_report(
        sections_of(master), sections_of(override), section_name
    )


def diff_from_loader(
    loader: FormLoader,
    master_id: str,
    override_id: str,
    config: EngineConfig | None = None,
) -> list[FieldDifference]:
    """Load a master and an override form and return their differences.

    A document the loader cannot find (None) is compared as a form with no
    sections, so every section of the other side is reported.
    """
    master = loader.load_master(master_id)
    override = loader.load_override(override_id)
    return diff_forms(master, override, config=config)
