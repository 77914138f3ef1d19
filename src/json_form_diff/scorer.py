"""ScoreAggregator: turns field counts over one or more sections into a 0-100 score.

The aggregator is shape-agnostic about what a "section" is: it scores a full
form (one entry per form section) exactly the way it scores a single list item
such as one site's form.

Formula:
    total  = sum(count(section).total_fields  for each present section)
    filled = sum(count(section).filled_fields for each present section)
    score  = 0.0 if total == 0 else filled / total * 100

A section that cannot be normalized contributes nothing and is logged; it
never aborts the scoring of the other sections.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Mapping
from typing import Any

import numpy as np

from json_form_diff.algorithm.config import EngineConfig
from json_form_diff.algorithm.counter import FieldCounter
from json_form_diff.result import ScoreResult
from json_form_diff.tree.builder import NormalizationError, sections_of

__all__ = ["ScoreAggregator", "iter_sections"]

logger = logging.getLogger(__name__)

Sections = Mapping[str, Any] | Iterable[tuple[str, Any]]


def iter_sections(sections: Sections) -> Iterable[tuple[str, Any]]:
    """Yield ``(name, value)`` pairs from a form or an iterable of pairs.

    A form is a mapping of section name to value or a dataclass instance.
    """
    if isinstance(sections, Mapping) or dataclasses.is_dataclass(sections):
        return ((str(name), value) for name, value in sections_of(sections).items())
    return ((str(name), value) for name, value in sections)


class ScoreAggregator:
    """Scores form sections by the share of their fields that are filled.

    Example::

        from json_form_diff.scorer import ScoreAggregator

        aggregator = ScoreAggregator()
        aggregator.score({"client": {"a": "", "b": "filled", "c": {"selected": True}}})
        # 66.666...
        aggregator.score({"client": {}}, precision=0)
        # 0.0
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        """Initialise the aggregator with a single reusable FieldCounter.

        Args:
            config: Engine settings forwarded to ``FieldCounter``.  Defaults to
                ``EngineConfig()`` when None.
        """
        self._counter = FieldCounter(config=config)

    @property
    def config(self) -> EngineConfig:
        return self._counter.config

    def count(self, sections: Sections) -> ScoreResult:
        """Sum the field counts of every present section.

        Sections whose value is None, or whose name is a bookkeeping name,
        are skipped.
        """
        total = ScoreResult()
        for name, value in iter_sections(sections):
            if value is None or self.config.should_skip(name):
                continue
            total += self.count_section(name, value)
        return total

    def count_section(self, name: str, value: Any) -> ScoreResult:
        """Count one section, degrading to an empty result on bad input."""
        try:
            result = self._counter.count_value(value, path=name)
        except NormalizationError as exc:
            logger.warning("Failed to normalize section %s: %s", name, exc)
            return ScoreResult()
        logger.debug(
            "Section %s - Total: %d, Filled: %d",
            name,
            result.total_fields,
            result.filled_fields,
        )
        return result

    def score(self, sections: Sections, precision: int | None = None) -> float:
        """Return the completion percentage of ``sections`` in [0, 100].

        Args:
            sections:  Mapping of section name to value, or an iterable of
                ``(name, value)`` pairs.
            precision: Decimal places to round to.  None leaves the value
                unrounded; documents usually use 0, aggregates 1.

        Returns:
            0.0 when the sections hold no fields at all.
        """
        return self.count(sections).percentage(precision)

    @staticmethod
    def average(scores: Iterable[float], precision: int | None = None) -> float:
        """Return the mean of ``scores``, or 0.0 when there are none."""
        values = np.fromiter(scores, dtype=float)
        if values.size == 0:
            return 0.0
        mean = float(np.mean(values))
        return mean if precision is None else round(mean, precision)
