"""FieldCounter: counts the fields of a form document and how many are filled.

The traversal is a fold: every level returns an immutable ScoreResult and the
parent adds its children's results together.  No counters are shared between
levels or between calls.

Classification of an object member:

- checkbox group        -> one field, filled if any option is checked
- choice field          -> one field, filled per ``is_field_valid``
- other object          -> recurse
- list                  -> see ``_count_list``
- scalar                -> one field, filled per ``is_field_valid``
"""

from __future__ import annotations

from typing import Any

from json_form_diff.algorithm.config import EngineConfig
from json_form_diff.algorithm.predicates import (
    is_checkbox_group,
    is_checkbox_group_list,
    is_choice_field,
    is_field_valid,
    is_option_checked,
    is_true,
)
from json_form_diff.result import ScoreResult
from json_form_diff.tree.builder import NodeBuilder
from json_form_diff.tree.nodes import DocumentNode

__all__ = ["FieldCounter"]


class FieldCounter:
    """Counts total and filled fields of a DocumentNode tree.

    Example::

        counter = FieldCounter()
        counter.count_value({"a": "", "b": "filled", "c": {"selected": True}})
        # ScoreResult(total_fields=3, filled_fields=2)
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self._config = config if config is not None else EngineConfig()
        self._builder = NodeBuilder()

    @property
    def config(self) -> EngineConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def count_value(self, value: Any, path: str = "") -> ScoreResult:
        """Normalize ``value`` and count its fields.

        Raises:
            NormalizationError: If ``value`` cannot be normalized.
        """
        if value is None:
            return ScoreResult()
        return self.count(self._builder.build(value, path))

    def count(self, node: DocumentNode | None) -> ScoreResult:
        """Count the fields of an already-normalized node.

        A missing or null root counts nothing; null members of an object are
        still one unfilled field each.
        """
        if node is None or node.is_null:
            return ScoreResult()
        if node.is_object:
            return self._count_object(node)
        if node.is_list:
            return self._count_list(node)
        return ScoreResult.single(is_field_valid(node, self._config))

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _count_object(self, node: DocumentNode) -> ScoreResult:
        result = ScoreResult()
        for key, child in node.entries.items():
            if self._config.should_skip(key):
                continue
            result += self._count_member(child)
        return result

    def _count_member(self, child: DocumentNode) -> ScoreResult:
        if child.is_object:
            if is_checkbox_group(child, self._config):
                return self._count_checkbox_group(child)
            if is_choice_field(child, self._config):
                return ScoreResult.single(is_field_valid(child, self._config))
            return self._count_object(child)
        if child.is_list:
            return self._count_list(child)
        return ScoreResult.single(is_field_valid(child, self._config))

    def _count_checkbox_group(self, node: DocumentNode) -> ScoreResult:
        checked = any(
            is_option_checked(option, self._config)
            for option in node.entries.values()
            if option.is_object
        )
        return ScoreResult.single(checked)

    def _count_list(self, node: DocumentNode) -> ScoreResult:
        """Count a list member.

        - empty                    -> no field at all
        - checkbox-group list      -> one field, filled if any item is selected
        - list of objects          -> the fields of every element, summed
        - list of scalars / lists  -> one field for the whole list
        """
        first = node.first()
        if first is None:
            return ScoreResult()

        if is_checkbox_group_list(node, self._config):
            selected = any(
                is_true(item.get(self._config.selected_key))
                for item in node.items
                if item.is_object
            )
            return ScoreResult.single(selected)

        if first.is_object:
            result = ScoreResult()
            for item in node.items:
                result += self.count(item)
            return result

        return ScoreResult.single(is_field_valid(node, self._config))
