"""Shape predicates shared by FieldCounter and DocumentDiffer.

Form documents carry no schema, so a handful of recurring shapes are detected
heuristically.  Each heuristic lives in exactly one named function here so the
detection rules can be audited and tested without touching the traversals:

- ``is_checkbox_option``      {"selected": true}            one checkbox
- ``is_checkbox_group``       {"a": {"selected": true}, ...} a group of them
- ``is_choice_field``         {"value": "x"}                 wrapped single field
- ``is_checkbox_group_list``  [{"label": .., "selected": false}, ...]
- ``is_selectable_list``      [{"viewValue": .., "selected": true}, ...]
- ``is_field_valid``          the "is this field filled?" rule

Lists are always classified by their first element.
"""

from __future__ import annotations

from json_form_diff.algorithm.config import EngineConfig
from json_form_diff.tree.nodes import DocumentNode

__all__ = [
    "is_checkbox_group",
    "is_checkbox_group_list",
    "is_checkbox_option",
    "is_choice_field",
    "is_field_valid",
    "is_option_checked",
    "is_selectable_list",
    "is_true",
    "is_valid_string",
    "selected_view_values",
]


def is_true(node: DocumentNode | None) -> bool:
    """Return True only for a SCALAR node holding the boolean ``True``."""
    return node is not None and node.is_scalar and node.value is True


def _is_bool(node: DocumentNode) -> bool:
    return node.is_scalar and isinstance(node.value, bool)


def is_valid_string(text: str) -> bool:
    """A string is filled unless empty or the literal text ``"null"``."""
    return text != "" and text != "null"


def is_checkbox_option(node: DocumentNode, config: EngineConfig) -> bool:
    """Return True for a non-empty object holding only boolean selected/value entries."""
    if not node.is_object or not node.entries:
        return False
    return all(
        key in (config.selected_key, config.value_key) and _is_bool(child)
        for key, child in node.entries.items()
    )


def is_option_checked(node: DocumentNode, config: EngineConfig) -> bool:
    """Return True if a checkbox option is ticked via ``selected`` or ``value``."""
    return is_true(node.get(config.selected_key)) or is_true(node.get(config.value_key))


def is_checkbox_group(node: DocumentNode, config: EngineConfig) -> bool:
    """Return True if ``node`` is a named cluster of checkbox options.

    The object must have at least one object-valued member, and every
    object-valued member must be a checkbox option.  Scalar members (labels,
    notes) are tolerated and ignored.
    """
    if not node.is_object:
        return False
    members = [child for child in node.entries.values() if child.is_object]
    return bool(members) and all(is_checkbox_option(m, config) for m in members)


def is_choice_field(node: DocumentNode, config: EngineConfig) -> bool:
    """Return True for an object that wraps a single field in selected/value."""
    return node.is_object and (
        config.selected_key in node.entries or config.value_key in node.entries
    )


def is_checkbox_group_list(node: DocumentNode, config: EngineConfig) -> bool:
    """Return True for a list whose first element carries a boolean ``selected``."""
    first = node.first() if node.is_list else None
    if first is None or not first.is_object:
        return False
    selected = first.get(config.selected_key)
    return selected is not None and _is_bool(selected)


def is_selectable_list(node: DocumentNode | None, config: EngineConfig) -> bool:
    """Return True for a list of labelled options (``viewValue`` + ``selected``)."""
    if node is None or not node.is_list:
        return False
    first = node.first()
    return (
        first is not None
        and first.is_object
        and config.view_value_key in first.entries
        and config.selected_key in first.entries
    )


def _label(node: DocumentNode | None) -> str:
    if node is None or node.is_null:
        return ""
    if node.is_scalar:
        if isinstance(node.value, bool):
            return "true" if node.value else "false"
        return str(node.value)
    return str(node.to_python())


def selected_view_values(node: DocumentNode, config: EngineConfig) -> list[str]:
    """Reduce a selectable list to the ordered labels of its selected options."""
    labels = (
        _label(item.get(config.view_value_key))
        for item in node.items
        if item.is_object and is_true(item.get(config.selected_key))
    )
    return [label for label in labels if label]


def is_field_valid(node: DocumentNode | None, config: EngineConfig) -> bool:
    """Return True if the value counts as a filled field.

    Rules:
        - None / null                     -> False
        - str                             -> not empty and not "null"
        - bool                            -> the bool itself
        - other scalars (numbers)         -> True
        - object with ``selected``        -> selected is True
        - object with ``value``           -> the rule applied to ``value``
        - other object                    -> True when non-empty
        - list                            -> False when empty; when the first
          element is an object, True only if some element is selected;
          otherwise True
    """
    if node is None or node.is_null:
        return False

    if node.is_scalar:
        if isinstance(node.value, bool):
            return node.value
        if isinstance(node.value, str):
            return is_valid_string(node.value)
        return True

    if node.is_object:
        if config.selected_key in node.entries:
            return is_true(node.entries[config.selected_key])
        if config.value_key in node.entries:
            return is_field_valid(node.entries[config.value_key], config)
        return bool(node.entries)

    first = node.first()
    if first is None:
        return False
    if first.is_object:
        return any(
            item.is_object and is_true(item.get(config.selected_key))
            for item in node.items
        )
    return True
