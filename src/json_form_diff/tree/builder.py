"""NodeBuilder: normalizes an in-memory form document into a DocumentNode tree.

Uses recursive dispatch to convert mappings, sequences, dataclass instances and
scalar values into DocumentNode objects. Field paths are built during
traversal in dot/bracket notation:

- The root carries the path it is built with (usually the section name).
- Object members append ``.{key}`` (or just ``{key}`` under an empty root).
- List elements append ``[{index}]``.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from datetime import date, datetime, time
from enum import Enum
from typing import Any

from json_form_diff.tree.nodes import DocumentNode, NodeKind

__all__ = [
    "NodeBuilder",
    "NormalizationError",
    "child_path",
    "index_path",
    "sections_of",
]


class NormalizationError(TypeError):
    """Raised when a value cannot be represented as a DocumentNode."""

    def __init__(self, value: Any, path: str) -> None:
        self.value = value
        self.path = path
        where = path or "<root>"
        super().__init__(f"Unsupported form value type at {where}: {type(value)!r}")


def sections_of(document: Any) -> Mapping[str, Any]:
    """Return a form document's top-level sections as a mapping.

    Accepts a mapping, a dataclass instance or None (no sections).

    Raises:
        NormalizationError: For any other document type.
    """
    if document is None:
        return {}
    if isinstance(document, Mapping):
        return document
    if dataclasses.is_dataclass(document) and not isinstance(document, type):
        return {f.name: getattr(document, f.name) for f in dataclasses.fields(document)}
    raise NormalizationError(document, "")


def child_path(path: str, key: str) -> str:
    """Return the path of member ``key`` under ``path``."""
    return f"{path}.{key}" if path else key


def index_path(path: str, index: int) -> str:
    """Return the path of element ``index`` under ``path``."""
    return f"{path}[{index}]"


@dataclasses.dataclass
class NodeBuilder:
    """Converts a semi-structured form value into a typed DocumentNode tree.

    The dispatch order matters: bool MUST be checked before int because bool
    is a subclass of int in Python, and str before the generic sequence check.

    Beyond plain JSON values the builder accepts dataclass instances (walked
    field by field), Enum members (their ``value``) and date/datetime/time
    objects (ISO-8601 strings), which is what model objects handed over by a
    persistence layer usually contain.

    Example::
        builder = NodeBuilder()
        node = builder.build({"name": "Acme", "tags": ["a"]}, path="clientInformation")
        node.get("tags").path   # "clientInformation.tags"
    """

    def build(self, value: Any, path: str = "") -> DocumentNode:
        """Convert a value to a DocumentNode tree.

        Args:
            value: The value to normalize.
            path:  Path of the resulting root node. Defaults to "".

        Returns:
            A DocumentNode tree rooted at the appropriate node kind.

        Raises:
            NormalizationError: If the value (or any nested value) has an
                unsupported type.
        """
        # bool MUST be checked before int
        if isinstance(value, bool) or value is None:
            return DocumentNode(kind=NodeKind.SCALAR, path=path, value=value)

        if isinstance(value, (str, int, float)):
            return DocumentNode(kind=NodeKind.SCALAR, path=path, value=value)

        if isinstance(value, Enum):
            return self.build(value.value, path)

        if isinstance(value, (datetime, date, time)):
            return DocumentNode(
                kind=NodeKind.SCALAR, path=path, value=value.isoformat()
            )

        if isinstance(value, Mapping):
            return self._build_object(value.items(), path)

        if isinstance(value, (list, tuple)):
            return self._build_list(value, path)

        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            pairs = (
                (f.name, getattr(value, f.name)) for f in dataclasses.fields(value)
            )
            return self._build_object(pairs, path)

        raise NormalizationError(value, path)

    def _build_object(self, pairs: Any, path: str) -> DocumentNode:
        node = DocumentNode(kind=NodeKind.OBJECT, path=path)
        for key, val in pairs:
            name = str(key)
            node.entries[name] = self.build(val, child_path(path, name))
        return node

    def _build_list(self, seq: list[Any] | tuple[Any, ...], path: str) -> DocumentNode:
        node = DocumentNode(kind=NodeKind.LIST, path=path)
        for idx, item in enumerate(seq):
            node.items.append(self.build(item, index_path(path, idx)))
        return node
