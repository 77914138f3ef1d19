"""DocumentNode dataclass and NodeKind StrEnum for form-document trees.

Every form section is normalized into this tagged representation once, at the
boundary, so the counting and diffing passes only ever branch on ``kind``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any


class NodeKind(StrEnum):
    """Enumeration of the three node kinds of a form document.

    - OBJECT -> "object" : ordered mapping of field name to node
    - LIST   -> "list"   : ordered sequence of nodes
    - SCALAR -> "scalar" : leaf value (str, int, float, bool, None)
    """

    OBJECT = auto()
    LIST = auto()
    SCALAR = auto()


@dataclass(slots=True)
class DocumentNode:
    """A node in a normalized form document.

    Attributes:
        kind:    Which variant this node is (see NodeKind).
        path:    Dot/bracket path from the section root, e.g.
                 ``"paymentChannels.fees[0].amount"``.
        value:   The scalar value for SCALAR nodes; None for OBJECT and LIST.
        entries: Child nodes keyed by field name (OBJECT only).
        items:   Child nodes in order (LIST only).
    """

    kind: NodeKind
    path: str = ""
    value: Any = None
    entries: dict[str, DocumentNode] = field(default_factory=dict)
    items: list[DocumentNode] = field(default_factory=list)

    @property
    def is_object(self) -> bool:
        return self.kind == NodeKind.OBJECT

    @property
    def is_list(self) -> bool:
        return self.kind == NodeKind.LIST

    @property
    def is_scalar(self) -> bool:
        return self.kind == NodeKind.SCALAR

    @property
    def is_null(self) -> bool:
        """True for a SCALAR node holding None."""
        return self.kind == NodeKind.SCALAR and self.value is None

    def get(self, key: str) -> DocumentNode | None:
        """Return the child stored under ``key`` of an OBJECT node, if any."""
        return self.entries.get(key)

    def first(self) -> DocumentNode | None:
        """Return the first element of a LIST node, or None when empty."""
        return self.items[0] if self.items else None

    def to_python(self) -> Any:
        """Convert this node back into plain dict / list / scalar values."""
        if self.kind == NodeKind.OBJECT:
            return {key: child.to_python() for key, child in self.entries.items()}
        if self.kind == NodeKind.LIST:
            return [child.to_python() for child in self.items]
        return self.value
