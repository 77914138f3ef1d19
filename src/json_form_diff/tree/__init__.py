"""Tree subpackage for form-document normalization primitives.

Re-exports the public API for the tree module:
- DocumentNode: dataclass representing a node in a normalized form document
- NodeKind: StrEnum of the three node kinds (OBJECT, LIST, SCALAR)
- NodeBuilder: converts an in-memory form value into a DocumentNode tree
- NormalizationError: raised for values that have no DocumentNode form
"""

from json_form_diff.tree.builder import NodeBuilder, NormalizationError
from json_form_diff.tree.nodes import DocumentNode, NodeKind

__all__ = ["DocumentNode", "NodeBuilder", "NodeKind", "NormalizationError"]
