"""algorithm subpackage: the counting and diffing passes over form documents.

Provides the field counter, the document differ, their shared configuration
and the shape predicates both passes rely on.  Import from this module (not
from sub-modules directly) to stay on the stable public interface.

Example::

    from json_form_diff.algorithm import DocumentDiffer, FieldCounter

    FieldCounter().count_value({"name": "Acme", "phone": ""})
    # ScoreResult(total_fields=2, filled_fields=1)
    DocumentDiffer().diff({"client": {"name": "Acme"}}, {"client": {"name": "Acme"}})
    # []
"""

from __future__ import annotations

from json_form_diff.algorithm.config import EngineConfig
from json_form_diff.algorithm.counter import FieldCounter
from json_form_diff.algorithm.differ import DocumentDiffer

__all__ = ["DocumentDiffer", "EngineConfig", "FieldCounter"]
