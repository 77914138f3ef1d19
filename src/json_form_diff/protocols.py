"""FormLoader Protocol: the collaborator that materializes form documents.

The engine never touches storage.  Callers that want a one-call comparison by
identifier hand in any object with the two loader methods below; no
inheritance is required.

Example::

    from json_form_diff.protocols import FormLoader

    class InMemoryLoader:
        def __init__(self, masters, overrides):
            self._masters, self._overrides = masters, overrides

        def load_master(self, form_id):
            return self._masters.get(form_id)

        def load_override(self, form_id):
            return self._overrides.get(form_id)

    assert isinstance(InMemoryLoader({}, {}), FormLoader)  # structural conformance
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class FormLoader(Protocol):
    """Structural protocol for loading master and override form documents.

    Both methods return the document (a mapping of section name to section
    value, or a dataclass) or None when no such document exists.
    """

    def load_master(self, form_id: str) -> Any: ...

    def load_override(self, form_id: str) -> Any: ...
