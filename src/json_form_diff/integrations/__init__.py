"""Integrations subpackage for json-form-diff.

Contains the pytest plugin (auto-discovered via the pytest11 entry point),
which provides the ``assert_forms_match`` fixture.
"""

from __future__ import annotations

__all__: list[str] = []
