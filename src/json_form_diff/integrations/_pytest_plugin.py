"""pytest plugin shipping the ``assert_forms_match`` fixture.

Registered through the ``pytest11`` entry point in pyproject.toml, so any test
suite in an environment where json-form-diff is installed (editable installs
included) can request the fixture without touching its conftest.py.
"""

from __future__ import annotations

from typing import Any

import pytest

from json_form_diff import EngineConfig, diff_forms


@pytest.fixture(scope="session")
def assert_forms_match() -> Any:
    """Fixture that returns a callable form-equivalence asserter.

    Session-scoped: the callable holds no state and every call goes through
    diff_forms(), which builds its own DocumentDiffer.

    Usage in tests::

        def test_site_copy(assert_forms_match):
            assert_forms_match(site_form, master_form)

        def test_site_override(assert_forms_match):
            with pytest.raises(AssertionError, match=r"clientInformation.phone"):
                assert_forms_match(
                    {"clientInformation": {"phone": "1"}},
                    {"clientInformation": {"phone": "2"}},
                )

    Returns:
        A callable ``_assert(actual, expected, config=None) -> None`` that raises
        ``AssertionError`` when the two forms have at least one difference.
    """

    def _assert(
        actual: Any,
        expected: Any,
        config: EngineConfig | None = None,
    ) -> None:
        """Assert that two form documents have no field-level differences.

        Args:
            actual:   The form produced by the code under test.
            expected: The reference form (compared as the master side).
            config:   Optional EngineConfig for custom skip sets or keys.

        Raises:
            AssertionError: When differences exist, with one line per
                difference giving its path, expected and actual values.
        """
        differences = diff_forms(expected, actual, config=config)
        if differences:
            lines = "\n".join(
                f"  {d.field_path}: expected={d.master_value!r} "
                f"actual={d.override_value!r}"
                for d in differences
            )
            raise AssertionError(
                f"Forms differ in {len(differences)} field(s):\n{lines}"
            )

    return _assert
