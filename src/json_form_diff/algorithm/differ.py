"""DocumentDiffer: field-level difference report between a master and an override form.

Walks two documents of matching section shape in lock-step and emits one
FieldDifference per disagreeing field.

Architecture:
- Sections are compared by name over the union of both sides' section names,
  master order first.  Excluded sections (revision history) and bookkeeping
  names are never compared.
- Each section is normalized into a DocumentNode tree rooted at the section
  name, so every node already knows its dot/bracket path.
- A side that is absent (or None) is itself the difference: it is reported
  once and nothing beneath it is visited.
- Selectable lists are compared by their ordered selected labels rather than
  element by element.
- Lists of different lengths are reported once with both full lists; equal
  lengths are compared position by position.

A section that cannot be normalized is reported as one whole-section
difference carrying both raw values, and logged.  It never aborts the
comparison of the remaining sections.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from json_form_diff.algorithm.config import EngineConfig
from json_form_diff.algorithm.predicates import is_selectable_list, selected_view_values
from json_form_diff.result import FieldDifference, SectionReport
from json_form_diff.tree.builder import NodeBuilder, NormalizationError, child_path
from json_form_diff.tree.nodes import DocumentNode

__all__ = ["DocumentDiffer"]

logger = logging.getLogger(__name__)

VIEW_VALUES = "viewValues"


def _union_keys(left: Mapping[str, Any], right: Mapping[str, Any]) -> list[str]:
    """Keys of ``left`` in order, followed by the keys only ``right`` has."""
    keys = list(left)
    keys.extend(k for k in right if k not in left)
    return keys


def scalars_equal(left: Any, right: Any) -> bool:
    """Plain equality that never equates values of different types.

    ``True == 1``, ``0 == False`` and ``1 == 1.0`` hold in Python but are
    differences in a form.
    """
    return type(left) is type(right) and left == right


class DocumentDiffer:
    """Computes FieldDifference lists between master and override forms.

    Example::

        differ = DocumentDiffer()
        differ.diff(
            {"clientInformation": {"name": "Acme", "phone": "1"}},
            {"clientInformation": {"name": "Acme", "phone": "2"}},
        )
        # [FieldDifference("clientInformation.phone", "1", "2")]
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

    def diff(
        self,
        master_sections: Mapping[str, Any],
        override_sections: Mapping[str, Any],
    ) -> list[FieldDifference]:
        """Compare two documents section by section.

        Args:
            master_sections:   Section name -> section value of the master form.
            override_sections: Section name -> section value of the override form.

        Returns:
            The differences, in section order then traversal order.  Empty
            when the documents are semantically equal.
        """
        differences: list[FieldDifference] = []
        for name in self._section_names(master_sections, override_sections):
            differences.extend(
                self.diff_section(
                    name, master_sections.get(name), override_sections.get(name)
                )
            )
        logger.debug("Found %d differences across sections", len(differences))
        return differences

    def diff_section(
        self, name: str, master_section: Any, override_section: Any
    ) -> list[FieldDifference]:
        """Compare one section's raw values, rooted at path ``name``."""
        if master_section is None and override_section is None:
            return []
        if master_section is None or override_section is None:
            logger.debug(
                "Section %s present only on one side (master: %s, override: %s)",
                name,
                master_section is not None,
                override_section is not None,
            )
            return [FieldDifference(name, master_section, override_section)]

        try:
            master_node = self._builder.build(master_section, name)
            override_node = self._builder.build(override_section, name)
        except NormalizationError as exc:
            logger.warning("Failed to normalize section %s: %s", name, exc)
            return [FieldDifference(name, master_section, override_section)]

        return list(self._walk(master_node, override_node))

    def diff_nodes(
        self, master: DocumentNode | None, override: DocumentNode | None
    ) -> list[FieldDifference]:
        """Compare two already-normalized nodes."""
        return list(self._walk(master, override))

    def section_report(
        self,
        master_sections: Mapping[str, Any],
        override_sections: Mapping[str, Any],
        section_name: str,
    ) -> SectionReport:
        """Summarize one section as a field -> "differs" flag map.

        Each top-level field of the section (union of both sides, bookkeeping
        names excluded) maps to True when at least one difference was found
        at or below it.  A difference reported at the section's own path
        (scalar sections, normalization failures) sets ``section_differs``
        and flags every field.  When exactly one side lacks the section the
        flag map is empty and the presence flags say which side is missing.
        """
        master_section = master_sections.get(section_name)
        override_section = override_sections.get(section_name)
        master_present = master_section is not None
        override_present = override_section is not None
        if not (master_present and override_present):
            return SectionReport(section_name, {}, master_present, override_present)

        differences = self.diff_section(section_name, master_section, override_section)
        fields = self._section_fields(section_name, master_section, override_section)
        section_differs = any(d.field_path == section_name for d in differences)
        flags = {
            field_name: section_differs
            or any(
                _is_under(d.field_path, child_path(section_name, field_name))
                for d in differences
            )
            for field_name in fields
        }
        return SectionReport(
            section_name,
            flags,
            master_present,
            override_present,
            section_differs=section_differs,
        )

    # ------------------------------------------------------------------
    # Section selection
    # ------------------------------------------------------------------

    def _section_names(
        self,
        master_sections: Mapping[str, Any],
        override_sections: Mapping[str, Any],
    ) -> Iterator[str]:
        for name in _union_keys(master_sections, override_sections):
            if name in self._config.excluded_sections or self._config.should_skip(name):
                continue
            yield name

    def _section_fields(
        self, name: str, master_section: Any, override_section: Any
    ) -> list[str]:
        master = self._field_names(name, master_section)
        override = self._field_names(name, override_section)
        return [
            key
            for key in _union_keys(master, override)
            if not self._config.should_skip(key)
        ]

    def _field_names(self, name: str, section: Any) -> dict[str, None]:
        try:
            node = self._builder.build(section, name)
        except NormalizationError:
            # Unreadable values below the top level still leave the keys usable.
            if isinstance(section, Mapping):
                return dict.fromkeys(str(key) for key in section)
            return {}
        return dict.fromkeys(node.entries)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _walk(
        self, master: DocumentNode | None, override: DocumentNode | None
    ) -> Iterator[FieldDifference]:
        """Yield the differences between two nodes found at the same path."""
        if master is None or master.is_null:
            if override is not None and not override.is_null:
                yield _difference(override.path, master, override)
            return
        if override is None or override.is_null:
            yield _difference(master.path, master, override)
            return

        if is_selectable_list(master, self._config) and is_selectable_list(
            override, self._config
        ):
            yield from self._walk_selectable(master, override)
        elif master.is_object and override.is_object:
            yield from self._walk_object(master, override)
        elif master.is_list and override.is_list:
            yield from self._walk_list(master, override)
        elif not (
            master.is_scalar
            and override.is_scalar
            and scalars_equal(master.value, override.value)
        ):
            yield _difference(master.path, master, override)

    def _walk_object(
        self, master: DocumentNode, override: DocumentNode
    ) -> Iterator[FieldDifference]:
        for key in _union_keys(master.entries, override.entries):
            if self._config.should_skip(key):
                continue
            yield from self._walk(master.get(key), override.get(key))

    def _walk_list(
        self, master: DocumentNode, override: DocumentNode
    ) -> Iterator[FieldDifference]:
        if len(master.items) != len(override.items):
            logger.debug(
                "List size differs at %s: master %d, override %d",
                master.path,
                len(master.items),
                len(override.items),
            )
            yield _difference(master.path, master, override)
            return
        for master_item, override_item in zip(master.items, override.items, strict=True):
            yield from self._walk(master_item, override_item)

    def _walk_selectable(
        self, master: DocumentNode, override: DocumentNode
    ) -> Iterator[FieldDifference]:
        master_labels = selected_view_values(master, self._config)
        override_labels = selected_view_values(override, self._config)
        if master_labels != override_labels:
            yield FieldDifference(
                master.path,
                {VIEW_VALUES: master_labels},
                {VIEW_VALUES: override_labels},
            )


def _difference(
    path: str, master: DocumentNode | None, override: DocumentNode | None
) -> FieldDifference:
    return FieldDifference(
        path,
        master.to_python() if master is not None else None,
        override.to_python() if override is not None else None,
    )


def _is_under(path: str, prefix: str) -> bool:
    """True if ``path`` is ``prefix`` or a member/element path beneath it."""
    if not path.startswith(prefix):
        return False
    rest = path[len(prefix) :]
    return rest == "" or rest[0] in ".["
