"""Form completeness scoring and structural difference reports for nested form documents."""

from __future__ import annotations

import logging

from json_form_diff.algorithm.config import EngineConfig
from json_form_diff.api import (
    compare_section,
    completion_score,
    count_fields,
    diff_forms,
    diff_from_loader,
)
from json_form_diff.protocols import FormLoader
from json_form_diff.result import (
    FieldDifference,
    ScoreResult,
    SectionReport,
    SiteDifference,
)
from json_form_diff.sites import (
    SiteForm,
    average_site_score,
    score_sites,
    site_differences,
)
from json_form_diff.tree.builder import NormalizationError

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "EngineConfig",
    "FieldDifference",
    "FormLoader",
    "NormalizationError",
    "ScoreResult",
    "SectionReport",
    "SiteDifference",
    "SiteForm",
    "average_site_score",
    "compare_section",
    "completion_score",
    "count_fields",
    "diff_forms",
    "diff_from_loader",
    "score_sites",
    "site_differences",
]
