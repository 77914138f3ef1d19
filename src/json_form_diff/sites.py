"""Per-site scoring and difference reports for forms derived from one master.

A master form is typically copied into many site forms, each of which may
diverge.  These helpers run the engine once per site.  The per-site runs share
no state, so ``score_sites`` can fan them out on a thread pool; results are
always returned in input order.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any

from json_form_diff.algorithm.config import EngineConfig
from json_form_diff.algorithm.differ import DocumentDiffer
from json_form_diff.result import ScoreResult, SiteDifference
from json_form_diff.scorer import ScoreAggregator
from json_form_diff.tree.builder import NormalizationError, sections_of

__all__ = ["SiteForm", "average_site_score", "score_sites", "site_differences"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SiteForm:
    """One site's override form.

    Attributes:
        site_id:   Identifier of the site.
        site_name: Display name of the site.
        form:      The site's form document (mapping of section name to
                   value, or a dataclass), or None if the site has none yet.
    """

    site_id: str
    site_name: str = ""
    form: Any = None


def _site_counts(site: SiteForm, aggregator: ScoreAggregator) -> ScoreResult:
    if site.form is None:
        return ScoreResult()
    try:
        sections = sections_of(site.form)
    except NormalizationError as exc:
        logger.warning("Failed to read form of site %s: %s", site.site_id, exc)
        return ScoreResult()
    result = aggregator.count(sections)
    logger.debug(
        "Site %s score calculation - Total fields: %d, Filled fields: %d",
        site.site_id,
        result.total_fields,
        result.filled_fields,
    )
    return result


def _all_counts(
    sites: Sequence[SiteForm],
    config: EngineConfig | None,
    max_workers: int | None,
) -> list[ScoreResult]:
    aggregator = ScoreAggregator(config=config)
    if max_workers is None or max_workers <= 1 or len(sites) <= 1:
        return [_site_counts(site, aggregator) for site in sites]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        # map() yields in submission order regardless of completion order.
        return list(pool.map(lambda site: _site_counts(site, aggregator), sites))


def score_sites(
    sites: Sequence[SiteForm],
    precision: int | None = None,
    config: EngineConfig | None = None,
    max_workers: int | None = None,
) -> list[float]:
    """Return one completion score per site, in input order.

    Args:
        sites:       The site forms to score.
        precision:   Decimal places to round each score to.  None: unrounded.
        config:      Engine settings.  Defaults to ``EngineConfig()``.
        max_workers: When greater than 1, sites are scored on a
            ``ThreadPoolExecutor`` with that many workers.

    Returns:
        Scores in [0, 100].  A site without a form, or whose form cannot be
        read, scores 0.0.
    """
    return [
        result.percentage(precision)
        for result in _all_counts(sites, config, max_workers)
    ]


def average_site_score(
    sites: Sequence[SiteForm],
    precision: int | None = 1,
    config: EngineConfig | None = None,
    max_workers: int | None = None,
) -> float:
    """Return the mean score of the sites that have at least one field.

    Sites without a form, or whose form holds no fields, do not take part in
    the average.  Returns 0.0 when no site qualifies.
    """
    scores = [
        result.percentage()
        for result in _all_counts(sites, config, max_workers)
        if result.total_fields > 0
    ]
    return ScoreAggregator.average(scores, precision)


def site_differences(
    master: Any,
    sites: Sequence[SiteForm],
    config: EngineConfig | None = None,
) -> list[SiteDifference]:
    """Compare every site's form with the master form.

    Args:
        master: The master form document.
        sites:  The site forms derived from it.
        config: Engine settings.  Defaults to ``EngineConfig()``.

    Returns:
        One ``SiteDifference`` per site that diverges from the master, in
        input order.  Sites without a form are logged and left out.

    Raises:
        NormalizationError: If the master document itself is not a mapping
            or dataclass.
    """
    differ = DocumentDiffer(config=config)
    master_sections = sections_of(master)
    reports: list[SiteDifference] = []
    for site in sites:
        if site.form is None:
            logger.warning("Site form is null for site: %s", site.site_id)
            continue
        try:
            site_sections = sections_of(site.form)
        except NormalizationError as exc:
            logger.warning("Failed to read form of site %s: %s", site.site_id, exc)
            continue
        differences = differ.diff(master_sections, site_sections)
        logger.debug("Found %d differences for site %s", len(differences), site.site_id)
        if differences:
            reports.append(
                SiteDifference(
                    site_id=site.site_id,
                    site_name=site.site_name,
                    differences=differences,
                )
            )
    return reports
