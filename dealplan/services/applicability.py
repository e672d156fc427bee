"""
Applicability Filter

Derives which catalog templates are not applicable (``na``) to a deal.

Two independent exclusion rules, combined by union:
    - domestic deal (``cross_border`` false) → every cross-border-only template
    - ``tsa_required == "no"``               → every TSA-relevant template

``tsa_required == "tbd"`` excludes nothing. No other intake field affects
applicability.
"""

from __future__ import annotations

from dealplan.models.intake import DealIntake, TsaRequired
from dealplan.models.plan import TaskTemplate
from dealplan.services.task_catalog import TASK_CATALOG

NA_REASON_NO_TSA = "TSA not required for this deal"
NA_REASON_DOMESTIC = "Cross-border items not applicable — domestic deal"


def _cross_border_exclusions(intake: DealIntake, catalog) -> frozenset[str]:
    if intake.cross_border:
        return frozenset()
    return frozenset(t.item_id for t in catalog if t.cross_border_only)


def _tsa_exclusions(intake: DealIntake, catalog) -> frozenset[str]:
    if intake.tsa_required != TsaRequired.NO:
        return frozenset()
    return frozenset(t.item_id for t in catalog if t.tsa_relevant)


def not_applicable_ids(
    intake: DealIntake,
    catalog: tuple[TaskTemplate, ...] = TASK_CATALOG,
) -> frozenset[str]:
    """Return the item ids to mark ``na`` for this intake."""
    return _cross_border_exclusions(intake, catalog) | _tsa_exclusions(intake, catalog)


def exclusion_reasons(
    intake: DealIntake,
    catalog: tuple[TaskTemplate, ...] = TASK_CATALOG,
) -> dict[str, str]:
    """Return item id → N/A justification for every excluded template.

    When both rules exclude the same template the TSA message is used.
    """
    reasons = {item_id: NA_REASON_DOMESTIC for item_id in _cross_border_exclusions(intake, catalog)}
    reasons.update({item_id: NA_REASON_NO_TSA for item_id in _tsa_exclusions(intake, catalog)})
    return reasons
