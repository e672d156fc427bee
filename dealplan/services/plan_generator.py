"""
Plan Generator — DealIntake → GeneratedPlan

Pipeline:
    1. Applicability   — which templates are ``na`` and why
    2. Instantiation   — one ChecklistItem per template, catalog order
    3. Risk detection  — independent rule set over the intake
    4. Workstream rollup
    5. Milestones from the close date

Pure and synchronous. Ids and the generation timestamp come from injectable
``id_factory`` / ``clock`` so tests can pin them.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable

from dealplan.models.intake import DealIntake
from dealplan.models.plan import ChecklistItem, GeneratedPlan, TaskTemplate
from dealplan.services.applicability import exclusion_reasons
from dealplan.services.metrics import build_workstream_summary
from dealplan.services.milestones import build_milestones, phase_date
from dealplan.services.priority_policy import resolve_priority
from dealplan.services.risk_rules import detect_risks
from dealplan.services.task_catalog import TASK_CATALOG

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return uuid.uuid4().hex


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def instantiate(
    template: TaskTemplate,
    intake: DealIntake,
    *,
    item_id: str,
    na_reason: str | None,
) -> ChecklistItem:
    """Build one task instance from its template."""
    return ChecklistItem(
        id=item_id,
        item_id=template.item_id,
        workstream=template.workstream,
        section=template.section,
        description=template.description,
        phase=template.phase,
        priority=resolve_priority(template, intake),
        status="na" if na_reason else "not_started",
        dependencies=list(template.dependencies),
        tsa_relevant=template.tsa_relevant,
        cross_border_only=template.cross_border_only,
        risk_indicators=list(template.risk_indicators),
        milestone_date=phase_date(intake.close_date, template.phase),
        na_justification=na_reason,
        notes=[],
    )


def generate_plan(
    intake: DealIntake,
    *,
    id_factory: Callable[[], str] | None = None,
    clock: Callable[[], datetime] | None = None,
    catalog: tuple[TaskTemplate, ...] = TASK_CATALOG,
) -> GeneratedPlan:
    """Run the full decision tree for one deal intake."""
    make_id = id_factory or _new_id
    now = clock or _utcnow

    reasons = exclusion_reasons(intake, catalog)
    items = [
        instantiate(tpl, intake, item_id=make_id(), na_reason=reasons.get(tpl.item_id))
        for tpl in catalog
    ]
    alerts = detect_risks(intake, id_factory=make_id)

    plan = GeneratedPlan(
        intake=intake,
        checklist_items=items,
        risk_alerts=alerts,
        workstream_summary=build_workstream_summary(items),
        milestones=build_milestones(intake.close_date),
        generated_at=now().isoformat(),
    )
    logger.info(
        "Generated plan for %r: %d items (%d na), %d risks, %d milestones",
        intake.deal_name, len(items), len(reasons), len(alerts), len(plan.milestones),
        extra={"deal_name": intake.deal_name},
    )
    return plan
