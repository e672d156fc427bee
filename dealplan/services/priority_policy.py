"""
Priority Policy

Resolves the priority of a task instance at generation time. Rules are
evaluated top-down and the first match wins:

    PRI-01  carve-out deal + item in the TSA reserved range (ordinal ≤ 70) → critical
    PRI-02  standalone integration model + base priority critical        → high
    PRI-03  otherwise                                                    → base priority

PRI-01 returns before PRI-02 is considered, so a reserved-range item in a
carve-out + standalone deal stays critical.
"""

from __future__ import annotations

from dealplan.models.intake import DealIntake, DealStructure, IntegrationModel
from dealplan.models.plan import TaskTemplate
from dealplan.services.task_catalog import TSA_RESERVED_MAX_ORDINAL


def resolve_priority(template: TaskTemplate, intake: DealIntake) -> str:
    """Return the priority for one instance of ``template`` in this deal."""
    # PRI-01: carve-outs lean on TSA services from day one
    if (
        intake.deal_structure == DealStructure.CARVE_OUT
        and template.ordinal <= TSA_RESERVED_MAX_ORDINAL
    ):
        return "critical"

    # PRI-02: standalone targets do not need full-integration urgency
    if intake.integration_model == IntegrationModel.STANDALONE and template.priority == "critical":
        return "high"

    return template.priority
