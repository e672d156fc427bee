"""
Deal Integration Plan Engine
Domain models (plain dataclasses, JSON-ready via to_dict / from_dict).
"""

from dealplan.models.intake import (
    DealIntake,
    DealStructure,
    IntegrationModel,
    TsaRequired,
)
from dealplan.models.plan import (
    ChecklistItem,
    GeneratedPlan,
    Milestone,
    RiskAlert,
    RiskOverride,
    TaskTemplate,
    WorkstreamSummary,
)

__all__ = [
    "ChecklistItem",
    "DealIntake",
    "DealStructure",
    "GeneratedPlan",
    "IntegrationModel",
    "Milestone",
    "RiskAlert",
    "RiskOverride",
    "TaskTemplate",
    "TsaRequired",
    "WorkstreamSummary",
]
