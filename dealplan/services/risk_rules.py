"""
Risk Detection Engine

Seven independent rules evaluated against the deal intake. Every rule runs;
each rule whose check passes emits one RiskAlert. Output order follows
``RISK_RULES`` order and there is no early exit or mutual exclusion.

Usage:
    from dealplan.services.risk_rules import detect_risks
    alerts = detect_risks(intake)
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Callable

from dealplan.models.intake import DEAL_VALUE_RANGES, DealIntake, DealStructure, TsaRequired
from dealplan.models.plan import RiskAlert

logger = logging.getLogger(__name__)


# ═════════════════════════════════════════════════════════════════════════════
# Rule record
# ═════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RiskRule:
    """One detection rule: fixed category/severity, live description."""
    category: str
    severity: str
    check: Callable[[DealIntake], bool]
    describe: Callable[[DealIntake], str]
    mitigation: str
    affected_workstreams: tuple[str, ...] = field(default_factory=tuple)


# ═════════════════════════════════════════════════════════════════════════════
# Jurisdiction / value helpers
# ═════════════════════════════════════════════════════════════════════════════

LOW_TAX_JURISDICTIONS = frozenset({"EU-IE", "EU-NL", "EU-LU", "SG", "CH"})
HIGH_VALUE_RANGES = frozenset(DEAL_VALUE_RANGES[-2:])  # $1B and above


def _is_gdpr_jurisdiction(code: str) -> bool:
    return code.startswith("EU") or code == "UK"


def _gdpr_jurisdictions(intake: DealIntake) -> list[str]:
    return [j for j in intake.jurisdictions if _is_gdpr_jurisdiction(j)]


def _non_us_jurisdictions(intake: DealIntake) -> list[str]:
    return [j for j in intake.jurisdictions if not j.startswith("US")]


# ═════════════════════════════════════════════════════════════════════════════
# Rule definitions: checks and descriptions
# ═════════════════════════════════════════════════════════════════════════════

def _check_regulatory_delay(i: DealIntake) -> bool:
    return i.cross_border and len(i.jurisdictions) >= 3


def _describe_regulatory_delay(i: DealIntake) -> str:
    return (
        f"{len(i.jurisdictions)} jurisdictions require regulatory filing/clearance. "
        "Multiple concurrent processes (CFIUS, EUMR, NSI Act) increase close-date risk "
        "and Day 1 complexity."
    )


def _check_tax_structure_leakage(i: DealIntake) -> bool:
    return i.cross_border and (
        any(j in LOW_TAX_JURISDICTIONS for j in i.jurisdictions)
        or i.deal_value_range in HIGH_VALUE_RANGES
    )


def _describe_tax_structure_leakage(i: DealIntake) -> str:
    value = i.deal_value_range or "undisclosed value"
    return (
        "Deal involves jurisdictions with potential sub-15% effective tax rates or "
        f"significant value ({value}). Pillar Two top-up tax analysis required; "
        "GILTI/BEAT exposure not yet modelled."
    )


def _check_tsa_dependency(i: DealIntake) -> bool:
    return i.tsa_required == TsaRequired.YES


def _describe_tsa_dependency(i: DealIntake) -> str:
    carve_note = " (Carve-Out — high TSA complexity)" if i.deal_structure == DealStructure.CARVE_OUT else ""
    return (
        f"TSA required{carve_note}. No standalone capability assessment complete. "
        "Prolonged TSA dependency increases stranded cost risk and integration timeline."
    )


def _check_data_privacy_breach(i: DealIntake) -> bool:
    return i.cross_border and bool(_gdpr_jurisdictions(i))


def _describe_data_privacy_breach(i: DealIntake) -> str:
    return (
        f"Target processes personal data in {', '.join(_gdpr_jurisdictions(i))}. "
        "GDPR/UK GDPR applies. DPIA not yet initiated; AI systems may be in scope "
        "under EU AI Act."
    )


def _check_cultural_integration(i: DealIntake) -> bool:
    return i.cross_border and len(_non_us_jurisdictions(i)) >= 2


def _describe_cultural_integration(i: DealIntake) -> str:
    return (
        f"Cross-border workforce spans {len(_non_us_jurisdictions(i))} non-US jurisdictions "
        "with different cultures and employment law frameworks. Cultural integration "
        "and retention risk elevated."
    )


def _check_financial_reporting_gap(i: DealIntake) -> bool:
    return (
        (i.target_gaap != "" and i.target_gaap != "US GAAP")
        or (i.target_entities > 5 and i.cross_border)
    )


def _describe_financial_reporting_gap(i: DealIntake) -> str:
    return (
        f"Target uses {i.target_gaap or 'non-US'} accounting standards. "
        f"{i.target_entities} legal entities require consolidation. Significant "
        "conversion effort needed for first combined close."
    )


def _check_stranded_costs(i: DealIntake) -> bool:
    return i.deal_structure == DealStructure.CARVE_OUT


def _describe_stranded_costs(i: DealIntake) -> str:
    return (
        "Carve-out structure creates high stranded cost exposure. Shared services, "
        "facilities, and corporate overhead allocated to the carved entity must be "
        "replaced or renegotiated."
    )


RISK_RULES: tuple[RiskRule, ...] = (
    RiskRule(
        category="regulatory_delay",
        severity="critical",
        check=_check_regulatory_delay,
        describe=_describe_regulatory_delay,
        mitigation=(
            "Engage external regulatory counsel immediately. Build a jurisdiction-by-"
            "jurisdiction clearance tracker. Extend Day 1 planning buffer by 30 days per "
            "additional jurisdiction beyond 2."
        ),
        affected_workstreams=("Income Tax & Compliance", "Integration Budget & PMO"),
    ),
    RiskRule(
        category="tax_structure_leakage",
        severity="high",
        check=_check_tax_structure_leakage,
        describe=_describe_tax_structure_leakage,
        mitigation=(
            "Commission Pillar Two ETR analysis by jurisdiction. Model GILTI and BEAT "
            "exposure. Evaluate §338(g) election implications for foreign target entities."
        ),
        affected_workstreams=("Income Tax & Compliance",),
    ),
    RiskRule(
        category="tsa_dependency",
        severity="high",
        check=_check_tsa_dependency,
        describe=_describe_tsa_dependency,
        mitigation=(
            "Complete standalone capability assessment within Day 30. Define exit criteria "
            "for each TSA service. Assign TSA exit owners per service category. Budget for "
            "TSA premium pricing (typically cost-plus 15–25%)."
        ),
        affected_workstreams=("TSA Assessment & Exit",),
    ),
    RiskRule(
        category="data_privacy_breach",
        severity="high",
        check=_check_data_privacy_breach,
        describe=_describe_data_privacy_breach,
        mitigation=(
            "Appoint or confirm DPO coverage. Initiate DPIA immediately for all personal "
            "data processing activities. Update privacy notices. Review AI system inventory "
            "against EU AI Act risk tiers."
        ),
        affected_workstreams=("Cybersecurity & Data Privacy",),
    ),
    RiskRule(
        category="cultural_integration",
        severity="medium",
        check=_check_cultural_integration,
        describe=_describe_cultural_integration,
        mitigation=(
            "Commission early cultural assessment. Engage local HR/employment counsel per "
            "jurisdiction. Design retention incentives for key personnel. Include cultural "
            "integration in Day 90 SteerCo review."
        ),
        affected_workstreams=("HR & Workforce Integration", "Integration Budget & PMO"),
    ),
    RiskRule(
        category="financial_reporting_gap",
        severity="high",
        check=_check_financial_reporting_gap,
        describe=_describe_financial_reporting_gap,
        mitigation=(
            "Engage technical accounting team for GAAP conversion workplan. Allocate budget "
            "for external auditor readiness review. Map all policy differences before first "
            "consolidated close (Day 30 deadline)."
        ),
        affected_workstreams=("Consolidation & Reporting",),
    ),
    RiskRule(
        category="stranded_costs",
        severity="medium",
        check=_check_stranded_costs,
        describe=_describe_stranded_costs,
        mitigation=(
            "Complete stranded cost mapping within Day 60. Build standalone cost model per "
            "function. Evaluate insourcing vs. outsourcing for each stranded function. "
            "Include run-rate standalone cost in synergy baseline."
        ),
        affected_workstreams=(
            "TSA Assessment & Exit",
            "Facilities & Real Estate",
            "Integration Budget & PMO",
        ),
    ),
)


# ═════════════════════════════════════════════════════════════════════════════
# Engine
# ═════════════════════════════════════════════════════════════════════════════

def _new_id() -> str:
    return uuid.uuid4().hex


def detect_risks(
    intake: DealIntake,
    *,
    id_factory: Callable[[], str] | None = None,
    rules: tuple[RiskRule, ...] = RISK_RULES,
) -> list[RiskAlert]:
    """Evaluate every rule and return one open alert per rule that fires."""
    make_id = id_factory or _new_id
    alerts = [
        RiskAlert(
            id=make_id(),
            category=rule.category,
            severity=rule.severity,
            description=rule.describe(intake),
            mitigation=rule.mitigation,
            affected_workstreams=list(rule.affected_workstreams),
            status="open",
        )
        for rule in rules
        if rule.check(intake)
    ]
    logger.debug(
        "Risk detection for %r: %d/%d rules fired (%s)",
        intake.deal_name, len(alerts), len(rules),
        ", ".join(a.category for a in alerts) or "none",
    )
    return alerts
