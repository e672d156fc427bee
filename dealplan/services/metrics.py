"""
Plan Metrics Engine

Progress and traffic-light (RAG) rollups over a checklist snapshot, at
workstream and whole-plan granularity. Every function recomputes from the
items it is given; nothing is cached between calls.

Usage:
    from dealplan.services.metrics import get_kpis, plan_rag
    kpis = get_kpis(plan.checklist_items)
    rag = plan_rag(kpis, plan.risk_alerts)
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from dealplan.models.plan import ChecklistItem, RiskAlert, WorkstreamSummary
from dealplan.services.task_catalog import workstream_phase

THRESHOLDS = {
    # complete / total at or above this share is green
    "green_pct": 80,
}


# ═════════════════════════════════════════════════════════════════════════════
# Helpers
# ═════════════════════════════════════════════════════════════════════════════

def _active(items: list[ChecklistItem]) -> list[ChecklistItem]:
    return [i for i in items if i.status != "na"]


def _round_half_up_pct(numerator: int, denominator: int) -> int:
    """100 * numerator / denominator rounded half-up, in integer arithmetic."""
    if not denominator:
        return 0
    return (200 * numerator + denominator) // (2 * denominator)


def _meets_green(complete: int, total: int) -> bool:
    # complete / total >= green_pct / 100 without floating point
    return total > 0 and 100 * complete >= THRESHOLDS["green_pct"] * total


# ═════════════════════════════════════════════════════════════════════════════
# Workstream (category) aggregation
# ═════════════════════════════════════════════════════════════════════════════

@dataclass
class WorkstreamStats:
    complete: int = 0
    in_progress: int = 0
    blocked: int = 0
    not_started: int = 0
    total: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def get_workstream_stats(items: list[ChecklistItem]) -> dict[str, WorkstreamStats]:
    """Per-status counts for each workstream, ignoring ``na`` items.

    Workstreams appear in first-seen order. A workstream whose items are all
    ``na`` is absent from the result.
    """
    stats: dict[str, WorkstreamStats] = {}
    for item in _active(items):
        s = stats.setdefault(item.workstream, WorkstreamStats())
        s.total += 1
        if item.status == "complete":
            s.complete += 1
        elif item.status == "in_progress":
            s.in_progress += 1
        elif item.status == "blocked":
            s.blocked += 1
        else:
            s.not_started += 1
    return stats


def workstream_rag(stats: WorkstreamStats) -> str:
    """red if anything is blocked, green at ≥80% complete, else amber."""
    if stats.blocked > 0:
        return "red"
    if _meets_green(stats.complete, stats.total):
        return "green"
    return "amber"


def build_workstream_summary(items: list[ChecklistItem]) -> list[WorkstreamSummary]:
    """Generation-time rollup: totals, active counts and dominant priority.

    Dominant priority looks at active items only: critical if any is
    critical, else high if any is high, else medium.
    """
    order: list[str] = []
    totals: dict[str, int] = {}
    active: dict[str, int] = {}
    priorities: dict[str, set[str]] = {}

    for item in items:
        if item.workstream not in totals:
            order.append(item.workstream)
            totals[item.workstream] = 0
            active[item.workstream] = 0
            priorities[item.workstream] = set()
        totals[item.workstream] += 1
        if item.is_active:
            active[item.workstream] += 1
            priorities[item.workstream].add(item.priority)

    summary = []
    for name in order:
        seen = priorities[name]
        if "critical" in seen:
            priority = "critical"
        elif "high" in seen:
            priority = "high"
        else:
            priority = "medium"
        summary.append(WorkstreamSummary(
            name=name,
            total_items=totals[name],
            active_items=active[name],
            phase=workstream_phase(name),
            priority=priority,
        ))
    return summary


# ═════════════════════════════════════════════════════════════════════════════
# Plan-level rollup
# ═════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Kpis:
    total: int
    complete: int
    in_progress: int
    blocked: int
    not_started: int
    pct_complete: int

    def to_dict(self) -> dict:
        return asdict(self)


def get_kpis(items: list[ChecklistItem]) -> Kpis:
    """Headline counts over applicable items; ``pct_complete`` is 0 when empty."""
    active = _active(items)
    complete = sum(1 for i in active if i.status == "complete")
    return Kpis(
        total=len(active),
        complete=complete,
        in_progress=sum(1 for i in active if i.status == "in_progress"),
        blocked=sum(1 for i in active if i.status == "blocked"),
        not_started=sum(1 for i in active if i.status == "not_started"),
        pct_complete=_round_half_up_pct(complete, len(active)),
    )


def plan_rag(kpis: Kpis, risk_alerts: list[RiskAlert]) -> str:
    """Overall traffic light.

    red   — any blocked item, or any critical alert still open
    green — pct_complete ≥ 80
    amber — otherwise
    """
    if kpis.blocked > 0 or any(a.is_critical_open for a in risk_alerts):
        return "red"
    if kpis.pct_complete >= THRESHOLDS["green_pct"]:
        return "green"
    return "amber"


def plan_health(items: list[ChecklistItem], risk_alerts: list[RiskAlert]) -> dict:
    """Full health snapshot: KPIs, overall RAG, per-workstream stats and risk counts."""
    kpis = get_kpis(items)
    workstreams = [
        {"name": name, **stats.to_dict(), "rag": workstream_rag(stats)}
        for name, stats in get_workstream_stats(items).items()
    ]
    return {
        "kpis": kpis.to_dict(),
        "rag": plan_rag(kpis, risk_alerts),
        "workstreams": workstreams,
        "risks": {
            "total": len(risk_alerts),
            "open": sum(1 for a in risk_alerts if a.status == "open"),
            "critical": sum(1 for a in risk_alerts if a.severity == "critical"),
        },
    }
