"""
Deal Integration Plan Engine
Plan domain models.

Models:
    - TaskTemplate: read-only master checklist entry
    - ChecklistItem: per-plan task instance with mutable execution state
    - RiskOverride: append-only audit record for a risk alert change
    - RiskAlert: detected risk with severity, mitigation and lifecycle status
    - Milestone: named checkpoint derived from the close date
    - WorkstreamSummary: generation-time rollup of one workstream
    - GeneratedPlan: the full result of plan generation

Architecture chain: DealIntake → GeneratedPlan → ChecklistItem / RiskAlert / Milestone
"""

from __future__ import annotations

from dataclasses import dataclass, field

from dealplan.models.intake import DealIntake


# ── Constants ────────────────────────────────────────────────────────────────

PHASES = ("pre_close", "day_1", "day_30", "day_60", "day_90", "year_1")

PRIORITY_LEVELS = ("critical", "high", "medium", "low")
SEVERITY_LEVELS = ("critical", "high", "medium", "low")

ITEM_STATUSES = ("not_started", "in_progress", "blocked", "complete", "na")
RISK_STATUSES = ("open", "acknowledged", "mitigated", "closed")

RISK_CATEGORIES = (
    "regulatory_delay",
    "tax_structure_leakage",
    "tsa_dependency",
    "data_privacy_breach",
    "cultural_integration",
    "financial_reporting_gap",
    "stranded_costs",
)

WORKSTREAMS = (
    "TSA Assessment & Exit",
    "Consolidation & Reporting",
    "Operational Accounting",
    "Internal Controls & SOX",
    "Income Tax & Compliance",
    "Treasury & Banking",
    "FP&A & Baselining",
    "Cybersecurity & Data Privacy",
    "ESG & Sustainability",
    "Integration Budget & PMO",
    "Facilities & Real Estate",
    "HR & Workforce Integration",
)


# ═════════════════════════════════════════════════════════════════════════════
#  TASK TEMPLATE / CHECKLIST ITEM
# ═════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TaskTemplate:
    """One entry of the master checklist.

    ``dependencies`` lists prerequisite item ids. They are advisory and are
    not checked against the catalog.
    """

    item_id: str
    workstream: str
    section: str
    description: str
    phase: str
    priority: str
    dependencies: tuple[str, ...] = ()
    tsa_relevant: bool = False
    cross_border_only: bool = False
    risk_indicators: tuple[str, ...] = ()

    @property
    def ordinal(self) -> int:
        """Numeric suffix of the item id (``FRC-0042`` → 42)."""
        return int(self.item_id.rsplit("-", 1)[-1])

    def to_dict(self) -> dict:
        return {
            "item_id": self.item_id,
            "workstream": self.workstream,
            "section": self.section,
            "description": self.description,
            "phase": self.phase,
            "priority": self.priority,
            "dependencies": list(self.dependencies),
            "tsa_relevant": self.tsa_relevant,
            "cross_border_only": self.cross_border_only,
            "risk_indicators": list(self.risk_indicators),
        }


@dataclass
class ChecklistItem:
    """A task instance inside one generated plan.

    ``status``, ``notes``, ``owner_id`` and ``blocked_reason`` are owned by
    the host after generation.
    """

    id: str
    item_id: str
    workstream: str
    section: str
    description: str
    phase: str
    priority: str
    status: str = "not_started"
    dependencies: list[str] = field(default_factory=list)
    tsa_relevant: bool = False
    cross_border_only: bool = False
    risk_indicators: list[str] = field(default_factory=list)
    milestone_date: str | None = None
    na_justification: str | None = None
    notes: list[str] = field(default_factory=list)
    owner_id: str | None = None
    blocked_reason: str | None = None

    @property
    def is_active(self) -> bool:
        return self.status != "na"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "item_id": self.item_id,
            "workstream": self.workstream,
            "section": self.section,
            "description": self.description,
            "phase": self.phase,
            "priority": self.priority,
            "status": self.status,
            "dependencies": list(self.dependencies),
            "tsa_relevant": self.tsa_relevant,
            "cross_border_only": self.cross_border_only,
            "risk_indicators": list(self.risk_indicators),
            "milestone_date": self.milestone_date,
            "na_justification": self.na_justification,
            "notes": list(self.notes),
            "owner_id": self.owner_id,
            "blocked_reason": self.blocked_reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ChecklistItem":
        status = data.get("status", "not_started")
        if status not in ITEM_STATUSES:
            raise ValueError(f"unknown status {status!r}")
        return cls(
            id=data["id"],
            item_id=data["item_id"],
            workstream=data["workstream"],
            section=data.get("section", ""),
            description=data.get("description", ""),
            phase=data.get("phase", "day_1"),
            priority=data.get("priority", "medium"),
            status=status,
            dependencies=list(data.get("dependencies") or []),
            tsa_relevant=bool(data.get("tsa_relevant", False)),
            cross_border_only=bool(data.get("cross_border_only", False)),
            risk_indicators=list(data.get("risk_indicators") or []),
            milestone_date=data.get("milestone_date"),
            na_justification=data.get("na_justification"),
            notes=list(data.get("notes") or []),
            owner_id=data.get("owner_id"),
            blocked_reason=data.get("blocked_reason"),
        )


# ═════════════════════════════════════════════════════════════════════════════
#  RISK ALERT
# ═════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class RiskOverride:
    """Immutable audit record of one manual change to a risk alert."""

    timestamp: str
    field: str
    from_value: str
    to_value: str
    reason: str

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "field": self.field,
            "from_value": self.from_value,
            "to_value": self.to_value,
            "reason": self.reason,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RiskOverride":
        return cls(
            timestamp=data["timestamp"],
            field=data["field"],
            from_value=data["from_value"],
            to_value=data["to_value"],
            reason=data["reason"],
        )


@dataclass
class RiskAlert:
    """A risk detected from the deal profile.

    Created only by the risk detection engine, always ``open``. Never
    deleted; severity/status move through ``override_risk`` which appends to
    ``overrides``.
    """

    id: str
    category: str
    severity: str
    description: str
    mitigation: str
    affected_workstreams: list[str] = field(default_factory=list)
    status: str = "open"
    overrides: list[RiskOverride] = field(default_factory=list)

    @property
    def is_critical_open(self) -> bool:
        return self.severity == "critical" and self.status == "open"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "category": self.category,
            "severity": self.severity,
            "description": self.description,
            "mitigation": self.mitigation,
            "affected_workstreams": list(self.affected_workstreams),
            "status": self.status,
            "overrides": [o.to_dict() for o in self.overrides],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RiskAlert":
        return cls(
            id=data["id"],
            category=data["category"],
            severity=data["severity"],
            description=data.get("description", ""),
            mitigation=data.get("mitigation", ""),
            affected_workstreams=list(data.get("affected_workstreams") or []),
            status=data.get("status", "open"),
            overrides=[RiskOverride.from_dict(o) for o in data.get("overrides") or []],
        )


# ═════════════════════════════════════════════════════════════════════════════
#  MILESTONES & SUMMARIES
# ═════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Milestone:
    phase: str
    label: str
    date: str
    days_from_close: int

    def to_dict(self) -> dict:
        return {
            "phase": self.phase,
            "label": self.label,
            "date": self.date,
            "days_from_close": self.days_from_close,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Milestone":
        return cls(
            phase=data["phase"],
            label=data["label"],
            date=data["date"],
            days_from_close=int(data["days_from_close"]),
        )


@dataclass(frozen=True)
class WorkstreamSummary:
    name: str
    total_items: int
    active_items: int
    phase: str
    priority: str

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "total_items": self.total_items,
            "active_items": self.active_items,
            "phase": self.phase,
            "priority": self.priority,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WorkstreamSummary":
        return cls(
            name=data["name"],
            total_items=int(data["total_items"]),
            active_items=int(data["active_items"]),
            phase=data["phase"],
            priority=data["priority"],
        )


@dataclass
class GeneratedPlan:
    """Result of ``generate_plan``: everything the host needs to render a deal."""

    intake: DealIntake
    checklist_items: list[ChecklistItem]
    risk_alerts: list[RiskAlert]
    workstream_summary: list[WorkstreamSummary]
    milestones: list[Milestone]
    generated_at: str

    def to_dict(self) -> dict:
        return {
            "intake": self.intake.to_dict(),
            "checklist_items": [i.to_dict() for i in self.checklist_items],
            "risk_alerts": [r.to_dict() for r in self.risk_alerts],
            "workstream_summary": [w.to_dict() for w in self.workstream_summary],
            "milestones": [m.to_dict() for m in self.milestones],
            "generated_at": self.generated_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GeneratedPlan":
        return cls(
            intake=DealIntake.from_dict(data["intake"]),
            checklist_items=[ChecklistItem.from_dict(i) for i in data.get("checklist_items") or []],
            risk_alerts=[RiskAlert.from_dict(r) for r in data.get("risk_alerts") or []],
            workstream_summary=[WorkstreamSummary.from_dict(w) for w in data.get("workstream_summary") or []],
            milestones=[Milestone.from_dict(m) for m in data.get("milestones") or []],
            generated_at=data.get("generated_at", ""),
        )
