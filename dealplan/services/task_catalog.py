"""
Master Checklist Catalog

Static, read-only registry of task templates. Item ids are ``FRC-NNNN``;
each workstream owns a reserved id range, and the TSA Assessment & Exit
workstream owns ordinals 1–70.

The catalog is a representative set of the full FRC taxonomy. Ids are
stable and lexically sortable; prerequisite ids are advisory and are not
validated against the catalog (see ``dangling_dependencies``).

Usage:
    from dealplan.services.task_catalog import TASK_CATALOG, get_template
    tpl = get_template("FRC-0001")
"""

from __future__ import annotations

import logging

from dealplan.core.exceptions import NotFoundError
from dealplan.models.plan import TaskTemplate

logger = logging.getLogger(__name__)

# Upper bound of the ordinal range reserved for TSA Assessment & Exit items
TSA_RESERVED_MAX_ORDINAL = 70


# ═════════════════════════════════════════════════════════════════════════════
# Master rows
# ═════════════════════════════════════════════════════════════════════════════

_MASTER_ROWS: list[dict] = [
    # ── TSA Assessment & Exit (FRC-0001 to 0070) ──
    {"item_id": "FRC-0001", "workstream": "TSA Assessment & Exit", "section": "TSA Identification", "description": "Identify all shared services requiring TSA coverage at close", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": ["tsa_dependency"]},
    {"item_id": "FRC-0002", "workstream": "TSA Assessment & Exit", "section": "TSA Identification", "description": "Define SLA metrics for each TSA service category", "phase": "day_1", "priority": "high", "dependencies": ["FRC-0001"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": ["tsa_dependency"]},
    {"item_id": "FRC-0003", "workstream": "TSA Assessment & Exit", "section": "TSA Pricing", "description": "Establish TSA pricing model (cost-plus baseline)", "phase": "day_1", "priority": "high", "dependencies": ["FRC-0001"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": ["tsa_dependency"]},
    {"item_id": "FRC-0004", "workstream": "TSA Assessment & Exit", "section": "TSA Exit Planning", "description": "Map TSA exit milestones by service category", "phase": "day_1", "priority": "critical", "dependencies": ["FRC-0001", "FRC-0002"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": ["tsa_dependency"]},
    {"item_id": "FRC-0005", "workstream": "TSA Assessment & Exit", "section": "TSA Exit Planning", "description": "Assess standalone capability for each TSA service", "phase": "day_30", "priority": "critical", "dependencies": ["FRC-0001"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": ["tsa_dependency", "stranded_costs"]},
    {"item_id": "FRC-0006", "workstream": "TSA Assessment & Exit", "section": "TSA Governance", "description": "Establish TSA governance committee and escalation path", "phase": "day_1", "priority": "high", "dependencies": ["FRC-0001"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0007", "workstream": "TSA Assessment & Exit", "section": "TSA Governance", "description": "Document TSA invoice reconciliation process", "phase": "day_30", "priority": "medium", "dependencies": ["FRC-0003", "FRC-0006"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0008", "workstream": "TSA Assessment & Exit", "section": "IT TSA", "description": "Identify all IT infrastructure under TSA scope", "phase": "day_1", "priority": "critical", "dependencies": ["FRC-0001"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": ["tsa_dependency"]},
    {"item_id": "FRC-0009", "workstream": "TSA Assessment & Exit", "section": "IT TSA", "description": "Define email and identity transition timeline under TSA", "phase": "day_1", "priority": "critical", "dependencies": ["FRC-0008"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": ["tsa_dependency"]},
    {"item_id": "FRC-0010", "workstream": "TSA Assessment & Exit", "section": "Finance TSA", "description": "Identify finance systems covered under TSA (ERP, payroll, reporting)", "phase": "day_1", "priority": "critical", "dependencies": ["FRC-0001"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": ["tsa_dependency"]},
    {"item_id": "FRC-0011", "workstream": "TSA Assessment & Exit", "section": "Finance TSA", "description": "Establish interim financial reporting process under TSA", "phase": "day_1", "priority": "high", "dependencies": ["FRC-0010"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0012", "workstream": "TSA Assessment & Exit", "section": "TSA Stranded Cost", "description": "Identify stranded costs post-TSA exit by service", "phase": "day_60", "priority": "high", "dependencies": ["FRC-0005"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": ["stranded_costs"]},
    {"item_id": "FRC-0013", "workstream": "TSA Assessment & Exit", "section": "Cross-Border TSA", "description": "Identify cross-border TSA services and regulatory implications", "phase": "day_1", "priority": "high", "dependencies": ["FRC-0001"], "tsa_relevant": True, "cross_border_only": True, "risk_indicators": ["tsa_dependency", "regulatory_delay"]},
    {"item_id": "FRC-0014", "workstream": "TSA Assessment & Exit", "section": "TSA Exit Planning", "description": "Build TSA exit roadmap with service dependency sequencing", "phase": "day_30", "priority": "critical", "dependencies": ["FRC-0004", "FRC-0005"], "tsa_relevant": True, "cross_border_only": False, "risk_indicators": ["tsa_dependency"]},
    # ── Consolidation & Reporting (FRC-0071 to 0122) ──
    {"item_id": "FRC-0071", "workstream": "Consolidation & Reporting", "section": "Chart of Accounts", "description": "Map target COA to acquirer COA structure", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["financial_reporting_gap"]},
    {"item_id": "FRC-0072", "workstream": "Consolidation & Reporting", "section": "Chart of Accounts", "description": "Identify intercompany elimination entries", "phase": "day_1", "priority": "high", "dependencies": ["FRC-0071"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["financial_reporting_gap"]},
    {"item_id": "FRC-0073", "workstream": "Consolidation & Reporting", "section": "Chart of Accounts", "description": "Configure consolidation journal entries", "phase": "day_30", "priority": "high", "dependencies": ["FRC-0072"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0074", "workstream": "Consolidation & Reporting", "section": "GAAP Conversion", "description": "Assess GAAP conversion requirements (if target GAAP differs)", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["financial_reporting_gap"]},
    {"item_id": "FRC-0075", "workstream": "Consolidation & Reporting", "section": "GAAP Conversion", "description": "Document differences between target and acquirer accounting policies", "phase": "day_30", "priority": "high", "dependencies": ["FRC-0074"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["financial_reporting_gap"]},
    {"item_id": "FRC-0076", "workstream": "Consolidation & Reporting", "section": "First Close", "description": "Prepare first post-close consolidated financial statements", "phase": "day_30", "priority": "critical", "dependencies": ["FRC-0071", "FRC-0072", "FRC-0074"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0077", "workstream": "Consolidation & Reporting", "section": "Statutory Reporting", "description": "Identify statutory reporting obligations for all entities", "phase": "day_1", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["regulatory_delay"]},
    {"item_id": "FRC-0078", "workstream": "Consolidation & Reporting", "section": "Statutory Reporting", "description": "File change-of-control statutory notifications", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["regulatory_delay"]},
    {"item_id": "FRC-0079", "workstream": "Consolidation & Reporting", "section": "Reporting Calendar", "description": "Establish consolidated reporting calendar and close schedule", "phase": "day_1", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0080", "workstream": "Consolidation & Reporting", "section": "Intercompany", "description": "Establish intercompany billing and reconciliation process", "phase": "day_30", "priority": "high", "dependencies": ["FRC-0072"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    # ── Operational Accounting (FRC-0123 to 0190) ──
    {"item_id": "FRC-0123", "workstream": "Operational Accounting", "section": "AP/AR Cutoff", "description": "Validate AP cutoff procedures at close", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0124", "workstream": "Operational Accounting", "section": "AP/AR Cutoff", "description": "Establish intercompany billing process", "phase": "day_1", "priority": "high", "dependencies": ["FRC-0123"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0125", "workstream": "Operational Accounting", "section": "Banking", "description": "Execute bank account cutover at close", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0126", "workstream": "Operational Accounting", "section": "Banking", "description": "Update signatories on all target bank accounts", "phase": "day_1", "priority": "critical", "dependencies": ["FRC-0125"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0127", "workstream": "Operational Accounting", "section": "Payroll", "description": "Confirm payroll continuity for all employees on close date", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0128", "workstream": "Operational Accounting", "section": "Payroll", "description": "Establish payroll accrual methodology post-close", "phase": "day_30", "priority": "high", "dependencies": ["FRC-0127"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0129", "workstream": "Operational Accounting", "section": "Accounts Payable", "description": "Review and approve all open purchase orders at close", "phase": "day_1", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0130", "workstream": "Operational Accounting", "section": "Accounts Receivable", "description": "Review open AR aging and agree collection process", "phase": "day_1", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    # ── Internal Controls & SOX (FRC-0191 to 0234) ──
    {"item_id": "FRC-0191", "workstream": "Internal Controls & SOX", "section": "SOX Scoping", "description": "Map target SOX controls to acquirer framework", "phase": "day_30", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0192", "workstream": "Internal Controls & SOX", "section": "SOX Scoping", "description": "Determine SOX scope for acquired entities (in-scope vs. out)", "phase": "day_30", "priority": "critical", "dependencies": ["FRC-0191"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0193", "workstream": "Internal Controls & SOX", "section": "Control Testing", "description": "Identify gaps in target control environment", "phase": "day_60", "priority": "high", "dependencies": ["FRC-0192"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0194", "workstream": "Internal Controls & SOX", "section": "Control Testing", "description": "Develop remediation plan for identified control gaps", "phase": "day_60", "priority": "high", "dependencies": ["FRC-0193"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0195", "workstream": "Internal Controls & SOX", "section": "ITGC", "description": "Assess IT General Controls for acquired systems", "phase": "day_60", "priority": "high", "dependencies": ["FRC-0192"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    # ── Income Tax & Compliance (FRC-0235 to 0272) ──
    {"item_id": "FRC-0235", "workstream": "Income Tax & Compliance", "section": "Tax Structure", "description": "Review deal structure for tax efficiency (§338, §336 elections)", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["tax_structure_leakage"]},
    {"item_id": "FRC-0236", "workstream": "Income Tax & Compliance", "section": "Tax Compliance", "description": "File all required federal and state tax change-of-ownership notifications", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["regulatory_delay"]},
    {"item_id": "FRC-0237", "workstream": "Income Tax & Compliance", "section": "Tax Compliance", "description": "Confirm tax return filing obligations for stub period", "phase": "day_30", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0238", "workstream": "Income Tax & Compliance", "section": "Transfer Pricing", "description": "Document intercompany transfer pricing policies", "phase": "day_60", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["tax_structure_leakage", "regulatory_delay"]},
    {"item_id": "FRC-0239", "workstream": "Income Tax & Compliance", "section": "Pillar Two", "description": "Assess Pillar Two (Global Minimum Tax) exposure by jurisdiction", "phase": "day_60", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["tax_structure_leakage"]},
    {"item_id": "FRC-0240", "workstream": "Income Tax & Compliance", "section": "CFIUS/Regulatory", "description": "File CFIUS voluntary notice if applicable", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["regulatory_delay"]},
    {"item_id": "FRC-0241", "workstream": "Income Tax & Compliance", "section": "CFIUS/Regulatory", "description": "File merger clearance notifications in all required jurisdictions", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["regulatory_delay"]},
    {"item_id": "FRC-0242", "workstream": "Income Tax & Compliance", "section": "Tax Attributes", "description": "Identify and value NOLs, credits and other tax attributes", "phase": "day_30", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["tax_structure_leakage"]},
    # ── Treasury & Banking (FRC-0273 to 0304) ──
    {"item_id": "FRC-0273", "workstream": "Treasury & Banking", "section": "Cash Management", "description": "Establish cash pooling and sweeping arrangements", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0274", "workstream": "Treasury & Banking", "section": "Cash Management", "description": "Review target debt instruments and covenant compliance", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0275", "workstream": "Treasury & Banking", "section": "Banking Relationships", "description": "Notify all banks of ownership change and update KYC/AML documentation", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0276", "workstream": "Treasury & Banking", "section": "FX Risk", "description": "Assess FX exposure across all transaction currencies", "phase": "day_30", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["financial_reporting_gap"]},
    {"item_id": "FRC-0277", "workstream": "Treasury & Banking", "section": "Credit Facilities", "description": "Review and update credit facility documentation post-close", "phase": "day_30", "priority": "high", "dependencies": ["FRC-0274"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    # ── FP&A & Baselining (FRC-0305 to 0332) ──
    {"item_id": "FRC-0305", "workstream": "FP&A & Baselining", "section": "Budget Integration", "description": "Integrate target budget into acquirer planning cycle", "phase": "day_60", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0306", "workstream": "FP&A & Baselining", "section": "Synergy Tracking", "description": "Establish cost and revenue synergy baseline and tracking model", "phase": "day_60", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0307", "workstream": "FP&A & Baselining", "section": "Synergy Tracking", "description": "Assign synergy owners and reporting cadence", "phase": "day_60", "priority": "medium", "dependencies": ["FRC-0306"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0308", "workstream": "FP&A & Baselining", "section": "Forecast Integration", "description": "Prepare first combined P&L and cash flow forecast", "phase": "day_60", "priority": "high", "dependencies": ["FRC-0305"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    # ── Cybersecurity & Data Privacy (FRC-0333 to 0368) ──
    {"item_id": "FRC-0333", "workstream": "Cybersecurity & Data Privacy", "section": "Data Privacy", "description": "Assess GDPR/CCPA compliance for all personal data processing", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["data_privacy_breach"]},
    {"item_id": "FRC-0334", "workstream": "Cybersecurity & Data Privacy", "section": "Data Privacy", "description": "Initiate Data Protection Impact Assessment (DPIA) for EU operations", "phase": "day_1", "priority": "critical", "dependencies": ["FRC-0333"], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["data_privacy_breach"]},
    {"item_id": "FRC-0335", "workstream": "Cybersecurity & Data Privacy", "section": "Data Privacy", "description": "Update privacy notices and cookie policies for all websites", "phase": "day_30", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["data_privacy_breach"]},
    {"item_id": "FRC-0336", "workstream": "Cybersecurity & Data Privacy", "section": "Cyber Risk", "description": "Conduct cybersecurity risk assessment of target environment", "phase": "day_30", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["data_privacy_breach"]},
    {"item_id": "FRC-0337", "workstream": "Cybersecurity & Data Privacy", "section": "Cyber Risk", "description": "Review and update incident response plan for combined entity", "phase": "day_60", "priority": "high", "dependencies": ["FRC-0336"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0338", "workstream": "Cybersecurity & Data Privacy", "section": "AI Systems", "description": "Identify AI systems in scope and assess EU AI Act compliance", "phase": "day_30", "priority": "high", "dependencies": ["FRC-0333"], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["regulatory_delay", "data_privacy_breach"]},
    # ── ESG & Sustainability (FRC-0369 to 0390) ──
    {"item_id": "FRC-0369", "workstream": "ESG & Sustainability", "section": "ESG Baseline", "description": "Establish ESG baseline metrics for combined entity", "phase": "day_90", "priority": "medium", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0370", "workstream": "ESG & Sustainability", "section": "ESG Reporting", "description": "Assess CSRD/SEC climate disclosure obligations for combined entity", "phase": "day_90", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": True, "risk_indicators": ["regulatory_delay"]},
    {"item_id": "FRC-0371", "workstream": "ESG & Sustainability", "section": "Carbon Accounting", "description": "Integrate target into acquirer carbon accounting framework", "phase": "day_90", "priority": "medium", "dependencies": ["FRC-0369"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    # ── Integration Budget & PMO (FRC-0391 to 0425) ──
    {"item_id": "FRC-0391", "workstream": "Integration Budget & PMO", "section": "PMO Setup", "description": "Stand up Integration Management Office (IMO) structure", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0392", "workstream": "Integration Budget & PMO", "section": "PMO Setup", "description": "Assign workstream leads across all 12 functional areas", "phase": "day_1", "priority": "critical", "dependencies": ["FRC-0391"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0393", "workstream": "Integration Budget & PMO", "section": "Budget", "description": "Finalize integration budget by workstream and phase", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0394", "workstream": "Integration Budget & PMO", "section": "Reporting Cadence", "description": "Establish weekly SteerCo reporting rhythm and template", "phase": "day_1", "priority": "high", "dependencies": ["FRC-0391"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0395", "workstream": "Integration Budget & PMO", "section": "Reporting Cadence", "description": "Produce first integrated status report for executive leadership", "phase": "day_30", "priority": "high", "dependencies": ["FRC-0394"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0396", "workstream": "Integration Budget & PMO", "section": "Budget", "description": "Track integration spend vs. budget monthly", "phase": "day_30", "priority": "medium", "dependencies": ["FRC-0393"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    # ── Facilities & Real Estate (FRC-0426 to 0442) ──
    {"item_id": "FRC-0426", "workstream": "Facilities & Real Estate", "section": "Lease Review", "description": "Inventory all target real estate leases and assess consolidation opportunities", "phase": "day_30", "priority": "high", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["stranded_costs"]},
    {"item_id": "FRC-0427", "workstream": "Facilities & Real Estate", "section": "Lease Review", "description": "Identify lease assignments requiring landlord consent", "phase": "day_30", "priority": "high", "dependencies": ["FRC-0426"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": []},
    {"item_id": "FRC-0428", "workstream": "Facilities & Real Estate", "section": "Office Consolidation", "description": "Assess co-location and office consolidation opportunities", "phase": "day_60", "priority": "medium", "dependencies": ["FRC-0426"], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["stranded_costs"]},
    # ── HR & Workforce Integration (FRC-0443) ──
    {"item_id": "FRC-0443", "workstream": "HR & Workforce Integration", "section": "HR Day 1 Readiness", "description": "Confirm employee benefit continuity at close (COBRA, 401k, health)", "phase": "day_1", "priority": "critical", "dependencies": [], "tsa_relevant": False, "cross_border_only": False, "risk_indicators": ["cultural_integration"]},
]


def _build(row: dict) -> TaskTemplate:
    return TaskTemplate(
        item_id=row["item_id"],
        workstream=row["workstream"],
        section=row["section"],
        description=row["description"],
        phase=row["phase"],
        priority=row["priority"],
        dependencies=tuple(row["dependencies"]),
        tsa_relevant=row["tsa_relevant"],
        cross_border_only=row["cross_border_only"],
        risk_indicators=tuple(row["risk_indicators"]),
    )


TASK_CATALOG: tuple[TaskTemplate, ...] = tuple(_build(r) for r in _MASTER_ROWS)

_BY_ID: dict[str, TaskTemplate] = {t.item_id: t for t in TASK_CATALOG}

# Phase label shown for the period in which each workstream is most critical
WORKSTREAM_PHASES: dict[str, str] = {
    "TSA Assessment & Exit": "Day 1",
    "Consolidation & Reporting": "Day 1",
    "Operational Accounting": "Day 1",
    "Internal Controls & SOX": "Day 30",
    "Income Tax & Compliance": "Day 1",
    "Treasury & Banking": "Day 1",
    "FP&A & Baselining": "Day 60",
    "Cybersecurity & Data Privacy": "Day 1",
    "ESG & Sustainability": "Day 90",
    "Integration Budget & PMO": "Day 1",
    "Facilities & Real Estate": "Day 30",
    "HR & Workforce Integration": "Day 1",
}

DEFAULT_WORKSTREAM_PHASE = "Day 1"


# ═════════════════════════════════════════════════════════════════════════════
# Lookups
# ═════════════════════════════════════════════════════════════════════════════

def get_template(item_id: str) -> TaskTemplate:
    """Return the template for ``item_id`` or raise NotFoundError."""
    tpl = _BY_ID.get(item_id)
    if tpl is None:
        raise NotFoundError(resource="TaskTemplate", resource_id=item_id)
    return tpl


def workstream_phase(workstream: str) -> str:
    return WORKSTREAM_PHASES.get(workstream, DEFAULT_WORKSTREAM_PHASE)


def dangling_dependencies(
    catalog: tuple[TaskTemplate, ...] | list[TaskTemplate] = TASK_CATALOG,
) -> dict[str, tuple[str, ...]]:
    """Map item id → prerequisite ids that do not exist in ``catalog``.

    Advisory only: plan generation never enforces prerequisites.
    """
    known = {t.item_id for t in catalog}
    missing = {}
    for tpl in catalog:
        absent = tuple(d for d in tpl.dependencies if d not in known)
        if absent:
            missing[tpl.item_id] = absent
    if missing:
        logger.debug("Catalog has %d templates with dangling prerequisites", len(missing))
    return missing
