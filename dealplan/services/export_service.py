"""
Plan Export — CSV and Excel renditions of a generated plan

CSV exports (checklist / risks / summary) return ``str`` with CRLF line
ends; the Excel workbook returns ``bytes``. Only applicable (non-``na``)
checklist items are exported.

Usage:
    from dealplan.services.export_service import export_checklist_csv, export_filename

    body = export_checklist_csv(plan)
    name = export_filename(plan.intake.deal_name, "checklist", "csv")
"""

import csv
import io
import logging
import re
from datetime import datetime, timezone

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from dealplan.core.exceptions import NotFoundError
from dealplan.models.intake import MODEL_LABELS, STRUCTURE_LABELS
from dealplan.models.plan import GeneratedPlan
from dealplan.services.metrics import get_kpis, get_workstream_stats, plan_rag, workstream_rag

logger = logging.getLogger(__name__)

PHASE_LABELS = {
    "pre_close": "Pre-Close",
    "day_1": "Day 1",
    "day_30": "Day 1–30",
    "day_60": "Day 30–60",
    "day_90": "Day 60–90",
    "year_1": "Year 1",
}

CHECKLIST_COLUMNS = [
    "Item_ID", "Workstream", "Section", "Description", "Phase", "Priority",
    "Status", "Milestone_Date", "TSA_Relevant", "Cross_Border", "Risk_Indicators",
]
RISK_COLUMNS = [
    "Risk_ID", "Category", "Severity", "Status", "Description", "Mitigation",
    "Affected_Workstreams",
]

RAG_FILLS = {
    "green": PatternFill(start_color="27AE60", end_color="27AE60", fill_type="solid"),
    "amber": PatternFill(start_color="F39C12", end_color="F39C12", fill_type="solid"),
    "red": PatternFill(start_color="E74C3C", end_color="E74C3C", fill_type="solid"),
}
WHITE_FONT = Font(color="FFFFFF", bold=True)
HEADER_FILL = PatternFill(start_color="1F3A5F", end_color="1F3A5F", fill_type="solid")
HEADER_FONT = Font(color="FFFFFF", bold=True, size=11)
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


# ═════════════════════════════════════════════════════════════════════════════
# Helpers
# ═════════════════════════════════════════════════════════════════════════════

def export_filename(deal_name: str, kind: str, ext: str) -> str:
    """``"Acme Acquisition", "checklist", "csv"`` → ``acme_acquisition_checklist.csv``."""
    slug = re.sub(r"_+", "_", re.sub(r"[^a-z0-9]", "_", deal_name, flags=re.IGNORECASE)).lower()
    return f"{slug}_{kind}.{ext}"


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _label(status: str) -> str:
    return status.replace("_", " ")


def _risk_code(index: int) -> str:
    return f"RISK-{index + 1:03d}"


def _checklist_rows(plan: GeneratedPlan) -> list[list]:
    return [
        [
            item.item_id,
            item.workstream,
            item.section,
            item.description,
            PHASE_LABELS.get(item.phase, item.phase),
            item.priority,
            _label(item.status),
            item.milestone_date or "",
            _yes_no(item.tsa_relevant),
            _yes_no(item.cross_border_only),
            "; ".join(item.risk_indicators),
        ]
        for item in plan.checklist_items
        if item.is_active
    ]


def _risk_rows(plan: GeneratedPlan) -> list[list]:
    return [
        [
            _risk_code(idx),
            _label(alert.category),
            alert.severity,
            alert.status,
            alert.description,
            alert.mitigation,
            "; ".join(alert.affected_workstreams),
        ]
        for idx, alert in enumerate(plan.risk_alerts)
    ]


def _summary_rows(plan: GeneratedPlan) -> list[list]:
    intake = plan.intake
    kpis = get_kpis(plan.checklist_items)
    alerts = plan.risk_alerts
    structure = intake.deal_structure.value
    model = intake.integration_model.value

    rows = [
        ["Section", "Field", "Value"],
        ["Deal Profile", "Deal Name", intake.deal_name],
        ["Deal Profile", "Structure", STRUCTURE_LABELS.get(structure, structure)],
        ["Deal Profile", "Integration Model", MODEL_LABELS.get(model, model)],
        ["Deal Profile", "Close Date", intake.close_date or "TBD"],
        ["Deal Profile", "Cross-Border",
         "; ".join(intake.jurisdictions) if intake.cross_border else "Domestic"],
        ["Deal Profile", "TSA Required", intake.tsa_required.value.upper()],
        ["Deal Profile", "Industry Sector", intake.industry_sector],
        ["Deal Profile", "Deal Value Range", intake.deal_value_range],
        ["Deal Profile", "Target Entities", intake.target_entities],
        ["Deal Profile", "Target GAAP", intake.target_gaap],
        ["Deal Profile", "Target ERP", intake.target_erp],
        ["Deal Profile", "Buyer Maturity", intake.buyer_maturity],
        [],
        ["KPIs", "Total Active Items", kpis.total],
        ["KPIs", "Completed", kpis.complete],
        ["KPIs", "In Progress", kpis.in_progress],
        ["KPIs", "Blocked", kpis.blocked],
        ["KPIs", "Not Started", kpis.not_started],
        ["KPIs", "% Complete", f"{kpis.pct_complete}%"],
        ["KPIs", "Overall RAG", plan_rag(kpis, alerts).upper()],
        ["KPIs", "Open Risks", sum(1 for a in alerts if a.status == "open")],
        ["KPIs", "Critical Risks", sum(1 for a in alerts if a.severity == "critical")],
        [],
        ["Milestones", "Phase", "Date"],
    ]
    rows.extend(["Milestones", m.label, m.date] for m in plan.milestones)
    rows.append([])
    rows.append(["Meta", "Generated At", plan.generated_at])
    return rows


def _to_csv(rows: list[list]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\r\n")
    writer.writerows(rows)
    return buf.getvalue()


# ═════════════════════════════════════════════════════════════════════════════
# CSV exports
# ═════════════════════════════════════════════════════════════════════════════

def export_checklist_csv(plan: GeneratedPlan) -> str:
    """One row per applicable checklist item, catalog order."""
    return _to_csv([CHECKLIST_COLUMNS, *_checklist_rows(plan)])


def export_risks_csv(plan: GeneratedPlan) -> str:
    """One row per risk alert, numbered RISK-001 onward.

    Raises:
        NotFoundError: the plan has no risk alerts.
    """
    if not plan.risk_alerts:
        raise NotFoundError(resource="RiskAlert")
    return _to_csv([RISK_COLUMNS, *_risk_rows(plan)])


def export_summary_csv(plan: GeneratedPlan) -> str:
    """Deal profile, KPIs, milestones and generation timestamp."""
    return _to_csv(_summary_rows(plan))


# ═════════════════════════════════════════════════════════════════════════════
# Excel export
# ═════════════════════════════════════════════════════════════════════════════

def _apply_header_style(ws, row: int, col_count: int) -> None:
    """Apply dark-header styling to an Excel row (1-indexed)."""
    for col in range(1, col_count + 1):
        cell = ws.cell(row=row, column=col)
        cell.fill = HEADER_FILL
        cell.font = HEADER_FONT
        cell.border = THIN_BORDER
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)


def _auto_width(ws) -> None:
    """Size columns to content, capped at 60 chars."""
    for col in ws.columns:
        longest = max((min(len(str(c.value)), 60) for c in col if c.value is not None), default=0)
        ws.column_dimensions[get_column_letter(col[0].column)].width = max(longest + 4, 12)


def _write_table(ws, columns: list[str], rows: list[list], start_row: int = 1) -> None:
    for col, header in enumerate(columns, 1):
        ws.cell(row=start_row, column=col, value=header)
    _apply_header_style(ws, start_row, len(columns))
    for r, values in enumerate(rows, start_row + 1):
        for c, value in enumerate(values, 1):
            ws.cell(row=r, column=c, value=value).border = THIN_BORDER


def _rag_cell(ws, row: int, col: int, rag: str) -> None:
    cell = ws.cell(row=row, column=col, value=rag.upper())
    cell.fill = RAG_FILLS.get(rag, RAG_FILLS["amber"])
    cell.font = WHITE_FONT
    cell.alignment = Alignment(horizontal="center")
    cell.border = THIN_BORDER


def export_plan_xlsx(plan: GeneratedPlan) -> bytes:
    """Styled workbook: Summary, Checklist, Risks and Milestones sheets."""
    wb = Workbook()
    kpis = get_kpis(plan.checklist_items)
    overall = plan_rag(kpis, plan.risk_alerts)

    # ── Sheet 1: Summary ─────────────────────────────────────────────
    ws = wb.active
    ws.title = "Summary"
    ws.merge_cells("A1:F1")
    ws["A1"] = f"Integration Plan — {plan.intake.deal_name}"
    ws["A1"].font = Font(size=16, bold=True)
    generated = plan.generated_at
    try:
        stamp = datetime.fromisoformat(plan.generated_at)
        if stamp.tzinfo is None:
            stamp = stamp.replace(tzinfo=timezone.utc)
        generated = stamp.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    except ValueError:
        logger.debug("Unparseable generated_at %r, exporting verbatim", plan.generated_at)
    ws["A2"] = f"Generated: {generated}"
    ws["A2"].font = Font(size=10, italic=True, color="666666")

    ws["A4"] = "Overall Status"
    ws["A4"].font = Font(size=12, bold=True)
    _rag_cell(ws, 4, 2, overall)

    kpi_rows = [
        ["Total Active Items", kpis.total],
        ["Completed", kpis.complete],
        ["In Progress", kpis.in_progress],
        ["Blocked", kpis.blocked],
        ["Not Started", kpis.not_started],
        ["% Complete", kpis.pct_complete],
    ]
    _write_table(ws, ["KPI", "Value"], kpi_rows, start_row=6)

    row = 6 + len(kpi_rows) + 2
    ws_columns = ["Workstream", "RAG", "Total", "Complete", "In Progress", "Blocked", "Not Started"]
    for col, header in enumerate(ws_columns, 1):
        ws.cell(row=row, column=col, value=header)
    _apply_header_style(ws, row, len(ws_columns))
    for name, stats in get_workstream_stats(plan.checklist_items).items():
        row += 1
        ws.cell(row=row, column=1, value=name).border = THIN_BORDER
        _rag_cell(ws, row, 2, workstream_rag(stats))
        for col, value in enumerate(
            [stats.total, stats.complete, stats.in_progress, stats.blocked, stats.not_started], 3,
        ):
            ws.cell(row=row, column=col, value=value).border = THIN_BORDER
    _auto_width(ws)

    # ── Sheet 2: Checklist ───────────────────────────────────────────
    ws2 = wb.create_sheet("Checklist")
    _write_table(ws2, CHECKLIST_COLUMNS, _checklist_rows(plan))
    ws2.freeze_panes = "A2"
    _auto_width(ws2)

    # ── Sheet 3: Risks ───────────────────────────────────────────────
    ws3 = wb.create_sheet("Risks")
    _write_table(ws3, RISK_COLUMNS, _risk_rows(plan))
    _auto_width(ws3)

    # ── Sheet 4: Milestones ──────────────────────────────────────────
    ws4 = wb.create_sheet("Milestones")
    _write_table(
        ws4,
        ["Phase", "Milestone", "Date", "Days From Close"],
        [[m.phase, m.label, m.date, m.days_from_close] for m in plan.milestones],
    )
    _auto_width(ws4)

    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    logger.info(
        "Exported plan workbook for %r (%d checklist rows, %d risks)",
        plan.intake.deal_name, kpis.total, len(plan.risk_alerts),
    )
    return buf.getvalue()
