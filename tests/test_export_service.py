"""
Tests for plan exports (CSV + Excel).

Covers:
  - export_filename slugifies the deal name
  - checklist CSV: header, active rows only, labels, CRLF line ends
  - risks CSV: RISK-NNN numbering, NotFoundError when empty
  - summary CSV: deal profile, KPIs, milestones
  - export_plan_xlsx: four sheets, RAG fill, checklist rows
"""

import csv
import io

import pytest
from openpyxl import load_workbook

from dealplan.core.exceptions import NotFoundError
from dealplan.services.export_service import (
    CHECKLIST_COLUMNS,
    RAG_FILLS,
    export_checklist_csv,
    export_filename,
    export_plan_xlsx,
    export_risks_csv,
    export_summary_csv,
)
from dealplan.services.plan_generator import generate_plan


def _rows(content: str) -> list[list[str]]:
    return list(csv.reader(io.StringIO(content)))


@pytest.fixture()
def base_plan(base_intake, clock):
    return generate_plan(base_intake, clock=clock)


@pytest.fixture()
def carve_plan(carve_out_intake, clock):
    return generate_plan(carve_out_intake, clock=clock)


# ── export_filename ─────────────────────────────────────────────────────────


def test_filename_slug():
    assert export_filename("Acme Acquisition", "checklist", "csv") == "acme_acquisition_checklist.csv"


def test_filename_collapses_punctuation():
    assert export_filename("Project  Falcon (EU) / 2026", "plan", "xlsx") == "project_falcon_eu_2026_plan.xlsx"


# ── checklist CSV ───────────────────────────────────────────────────────────


def test_checklist_csv_header_and_active_rows(base_plan):
    rows = _rows(export_checklist_csv(base_plan))
    assert rows[0] == CHECKLIST_COLUMNS
    assert len(rows) - 1 == 48
    assert "FRC-0001" not in {r[0] for r in rows[1:]}


def test_checklist_csv_labels(base_plan):
    row = next(r for r in _rows(export_checklist_csv(base_plan)) if r[0] == "FRC-0071")
    assert row[4] == "Day 1"
    assert row[6] == "not started"
    assert row[7] == "2026-06-01"
    assert row[8] == "No"
    assert row[9] == "No"


def test_checklist_csv_phase_range_label(base_plan):
    row = next(r for r in _rows(export_checklist_csv(base_plan)) if r[0] == "FRC-0305")
    assert row[4] == "Day 30–60"


def test_checklist_csv_crlf(base_plan):
    content = export_checklist_csv(base_plan)
    assert content.endswith("\r\n")
    assert "\n" not in content.replace("\r\n", "")


def test_checklist_csv_reflects_status_edits(base_plan):
    base_plan.checklist_items[14].status = "na"   # FRC-0071
    rows = _rows(export_checklist_csv(base_plan))
    assert len(rows) - 1 == 47


# ── risks CSV ───────────────────────────────────────────────────────────────


def test_risks_csv(carve_plan):
    rows = _rows(export_risks_csv(carve_plan))
    assert rows[0][0] == "Risk_ID"
    assert [r[0] for r in rows[1:]] == ["RISK-001", "RISK-002"]
    assert rows[1][1] == "tsa dependency"
    assert rows[2][6] == "TSA Assessment & Exit; Facilities & Real Estate; Integration Budget & PMO"


def test_risks_csv_empty_raises(base_plan):
    with pytest.raises(NotFoundError):
        export_risks_csv(base_plan)


# ── summary CSV ─────────────────────────────────────────────────────────────


def test_summary_csv(carve_plan):
    rows = _rows(export_summary_csv(carve_plan))
    lookup = {(r[0], r[1]): r[2] for r in rows if len(r) == 3}
    assert lookup[("Deal Profile", "Structure")] == "Carve-Out"
    assert lookup[("Deal Profile", "Cross-Border")] == "Domestic"
    assert lookup[("Deal Profile", "TSA Required")] == "YES"
    assert lookup[("KPIs", "% Complete")] == "0%"
    assert lookup[("KPIs", "Open Risks")] == "2"
    assert lookup[("Milestones", "Day 90 SteerCo")] == "2026-08-30"
    assert lookup[("Meta", "Generated At")] == "2026-03-01T09:30:00+00:00"


def test_summary_csv_cross_border_lists_jurisdictions(eu_cross_border_intake):
    rows = _rows(export_summary_csv(generate_plan(eu_cross_border_intake)))
    lookup = {(r[0], r[1]): r[2] for r in rows if len(r) == 3}
    assert lookup[("Deal Profile", "Cross-Border")] == "US; EU-NL"


# ── Excel ───────────────────────────────────────────────────────────────────


def test_plan_xlsx_sheets(carve_plan):
    wb = load_workbook(io.BytesIO(export_plan_xlsx(carve_plan)))
    assert wb.sheetnames == ["Summary", "Checklist", "Risks", "Milestones"]


def test_plan_xlsx_summary_rag(base_plan):
    wb = load_workbook(io.BytesIO(export_plan_xlsx(base_plan)))
    ws = wb["Summary"]
    assert ws["B4"].value == "AMBER"
    assert ws["B4"].fill.start_color.rgb.endswith(RAG_FILLS["amber"].start_color.rgb[-6:])


def test_plan_xlsx_checklist_rows(base_plan):
    wb = load_workbook(io.BytesIO(export_plan_xlsx(base_plan)))
    ws = wb["Checklist"]
    assert [c.value for c in ws[1]] == CHECKLIST_COLUMNS
    assert ws.max_row == 49


def test_plan_xlsx_milestones(base_plan):
    wb = load_workbook(io.BytesIO(export_plan_xlsx(base_plan)))
    values = list(wb["Milestones"].iter_rows(min_row=2, values_only=True))
    assert values[0] == ("day_1", "Day 1 / Close", "2026-06-01", 0)
    assert len(values) == 5


def test_plan_xlsx_without_risks(base_plan):
    wb = load_workbook(io.BytesIO(export_plan_xlsx(base_plan)))
    assert wb["Risks"].max_row == 1


def test_plan_xlsx_generated_stamp_in_utc(base_plan):
    base_plan.generated_at = "2026-03-01T11:30:00+02:00"
    wb = load_workbook(io.BytesIO(export_plan_xlsx(base_plan)))
    assert wb["Summary"]["A2"].value == "Generated: 2026-03-01 09:30 UTC"


def test_plan_xlsx_naive_stamp_treated_as_utc(base_plan):
    base_plan.generated_at = "2026-03-01T09:30:00"
    wb = load_workbook(io.BytesIO(export_plan_xlsx(base_plan)))
    assert wb["Summary"]["A2"].value == "Generated: 2026-03-01 09:30 UTC"
