"""
Plan generation, rollup and export endpoints.

Stateless: every request carries the intake or plan snapshot it works on;
nothing is stored between calls.

    POST /api/v1/plans/generate              intake JSON → plan JSON (201)
    POST /api/v1/plans/kpis                  {checklist_items, risk_alerts} → health
    POST /api/v1/plans/export/<kind>         plan JSON → file download
        format: csv (checklist | risks | summary) | xlsx (plan)
    GET  /api/v1/catalog                     master templates + dangling prerequisites
    GET  /api/v1/intake/options              intake form choices
"""

import logging

from flask import Blueprint, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from dealplan.core.exceptions import NotFoundError, ValidationError
from dealplan.models.intake import DealIntake, intake_options
from dealplan.models.plan import ChecklistItem, GeneratedPlan, RiskAlert
from dealplan.services.export_service import (
    export_checklist_csv,
    export_filename,
    export_plan_xlsx,
    export_risks_csv,
    export_summary_csv,
)
from dealplan.services.metrics import plan_health
from dealplan.services.plan_generator import generate_plan
from dealplan.services.task_catalog import TASK_CATALOG, dangling_dependencies
from dealplan.utils.errors import E, api_error

logger = logging.getLogger(__name__)

plan_bp = Blueprint("plan_bp", __name__, url_prefix="/api/v1")

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# (kind, format) → renderer
_EXPORTERS = {
    ("checklist", "csv"): export_checklist_csv,
    ("risks", "csv"): export_risks_csv,
    ("summary", "csv"): export_summary_csv,
    ("plan", "xlsx"): export_plan_xlsx,
}


# ═════════════════════════════════════════════════════════════════════════════
# Error handlers
# ═════════════════════════════════════════════════════════════════════════════

@plan_bp.errorhandler(NotFoundError)
def _handle_not_found(error: NotFoundError):
    return api_error(E.NOT_FOUND, str(error))


@plan_bp.errorhandler(ValidationError)
def _handle_validation(error: ValidationError):
    return api_error(E.VALIDATION_RULE, str(error), details=error.details)


@plan_bp.errorhandler(HTTPException)
def _handle_http(error: HTTPException):
    return api_error(f"ERR_HTTP_{error.code}", error.description, status=error.code)


@plan_bp.errorhandler(Exception)
def _handle_unexpected(error: Exception):
    logger.exception("Unexpected error in plan_bp endpoint=%s", request.endpoint)
    return api_error(E.INTERNAL, "Internal server error")


# ═════════════════════════════════════════════════════════════════════════════
# Payload helpers
# ═════════════════════════════════════════════════════════════════════════════

def _json_body() -> dict | None:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _parse(builder, data, what: str):
    """Run a ``from_dict`` builder, turning shape errors into ValidationError."""
    try:
        return builder(data)
    except ValidationError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise ValidationError(f"Malformed {what}", details={what: str(exc)}) from exc


# ═════════════════════════════════════════════════════════════════════════════
# Endpoints
# ═════════════════════════════════════════════════════════════════════════════

@plan_bp.route("/plans/generate", methods=["POST"])
def generate():
    """Generate a plan from a deal intake."""
    data = _json_body()
    if data is None:
        return api_error(E.VALIDATION_REQUIRED, "JSON body is required")

    intake = DealIntake.from_dict(data)
    plan = generate_plan(intake)
    return jsonify(plan.to_dict()), 201


@plan_bp.route("/plans/kpis", methods=["POST"])
def kpis():
    """KPIs, overall RAG and per-workstream RAG for a checklist snapshot."""
    data = _json_body()
    if data is None:
        return api_error(E.VALIDATION_REQUIRED, "JSON body is required")

    raw_items = data.get("checklist_items") or []
    raw_alerts = data.get("risk_alerts") or []
    for key, value in (("checklist_items", raw_items), ("risk_alerts", raw_alerts)):
        if not isinstance(value, list):
            return api_error(E.VALIDATION_INVALID, f"{key} must be a list", details={key: type(value).__name__})

    items = [_parse(ChecklistItem.from_dict, i, "checklist_item") for i in raw_items]
    alerts = [_parse(RiskAlert.from_dict, r, "risk_alert") for r in raw_alerts]
    return jsonify(plan_health(items, alerts)), 200


@plan_bp.route("/plans/export/<kind>", methods=["POST"])
def export(kind: str):
    """Render a plan snapshot as a CSV or Excel download."""
    fmt = request.args.get("format", "csv").lower()
    exporter = _EXPORTERS.get((kind, fmt))
    if exporter is None:
        raise NotFoundError(resource="Export", resource_id=f"{kind}.{fmt}")

    data = _json_body()
    if data is None:
        return api_error(E.VALIDATION_REQUIRED, "JSON body is required")

    plan = _parse(GeneratedPlan.from_dict, data, "plan")
    content = exporter(plan)
    filename = export_filename(plan.intake.deal_name, kind, fmt)
    mimetype = XLSX_MIMETYPE if fmt == "xlsx" else "text/csv"

    logger.info("Export %s for %r", filename, plan.intake.deal_name,
                extra={"deal_name": plan.intake.deal_name, "export_kind": kind})
    return Response(
        content,
        mimetype=mimetype,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@plan_bp.route("/catalog", methods=["GET"])
def catalog():
    """List the master task templates."""
    workstream = request.args.get("workstream")
    templates = [t for t in TASK_CATALOG if not workstream or t.workstream == workstream]
    return jsonify({
        "items": [t.to_dict() for t in templates],
        "total": len(templates),
        "dangling_dependencies": {k: list(v) for k, v in dangling_dependencies().items()},
    }), 200


@plan_bp.route("/intake/options", methods=["GET"])
def intake_form_options():
    """Choices for the intake form dropdowns."""
    return jsonify(intake_options()), 200
