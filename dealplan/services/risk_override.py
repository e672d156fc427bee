"""
Risk Override — manual severity/status changes with an audit trail

Alerts are never deleted. A user may re-rate severity or move status through
its lifecycle; every change needs a reason and appends one RiskOverride to
``alert.overrides``.

Usage:
    from dealplan.services.risk_override import override_risk

    override_risk(alert, "status", "mitigated", "Counsel engaged, filings on track")
"""

import logging
from datetime import datetime, timezone

from dealplan.core.exceptions import ValidationError
from dealplan.models.plan import RISK_STATUSES, SEVERITY_LEVELS, RiskAlert, RiskOverride

logger = logging.getLogger(__name__)

# Overridable fields and their allowed values
OVERRIDE_FIELDS = {
    "severity": SEVERITY_LEVELS,
    "status": RISK_STATUSES,
}


def validate_override(alert: RiskAlert, field: str, value: str, reason: str) -> dict:
    """Check an override without applying it.

    Returns ``{"valid": bool, "from": current, "to": value, "reason": str | None}``.
    """
    allowed = OVERRIDE_FIELDS.get(field)
    if allowed is None:
        return {"valid": False, "from": None, "to": value,
                "reason": f"Unknown field: {field}"}

    current = getattr(alert, field)
    if value not in allowed:
        return {"valid": False, "from": current, "to": value,
                "reason": f"Invalid {field} '{value}'"}
    if value == current:
        return {"valid": False, "from": current, "to": value,
                "reason": f"{field} is already '{value}'"}
    if not (reason or "").strip():
        return {"valid": False, "from": current, "to": value,
                "reason": "An override reason is required"}

    return {"valid": True, "from": current, "to": value, "reason": None}


def override_risk(
    alert: RiskAlert,
    field: str,
    value: str,
    reason: str,
    *,
    clock=None,
) -> RiskOverride:
    """Apply one override to ``alert`` in place and return its audit record.

    Raises:
        ValidationError: unknown field, invalid value, no-op change or blank reason.
    """
    check = validate_override(alert, field, value, reason)
    if not check["valid"]:
        raise ValidationError(check["reason"], details={
            "field": field,
            "from": check["from"],
            "to": value,
        })

    now = (clock or (lambda: datetime.now(timezone.utc)))()
    record = RiskOverride(
        timestamp=now.isoformat(),
        field=field,
        from_value=check["from"],
        to_value=value,
        reason=reason.strip(),
    )
    setattr(alert, field, value)
    alert.overrides.append(record)

    logger.info(
        "Risk %s (%s) %s: %s → %s",
        alert.id, alert.category, field, record.from_value, record.to_value,
    )
    return record
