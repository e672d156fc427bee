"""
Health check blueprint.

Endpoints:
    GET /api/v1/health/ready  — simple 200 for load balancers
    GET /api/v1/health/live   — app info plus catalog sanity
"""

import logging

from flask import Blueprint, current_app, jsonify

from dealplan.services.task_catalog import TASK_CATALOG, dangling_dependencies

logger = logging.getLogger(__name__)

health_bp = Blueprint("health_bp", __name__, url_prefix="/api/v1/health")


@health_bp.route("/ready", methods=["GET"])
def ready():
    """Simple readiness probe — always 200 if app is running."""
    return jsonify({"status": "ok"}), 200


@health_bp.route("/live", methods=["GET"])
def live():
    """Liveness check with catalog status."""
    dangling = dangling_dependencies()
    checks = {
        "catalog": {
            "status": "ok" if TASK_CATALOG else "error",
            "templates": len(TASK_CATALOG),
            "dangling_dependencies": len(dangling),
        },
        "app": {
            "name": "Deal Integration Plan Engine",
            "debug": current_app.debug,
            "testing": current_app.testing,
        },
    }
    overall = checks["catalog"]["status"] == "ok"
    if not overall:
        logger.error("Health check — task catalog is empty")
    return jsonify({"status": "ok" if overall else "degraded", "checks": checks}), (200 if overall else 503)
