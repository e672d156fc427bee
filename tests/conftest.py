"""
Shared pytest fixtures for the Deal Integration Plan Engine test suite.

Provides:
    - app: Flask application (session-scoped)
    - client: Flask test client (function-scoped)
    - intake fixtures: base domestic deal plus one variant per risk trigger
    - make_item: ChecklistItem factory for rollup tests
    - id_factory / clock: deterministic ids and timestamps
"""

import dataclasses
import itertools
from datetime import datetime, timezone

import pytest

from dealplan import create_app
from dealplan.models.intake import DealIntake
from dealplan.models.plan import ChecklistItem, RiskAlert


# ── App fixtures ─────────────────────────────────────────────────────────


@pytest.fixture(scope="session")
def app():
    """Create the Flask application once per test session."""
    application = create_app("testing")
    return application


@pytest.fixture()
def client(app):
    """Flask test client."""
    return app.test_client()


# ── Deterministic ids / clock ────────────────────────────────────────────

FIXED_NOW = datetime(2026, 3, 1, 9, 30, tzinfo=timezone.utc)


@pytest.fixture()
def id_factory():
    """Sequential ids: id-0001, id-0002, ..."""
    counter = itertools.count(1)
    return lambda: f"id-{next(counter):04d}"


@pytest.fixture()
def clock():
    return lambda: FIXED_NOW


# ── Intake fixtures ──────────────────────────────────────────────────────

BASE_INTAKE = DealIntake(
    deal_name="Acme Acquisition",
    deal_structure="stock_purchase",
    integration_model="fully_integrated",
    close_date="2026-06-01",
    cross_border=False,
    jurisdictions=(),
    tsa_required="no",
    industry_sector="Technology",
    deal_value_range="$50M–$250M",
    target_entities=1,
    target_gaap="US GAAP",
    target_erp="NetSuite",
    buyer_maturity="occasional",
)


def make_intake(**overrides) -> DealIntake:
    """BASE_INTAKE with field overrides."""
    return dataclasses.replace(BASE_INTAKE, **overrides)


@pytest.fixture()
def base_intake():
    return BASE_INTAKE


@pytest.fixture()
def intake_factory():
    return make_intake


@pytest.fixture()
def cross_border_3j_intake():
    """Three jurisdictions — regulatory delay."""
    return make_intake(cross_border=True, jurisdictions=("US", "EU-DE", "EU-FR"))


@pytest.fixture()
def eu_cross_border_intake():
    """EU jurisdiction — data privacy."""
    return make_intake(cross_border=True, jurisdictions=("US", "EU-NL"))


@pytest.fixture()
def tsa_intake():
    return make_intake(tsa_required="yes")


@pytest.fixture()
def carve_out_intake():
    return make_intake(deal_structure="carve_out", tsa_required="yes")


@pytest.fixture()
def ifrs_intake():
    return make_intake(target_gaap="IFRS")


@pytest.fixture()
def multi_entity_cross_border_intake():
    return make_intake(cross_border=True, jurisdictions=("US", "CA"), target_entities=8)


@pytest.fixture()
def multicultural_intake():
    """Two or more non-US jurisdictions — cultural integration."""
    return make_intake(cross_border=True, jurisdictions=("EU-DE", "JP", "SG"))


@pytest.fixture()
def standalone_intake():
    return make_intake(integration_model="standalone")


@pytest.fixture()
def high_value_eu_intake():
    return make_intake(
        cross_border=True, jurisdictions=("EU-IE", "US"), deal_value_range="$1B–$5B",
    )


# ── Item / alert factories ───────────────────────────────────────────────

_item_seq = itertools.count(1)


def make_item(status="not_started", workstream="TSA Assessment & Exit", **kw) -> ChecklistItem:
    """Build a ChecklistItem with sensible defaults."""
    n = next(_item_seq)
    defaults = {
        "id": f"item-{n}",
        "item_id": f"FRC-{n:04d}",
        "workstream": workstream,
        "section": "Test Section",
        "description": f"Test item {n}",
        "phase": "day_1",
        "priority": "high",
        "status": status,
    }
    defaults.update(kw)
    return ChecklistItem(**defaults)


def make_alert(severity="high", status="open", category="tsa_dependency", **kw) -> RiskAlert:
    defaults = {
        "id": f"risk-{next(_item_seq)}",
        "category": category,
        "severity": severity,
        "description": "Test risk",
        "mitigation": "Test mitigation",
        "affected_workstreams": ["TSA Assessment & Exit"],
        "status": status,
    }
    defaults.update(kw)
    return RiskAlert(**defaults)


@pytest.fixture()
def item_factory():
    return make_item


@pytest.fixture()
def alert_factory():
    return make_alert
