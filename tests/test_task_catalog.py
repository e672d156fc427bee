"""
Tests for the master task catalog.

Covers:
  • Catalog shape: unique, sortable ids; valid phases and priorities
  • TSA / cross-border flag populations
  • Lookups: get_template, workstream_phase
  • Advisory prerequisite report (dangling_dependencies)
"""

import pytest

from dealplan.core.exceptions import NotFoundError
from dealplan.models.plan import PHASES, PRIORITY_LEVELS, RISK_CATEGORIES, WORKSTREAMS, TaskTemplate
from dealplan.services.task_catalog import (
    DEFAULT_WORKSTREAM_PHASE,
    TASK_CATALOG,
    TSA_RESERVED_MAX_ORDINAL,
    dangling_dependencies,
    get_template,
    workstream_phase,
)


# ═══════════════════════════════════════════════════════════════════════════
# 1 · Catalog shape
# ═══════════════════════════════════════════════════════════════════════════

class TestCatalogShape:

    def test_catalog_size(self):
        assert len(TASK_CATALOG) == 73

    def test_item_ids_unique(self):
        ids = [t.item_id for t in TASK_CATALOG]
        assert len(ids) == len(set(ids))

    def test_item_ids_in_catalog_order(self):
        ids = [t.item_id for t in TASK_CATALOG]
        assert ids == sorted(ids)

    def test_phases_and_priorities_valid(self):
        for tpl in TASK_CATALOG:
            assert tpl.phase in PHASES, tpl.item_id
            assert tpl.priority in PRIORITY_LEVELS, tpl.item_id

    def test_workstreams_known(self):
        assert {t.workstream for t in TASK_CATALOG} == set(WORKSTREAMS)

    def test_risk_indicators_are_categories(self):
        for tpl in TASK_CATALOG:
            assert set(tpl.risk_indicators) <= set(RISK_CATEGORIES), tpl.item_id

    def test_templates_are_frozen(self):
        tpl = TASK_CATALOG[0]
        with pytest.raises(AttributeError):
            tpl.priority = "low"


# ═══════════════════════════════════════════════════════════════════════════
# 2 · Flags
# ═══════════════════════════════════════════════════════════════════════════

class TestCatalogFlags:

    def test_tsa_relevant_population(self):
        tsa = [t.item_id for t in TASK_CATALOG if t.tsa_relevant]
        assert tsa == [f"FRC-{n:04d}" for n in range(1, 15)]

    def test_tsa_items_in_reserved_range(self):
        for tpl in TASK_CATALOG:
            if tpl.tsa_relevant:
                assert tpl.ordinal <= TSA_RESERVED_MAX_ORDINAL

    def test_cross_border_population(self):
        xb = {t.item_id for t in TASK_CATALOG if t.cross_border_only}
        assert xb == {
            "FRC-0013", "FRC-0077", "FRC-0078", "FRC-0238", "FRC-0239", "FRC-0240",
            "FRC-0241", "FRC-0276", "FRC-0333", "FRC-0334", "FRC-0338", "FRC-0370",
        }

    def test_ordinal_parses_suffix(self):
        assert get_template("FRC-0071").ordinal == 71
        assert TaskTemplate("X-0007", "w", "s", "d", "day_1", "low").ordinal == 7

    def test_workstream_id_blocks(self):
        facilities = [t.item_id for t in TASK_CATALOG if t.workstream == "Facilities & Real Estate"]
        hr = [t.item_id for t in TASK_CATALOG if t.workstream == "HR & Workforce Integration"]
        assert all("FRC-0426" <= i <= "FRC-0442" for i in facilities)
        assert hr == ["FRC-0443"]


# ═══════════════════════════════════════════════════════════════════════════
# 3 · Lookups
# ═══════════════════════════════════════════════════════════════════════════

class TestCatalogLookups:

    def test_get_template(self):
        tpl = get_template("FRC-0001")
        assert tpl.workstream == "TSA Assessment & Exit"
        assert tpl.priority == "critical"

    def test_get_template_unknown_raises(self):
        with pytest.raises(NotFoundError, match="FRC-9999"):
            get_template("FRC-9999")

    def test_workstream_phase_table(self):
        assert workstream_phase("ESG & Sustainability") == "Day 90"
        assert workstream_phase("Internal Controls & SOX") == "Day 30"

    def test_workstream_phase_default(self):
        assert workstream_phase("Unknown Workstream") == DEFAULT_WORKSTREAM_PHASE == "Day 1"


# ═══════════════════════════════════════════════════════════════════════════
# 4 · Advisory prerequisites
# ═══════════════════════════════════════════════════════════════════════════

class TestDanglingDependencies:

    def test_shipped_catalog_is_clean(self):
        assert dangling_dependencies() == {}

    def test_reports_missing_prerequisites(self):
        catalog = (
            TaskTemplate("FRC-0001", "w", "s", "d", "day_1", "high"),
            TaskTemplate("FRC-0002", "w", "s", "d", "day_1", "high",
                         dependencies=("FRC-0001", "FRC-0500")),
        )
        assert dangling_dependencies(catalog) == {"FRC-0002": ("FRC-0500",)}
