"""
Tests for the Risk Detection Engine.

Covers:
  • Each of the seven rules fires on its trigger profile
  • Negative cases and boundaries (jurisdiction counts, GAAP, entity count)
  • Output order, ids, status and templated descriptions
"""

import pytest

from dealplan.models.intake import DEAL_VALUE_RANGES
from dealplan.models.plan import RISK_CATEGORIES
from dealplan.services.risk_rules import HIGH_VALUE_RANGES, RISK_RULES, detect_risks


def _categories(alerts):
    return [a.category for a in alerts]


# ═══════════════════════════════════════════════════════════════════════════
# 1 · Rule table
# ═══════════════════════════════════════════════════════════════════════════

class TestRuleTable:

    def test_seven_rules_in_fixed_order(self):
        assert tuple(r.category for r in RISK_RULES) == RISK_CATEGORIES

    def test_severities(self):
        assert {r.category: r.severity for r in RISK_RULES} == {
            "regulatory_delay": "critical",
            "tax_structure_leakage": "high",
            "tsa_dependency": "high",
            "data_privacy_breach": "high",
            "cultural_integration": "medium",
            "financial_reporting_gap": "high",
            "stranded_costs": "medium",
        }

    def test_high_value_bands_are_top_two_intake_bands(self):
        assert HIGH_VALUE_RANGES == {"$1B–$5B", ">$5B"}
        assert HIGH_VALUE_RANGES == set(DEAL_VALUE_RANGES[-2:])


# ═══════════════════════════════════════════════════════════════════════════
# 2 · Triggers
# ═══════════════════════════════════════════════════════════════════════════

class TestRiskTriggers:

    def test_base_intake_fires_nothing(self, base_intake):
        assert detect_risks(base_intake) == []

    def test_regulatory_delay(self, cross_border_3j_intake):
        cats = _categories(detect_risks(cross_border_3j_intake))
        assert "regulatory_delay" in cats

    def test_regulatory_delay_needs_three(self, eu_cross_border_intake):
        assert "regulatory_delay" not in _categories(detect_risks(eu_cross_border_intake))

    def test_regulatory_delay_needs_cross_border_flag(self, intake_factory):
        intake = intake_factory(jurisdictions=("US", "EU-DE", "EU-FR"))
        assert detect_risks(intake) == []

    def test_tax_leakage_low_tax_jurisdiction(self, eu_cross_border_intake):
        assert "tax_structure_leakage" in _categories(detect_risks(eu_cross_border_intake))

    def test_tax_leakage_high_value(self, intake_factory):
        intake = intake_factory(cross_border=True, jurisdictions=("US", "CA"), deal_value_range=">$5B")
        assert "tax_structure_leakage" in _categories(detect_risks(intake))

    def test_tax_leakage_not_for_domestic_high_value(self, intake_factory):
        intake = intake_factory(deal_value_range="$1B–$5B")
        assert "tax_structure_leakage" not in _categories(detect_risks(intake))

    def test_tsa_dependency(self, tsa_intake):
        assert _categories(detect_risks(tsa_intake)) == ["tsa_dependency"]

    def test_tsa_tbd_does_not_fire(self, intake_factory):
        assert detect_risks(intake_factory(tsa_required="tbd")) == []

    def test_data_privacy_eu(self, eu_cross_border_intake):
        assert "data_privacy_breach" in _categories(detect_risks(eu_cross_border_intake))

    def test_data_privacy_uk(self, intake_factory):
        intake = intake_factory(cross_border=True, jurisdictions=("US", "UK"))
        assert _categories(detect_risks(intake)) == ["data_privacy_breach"]

    def test_cultural_integration(self, multicultural_intake):
        assert "cultural_integration" in _categories(detect_risks(multicultural_intake))

    def test_cultural_needs_two_non_us(self, intake_factory):
        intake = intake_factory(cross_border=True, jurisdictions=("US", "CA"))
        assert "cultural_integration" not in _categories(detect_risks(intake))

    def test_reporting_gap_ifrs(self, ifrs_intake):
        assert _categories(detect_risks(ifrs_intake)) == ["financial_reporting_gap"]

    def test_reporting_gap_blank_gaap_does_not_fire(self, intake_factory):
        assert detect_risks(intake_factory(target_gaap="")) == []

    def test_reporting_gap_multi_entity(self, multi_entity_cross_border_intake):
        assert _categories(detect_risks(multi_entity_cross_border_intake)) == ["financial_reporting_gap"]

    @pytest.mark.parametrize("entities,fires", [(5, False), (6, True)])
    def test_reporting_gap_entity_boundary(self, intake_factory, entities, fires):
        intake = intake_factory(cross_border=True, jurisdictions=("US", "CA"), target_entities=entities)
        assert ("financial_reporting_gap" in _categories(detect_risks(intake))) is fires

    def test_reporting_gap_entities_domestic(self, intake_factory):
        assert detect_risks(intake_factory(target_entities=12)) == []

    def test_carve_out(self, carve_out_intake):
        assert _categories(detect_risks(carve_out_intake)) == ["tsa_dependency", "stranded_costs"]

    def test_standalone_fires_nothing(self, standalone_intake):
        assert detect_risks(standalone_intake) == []


# ═══════════════════════════════════════════════════════════════════════════
# 3 · Alert content
# ═══════════════════════════════════════════════════════════════════════════

class TestAlertContent:

    def test_multiple_rules_in_rule_order(self, multicultural_intake):
        # EU-DE, JP, SG: 3 jurisdictions, SG low-tax, EU privacy, 3 non-US
        assert _categories(detect_risks(multicultural_intake)) == [
            "regulatory_delay",
            "tax_structure_leakage",
            "data_privacy_breach",
            "cultural_integration",
        ]

    def test_high_value_eu(self, high_value_eu_intake):
        assert _categories(detect_risks(high_value_eu_intake)) == [
            "tax_structure_leakage",
            "data_privacy_breach",
        ]

    def test_alerts_open_with_fresh_ids(self, cross_border_3j_intake, id_factory):
        alerts = detect_risks(cross_border_3j_intake, id_factory=id_factory)
        assert [a.id for a in alerts] == [f"id-{n:04d}" for n in range(1, len(alerts) + 1)]
        assert all(a.status == "open" for a in alerts)
        assert all(a.overrides == [] for a in alerts)

    def test_default_ids_unique(self, multicultural_intake):
        alerts = detect_risks(multicultural_intake)
        assert len({a.id for a in alerts}) == len(alerts)

    def test_regulatory_description_counts_jurisdictions(self, cross_border_3j_intake):
        alert = detect_risks(cross_border_3j_intake)[0]
        assert alert.description.startswith("3 jurisdictions require regulatory filing")
        assert alert.affected_workstreams == ["Income Tax & Compliance", "Integration Budget & PMO"]

    def test_tsa_description_carve_out_note(self, carve_out_intake, tsa_intake):
        carve = detect_risks(carve_out_intake)[0]
        plain = detect_risks(tsa_intake)[0]
        assert "(Carve-Out — high TSA complexity)" in carve.description
        assert "Carve-Out" not in plain.description

    def test_privacy_description_lists_jurisdictions(self, intake_factory):
        intake = intake_factory(cross_border=True, jurisdictions=("EU-DE", "US", "UK"))
        alert = next(a for a in detect_risks(intake) if a.category == "data_privacy_breach")
        assert "EU-DE, UK" in alert.description

    def test_reporting_gap_description(self, ifrs_intake):
        alert = detect_risks(ifrs_intake)[0]
        assert alert.description.startswith("Target uses IFRS accounting standards. 1 legal entities")

    def test_stranded_costs_workstreams(self, carve_out_intake):
        alert = detect_risks(carve_out_intake)[-1]
        assert alert.affected_workstreams == [
            "TSA Assessment & Exit", "Facilities & Real Estate", "Integration Budget & PMO",
        ]
        assert alert.mitigation.startswith("Complete stranded cost mapping within Day 60")

    def test_alerts_do_not_share_workstream_lists(self, tsa_intake):
        first = detect_risks(tsa_intake)[0]
        first.affected_workstreams.append("Extra")
        assert "Extra" not in detect_risks(tsa_intake)[0].affected_workstreams
