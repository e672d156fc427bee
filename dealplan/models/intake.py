"""
Deal Integration Plan Engine
Deal intake model — the 12-field deal profile that drives plan generation.

Models:
    - DealIntake: immutable deal profile (3 tiers: required, context, advanced)

Option tables mirror the intake form choices and are served to form clients
through ``intake_options``. Free-text fields are not validated against them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from dealplan.core.exceptions import ValidationError


# ── Enums ────────────────────────────────────────────────────────────────────

class DealStructure(str, Enum):
    STOCK_PURCHASE = "stock_purchase"
    ASSET_PURCHASE = "asset_purchase"
    MERGER_FORWARD = "merger_forward"
    MERGER_REVERSE = "merger_reverse"
    CARVE_OUT = "carve_out"
    F_REORG = "f_reorg"


class IntegrationModel(str, Enum):
    FULLY_INTEGRATED = "fully_integrated"
    HYBRID = "hybrid"
    STANDALONE = "standalone"


class TsaRequired(str, Enum):
    YES = "yes"
    NO = "no"
    TBD = "tbd"


# ── Option tables ────────────────────────────────────────────────────────────

STRUCTURE_LABELS: dict[str, str] = {
    "stock_purchase": "Stock Purchase",
    "asset_purchase": "Asset Purchase",
    "merger_forward": "Forward Merger",
    "merger_reverse": "Reverse Triangular Merger",
    "carve_out": "Carve-Out",
    "f_reorg": "F-Reorganization",
}

MODEL_LABELS: dict[str, str] = {
    "fully_integrated": "Fully Integrated",
    "hybrid": "Hybrid",
    "standalone": "Standalone",
}

JURISDICTIONS: dict[str, str] = {
    "US": "United States",
    "EU-DE": "Germany (EU)",
    "EU-FR": "France (EU)",
    "EU-NL": "Netherlands (EU)",
    "EU-IE": "Ireland (EU)",
    "EU-LU": "Luxembourg (EU)",
    "EU-ES": "Spain (EU)",
    "UK": "United Kingdom",
    "CA": "Canada",
    "AU": "Australia",
    "JP": "Japan",
    "SG": "Singapore",
    "CH": "Switzerland",
    "IN": "India",
}

SECTORS = (
    "Technology", "Healthcare", "Financial Services", "Manufacturing",
    "Consumer & Retail", "Energy & Utilities", "Real Estate", "Media & Entertainment",
    "Professional Services", "Life Sciences", "Defense & Aerospace", "Other",
)

# Ordered lowest → highest band
DEAL_VALUE_RANGES = ("<$50M", "$50M–$250M", "$250M–$500M", "$500M–$1B", "$1B–$5B", ">$5B")

GAAP_OPTIONS = ("US GAAP", "IFRS", "Local GAAP", "Multiple", "Unknown")
ERP_OPTIONS = ("SAP", "Oracle", "NetSuite", "Workday", "Microsoft Dynamics", "QuickBooks", "Other", "Unknown")

BUYER_MATURITY_OPTIONS: dict[str, str] = {
    "first": "First-Time Acquirer",
    "occasional": "Occasional Acquirer",
    "serial": "Serial Acquirer",
    "pe": "PE / Financial Sponsor",
}


def _coerce_enum(enum_cls, value, field_name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ValidationError(
            f"{field_name} must be one of: {allowed}",
            details={field_name: f"invalid value {value!r}"},
        ) from None


def _optional_str(data: dict, key: str) -> str:
    value = data.get(key) or ""
    if not isinstance(value, str):
        raise ValidationError(
            f"{key} must be a string",
            details={key: f"invalid value {value!r}"},
        )
    return value


def intake_options() -> dict:
    """Choices offered by the intake form, in display order."""
    return {
        "deal_structure": [{"value": k, "label": v} for k, v in STRUCTURE_LABELS.items()],
        "integration_model": [{"value": k, "label": v} for k, v in MODEL_LABELS.items()],
        "tsa_required": [t.value for t in TsaRequired],
        "jurisdictions": [{"value": k, "label": v} for k, v in JURISDICTIONS.items()],
        "industry_sector": list(SECTORS),
        "deal_value_range": list(DEAL_VALUE_RANGES),
        "target_gaap": list(GAAP_OPTIONS),
        "target_erp": list(ERP_OPTIONS),
        "buyer_maturity": [{"value": k, "label": v} for k, v in BUYER_MATURITY_OPTIONS.items()],
    }


# ═════════════════════════════════════════════════════════════════════════════
#  DEAL INTAKE
# ═════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DealIntake:
    """Deal profile collected by the intake form.

    Tier 1 (required): deal_name, deal_structure, integration_model, close_date.
    Tier 2 (context):  cross_border, jurisdictions, tsa_required, industry_sector,
                       deal_value_range, target_entities.
    Tier 3 (advanced): target_gaap, target_erp, buyer_maturity.

    ``close_date`` is an ISO ``YYYY-MM-DD`` string and may be empty when the
    close has not been scheduled yet.
    """

    deal_name: str
    deal_structure: DealStructure
    integration_model: IntegrationModel
    close_date: str = ""

    cross_border: bool = False
    jurisdictions: tuple[str, ...] = field(default_factory=tuple)
    tsa_required: TsaRequired = TsaRequired.TBD
    industry_sector: str = ""
    deal_value_range: str = ""
    target_entities: int = 0

    target_gaap: str = ""
    target_erp: str = ""
    buyer_maturity: str = ""

    def __post_init__(self):
        object.__setattr__(self, "deal_structure", DealStructure(self.deal_structure))
        object.__setattr__(self, "integration_model", IntegrationModel(self.integration_model))
        object.__setattr__(self, "tsa_required", TsaRequired(self.tsa_required))
        # Lists handed in by callers are frozen so the intake stays hashable
        if not isinstance(self.jurisdictions, tuple):
            object.__setattr__(self, "jurisdictions", tuple(self.jurisdictions or ()))

    @classmethod
    def from_dict(cls, data: dict) -> "DealIntake":
        """Build an intake from a JSON payload (snake_case keys).

        Raises ValidationError for a missing deal name, an unknown enum
        literal or a field of the wrong JSON type.
        """
        name = _optional_str(data, "deal_name").strip()
        if not name:
            raise ValidationError("deal_name is required", details={"deal_name": "required"})

        raw_entities = data.get("target_entities") or 0
        try:
            if isinstance(raw_entities, bool):
                raise ValueError(raw_entities)
            entities = int(raw_entities)
        except (TypeError, ValueError):
            raise ValidationError(
                "target_entities must be an integer",
                details={"target_entities": f"invalid value {raw_entities!r}"},
            ) from None
        if entities < 0:
            raise ValidationError(
                "target_entities must not be negative",
                details={"target_entities": f"invalid value {entities!r}"},
            )

        cross_border = data.get("cross_border")
        if cross_border is None:
            cross_border = False
        elif not isinstance(cross_border, bool):
            raise ValidationError(
                "cross_border must be true or false",
                details={"cross_border": f"invalid value {cross_border!r}"},
            )

        jurisdictions = data.get("jurisdictions") or []
        if not isinstance(jurisdictions, (list, tuple)) or not all(isinstance(j, str) for j in jurisdictions):
            raise ValidationError(
                "jurisdictions must be a list of jurisdiction codes",
                details={"jurisdictions": f"invalid value {jurisdictions!r}"},
            )

        close_date = _optional_str(data, "close_date")
        if close_date:
            try:
                date.fromisoformat(close_date[:10])
            except ValueError:
                raise ValidationError(
                    "close_date must be an ISO date (YYYY-MM-DD)",
                    details={"close_date": f"invalid value {close_date!r}"},
                ) from None

        return cls(
            deal_name=name,
            deal_structure=_coerce_enum(DealStructure, data.get("deal_structure"), "deal_structure"),
            integration_model=_coerce_enum(IntegrationModel, data.get("integration_model"), "integration_model"),
            close_date=close_date,
            cross_border=cross_border,
            jurisdictions=tuple(jurisdictions),
            tsa_required=_coerce_enum(TsaRequired, data.get("tsa_required", "tbd"), "tsa_required"),
            industry_sector=_optional_str(data, "industry_sector"),
            deal_value_range=_optional_str(data, "deal_value_range"),
            target_entities=entities,
            target_gaap=_optional_str(data, "target_gaap"),
            target_erp=_optional_str(data, "target_erp"),
            buyer_maturity=_optional_str(data, "buyer_maturity"),
        )

    def to_dict(self) -> dict:
        return {
            "deal_name": self.deal_name,
            "deal_structure": self.deal_structure.value,
            "integration_model": self.integration_model.value,
            "close_date": self.close_date,
            "cross_border": self.cross_border,
            "jurisdictions": list(self.jurisdictions),
            "tsa_required": self.tsa_required.value,
            "industry_sector": self.industry_sector,
            "deal_value_range": self.deal_value_range,
            "target_entities": self.target_entities,
            "target_gaap": self.target_gaap,
            "target_erp": self.target_erp,
            "buyer_maturity": self.buyer_maturity,
        }
