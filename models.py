"""
Pydantic models for the Compliance Risk Assessment (CRA) engine.

Defines every value that crosses a boundary:
1. Entity records submitted for scoring (CRAInput)
2. Engine configuration (weights, defaults, override rules, risk bands)
3. Scoring output (CRAOutput) and the per-pillar breakdown
4. Batch simulation reports
5. Plain-language rule-set summaries
"""

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Enums
# =============================================================================

class Pillar(str, Enum):
    GEOGRAPHY = "geography"
    INDUSTRY = "industry"
    ENTITY = "entity"
    PRODUCT = "product"
    DELIVERY = "delivery"


# Config keys used on the wire for each pillar, in scoring order
PILLAR_KEYS: dict[str, Pillar] = {
    "geo": Pillar.GEOGRAPHY,
    "ind": Pillar.INDUSTRY,
    "ent": Pillar.ENTITY,
    "prod": Pillar.PRODUCT,
    "deliv": Pillar.DELIVERY,
}


class OverrideConditionType(str, Enum):
    """Condition kinds an override rule can test."""
    GEOGRAPHY_PROHIBITED = "geography_prohibited"
    SANCTIONS = "sanctions"
    PEP_AM = "pep_am"                   # PEP or adverse media
    SHELL_COMPANY = "shell_company"
    INDUSTRY_CBD = "industry_cbd"
    INDUSTRY_CRYPTO = "industry_crypto"
    BEARER_SHARES = "bearer_shares"
    ADULT_ENTERTAINMENT = "adult_entertainment"


# =============================================================================
# Lenient coercion for loosely-typed records
# =============================================================================
# Records arrive from forms, batch files and HTTP bodies. A field with the
# wrong shape is treated as absent rather than failing the whole record.

def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _as_int(value: Any) -> Optional[int]:
    number = _as_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float) and math.isfinite(value):
        return str(int(value)) if value.is_integer() else str(value)
    return None


def _as_flag(value: Any) -> Optional[bool]:
    # Only real booleans count; "true" or 1 do not raise a flag
    return value if isinstance(value, bool) else None


# =============================================================================
# Input Models — Entity Records
# =============================================================================

class ProductData(BaseModel):
    """Nested product block; only `type` is read."""
    model_config = ConfigDict(extra="allow", frozen=True)

    type: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value):
        return _as_text(value)


class DeliveryData(BaseModel):
    """Nested delivery block; only `channels` is read."""
    model_config = ConfigDict(extra="allow", frozen=True)

    channels: list[str] = Field(default_factory=list)

    @field_validator("channels", mode="before")
    @classmethod
    def _coerce_channels(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        channels = [_as_text(item) for item in value]
        return [c for c in channels if c is not None]


class CRAInput(BaseModel):
    """
    One entity or transaction submitted for risk assessment.

    Every field is optional. Unrecognised keys are kept in `extra_fields`
    and never influence scoring.
    """
    model_config = ConfigDict(extra="allow", frozen=True)

    # Identifiers
    record_id: Optional[str] = None
    entity_name: Optional[str] = None

    # Geography
    country_code: Optional[str] = None
    domicile: Optional[str] = None

    # Industry
    industry_code: Optional[str] = None
    industry_description: Optional[str] = None
    sic_codes: list[int] = Field(default_factory=list)

    # Entity / product / delivery
    entity_type: Optional[str] = None
    product_type: Optional[str] = None
    product_data: Optional[ProductData] = None
    delivery_data: Optional[DeliveryData] = None

    # Screening flags
    sanction_match: Optional[bool] = None
    sanction_likelihood: Optional[float] = Field(default=None, description="0-100")
    pep_count: Optional[int] = None
    has_pep: Optional[bool] = None
    has_adverse_media: Optional[bool] = None
    geography_prohibited: Optional[bool] = None
    bearer_shares: Optional[bool] = None

    # Shell company indicators
    has_employees: Optional[bool] = None
    has_premises: Optional[bool] = None
    has_cais: Optional[bool] = None
    has_pp: Optional[bool] = None

    @field_validator(
        "record_id", "entity_name", "country_code", "domicile",
        "industry_code", "industry_description", "entity_type", "product_type",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value):
        return _as_text(value)

    @field_validator(
        "sanction_match", "has_pep", "has_adverse_media", "geography_prohibited",
        "bearer_shares", "has_employees", "has_premises", "has_cais", "has_pp",
        mode="before",
    )
    @classmethod
    def _coerce_flag(cls, value):
        return _as_flag(value)

    @field_validator("sanction_likelihood", mode="before")
    @classmethod
    def _coerce_likelihood(cls, value):
        return _as_number(value)

    @field_validator("pep_count", mode="before")
    @classmethod
    def _coerce_pep_count(cls, value):
        return _as_int(value)

    @field_validator("sic_codes", mode="before")
    @classmethod
    def _coerce_sic_codes(cls, value):
        if not isinstance(value, (list, tuple)):
            return []
        codes = [_as_int(item) for item in value]
        return [c for c in codes if c is not None]

    @field_validator("product_data", "delivery_data", mode="before")
    @classmethod
    def _coerce_block(cls, value):
        if isinstance(value, (Mapping, BaseModel)):
            return value
        return None

    @property
    def extra_fields(self) -> dict[str, Any]:
        """Fields supplied by the caller that the engine does not know about."""
        return dict(self.model_extra or {})

    @classmethod
    def from_payload(cls, payload: Any) -> "CRAInput":
        """Build a record from a decoded JSON object.

        Raises ValueError when the payload is not an object at all; that is
        the caller's input error, not missing data.
        """
        if isinstance(payload, cls):
            return payload
        if not isinstance(payload, Mapping):
            raise ValueError(
                f"CRA input must be a JSON object, got {type(payload).__name__}"
            )
        # Non-string keys cannot name a field and are ignored like any unknown key
        return cls.model_validate({k: v for k, v in payload.items() if isinstance(k, str)})


# =============================================================================
# Engine Configuration
# =============================================================================

class CRAWeights(BaseModel):
    """Relative weight of each pillar. Normalized at scoring time."""
    model_config = ConfigDict(frozen=True)

    geo: float = Field(ge=0, allow_inf_nan=False)
    ind: float = Field(ge=0, allow_inf_nan=False)
    ent: float = Field(ge=0, allow_inf_nan=False)
    prod: float = Field(ge=0, allow_inf_nan=False)
    deliv: float = Field(ge=0, allow_inf_nan=False)


class ComponentDefaults(BaseModel):
    """Score used for a pillar when its scorecard lookup misses."""
    model_config = ConfigDict(frozen=True)

    geo: int = Field(ge=1, le=5)
    ind: int = Field(ge=1, le=5)
    ent: int = Field(ge=1, le=5)
    prod: int = Field(ge=1, le=5)
    deliv: int = Field(ge=1, le=5)


class OverrideRule(BaseModel):
    """Condition that forces the final score when it holds."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    # Free text so unknown kinds survive validation; they never match
    condition_type: str = Field(alias="conditionType")
    result_score: int = Field(alias="resultScore", description="Clamped to 1-5 when applied")
    priority: int = Field(description="Lower evaluates first")
    config: Optional[dict[str, Any]] = None

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        text = _as_text(value)
        return text if text is not None else value


class RiskBand(BaseModel):
    """Named, inclusive range of final scores."""
    model_config = ConfigDict(frozen=True)

    name: str
    min: float = Field(allow_inf_nan=False)
    max: float = Field(allow_inf_nan=False)

    def contains(self, score: float) -> bool:
        return self.min <= score <= self.max


class CRAEngineConfig(BaseModel):
    """Complete, validated engine configuration snapshot.

    Build partial configs through `engine.defaults.merge_with_defaults`.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    weights: CRAWeights
    component_defaults: ComponentDefaults = Field(alias="componentDefaults")
    override_rules: tuple[OverrideRule, ...] = Field(default=(), alias="overrideRules")
    risk_bands: tuple[RiskBand, ...] = Field(default=(), alias="riskBands")
    prohibited_countries: tuple[str, ...] = Field(default=(), alias="prohibitedCountries")
    reference_jurisdiction: str = Field(default="GB", alias="referenceJurisdiction")

    @field_validator("prohibited_countries", mode="before")
    @classmethod
    def _normalize_countries(cls, value):
        if not isinstance(value, (list, tuple, set, frozenset)):
            return value
        codes: list[str] = []
        for item in value:
            if not isinstance(item, str):
                continue
            code = item.strip().upper()
            if code and code not in codes:
                codes.append(code)
        return tuple(codes)

    @field_validator("reference_jurisdiction", mode="before")
    @classmethod
    def _normalize_reference(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    def to_dict(self) -> dict:
        """JSON-ready form using the wire (camelCase) keys."""
        return self.model_dump(mode="json", by_alias=True)


# =============================================================================
# Output Models
# =============================================================================

class ComponentScores(BaseModel):
    """Resolved 1-5 score per pillar."""
    model_config = ConfigDict(frozen=True)

    geo: float
    ind: float
    ent: float
    prod: float
    deliv: float


class CRAOutput(BaseModel):
    """Result of one CRA calculation."""
    record_id: str = "unknown"
    entity_name: str = "Unknown Entity"
    final_score: int = Field(ge=1, le=5)
    risk_band: str
    pre_override_score: int = Field(ge=1, le=5)
    override_applied: Optional[str] = None
    findings: list[str] = Field(default_factory=list)

    def to_dict(self) -> dict:
        """JSON-ready form; `override_applied` is omitted when no override fired."""
        return self.model_dump(mode="json", exclude_none=True)


# =============================================================================
# Batch Simulation
# =============================================================================

class SimulationError(BaseModel):
    """A batch entry that could not be scored."""
    index: int
    message: str


class BatchSummary(BaseModel):
    total_records: int = 0
    scored: int = 0
    errors: int = 0
    average_final_score: float = 0.0
    band_counts: dict[str, int] = Field(default_factory=dict)
    override_counts: dict[str, int] = Field(default_factory=dict)


class SimulationReport(BaseModel):
    results: list[CRAOutput] = Field(default_factory=list)
    errors: list[SimulationError] = Field(default_factory=list)
    summary: BatchSummary = Field(default_factory=BatchSummary)

    def to_dict(self) -> dict:
        data = self.model_dump(mode="json")
        data["results"] = [r.to_dict() for r in self.results]
        return data


# =============================================================================
# Rule-set Summaries
# =============================================================================

class OverrideSummary(BaseModel):
    priority: int
    name: str
    condition_label: str
    result_score: int


class RuleSetSummary(BaseModel):
    """Plain-language description of an engine configuration."""
    intro: str
    weights: str
    geography_first: str
    overrides: list[OverrideSummary] = Field(default_factory=list)
    risk_bands: str
    prohibited_countries: str


class RuleSetSummaryConcise(BaseModel):
    """One-line-per-topic variant for compact displays."""
    weights: str
    overrides: str
    prohibited: str
