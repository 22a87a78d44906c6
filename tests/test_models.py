"""Tests for CRA data models."""

import pytest
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pydantic import ValidationError

from models import (
    Pillar, PILLAR_KEYS, OverrideConditionType,
    CRAInput, ProductData, DeliveryData,
    CRAWeights, ComponentDefaults, OverrideRule, RiskBand, CRAEngineConfig,
    CRAOutput, SimulationError, SimulationReport, BatchSummary,
)


class TestEnums:
    def test_pillars(self):
        assert Pillar.GEOGRAPHY.value == "geography"
        assert Pillar.DELIVERY.value == "delivery"

    def test_pillar_keys_order(self):
        assert list(PILLAR_KEYS) == ["geo", "ind", "ent", "prod", "deliv"]
        assert PILLAR_KEYS["prod"] is Pillar.PRODUCT

    def test_condition_types(self):
        assert OverrideConditionType.PEP_AM.value == "pep_am"
        assert OverrideConditionType.GEOGRAPHY_PROHIBITED.value == "geography_prohibited"
        assert len(OverrideConditionType) == 8


class TestCRAInput:
    def test_empty(self):
        record = CRAInput()
        assert record.record_id is None
        assert record.sic_codes == []
        assert record.delivery_data is None
        assert record.extra_fields == {}

    def test_case_load(self, record_domestic_low):
        record = CRAInput.from_payload(record_domestic_low)
        assert record.entity_name == "Harbour Lane Bakery Ltd"
        assert record.country_code == "GB"
        assert record.delivery_data.channels == ["Branch"]
        assert record.has_employees is True

    def test_extra_fields_kept(self, record_domestic_low):
        record = CRAInput.from_payload(record_domestic_low)
        assert record.extra_fields == {"annual_turnover": 850000}

    def test_numeric_text_fields_become_strings(self):
        record = CRAInput.from_payload({"record_id": 42, "industry_code": 64191})
        assert record.record_id == "42"
        assert record.industry_code == "64191"

    def test_wrong_shapes_become_absent(self):
        record = CRAInput.from_payload({
            "country_code": ["GB"],
            "pep_count": "lots",
            "sanction_match": "yes",
            "sanction_likelihood": {"score": 99},
            "delivery_data": "online",
            "product_data": 7,
        })
        assert record.country_code is None
        assert record.pep_count is None
        assert record.sanction_match is None
        assert record.sanction_likelihood is None
        assert record.delivery_data is None
        assert record.product_data is None

    def test_non_integral_pep_count_ignored(self):
        assert CRAInput.from_payload({"pep_count": 1.5}).pep_count is None
        assert CRAInput.from_payload({"pep_count": 2.0}).pep_count == 2

    def test_flags_need_real_booleans(self):
        record = CRAInput.from_payload({"bearer_shares": 1, "has_pep": "true", "has_pp": False})
        assert record.bearer_shares is None
        assert record.has_pep is None
        assert record.has_pp is False

    def test_sic_codes_filtered(self):
        record = CRAInput.from_payload({"sic_codes": [64191, "1200", "abc", 12.5, True]})
        assert record.sic_codes == [64191, 1200]

    def test_sic_codes_not_a_list(self):
        assert CRAInput.from_payload({"sic_codes": "64191"}).sic_codes == []

    def test_channels_filtered(self):
        record = CRAInput.from_payload({"delivery_data": {"channels": ["Online", None, 3, {"x": 1}]}})
        assert record.delivery_data.channels == ["Online", "3"]

    def test_nested_blocks_keep_extras(self):
        record = CRAInput.from_payload({"product_data": {"type": "ISA", "limit": 20000}})
        assert isinstance(record.product_data, ProductData)
        assert record.product_data.type == "ISA"
        assert record.product_data.model_extra == {"limit": 20000}

    def test_from_payload_rejects_non_object(self):
        with pytest.raises(ValueError, match="JSON object"):
            CRAInput.from_payload(["GB"])
        with pytest.raises(ValueError):
            CRAInput.from_payload(None)

    def test_non_string_keys_ignored(self):
        record = CRAInput.from_payload({1: "x", ("a",): 2, "country_code": "GB"})
        assert record.country_code == "GB"
        assert record.extra_fields == {}

    def test_from_payload_passes_instances_through(self):
        record = CRAInput(country_code="GB")
        assert CRAInput.from_payload(record) is record

    def test_frozen(self):
        record = CRAInput(country_code="GB")
        with pytest.raises(ValidationError):
            record.country_code = "FR"

    def test_delivery_default(self):
        assert DeliveryData().channels == []


class TestEngineConfigModels:
    def test_weights_accept_zero(self):
        weights = CRAWeights(geo=0, ind=0, ent=0, prod=0, deliv=1)
        assert weights.deliv == 1

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            CRAWeights(geo=-0.1, ind=1, ent=1, prod=1, deliv=1)

    def test_nan_weight_rejected(self):
        with pytest.raises(ValidationError):
            CRAWeights(geo=float("nan"), ind=1, ent=1, prod=1, deliv=1)

    def test_component_default_range(self):
        with pytest.raises(ValidationError):
            ComponentDefaults(geo=0, ind=3, ent=3, prod=3, deliv=3)
        with pytest.raises(ValidationError):
            ComponentDefaults(geo=3, ind=3, ent=3, prod=3, deliv=6)

    def test_override_rule_aliases(self):
        rule = OverrideRule.model_validate({
            "id": 7, "name": "Bearer", "conditionType": "bearer_shares", "resultScore": 5, "priority": 1,
        })
        assert rule.id == "7"
        assert rule.condition_type == "bearer_shares"
        assert rule.result_score == 5

    def test_override_rule_by_field_name(self):
        rule = OverrideRule(id="x", name="X", condition_type="unknown_x", result_score=2, priority=9)
        assert rule.condition_type == "unknown_x"

    def test_risk_band_contains_inclusive(self):
        band = RiskBand(name="Low Risk", min=1, max=2)
        assert band.contains(1)
        assert band.contains(2)
        assert not band.contains(3)

    def test_prohibited_countries_normalized(self):
        config = CRAEngineConfig.model_validate({
            "weights": {"geo": 1, "ind": 1, "ent": 1, "prod": 1, "deliv": 1},
            "componentDefaults": {"geo": 3, "ind": 3, "ent": 3, "prod": 3, "deliv": 3},
            "prohibitedCountries": [" ir", "IR", "kp", 5, ""],
            "referenceJurisdiction": "us ",
        })
        assert config.prohibited_countries == ("IR", "KP")
        assert config.reference_jurisdiction == "US"

    def test_to_dict_uses_wire_keys(self, default_config):
        data = default_config.to_dict()
        assert set(data) == {
            "weights", "componentDefaults", "overrideRules", "riskBands",
            "prohibitedCountries", "referenceJurisdiction",
        }
        assert data["overrideRules"][0]["conditionType"] == "geography_prohibited"
        assert data["prohibitedCountries"] == ["IR", "KP", "MM"]


class TestOutputModels:
    def test_output_defaults(self):
        output = CRAOutput(final_score=3, risk_band="Medium Risk", pre_override_score=3)
        assert output.record_id == "unknown"
        assert output.entity_name == "Unknown Entity"
        assert output.findings == []

    def test_output_omits_missing_override(self):
        output = CRAOutput(final_score=3, risk_band="Medium Risk", pre_override_score=3)
        assert "override_applied" not in output.to_dict()

    def test_output_score_range(self):
        with pytest.raises(ValidationError):
            CRAOutput(final_score=6, risk_band="X", pre_override_score=3)

    def test_report_to_dict(self):
        report = SimulationReport(
            results=[CRAOutput(final_score=3, risk_band="Medium Risk", pre_override_score=3)],
            errors=[SimulationError(index=1, message="bad")],
            summary=BatchSummary(total_records=2, scored=1, errors=1),
        )
        data = report.to_dict()
        assert "override_applied" not in data["results"][0]
        assert data["errors"] == [{"index": 1, "message": "bad"}]
        assert data["summary"]["total_records"] == 2
