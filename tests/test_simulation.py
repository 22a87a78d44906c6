"""Tests for batch simulation and its summary/dashboard."""

import io

import pytest
from rich.console import Console

from models import CRAOutput
from engine import merge_with_defaults
from simulation import run_simulation
from simulation_metrics import build_batch_summary, display_simulation_dashboard
from utilities.sample_records import SAMPLE_RECORDS, sample_records


def _output(record_id, final, band, override=None):
    return CRAOutput(
        record_id=record_id, final_score=final, pre_override_score=final,
        risk_band=band, override_applied=override,
    )


class TestRunSimulation:
    def test_mixed_batch(self, batch_mixed, empty_scorecards):
        report = run_simulation(batch_mixed, scorecards=empty_scorecards)

        assert [r.record_id for r in report.results] == ["B-1", "B-2", "B-4"]
        assert len(report.errors) == 1
        assert report.errors[0].index == 2
        assert "JSON object" in report.errors[0].message

        assert report.results[0].final_score == 3
        assert report.results[1].override_applied == "Sanctions Match"
        assert report.results[2].override_applied == "Geography - Prohibited"

    def test_summary_counts(self, batch_mixed, empty_scorecards):
        summary = run_simulation(batch_mixed, scorecards=empty_scorecards).summary
        assert summary.total_records == 4
        assert summary.scored == 3
        assert summary.errors == 1
        assert summary.band_counts == {"Medium Risk": 1, "Very High Risk": 2}
        assert summary.override_counts == {"Sanctions Match": 1, "Geography - Prohibited": 1}
        assert summary.average_final_score == pytest.approx(4.33)

    def test_order_preserved_with_many_workers(self, empty_scorecards):
        records = [{"record_id": f"R-{i}", "pep_count": i % 2} for i in range(50)]
        report = run_simulation(records, max_workers=8, scorecards=empty_scorecards)
        assert [r.record_id for r in report.results] == [f"R-{i}" for i in range(50)]

    def test_matches_single_calculation(self, empty_scorecards):
        from engine import calculate_cra
        records = sample_records()
        report = run_simulation(records, scorecards=empty_scorecards)
        assert report.results == [calculate_cra(r, scorecards=empty_scorecards) for r in records]

    def test_config_applies_to_every_record(self, empty_scorecards):
        config = merge_with_defaults({"overrideRules": [], "prohibitedCountries": []})
        report = run_simulation([{"country_code": "IR"}, {"pep_count": 3}], config, scorecards=empty_scorecards)
        assert all(r.override_applied is None for r in report.results)

    def test_empty_batch(self):
        report = run_simulation([])
        assert report.results == []
        assert report.summary.average_final_score == 0.0

    @pytest.mark.parametrize("records", [None, {"record_id": "x"}, "records"])
    def test_non_list_rejected(self, records):
        with pytest.raises(ValueError, match="JSON array"):
            run_simulation(records)

    def test_unexpected_failure_recorded(self, monkeypatch, empty_scorecards):
        import simulation

        def boom(record, config, scorecards):
            raise KeyError("scorecard")

        monkeypatch.setattr(simulation, "calculate_cra", boom)
        report = run_simulation([{}], scorecards=empty_scorecards)
        assert report.results == []
        assert report.errors[0].message.startswith("Internal error:")


class TestSampleRecords:
    def test_copies_are_independent(self):
        records = sample_records()
        records[0]["domicile"] = "IR"
        assert SAMPLE_RECORDS[0]["domicile"] == "GB"

    def test_sample_batch_scores(self, empty_scorecards):
        report = run_simulation(sample_records(), scorecards=empty_scorecards)
        assert report.summary.scored == 5
        overrides = [r.override_applied for r in report.results]
        assert overrides == [None, "PEP / Adverse Media", "Sanctions Match", "PEP / Adverse Media", None]


class TestBatchSummary:
    def test_first_seen_order(self):
        results = [
            _output("a", 5, "Very High Risk", "Sanctions Match"),
            _output("b", 2, "Low Risk"),
            _output("c", 5, "Very High Risk", "Sanctions Match"),
        ]
        summary = build_batch_summary(results, total_records=3)
        assert list(summary.band_counts) == ["Very High Risk", "Low Risk"]
        assert summary.override_counts == {"Sanctions Match": 2}
        assert summary.average_final_score == 4.0

    def test_empty(self):
        summary = build_batch_summary([], total_records=2, error_count=2)
        assert summary.scored == 0
        assert summary.errors == 2
        assert summary.average_final_score == 0.0


class TestDashboard:
    def test_renders(self, batch_mixed, empty_scorecards):
        report = run_simulation(batch_mixed, scorecards=empty_scorecards)
        buffer = io.StringIO()
        display_simulation_dashboard(report, Console(file=buffer, width=200))
        text = buffer.getvalue()
        assert "Simulation Summary" in text
        assert "Sterling Capital Partners" in text
        assert "Record 2:" in text
