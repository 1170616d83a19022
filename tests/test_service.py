"""
Unit tests for estimator_api/service.py and the request schema.
"""
import logging
from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from estimator_api.schemas import EstimateRequest
from estimator_api.service import (
    EstimationError,
    build_export_report,
    export_filename,
    reference_data,
    run_estimate,
    to_input,
)


# ─────────────────────────────────────────────────────────────────────────────
# EstimateRequest parsing
# ─────────────────────────────────────────────────────────────────────────────

class TestEstimateRequest:

    def test_defaults(self):
        req = EstimateRequest()
        assert (req.hours, req.energy, req.material, req.waste, req.output, req.distance) == (
            40, 1000, 500, 50, 100, 200,
        )
        assert req.sector == "Manufacturing"
        assert req.transport == "truck"

    def test_null_takes_default(self):
        assert EstimateRequest.model_validate({"energy": None}).energy == 1000

    def test_numeric_string_is_coerced(self):
        assert EstimateRequest.model_validate({"energy": "1200.5"}).energy == 1200.5

    def test_non_numeric_string_rejected(self):
        with pytest.raises(ValidationError):
            EstimateRequest.model_validate({"energy": "lots"})

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_rejected(self, value):
        with pytest.raises(ValidationError):
            EstimateRequest(energy=value)

    def test_negative_accepted(self):
        assert EstimateRequest(hours=-5).hours == -5

    @pytest.mark.parametrize("value", [5, 1.5, True, ["Retail"], {"name": "Retail"}])
    def test_non_text_sector_and_transport_take_defaults(self, value):
        req = EstimateRequest.model_validate({"sector": value, "transport": value})
        assert req.sector == "Manufacturing"
        assert req.transport == "truck"


# ─────────────────────────────────────────────────────────────────────────────
# to_input / run_estimate
# ─────────────────────────────────────────────────────────────────────────────

class TestRunEstimate:

    def test_default_payload(self):
        result = run_estimate(EstimateRequest())
        assert result.prediction == pytest.approx(843.6575)
        assert [s.name for s in result.pie_data] == [
            "Energy", "Materials", "Operations", "Transport", "Waste",
        ]
        assert [s.value for s in result.pie_data] == pytest.approx([820.0, 5.0, 2.0, 42.0, 0.75])
        assert [p.emissions for p in result.bar_data] == [844, 886, 928, 970, 1012, 1055]
        assert len(result.recommendations) == 4
        assert result.metrics.overall_score == 58

    def test_pie_slices_do_not_sum_to_prediction(self):
        result = run_estimate(EstimateRequest())
        assert sum(s.value for s in result.pie_data) == pytest.approx(869.75)
        assert result.prediction == pytest.approx(869.75 * 0.97)

    def test_unknown_sector_identical_to_manufacturing(self):
        assert run_estimate(EstimateRequest(sector="Unknown")) == run_estimate(EstimateRequest())

    def test_unknown_transport_identical_to_truck(self):
        assert run_estimate(EstimateRequest(transport="rocket")) == run_estimate(EstimateRequest())

    def test_empty_string_sector_falls_back(self):
        assert to_input(EstimateRequest(sector="")).sector == "Manufacturing"

    def test_substitution_is_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="estimator_api.service"):
            to_input(EstimateRequest(sector="Unknown", transport="rocket"))
        assert "Unrecognised sector 'Unknown'" in caplog.text
        assert "Unrecognised transport mode 'rocket'" in caplog.text

    def test_known_values_pass_through(self):
        inp = to_input(EstimateRequest(sector="Food & Beverage", transport="ship"))
        assert inp.sector == "Food & Beverage"
        assert inp.transport == "ship"

    def test_division_by_zero_is_estimation_error(self):
        with pytest.raises(EstimationError):
            run_estimate(EstimateRequest(output=-1))

    def test_renewable_present_for_all_zero_inputs(self):
        req = EstimateRequest(hours=0, energy=0, material=0, waste=0, output=0, distance=0)
        result = run_estimate(req)
        assert [r.title for r in result.recommendations] == ["Switch to Renewable Energy"]
        assert result.prediction == 0.0

    def test_response_dumps_camel_case(self):
        payload = run_estimate(EstimateRequest()).model_dump(by_alias=True)
        assert set(payload) == {"prediction", "pieData", "barData", "recommendations", "metrics"}
        assert "savingPotential" in payload["recommendations"][0]
        assert set(payload["metrics"]) == {
            "energyEfficiency", "materialEfficiency", "transportEfficiency", "overallScore",
        }


# ─────────────────────────────────────────────────────────────────────────────
# Export / reference
# ─────────────────────────────────────────────────────────────────────────────

class TestExport:

    NOW = datetime(2026, 3, 14, 9, 30, tzinfo=timezone.utc)

    def test_report_shape(self):
        report = build_export_report(EstimateRequest(energy=1500), now=self.NOW)
        assert report.inputs.energy == 1500
        assert report.results.timestamp == "2026-03-14T09:30:00+00:00"
        assert report.results.prediction == pytest.approx(run_estimate(EstimateRequest(energy=1500)).prediction)

    def test_report_dump_keys(self):
        payload = build_export_report(EstimateRequest(), now=self.NOW).model_dump(by_alias=True)
        assert set(payload) == {"inputs", "results"}
        assert set(payload["inputs"]) == {
            "hours", "energy", "material", "waste", "output", "distance", "sector", "transport",
        }
        assert set(payload["results"]) == {
            "prediction", "pieData", "barData", "recommendations", "metrics", "timestamp",
        }

    def test_filename(self):
        assert export_filename(self.NOW) == "co2-emissions-report-2026-03-14.json"


class TestReferenceData:

    def test_lists(self):
        ref = reference_data()
        assert ref.sectors == [
            "Manufacturing", "Retail", "Logistics", "IT/Software",
            "Healthcare", "Hospitality", "Food & Beverage",
        ]
        assert ref.transport_modes == ["truck", "car", "train", "airplane", "bike", "ship"]
        assert ref.defaults == EstimateRequest()
