"""
Unit tests for estimator_api/recommendations.py

Rules fire independently in a fixed order; the renewable-energy rule
always fires.
"""
import pytest

from estimator_api.calculations import EstimationInput
from estimator_api.recommendations import advise

ZERO = EstimationInput(hours=0, energy=0, material=0, waste=0, output=0, distance=0)


def titles(recs):
    return [r.title for r in recs]


class TestAdviseDefaults:

    def test_default_rules_in_order(self):
        recs = advise(EstimationInput(), 843.6575)
        assert titles(recs) == [
            "Reduce Energy Consumption",
            "Optimize Material Usage",
            "Consider Alternative Transport",
            "Switch to Renewable Energy",
        ]

    def test_default_saving_potentials(self):
        recs = advise(EstimationInput(), 843.6575)
        # 1000×0.3×0.82=246 ; 50×0.4×0.015=0.3→0 ; 200×(0.21-0.04)=34 ; 1000×0.82×0.7=574
        assert [r.saving_potential for r in recs] == [246, 0, 34, 574]

    def test_default_categories_and_impacts(self):
        recs = advise(EstimationInput(), 843.6575)
        assert [r.category for r in recs] == ["energy", "waste", "transport", "energy"]
        assert [r.impact for r in recs] == ["high", "medium", "high", "high"]

    def test_descriptions_interpolate_inputs(self):
        recs = advise(EstimationInput(), 843.6575)
        assert recs[0].description == (
            "Your energy usage of 1000 kWh is high. Consider energy-efficient "
            "equipment to save up to 300 kWh."
        )
        assert recs[1].description.startswith("Material waste of 50 kg")
        assert recs[2].description == (
            "Switching from truck to train could reduce emissions by up to 34 kg CO₂."
        )
        assert recs[3].description.endswith("up to 574 kg CO₂.")

    def test_fractional_input_kept_in_text(self):
        recs = advise(EstimationInput(energy=900.5), 0)
        assert "900.5 kWh" in recs[0].description

    def test_idempotent(self):
        assert advise(EstimationInput(), 843.6575) == advise(EstimationInput(), 843.6575)

    def test_unknown_transport_advised_as_truck(self):
        assert advise(EstimationInput(transport="rocket"), 0) == advise(EstimationInput(), 0)

    def test_unknown_transport_text_names_truck(self):
        recs = advise(EstimationInput(transport="rocket"), 0)
        transport = [r for r in recs if r.category == "transport"][0]
        assert transport.description.startswith("Switching from truck to train")


class TestRenewableAlwaysPresent:

    def test_all_zero_inputs(self):
        recs = advise(ZERO, 0.0)
        assert titles(recs) == ["Switch to Renewable Energy"]
        assert recs[0].saving_potential == 0

    @pytest.mark.parametrize("energy", [0, 10, 800, 5000, -50])
    def test_renewable_is_last(self, energy):
        recs = advise(EstimationInput(energy=energy), 0.0)
        assert recs[-1].title == "Switch to Renewable Energy"


class TestThresholds:

    def test_energy_threshold_is_strict(self):
        assert "Reduce Energy Consumption" not in titles(advise(EstimationInput(energy=800), 0))
        assert "Reduce Energy Consumption" in titles(advise(EstimationInput(energy=800.1), 0))

    def test_waste_threshold_is_strict(self):
        assert "Optimize Material Usage" not in titles(advise(EstimationInput(waste=40), 0))
        recs = advise(EstimationInput(waste=500), 0)
        waste = [r for r in recs if r.category == "waste"][0]
        # 500 × 0.4 × 0.015 = 3
        assert waste.saving_potential == 3

    def test_distance_threshold_is_strict(self):
        assert "Consider Alternative Transport" not in titles(advise(EstimationInput(distance=150), 0))

    @pytest.mark.parametrize("mode", ["train", "bike"])
    def test_low_carbon_modes_skip_transport_rule(self, mode):
        recs = advise(EstimationInput(distance=1000, transport=mode), 0)
        assert "Consider Alternative Transport" not in titles(recs)

    def test_airplane_transport_saving(self):
        recs = advise(EstimationInput(distance=1000, transport="airplane"), 0)
        transport = [r for r in recs if r.category == "transport"][0]
        # 1000 × (0.15 - 0.04) = 110
        assert transport.saving_potential == 110
        assert "Switching from airplane to train" in transport.description

    def test_hours_rule_fires_above_40(self):
        recs = advise(EstimationInput(hours=200), 0)
        hours = [r for r in recs if r.category == "operations"]
        assert len(hours) == 1
        # 200 × 0.1 × 0.05 = 1
        assert hours[0].saving_potential == 1

    def test_hours_rule_skipped_for_it_software(self):
        recs = advise(EstimationInput(hours=100, sector="IT/Software"), 0)
        assert "Optimize Operational Hours" not in titles(recs)

    def test_all_rules_fire_in_order(self):
        recs = advise(EstimationInput(hours=60, sector="Retail"), 0)
        assert [r.category for r in recs] == ["energy", "waste", "transport", "operations", "energy"]
