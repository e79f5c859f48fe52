"""Tests for the upgrade comparator and catalog."""

import pytest

from sapengine.core.models import ElementType, VentilationSystem
from sapengine.ecm.catalog import UpgradeCatalog, get_measure, list_measure_ids
from sapengine.ecm.comparator import UpgradeComparator, UpgradeScenario
from sapengine.utils.validation import InvalidInputError


@pytest.fixture
def comparator(engine):
    return UpgradeComparator(engine=engine)


class TestCompare:
    """Pairwise comparisons."""

    def test_wall_insulation_saves(self, comparator, victorian_terrace):
        """Test better walls save space heating."""
        delta = comparator.compare_u_values(victorian_terrace, {"walls": 0.3})

        assert delta.space_heating_kwh > 0
        assert delta.fabric_heat_loss_w_per_k == pytest.approx(47 * (2.1 - 0.3))
        assert delta.name == "walls"

    def test_identical_descriptions(self, comparator, victorian_terrace):
        """Test comparing a description with itself saves nothing."""
        delta = comparator.compare(victorian_terrace, victorian_terrace)

        assert delta.space_heating_kwh == 0.0
        assert delta.water_heating_kwh == 0.0
        assert delta.fabric_heat_loss_w_per_k == 0.0

    def test_worse_fabric_floors_at_zero(self, comparator, victorian_terrace):
        """Test a penalty is reported as zero saving with a negative fabric delta."""
        delta = comparator.compare_u_values(victorian_terrace, {"roof": 2.3})

        assert delta.space_heating_kwh == 0.0
        assert delta.fabric_heat_loss_w_per_k < 0
        assert delta.modified_space_heating_kwh > delta.baseline_space_heating_kwh

    def test_fabric_upgrade_leaves_water_unchanged(self, comparator, victorian_terrace):
        """Test U-value changes do not affect hot water."""
        delta = comparator.compare_u_values(victorian_terrace, {"walls": 0.3})

        assert delta.water_heating_kwh == 0.0
        assert delta.total_kwh == pytest.approx(delta.space_heating_kwh)

    def test_unknown_element(self, comparator, victorian_terrace):
        """Test an unknown override id raises with the known ids."""
        with pytest.raises(InvalidInputError) as exc_info:
            comparator.compare_u_values(victorian_terrace, {"gable": 0.3})

        assert "walls" in exc_info.value.suggestions

    def test_baseline_unchanged(self, comparator, victorian_terrace):
        """Test the caller's description is not modified."""
        comparator.compare_u_values(victorian_terrace, {"walls": 0.3, "roof": 0.15})

        assert victorian_terrace.element("walls").u_value == 2.1
        assert victorian_terrace.element("roof").u_value == 0.4

    def test_dict_baseline(self, comparator, minimal_building_dict):
        """Test a plain dict baseline is accepted."""
        delta = comparator.compare_u_values(minimal_building_dict, {"wall": 0.2})

        assert delta.space_heating_kwh > 0

    def test_compare_measure(self, comparator, victorian_terrace):
        """Test a catalog measure scores the same as its U-value override."""
        by_measure = comparator.compare_measure(victorian_terrace, get_measure("wall_insulation"))
        by_u_value = comparator.compare_u_values(victorian_terrace, {"walls": 0.3})

        assert by_measure.name == "wall_insulation"
        assert by_measure.space_heating_kwh == pytest.approx(by_u_value.space_heating_kwh)
        assert by_measure.fabric_heat_loss_w_per_k == pytest.approx(47 * (2.1 - 0.3))

    def test_compare_measure_dict_baseline(self, comparator, minimal_building_dict):
        """Test a measure that does not apply saves nothing."""
        delta = comparator.compare_measure(minimal_building_dict, get_measure("roof_insulation"))

        assert delta.space_heating_kwh == 0.0

    def test_to_dict(self, comparator, victorian_terrace):
        """Test the delta serialises."""
        data = comparator.compare_u_values(victorian_terrace, {"walls": 0.3}, name="ewi").to_dict()

        assert data["name"] == "ewi"
        assert data["total_kwh"] == pytest.approx(data["space_heating_kwh"] + data["water_heating_kwh"])


class TestCompareMany:
    """Batch comparisons."""

    def test_matches_individual(self, comparator, victorian_terrace):
        """Test batch results equal one-by-one comparisons, in order."""
        overrides = [{"walls": 0.3}, {"roof": 0.15}, {"window_south": 1.2, "window_north": 1.2}]
        scenarios = [UpgradeScenario.from_u_values(victorian_terrace, o) for o in overrides]

        batch = comparator.compare_many(scenarios, max_workers=1)
        single = [comparator.compare_scenario(s) for s in scenarios]

        assert batch == single

    def test_empty(self, comparator):
        """Test no scenarios gives no deltas."""
        assert comparator.compare_many([]) == []

    def test_invalid_scenario_raises(self, comparator, victorian_terrace):
        """Test an invalid description anywhere in the batch raises."""
        bad = victorian_terrace.model_copy(update={"region": 99})
        scenario = UpgradeScenario(name="bad", baseline=bad, modified=bad)

        with pytest.raises(InvalidInputError):
            comparator.compare_many([scenario], max_workers=1)


class TestCatalog:
    """Fabric upgrade measures."""

    def test_ids(self):
        """Test the catalog lists its measures."""
        assert list_measure_ids() == ["wall_insulation", "roof_insulation", "window_replacement"]
        assert get_measure("nope") is None

    def test_applicable_to_terrace(self, victorian_terrace):
        """Test solid walls, thin loft and double glazing all qualify."""
        ids = [m.id for m in UpgradeCatalog().applicable(victorian_terrace)]

        assert ids == ["wall_insulation", "roof_insulation", "window_replacement"]

    def test_not_applicable_to_good_fabric(self, minimal_building):
        """Test well-insulated elements do not qualify."""
        assert UpgradeCatalog().applicable(minimal_building) == []

    def test_treated_area_is_net(self, victorian_terrace):
        """Test wall insulation covers the net wall area."""
        assert get_measure("wall_insulation").treated_area(victorian_terrace) == pytest.approx(47.0)

    def test_window_measure_covers_all_windows(self, victorian_terrace):
        """Test every qualifying window is replaced."""
        measure = get_measure("window_replacement")
        upgraded = measure.apply(victorian_terrace)

        assert measure.affected_elements(victorian_terrace) == ("window_south", "window_north")
        assert all(e.u_value == 1.5 for e in upgraded.elements_of_type(ElementType.WINDOW))
        assert measure.treated_area(victorian_terrace) == pytest.approx(15.0)

    def test_ventilation_upgrade_outside_catalog(self, comparator, victorian_terrace):
        """Test MVHR is scored by comparing descriptions, not through the catalog."""
        assert victorian_terrace.ventilation.system == VentilationSystem.NATURAL
        assert "mvhr" not in list_measure_ids()

        mvhr = victorian_terrace.model_copy(update={
            "ventilation": victorian_terrace.ventilation.model_copy(update={
                "system": VentilationSystem.BALANCED_HEAT_RECOVERY,
                "heat_recovery_efficiency": 0.85,
            }),
        })
        delta = comparator.compare(victorian_terrace, mvhr, name="mvhr")

        assert delta.name == "mvhr"
        assert delta.fabric_heat_loss_w_per_k == 0.0

    def test_by_element_type(self):
        """Test lookup by element type."""
        assert [m.id for m in UpgradeCatalog().by_element_type(ElementType.ROOF)] == ["roof_insulation"]
