"""Unit tests for the phosphorus emission calculator."""

import logging

import pytest

from p_emissions.config import DebugConfig
from p_emissions.engine import CalculationContext, PhosphorusEmissionCalculator
from p_emissions.errors import CountryDataNotAvailableError
from p_emissions.models import Option, Pathway, Result
from p_emissions.repositories import CountryOrStates


@pytest.fixture
def calculated(calculator, result, context):
    calculator.run(result, context)
    return result


class TestPhosphorusEmissionCalculator:
    """Tests for the full calculation of one analytical unit."""

    def test_all_pathways_written(self, calculated):
        assert calculated.is_calculated()
        for field in (
            "urban_systems",
            "atmospheric_deposition",
            "surface_runoff",
            "tile_drainage",
            "groundwater",
            "background",
            "erosion",
            "point_sources",
            "totals",
            "apportionment",
        ):
            assert getattr(calculated, field) is not None, field

    def test_mass_balance(self, calculated):
        """Test the grand total is exactly the sum of the pathway totals."""
        expected = (
            calculated.atmospheric_deposition.total
            + calculated.surface_runoff.total
            + calculated.tile_drainage.total
            + calculated.erosion.total
            + calculated.groundwater.total
            + calculated.point_sources.p_emission
            + calculated.urban_systems.total
        )

        assert calculated.totals.total == expected

    def test_apportionment_closes(self, calculated):
        """Test source categories are non-negative and sum to the total.

        Closure holds up to floating-point rounding of the category sums.
        """
        sources = calculated.apportionment.by_category()

        assert all(value >= 0 for value in sources.values())
        assert sum(sources.values()) == pytest.approx(calculated.totals.total)

    def test_oversized_detergent_shares(self, calculator, result, context, country):
        """Test detergent shares above the per-inhabitant load keep every category non-negative."""
        oversized = country.model_copy(
            update={
                "phosphorus_per_inhabitant": 0.5,
                "phosphorus_laundry_detergent": 0.6,
                "phosphorus_dishwasher_detergent": 0.3,
            }
        )
        pfree = Result(
            unit=result.unit.model_copy(
                update={
                    "option": Option(
                        pfree_laundry_detergents=True, pfree_dishwasher_detergents=True
                    )
                }
            ),
            period=result.period,
            hydrology=result.hydrology,
        )
        crowded = CalculationContext(
            basics=context.basics.model_copy(
                update={"inhabitants_connected_only_to_sewers": 5e6}
            ),
            countries=CountryOrStates(
                [oversized], calculation_year_for_hydrological_conditions=2010
            ),
            background_retention_factor=context.background_retention_factor,
            gw_retention_factor=context.gw_retention_factor,
        )

        calculator.run(pfree, crowded)

        assert pfree.urban_systems.total >= 0
        sources = pfree.apportionment.by_category()
        assert all(value >= 0 for value in sources.values())
        assert sum(sources.values()) == pytest.approx(pfree.totals.total)

    def test_background_groundwater_bounded(self, calculated):
        assert calculated.background.groundwater <= calculated.groundwater.total

    def test_point_sources_written_back(self, calculated):
        """Test the unit's point-source accumulator carries the calculated emission."""
        accumulator = calculated.unit.point_sources

        assert accumulator.p_emission == calculated.point_sources.p_emission
        assert accumulator.p_emission_no_wwtp == calculated.point_sources.p_emission_no_wwtp
        assert accumulator.p_emission > 0

    def test_per_inhabitant(self, calculated):
        assert calculated.totals.per_inhabitant == pytest.approx(
            calculated.totals.total / 20_000 * 1e6
        )

    def test_zero_area_unit_untouched(self, calculator, result, context):
        """Test units without area are skipped without any change."""
        empty = Result(
            unit=result.unit.model_copy(update={"area": 0.0}),
            period=result.period,
            hydrology=result.hydrology,
        )
        before = empty.model_dump()

        calculator.run(empty, context)

        assert empty.model_dump() == before
        assert not empty.is_calculated()

    def test_missing_country_raises_before_mutation(self, calculator, result, context):
        """Test a failed country lookup leaves the result unchanged."""
        no_countries = CalculationContext(
            basics=context.basics,
            countries=CountryOrStates([], calculation_year_for_hydrological_conditions=2010),
            background_retention_factor=context.background_retention_factor,
            gw_retention_factor=context.gw_retention_factor,
        )
        before = result.model_dump()

        with pytest.raises(CountryDataNotAvailableError) as exc_info:
            calculator.run(result, no_countries)

        assert result.model_dump() == before
        assert result.unit.point_sources.p_emission == 0.0
        assert exc_info.value.country_id == 1
        assert exc_info.value.year == 2015
        assert exc_info.value.unit_id == 101
        assert str(exc_info.value).endswith("\n\nUnable to run model.")

    def test_long_term_year_uses_calculation_year(self, calculator, result, context):
        """Test long-term pseudo-years use the countries' calculation year."""
        long_term = Result(
            unit=result.unit,
            period=result.period.model_copy(update={"year": 9001}),
            hydrology=result.hydrology,
        )

        calculator.run(long_term, context)

        # 600 mg/kg mapped for 1000 kg/ha, scaled to the 2010 accumulation of 700 kg/ha
        assert long_term.erosion.topsoil_phosphorus_content == pytest.approx(420.0)

    def test_calculation_year_used_directly(self, calculated):
        assert calculated.erosion.topsoil_phosphorus_content == pytest.approx(540.0)

    def test_calculator_reusable_across_units(self, calculator, result, context, unit, period,
                                              hydrology):
        """Test one calculator instance serves several units independently."""
        other = Result(
            unit=unit.model_copy(update={"id": 102}, deep=True),
            period=period,
            hydrology=hydrology,
        )

        calculator.run(result, context)
        calculator.run(other, context)

        assert other.totals.total == pytest.approx(result.totals.total)

    def test_validation_warnings_logged(self, calculator, result, context, caplog):
        """Test inconsistent inputs are reported but do not stop the calculation."""
        cramped = Result(
            unit=result.unit.model_copy(update={"area": 50.0}),
            period=result.period,
            hydrology=result.hydrology,
        )

        with caplog.at_level(logging.WARNING, logger="p_emissions.engine"):
            calculator.run(cramped, context)

        assert "Unit 101: landuse: Land-use areas" in caplog.text
        assert "Unit 101: soil: Soil areas" in caplog.text
        assert cramped.is_calculated()

    def test_summary_logged(self, calculator, result, context, caplog):
        with caplog.at_level(logging.INFO, logger="p_emissions.engine"):
            calculator.run(result, context)

        assert "Unit 101 (2015): TP total" in caplog.text

    def test_debug_snapshot(self, coefficients, config, result, context, tmp_path):
        """Test the final result is saved as JSON when debug output is enabled."""
        calculator = PhosphorusEmissionCalculator(
            coefficients, config, DebugConfig(enabled=True, output_dir=tmp_path)
        )

        calculator.run(result, context)

        snapshots = list((tmp_path / "101_2015").glob("*_99_final_result.json"))
        assert len(snapshots) == 1
        restored = Result.model_validate_json(snapshots[0].read_text())
        assert restored.totals.total == pytest.approx(result.totals.total)


class TestResultRecord:
    """Tests for the flattened report row."""

    def test_record_codes(self, calculated):
        record = calculated.to_record()

        assert record["AU_ID"] == 101
        assert record["Year"] == 2015
        assert record["Emission_TP_Total"] == calculated.totals.total
        assert record["Emission_TP_BG"] == calculated.apportionment.background
        assert record["GW_TP_Urban"] == calculated.groundwater.urban
        assert record["TD_TPC"] == calculated.tile_drainage.concentration

    def test_uncalculated_record_raises(self, result):
        with pytest.raises(ValueError, match="has not been calculated"):
            result.to_record()

    def test_pathway_totals(self, calculated):
        totals = calculated.pathway_totals()

        assert totals[Pathway.GROUNDWATER] == calculated.groundwater.total
        assert totals[Pathway.POINT_SOURCES] == calculated.point_sources.p_emission
        assert sum(totals.values()) == pytest.approx(calculated.totals.total)
