"""Erosion phosphorus emission calculations."""

from p_emissions.config import CONSTANTS, PhosphorusCoefficients
from p_emissions.models.domain import Basics, CountryCoefficients, Soil
from p_emissions.models.results import ErosionResult


def calculate_erosion(
    soil: Soil,
    basics: Basics,
    country: CountryCoefficients,
    coefficients: PhosphorusCoefficients,
) -> ErosionResult:
    """Calculate TP emissions via erosion per land class.

    Formula:
        content   = soil P content corrected to the country P accumulation (mg/kg)
        ER_AL     = content / 1e6 * sediment_input_AL * enrichment_ratio
        ER_GL     = content / 1e6 * sediment_input_GL * enrichment_ratio
        ER_NatCov = soil_loss_NatCov * c_nat * enrichment_ratio * SDR / 100 / 1e6
        ER_Snow   = soil_loss_Snow * c_nat / 1e6

    Args:
        soil: Soil composition (P content and its reference accumulation)
        basics: Sediment inputs, soil losses and erosion ratios
        country: Country coefficients of the calculation year (P accumulation)
        coefficients: Empirical coefficient catalogue

    Returns:
        ErosionResult with the top soil P content, per-class loads and total.
    """
    content = soil.correct_phosphorus_content(country.phosphorus_accumulation)
    mg_per_kg = CONSTANTS.MILLIGRAMS_PER_KILOGRAM

    arable_land = content / mg_per_kg * basics.sediment_input_arable_land * basics.enrichment_ratio
    grassland = content / mg_per_kg * basics.sediment_input_grassland * basics.enrichment_ratio
    natural_covered = (
        basics.soil_loss_natural_covered
        * coefficients.natural_soil_phosphorus_content
        * basics.enrichment_ratio
        * basics.sediment_delivery_ratio
        / 100.0
        / mg_per_kg
    )
    snow = basics.soil_loss_snow * coefficients.natural_soil_phosphorus_content / mg_per_kg

    return ErosionResult(
        topsoil_phosphorus_content=content,
        arable_land=arable_land,
        grassland=grassland,
        natural_covered=natural_covered,
        snow=snow,
        total=arable_land + grassland + natural_covered + snow,
    )
