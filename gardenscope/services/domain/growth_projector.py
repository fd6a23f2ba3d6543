"""
Domain service: projected plant growth at a future point in time.

Growth is linear from planting until the species' years-to-mature, then
capped at the mature size. Carbon sequestration is discounted while the
plant is immature.
"""
from datetime import date
from typing import Callable, Iterable, Optional, Union
import logging
import math

from gardenscope.domain.models import GrowthProjection, PlantRecord, ScenePlant
from gardenscope.services.domain.species_catalog import SpeciesCatalog

logger = logging.getLogger(__name__)

DAYS_PER_YEAR = 365.25

# (exclusive upper bound on age / years_to_mature, stage)
GROWTH_STAGES = (
    (0.10, "seedling"),
    (0.25, "young"),
    (0.50, "establishing"),
    (0.75, "maturing"),
    (1.00, "nearly-mature"),
)
MATURE_STAGE = "mature"


def years_between(later: date, earlier: date) -> float:
    """Signed number of (365.25-day) years from earlier to later."""
    return (later - earlier).days / DAYS_PER_YEAR


def growth_stage(maturity_ratio: float) -> str:
    """
    Categorical stage for an age / years-to-mature ratio.

    <10% seedling, <25% young, <50% establishing, <75% maturing,
    <100% nearly-mature, otherwise mature.
    """
    for upper, stage in GROWTH_STAGES:
        if maturity_ratio < upper:
            return stage
    return MATURE_STAGE


class GrowthProjector:
    """
    Domain service projecting plant size, carbon and maturity.

    The clock is injectable so projections are reproducible in tests.
    """

    def __init__(
        self,
        catalog: Optional[SpeciesCatalog] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.catalog = catalog or SpeciesCatalog()
        self._today = today or date.today

    def current_age(self, planted_date: Optional[date]) -> float:
        """Age in years today; 0 for unknown or future planting dates."""
        if planted_date is None:
            return 0.0
        return max(0.0, years_between(self._today(), planted_date))

    def project(
        self,
        species: Optional[str],
        category: Optional[str],
        planted_date: Optional[date],
        years_ahead: float,
    ) -> GrowthProjection:
        """
        Project a plant's growth.

        Args:
            species: Botanical species name
            category: Plant category, used when the species is unknown
            planted_date: Planting date, None if unknown
            years_ahead: Years into the future (negative or non-finite values count as 0)

        Returns:
            GrowthProjection with height/canopy capped at the mature values
        """
        resolved = self.catalog.resolve(species, category)
        model = resolved.model

        age = self.current_age(planted_date)
        if not math.isfinite(years_ahead):
            years_ahead = 0.0
        future_age = age + max(0.0, years_ahead)
        ratio = future_age / model.years_to_mature

        height = min(model.mature_height_cm, future_age * model.mature_height_cm / model.years_to_mature)
        canopy = min(model.mature_canopy_cm, future_age * model.mature_canopy_cm / model.years_to_mature)
        carbon = model.carbon_per_year_kg * future_age * min(1.0, ratio)

        return GrowthProjection(
            age_years=age,
            future_age_years=future_age,
            height_cm=height,
            canopy_cm=canopy,
            carbon_kg=carbon,
            stage=growth_stage(ratio),
            maturity_pct=min(100.0, ratio * 100.0),
            years_remaining=max(0, int(math.ceil(model.years_to_mature - math.floor(future_age)))),
            model_source=resolved.source,
        )

    def project_plant(
        self,
        plant: Union[ScenePlant, PlantRecord],
        years_ahead: float,
    ) -> GrowthProjection:
        """Project growth for a plant record or scene plant."""
        return self.project(plant.species, plant.category, plant.planted_date, years_ahead)

    def project_garden(
        self,
        plants: Iterable[PlantRecord],
        years_ahead: float,
    ) -> list[tuple[PlantRecord, GrowthProjection]]:
        """
        Project growth for every plant in a garden plan.

        Args:
            plants: Plant records
            years_ahead: Years into the future

        Returns:
            List of (plant, projection) pairs in input order
        """
        results = [(plant, self.project_plant(plant, years_ahead)) for plant in plants]
        logger.info(f"Projected growth for {len(results)} plants, {years_ahead} years ahead")
        return results

    def total_carbon_kg(self, plants: Iterable[PlantRecord], years_ahead: float) -> float:
        """Cumulative carbon sequestered by all plants at the projected date."""
        return carbon_total(self.project_garden(plants, years_ahead))


def carbon_total(predictions: Iterable[tuple[PlantRecord, GrowthProjection]]) -> float:
    """Sum the carbon of already computed (plant, projection) pairs."""
    return sum(projection.carbon_kg for _, projection in predictions)
