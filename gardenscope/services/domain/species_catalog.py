"""
Domain service: growth-model lookup by species with category-level fallback.

The lookup never fails: an unrecognized species resolves to the default
model of its category, and an unrecognized category resolves to the
perennial default.
"""
from dataclasses import dataclass
from typing import Mapping, Optional
import logging
import re

from gardenscope.domain.models import GrowthModel

logger = logging.getLogger(__name__)

FALLBACK_CATEGORY = "perennial"


def _model(height: float, canopy: float, years: float, carbon: float) -> GrowthModel:
    return GrowthModel(
        mature_height_cm=height,
        mature_canopy_cm=canopy,
        years_to_mature=years,
        carbon_per_year_kg=carbon,
    )


# Common temperate (Belgian) garden species, keyed by normalized botanical name
DEFAULT_SPECIES_MODELS: dict[str, GrowthModel] = {
    # Trees
    "quercus_robur": _model(3000, 2400, 50, 22),
    "fagus_sylvatica": _model(2500, 2000, 40, 18),
    "acer_campestre": _model(1500, 1200, 30, 12),
    "betula_pendula": _model(2000, 1000, 25, 10),
    "prunus_avium": _model(1500, 1200, 20, 8),
    "tilia_cordata": _model(2500, 1500, 40, 15),
    # Fruit trees
    "malus_domestica": _model(400, 400, 8, 5),
    "pyrus_communis": _model(500, 400, 10, 6),
    "prunus_cerasus": _model(400, 350, 7, 4),
    "prunus_domestica": _model(400, 350, 8, 4),
    # Shrubs
    "corylus_avellana": _model(500, 400, 10, 3),
    "sambucus_nigra": _model(400, 300, 5, 2),
    "viburnum_opulus": _model(300, 250, 8, 1.5),
    "rosa_canina": _model(300, 250, 5, 1),
    "crataegus_monogyna": _model(600, 400, 15, 3),
    # Hedges
    "carpinus_betulus": _model(200, 100, 10, 2),
    "ligustrum_vulgare": _model(250, 100, 8, 1.5),
    "buxus_sempervirens": _model(150, 100, 20, 0.5),
    # Perennials and herbs
    "lavandula_angustifolia": _model(60, 75, 3, 0.2),
    "salvia_officinalis": _model(60, 75, 3, 0.15),
    "rosmarinus_officinalis": _model(120, 120, 5, 0.3),
}

DEFAULT_CATEGORY_MODELS: dict[str, GrowthModel] = {
    "tree": _model(1500, 1000, 30, 15),
    "fruit_tree": _model(500, 400, 15, 8),
    "shrub": _model(200, 150, 5, 2),
    "perennial": _model(80, 60, 3, 0.5),
    "hedge": _model(250, 100, 8, 3),
    "annual": _model(60, 40, 1, 0.1),
    "vegetable": _model(80, 50, 1, 0.1),
    "herb": _model(50, 40, 2, 0.2),
    "berry": _model(150, 100, 4, 1),
    "wall_plant": _model(30, 50, 3, 0.3),
    "bulb": _model(40, 20, 2, 0.1),
}


def normalize_key(name: Optional[str]) -> str:
    """
    Normalize a species or category name for lookup.

    "Quercus robur", "quercus-robur" and "QUERCUS_ROBUR" all map to "quercus_robur".
    """
    if not name:
        return ""
    return re.sub(r"[\s\-]+", "_", name.strip().lower())


@dataclass(frozen=True)
class ResolvedGrowthModel:
    """A growth model together with where it came from."""
    model: GrowthModel
    source: str

    @property
    def is_species_specific(self) -> bool:
        return self.source == "species"


class SpeciesCatalog:
    """
    Keyed growth-model lookup with category-level fallback.

    The tables are injectable so callers can back the catalog with their
    own species data; the built-in tables are used otherwise.
    """

    def __init__(
        self,
        species_models: Optional[Mapping[str, GrowthModel]] = None,
        category_models: Optional[Mapping[str, GrowthModel]] = None,
    ):
        species = DEFAULT_SPECIES_MODELS if species_models is None else species_models
        categories = DEFAULT_CATEGORY_MODELS if category_models is None else category_models
        self._species = {normalize_key(k): v for k, v in species.items()}
        self._categories = {normalize_key(k): v for k, v in categories.items()}
        if FALLBACK_CATEGORY not in self._categories:
            self._categories[FALLBACK_CATEGORY] = DEFAULT_CATEGORY_MODELS[FALLBACK_CATEGORY]

    def get_species_model(self, species: Optional[str]) -> Optional[GrowthModel]:
        """Species-specific model, or None when the species is not in the table."""
        return self._species.get(normalize_key(species))

    def get_category_model(self, category: Optional[str]) -> GrowthModel:
        """Category default, falling back to the perennial default."""
        return self._categories.get(
            normalize_key(category),
            self._categories[FALLBACK_CATEGORY],
        )

    def resolve(self, species: Optional[str], category: Optional[str] = None) -> ResolvedGrowthModel:
        """
        Resolve the growth model for a plant.

        Args:
            species: Botanical species name (any case/spacing)
            category: Plant category used when the species is unknown

        Returns:
            ResolvedGrowthModel with source "species" or "category:<name>"
        """
        model = self.get_species_model(species)
        if model is not None:
            return ResolvedGrowthModel(model=model, source="species")

        category_key = normalize_key(category)
        if category_key not in self._categories:
            category_key = FALLBACK_CATEGORY
        logger.debug(f"Unknown species '{species}', using '{category_key}' category default")
        return ResolvedGrowthModel(
            model=self._categories[category_key],
            source=f"category:{category_key}",
        )
