"""
Prompt rendering for viewpoint transformations.

Turns placement instructions into the text handed to the image
collaborator. The collaborator edits the reference photograph, so the
prompt asks it to keep the existing scene and only add or grow the listed
plants at the stated positions and sizes.
"""
from typing import List, Sequence

from gardenscope.domain.models import PlacementInstruction, ScenePlant

DEFAULT_SEASON = "summer"

SEASON_DESCRIPTORS = {
    "spring": "early spring with fresh new growth, budding leaves and spring flowers",
    "summer": "full summer with lush green foliage, flowers in bloom and vibrant colors",
    "autumn": "autumn with changing leaves in reds, oranges and yellows",
    "winter": "winter with bare deciduous trees, evergreen presence and possible frost",
}

_SEASON_ALIASES = {"fall": "autumn"}


def normalize_season(season: str) -> str:
    """Canonical season name; unknown or empty values fall back to summer."""
    key = (season or "").strip().lower()
    key = _SEASON_ALIASES.get(key, key)
    return key if key in SEASON_DESCRIPTORS else DEFAULT_SEASON


def format_meters(cm: float) -> str:
    return f"{cm / 100.0:.1f}m"


def render_instruction_text(plant: ScenePlant) -> str:
    """
    One-line placement instruction for a fully enriched scene plant.

    Example:
        "Pedunculate Oak (quercus robur), about 15 years old, establishing:
        9.0m tall with a 7.2m canopy, center-left of the frame, in the
        middle-ground (medium distance, appears medium-sized)."
    """
    species = plant.species.replace("_", " ") if plant.species else "unknown species"
    return (
        f"{plant.display_name} ({species}), about {plant.projected_age_years:.0f} years old, "
        f"{plant.growth_stage}: {format_meters(plant.projected_height_cm)} tall with a "
        f"{format_meters(plant.projected_canopy_cm)} canopy, {plant.horizontal_label} of the frame, "
        f"in the {plant.depth_label} ({plant.size_hint})."
    )


def build_instruction(plant: ScenePlant) -> PlacementInstruction:
    """Structured instruction for a fully enriched scene plant."""
    return PlacementInstruction(
        plant_id=plant.id,
        common_name=plant.display_name,
        species=plant.species,
        projected_age_years=plant.projected_age_years,
        height_cm=plant.projected_height_cm,
        canopy_cm=plant.projected_canopy_cm,
        growth_stage=plant.growth_stage,
        horizontal_pct=plant.horizontal_pct,
        horizontal_label=plant.horizontal_label,
        depth_label=plant.depth_label,
        size_hint=plant.size_hint,
        distance_m=plant.distance_m,
        text=render_instruction_text(plant),
    )


def _section_lines(title: str, items: Sequence[str]) -> List[str]:
    lines = [f"{title}:"]
    lines.extend(f"{i}. {item}" for i, item in enumerate(items, start=1))
    return lines


def build_prompt_text(
    instructions: Sequence[PlacementInstruction],
    target_years: int,
    target_year: int,
    season: str,
) -> str:
    """
    Assemble the full prompt for the image collaborator.

    Args:
        instructions: Ordered placement instructions (nearest first)
        target_years: Years into the future
        target_year: Calendar year being visualized
        season: Canonical season name

    Returns:
        Prompt text
    """
    season_text = SEASON_DESCRIPTORS[normalize_season(season)]
    lines = [
        f"Edit this garden photograph to show how the same view will look in {target_years} "
        f"years (in {target_year}), during {season_text}.",
        "Keep the camera position, framing, buildings, terrain and sky unchanged.",
        "",
    ]
    lines.extend(_section_lines("Plants to show, nearest first", [i.text for i in instructions]))
    lines.extend([
        "",
        "Horizontal positions are relative to the frame (far-left to far-right). "
        "Foreground plants appear large and low in the frame; background plants appear small "
        "and near the horizon.",
        "Render plants at the stated heights and canopy sizes, photorealistic, matching the "
        "original lighting.",
    ])
    return "\n".join(lines)
