"""Crop reference table: agronomic profile per supported crop.

Declaration order (``maize, rice, wheat, sorghum, millet``) is significant:
the entity extractor resolves equal-length keyword ties to the first
declared crop.
"""

from __future__ import annotations

from dataclasses import dataclass

from climate_advisor.models.enums import DroughtToleranceEnum, WaterRequirementEnum


@dataclass(frozen=True, slots=True)
class CropProfile:
    """Static agronomic reference for one crop."""

    crop_id: str
    water_requirement: WaterRequirementEnum
    temp_min_c: int
    temp_max_c: int
    soil_type: str
    growing_season: str
    drought_tolerance: DroughtToleranceEnum
    resilient_varieties: tuple[str, ...]
    tip: str

    @property
    def temp_range(self) -> str:
        return f"{self.temp_min_c}-{self.temp_max_c}°C"

    def __repr__(self) -> str:
        return (
            f"<CropProfile crop={self.crop_id!r} "
            f"water={self.water_requirement.value!r}>"
        )


_PROFILES: tuple[CropProfile, ...] = (
    CropProfile(
        crop_id="maize",
        water_requirement=WaterRequirementEnum.medium_high,
        temp_min_c=18,
        temp_max_c=27,
        soil_type="well-drained loamy",
        growing_season="90-120 days",
        drought_tolerance=DroughtToleranceEnum.moderate,
        resilient_varieties=("Drought-Tolerant Maize (DTM)", "QPM varieties", "Hybrid 614"),
        tip="Consider intercropping with legumes for nitrogen fixation",
    ),
    CropProfile(
        crop_id="rice",
        water_requirement=WaterRequirementEnum.high,
        temp_min_c=20,
        temp_max_c=35,
        soil_type="clay loam",
        growing_season="120-150 days",
        drought_tolerance=DroughtToleranceEnum.low,
        resilient_varieties=("Sahbhagi Dhan", "NERICA varieties", "Swarna-Sub1"),
        tip="System of Rice Intensification (SRI) can reduce water use by 25-50%",
    ),
    CropProfile(
        crop_id="wheat",
        water_requirement=WaterRequirementEnum.medium,
        temp_min_c=12,
        temp_max_c=25,
        soil_type="well-drained loamy",
        growing_season="120-150 days",
        drought_tolerance=DroughtToleranceEnum.moderate_high,
        resilient_varieties=("HD-2967", "C-306", "DBW-187"),
        tip="Zero-tillage farming reduces water loss and improves soil health",
    ),
    CropProfile(
        crop_id="sorghum",
        water_requirement=WaterRequirementEnum.low,
        temp_min_c=25,
        temp_max_c=35,
        soil_type="well-drained",
        growing_season="90-120 days",
        drought_tolerance=DroughtToleranceEnum.high,
        resilient_varieties=("CSH-16", "Gadam Sorghum", "SPV-462"),
        tip="Excellent drought-resistant alternative to maize",
    ),
    CropProfile(
        crop_id="millet",
        water_requirement=WaterRequirementEnum.low,
        temp_min_c=25,
        temp_max_c=35,
        soil_type="sandy loam",
        growing_season="70-90 days",
        drought_tolerance=DroughtToleranceEnum.very_high,
        resilient_varieties=("Pearl Millet HHB-67", "Finger Millet GPU-28"),
        tip="Highly nutritious and climate-resilient; excellent for food security",
    ),
)

CROP_PROFILES: dict[str, CropProfile] = {profile.crop_id: profile for profile in _PROFILES}


def crop_ids() -> tuple[str, ...]:
    """Known crop identifiers in declaration order."""
    return tuple(CROP_PROFILES)


def get_crop(crop_id: str | None) -> CropProfile | None:
    """Case-insensitive lookup; ``None`` for unknown or missing ids."""
    if not crop_id:
        return None
    return CROP_PROFILES.get(crop_id.strip().lower())
