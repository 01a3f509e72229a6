"""
Cross-session analytics schemas.
"""

from pydantic import BaseModel, Field


class VolumeTrendRow(BaseModel):
    """Completed sets per muscle for one week (only muscles trained that week)."""

    week: str = Field(..., description="Week key, e.g. 'P1-W3'")
    muscles: dict[str, int] = Field(default_factory=dict)


class IntensityBucket(BaseModel):
    bucket: str = Field(..., description="Rep range: 1-3, 4-6, 7-9, 10-12, 13+")
    sets: int = Field(..., ge=0, description="Share of all completed sets, whole percent")


class PlateauEntry(BaseModel):
    exercise_id: str
    exercise: str = Field(..., description="Display name (falls back to the id)")
    change_pct: float = Field(..., description="Percent change of the weekly best, first → last week")
    first_score: float
    last_score: float
    weeks: int = Field(..., ge=1)


class UndertrainedEntry(BaseModel):
    muscle: str
    avg_sets: float = Field(..., ge=0.0, description="Average completed sets per observed week")


class AnalyticsBundle(BaseModel):
    volume_trend: list[VolumeTrendRow] = Field(default_factory=list)
    intensity_distribution: list[IntensityBucket] = Field(default_factory=list)
    plateaus: list[PlateauEntry] = Field(default_factory=list)
    undertrained: list[UndertrainedEntry] = Field(default_factory=list)
