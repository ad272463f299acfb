"""
Schedule builder schemas.

The generation algorithm lives in the remote schedule service; this
module only validates the configuration the form collects before it is
forwarded unchanged.
"""

import re
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from route_explorer.config import ExplorerConfig

_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

_form = ExplorerConfig.schedule


class HaulPreferences(BaseModel):
    short: bool = True
    medium: bool = True
    long: bool = True


class HaulWeighting(BaseModel):
    short: float = Field(0.5, ge=0, le=1)
    medium: float = Field(0.3, ge=0, le=1)
    long: float = Field(0.2, ge=0, le=1)


class OperatingHours(BaseModel):
    start: str = _form.default_operating_start
    end: str = _form.default_operating_end

    @field_validator("start", "end")
    @classmethod
    def _check_time(cls, value: str) -> str:
        if not _TIME_PATTERN.match(value):
            raise ValueError("Operating hours must use HH:MM")
        return value


class ScheduleConfig(BaseModel):
    """Configuration forwarded to ``POST /generate`` on the schedule service."""

    airline_id: int = Field(..., gt=0)
    airline_name: str
    airline_iata: Optional[str] = None
    start_airport: str = Field(..., min_length=3, max_length=3)
    days: int = Field(_form.default_days, ge=_form.min_days, le=_form.max_days)
    haul_preferences: HaulPreferences = Field(default_factory=HaulPreferences)
    haul_weighting: HaulWeighting = Field(default_factory=HaulWeighting)
    prefer_single_leg_day_ratio: float = Field(
        _form.default_single_leg_ratio, ge=0, le=1
    )
    operating_hours: OperatingHours = Field(default_factory=OperatingHours)
    turnaround_time_minutes: int = Field(_form.default_turnaround_minutes, ge=0)
    preferred_countries: List[str] = Field(default_factory=list)
    preferred_regions: List[str] = Field(default_factory=list)
    minimum_rest_hours_between_long_haul: int = Field(
        _form.default_rest_hours, ge=0
    )
    repetition_mode: bool = False

    @field_validator("start_airport", mode="before")
    @classmethod
    def _normalize_airport(cls, value):
        return value.strip().upper() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _require_haul_type(self) -> "ScheduleConfig":
        prefs = self.haul_preferences
        if not (prefs.short or prefs.medium or prefs.long):
            raise ValueError("At least one haul type must be enabled")
        return self
