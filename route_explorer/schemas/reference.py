"""
Reference collection schemas (airports, airlines, countries).

These back the plain list pages and the search suggestion boxes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

_RECORD_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class AirportRecord(BaseModel):
    """Airport as listed by the listing API."""

    model_config = _RECORD_CONFIG

    iata: Optional[str] = None
    name: str
    city_name: str = ""
    country: str = ""
    continent: str = ""
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @field_validator("city_name", "country", "continent", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return "" if value is None else value


class AirlineRecord(BaseModel):
    """Airline as listed by the listing API."""

    model_config = _RECORD_CONFIG

    id: int
    name: str
    iata: Optional[str] = None


class CountryRecord(BaseModel):
    """Country as listed by the listing API."""

    model_config = _RECORD_CONFIG

    country: str
    country_code: Optional[str] = None
    continent: Optional[str] = None
