from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from components.constants import MIN_BUILD_YEAR


class LocatedPayload(BaseModel):
    city: str = Field(min_length=1)
    locality: str = Field(min_length=1)
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)


class HousePricePayload(LocatedPayload):
    area: float = Field(ge=0)
    bedrooms: int = Field(ge=0)
    bathrooms: int = Field(ge=0)
    property_type: str
    bhk: str
    furnishing: str
    build_year: Optional[int] = None
    amenities: List[str] = []

    @field_validator("build_year")
    @classmethod
    def check_build_year(cls, value):
        if value is None:
            return value
        if not MIN_BUILD_YEAR <= value <= date.today().year:
            raise ValueError(
                f"build year must be between {MIN_BUILD_YEAR} and {date.today().year}")
        return value


class HouseRentPayload(LocatedPayload):
    area: float = Field(ge=0)
    bedrooms: int = Field(ge=0)
    bathrooms: int = Field(ge=0)
    furnishing: str
    property_type: str
    floor: Optional[int] = None
    parking: str
    amenities: List[str] = []


class LandPricePayload(LocatedPayload):
    area: float = Field(ge=0)
    zone_type: str
    road_width: Optional[float] = Field(default=None, ge=0)
    corner_plot: bool


class PredictionResult(BaseModel):
    predicted_value: Optional[float] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    # fraction in 0..1, formatted as a percentage by the display layer
    confidence: Optional[float] = None
    price_per_unit: Optional[float] = None
    insights: str = ""
