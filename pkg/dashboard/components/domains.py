"""
Domain configurations for the three valuation forms.

Each form (house price, house rent, land price) runs the same orchestration;
everything that differs between them lives in a ``DomainConfig``: the field
schema, which fields are required, the amenity catalog, the endpoint path and
the response-field fallback chains used by the normalizer.
"""
from dataclasses import dataclass
from datetime import date
from typing import Optional, Tuple, Type

from pydantic import BaseModel

from components.constants import *
from models.prediction import HousePricePayload, HouseRentPayload, LandPricePayload

NUMBER = "number"
TEXT = "text"
CHOICE = "choice"
# a Yes/No choice sent to the backend as a boolean
FLAG = "flag"


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: str = TEXT
    required: bool = False
    default: object = None
    options: Tuple[str, ...] = ()
    min_value: Optional[int] = None
    max_value: Optional[int] = None
    placeholder: str = ""

    @property
    def is_optional_number(self):
        return self.kind == NUMBER and not self.required


@dataclass(frozen=True)
class Amenity:
    id: str
    label: str
    icon: str = ""


@dataclass(frozen=True)
class DomainConfig:
    key: str
    title: str
    endpoint: str
    fields: Tuple[FieldSpec, ...]
    payload_model: Type[BaseModel]
    value_label: str
    amenities: Tuple[Amenity, ...] = ()
    predicted_keys: Tuple[str, ...] = ("predicted_price", "price")
    min_keys: Tuple[str, ...] = ("min_price",)
    max_keys: Tuple[str, ...] = ("max_price",)
    per_unit_keys: Tuple[str, ...] = ()
    unit_label: str = ""
    missing_fields_message: str = "Please fill all required fields."
    missing_location_message: str = "Please select location on map."
    icon: str = "🏠"
    description: str = ""

    @property
    def required_fields(self):
        return [spec.name for spec in self.fields if spec.required]

    def field(self, name):
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    def defaults(self) -> dict:
        return {spec.name: spec.default for spec in self.fields}

    @property
    def amenity_ids(self):
        return [amenity.id for amenity in self.amenities]


def _amenities(catalog):
    return tuple(Amenity(*entry) for entry in catalog)


_CITY = FieldSpec("city", "City*", TEXT, required=True, placeholder="Enter the city")
_LOCALITY = FieldSpec(
    "locality", "Locality / Area*", TEXT, required=True, placeholder="Enter the locality")


def _area(label="Area (sqft)*"):
    return FieldSpec("area", label, NUMBER, required=True, min_value=0,
                     placeholder="Enter the area")


HOUSE_PRICE = DomainConfig(
    key="house-price",
    title="Residential Price Estimator",
    endpoint="/predict/house-price",
    fields=(
        _area(),
        FieldSpec("bedrooms", "Bedrooms*", NUMBER, required=True, min_value=0,
                  placeholder="Enter the number of bedrooms"),
        FieldSpec("bathrooms", "Bathrooms*", NUMBER, required=True, min_value=0,
                  placeholder="Enter the number of bathrooms"),
        FieldSpec("property_type", "Property Type", CHOICE, default="Apartment",
                  options=tuple(PROPERTY_TYPES)),
        FieldSpec("bhk", "BHK", CHOICE, default="2BHK", options=tuple(BHK)),
        FieldSpec("furnishing", "Furnishing", CHOICE, default="Semi-Furnished",
                  options=tuple(FURNISHING)),
        FieldSpec("build_year", "Year Built (optional)", NUMBER,
                  min_value=MIN_BUILD_YEAR, max_value=date.today().year,
                  placeholder="Enter the build year"),
        _CITY,
        _LOCALITY,
    ),
    payload_model=HousePricePayload,
    value_label="Estimated Price",
    amenities=_amenities(HOUSE_PRICE_AMENITIES),
    missing_fields_message="Please fill area, bedrooms, bathrooms, city and locality.",
    missing_location_message="Please pick a location on the map (or use 'Use My Location').",
    icon="🏠",
    description="This page estimates the market price of a residential property 📈",
)

HOUSE_RENT = DomainConfig(
    key="house-rent",
    title="House Rent Estimator",
    endpoint="/predict/house-rent",
    fields=(
        _area(),
        FieldSpec("bedrooms", "Bedrooms*", NUMBER, required=True, min_value=0,
                  placeholder="Enter the number of bedrooms"),
        FieldSpec("bathrooms", "Bathrooms*", NUMBER, required=True, min_value=0,
                  placeholder="Enter the number of bathrooms"),
        FieldSpec("property_type", "Property Type", CHOICE, default="Apartment",
                  options=tuple(RENTAL_PROPERTY_TYPES)),
        FieldSpec("furnishing", "Furnishing", CHOICE, default="Semi-Furnished",
                  options=tuple(FURNISHING)),
        _CITY,
        _LOCALITY,
        FieldSpec("floor", "Floor (optional)", NUMBER, min_value=0,
                  placeholder="Enter the floor"),
        FieldSpec("parking", "Parking", CHOICE, default="Yes", options=tuple(PARKING)),
    ),
    payload_model=HouseRentPayload,
    value_label="Estimated Monthly Rent",
    amenities=_amenities(HOUSE_RENT_AMENITIES),
    predicted_keys=("predicted_rent", "rent", "predicted_price", "price"),
    min_keys=("min_rent", "min_price"),
    max_keys=("max_rent", "max_price"),
    unit_label="/month",
    icon="🔑",
    description="This page estimates the monthly rental value of a property 💲",
)

LAND_PRICE = DomainConfig(
    key="land-price",
    title="Land Price Estimator",
    endpoint="/predict/land-price",
    fields=(
        _area("Plot Area (sqft)*"),
        FieldSpec("zone_type", "Zone Type", CHOICE, default="Residential",
                  options=tuple(ZONE_TYPES)),
        _CITY,
        _LOCALITY,
        FieldSpec("road_width", "Road width (ft, optional)", NUMBER, min_value=0,
                  placeholder="Enter the road width"),
        FieldSpec("corner_plot", "Corner Plot?", FLAG, default="No",
                  options=tuple(CORNER_PLOT)),
    ),
    payload_model=LandPricePayload,
    value_label="Estimated Land Value",
    per_unit_keys=("price_per_sqft", "price_per_unit"),
    missing_fields_message="Please fill area, city and locality.",
    missing_location_message="Please select the plot location on the map.",
    icon="🗺️",
    description="This page estimates the market value of a land plot 🌱",
)

DOMAINS = {config.key: config for config in (HOUSE_PRICE, HOUSE_RENT, LAND_PRICE)}
