"""Pydantic schemas for places and their metrics."""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, as the map UI expects."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlaceMetrics(CamelModel):
    """Static metrics of a place. Only the cooling score changes at runtime."""

    heat_index: float = Field(..., description="Heat exposure (0-100)")
    vegetation_index: float = Field(..., description="Raw vegetation cover (0-100, higher = greener)")
    population_density: float = Field(..., description="Population density (0-100)")
    citizen_cooling_score: float = Field(..., description="Citizen cooling demand (0-100)")
    feasibility_score: float = Field(..., description="Intervention feasibility (0-1)")
    air_quality: float = Field(..., description="Air quality index (0-100), informational")


class PlaceRecord(CamelModel):
    """A point of interest on the map with its derived priority index."""

    id: int = Field(..., gt=0, description="Stable identifier")
    name: str = Field(..., description="Unique display name, used to match chat replies")
    coordinates: tuple[float, float] = Field(..., description="[latitude, longitude]")
    description: str = ""
    metrics: PlaceMetrics
    priority_index: float = Field(0.0, ge=0.0, le=100.0, description="Derived from metrics")


class LocationsResponse(BaseModel):
    """Response for the location list."""

    locations: list[PlaceRecord]


class LocationSearchResponse(BaseModel):
    """Response for a name lookup; location is null when nothing matched."""

    location: Optional[PlaceRecord] = None
