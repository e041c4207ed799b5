"""Metric definitions for Athens places."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class MetricDefinition:
    """Definition of a place metric."""

    key: str
    name: str
    description: str
    min_value: float = 0.0
    max_value: float = 100.0
    higher_means_more_need: bool = True
    scored: bool = True


# Metrics carried by every place record
METRICS: dict[str, MetricDefinition] = {
    "heat_index": MetricDefinition(
        key="heat_index",
        name="Heat Index",
        description="Summer surface heat exposure relative to the rest of the city",
    ),
    "vegetation_index": MetricDefinition(
        key="vegetation_index",
        name="Vegetation Index",
        description="Tree canopy and green cover; the score uses its deficit (100 - value)",
        higher_means_more_need=False,
    ),
    "population_density": MetricDefinition(
        key="population_density",
        name="Population Density",
        description="Residents and visitors exposed to heat in the area",
    ),
    "citizen_cooling_score": MetricDefinition(
        key="citizen_cooling_score",
        name="Citizen Cooling Demand",
        description="Demand for cooling reported by citizens; raised by chat reports",
    ),
    "feasibility_score": MetricDefinition(
        key="feasibility_score",
        name="Feasibility",
        description="How practical an intervention is at the site (0-1 multiplier)",
        max_value=1.0,
        higher_means_more_need=False,
    ),
    "air_quality": MetricDefinition(
        key="air_quality",
        name="Air Quality",
        description="Air quality index; shown on the map, not part of the priority score",
        scored=False,
    ),
}


def get_metric(key: str) -> Optional[MetricDefinition]:
    """Get metric definition by key."""
    return METRICS.get(key)
