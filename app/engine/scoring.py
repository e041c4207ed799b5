"""Priority index formula and citizen report deltas.

The priority index expresses how urgently a place needs a cooling
intervention. It is a weighted sum of four 0-100 inputs, scaled by the
site's feasibility (0-1), clamped to [0, 100] and rounded half-up to one
decimal:

    base = 0.4 * heat + 0.3 * (100 - vegetation) + 0.2 * density + 0.1 * cooling
    index = round_half_up(clamp(base * feasibility, 0, 100), 1)

Vegetation is stored as the raw index (more greenery = higher value); the
formula turns it into a deficit.
"""

from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from typing import Any, Mapping, Optional, Union

PRIORITY_MIN = 0.0
PRIORITY_MAX = 100.0

COOLING_SCORE_MIN = 0.0
COOLING_SCORE_MAX = 100.0

PRIORITY_WEIGHTS: dict[str, float] = {
    "heat_index": 0.4,
    "vegetation_deficit": 0.3,
    "population_density": 0.2,
    "citizen_cooling_score": 0.1,
}


class ReportIntensity(str, Enum):
    """Severity tier of a citizen cooling report."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


REPORT_DELTAS: dict[ReportIntensity, float] = {
    ReportIntensity.HIGH: 2.0,
    ReportIntensity.MEDIUM: 1.0,
    ReportIntensity.LOW: 0.1,
}

# Other keys accepted in mappings: camelCase from the API / UI.
# vegetationDeficit is read as the raw vegetation index.
_ALTERNATE_KEYS = {
    "heat_index": ("heatIndex",),
    "vegetation_index": ("vegetationIndex", "vegetationDeficit", "vegetation_deficit"),
    "population_density": ("populationDensity",),
    "citizen_cooling_score": ("citizenCoolingScore",),
    "feasibility_score": ("feasibilityScore",),
}


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    return max(low, min(high, value))


def round_half_up(value: float, places: int = 1) -> float:
    """Round half-up at the given decimal place.

    Goes through the shortest decimal repr of the float so that e.g. 2.25
    rounds to 2.3 instead of following banker's rounding.
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _metric(metrics: Any, key: str) -> float:
    if isinstance(metrics, Mapping):
        for candidate in (key,) + _ALTERNATE_KEYS[key]:
            if candidate in metrics:
                return float(metrics[candidate])
        raise KeyError(key)
    return float(getattr(metrics, key))


def compute_priority_index(metrics: Any) -> float:
    """
    Compute the priority index for a set of place metrics.

    Args:
        metrics: PlaceMetrics model or a mapping with snake_case or camelCase keys.
            A mapping may name the vegetation input vegetationDeficit; it is
            read as the raw vegetation index, so the term is 0.3 * (100 - value).

    Returns:
        Index in [0, 100] with one decimal
    """
    heat = _metric(metrics, "heat_index")
    vegetation = _metric(metrics, "vegetation_index")
    density = _metric(metrics, "population_density")
    cooling = _metric(metrics, "citizen_cooling_score")
    feasibility = _metric(metrics, "feasibility_score")

    base = (
        PRIORITY_WEIGHTS["heat_index"] * heat
        + PRIORITY_WEIGHTS["vegetation_deficit"] * (100 - vegetation)
        + PRIORITY_WEIGHTS["population_density"] * density
        + PRIORITY_WEIGHTS["citizen_cooling_score"] * cooling
    )
    result = clamp(base * feasibility, PRIORITY_MIN, PRIORITY_MAX)
    return round_half_up(result, 1)


def normalize_intensity(value: Optional[Union[str, ReportIntensity]]) -> ReportIntensity:
    """Map a raw intensity to a tier; unknown or missing values count as low."""
    if isinstance(value, ReportIntensity):
        return value
    if isinstance(value, str):
        try:
            return ReportIntensity(value.strip().lower())
        except ValueError:
            pass
    return ReportIntensity.LOW


def apply_report_delta(
    current_cooling_score: float,
    intensity: Optional[Union[str, ReportIntensity]],
) -> float:
    """
    Raise a citizen cooling score for one report.

    Only adjusts the input; callers recompute the priority index.
    The result is rounded half-up to one decimal.
    """
    delta = REPORT_DELTAS[normalize_intensity(intensity)]
    # Deltas have one decimal, so the score stays on the 0.1 grid
    result = clamp(current_cooling_score + delta, COOLING_SCORE_MIN, COOLING_SCORE_MAX)
    return round_half_up(result, 1)
