"""Seed data for the Athens points of interest."""

from app.schemas.location import PlaceMetrics, PlaceRecord


def get_athens_locations() -> list[PlaceRecord]:
    """
    Create the fixed Athens place list.

    Metrics are synthetic but plausible for central Athens in summer.
    priority_index is left at 0 here; the location store computes it on load.
    """
    return [
        PlaceRecord(
            id=1,
            name="Acropolis of Athens",
            coordinates=(37.9715, 23.7267),
            description="Ancient citadel on a rocky outcrop above Athens.",
            metrics=PlaceMetrics(
                heat_index=92,
                vegetation_index=15,
                population_density=70,
                citizen_cooling_score=60,
                feasibility_score=0.4,  # Archaeological site, few options
                air_quality=62,
            ),
        ),
        PlaceRecord(
            id=2,
            name="Syntagma Square",
            coordinates=(37.9755, 23.7348),
            description="Central square, home of the Greek Parliament.",
            metrics=PlaceMetrics(
                heat_index=88,
                vegetation_index=30,
                population_density=95,
                citizen_cooling_score=75,
                feasibility_score=0.9,
                air_quality=48,
            ),
        ),
        PlaceRecord(
            id=3,
            name="Monastiraki",
            coordinates=(37.976, 23.7258),
            description="Famous for its flea market and vibrant streets.",
            metrics=PlaceMetrics(
                heat_index=98,
                vegetation_index=1,
                population_density=92,
                citizen_cooling_score=85,
                feasibility_score=0.8,
                air_quality=45,
            ),
        ),
        PlaceRecord(
            id=4,
            name="National Garden",
            coordinates=(37.9732, 23.737),
            description="Large public park next to the Parliament.",
            metrics=PlaceMetrics(
                heat_index=55,
                vegetation_index=90,
                population_density=40,
                citizen_cooling_score=20,
                feasibility_score=0.7,
                air_quality=80,
            ),
        ),
        PlaceRecord(
            id=5,
            name="Panathenaic Stadium",
            coordinates=(37.968, 23.741),
            description="Historic stadium, hosted the first modern Olympic Games.",
            metrics=PlaceMetrics(
                heat_index=90,
                vegetation_index=10,
                population_density=50,
                citizen_cooling_score=45,
                feasibility_score=0.6,
                air_quality=66,
            ),
        ),
    ]
