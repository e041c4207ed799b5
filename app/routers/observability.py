"""Observability endpoints for health checks and debugging."""

from fastapi import APIRouter, Depends, HTTPException, status

from app.config import ALLOWED_MODELS, get_model, get_settings
from app.engine.metrics import METRICS
from app.engine.scoring import PRIORITY_WEIGHTS, REPORT_DELTAS
from app.services.llm_metrics import get_call_metrics, get_model_latency_stats
from app.services.location_store import LocationStore, get_location_store

router = APIRouter()


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "athens-cooling-map",
        "version": "0.1.0",
    }


@router.get("/metrics")
async def list_metrics():
    """List metric definitions and the priority formula weights."""
    return {
        "metrics": [
            {
                "key": m.key,
                "name": m.name,
                "description": m.description,
                "min_value": m.min_value,
                "max_value": m.max_value,
                "higher_means_more_need": m.higher_means_more_need,
                "scored": m.scored,
            }
            for m in METRICS.values()
        ],
        "weights": PRIORITY_WEIGHTS,
        "report_deltas": {k.value: v for k, v in REPORT_DELTAS.items()},
    }


@router.get("/llm-stats")
async def get_llm_stats():
    """
    Get completion call latency statistics.

    Returns per-model latency for the current process.
    """
    call_metrics = get_call_metrics()
    error_count = sum(1 for m in call_metrics if m["status"] == "error")

    return {
        "model_stats": get_model_latency_stats(),
        "total_calls": len(call_metrics),
        "error_count": error_count,
        "allowed_models": ALLOWED_MODELS,
        "active_model": get_model(get_settings()),
    }


@router.post("/debug/reset")
async def reset_locations(store: LocationStore = Depends(get_location_store)):
    """Reload the place fixtures, discarding reported cooling scores. Debug only."""
    if not get_settings().debug:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")
    store.reset()
    return {"status": "reset", "locations": len(store.list_locations())}
