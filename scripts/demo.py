#!/usr/bin/env python3
"""
Demo script showing the cooling priority index in action.

Usage:
    python scripts/demo.py

Runs without an API key: it ranks the Athens places and applies a few
citizen cooling reports directly through the location store.
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.services.location_store import LocationStore


def print_header(title: str):
    """Print a formatted header."""
    print("\n" + "=" * 60)
    print(f"  {title}")
    print("=" * 60)


def print_ranking(store: LocationStore):
    """Print places by priority index, highest first."""
    for rank, place in enumerate(store.list_locations(sort_by_priority=True), start=1):
        emoji = "🔥" if place.priority_index >= 60 else "🌡️" if place.priority_index >= 35 else "🌳"
        print(
            f"   {rank}. {emoji} {place.name}: {place.priority_index:.1f} "
            f"(cooling demand {place.metrics.citizen_cooling_score:g})"
        )


def run_demo():
    """Rank places, apply reports, rank again."""
    print("\n🏛️  Athens Cooling Map Demo")

    store = LocationStore()

    print_header("Initial Priority Ranking")
    print_ranking(store)

    print_header("Citizen Reports")
    reports = [
        ("Syntagma Square", "high"),
        ("Syntagma Square", "high"),
        ("Monastiraki", "medium"),
        ("Plaka", "high"),  # Not a known place - ignored
    ]
    for name, intensity in reports:
        updated = store.record_report(name, intensity)
        if updated:
            print(f"   ✅ {name} ({intensity}) -> priority {updated.priority_index:.1f}")
        else:
            print(f"   ➖ {name} ({intensity}) -> no matching place")

    print_header("Updated Priority Ranking")
    print_ranking(store)

    print("\nStart the API with `uvicorn app.main:app --reload` to chat with the map.")


if __name__ == "__main__":
    run_demo()
