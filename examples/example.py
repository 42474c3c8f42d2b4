"""Example usage of TripPlanner."""

import logging
import sys
from pathlib import Path

# Add src to path so we can import routefinder
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from routefinder.catalog_loader import CatalogLoader
from routefinder.fare_model import format_travel_time
from routefinder.route_search import get_cheapest_route, get_fastest_route
from routefinder.trip_planner import TripPlanner

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

logger = logging.getLogger(__name__)


def print_journeys(planner: TripPlanner, from_: str, to: str):
    """
    Find and display journeys between two locations.

    Args:
        planner: TripPlanner over a loaded catalog.
        from_: Starting location (e.g., "Mirpur 10")
        to: Destination (e.g., "Motijheel")
    """
    print(f"\n{'='*70}")
    print(f"Journeys from {from_} to {to}")
    print(f"{'='*70}\n")

    results = planner.plan(from_, to, sort_by="fare")
    if not results:
        print("  No routes found")
        matching = [loc for loc in planner.catalog.locations()
                    if from_.lower() in loc.lower() or to.lower() in loc.lower()]
        if matching:
            print("\nKnown locations like these:")
            for location in matching[:5]:
                print(f"  - {location}")
        return

    for result in results:
        buses = " + ".join(route.name for route in result.routes)
        print(f"[{result.result_type.upper()}] {buses}")
        if result.transfer_point:
            print(f"  Change at: {result.transfer_point}")
        print(f"  Stops: {' → '.join(result.stops)}")
        print(f"  Fare: {result.total_fare:.0f} Tk | "
              f"Distance: {result.total_distance} km | "
              f"Time: {format_travel_time(result.total_duration_minutes)}\n")

    cheapest = get_cheapest_route(results)
    fastest = get_fastest_route(results)
    print("-" * 70)
    print(f"Cheapest: {' + '.join(r.name for r in cheapest.routes)} ({cheapest.total_fare:.0f} Tk)")
    print(f"Fastest:  {' + '.join(r.name for r in fastest.routes)} "
          f"({format_travel_time(fastest.total_duration_minutes)})")
    print("=" * 70 + "\n")


def interactive_mode(planner: TripPlanner):
    """
    Run in interactive mode, allowing user to plan multiple trips.
    """
    print("Bus Trip Planner - Interactive Mode")
    print("Enter a starting location and a destination")
    print("(Type 'quit' to exit)\n")

    while True:
        try:
            from_ = input("From (or 'quit'): ").strip()
            if from_.lower() in ["quit", "q", "exit"]:
                print("Goodbye!")
                break
            to = input("To: ").strip()
            if not from_ or not to:
                continue

            print_journeys(planner, from_, to)

        except KeyboardInterrupt:
            print("\n\nGoodbye!")
            break


if __name__ == "__main__":
    try:
        planner = TripPlanner(CatalogLoader().load_default())
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load route catalog: {e}")
        sys.exit(1)

    if len(sys.argv) == 3:
        # Command line mode: from and to as arguments
        print_journeys(planner, sys.argv[1], sys.argv[2])
    else:
        interactive_mode(planner)
