"""Searching, filtering and ranking bus routes between locations."""

import logging
from typing import Iterable, List, Optional, Sequence, Set, TypeVar

from .models import Route

logger = logging.getLogger(__name__)

# Route or SearchResult; both expose fare, distance and duration_minutes
T = TypeVar("T")

SORT_KEYS = {
    "fare": lambda item: item.fare,
    "time": lambda item: item.duration_minutes,
    "distance": lambda item: item.distance,
}


def find_stop_index(stops: Sequence[str], search_term: str) -> Optional[int]:
    """
    Find the position of a location in a route's stop list.

    Args:
        stops: Stops of a route, in order.
        search_term: Location to look for (case-insensitive).

    Returns:
        Index of the first exact match, else of the first stop containing the
        term, else None.
    """
    if not search_term:
        return None
    normalized = search_term.lower()

    for index, stop in enumerate(stops):
        if stop.lower() == normalized:
            return index

    for index, stop in enumerate(stops):
        if normalized in stop.lower():
            return index

    return None


def find_exact_stop_index(stops: Sequence[str], name: str) -> Optional[int]:
    """Index of the first stop equal to name ignoring case, or None."""
    if not name:
        return None
    normalized = name.lower()
    for index, stop in enumerate(stops):
        if stop.lower() == normalized:
            return index
    return None


def get_route_segment(route: Route, from_index: int, to_index: int) -> List[str]:
    """
    Get the stops travelled between two positions on a route.

    Both ends are included and the result always starts at from_index,
    so travelling against the stop order yields a reversed slice.
    """
    if from_index == to_index:
        return []

    if from_index < to_index:
        return list(route.stops[from_index:to_index + 1])
    return list(reversed(route.stops[to_index:from_index + 1]))


def search_direct_routes(routes: Iterable[Route], from_: str, to: str) -> List[Route]:
    """
    Find routes serving both locations, in either direction.

    Args:
        routes: Routes to search, typically a RouteCatalog.
        from_: Starting location.
        to: Destination location.

    Returns:
        Routes (in input order) where both locations resolve to different stops.
    """
    if not from_ or not to:
        return []

    results = []
    for route in routes:
        from_index = find_stop_index(route.stops, from_)
        to_index = find_stop_index(route.stops, to)
        if from_index is None or to_index is None or from_index == to_index:
            continue
        results.append(route)

    logger.debug(f"Found {len(results)} direct routes from '{from_}' to '{to}'")
    return results


def find_transfer_points(routes: Sequence[Route], from_: str, to: str) -> List[str]:
    """
    Find stops where a rider could change buses to get from one location to another.

    A stop qualifies if it comes after `from_` on some route and before `to`
    on some route. This only generates candidates; it does not look for the
    best transfer.

    Returns:
        Unique stop names (ignoring case) in the order they were first found,
        spelled as on the first route found.
    """
    if not from_ or not to:
        return []

    reachable: Set[str] = set()
    for route in routes:
        from_index = find_stop_index(route.stops, from_)
        if from_index is not None:
            for stop in route.stops[from_index + 1:]:
                reachable.add(stop.lower())

    transfer_points: List[str] = []
    seen: Set[str] = set()
    for route in routes:
        to_index = find_stop_index(route.stops, to)
        if to_index is None:
            continue
        for stop in route.stops[:to_index]:
            normalized = stop.lower()
            if normalized in reachable and normalized not in seen:
                seen.add(normalized)
                transfer_points.append(stop)

    logger.debug(f"Found {len(transfer_points)} transfer points from '{from_}' to '{to}'")
    return transfer_points


def filter_by_fare_range(routes: Iterable[T], min_fare: float, max_fare: float) -> List[T]:
    """Keep routes whose fare lies within [min_fare, max_fare]."""
    return [route for route in routes if min_fare <= route.fare <= max_fare]


def filter_by_distance_range(
    routes: Iterable[T], min_distance: float, max_distance: float
) -> List[T]:
    """Keep routes whose distance (km) lies within [min_distance, max_distance]."""
    return [route for route in routes if min_distance <= route.distance <= max_distance]


def filter_by_max_time(routes: Iterable[T], max_duration: float) -> List[T]:
    """Keep routes that take at most max_duration minutes."""
    return [route for route in routes if route.duration_minutes <= max_duration]


def sort_routes(routes: Iterable[T], sort_by: str = "fare") -> List[T]:
    """
    Return a new list of routes sorted ascending by 'fare', 'time' or 'distance'.

    Unknown keys return an unsorted copy. The input is never modified.
    """
    key = SORT_KEYS.get(sort_by)
    if key is None:
        logger.warning(f"Unknown sort key '{sort_by}', leaving order unchanged")
        return list(routes)
    return sorted(routes, key=key)


def _first_minimum(routes: Sequence[T], key) -> Optional[T]:
    # Strict comparison keeps the earliest element on ties
    best = None
    for route in routes:
        if best is None or key(route) < key(best):
            best = route
    return best


def get_cheapest_route(routes: Sequence[T]) -> Optional[T]:
    """Cheapest route, or None if there are none."""
    return _first_minimum(routes, SORT_KEYS["fare"])


def get_fastest_route(routes: Sequence[T]) -> Optional[T]:
    """Fastest route, or None if there are none."""
    return _first_minimum(routes, SORT_KEYS["time"])


def get_shortest_route(routes: Sequence[T]) -> Optional[T]:
    """Shortest route by distance, or None if there are none."""
    return _first_minimum(routes, SORT_KEYS["distance"])
