"""Trip planning over a route catalog."""

import logging
from typing import List, Optional, Sequence, Tuple

from .catalog_loader import RouteCatalog
from .fare_model import calculate_segment_fare, calculate_travel_time, estimate_distance
from .models import Route, SearchResult
from .route_search import (
    find_exact_stop_index,
    find_stop_index,
    find_transfer_points,
    get_route_segment,
    search_direct_routes,
    sort_routes,
)
from .routing_client import RoutingClient

logger = logging.getLogger(__name__)


class TripPlanner:
    """
    Plans bus journeys between two locations.

    This class provides methods to:
    - Find direct journeys on a single route
    - Find connecting journeys through a transfer stop
    - Build map paths for a journey's stops
    """

    def __init__(
        self,
        catalog: RouteCatalog,
        routing_client: Optional[RoutingClient] = None,
        max_connections: int = 5,
    ):
        """
        Initialize the planner.

        Args:
            catalog: Routes to plan over. Never modified.
            routing_client: Road routing service for map paths. A default
                            OSRM client is created if omitted.
            max_connections: Maximum number of connecting journeys returned.
        """
        self.catalog = catalog
        self.routing_client = routing_client or RoutingClient()
        self.max_connections = max_connections

    def plan(
        self, from_: str, to: str, include_alternatives: bool = False, sort_by: Optional[str] = None
    ) -> List[SearchResult]:
        """
        Find journeys from one location to another.

        Args:
            from_: Starting location (free text).
            to: Destination (free text).
            include_alternatives: Also return connecting journeys when direct
                                  ones exist.
            sort_by: Optional 'fare', 'time' or 'distance' ordering.

        Returns:
            Direct journeys first, then connecting ones. Empty if nothing
            connects the two locations.
        """
        results = self.find_direct(from_, to)
        if not results or include_alternatives:
            results.extend(self.find_connecting(from_, to))

        if not results:
            logger.info(f"No routes found from '{from_}' to '{to}'")
        if sort_by:
            results = sort_routes(results, sort_by)
        return results

    def find_direct(self, from_: str, to: str) -> List[SearchResult]:
        """Journeys on a single route, one per route serving both locations."""
        results = []
        for route in search_direct_routes(self.catalog, from_, to):
            segment = self._segment(route, from_, to)
            distance, fare, duration = self._segment_totals(route, segment)
            results.append(SearchResult(
                result_type="direct",
                routes=[route],
                stops=segment,
                total_fare=fare,
                total_distance=distance,
                total_duration_minutes=duration,
                total_stops=len(segment),
            ))
        return results

    def find_connecting(self, from_: str, to: str) -> List[SearchResult]:
        """Two-leg journeys joined at a transfer stop."""
        results: List[SearchResult] = []
        for transfer in find_transfer_points(self.catalog.routes, from_, to):
            if len(results) >= self.max_connections:
                break

            legs = self._pick_legs(from_, transfer, to)
            if legs is None:
                continue
            first, first_segment, second, second_segment = legs

            first_distance, first_fare, first_duration = self._segment_totals(first, first_segment)
            second_distance, second_fare, second_duration = self._segment_totals(second, second_segment)

            # Transfer stop ends leg one and starts leg two
            stops = first_segment + second_segment[1:]
            results.append(SearchResult(
                result_type="connecting",
                routes=[first, second],
                stops=stops,
                total_fare=first_fare + second_fare,
                total_distance=round(first_distance + second_distance, 1),
                total_duration_minutes=first_duration + second_duration,
                total_stops=len(stops),
                transfer_point=transfer,
            ))

        logger.debug(f"Found {len(results)} connecting journeys from '{from_}' to '{to}'")
        return results

    def build_display_path(self, stops: Sequence[str]) -> List[Tuple[float, float]]:
        """
        Map stops to coordinates for display.

        Stops without a known coordinate are dropped.
        """
        coordinates = self.catalog.coordinates
        path = [coordinates[stop] for stop in stops if stop in coordinates]
        if len(path) < len(stops):
            logger.debug(f"Dropped {len(stops) - len(path)} stops without coordinates")
        return path

    def get_road_path(self, stops: Sequence[str]) -> List[Tuple[float, float]]:
        """Road-following path through the stops, or straight lines if routing fails."""
        path = self.build_display_path(stops)
        if len(path) < 2:
            return path
        return self.routing_client.get_route_path(path)

    def _pick_legs(
        self, from_: str, transfer: str, to: str
    ) -> Optional[Tuple[Route, List[str], Route, List[str]]]:
        """
        Pick the first pair of different routes meeting at the transfer stop.

        The transfer must be on both routes by name (ignoring case); a stop
        whose name merely contains it is a different place.
        """
        first_legs = self._transfer_legs(from_, transfer, arriving=True)
        second_legs = self._transfer_legs(to, transfer, arriving=False)
        for first, first_segment in first_legs:
            for second, second_segment in second_legs:
                if second.route_id != first.route_id:
                    return first, first_segment, second, second_segment
        return None

    def _transfer_legs(
        self, location: str, transfer: str, arriving: bool
    ) -> List[Tuple[Route, List[str]]]:
        """Routes linking a location with the transfer stop, with their segments."""
        legs = []
        for route in self.catalog:
            location_index = find_stop_index(route.stops, location)
            transfer_index = find_exact_stop_index(route.stops, transfer)
            if location_index is None or transfer_index is None or location_index == transfer_index:
                continue
            if arriving:
                segment = get_route_segment(route, location_index, transfer_index)
            else:
                segment = get_route_segment(route, transfer_index, location_index)
            legs.append((route, segment))
        return legs

    @staticmethod
    def _segment(route: Route, from_: str, to: str) -> List[str]:
        return get_route_segment(
            route, find_stop_index(route.stops, from_), find_stop_index(route.stops, to)
        )

    @staticmethod
    def _segment_totals(route: Route, segment: Sequence[str]) -> Tuple[float, float, float]:
        """Distance, fare and duration for travelling a segment of a route."""
        distance = estimate_distance(len(segment))
        fare = calculate_segment_fare(distance, route.rate_per_km, route.min_fare)
        duration = calculate_travel_time(len(segment))
        return distance, fare, duration
