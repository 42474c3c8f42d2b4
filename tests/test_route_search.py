"""Tests for route search, filtering and ranking."""

import unittest
import sys
from pathlib import Path

# Add src to path so we can import routefinder
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from routefinder.models import Route
from routefinder.route_search import (
    filter_by_distance_range,
    filter_by_fare_range,
    filter_by_max_time,
    find_exact_stop_index,
    find_stop_index,
    find_transfer_points,
    get_cheapest_route,
    get_fastest_route,
    get_route_segment,
    get_shortest_route,
    search_direct_routes,
    sort_routes,
)


def make_route(route_id, stops, fare, distance, duration):
    return Route(
        route_id=route_id,
        name=f"Bus {route_id}",
        stops=tuple(stops),
        fare=fare,
        distance=distance,
        duration_minutes=duration,
    )


ROUTES = [
    make_route("route-1", ["Mirpur", "Kafrul", "Uttara", "Farmgate", "Motijheel"], 80, 18, 90),
    make_route("route-2", ["Mirpur", "Mohakhali", "Malibagh", "Farmgate", "Motijheel"], 100, 20, 100),
    make_route("route-3", ["Uttara", "Farmgate", "Shahbag", "Kawran Bazar"], 50, 10, 50),
    make_route("route-4", ["Savar", "Ashulia", "Gazipur", "Malibagh"], 120, 25, 120),
]


def ids(routes):
    return [route.route_id for route in routes]


class TestFindStopIndex(unittest.TestCase):
    """Test resolving location names to stop positions."""

    stops = ["Mirpur", "Uttara", "Farmgate", "Motijheel"]

    def test_exact_match_is_case_insensitive(self):
        """Test exact matches regardless of case."""
        self.assertEqual(find_stop_index(self.stops, "Mirpur"), 0)
        self.assertEqual(find_stop_index(self.stops, "mirpur"), 0)
        self.assertEqual(find_stop_index(self.stops, "MIRPUR"), 0)

    def test_partial_match(self):
        """Test substring matches when no exact match exists."""
        self.assertEqual(find_stop_index(self.stops, "farm"), 2)

    def test_no_match(self):
        """Test unknown and empty terms return None."""
        self.assertIsNone(find_stop_index(self.stops, "Dhaka"))
        self.assertIsNone(find_stop_index(self.stops, ""))
        self.assertIsNone(find_stop_index([], "Mirpur"))

    def test_first_match_wins(self):
        """Test the lowest matching index is returned."""
        stops = ["Mirpur 1", "Mirpur 10", "Mirpur 11", "Farmgate"]
        self.assertEqual(find_stop_index(stops, "Mirpur"), 0)

    def test_exact_match_beats_earlier_partial(self):
        """Test an exact match later in the list wins over an earlier partial."""
        stops = ["Farmgate", "Farmer", "Farm"]
        self.assertEqual(find_stop_index(stops, "Farm"), 2)
        self.assertEqual(find_stop_index(["Farm", "Farmgate"], "farm"), 0)

    def test_exact_lookup_ignores_partial_names(self):
        """Test the exact lookup never settles for a stop containing the name."""
        stops = ["Mirpur 10", "Kazipara", "mirpur 1"]
        self.assertEqual(find_exact_stop_index(stops, "Mirpur 1"), 2)
        self.assertIsNone(find_exact_stop_index(["Mirpur 10", "Kazipara"], "Mirpur 1"))
        self.assertIsNone(find_exact_stop_index(stops, ""))


class TestRouteSegment(unittest.TestCase):
    """Test extracting stop segments from a route."""

    route = ROUTES[0]

    def test_forward_segment(self):
        """Test travelling in stop order."""
        self.assertEqual(
            get_route_segment(self.route, 0, 3),
            ["Mirpur", "Kafrul", "Uttara", "Farmgate"],
        )

    def test_reverse_segment(self):
        """Test travelling against stop order."""
        self.assertEqual(
            get_route_segment(self.route, 3, 0),
            ["Farmgate", "Uttara", "Kafrul", "Mirpur"],
        )

    def test_same_stop(self):
        """Test identical endpoints give an empty segment."""
        for index in range(len(self.route.stops)):
            self.assertEqual(get_route_segment(self.route, index, index), [])

    def test_adjacent_stops(self):
        """Test adjacent stops give a two-stop segment."""
        self.assertEqual(get_route_segment(self.route, 1, 2), ["Kafrul", "Uttara"])

    def test_swapped_endpoints_reverse(self):
        """Test swapping endpoints reverses the segment."""
        self.assertEqual(
            get_route_segment(self.route, 1, 4),
            list(reversed(get_route_segment(self.route, 4, 1))),
        )


class TestSearchDirectRoutes(unittest.TestCase):
    """Test finding direct routes."""

    def test_finds_routes_in_catalog_order(self):
        """Test both routes serving the two locations are returned in order."""
        results = search_direct_routes(ROUTES, "Mirpur", "Motijheel")
        self.assertEqual(ids(results), ["route-1", "route-2"])

    def test_direction_agnostic(self):
        """Test reversed queries find the same routes."""
        results = search_direct_routes(ROUTES, "Motijheel", "Mirpur")
        self.assertEqual(ids(results), ["route-1", "route-2"])

    def test_empty_inputs(self):
        """Test empty locations return no routes."""
        self.assertEqual(search_direct_routes(ROUTES, "", "Motijheel"), [])
        self.assertEqual(search_direct_routes(ROUTES, "Mirpur", ""), [])
        self.assertEqual(search_direct_routes(ROUTES, "", ""), [])

    def test_unknown_locations(self):
        """Test locations not on any route."""
        self.assertEqual(search_direct_routes(ROUTES, "Nowhere", "Elsewhere"), [])
        self.assertEqual(search_direct_routes(ROUTES, "Mirpur", "Elsewhere"), [])

    def test_excludes_same_stop(self):
        """Test routes where both locations are the same stop are excluded."""
        self.assertEqual(search_direct_routes(ROUTES, "Farmgate", "Farmgate"), [])
        self.assertEqual(search_direct_routes(ROUTES, "Farmgate", "farm"), [])

    def test_case_and_partial_names(self):
        """Test case-insensitive and partial location names."""
        self.assertEqual(ids(search_direct_routes(ROUTES, "MIRPUR", "motijheel")), ["route-1", "route-2"])
        self.assertEqual(ids(search_direct_routes(ROUTES, "Mir", "Moti")), ["route-1", "route-2"])

    def test_mixed_catalog(self):
        """Test only the route serving both locations is returned."""
        catalog = [ROUTES[0], ROUTES[2]]
        self.assertEqual(ids(search_direct_routes(catalog, "Mirpur", "Motijheel")), ["route-1"])
        self.assertEqual(get_cheapest_route(catalog).route_id, "route-3")


class TestFindTransferPoints(unittest.TestCase):
    """Test transfer point discovery."""

    def test_transfer_points(self):
        """Test stops reachable from the origin and leading to the destination."""
        self.assertEqual(
            find_transfer_points(ROUTES, "Mirpur", "Kawran Bazar"),
            ["Uttara", "Farmgate"],
        )

    def test_transfer_on_other_route(self):
        """Test a transfer between two unrelated routes."""
        self.assertEqual(find_transfer_points(ROUTES, "Savar", "Motijheel"), ["Malibagh"])

    def test_no_transfer_points(self):
        """Test locations with nothing in common."""
        self.assertEqual(find_transfer_points(ROUTES, "Kawran Bazar", "Savar"), [])
        self.assertEqual(find_transfer_points(ROUTES, "Nowhere", "Mirpur"), [])

    def test_transfer_spelled_differently_on_each_route(self):
        """Test a stop spelled in different case is one transfer, named as first found."""
        routes = [
            make_route("a", ["Mirpur", "Farmgate", "Shahbag"], 20, 3.6, 15),
            make_route("b", ["farmgate", "Kawran Bazar"], 10, 2.4, 10),
            make_route("c", ["Farmgate", "Kawran Bazar"], 10, 2.4, 10),
        ]
        self.assertEqual(find_transfer_points(routes, "Mirpur", "Kawran Bazar"), ["farmgate"])

    def test_empty_inputs(self):
        """Test empty locations return no transfer points."""
        self.assertEqual(find_transfer_points(ROUTES, "", "Motijheel"), [])
        self.assertEqual(find_transfer_points(ROUTES, "Mirpur", ""), [])


class TestRouteFilters(unittest.TestCase):
    """Test range filters."""

    def test_fare_range_inclusive(self):
        """Test boundary fares are included."""
        self.assertEqual(ids(filter_by_fare_range(ROUTES, 80, 100)), ["route-1", "route-2"])
        self.assertEqual(filter_by_fare_range(ROUTES, 200, 300), [])

    def test_distance_range_inclusive(self):
        """Test boundary distances are included."""
        self.assertEqual(
            ids(filter_by_distance_range(ROUTES, 10, 20)),
            ["route-1", "route-2", "route-3"],
        )

    def test_max_time_inclusive(self):
        """Test routes at exactly the maximum duration are included."""
        self.assertEqual(ids(filter_by_max_time(ROUTES, 90)), ["route-1", "route-3"])

    def test_filters_compose_without_mutation(self):
        """Test chained filters leave the input unchanged."""
        routes = list(ROUTES)
        result = filter_by_max_time(filter_by_fare_range(routes, 50, 100), 60)
        self.assertEqual(ids(result), ["route-3"])
        self.assertEqual(routes, ROUTES)


class TestRouteRanking(unittest.TestCase):
    """Test sorting and picking the best route."""

    def test_sort_by_each_key(self):
        """Test ascending sort by fare, time and distance."""
        self.assertEqual(ids(sort_routes(ROUTES)), ["route-3", "route-1", "route-2", "route-4"])
        self.assertEqual(ids(sort_routes(ROUTES, "time")), ["route-3", "route-1", "route-2", "route-4"])
        self.assertEqual(ids(sort_routes(ROUTES, "distance")), ["route-3", "route-1", "route-2", "route-4"])

    def test_sort_does_not_mutate(self):
        """Test sorting returns a new list."""
        routes = list(ROUTES)
        result = sort_routes(routes, "fare")
        self.assertIsNot(result, routes)
        self.assertEqual(ids(routes), ["route-1", "route-2", "route-3", "route-4"])

    def test_sort_unknown_key(self):
        """Test unknown keys keep the original order."""
        self.assertEqual(ids(sort_routes(ROUTES, "rating")), ids(ROUTES))

    def test_best_routes(self):
        """Test cheapest, fastest and shortest picks."""
        self.assertEqual(get_cheapest_route(ROUTES).route_id, "route-3")
        self.assertEqual(get_fastest_route(ROUTES).route_id, "route-3")
        self.assertEqual(get_shortest_route(ROUTES).route_id, "route-3")

    def test_empty_input(self):
        """Test empty lists return None."""
        self.assertIsNone(get_cheapest_route([]))
        self.assertIsNone(get_fastest_route([]))
        self.assertIsNone(get_shortest_route([]))

    def test_single_route(self):
        """Test a single route is returned as-is."""
        self.assertIs(get_cheapest_route([ROUTES[3]]), ROUTES[3])

    def test_ties_keep_first(self):
        """Test the first route wins on ties."""
        first = make_route("a", ["X", "Y"], 40, 5, 30)
        second = make_route("b", ["X", "Y"], 40, 5, 30)
        self.assertIs(get_cheapest_route([first, second]), first)
        self.assertIs(get_fastest_route([first, second]), first)
        self.assertIs(get_shortest_route([first, second]), first)


if __name__ == "__main__":
    unittest.main()
