"""Route catalog construction from raw bus route records."""

import json
import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple

import requests

from .fare_model import (
    DEFAULT_MIN_FARE,
    DEFAULT_RATE_PER_KM,
    calculate_distance_from_stops,
    calculate_travel_time,
    estimate_distance,
    round_half_up,
)
from .models import Route

logger = logging.getLogger(__name__)

# Bundled sample data (Dhaka city buses)
DEFAULT_DATA_DIR = Path(__file__).parent / "data"
DEFAULT_ROUTES_FILE = DEFAULT_DATA_DIR / "routes.json"
DEFAULT_COORDINATES_FILE = DEFAULT_DATA_DIR / "coordinates.json"

# English name before any parenthesized local-language label
_STOP_NAME_RE = re.compile(r"^([^(]+)")

Coordinate = Tuple[float, float]


def parse_route_stops(route_string: Optional[str]) -> List[str]:
    """
    Parse a route description into stop names.

    Route strings look like "- Sadarghat (সদরঘাট) - Paltan (পল্টন)": dash
    separated entries, each optionally followed by a local-language label.

    Returns:
        English stop names in route order.
    """
    if not route_string:
        return []

    clean = route_string.strip()
    if clean.startswith("-"):
        clean = clean[1:]

    stops = []
    for part in clean.split("-"):
        part = part.strip()
        match = _STOP_NAME_RE.match(part)
        name = match.group(1).strip() if match else part
        if name:
            stops.append(name)
    return stops


def build_route(record: Mapping[str, object], index: int) -> Optional[Route]:
    """
    Build a Route from one raw record.

    Args:
        record: Dict with 'bus_name', 'route', 'service_type' and optionally
                'rate_per_km' and 'min_fare'.
        index: Position of the record, used for the route id.

    Returns:
        Route, or None if the record has no stops.
    """
    stops = parse_route_stops(record.get("route"))
    if not stops:
        logger.warning(f"Skipping route record {index} ({record.get('bus_name')}): no stops")
        return None

    rate_per_km = float(record.get("rate_per_km") or DEFAULT_RATE_PER_KM)
    min_fare = float(record.get("min_fare") or DEFAULT_MIN_FARE)

    # Whole-route estimates use the stop count, matching the published fare chart
    raw_distance = calculate_distance_from_stops(len(stops))
    fare = round_half_up(max(min_fare, raw_distance * rate_per_km))
    name = str(record.get("bus_name", ""))

    return Route(
        route_id=f"bus-{index}",
        name=name,
        stops=tuple(stops),
        fare=fare,
        distance=estimate_distance(len(stops)),
        duration_minutes=calculate_travel_time(len(stops)),
        company=name,
        service_type=str(record.get("service_type", "")),
        rate_per_km=rate_per_km,
        min_fare=min_fare,
    )


class RouteCatalog:
    """
    Immutable, ordered collection of routes.

    Build it once at startup and pass it to the search functions or a
    TripPlanner. It behaves like a read-only sequence of Route objects.
    """

    def __init__(
        self,
        routes: Iterable[Route],
        coordinates: Optional[Mapping[str, Coordinate]] = None,
    ):
        self._routes: Tuple[Route, ...] = tuple(routes)
        self._by_id: Mapping[str, Route] = MappingProxyType(
            {route.route_id: route for route in self._routes}
        )
        self._coordinates: Mapping[str, Coordinate] = MappingProxyType(
            {name: (float(lat), float(lon)) for name, (lat, lon) in (coordinates or {}).items()}
        )

    @classmethod
    def from_records(
        cls,
        records: Iterable[Mapping[str, object]],
        coordinates: Optional[Mapping[str, Coordinate]] = None,
    ) -> "RouteCatalog":
        """Build a catalog from raw route records."""
        routes = []
        for index, record in enumerate(records):
            route = build_route(record, index)
            if route is not None:
                routes.append(route)
        logger.info(f"Built catalog with {len(routes)} routes")
        return cls(routes, coordinates)

    @property
    def routes(self) -> Tuple[Route, ...]:
        return self._routes

    @property
    def coordinates(self) -> Mapping[str, Coordinate]:
        """Stop name -> (latitude, longitude) for stops with a known position."""
        return self._coordinates

    def get(self, route_id: str) -> Optional[Route]:
        """Get a route by id, or None."""
        return self._by_id.get(route_id)

    def locations(self) -> List[str]:
        """All unique stop names, sorted alphabetically."""
        return sorted({stop for route in self._routes for stop in route.stops}, key=str.casefold)

    def __len__(self) -> int:
        return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes)

    def __getitem__(self, index: int) -> Route:
        return self._routes[index]

    def __repr__(self) -> str:
        return f"RouteCatalog({len(self._routes)} routes, {len(self._coordinates)} coordinates)"


class CatalogLoader:
    """Loads route catalogs from JSON files or URLs."""

    def __init__(self, timeout: float = 30):
        """
        Initialize the loader.

        Args:
            timeout: Timeout in seconds for remote downloads.
        """
        self.timeout = timeout

    def load_default(self) -> RouteCatalog:
        """Load the bundled sample catalog."""
        return self.load_from_file(DEFAULT_ROUTES_FILE, DEFAULT_COORDINATES_FILE)

    def load_from_file(self, routes_path, coordinates_path=None) -> RouteCatalog:
        """
        Load a catalog from local JSON files.

        Args:
            routes_path: Path to a JSON list of route records.
            coordinates_path: Optional path to a JSON object of stop -> [lat, lon].
        """
        logger.info(f"Loading routes from {routes_path}")
        try:
            records = self._read_json(routes_path)
            coordinates = self._read_json(coordinates_path) if coordinates_path else None
            return RouteCatalog.from_records(records, self._parse_coordinates(coordinates))
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.error(f"Failed to load route catalog: {e}")
            raise

    def load_from_url(self, routes_url: str, coordinates_url: Optional[str] = None) -> RouteCatalog:
        """Download and load a catalog from JSON endpoints."""
        logger.info(f"Downloading routes from {routes_url}")
        try:
            records = self._fetch_json(routes_url)
            coordinates = self._fetch_json(coordinates_url) if coordinates_url else None
            return RouteCatalog.from_records(records, self._parse_coordinates(coordinates))
        except (requests.RequestException, ValueError, TypeError, AttributeError) as e:
            logger.error(f"Failed to download route catalog: {e}")
            raise

    def _fetch_json(self, url: str):
        response = requests.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    @staticmethod
    def _read_json(path):
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    @staticmethod
    def _parse_coordinates(raw: Optional[Mapping[str, object]]) -> Dict[str, Coordinate]:
        """Keep only entries that look like [lat, lon] pairs."""
        coordinates: Dict[str, Coordinate] = {}
        if not raw:
            return coordinates

        for name, value in raw.items():
            try:
                lat, lon = value
                coordinates[name] = (float(lat), float(lon))
            except (TypeError, ValueError):
                logger.warning(f"Ignoring invalid coordinate for '{name}': {value!r}")
        return coordinates
