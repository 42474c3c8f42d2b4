"""Road path lookups through an OSRM routing service."""

import logging
import time
from typing import Dict, List, Optional, Sequence, Tuple

import requests

logger = logging.getLogger(__name__)

OSRM_API_BASE = "https://router.project-osrm.org/route/v1/driving"

Coordinate = Tuple[float, float]


class RoutingClient:
    """Converts a sequence of stop coordinates into a road-following path."""

    def __init__(
        self,
        base_url: str = OSRM_API_BASE,
        timeout: float = 10,
        cache_ttl: float = 300,
        max_cache_size: int = 64,
    ):
        """
        Initialize the routing client.

        Args:
            base_url: OSRM route endpoint, up to and including the profile.
            timeout: Request timeout in seconds.
            cache_ttl: Seconds a response stays cached.
            max_cache_size: Maximum number of cached responses.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._cache: Dict[str, Tuple[dict, float]] = {}  # url -> (data, timestamp)
        self._cache_ttl = cache_ttl
        self._max_cache_size = max_cache_size
        self._session = requests.Session()

    def get_route_path(self, coordinates: Sequence[Coordinate]) -> List[Coordinate]:
        """
        Get a road-following path through the given points.

        Args:
            coordinates: (latitude, longitude) pairs in travel order.

        Returns:
            Denser list of (latitude, longitude) pairs. If the service fails or
            finds no route, the input points are returned (straight lines).
        """
        if len(coordinates) < 2:
            return []

        fallback = [(float(lat), float(lon)) for lat, lon in coordinates]
        url = f"{self._build_url(coordinates)}?overview=full&geometries=geojson"
        data = self._fetch_route(url)
        route = self._first_route(data)
        if route is None:
            return fallback

        try:
            # OSRM returns [lon, lat]
            return [(lat, lon) for lon, lat in route["geometry"]["coordinates"]]
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Malformed route geometry, using straight lines: {e}")
            return fallback

    def get_route_distance(self, coordinates: Sequence[Coordinate]) -> float:
        """
        Get the road distance through the given points.

        Returns:
            Distance in kilometers, or 0.0 if it could not be determined.
        """
        if len(coordinates) < 2:
            return 0.0

        url = f"{self._build_url(coordinates)}?overview=false"
        route = self._first_route(self._fetch_route(url))
        if route is None:
            return 0.0

        try:
            return float(route["distance"]) / 1000
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Malformed route distance: {e}")
            return 0.0

    def _build_url(self, coordinates: Sequence[Coordinate]) -> str:
        # OSRM expects "lon,lat;lon,lat"
        coordinates_string = ";".join(f"{lon},{lat}" for lat, lon in coordinates)
        return f"{self.base_url}/{coordinates_string}"

    @staticmethod
    def _first_route(data: Optional[dict]) -> Optional[dict]:
        if not data:
            return None
        if data.get("code") == "Ok" and data.get("routes"):
            return data["routes"][0]
        logger.warning(f"Routing service returned no routes: {data.get('code')}")
        return None

    def _fetch_route(self, url: str) -> Optional[dict]:
        """
        Fetch and cache a routing response.

        Returns:
            Parsed JSON, or None if the request failed.
        """
        now = time.time()
        if url in self._cache:
            data, timestamp = self._cache[url]
            if now - timestamp < self._cache_ttl:
                logger.debug(f"Using cached route for {url}")
                return data

        self._evict_expired_cache(now)

        if self._cache and len(self._cache) >= self._max_cache_size:
            oldest_key = min(self._cache.keys(), key=lambda k: self._cache[k][1])
            del self._cache[oldest_key]

        logger.debug(f"Fetching {url}")
        try:
            response = self._session.get(url, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Failed to fetch route path: {e}")
            return None

        if not isinstance(data, dict):
            logger.warning("Unexpected routing response shape")
            return None

        if self._max_cache_size > 0:
            self._cache[url] = (data, now)
        return data

    def _evict_expired_cache(self, current_time: float) -> None:
        """Remove expired cache entries."""
        expired_keys = [
            url for url, (_, timestamp) in self._cache.items()
            if current_time - timestamp >= self._cache_ttl
        ]
        for key in expired_keys:
            del self._cache[key]

        if expired_keys:
            logger.debug(f"Evicted {len(expired_keys)} expired cache entries")

    def clear_cache(self) -> None:
        """Manually clear the cache."""
        self._cache.clear()
