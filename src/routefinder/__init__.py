"""routefinder - Bus route search and trip planning for city bus networks."""

__version__ = "0.1.0"

from .models import Route, SearchResult, Review
from .catalog_loader import CatalogLoader, RouteCatalog, parse_route_stops
from .trip_planner import TripPlanner
from .routing_client import RoutingClient
from .review_client import ReviewClient

__all__ = [
    "TripPlanner",
    "CatalogLoader",
    "RouteCatalog",
    "RoutingClient",
    "ReviewClient",
    "Route",
    "SearchResult",
    "Review",
    "parse_route_stops",
]
