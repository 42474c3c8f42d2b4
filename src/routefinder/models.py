"""Data models for bus route search."""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Route:
    """Represents a bus route with its ordered stops and derived fare model."""
    route_id: str
    name: str
    stops: Tuple[str, ...]  # Physical traversal order
    fare: float
    distance: float  # Kilometers, one decimal
    duration_minutes: float
    company: str = ""
    service_type: str = ""
    rate_per_km: float = 2.45
    min_fare: float = 10

    @property
    def start_location(self) -> str:
        return self.stops[0] if self.stops else ""

    @property
    def end_location(self) -> str:
        return self.stops[-1] if self.stops else ""


@dataclass
class SearchResult:
    """A direct or connecting journey found for a (from, to) query."""
    result_type: str  # "direct" or "connecting"
    routes: List[Route]
    stops: List[str]
    total_fare: float
    total_distance: float
    total_duration_minutes: float
    total_stops: int
    transfer_point: Optional[str] = None

    # Aliases so filters and rankers work on results and routes alike
    @property
    def fare(self) -> float:
        return self.total_fare

    @property
    def distance(self) -> float:
        return self.total_distance

    @property
    def duration_minutes(self) -> float:
        return self.total_duration_minutes

    @property
    def is_direct(self) -> bool:
        return self.result_type == "direct"


@dataclass
class Review:
    """Represents a rider review stored for a route."""
    route_id: str
    user_name: str
    rating: int  # 1-5
    comment: str
    date: str  # ISO-8601 timestamp
    review_id: Optional[str] = None

    def to_record(self) -> Dict[str, object]:
        """Serialize to the record store's JSON shape."""
        record: Dict[str, object] = {
            "busId": self.route_id,
            "userName": self.user_name,
            "rating": self.rating,
            "comment": self.comment,
            "date": self.date,
        }
        if self.review_id is not None:
            record["id"] = self.review_id
        return record

    @classmethod
    def from_record(cls, record: Dict[str, object]) -> "Review":
        """Build a Review from a record store entry."""
        review_id = record.get("id")
        return cls(
            route_id=str(record.get("busId", "")),
            user_name=str(record.get("userName", "")),
            rating=int(record.get("rating", 0)),
            comment=str(record.get("comment", "")),
            date=str(record.get("date", "")),
            review_id=str(review_id) if review_id is not None else None,
        )
