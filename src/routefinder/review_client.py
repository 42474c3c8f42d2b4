"""Client for the route review record store."""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

import requests

from .models import Review

logger = logging.getLogger(__name__)

REVIEWS_API_BASE = "http://localhost:3001"


class ReviewClient:
    """Lists and appends rider reviews kept in a JSON record store."""

    def __init__(self, base_url: str = REVIEWS_API_BASE, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session = requests.Session()

    @property
    def reviews_url(self) -> str:
        return f"{self.base_url}/reviews"

    def list_reviews(self, route_id: str) -> List[Review]:
        """
        Get all reviews for a route.

        Returns:
            List of Review objects; empty if the store cannot be reached.
        """
        try:
            response = self._session.get(
                self.reviews_url, params={"busId": route_id}, timeout=self.timeout
            )
            response.raise_for_status()
            records = response.json()
        except (requests.RequestException, ValueError) as e:
            logger.warning(f"Failed to fetch reviews for {route_id}: {e}")
            return []

        reviews = []
        for record in records or []:
            try:
                reviews.append(Review.from_record(record))
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning(f"Skipping malformed review record: {e}")
        return reviews

    def add_review(
        self,
        route_id: str,
        user_name: str,
        rating: int,
        comment: str,
        date: Optional[str] = None,
    ) -> bool:
        """
        Append a review for a route.

        Args:
            route_id: Route being reviewed.
            user_name: Name shown with the review.
            rating: Star rating from 1 to 5.
            comment: Free-text comment.
            date: ISO-8601 timestamp; defaults to now (UTC).

        Returns:
            True if the store accepted the review.

        Raises:
            ValueError: If rating is outside 1-5.
        """
        if not 1 <= rating <= 5:
            raise ValueError(f"Rating must be between 1 and 5, got {rating}")

        review = Review(
            route_id=route_id,
            user_name=user_name,
            rating=rating,
            comment=comment,
            date=date or datetime.now(timezone.utc).isoformat(),
        )
        try:
            response = self._session.post(
                self.reviews_url, json=review.to_record(), timeout=self.timeout
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error(f"Failed to submit review for {route_id}: {e}")
            return False

        logger.info(f"Submitted review for {route_id}")
        return True

    @staticmethod
    def average_rating(reviews: Sequence[Review]) -> float:
        """Mean rating rounded to one decimal, 0.0 with no reviews."""
        if not reviews:
            return 0.0
        return round(sum(review.rating for review in reviews) / len(reviews), 1)
