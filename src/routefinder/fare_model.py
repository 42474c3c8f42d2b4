"""Linear fare, distance and travel time estimates."""

import math

# Flat-rate fare model used across the catalog
DEFAULT_RATE_PER_KM = 2.45
DEFAULT_MIN_FARE = 10
DEFAULT_DISTANCE_PER_STOP = 1.2  # km
DEFAULT_MINUTES_PER_STOP = 5


def round_half_up(value: float) -> int:
    """Round to the nearest integer, with .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def calculate_fare(
    distance: float,
    rate_per_km: float = DEFAULT_RATE_PER_KM,
    min_fare: float = DEFAULT_MIN_FARE,
) -> float:
    """
    Calculate fare from a distance.

    Args:
        distance: Distance in kilometers.
        rate_per_km: Rate charged per kilometer.
        min_fare: Minimum fare charged for any trip.

    Returns:
        Fare amount, never below min_fare. Negative distances get min_fare.
    """
    if distance < 0:
        return min_fare
    return max(min_fare, distance * rate_per_km)


def calculate_segment_fare(
    distance: float,
    rate_per_km: float = DEFAULT_RATE_PER_KM,
    min_fare: float = DEFAULT_MIN_FARE,
) -> float:
    """Fare for a route segment, rounded to a whole currency unit."""
    if distance < 0:
        return min_fare
    return max(min_fare, round_half_up(distance * rate_per_km))


def calculate_distance_from_stops(
    stop_count: int, distance_per_stop: float = DEFAULT_DISTANCE_PER_STOP
) -> float:
    """
    Estimate distance from a number of stops.

    Args:
        stop_count: Number of stops.
        distance_per_stop: Kilometers between consecutive stops.

    Returns:
        Estimated distance in kilometers (0 for negative counts).
    """
    if stop_count < 0:
        return 0
    return stop_count * distance_per_stop


def estimate_distance(
    stop_count: int, distance_per_stop: float = DEFAULT_DISTANCE_PER_STOP
) -> float:
    """Like calculate_distance_from_stops, rounded to one decimal place."""
    return round(calculate_distance_from_stops(stop_count, distance_per_stop), 1)


def calculate_travel_time(
    stop_count: int, minutes_per_stop: float = DEFAULT_MINUTES_PER_STOP
) -> float:
    """
    Estimate travel time from a number of stops.

    Args:
        stop_count: Number of stops.
        minutes_per_stop: Minutes spent per stop.

    Returns:
        Travel time in minutes (0 for negative counts).
    """
    if stop_count < 0:
        return 0
    return stop_count * minutes_per_stop


def format_travel_time(minutes: float) -> str:
    """
    Format minutes as a readable duration.

    Examples: 90 -> "1 hr 30 mins", 120 -> "2 hr", 45 -> "45 mins".
    "mins" stays plural even for a single minute.
    """
    if minutes <= 0:
        return "0 mins"
    hours = int(minutes // 60)
    mins = minutes % 60
    if isinstance(mins, float) and mins.is_integer():
        mins = int(mins)

    if hours > 0:
        return f"{hours} hr {mins} mins" if mins > 0 else f"{hours} hr"
    return f"{mins} mins"
