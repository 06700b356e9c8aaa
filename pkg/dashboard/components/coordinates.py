import logging
from typing import NamedTuple

import requests
from geopy.point import Point

from components.errors import GeolocationError
from utils.config import GEOLOCATION_URL, REQUEST_TIMEOUT_SECONDS
from utils.lookup import first_present


class GeoCoordinate(NamedTuple):
    latitude: float
    longitude: float

    @classmethod
    def from_lat_lng(cls, lat, lng) -> "GeoCoordinate":
        # Point rejects latitudes outside -90..90 and wraps longitudes
        point = Point(float(lat), float(lng))
        return cls(point.latitude, point.longitude)

    def as_list(self):
        return [self.latitude, self.longitude]

    def __str__(self):
        return f"{self.latitude:.5f}, {self.longitude:.5f}"


# W3C GeolocationPositionError codes
GEOLOCATION_ERRORS = {
    1: "Location permission denied.",
    2: "Location unavailable.",
    3: "Location request timed out.",
}


def coordinate_from_browser(position) -> GeoCoordinate:
    """
    Read the value reported by the browser's geolocation API.

    The browser answers either ``{"coords": {"latitude": .., "longitude": ..}}``
    or ``{"error": {"code": .., "message": ..}}``.
    """
    if not isinstance(position, dict):
        raise GeolocationError("Geolocation is not supported by this browser.")

    error = position.get("error")
    if error:
        if isinstance(error, dict):
            message = GEOLOCATION_ERRORS.get(error.get("code")) or error.get("message")
        else:
            message = str(error)
        raise GeolocationError(message or "Location unavailable.")

    coords = position.get("coords") or {}
    lat = first_present(coords, ("latitude", "lat"))
    lng = first_present(coords, ("longitude", "lng", "lon"))
    if lat is None or lng is None:
        raise GeolocationError("Browser did not report a position.")

    try:
        return GeoCoordinate.from_lat_lng(lat, lng)
    except (TypeError, ValueError) as e:
        raise GeolocationError(f"Browser reported an invalid position: {e}") from e


def fetch_device_location(url=GEOLOCATION_URL, timeout=REQUEST_TIMEOUT_SECONDS) -> GeoCoordinate:
    """
    Approximate the position from the IP address seen by the network location
    service. Only a fallback: run from the server it locates the server.

    Raises GeolocationError when the service is unreachable, refuses the lookup
    or answers without a usable position.
    """
    try:
        response = requests.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise GeolocationError(f"Location service unavailable: {e}") from e

    if response.status_code in (401, 403):
        raise GeolocationError("Location permission denied.")
    if response.status_code != 200:
        raise GeolocationError(
            f"Location lookup failed with status code {response.status_code}")

    try:
        data = response.json()
    except ValueError as e:
        raise GeolocationError("Location service returned an unreadable response.") from e

    if not isinstance(data, dict) or data.get("error"):
        reason = data.get("reason", "unknown reason") if isinstance(data, dict) else "unknown reason"
        raise GeolocationError(f"Location lookup failed: {reason}")

    lat = first_present(data, ("latitude", "lat"))
    lng = first_present(data, ("longitude", "lng", "lon"))
    if lat is None or lng is None:
        raise GeolocationError("Location service did not report a position.")

    try:
        coordinate = GeoCoordinate.from_lat_lng(lat, lng)
    except (TypeError, ValueError) as e:
        raise GeolocationError(f"Location service reported an invalid position: {e}") from e

    logging.info(f"Device location resolved to {coordinate}")
    return coordinate
