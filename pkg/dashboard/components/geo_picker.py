import logging
from typing import Callable, Optional

import folium

from components.constants import *
from components.coordinates import GeoCoordinate, fetch_device_location
from components.errors import GeolocationError


class GeoPicker:
    """
    Owns the folium map and the single location marker of one valuation form.

    The map is created by ``mount`` and released by ``dispose``; both the map
    click and the device location write the same coordinate, last write wins.
    """

    def __init__(
        self,
        on_change: Optional[Callable[[GeoCoordinate], None]] = None,
        locate: Callable[[], GeoCoordinate] = fetch_device_location,
    ):
        self.logger = logging.getLogger(GeoPicker.__name__)
        self.on_change = on_change
        self.locate = locate
        self.coordinate: Optional[GeoCoordinate] = None
        self.map: Optional[folium.Map] = None
        self.marker: Optional[folium.Marker] = None
        self.center = DEFAULT_MAP_CENTER
        self.zoom = DEFAULT_MAP_ZOOM
        self.error: Optional[str] = None

    @property
    def mounted(self) -> bool:
        return self.map is not None

    def mount(self) -> folium.Map:
        if self.map is not None:
            return self.map

        self.map = folium.Map(
            location=list(self.center),
            zoom_start=self.zoom,
            tiles=None,
            control_scale=True,
        )
        folium.TileLayer(
            tiles=TILE_URL,
            attr=TILE_ATTRIBUTION,
            max_zoom=TILE_MAX_ZOOM,
            name="OpenStreetMap",
        ).add_to(self.map)

        # a remount restores the marker for a location picked earlier
        if self.coordinate is not None:
            self._sync_marker()
        return self.map

    def dispose(self):
        self.map = None
        self.marker = None
        self.logger.debug("Map released")

    def on_map_click(self, lat, lng) -> Optional[GeoCoordinate]:
        if not self.mounted:
            return None
        return self._set_coordinate(GeoCoordinate.from_lat_lng(lat, lng))

    def use_device_location(self, locate: Optional[Callable[[], GeoCoordinate]] = None) -> Optional[GeoCoordinate]:
        """Returns the new coordinate, or None with ``error`` set on failure."""
        self.error = None
        try:
            coordinate = (locate or self.locate)()
        except GeolocationError as e:
            self.logger.warning(f"Unable to get location: {e}")
            self.error = f"Unable to get location: {e}"
            return None

        self.center = (coordinate.latitude, coordinate.longitude)
        self.zoom = DEVICE_LOCATION_ZOOM
        return self._set_coordinate(coordinate)

    def _set_coordinate(self, coordinate: GeoCoordinate) -> GeoCoordinate:
        self.coordinate = coordinate
        self._sync_marker()
        if self.on_change is not None:
            self.on_change(coordinate)
        return coordinate

    def _sync_marker(self):
        if self.map is None:
            return
        if self.marker is not None:
            self.marker.location = self.coordinate.as_list()
        else:
            self.marker = folium.Marker(
                self.coordinate.as_list(), tooltip="Selected location")
            self.marker.add_to(self.map)
