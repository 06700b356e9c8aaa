import enum
import logging
from typing import Callable, Optional

from components.coordinates import GeoCoordinate, coordinate_from_browser, fetch_device_location
from components.dispatcher import PredictionClient, build_payload, normalize_response
from components.domains import DomainConfig
from components.errors import ValidationError, ValuationError
from components.form_state import FormState
from components.geo_picker import GeoPicker
from components.images import ImageAttachments
from utils.cancellation import TokenSource
from utils.client_state import ClientState
from utils.config import IP_LOCATION_FALLBACK


class SubmissionStatus(enum.Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ValuationOrchestrator:
    """
    Runs one valuation form: field state, location picker, photo attachments
    and the submit cycle against the prediction service.

    Idle -> Loading -> Success | Error, restarted by every submit. A failed
    validation goes straight to Error without entering Loading.
    """

    def __init__(
        self,
        config: DomainConfig,
        client_state: Optional[ClientState] = None,
        client: Optional[PredictionClient] = None,
        locate: Callable[[], GeoCoordinate] = fetch_device_location,
    ):
        self.logger = logging.getLogger(ValuationOrchestrator.__name__)
        self.config = config
        self.form = FormState(config)
        self.picker = GeoPicker(on_change=self.form.set_coordinate, locate=locate)
        self.images = ImageAttachments()
        self.client = client or PredictionClient(client_state=client_state)
        self.status = SubmissionStatus.IDLE
        self.tokens = TokenSource()

    @property
    def result(self):
        return self.form.result

    @property
    def error(self):
        return self.form.error

    def mount(self):
        return self.picker.mount()

    def dispose(self):
        """Release the map and drop any result still in flight."""
        self.tokens.cancel_all()
        self.picker.dispose()
        self.client.close()

    def validation_message(self) -> Optional[str]:
        if not self.form.initialized or self.form.missing_fields():
            return self.config.missing_fields_message
        if self.form.coordinate is None:
            return self.config.missing_location_message
        return None

    def use_device_location(self) -> Optional[GeoCoordinate]:
        # a failed lookup only reports through picker.error; status is untouched
        return self.picker.use_device_location()

    def use_browser_location(self, position, fallback=IP_LOCATION_FALLBACK) -> Optional[GeoCoordinate]:
        """
        Apply the position reported by the browser geolocation API.

        With ``fallback`` a denied or missing position is retried through the
        IP lookup of ``use_device_location``.
        """
        coordinate = self.picker.use_device_location(lambda: coordinate_from_browser(position))
        if coordinate is None and fallback:
            self.logger.info(f"Browser location failed ({self.picker.error}), trying IP lookup")
            coordinate = self.use_device_location()
        return coordinate

    def add_gallery_images(self, files) -> list:
        token = self.tokens.issue()
        try:
            return self.images.add_from_gallery(files, token=token)
        finally:
            self.tokens.release(token)

    def add_camera_image(self, file) -> bool:
        token = self.tokens.issue()
        try:
            return self.images.add_from_camera(file, token=token)
        finally:
            self.tokens.release(token)

    def submit(self) -> SubmissionStatus:
        self.form.reset()

        message = self.validation_message()
        if message is not None:
            self._fail(message)
            return self.status

        try:
            payload = build_payload(self.config, self.form)
        except ValidationError as e:
            self._fail(str(e))
            return self.status

        token = self.tokens.issue(supersede=True)
        self.status = SubmissionStatus.LOADING
        try:
            data = self.client.predict(self.config, payload)
            result = normalize_response(self.config, data)
        except ValuationError as e:
            if token.cancelled:
                self._discard_stale()
            else:
                self._fail(str(e) or "Prediction failed.")
            return self.status
        finally:
            self.tokens.release(token)

        if token.cancelled:
            self._discard_stale()
            return self.status

        self.form.result = result
        self.form.error = None
        self.status = SubmissionStatus.SUCCESS
        self.logger.info(f"{self.config.key} prediction completed")
        return self.status

    def _discard_stale(self):
        self.logger.info(f"Discarding stale {self.config.key} response")
        # a newer submit already owns the status, otherwise nothing is in flight
        if self.status == SubmissionStatus.LOADING:
            self.status = SubmissionStatus.IDLE

    def _fail(self, message):
        self.form.result = None
        self.form.error = message
        self.status = SubmissionStatus.ERROR
        self.logger.info(f"{self.config.key} submission failed: {message}")
