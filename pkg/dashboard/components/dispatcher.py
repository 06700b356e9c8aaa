import json
import math
import logging
from typing import Optional

import pydantic
import requests

from components.constants import INSIGHTS_DUMP_LIMIT
from components.domains import CHOICE, FLAG, NUMBER, DomainConfig
from components.errors import TransportError, ValidationError
from components.form_state import FormState, is_blank
from models.prediction import PredictionResult
from utils.client_state import ClientState
from utils.config import REQUEST_TIMEOUT_SECONDS, endpoint_url
from utils.lookup import first_present


def to_number(value, label):
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a number.")
    if isinstance(value, (int, float)):
        return value

    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        raise ValidationError(f"{label} must be a number.") from None


def _label(spec):
    return spec.label.rstrip("*").replace(" (optional)", "")


def build_payload(config: DomainConfig, form: FormState) -> dict:
    """Flatten the form into the JSON body expected by the domain endpoint."""
    if form.coordinate is None:
        raise ValidationError(config.missing_location_message)

    payload = {}
    for spec in config.fields:
        value = form.get_field(spec.name)

        if spec.kind == NUMBER:
            if is_blank(value):
                if spec.required:
                    raise ValidationError(config.missing_fields_message)
                payload[spec.name] = None
            else:
                payload[spec.name] = to_number(value, _label(spec))
        elif spec.kind in (CHOICE, FLAG):
            if value not in spec.options:
                raise ValidationError(
                    f"{_label(spec)} must be one of: {', '.join(spec.options)}.")
            payload[spec.name] = value == "Yes" if spec.kind == FLAG else value
        else:
            if spec.required and is_blank(value):
                raise ValidationError(config.missing_fields_message)
            payload[spec.name] = value.strip() if isinstance(value, str) else value

    if config.amenities:
        payload["amenities"] = form.selected_amenities()

    # images are kept for preview only until the backend accepts them
    payload["lat"] = form.coordinate.latitude
    payload["lng"] = form.coordinate.longitude

    try:
        model = config.payload_model(**payload)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ValidationError(f"Invalid {field}: {first['msg']}") from None
    return model.model_dump()


def _as_number(value, name) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        number = None

    # NaN, inf and out-of-range numbers degrade like any other junk value
    if number is None or not math.isfinite(number):
        logging.debug(f"Ignoring non-numeric {name} in response: {value!r}")
        return None
    return number


def normalize_response(config: DomainConfig, data: dict) -> PredictionResult:
    """Map an arbitrarily shaped backend response onto ``PredictionResult``."""
    insights = data.get("insights")
    if insights is None:
        insights = json.dumps(data, separators=(",", ":"), ensure_ascii=False)[:INSIGHTS_DUMP_LIMIT]

    return PredictionResult(
        predicted_value=_as_number(first_present(data, config.predicted_keys), "prediction"),
        min_value=_as_number(first_present(data, config.min_keys), "minimum"),
        max_value=_as_number(first_present(data, config.max_keys), "maximum"),
        confidence=_as_number(data.get("confidence"), "confidence"),
        price_per_unit=_as_number(first_present(data, config.per_unit_keys), "price per unit"),
        insights=str(insights),
    )


class PredictionClient:
    """Sends one valuation request to the prediction service."""

    def __init__(
        self,
        client_state: Optional[ClientState] = None,
        session: Optional[requests.Session] = None,
        environ=None,
        timeout=REQUEST_TIMEOUT_SECONDS,
    ):
        self.logger = logging.getLogger(PredictionClient.__name__)
        self.client_state = client_state
        # the session carries cookies across requests like browser credentials
        self.session = session or requests.Session()
        self.environ = environ
        self.timeout = timeout

    def headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        token = self.client_state.auth_token if self.client_state is not None else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    def predict(self, config: DomainConfig, payload: dict) -> dict:
        url = endpoint_url(config.endpoint, self.environ)
        self.logger.info(f"POST {url}")

        try:
            response = self.session.post(
                url, json=payload, headers=self.headers(), timeout=self.timeout)
        except requests.RequestException as e:
            self.logger.error(f"Request to {url} failed: {e}")
            raise TransportError(str(e) or "Prediction failed.") from e

        if not response.ok:
            self.logger.error(f"{url} answered {response.status_code}")
            raise TransportError(
                f"Server error: {response.status_code} {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise TransportError("Server returned a response that is not JSON.") from e

        if not isinstance(data, dict):
            raise TransportError("Server returned an unexpected response.")
        return data

    def close(self):
        self.session.close()
