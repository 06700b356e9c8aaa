import json
from unittest import mock

import pytest
import requests

from components.dispatcher import PredictionClient, build_payload, normalize_response
from components.domains import HOUSE_PRICE, HOUSE_RENT, LAND_PRICE
from components.errors import TransportError, ValidationError
from components.form_state import FormState
from utils.client_state import ClientState


def make_response(status_code=200, body=None, text=None):
    response = mock.Mock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text if text is not None else json.dumps(body)
    if body is None:
        response.json.side_effect = ValueError("no json")
    else:
        response.json.return_value = body
    return response


def make_client(response=None, token=None, error=None, environ=None):
    session = mock.Mock(spec=requests.Session)
    if error is not None:
        session.post.side_effect = error
    else:
        session.post.return_value = response
    client_state = ClientState({}).initialize()
    client_state.auth_token = token
    return PredictionClient(
        client_state=client_state, session=session, environ=environ or {}), session


class TestBuildPayload:
    def test_house_price_payload(self, house_form):
        payload = build_payload(HOUSE_PRICE, house_form)

        assert payload["area"] == 1200
        assert payload["bedrooms"] == 2
        assert payload["bathrooms"] == 2
        assert payload["city"] == "Pune"
        assert payload["locality"] == "Kothrud"
        assert payload["lat"] == 18.52
        assert payload["lng"] == 73.85
        assert payload["amenities"] == []
        assert payload["property_type"] == "Apartment"
        assert payload["bhk"] == "2BHK"
        assert payload["furnishing"] == "Semi-Furnished"
        assert payload["build_year"] is None
        assert "images" not in payload

    def test_selected_amenities_are_listed_in_catalog_order(self, house_form):
        house_form.toggle_amenity("security")
        house_form.toggle_amenity("pool")
        assert build_payload(HOUSE_PRICE, house_form)["amenities"] == ["pool", "security"]

    def test_optional_numbers(self, house_form):
        house_form.set_field("build_year", "2015")
        assert build_payload(HOUSE_PRICE, house_form)["build_year"] == 2015

        house_form.set_field("build_year", "  ")
        assert build_payload(HOUSE_PRICE, house_form)["build_year"] is None

    def test_build_year_out_of_range(self, house_form):
        house_form.set_field("build_year", 1850)
        with pytest.raises(ValidationError, match="build_year"):
            build_payload(HOUSE_PRICE, house_form)

    def test_non_numeric_required_field(self, house_form):
        house_form.set_field("area", "big")
        with pytest.raises(ValidationError, match="Area"):
            build_payload(HOUSE_PRICE, house_form)

    def test_negative_number_is_rejected(self, house_form):
        house_form.set_field("bedrooms", "-1")
        with pytest.raises(ValidationError):
            build_payload(HOUSE_PRICE, house_form)

    def test_enum_outside_options_is_rejected(self, house_form):
        house_form.set_field("bhk", "")
        with pytest.raises(ValidationError, match="BHK"):
            build_payload(HOUSE_PRICE, house_form)

    def test_rent_payload(self, pune):
        form = FormState(HOUSE_RENT)
        for name, value in {"area": 650, "bedrooms": 1, "bathrooms": 1,
                            "city": "Pune", "locality": "Aundh", "floor": ""}.items():
            form.set_field(name, value)
        form.toggle_amenity("water")
        form.set_coordinate(pune)

        payload = build_payload(HOUSE_RENT, form)
        assert payload["floor"] is None
        assert payload["parking"] == "Yes"
        assert payload["amenities"] == ["water"]

    def test_land_payload(self, pune):
        form = FormState(LAND_PRICE)
        for name, value in {"area": "2400", "city": "Nashik", "locality": "Gangapur",
                            "road_width": "30", "corner_plot": "Yes"}.items():
            form.set_field(name, value)
        form.set_coordinate(pune)

        payload = build_payload(LAND_PRICE, form)
        assert payload["corner_plot"] is True
        assert payload["road_width"] == 30
        assert payload["zone_type"] == "Residential"
        assert "amenities" not in payload

    def test_missing_location(self, house_form):
        house_form.set_coordinate(None)
        with pytest.raises(ValidationError, match="location"):
            build_payload(HOUSE_PRICE, house_form)


class TestNormalizeResponse:
    def test_price_fallback_and_insights_dump(self):
        data = {"price": 9500000, "min_price": 9000000, "max_price": 10000000}
        result = normalize_response(HOUSE_PRICE, data)

        assert result.predicted_value == 9500000
        assert result.min_value == 9000000
        assert result.max_value == 10000000
        assert result.confidence is None
        assert result.price_per_unit is None
        assert result.insights == '{"price":9500000,"min_price":9000000,"max_price":10000000}'

    def test_predicted_price_wins_over_price(self):
        result = normalize_response(
            HOUSE_PRICE, {"predicted_price": 1, "price": 2, "insights": "Close to metro"})
        assert result.predicted_value == 1
        assert result.insights == "Close to metro"

    def test_insights_dump_is_truncated(self):
        data = {"price": 1, "notes": "x" * 1000}
        assert len(normalize_response(HOUSE_PRICE, data).insights) == 400

    def test_missing_fields_default_to_none(self):
        result = normalize_response(HOUSE_PRICE, {})
        assert result.predicted_value is None
        assert result.min_value is None
        assert result.max_value is None
        assert result.insights == "{}"

    def test_rent_field_names(self):
        result = normalize_response(
            HOUSE_RENT, {"rent": 25000, "min_rent": 22000, "max_rent": 28000, "confidence": 0.82})
        assert result.predicted_value == 25000
        assert result.min_value == 22000
        assert result.max_value == 28000
        assert result.confidence == 0.82

    def test_land_price_per_unit(self):
        result = normalize_response(LAND_PRICE, {"predicted_price": 4800000, "price_per_sqft": 2000})
        assert result.price_per_unit == 2000

    def test_non_numeric_values_degrade_to_none(self):
        result = normalize_response(HOUSE_PRICE, {"price": "n/a", "confidence": "high"})
        assert result.predicted_value is None
        assert result.confidence is None

    @pytest.mark.parametrize("body", [
        {"price": "NaN", "min_price": "inf", "max_price": "-Infinity"},
        {"price": float("nan"), "min_price": float("inf"), "max_price": float("-inf")},
        {"price": "1e400", "min_price": 1e400, "max_price": 10 ** 400},
    ])
    def test_non_finite_values_degrade_to_none(self, body):
        result = normalize_response(HOUSE_PRICE, body)
        assert result.predicted_value is None
        assert result.min_value is None
        assert result.max_value is None


class TestPredictionClient:
    def test_posts_json_with_bearer_token(self):
        client, session = make_client(make_response(body={"price": 1}), token="tok")
        data = client.predict(HOUSE_PRICE, {"area": 1})

        assert data == {"price": 1}
        args, kwargs = session.post.call_args
        assert args[0] == "https://ai-valuation-backend-1.onrender.com/predict/house-price"
        assert kwargs["json"] == {"area": 1}
        assert kwargs["headers"]["Authorization"] == "Bearer tok"
        assert kwargs["headers"]["Content-Type"] == "application/json"

    def test_no_token_means_no_authorization_header(self):
        client, session = make_client(make_response(body={}))
        client.predict(LAND_PRICE, {})
        assert "Authorization" not in session.post.call_args.kwargs["headers"]

    def test_base_url_from_environment(self):
        client, session = make_client(
            make_response(body={}), environ={"BACKEND_URL": "http://localhost:8000/"})
        client.predict(HOUSE_RENT, {})
        assert session.post.call_args.args[0] == "http://localhost:8000/predict/house-rent"

    def test_http_error_carries_status_and_body(self):
        client, _ = make_client(make_response(502, text="bad gateway"))
        with pytest.raises(TransportError) as excinfo:
            client.predict(HOUSE_PRICE, {})

        assert str(excinfo.value) == "Server error: 502 bad gateway"
        assert excinfo.value.status_code == 502

    def test_network_error_is_wrapped(self):
        client, _ = make_client(error=requests.ConnectionError("connection refused"))
        with pytest.raises(TransportError, match="connection refused"):
            client.predict(HOUSE_PRICE, {})

    def test_non_json_body(self):
        client, _ = make_client(make_response(200, text="<html>"))
        with pytest.raises(TransportError):
            client.predict(HOUSE_PRICE, {})

    def test_non_object_body(self):
        client, _ = make_client(make_response(200, body=[1, 2]))
        with pytest.raises(TransportError):
            client.predict(HOUSE_PRICE, {})
