import io
import uuid

import pytest
from PIL import Image

from components.coordinates import GeoCoordinate
from components.domains import HOUSE_PRICE
from components.form_state import FormState


class FakeUpload(io.BytesIO):
    """Stands in for streamlit's UploadedFile."""

    def __init__(self, data, name="photo.png", type="image/png", file_id=None):
        super().__init__(data)
        self.name = name
        self.type = type
        self.file_id = file_id or uuid.uuid4().hex


def png_bytes(color="red", size=(4, 4)):
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_upload():
    def _make(name="photo.png", color="red", data=None):
        return FakeUpload(png_bytes(color) if data is None else data, name=name)
    return _make


@pytest.fixture
def pune():
    return GeoCoordinate(18.52, 73.85)


@pytest.fixture
def house_form(pune):
    form = FormState(HOUSE_PRICE)
    for name, value in {
        "area": "1200",
        "bedrooms": "2",
        "bathrooms": "2",
        "city": "Pune",
        "locality": "Kothrud",
    }.items():
        form.set_field(name, value)
    form.set_coordinate(pune)
    return form
