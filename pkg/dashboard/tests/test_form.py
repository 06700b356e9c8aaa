import base64
from unittest import mock

import pytest

from components.dispatcher import PredictionClient
from components.domains import HOUSE_PRICE
from components.form import _add_camera, _add_gallery
from components.orchestrator import ValuationOrchestrator

GALLERY_KEY = "house-price-gallery"


@pytest.fixture
def orchestrator():
    return ValuationOrchestrator(HOUSE_PRICE, client=mock.Mock(spec=PredictionClient))


@pytest.fixture
def session_state():
    with mock.patch("components.form.st") as st:
        st.session_state = {}
        yield st.session_state


def test_gallery_appends_only_newly_uploaded_files(orchestrator, session_state, make_upload):
    uploads = [make_upload(name=f"a{i}.png") for i in range(5)]
    session_state[GALLERY_KEY] = uploads
    _add_gallery(orchestrator, GALLERY_KEY)
    assert len(orchestrator.images) == 5

    # the uploader reports every file it holds, not only the new one
    new = make_upload(name="new.png", color="blue")
    session_state[GALLERY_KEY] = uploads + [new]
    _add_gallery(orchestrator, GALLERY_KEY)

    assert len(orchestrator.images) == 6
    assert base64.b64decode(orchestrator.images.items[-1].split(",", 1)[1]) == new.getvalue()


def test_removing_a_file_adds_nothing(orchestrator, session_state, make_upload):
    uploads = [make_upload(name=f"a{i}.png") for i in range(3)]
    session_state[GALLERY_KEY] = uploads
    _add_gallery(orchestrator, GALLERY_KEY)

    session_state[GALLERY_KEY] = uploads[:1]
    _add_gallery(orchestrator, GALLERY_KEY)
    assert len(orchestrator.images) == 3


def test_gallery_rejections_are_reported(orchestrator, session_state, make_upload):
    session_state[GALLERY_KEY] = [make_upload(name="broken.png", data=b"nope")]
    _add_gallery(orchestrator, GALLERY_KEY)

    assert session_state[f"{GALLERY_KEY}-rejected"] == ["broken.png"]
    assert len(orchestrator.images) == 0


def test_cleared_camera_is_not_a_rejection(orchestrator, session_state):
    session_state["house-price-camera"] = None
    _add_camera(orchestrator, "house-price-camera")
    assert "house-price-camera-rejected" not in session_state
