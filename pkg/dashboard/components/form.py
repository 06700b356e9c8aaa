import base64

import streamlit as st
from streamlit_folium import st_folium
from streamlit_js_eval import get_geolocation

from components.domains import CHOICE, FLAG, NUMBER, DomainConfig, FieldSpec
from components.images import fresh_uploads
from components.orchestrator import SubmissionStatus, ValuationOrchestrator
from components.results import render_result


def _widget_key(config: DomainConfig, name):
    return f"{config.key}-{name}"


def render_field(container, config: DomainConfig, spec: FieldSpec):
    # widget state is keyed, the form state mirrors what the widget returns
    key = _widget_key(config, spec.name)

    if spec.kind == NUMBER:
        return container.number_input(
            label=spec.label,
            placeholder=spec.placeholder,
            min_value=spec.min_value,
            max_value=spec.max_value,
            value=spec.default,
            step=1,
            key=key,
        )
    if spec.kind in (CHOICE, FLAG):
        options = list(spec.options)
        return container.selectbox(
            label=spec.label,
            options=options,
            index=options.index(spec.default) if spec.default in options else 0,
            key=key,
        )
    return container.text_input(
        label=spec.label, placeholder=spec.placeholder, key=key)


def render_fields(orchestrator: ValuationOrchestrator):
    config, form = orchestrator.config, orchestrator.form

    form_col1, form_col2 = st.columns(2)
    for i, spec in enumerate(config.fields):
        container = form_col1 if i % 2 == 0 else form_col2
        value = render_field(container, config, spec)
        form.set_field(spec.name, value)

    if config.amenities:
        st.markdown("**Amenities**")
        columns = st.columns(3)
        for i, amenity in enumerate(config.amenities):
            selected = columns[i % 3].checkbox(
                label=f"{amenity.icon} {amenity.label}",
                key=_widget_key(config, f"amenity-{amenity.id}"),
            )
            form.set_amenity(amenity.id, selected)


def render_map(orchestrator: ValuationOrchestrator):
    config, picker = orchestrator.config, orchestrator.picker

    st.markdown("**Pick location on map**")
    st.caption("Click the map to set lat/lng, or use your current location")

    # the browser answers on a later rerun; a fresh component key per click
    # asks again instead of replaying the previous answer
    request_key, count_key = _widget_key(config, "locate-request"), _widget_key(config, "locate-count")
    if st.button("Use My Location", key=_widget_key(config, "locate")):
        st.session_state[count_key] = st.session_state.get(count_key, 0) + 1
        st.session_state[request_key] = st.session_state[count_key]

    request = st.session_state.get(request_key)
    if request is not None:
        position = get_geolocation(component_key=_widget_key(config, f"geolocation-{request}"))
        if position is None:
            st.caption("Waiting for the browser to share its location...")
        else:
            del st.session_state[request_key]
            orchestrator.use_browser_location(position)
            if picker.error:
                st.error(picker.error)

    out = st_folium(
        picker.mount(),
        center=list(picker.center),
        zoom=picker.zoom,
        height=350,
        use_container_width=True,
        key=_widget_key(config, "map"),
        returned_objects=["last_clicked"],
    )

    # last_clicked sticks across reruns, only act on a new click
    click = (out or {}).get("last_clicked")
    handled_key = _widget_key(config, "handled-click")
    if click and click != st.session_state.get(handled_key):
        st.session_state[handled_key] = click
        picker.on_map_click(click["lat"], click["lng"])
        st.rerun()

    if orchestrator.form.coordinate is not None:
        st.write(f"Selected: {orchestrator.form.coordinate}")
    else:
        st.write("No location selected")


def _add_gallery(orchestrator: ValuationOrchestrator, key):
    consumed = st.session_state.setdefault(f"{key}-consumed", set())
    files = fresh_uploads(st.session_state.get(key), consumed)
    rejected = orchestrator.add_gallery_images(files)
    st.session_state[f"{key}-rejected"] = rejected


def _add_camera(orchestrator: ValuationOrchestrator, key):
    capture = st.session_state.get(key)
    if capture is not None and not orchestrator.add_camera_image(capture):
        st.session_state[f"{key}-rejected"] = ["camera capture"]


def render_photos(orchestrator: ValuationOrchestrator):
    config = orchestrator.config
    gallery_key = _widget_key(config, "gallery")
    camera_key = _widget_key(config, "camera")

    st.markdown("**Property Photos (optional)**")
    st.file_uploader(
        "Upload from gallery (up to 5 at a time)",
        type=["jpg", "jpeg", "png", "webp", "bmp"],
        accept_multiple_files=True,
        key=gallery_key,
        on_change=_add_gallery,
        args=(orchestrator, gallery_key),
    )
    with st.expander("Take a photo"):
        st.camera_input(
            "Camera", key=camera_key, on_change=_add_camera, args=(orchestrator, camera_key))

    for key in (gallery_key, camera_key):
        rejected = st.session_state.pop(f"{key}-rejected", None)
        if rejected:
            st.warning(f"Skipped unreadable images: {', '.join(rejected)}")

    if len(orchestrator.images):
        columns = st.columns(5)
        for i, data_uri in enumerate(orchestrator.images):
            raw_bytes = base64.b64decode(data_uri.split(",", 1)[1])
            columns[i % 5].image(raw_bytes, use_container_width=True)


def render_valuation_page(orchestrator: ValuationOrchestrator):
    config = orchestrator.config

    st.title(f"{config.icon} {config.title}")
    st.text(config.description)
    st.info(
        """
        Fill in the form below, pick the location on the map and press Predict.
        __(\\* indicates required fields)__
    """
    )

    left, right = st.columns(2, gap="large")

    with left:
        with st.container(border=True):
            st.subheader("Parameters Selection")
            render_fields(orchestrator)
            render_map(orchestrator)
            render_photos(orchestrator)

            if st.button("Predict", type="primary", key=_widget_key(config, "submit")):
                with st.spinner("Calculating..."):
                    status = orchestrator.submit()
                if status == SubmissionStatus.SUCCESS:
                    st.toast("Prediction Completed", icon="🎉")

    with right:
        if orchestrator.status == SubmissionStatus.ERROR:
            st.error(orchestrator.error)
        elif orchestrator.status == SubmissionStatus.SUCCESS:
            render_result(config, orchestrator.result)
        else:
            st.write("Fill the form and click Predict to see the estimate.")
