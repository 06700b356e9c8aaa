import logging
from pathlib import Path

import streamlit as st

from components.domains import DOMAINS
from components.layout import setup_page
from components.session import unmount_current
from utils.config import resolve_base_url

client_state = setup_page("Home")

st.title("AI Property Valuation")
st.text("Estimate house prices, monthly rents and land values from a few details and a map pin 🏠")


def capture_auth_token():
    # the login flow redirects back with ?token=<jwt>
    token = st.query_params.get("token")
    if not token:
        return

    client_state.store_token(token)
    del st.query_params["token"]
    logging.info("Captured auth token from login redirect")
    st.toast("Signed in successfully!", icon="🚀")


capture_auth_token()
unmount_current()

st.info(
    """
    Pick an estimator below. Each one asks for the property details, a location
    on the map and optional photos, then asks the valuation service for an estimate.
"""
)

pages = {
    "house-price": "pages/house_price.py",
    "house-rent": "pages/house_rent.py",
    "land-price": "pages/land_price.py",
}

columns = st.columns(len(pages))
for column, (key, path) in zip(columns, pages.items()):
    config = DOMAINS[key]
    with column.container(border=True):
        st.subheader(f"{config.icon} {config.title}")
        st.write(config.description)
        st.markdown(f"[Open {config.title} →](/{Path(path).stem})")

st.caption(f"Valuation service: {resolve_base_url()}")
