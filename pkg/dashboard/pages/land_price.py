from components.domains import LAND_PRICE
from components.form import render_valuation_page
from components.layout import setup_page
from components.session import mount_orchestrator

setup_page("Land Price", page_icon="🗺️")

render_valuation_page(mount_orchestrator(LAND_PRICE))
