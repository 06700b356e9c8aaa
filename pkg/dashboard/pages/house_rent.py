from components.domains import HOUSE_RENT
from components.form import render_valuation_page
from components.layout import setup_page
from components.session import mount_orchestrator

setup_page("House Rent", page_icon="🔑")

render_valuation_page(mount_orchestrator(HOUSE_RENT))
