import os

from components.constants import BACKEND_URL_ENV_VARS, DEFAULT_BACKEND_URL, DEFAULT_GEOLOCATION_URL

REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
GEOLOCATION_URL = os.getenv("GEOLOCATION_URL", DEFAULT_GEOLOCATION_URL)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
# approximate the position from the IP address when the browser cannot
# report one; only meaningful when the app runs on the user's own machine
IP_LOCATION_FALLBACK = os.getenv("IP_LOCATION_FALLBACK", "false").lower() in ("1", "true", "yes")


def resolve_base_url(environ=None) -> str:
    """First non-empty backend URL variable wins, else the hosted default."""
    if environ is None:
        environ = os.environ

    for name in BACKEND_URL_ENV_VARS:
        value = (environ.get(name) or "").strip()
        if value:
            return value.rstrip("/")
    return DEFAULT_BACKEND_URL


def endpoint_url(path, environ=None) -> str:
    return f"{resolve_base_url(environ)}/{path.lstrip('/')}"
