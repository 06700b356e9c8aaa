PROPERTY_TYPES = [
    "Apartment",
    "Independent House",
    "Villa",
    "Studio",
]

RENTAL_PROPERTY_TYPES = [
    "Apartment",
    "Independent House",
    "Studio",
    "Villa",
]

BHK = ["1BHK", "2BHK", "3BHK", "4BHK+"]

FURNISHING = ["Unfurnished", "Semi-Furnished", "Furnished"]

PARKING = ["Yes", "No"]

ZONE_TYPES = ["Residential", "Commercial", "Industrial", "Agricultural"]

CORNER_PLOT = ["No", "Yes"]

# (id, label, icon)
HOUSE_PRICE_AMENITIES = [
    ("pool", "Pool", "🏊"),
    ("gym", "Gym", "🏋️"),
    ("lift", "Lift", "🛗"),
    ("parking", "Parking", "🚗"),
    ("security", "Security", "🛡️"),
    ("power", "Power Backup", "⚡"),
]

HOUSE_RENT_AMENITIES = [
    ("parking", "Parking", "🚗"),
    ("power", "Power Backup", "⚡"),
    ("security", "Security", "🛡️"),
    ("lift", "Lift", "🛗"),
    ("gym", "Gym", "🏋️"),
    ("water", "24/7 Water", "🚰"),
]

MIN_BUILD_YEAR = 1900

# national-extent view of India
DEFAULT_MAP_CENTER = (20.5937, 78.9629)
DEFAULT_MAP_ZOOM = 6
DEVICE_LOCATION_ZOOM = 14
TILE_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
TILE_ATTRIBUTION = "&copy; OpenStreetMap contributors"
TILE_MAX_ZOOM = 19

MAX_GALLERY_IMAGES = 5
INSIGHTS_DUMP_LIMIT = 400

DEFAULT_BACKEND_URL = "https://ai-valuation-backend-1.onrender.com"
BACKEND_URL_ENV_VARS = ["BACKEND_URL", "API_BASE_URL"]
DEFAULT_GEOLOCATION_URL = "https://ipapi.co/json/"

# keys owned by the client-state service
AUTH_TOKEN_KEY = "auth_token"
USER_PROFILE_KEY = "user"
SIDEBAR_COLLAPSED_KEY = "sidebar_collapsed"
BROWSER_STORAGE_KEY = "ai-valuation-client"
