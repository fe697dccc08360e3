"""Internal constants shared across the library."""

#: Kaaba, Mecca.
KAABA_LATITUDE = 21.4225
KAABA_LONGITUDE = 39.8262

#: Cached locations older than this are re-acquired (30 minutes).
DEFAULT_MAX_AGE: float = 30 * 60
DEFAULT_POSITION_TIMEOUT: float = 10.0

GEOCODE_URL = "https://api.bigdatacloud.net/data/reverse-geocode-client"
DEFAULT_GEOCODE_TIMEOUT: float = 10.0
DEFAULT_ENRICHMENT_RETRY_INTERVAL: float = 5 * 60
USER_AGENT = "pyqibla/1.0"

CACHE_KEY = "pyqibla.location"

#: Place-name sentinel used when enrichment could not supply a value.
UNKNOWN_PLACE = "Unknown"

# Coordinates closer than this (degrees) are treated as the same point.
SAME_POINT_EPSILON = 1e-9
