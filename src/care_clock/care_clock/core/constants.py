"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0

DEFAULT_FACILITY_NAME = "Main Facility"
DEFAULT_FACILITY_LATITUDE = 12.927538
DEFAULT_FACILITY_LONGITUDE = 77.526807
DEFAULT_PERIMETER_RADIUS_METERS = 2000.0

DEFAULT_HISTORY_LIMIT = 50
RECENT_ACTIVITY_LIMIT = 10
MIN_PASSWORD_LENGTH = 6

DEFAULT_DEPARTMENT = "Care"
DEFAULT_POSITION = "Care Worker"
