import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "care_clock_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False

GEOFENCE_ENABLED = True
GEOFENCE_CLOCK_OUT = False

DEFAULT_FACILITY_NAME = "Test Facility"
DEFAULT_FACILITY_LATITUDE = 40.7128
DEFAULT_FACILITY_LONGITUDE = -74.0060
DEFAULT_PERIMETER_RADIUS_METERS = 200.0

DEFAULT_EMPLOYEE_PASSWORD = "careworker123"
