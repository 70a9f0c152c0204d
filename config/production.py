import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "care_clock"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

GEOFENCE_ENABLED = bool(int(os.getenv("GEOFENCE_ENABLED", "1")))
GEOFENCE_CLOCK_OUT = bool(int(os.getenv("GEOFENCE_CLOCK_OUT", "0")))

DEFAULT_FACILITY_NAME = os.getenv("DEFAULT_FACILITY_NAME", "Main Facility")
DEFAULT_FACILITY_LATITUDE = float(os.getenv("DEFAULT_FACILITY_LATITUDE", "12.927538"))
DEFAULT_FACILITY_LONGITUDE = float(os.getenv("DEFAULT_FACILITY_LONGITUDE", "77.526807"))
DEFAULT_PERIMETER_RADIUS_METERS = float(os.getenv("DEFAULT_PERIMETER_RADIUS_METERS", "2000"))

DEFAULT_EMPLOYEE_PASSWORD = os.getenv("DEFAULT_EMPLOYEE_PASSWORD", "careworker123")

BOOTSTRAP_MANAGER_EMAIL = os.getenv("BOOTSTRAP_MANAGER_EMAIL")
BOOTSTRAP_MANAGER_NAME = os.getenv("BOOTSTRAP_MANAGER_NAME", "Facility Manager")
BOOTSTRAP_MANAGER_PASSWORD = os.getenv("BOOTSTRAP_MANAGER_PASSWORD", "")
