"""Care Clock package.

Feature modules (geofence, timeclock, facilities, employees, signups,
analytics) with a thin Flask controller layer over service/repository layers.
The geofence and timeclock reconstruction code is pure and has no I/O.
"""
