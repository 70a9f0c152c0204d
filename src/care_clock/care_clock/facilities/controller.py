from __future__ import annotations

from flask import Flask, request

from ..common.responses import fail, json_api, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.facility_service

    @app.route("/api/facility-settings", methods=["GET"], endpoint="facility_settings_get")
    @json_api
    def get_facility_settings():
        settings = service.get_settings(request.args.get("facilityId", type=int))
        return ok(facility=settings.to_dict())

    @app.route("/api/facility-settings", methods=["PUT"], endpoint="facility_settings_update")
    @json_api
    def update_facility_settings():
        data = json_body()
        settings = service.update_settings(
            latitude=data.get("latitude"),
            longitude=data.get("longitude"),
            radius_meters=data.get("radius"),
            name=data.get("facilityName"),
            facility_id=data.get("facilityId"),
        )
        return ok(facility=settings.to_dict())

    @app.route("/api/facility-settings/distance", methods=["GET"], endpoint="facility_settings_distance")
    @json_api
    def distance_to_facility():
        latitude = request.args.get("latitude", type=float)
        longitude = request.args.get("longitude", type=float)
        if latitude is None or longitude is None:
            return fail("latitude and longitude are required", 400)

        check = service.distance_to_facility(latitude, longitude)
        return ok(
            distanceMeters=round(check.distance_meters, 1),
            radiusMeters=check.radius_meters,
            withinPerimeter=check.within,
        )
