from __future__ import annotations

from flask import Flask, request

from ..common.responses import fail, json_api, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.signup_service

    @app.route("/api/signup-requests", methods=["POST"], endpoint="signup_requests_create")
    @json_api
    def submit_signup_request():
        data = json_body()
        req = service.submit(
            name=data.get("name"),
            email=data.get("email"),
            phone=data.get("phone"),
            experience=data.get("experience"),
            preferred_department=data.get("preferredDepartment"),
            message=data.get("message"),
        )
        return ok(
            message="Signup request submitted successfully",
            requestId=req.request_id,
            timestamp=req.submitted_at.isoformat(),
        )

    @app.route("/api/signup-requests", methods=["GET"], endpoint="signup_requests_list")
    @json_api
    def list_signup_requests():
        requests_ = service.list_requests(status=request.args.get("status") or None)
        return ok(signupRequests=[r.to_dict() for r in requests_], count=len(requests_))

    @app.route("/api/signup-requests/<int:request_id>/status", methods=["PUT"], endpoint="signup_requests_decide")
    @json_api
    def decide_signup_request(request_id: int):
        data = json_body()
        if not data.get("status"):
            return fail("Status is required", 400)

        req = service.decide(request_id, data["status"], review_notes=data.get("reviewNotes"))
        return ok(signupRequest=req.to_dict(), message=f"Signup request {req.status.value.lower()}")
