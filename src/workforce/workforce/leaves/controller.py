from __future__ import annotations

from flask import Flask, jsonify

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_employee_id, json_body, login_required, roles_required, to_json
from ..common.validators import require_id
from ..container import Container
from ..core.enums import Role
from ..timesheets.controller import approval_flag


def register(app: Flask, container: Container) -> None:
    @app.route("/employee/leave-request", methods=["POST"], endpoint="request_leave")
    @login_required
    def request_leave():
        body = json_body()
        leave = container.leave_service.request_leave(
            employee_id=current_employee_id(),
            leave_type=body.get("type", ""),
            start_date=parse_iso_date(body.get("startDate", "")),
            end_date=parse_iso_date(body.get("endDate", "")),
            reason=body.get("reason"),
        )
        return jsonify(to_json(leave)), 201

    @app.route("/employee/leave-requests", methods=["GET"], endpoint="my_leave_requests")
    @login_required
    def my_leave_requests():
        return jsonify(to_json(container.leave_service.list_my_leave_requests(current_employee_id())))

    @app.route("/manager/team-schedules", methods=["GET"], endpoint="manager_team_schedules")
    @roles_required(Role.MANAGER)
    def manager_team_schedules():
        leaves = container.leave_service.team_leave_requests(current_employee_id())
        return jsonify(to_json(container.report_service.with_employee(leaves)))

    def _decide(leave_id: str):
        approved = approval_flag(json_body())
        leave = container.approval_service.decide_leave_request(
            leave_request_id=require_id(leave_id, "leave request ID"),
            approver_id=current_employee_id(),
            approved=approved,
        )
        verb = "approved" if approved else "rejected"
        return jsonify({"message": f"Leave request {verb} successfully", "leaveRequest": to_json(leave)})

    @app.route("/manager/leaves/<leave_id>/approve", methods=["PUT"], endpoint="manager_decide_leave")
    @roles_required(Role.MANAGER)
    def manager_decide_leave(leave_id: str):
        return _decide(leave_id)

    @app.route("/hr/leaves/<leave_id>/approve", methods=["PUT"], endpoint="hr_decide_leave")
    @roles_required(Role.HR)
    def hr_decide_leave(leave_id: str):
        return _decide(leave_id)
