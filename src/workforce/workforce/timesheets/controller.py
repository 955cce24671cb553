from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_employee_id, json_body, login_required, roles_required, to_json
from ..common.validators import require_id
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def approval_flag(body: dict) -> bool:
    approved = body.get("approved")
    if not isinstance(approved, bool):
        raise ValidationError("'approved' must be true or false")
    return approved


def register(app: Flask, container: Container) -> None:
    @app.route("/employee/clock-in", methods=["POST"], endpoint="clock_in")
    @login_required
    def clock_in():
        # The body is optional here; when present it must be an object.
        body = json_body() if request.get_data() else {}
        work_date = parse_iso_date(body["date"]) if body.get("date") is not None else None
        entry = container.time_entry_service.clock_in(
            current_employee_id(),
            work_date=work_date,
            location=body.get("location"),
        )
        return jsonify(to_json(entry)), 201

    @app.route("/employee/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out():
        entry = container.time_entry_service.clock_out(current_employee_id())
        return jsonify(to_json(entry))

    @app.route("/employee/timesheets", methods=["GET"], endpoint="my_timesheets")
    @login_required
    def my_timesheets():
        return jsonify(to_json(container.time_entry_service.list_time_entries(current_employee_id())))

    @app.route("/manager/team-timesheets", methods=["GET"], endpoint="manager_team_timesheets")
    @roles_required(Role.MANAGER)
    def manager_team_timesheets():
        entries = container.time_entry_service.team_timesheets(current_employee_id())
        return jsonify(to_json(container.report_service.with_employee(entries)))

    def _decide(timesheet_id: str):
        approved = approval_flag(json_body())
        entry = container.approval_service.decide_timesheet(
            timesheet_id=require_id(timesheet_id, "timesheet ID"),
            approver_id=current_employee_id(),
            approved=approved,
        )
        verb = "approved" if approved else "rejected"
        return jsonify({"message": f"Timesheet {verb} successfully", "timesheet": to_json(entry)})

    @app.route("/manager/timesheets/<timesheet_id>/approve", methods=["PUT"], endpoint="manager_decide_timesheet")
    @roles_required(Role.MANAGER)
    def manager_decide_timesheet(timesheet_id: str):
        return _decide(timesheet_id)

    @app.route("/hr/timesheets/<timesheet_id>/approve", methods=["PUT"], endpoint="hr_decide_timesheet")
    @roles_required(Role.HR)
    def hr_decide_timesheet(timesheet_id: str):
        return _decide(timesheet_id)
