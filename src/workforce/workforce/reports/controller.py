from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import roles_required, to_json
from ..common.validators import require_id
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/hr/stats", methods=["GET"], endpoint="hr_stats")
    @roles_required(Role.HR)
    def hr_stats():
        return jsonify(to_json(container.dashboard_service.get_stats()))

    @app.route("/hr/pending-requests", methods=["GET"], endpoint="hr_pending_requests")
    @roles_required(Role.HR)
    def hr_pending_requests():
        return jsonify(to_json(container.report_service.pending_requests()))

    @app.route("/hr/reports/attendance", methods=["GET"], endpoint="hr_attendance_report")
    @roles_required(Role.HR)
    def hr_attendance_report():
        employee_id = require_id(request.args.get("employeeId"), "employee ID")
        return jsonify(to_json(container.report_service.attendance_report(employee_id)))

    @app.route("/hr/reports/leaves", methods=["GET"], endpoint="hr_leaves_report")
    @roles_required(Role.HR)
    def hr_leaves_report():
        return jsonify(to_json(container.report_service.leaves_report()))
