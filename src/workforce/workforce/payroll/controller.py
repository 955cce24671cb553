from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_body, roles_required, to_json
from ..common.validators import require_id
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/hr/payroll", methods=["POST"], endpoint="hr_process_payroll")
    @roles_required(Role.HR)
    def hr_process_payroll():
        body = json_body()
        record = container.payroll_service.process_payroll(
            employee_id=require_id(body.get("employeeId"), "employee ID"),
            period=str(body.get("period") or ""),
        )
        return jsonify({"message": "Payroll processed successfully", "payroll": to_json(record)}), 201

    @app.route("/hr/payrolls", methods=["GET"], endpoint="hr_list_payrolls")
    @roles_required(Role.HR)
    def hr_list_payrolls():
        return jsonify(to_json(container.report_service.payroll_list()))

    @app.route("/hr/reports/payroll", methods=["GET"], endpoint="hr_payroll_report")
    @roles_required(Role.HR)
    def hr_payroll_report():
        period = request.args.get("period")
        if not period:
            raise ValidationError("Period is required")
        return jsonify(to_json(container.report_service.payroll_report(period)))
