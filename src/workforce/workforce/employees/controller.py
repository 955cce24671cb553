from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.http import (
    current_employee_id,
    current_role,
    json_body,
    login_required,
    roles_required,
    to_json,
)
from ..common.validators import require_id
from ..container import Container
from ..core.enums import Role


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        principal = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))

        session.clear()
        session["employee_id"] = principal.employee_id
        session["name"] = principal.name
        session["role"] = principal.role.value
        return jsonify({"user": to_json(principal)})

    @app.route("/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"message": "Logged out"})

    @app.route("/auth/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        return jsonify(to_json(container.auth_service.get_principal(current_employee_id())))

    def _create_employee():
        body = json_body()
        employee = container.employee_service.create_employee(
            current_role=current_role(),
            current_employee_id=current_employee_id(),
            name=body.get("name", ""),
            email=body.get("email", ""),
            password=body.get("password", ""),
            role=body.get("role", Role.EMPLOYEE.value),
            hourly_wage=body.get("hourlyWage", 0),
        )
        return jsonify(to_json(employee)), 201

    @app.route("/hr/employees", methods=["POST"], endpoint="hr_create_employee")
    @roles_required(Role.HR)
    def hr_create_employee():
        return _create_employee()

    @app.route("/manager/employees", methods=["POST"], endpoint="manager_create_employee")
    @roles_required(Role.MANAGER)
    def manager_create_employee():
        return _create_employee()

    @app.route("/hr/employees", methods=["GET"], endpoint="hr_list_employees")
    @roles_required(Role.HR)
    def hr_list_employees():
        return jsonify(to_json(container.employee_service.list_employees()))

    @app.route("/hr/employees/<int:employee_id>", methods=["PUT"], endpoint="hr_update_employee")
    @roles_required(Role.HR)
    def hr_update_employee(employee_id: int):
        body = json_body()
        employee = container.employee_service.update_employee(
            current_role=current_role(),
            employee_id=employee_id,
            name=body.get("name"),
            email=body.get("email"),
            hourly_wage=body.get("hourlyWage"),
            password=body.get("password"),
        )
        return jsonify(to_json(employee))

    @app.route("/manager/team", methods=["GET"], endpoint="manager_team")
    @roles_required(Role.MANAGER)
    def manager_team():
        return jsonify(to_json(container.team_service.list_team(current_employee_id())))

    @app.route("/manager/available-employees", methods=["GET"], endpoint="manager_available_employees")
    @roles_required(Role.MANAGER)
    def manager_available_employees():
        return jsonify(to_json(container.team_service.list_available_employees(current_employee_id())))

    @app.route("/manager/team/<employee_id>/add", methods=["PUT"], endpoint="manager_team_add")
    @roles_required(Role.MANAGER)
    def manager_team_add(employee_id: str):
        employee = container.team_service.add_to_team(
            manager_id=current_employee_id(),
            employee_id=require_id(employee_id, "employee ID"),
        )
        return jsonify({"message": "Employee added to team successfully", "employee": to_json(employee)})

    @app.route("/manager/team/<employee_id>/remove", methods=["PUT"], endpoint="manager_team_remove")
    @roles_required(Role.MANAGER)
    def manager_team_remove(employee_id: str):
        employee = container.team_service.remove_from_team(
            manager_id=current_employee_id(),
            employee_id=require_id(employee_id, "employee ID"),
        )
        return jsonify({"message": "Employee removed from team successfully", "employee": to_json(employee)})
