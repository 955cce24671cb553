"""Workforce package.

Feature modules (employees, timesheets, approvals, leaves, payroll, dashboard,
reports) each expose a thin Flask controller over service and repository layers.
"""
