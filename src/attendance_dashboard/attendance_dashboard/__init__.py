"""Attendance dashboard package.

Feature modules (users, attendance, schedules, payroll) each carry a thin
Flask controller over service and repository layers. ``main.create_app`` wires
them together.
"""
