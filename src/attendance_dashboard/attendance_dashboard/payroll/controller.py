from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import api_view
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reports = container.report_service

    @app.route("/api/payroll/summary", methods=["GET"], endpoint="api_payroll_summary")
    @api_view(container.page_access, "/hrd-dashboard")
    def api_payroll_summary(viewer):
        return jsonify(
            reports.get_payroll_period_attendance_summary(
                viewer=viewer,
                reference_day=request.args.get("day"),
                month=request.args.get("month"),
                year=request.args.get("year"),
            )
        )

    @app.route("/api/payroll/my-summary", methods=["GET"], endpoint="api_payroll_my_summary")
    @api_view(container.page_access, "/dashboard")
    def api_payroll_my_summary(viewer):
        return jsonify(
            reports.get_my_payroll_period_attendance_summary(
                viewer=viewer,
                reference_day=request.args.get("day"),
                month=request.args.get("month"),
                year=request.args.get("year"),
            )
        )

    @app.route("/api/attendance/report", methods=["GET"], endpoint="api_attendance_report")
    @api_view(container.page_access, "/attendance")
    def api_attendance_report(viewer):
        data = reports.get_admin_monthly_attendance_report(
            viewer=viewer,
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return jsonify({"success": True, "data": data})
