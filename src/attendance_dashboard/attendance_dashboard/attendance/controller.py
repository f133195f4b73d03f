from __future__ import annotations

import io
from datetime import date

from flask import Flask, jsonify, request, send_file

from ..common.http import api_view, form_or_json
from ..container import Container

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
ATTENDANCE_PAGE = "/attendance"


def _xlsx(content: bytes, filename: str):
    return send_file(io.BytesIO(content), mimetype=XLSX_MIMETYPE, as_attachment=True, download_name=filename)


def register(app: Flask, container: Container) -> None:
    guard = api_view(container.page_access, ATTENDANCE_PAGE)

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    @guard
    def api_attendance_list(viewer):
        data = container.attendance_service.get_attendances(viewer=viewer, date_str=request.args.get("date"))
        return jsonify({"success": True, "data": data})

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_upsert")
    @guard
    def api_attendance_upsert(viewer):
        return jsonify(container.attendance_service.upsert_attendance(viewer=viewer, form=form_or_json()))

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="api_attendance_delete")
    @guard
    def api_attendance_delete(viewer, attendance_id: int):
        return jsonify(container.attendance_service.delete_attendance(viewer=viewer, attendance_id=attendance_id))

    @app.route("/api/attendance/monthly", methods=["GET"], endpoint="api_attendance_monthly")
    @guard
    def api_attendance_monthly(viewer):
        data = container.attendance_service.get_monthly_attendance(
            viewer=viewer,
            user_id=request.args.get("userId"),
            month=request.args.get("month"),
            year=request.args.get("year"),
        )
        return jsonify({"success": True, "data": data})

    @app.route("/api/attendance/template", methods=["GET"], endpoint="api_attendance_template")
    @guard
    def api_attendance_template(viewer):
        content = container.spreadsheet_service.build_template(viewer=viewer)
        return _xlsx(content, "Template_Import_Absensi.xlsx")

    @app.route("/api/attendance/import", methods=["POST"], endpoint="api_attendance_import")
    @guard
    def api_attendance_import(viewer):
        file = request.files.get("file")
        count = container.spreadsheet_service.import_raw(viewer=viewer, stream=file.stream if file else None)
        return jsonify({"success": True, "count": count})

    @app.route("/api/attendance/export", methods=["GET"], endpoint="api_attendance_export")
    @guard
    def api_attendance_export(viewer):
        month = request.args.get("month")
        year = request.args.get("year")
        content = container.spreadsheet_service.export_raw(viewer=viewer, month=month, year=year)
        suffix = f"{month}_{year}" if month and year else date.today().isoformat()
        return _xlsx(content, f"Attendance_{suffix}.xlsx")
