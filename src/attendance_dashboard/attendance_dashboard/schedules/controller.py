from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import api_view, form_or_json
from ..container import Container

SETTINGS_PAGE = "/hr-settings"


def _flag(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "on"}


def register(app: Flask, container: Container) -> None:
    guard = api_view(container.page_access, SETTINGS_PAGE)
    schedules = container.schedule_service

    @app.route("/api/schedules/weekly", methods=["GET"], endpoint="api_schedules_weekly")
    @guard
    def api_schedules_weekly(viewer):
        return jsonify({"success": True, "data": [s.to_dict() for s in schedules.get_work_schedules()]})

    @app.route("/api/schedules/weekly", methods=["POST"], endpoint="api_schedules_weekly_update")
    @guard
    def api_schedules_weekly_update(viewer):
        payload = form_or_json()
        schedules.update_work_schedule(
            current_role=viewer.role,
            day_of_week=payload.get("dayOfWeek"),
            start_time=payload.get("startTime"),
            end_time=payload.get("endTime"),
            is_work_day=_flag(payload.get("isWorkDay")),
        )
        return jsonify({"success": True})

    @app.route("/api/schedules/custom", methods=["GET"], endpoint="api_schedules_custom")
    @guard
    def api_schedules_custom(viewer):
        return jsonify({"success": True, "data": [c.to_dict() for c in schedules.list_custom_schedules()]})

    @app.route("/api/schedules/custom", methods=["POST"], endpoint="api_schedules_custom_create")
    @guard
    def api_schedules_custom_create(viewer):
        payload = form_or_json()
        custom_id = schedules.create_custom_schedule(
            current_role=viewer.role,
            start_date=payload.get("startDate", ""),
            end_date=payload.get("endDate", ""),
            start_time=payload.get("startTime", ""),
            end_time=payload.get("endTime", ""),
            reason=payload.get("reason", ""),
        )
        return jsonify({"success": True, "id": custom_id}), 201

    @app.route("/api/schedules/custom/<int:custom_id>", methods=["PUT"], endpoint="api_schedules_custom_update")
    @guard
    def api_schedules_custom_update(viewer, custom_id: int):
        payload = form_or_json()
        schedules.update_custom_schedule(
            current_role=viewer.role,
            custom_schedule_id=custom_id,
            start_date=payload.get("startDate", ""),
            end_date=payload.get("endDate", ""),
            start_time=payload.get("startTime", ""),
            end_time=payload.get("endTime", ""),
            reason=payload.get("reason", ""),
        )
        return jsonify({"success": True})

    @app.route("/api/schedules/custom/<int:custom_id>", methods=["DELETE"], endpoint="api_schedules_custom_delete")
    @guard
    def api_schedules_custom_delete(viewer, custom_id: int):
        schedules.delete_custom_schedule(current_role=viewer.role, custom_schedule_id=custom_id)
        return jsonify({"success": True})
