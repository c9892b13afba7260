from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import created, found, json_body, no_content, to_fields
from ..container import Container
from ..core.exceptions import ValidationError
from .generator import parse_date_field

SCHEDULE_FIELDS = {
    "subjectId": "subject_id",
    "weekday": "weekday",
    "startTime": "start_time",
    "endTime": "end_time",
    "title": "title",
}


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    @app.route("/api/weekly-schedules", methods=["GET"], endpoint="list_weekly_schedules")
    def list_weekly_schedules():
        return jsonify(service.list_schedules_joined(request.args.get("subjectId") or None))

    @app.route("/api/weekly-schedules", methods=["POST"], endpoint="create_weekly_schedule")
    def create_weekly_schedule():
        schedule = service.create_schedule(to_fields(json_body(), SCHEDULE_FIELDS))
        return created(schedule.to_json())

    @app.route("/api/weekly-schedules/generate", methods=["POST"], endpoint="generate_lectures")
    def generate_lectures():
        body = json_body()
        start = parse_date_field(body.get("startDate"), "startDate")
        end = parse_date_field(body.get("endDate"), "endDate")
        # The generator treats start > end as an empty range; the route rejects it.
        if start > end:
            raise ValidationError("startDate must not be after endDate")

        lectures = service.generate_lectures(start, end)
        return jsonify({"generated": len(lectures), "lectures": [lecture.to_json() for lecture in lectures]})

    @app.route("/api/weekly-schedules/<schedule_id>", methods=["GET"], endpoint="get_weekly_schedule")
    def get_weekly_schedule(schedule_id: str):
        return jsonify(found(service.get_schedule(schedule_id), "Weekly schedule", schedule_id).to_json())

    @app.route("/api/weekly-schedules/<schedule_id>", methods=["PUT", "PATCH"], endpoint="update_weekly_schedule")
    def update_weekly_schedule(schedule_id: str):
        schedule = service.update_schedule(schedule_id, to_fields(json_body(), SCHEDULE_FIELDS))
        return jsonify(schedule.to_json())

    @app.route("/api/weekly-schedules/<schedule_id>", methods=["DELETE"], endpoint="delete_weekly_schedule")
    def delete_weekly_schedule(schedule_id: str):
        return no_content(service.delete_schedule(schedule_id), "Weekly schedule", schedule_id)
