from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import created, found, json_body, no_content, to_fields
from ..container import Container

LECTURE_FIELDS = {
    "subjectId": "subject_id",
    "title": "title",
    "date": "date",
    "startTime": "start_time",
    "endTime": "end_time",
    "notes": "notes",
    "status": "status",
    "attendanceNote": "attendance_note",
    "scheduleId": "schedule_id",
}


def register(app: Flask, container: Container) -> None:
    service = container.lecture_service

    @app.route("/api/lectures", methods=["GET"], endpoint="list_lectures")
    def list_lectures():
        return jsonify(service.list_lectures_joined(request.args.get("subjectId") or None))

    @app.route("/api/lectures", methods=["POST"], endpoint="create_lecture")
    def create_lecture():
        lecture = service.create_lecture(to_fields(json_body(), LECTURE_FIELDS))
        return created(lecture.to_json())

    @app.route("/api/lectures/<lecture_id>", methods=["GET"], endpoint="get_lecture")
    def get_lecture(lecture_id: str):
        return jsonify(found(service.get_lecture(lecture_id), "Lecture", lecture_id).to_json())

    @app.route("/api/lectures/<lecture_id>", methods=["PUT", "PATCH"], endpoint="update_lecture")
    def update_lecture(lecture_id: str):
        lecture = service.update_lecture(lecture_id, to_fields(json_body(), LECTURE_FIELDS))
        return jsonify(lecture.to_json())

    @app.route("/api/lectures/<lecture_id>/attendance", methods=["PUT", "POST"], endpoint="mark_attendance")
    def mark_attendance(lecture_id: str):
        body = json_body()
        lecture = service.mark_attendance(lecture_id, body.get("status"), body.get("attendanceNote"))
        return jsonify(lecture.to_json())

    @app.route("/api/lectures/<lecture_id>", methods=["DELETE"], endpoint="delete_lecture")
    def delete_lecture(lecture_id: str):
        return no_content(service.delete_lecture(lecture_id), "Lecture", lecture_id)
