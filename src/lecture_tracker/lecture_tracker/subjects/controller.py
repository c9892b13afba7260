from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import created, found, json_body, no_content, to_fields
from ..container import Container

SUBJECT_FIELDS = {
    "name": "name",
    "code": "code",
    "teacher": "teacher",
    "color": "color",
}


def register(app: Flask, container: Container) -> None:
    service = container.subject_service

    @app.route("/api/subjects", methods=["GET"], endpoint="list_subjects")
    def list_subjects():
        return jsonify([s.to_json() for s in service.list_subjects()])

    @app.route("/api/subjects", methods=["POST"], endpoint="create_subject")
    def create_subject():
        subject = service.create_subject(to_fields(json_body(), SUBJECT_FIELDS))
        return created(subject.to_json())

    @app.route("/api/subjects/<subject_id>", methods=["GET"], endpoint="get_subject")
    def get_subject(subject_id: str):
        return jsonify(found(service.get_subject(subject_id), "Subject", subject_id).to_json())

    @app.route("/api/subjects/<subject_id>", methods=["PUT", "PATCH"], endpoint="update_subject")
    def update_subject(subject_id: str):
        subject = service.update_subject(subject_id, to_fields(json_body(), SUBJECT_FIELDS))
        return jsonify(subject.to_json())

    @app.route("/api/subjects/<subject_id>", methods=["DELETE"], endpoint="delete_subject")
    def delete_subject(subject_id: str):
        return no_content(service.delete_subject(subject_id), "Subject", subject_id)
