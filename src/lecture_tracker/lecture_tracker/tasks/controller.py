from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import created, found, json_body, no_content, to_fields
from ..container import Container

TASK_FIELDS = {
    "title": "title",
    "description": "description",
    "date": "date",
    "time": "time",
    "priority": "priority",
    "completed": "completed",
    "subjectId": "subject_id",
}


def register(app: Flask, container: Container) -> None:
    service = container.task_service

    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    def list_tasks():
        return jsonify(service.list_tasks_joined(request.args.get("date") or None))

    @app.route("/api/tasks", methods=["POST"], endpoint="create_task")
    def create_task():
        task = service.create_task(to_fields(json_body(), TASK_FIELDS))
        return created(task.to_json())

    @app.route("/api/tasks/<task_id>", methods=["GET"], endpoint="get_task")
    def get_task(task_id: str):
        return jsonify(found(service.get_task(task_id), "Task", task_id).to_json())

    @app.route("/api/tasks/<task_id>", methods=["PUT", "PATCH"], endpoint="update_task")
    def update_task(task_id: str):
        task = service.update_task(task_id, to_fields(json_body(), TASK_FIELDS))
        return jsonify(task.to_json())

    @app.route("/api/tasks/<task_id>", methods=["DELETE"], endpoint="delete_task")
    def delete_task(task_id: str):
        return no_content(service.delete_task(task_id), "Task", task_id)
