from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.constants import DEFAULT_TREND_WEEKS
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.statistics_service

    @app.route("/api/statistics", methods=["GET"], endpoint="statistics")
    def statistics():
        return jsonify(service.get_statistics().to_json())

    @app.route("/api/statistics/subjects", methods=["GET"], endpoint="statistics_subjects")
    def statistics_subjects():
        return jsonify([s.to_json() for s in service.subject_summaries()])

    @app.route("/api/statistics/trend", methods=["GET"], endpoint="statistics_trend")
    def statistics_trend():
        weeks_s = request.args.get("weeks") or str(DEFAULT_TREND_WEEKS)
        if not weeks_s.isdigit():
            raise ValidationError("weeks must be a positive integer")
        return jsonify([p.to_json() for p in service.weekly_trend(int(weeks_s))])
