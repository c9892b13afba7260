from __future__ import annotations

import json
from typing import Iterator

from flask import Flask, Response, stream_with_context

from ..container import Container


def _sse(payload: dict) -> str:
    return f"data: {json.dumps(payload)}\n\n"


def register(app: Flask, container: Container) -> None:
    notifier = container.notifier

    @app.route("/api/events", methods=["GET"], endpoint="events")
    def events():
        heartbeat = float(app.config.get("EVENT_HEARTBEAT_SECONDS", 15.0))
        sub = notifier.subscribe()

        def generate() -> Iterator[str]:
            try:
                yield _sse({"type": "connected"})
                for change in notifier.stream(sub, heartbeat_seconds=heartbeat):
                    if change is None:
                        yield ": keep-alive\n\n"
                    else:
                        yield _sse({"type": change.value})
            finally:
                sub.close()

        return Response(
            stream_with_context(generate()),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )
