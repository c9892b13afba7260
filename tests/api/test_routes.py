from __future__ import annotations

import json


def _create_subject(client, **extra):
    body = {"name": "Math", "code": "MTH101"}
    body.update(extra)
    resp = client.post("/api/subjects", json=body)
    assert resp.status_code == 201
    return resp.get_json()


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json() == {"status": "ok"}


def test_subject_crud(client):
    created = _create_subject(client, teacher="Dr. Lee")
    subject_id = created["id"]

    assert client.get(f"/api/subjects/{subject_id}").get_json()["teacher"] == "Dr. Lee"

    resp = client.put(f"/api/subjects/{subject_id}", json={"name": "Mathematics"})
    assert resp.status_code == 200
    assert resp.get_json()["code"] == "MTH101"
    assert resp.get_json()["teacher"] == "Dr. Lee"

    assert client.delete(f"/api/subjects/{subject_id}").status_code == 204
    assert client.get(f"/api/subjects/{subject_id}").status_code == 404
    assert client.delete(f"/api/subjects/{subject_id}").status_code == 404


def test_duplicate_code_is_409(client):
    _create_subject(client)

    resp = client.post("/api/subjects", json={"name": "Other", "code": "mth101"})

    assert resp.status_code == 409
    assert "already exists" in resp.get_json()["error"]


def test_validation_errors_are_400(client):
    assert client.post("/api/subjects", json={"name": "Math"}).status_code == 400
    assert client.post("/api/subjects", data="not json", content_type="text/plain").status_code == 400


def test_update_missing_record_is_404(client):
    resp = client.put("/api/tasks/missing", json={"title": "X"})

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Task not found"}


def test_lecture_routes_use_camel_case(client):
    subject = _create_subject(client, color="#abcdef")
    resp = client.post(
        "/api/lectures",
        json={
            "subjectId": subject["id"],
            "title": "Limits",
            "date": "2024-01-01",
            "startTime": "09:00",
            "endTime": "10:00",
            "status": "present",
        },
    )
    assert resp.status_code == 201
    lecture = resp.get_json()
    assert lecture["startTime"] == "09:00"
    assert lecture["status"] == "present"

    resp = client.put(f"/api/lectures/{lecture['id']}/attendance", json={"status": "absent", "attendanceNote": "sick"})
    assert resp.get_json()["status"] == "absent"
    assert resp.get_json()["attendanceNote"] == "sick"

    [row] = client.get(f"/api/lectures?subjectId={subject['id']}").get_json()
    assert row["subjectColor"] == "#abcdef"


def test_generate_route(client):
    subject = _create_subject(client)
    client.post(
        "/api/weekly-schedules",
        json={"subjectId": subject["id"], "weekday": 1, "startTime": "09:00", "endTime": "10:00", "title": "Math"},
    )

    resp = client.post("/api/weekly-schedules/generate", json={"startDate": "2024-01-01", "endDate": "2024-01-14"})
    assert resp.status_code == 200
    assert resp.get_json()["generated"] == 2

    again = client.post("/api/weekly-schedules/generate", json={"startDate": "2024-01-01", "endDate": "2024-01-14"})
    assert again.get_json() == {"generated": 0, "lectures": []}


def test_generate_rejects_reversed_range(client):
    resp = client.post("/api/weekly-schedules/generate", json={"startDate": "2024-01-14", "endDate": "2024-01-01"})

    assert resp.status_code == 400


def test_generate_range_ending_on_last_representable_day(client):
    subject = _create_subject(client)
    client.post(
        "/api/weekly-schedules",
        json={"subjectId": subject["id"], "weekday": 5, "startTime": "09:00", "endTime": "10:00", "title": "Math"},
    )

    resp = client.post("/api/weekly-schedules/generate", json={"startDate": "9999-12-30", "endDate": "9999-12-31"})

    assert resp.status_code == 200
    assert [row["date"] for row in resp.get_json()["lectures"]] == ["9999-12-31"]


def test_delete_subject_keeps_tasks(client):
    subject = _create_subject(client)
    task = client.post("/api/tasks", json={"title": "Read", "date": "2024-01-01", "subjectId": subject["id"]}).get_json()

    client.delete(f"/api/subjects/{subject['id']}")

    assert client.get(f"/api/tasks/{task['id']}").get_json()["subjectId"] is None


def test_statistics_routes(client):
    subject = _create_subject(client)
    client.post(
        "/api/lectures",
        json={
            "subjectId": subject["id"],
            "title": "L",
            "date": "2024-01-01",
            "startTime": "09:00",
            "endTime": "10:00",
            "status": "late",
        },
    )

    stats = client.get("/api/statistics").get_json()
    assert stats["totalLectures"] == 1
    assert stats["attendancePercentage"] == 100.0

    [summary] = client.get("/api/statistics/subjects").get_json()
    assert summary["atRisk"] is False

    assert len(client.get("/api/statistics/trend?weeks=3").get_json()) == 3
    assert client.get("/api/statistics/trend?weeks=abc").status_code == 400


def test_event_stream_reports_changes(app, client):
    resp = client.get("/api/events")
    assert resp.mimetype == "text/event-stream"
    chunks = iter(resp.response)

    assert json.loads(next(chunks).decode().removeprefix("data: ")) == {"type": "connected"}

    _create_subject(client)

    for _ in range(50):
        chunk = next(chunks).decode()
        if chunk.startswith("data: "):
            break
    assert json.loads(chunk.removeprefix("data: ")) == {"type": "subjects"}
    resp.close()


def test_trend_rejects_out_of_range_weeks(client):
    assert client.get("/api/statistics/trend?weeks=1000000").status_code == 400
    assert client.get("/api/statistics/trend?weeks=0").status_code == 400
    assert client.get("/api/statistics/trend?weeks=520").status_code == 200
