import pytest

import antiques_trail.web_server as ws
from antiques_trail.helpers.storage import StorageError


class FakeService:
    def __init__(self, fail=False):
        self.fail = fail
        self.saved = None
        self.deleted = None

    def get_hours_summary(self, place_id):
        if self.fail:
            raise RuntimeError("db down")
        return {
            "raw": [],
            "formatted": [{"dayText": "Monday to Friday", "hours": "9:00 - 17:00"}],
            "status": {"isOpen": False, "closingSoon": False, "byAppointment": False},
            "source": "structured",
        }

    def save_hours(self, place_id, hours):
        if self.fail:
            raise StorageError("insert failed")
        self.saved = (place_id, hours)

    def delete_hours(self, place_id):
        self.deleted = place_id


@pytest.fixture
def service(monkeypatch):
    fake = FakeService()
    monkeypatch.setattr(ws, "get_service", lambda: fake)
    return fake


@pytest.fixture
def client():
    ws.app.config["TESTING"] = True
    return ws.app.test_client()


def test_get_requires_place_id(client, service):
    resp = client.get("/api/opening-hours")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Place ID is required"


def test_get_returns_summary(client, service):
    resp = client.get("/api/opening-hours?place_id=3")
    assert resp.status_code == 200
    assert resp.get_json()["formatted"][0]["dayText"] == "Monday to Friday"


def test_get_storage_failure_is_500(client, monkeypatch):
    monkeypatch.setattr(ws, "get_service", lambda: FakeService(fail=True))
    resp = client.get("/api/opening-hours?placeId=3")
    assert resp.status_code == 500


def test_post_normalizes_times_and_clears_closed_days(client, service):
    body = {
        "placeId": 4,
        "hours": [
            {"day_of_week": 1, "open_time": "9", "close_time": "17:30"},
            {"day_of_week": 0, "open_time": "10:00", "close_time": "16:00", "is_closed": True},
        ],
    }
    resp = client.post("/api/opening-hours", json=body)
    assert resp.status_code == 200
    place_id, hours = service.saved
    assert place_id == 4
    assert (hours[0].open_time, hours[0].close_time) == ("09:00", "17:30")
    assert hours[1].is_closed is True
    assert hours[1].open_time is None


@pytest.mark.parametrize("entry", [
    {"day_of_week": 1, "open_time": "9am", "close_time": "17:00"},
    {"day_of_week": 1, "open_time": "25:00", "close_time": "17:00"},
    {"day_of_week": 7, "open_time": "09:00", "close_time": "17:00"},
    {"open_time": "09:00", "close_time": "17:00"},
    {"day_of_week": 0, "is_closed": True, "is_by_appointment": True},
])
def test_post_rejects_invalid_entries(client, service, entry):
    resp = client.post("/api/opening-hours", json={"placeId": 4, "hours": [entry]})
    assert resp.status_code == 400
    assert service.saved is None


def test_post_rejects_duplicate_days(client, service):
    hours = [
        {"day_of_week": 1, "open_time": "09:00", "close_time": "17:00"},
        {"day_of_week": 1, "is_closed": True},
    ]
    resp = client.post("/api/opening-hours", json={"placeId": 4, "hours": hours})
    assert resp.status_code == 400
    assert "day_of_week 1" in resp.get_json()["error"]
    assert service.saved is None


@pytest.mark.parametrize("path", ["/api/opening-hours", "/api/opening-hours/parse"])
@pytest.mark.parametrize("body", [[{"placeId": 4}], "Mon: 9-5", 42])
def test_post_rejects_non_object_bodies(client, service, path, body):
    resp = client.post(path, json=body)
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "Request body must be a JSON object"
    assert service.saved is None


def test_post_requires_place_and_hours(client, service):
    assert client.post("/api/opening-hours", json={"hours": []}).status_code == 400
    assert client.post("/api/opening-hours", json={"placeId": 1}).status_code == 400


def test_post_storage_failure_is_500(client, monkeypatch):
    monkeypatch.setattr(ws, "get_service", lambda: FakeService(fail=True))
    resp = client.post("/api/opening-hours", json={"placeId": 4, "hours": []})
    assert resp.status_code == 500


def test_delete(client, service):
    assert client.delete("/api/opening-hours").status_code == 400
    assert client.delete("/api/opening-hours?placeId=8").status_code == 200
    assert service.deleted == 8


def test_parse_preview(client):
    resp = client.post("/api/opening-hours/parse", json={"text": "Mon-Fri: 9am-5pm, Sat 10-4"})
    data = resp.get_json()
    assert resp.status_code == 200
    assert len(data["hours"]) == 7
    assert data["hours"][1]["open_time"] == "09:00"
    assert data["skipped"] == [{"segment": "Sat 10-4", "reason": "no day prefix"}]
