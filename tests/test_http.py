from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from grassroots.api import ApiState
from grassroots.services.http import app, get_state

USER_ID = "user-1"


@pytest.fixture
def state(context) -> ApiState:
    return ApiState(context=context)


@pytest.fixture
def http(state):
    app.dependency_overrides[get_state] = lambda: state
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_month_endpoint_returns_december_2024_grid(http):
    response = http.get("/calendar/2024/12")

    assert response.status_code == 200
    payload = response.json()
    assert payload["title"] == "December, 2024"
    assert len(payload["cells"]) == 35
    assert payload["cells"][0]["day"] == "2024-12-01"
    assert payload["cells"][-1]["day"] == "2025-01-04"


def test_month_endpoint_rejects_invalid_month(http):
    assert http.get("/calendar/2024/13").status_code == 422


def test_month_endpoint_rejects_years_without_padding_weeks(http):
    assert http.get("/calendar/1/1").status_code == 422
    assert http.get("/calendar/9999/12").status_code == 422
    assert http.get("/calendar/2/1").status_code == 200


def test_add_event_from_form_fields_then_list(http, events_table):
    response = http.post("/events", json={"name": "Fair", "day": "2024-12-21", "duration": "half-day"})

    assert response.status_code == 201
    created = response.json()
    assert created["time"] == "Half Day"
    assert created["datetime"] == "2024-12-21T12:00:00"

    days = http.get("/events").json()
    assert days == [{"day": "2024-12-21", "events": [created]}]


def test_add_event_with_empty_name_is_rejected_without_store_call(http, events_table):
    response = http.post("/events", json={"name": "  ", "day": "2024-12-21"})

    assert response.status_code == 422
    assert events_table.calls == []


def test_add_event_store_failure_maps_to_bad_gateway(http, events_table):
    events_table.failing.add("insert")

    response = http.post("/events", json={"name": "Fair", "datetime": "2024-12-21T10:00:00", "time": "10:00 AM"})

    assert response.status_code == 502


def test_delete_event_and_month_view_reflect_reload(http, events_table):
    row = events_table.seed(user_id=USER_ID, name="Fair", time="All Day", datetime="2024-12-21T12:00:00")
    http.post("/events/reload")

    cells = {cell["day"]: cell for cell in http.get("/calendar/2024/12").json()["cells"]}
    assert [event["name"] for event in cells["2024-12-21"]["events"]] == ["Fair"]

    assert http.delete(f"/events/{row['id']}").status_code == 204

    cells = {cell["day"]: cell for cell in http.get("/calendar/2024/12").json()["cells"]}
    assert cells["2024-12-21"]["events"] == []


def test_cells_cap_visible_events(http, events_table):
    for hour in range(5):
        events_table.seed(user_id=USER_ID, name=f"E{hour}", time="All Day", datetime=f"2024-12-05T{hour:02d}:00:00")
    http.post("/events/reload")

    cells = {cell["day"]: cell for cell in http.get("/calendar/2024/12").json()["cells"]}

    assert len(cells["2024-12-05"]["events"]) == 3
    assert cells["2024-12-05"]["overflow_count"] == 2


def test_navigation_round_trip(http, state):
    start = http.get("/calendar").json()
    http.post("/calendar/next")
    back = http.post("/calendar/previous").json()

    assert (back["year"], back["month"]) == (start["year"], start["month"])


def test_events_require_a_session(http, context):
    context.gateway.clear_session()

    assert http.get("/events").status_code == 401


def test_profile_round_trip(http, profiles_table):
    assert http.get("/profile").json()["color"] == "#3B82F6"

    response = http.put("/profile", json={"first_name": "Ada", "username": "ada", "color": "#EF4444"})

    assert response.status_code == 200
    assert response.json()["color"] == "#EF4444"
    assert http.put("/profile", json={"first_name": "Ada", "username": "ada", "color": "blue"}).status_code == 422
