"""Integration tests for milestone endpoints.

Tests cover:
- POST /api/milestones with valid and unknown stage_id
- completion_date normalisation ("" and missing -> null)
- GET /api/milestones join with stage name/color, ordered by item
- PUT /api/milestones/{id} full replace, item immutable
- DELETE /api/milestones/{id}, including unknown ids
"""

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


def test_create_milestone_returns_id_and_success(api_client: TestClient):
    response = api_client.post(
        "/api/milestones",
        json={
            "item": 1,
            "stage_id": 2,
            "start_date": "2024-03-01",
            "location": "Warehouse",
            "completion_date": "2024-04-15",
            "comments": "first delivery",
            "illustration": "http://testserver/uploads/1.png",
        },
    )

    assert response.status_code == 201
    assert response.json() == {"id": 1, "success": True}


def test_created_milestone_listed_with_stage_name_and_color(api_client: TestClient, make_milestone):
    milestone_id = make_milestone(stage_id=2, completion_date="2024-04-15")

    milestones = api_client.get("/api/milestones").json()

    assert milestones == [
        {
            "id": milestone_id,
            "item": 1,
            "stage_id": 2,
            "start_date": "2024-03-01",
            "location": "Site A",
            "completion_date": "2024-04-15",
            "comments": "kick-off",
            "illustration": None,
            "stage": "Execution",
            "stage_color": "#059669",
        }
    ]


def test_create_milestone_with_unknown_stage_fails(api_client: TestClient):
    response = api_client.post(
        "/api/milestones",
        json={"item": 1, "stage_id": 999, "start_date": "2024-03-01", "location": "Nowhere"},
    )

    assert response.status_code == 500
    assert response.json()["error"] == "Error creating milestone"
    assert api_client.get("/api/milestones").json() == []


@pytest.mark.parametrize("completion_date", ["", None])
def test_falsy_completion_date_stored_as_null(api_client: TestClient, make_milestone, completion_date):
    make_milestone(completion_date=completion_date)

    assert api_client.get("/api/milestones").json()[0]["completion_date"] is None


def test_optional_fields_may_be_omitted(api_client: TestClient):
    response = api_client.post(
        "/api/milestones",
        json={"item": 7, "stage_id": 1, "start_date": "2024-05-01", "location": "HQ"},
    )

    assert response.status_code == 201
    listed = api_client.get("/api/milestones").json()[0]
    assert listed["completion_date"] is None
    assert listed["comments"] is None
    assert listed["illustration"] is None


def test_list_milestones_ordered_by_item(api_client: TestClient, make_milestone):
    make_milestone(item=3, location="third")
    make_milestone(item=1, location="first")
    make_milestone(item=2, location="second")

    locations = [m["location"] for m in api_client.get("/api/milestones").json()]

    assert locations == ["first", "second", "third"]


def test_duplicate_items_are_allowed(api_client: TestClient, make_milestone):
    first = make_milestone(item=1, location="a")
    second = make_milestone(item=1, location="b")

    ids = [m["id"] for m in api_client.get("/api/milestones").json()]

    assert ids == [first, second]


def test_update_milestone_replaces_fields(api_client: TestClient, make_milestone):
    milestone_id = make_milestone(item=4, stage_id=1, comments="kick-off")

    response = api_client.put(
        f"/api/milestones/{milestone_id}",
        json={
            "stage_id": 1,
            "start_date": "2024-03-01",
            "location": "Site B",
            "completion_date": "2024-06-30",
            "comments": "kick-off",
            "illustration": None,
        },
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    updated = api_client.get("/api/milestones").json()[0]
    assert updated["location"] == "Site B"
    assert updated["completion_date"] == "2024-06-30"
    assert updated["item"] == 4
    assert updated["stage_id"] == 1
    assert updated["start_date"] == "2024-03-01"
    assert updated["comments"] == "kick-off"


def test_update_is_full_replace_not_patch(api_client: TestClient, make_milestone):
    milestone_id = make_milestone(comments="keep me?", illustration="http://x/uploads/a.png")

    api_client.put(
        f"/api/milestones/{milestone_id}",
        json={"stage_id": 3, "start_date": "2024-03-02", "location": "Site A"},
    )

    updated = api_client.get("/api/milestones").json()[0]
    assert updated["comments"] is None
    assert updated["illustration"] is None
    assert updated["stage"] == "Finished"
    assert updated["stage_color"] == "#b91c1c"


def test_update_ignores_item(api_client: TestClient, make_milestone):
    milestone_id = make_milestone(item=2)

    api_client.put(
        f"/api/milestones/{milestone_id}",
        json={"item": 99, "stage_id": 1, "start_date": "2024-03-01", "location": "Site A"},
    )

    assert api_client.get("/api/milestones").json()[0]["item"] == 2


def test_update_empty_completion_date_clears_it(api_client: TestClient, make_milestone):
    milestone_id = make_milestone(completion_date="2024-04-01")

    api_client.put(
        f"/api/milestones/{milestone_id}",
        json={"stage_id": 1, "start_date": "2024-03-01", "location": "Site A", "completion_date": ""},
    )

    assert api_client.get("/api/milestones").json()[0]["completion_date"] is None


def test_update_unknown_milestone_succeeds_silently(api_client: TestClient):
    response = api_client.put(
        "/api/milestones/404",
        json={"stage_id": 1, "start_date": "2024-03-01", "location": "Site A"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert api_client.get("/api/milestones").json() == []


def test_update_to_unknown_stage_fails(api_client: TestClient, make_milestone):
    milestone_id = make_milestone(stage_id=1)

    response = api_client.put(
        f"/api/milestones/{milestone_id}",
        json={"stage_id": 999, "start_date": "2024-03-01", "location": "Site A"},
    )

    assert response.status_code == 500
    assert api_client.get("/api/milestones").json()[0]["stage_id"] == 1


def test_delete_milestone(api_client: TestClient, make_milestone):
    keep = make_milestone(item=1)
    drop = make_milestone(item=2)

    response = api_client.delete(f"/api/milestones/{drop}")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert [m["id"] for m in api_client.get("/api/milestones").json()] == [keep]


def test_delete_milestone_keeps_its_stage(api_client: TestClient, make_milestone):
    milestone_id = make_milestone(stage_id=3)

    api_client.delete(f"/api/milestones/{milestone_id}")

    assert 3 in [s["id"] for s in api_client.get("/api/stages").json()]


def test_delete_unknown_milestone_succeeds_silently(api_client: TestClient):
    response = api_client.delete("/api/milestones/12345")

    assert response.status_code == 200
    assert response.json() == {"success": True}


def test_create_milestone_missing_required_field(api_client: TestClient):
    response = api_client.post(
        "/api/milestones",
        json={"item": 1, "stage_id": 1, "location": "Site A"},
    )

    assert response.status_code == 422
