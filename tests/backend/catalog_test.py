from __future__ import annotations

import uuid
from http import HTTPStatus

import pytest
from sqlalchemy import func, select
from werkzeug.test import Client

from athenai import database as db
from athenai.models import Equipment

TREADMILL = {"name": "Treadmill", "category": "cardio"}
CHEST = {"name": "Chest", "body_part": "upper_body"}
SQUAT = {
    "name": "Squat",
    "synonyms": ["Back Squat", " "],
    "difficulty_level": "intermediate",
    "exercise_type": "strength",
    "instructions": "Bend the knees.",
}
FULL_BODY = {
    "name": "Full Body",
    "difficulty_level": "beginner",
    "estimated_duration_minutes": 45,
    "target_audience": "general_fitness",
}


def create(client: Client, route: str, data: dict[str, object]) -> str:
    resp = client.post(f"/api/v1/{route}", json=data)
    assert resp.status_code == HTTPStatus.CREATED, resp.json
    assert resp.json
    return str(resp.json["data"]["id"])


def test_create_equipment(client: Client) -> None:
    resp = client.post("/api/v1/equipment", json=TREADMILL)

    assert resp.status_code == HTTPStatus.CREATED
    assert resp.json
    assert resp.json["status"] == "success"
    assert resp.json["message"] == "Equipment created successfully"
    assert uuid.UUID(resp.json["data"]["id"])

    resp = client.post("/api/v1/equipment", json=TREADMILL)

    assert resp.status_code == HTTPStatus.CONFLICT
    assert resp.json
    assert resp.json["message"] == "equipment already exists"

    assert (
        db.session.execute(select(func.count()).select_from(Equipment)).scalar_one() == 1
    )


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"category": "cardio"}, "'name' is required"),
        ({"name": "  ", "category": "cardio"}, "'name' must not be empty"),
        ({"name": 42, "category": "cardio"}, "'name' must be a string"),
        (
            {"name": "Rower", "category": "rowing"},
            "'category' must be one of free_weights, machines, cardio, accessories, bodyweight",
        ),
        (
            {"name": "Rower", "category": "cardio", "is_active": "yes"},
            "'is_active' must be a boolean",
        ),
    ],
)
def test_create_equipment_invalid(client: Client, data: dict[str, object], message: str) -> None:
    resp = client.post("/api/v1/equipment", json=data)

    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json
    assert resp.json["message"] == message
    assert resp.json["data"]["code"] == "BAD_REQUEST"


def test_read_equipment(client: Client) -> None:
    equipment_id = create(client, "equipment", {**TREADMILL, "description": " Running "})

    resp = client.get(f"/api/v1/equipment/{equipment_id}")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["message"] == "Equipment retrieved successfully"
    data = resp.json["data"]
    assert data["id"] == equipment_id
    assert data["name"] == "Treadmill"
    assert data["description"] == "Running"
    assert data["category"] == "cardio"
    assert data["is_active"] is True


@pytest.mark.parametrize("equipment_id", [str(uuid.uuid4()), "invalid", "1"])
def test_read_equipment_not_found(client: Client, equipment_id: str) -> None:
    resp = client.get(f"/api/v1/equipment/{equipment_id}")

    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.json
    assert resp.json["message"] == "equipment not found"


def test_list_equipment(client: Client) -> None:
    create(client, "equipment", TREADMILL)
    create(client, "equipment", {"name": "Barbell", "category": "free_weights"})

    resp = client.get("/api/v1/equipment")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["message"] == "Equipment list retrieved successfully"
    assert [e["name"] for e in resp.json["data"]] == ["Barbell", "Treadmill"]


def test_update_equipment(client: Client) -> None:
    equipment_id = create(client, "equipment", TREADMILL)
    before = client.get(f"/api/v1/equipment/{equipment_id}").json
    assert before

    resp = client.patch(
        f"/api/v1/equipment/{equipment_id}",
        json={"category": "machines", "name": None, "unknown": 1},
    )

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["message"] == "Equipment updated successfully"
    assert resp.json["data"]["name"] == "Treadmill"
    assert resp.json["data"]["category"] == "machines"
    assert resp.json["data"]["created_at"] == before["data"]["created_at"]


def test_update_equipment_empty(client: Client) -> None:
    equipment_id = create(client, "equipment", TREADMILL)
    before = client.get(f"/api/v1/equipment/{equipment_id}").json
    assert before

    resp = client.put(f"/api/v1/equipment/{equipment_id}", json={})

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    after = resp.json["data"]
    assert {k: v for k, v in after.items() if k != "updated_at"} == {
        k: v for k, v in before["data"].items() if k != "updated_at"
    }
    assert after["updated_at"] != before["data"]["updated_at"]


def test_update_equipment_conflict(client: Client) -> None:
    create(client, "equipment", TREADMILL)
    equipment_id = create(client, "equipment", {"name": "Barbell", "category": "free_weights"})

    resp = client.put(f"/api/v1/equipment/{equipment_id}", json={"name": "Treadmill"})

    assert resp.status_code == HTTPStatus.CONFLICT

    resp = client.get(f"/api/v1/equipment/{equipment_id}")

    assert resp.json
    assert resp.json["data"]["name"] == "Barbell"


def test_update_equipment_not_found(client: Client) -> None:
    resp = client.put(f"/api/v1/equipment/{uuid.uuid4()}", json={"name": "Rower"})

    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_delete_equipment(client: Client) -> None:
    equipment_id = create(client, "equipment", TREADMILL)

    resp = client.delete(f"/api/v1/equipment/{equipment_id}")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json == {
        "status": "success",
        "message": "Equipment deleted successfully",
        "data": None,
    }

    assert client.get(f"/api/v1/equipment/{equipment_id}").status_code == HTTPStatus.NOT_FOUND
    assert client.delete(f"/api/v1/equipment/{equipment_id}").status_code == HTTPStatus.NOT_FOUND

    resp = client.get("/api/v1/equipment")

    assert resp.json
    assert resp.json["data"] == []

    assert create(client, "equipment", TREADMILL) != equipment_id
    assert (
        db.session.execute(select(func.count()).select_from(Equipment)).scalar_one() == 2
    )


def test_muscular_groups(client: Client) -> None:
    group_id = create(client, "muscular-groups", CHEST)

    resp = client.post("/api/v1/muscular-groups", json=CHEST)

    assert resp.status_code == HTTPStatus.CONFLICT
    assert resp.json
    assert resp.json["message"] == "muscular group already exists"

    resp = client.get(f"/api/v1/muscular-groups/{group_id}")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["message"] == "Muscular group retrieved successfully"
    assert resp.json["data"]["body_part"] == "upper_body"

    resp = client.post("/api/v1/muscular-groups", json={"name": "Legs", "body_part": "legs"})

    assert resp.status_code == HTTPStatus.BAD_REQUEST


def test_create_exercise(client: Client) -> None:
    exercise_id = create(client, "exercises", SQUAT)

    resp = client.get(f"/api/v1/exercises/{exercise_id}")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    data = resp.json["data"]
    assert data["name"] == "Squat"
    assert data["synonyms"] == ["Back Squat"]
    assert data["difficulty_level"] == "intermediate"
    assert data["exercise_type"] == "strength"
    assert data["created_by"] is None
    assert data["muscular_group_ids"] == []
    assert data["equipment_ids"] == []

    resp = client.post("/api/v1/exercises", json=SQUAT)

    assert resp.status_code == HTTPStatus.CONFLICT


def test_create_exercise_invalid_synonyms(client: Client) -> None:
    resp = client.post("/api/v1/exercises", json={**SQUAT, "synonyms": "Back Squat"})

    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json
    assert resp.json["message"] == "'synonyms' must be a list of strings"


def test_exercise_links(client: Client) -> None:
    exercise_id = create(client, "exercises", SQUAT)
    equipment_id = create(client, "equipment", {"name": "Barbell", "category": "free_weights"})
    group_id = create(client, "muscular-groups", {"name": "Legs", "body_part": "lower_body"})

    resp = client.post(
        "/api/v1/exercise-equipment/link",
        json={"exercise_id": exercise_id, "equipment_id": equipment_id},
    )

    assert resp.status_code == HTTPStatus.CREATED
    assert resp.json
    assert resp.json["message"] == "Exercise equipment link created successfully"
    link_id = resp.json["data"]["id"]

    resp = client.post(
        "/api/v1/exercise-equipment/link",
        json={"exercise_id": exercise_id, "equipment_id": equipment_id},
    )

    assert resp.status_code == HTTPStatus.CONFLICT

    create(
        client,
        "exercise-muscular-groups/link",
        {"exercise_id": exercise_id, "muscular_group_id": group_id},
    )

    resp = client.get(f"/api/v1/exercises/{exercise_id}")

    assert resp.json
    assert resp.json["data"]["equipment_ids"] == [equipment_id]
    assert resp.json["data"]["muscular_group_ids"] == [group_id]

    resp = client.get(f"/api/v1/exercise-equipment/link/{link_id}")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["data"]["exercise_id"] == exercise_id
    assert resp.json["data"]["equipment_id"] == equipment_id

    for route in [f"exercise/{exercise_id}/links", f"equipment/{equipment_id}/links"]:
        resp = client.get(f"/api/v1/exercise-equipment/{route}")

        assert resp.status_code == HTTPStatus.OK
        assert resp.json
        assert [l["id"] for l in resp.json["data"]] == [link_id]

    resp = client.get(f"/api/v1/exercise-muscular-groups/muscular-group/{group_id}/links")

    assert resp.json
    assert len(resp.json["data"]) == 1

    resp = client.get(f"/api/v1/exercise-equipment/exercise/{uuid.uuid4()}/links")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["data"] == []

    resp = client.delete(f"/api/v1/exercise-equipment/link/{link_id}")

    assert resp.status_code == HTTPStatus.OK
    assert client.get(f"/api/v1/exercise-equipment/link/{link_id}").status_code == (
        HTTPStatus.NOT_FOUND
    )

    resp = client.get(f"/api/v1/exercises/{exercise_id}")

    assert resp.json
    assert resp.json["data"]["equipment_ids"] == []


def test_exercise_links_of_deleted_entities(client: Client) -> None:
    exercise_id = create(client, "exercises", SQUAT)
    equipment_id = create(client, "equipment", {"name": "Barbell", "category": "free_weights"})
    group_id = create(client, "muscular-groups", {"name": "Legs", "body_part": "lower_body"})
    equipment_link_id = create(
        client,
        "exercise-equipment/link",
        {"exercise_id": exercise_id, "equipment_id": equipment_id},
    )
    group_link_id = create(
        client,
        "exercise-muscular-groups/link",
        {"exercise_id": exercise_id, "muscular_group_id": group_id},
    )

    def search(query: str) -> list[str]:
        resp = client.get(f"/api/v1/exercises/search?{query}")
        assert resp.status_code == HTTPStatus.OK
        assert resp.json
        return [e["name"] for e in resp.json["data"]]

    assert search(f"equipment_ids={equipment_id}") == ["Squat"]

    assert client.delete(f"/api/v1/equipment/{equipment_id}").status_code == HTTPStatus.OK

    resp = client.get(f"/api/v1/exercises/{exercise_id}")

    assert resp.json
    assert resp.json["data"]["equipment_ids"] == []
    assert resp.json["data"]["muscular_group_ids"] == [group_id]

    assert search(f"equipment_ids={equipment_id}") == []
    assert search(f"muscular_group_ids={group_id}") == ["Squat"]

    for route in [f"exercise/{exercise_id}/links", f"equipment/{equipment_id}/links"]:
        resp = client.get(f"/api/v1/exercise-equipment/{route}")

        assert resp.status_code == HTTPStatus.OK
        assert resp.json
        assert resp.json["data"] == []

    resp = client.get(f"/api/v1/exercise-equipment/link/{equipment_link_id}")

    assert resp.status_code == HTTPStatus.NOT_FOUND

    assert client.delete(f"/api/v1/muscular-groups/{group_id}").status_code == HTTPStatus.OK

    assert search(f"muscular_group_ids={group_id}") == []

    resp = client.get(f"/api/v1/exercises/{exercise_id}")

    assert resp.json
    assert resp.json["data"]["muscular_group_ids"] == []


def test_exercise_links_of_deleted_exercise(client: Client) -> None:
    exercise_id = create(client, "exercises", SQUAT)
    group_id = create(client, "muscular-groups", {"name": "Legs", "body_part": "lower_body"})
    link_id = create(
        client,
        "exercise-muscular-groups/link",
        {"exercise_id": exercise_id, "muscular_group_id": group_id},
    )

    assert client.delete(f"/api/v1/exercises/{exercise_id}").status_code == HTTPStatus.OK

    resp = client.get(f"/api/v1/exercise-muscular-groups/link/{link_id}")

    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.json
    assert resp.json["message"] == "exercise muscular group link not found"

    resp = client.get(f"/api/v1/exercise-muscular-groups/muscular-group/{group_id}/links")

    assert resp.json
    assert resp.json["data"] == []


def test_exercise_link_not_found(client: Client) -> None:
    exercise_id = create(client, "exercises", SQUAT)
    equipment_id = create(client, "equipment", TREADMILL)

    resp = client.post(
        "/api/v1/exercise-equipment/link",
        json={"exercise_id": exercise_id, "equipment_id": str(uuid.uuid4())},
    )

    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.json
    assert resp.json["message"] == "equipment not found"

    resp = client.post(
        "/api/v1/exercise-equipment/link",
        json={"exercise_id": str(uuid.uuid4()), "equipment_id": equipment_id},
    )

    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.json
    assert resp.json["message"] == "exercise not found"

    assert client.delete(f"/api/v1/equipment/{equipment_id}").status_code == HTTPStatus.OK

    resp = client.post(
        "/api/v1/exercise-equipment/link",
        json={"exercise_id": exercise_id, "equipment_id": equipment_id},
    )

    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_exercise_link_invalid_id(client: Client) -> None:
    exercise_id = create(client, "exercises", SQUAT)

    resp = client.post(
        "/api/v1/exercise-muscular-groups/link",
        json={"exercise_id": exercise_id, "muscular_group_id": "invalid"},
    )

    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json
    assert resp.json["message"] == "'muscular_group_id' must be a valid UUID"


def test_search_exercises(client: Client) -> None:
    squat_id = create(client, "exercises", SQUAT)
    press_id = create(client, "exercises", {**SQUAT, "name": "Bench Press", "synonyms": []})
    create(client, "exercises", {**SQUAT, "name": "Plank", "synonyms": []})
    barbell_id = create(client, "equipment", {"name": "Barbell", "category": "free_weights"})
    bench_id = create(client, "equipment", {"name": "Bench", "category": "accessories"})
    legs_id = create(client, "muscular-groups", {"name": "Legs", "body_part": "lower_body"})
    chest_id = create(client, "muscular-groups", CHEST)

    for exercise_id, equipment_id in [
        (squat_id, barbell_id),
        (press_id, barbell_id),
        (press_id, bench_id),
    ]:
        create(
            client,
            "exercise-equipment/link",
            {"exercise_id": exercise_id, "equipment_id": equipment_id},
        )

    for exercise_id, group_id in [(squat_id, legs_id), (press_id, chest_id)]:
        create(
            client,
            "exercise-muscular-groups/link",
            {"exercise_id": exercise_id, "muscular_group_id": group_id},
        )

    def search(query: str) -> list[str]:
        resp = client.get(f"/api/v1/exercises/search?{query}")
        assert resp.status_code == HTTPStatus.OK
        assert resp.json
        return [e["name"] for e in resp.json["data"]]

    assert search("") == ["Bench Press", "Plank", "Squat"]
    assert search(f"equipment_ids={barbell_id}") == ["Bench Press", "Squat"]
    assert search(f"equipment_ids={bench_id}") == ["Bench Press"]
    assert search(f"muscular_group_ids={legs_id},{chest_id}") == ["Bench Press", "Squat"]
    assert search(f"muscular_group_ids={legs_id}&muscular_group_ids={chest_id}") == [
        "Bench Press",
        "Squat",
    ]
    assert search(f"muscular_group_ids={legs_id}&equipment_ids={barbell_id}") == ["Squat"]
    assert search(f"muscular_group_ids={legs_id}&equipment_ids={bench_id}") == []

    resp = client.get("/api/v1/exercises/search?equipment_ids=invalid")

    assert resp.status_code == HTTPStatus.BAD_REQUEST


def test_workout_templates(client: Client) -> None:
    template_id = create(client, "workout-templates", FULL_BODY)
    create(
        client,
        "workout-templates",
        {"name": "Marathon", "difficulty_level": "advanced", "target_audience": "endurance"},
    )

    resp = client.post("/api/v1/workout-templates", json=FULL_BODY)

    assert resp.status_code == HTTPStatus.CONFLICT

    resp = client.get(f"/api/v1/workout-templates/{template_id}")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["data"]["is_public"] is True
    assert resp.json["data"]["estimated_duration_minutes"] == 45

    resp = client.get("/api/v1/workout-templates/name/Full%20Body")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["data"]["id"] == template_id

    assert client.get("/api/v1/workout-templates/name/Unknown").status_code == (
        HTTPStatus.NOT_FOUND
    )

    resp = client.get("/api/v1/workout-templates/difficulty/beginner")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert [t["name"] for t in resp.json["data"]] == ["Full Body"]

    resp = client.get("/api/v1/workout-templates/difficulty/expert")

    assert resp.status_code == HTTPStatus.BAD_REQUEST

    resp = client.get("/api/v1/workout-templates/target-audience/endurance")

    assert resp.json
    assert [t["name"] for t in resp.json["data"]] == ["Marathon"]

    resp = client.get("/api/v1/workout-templates/target-audience/rehabilitation")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["data"] == []


@pytest.mark.parametrize("minutes", [0, -5, 1.5, "30"])
def test_workout_template_invalid_duration(client: Client, minutes: object) -> None:
    resp = client.post(
        "/api/v1/workout-templates", json={**FULL_BODY, "estimated_duration_minutes": minutes}
    )

    assert resp.status_code == HTTPStatus.BAD_REQUEST


def test_template_blocks(client: Client) -> None:
    template_id = create(client, "workout-templates", FULL_BODY)
    block = {
        "template_id": template_id,
        "block_name": "Warm-up",
        "block_type": "warmup",
        "block_order": 1,
        "exercise_count": 3,
        "reps": 10,
        "series": 2,
        "rest_time_seconds": 30,
    }

    block_id = create(client, "template-blocks", block)
    create(
        client,
        "template-blocks",
        {**block, "block_name": "Main", "block_type": "main", "block_order": 2},
    )

    resp = client.post("/api/v1/template-blocks", json={**block, "block_name": "Other"})

    assert resp.status_code == HTTPStatus.CONFLICT
    assert resp.json
    assert resp.json["message"] == "template block already exists"

    resp = client.get(f"/api/v1/template-blocks/template/{template_id}")

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert [b["block_name"] for b in resp.json["data"]] == ["Warm-up", "Main"]

    resp = client.patch(f"/api/v1/template-blocks/{block_id}", json={"block_order": 2})

    assert resp.status_code == HTTPStatus.CONFLICT

    resp = client.patch(f"/api/v1/template-blocks/{block_id}", json={"block_order": 3})

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["data"]["block_order"] == 3

    resp = client.delete(f"/api/v1/template-blocks/{block_id}")

    assert resp.status_code == HTTPStatus.OK
    assert client.get(f"/api/v1/template-blocks/{block_id}").status_code == HTTPStatus.NOT_FOUND

    resp = client.get(f"/api/v1/template-blocks/template/{uuid.uuid4()}")

    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_template_block_invalid(client: Client) -> None:
    template_id = create(client, "workout-templates", FULL_BODY)
    block = {
        "template_id": template_id,
        "block_name": "Main",
        "block_type": "main",
        "block_order": 1,
        "exercise_count": 3,
    }

    for data in [
        {**block, "block_order": 0},
        {**block, "exercise_count": 0},
        {**block, "block_type": "stretching"},
        {**block, "rest_time_seconds": -1},
    ]:
        assert client.post("/api/v1/template-blocks", json=data).status_code == (
            HTTPStatus.BAD_REQUEST
        )

    resp = client.post("/api/v1/template-blocks", json={**block, "template_id": str(uuid.uuid4())})

    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.json
    assert resp.json["message"] == "workout template not found"
