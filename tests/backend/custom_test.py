from __future__ import annotations

import uuid
from http import HTTPStatus

from werkzeug.test import Client

CREATOR = str(uuid.uuid4())
KETTLEBELL = {"created_by": CREATOR, "name": "Kettlebell", "category": "free_weights"}
SWING = {
    "created_by": CREATOR,
    "name": "Kettlebell Swing",
    "difficulty_level": "beginner",
    "exercise_type": "functional",
    "instructions": "Swing the bell.",
}


def create(
    client: Client, route: str, data: dict[str, object], headers: dict[str, str] | None = None
) -> str:
    resp = client.post(f"/api/v1/{route}", json=data, headers=headers)
    assert resp.status_code == HTTPStatus.CREATED, resp.json
    assert resp.json
    return str(resp.json["data"]["id"])


def test_custom_equipment(client: Client, headers: dict[str, str]) -> None:
    equipment_id = create(client, "custom-equipment", KETTLEBELL, headers)

    resp = client.post("/api/v1/custom-equipment", json=KETTLEBELL, headers=headers)

    assert resp.status_code == HTTPStatus.CONFLICT
    assert resp.json
    assert resp.json["message"] == "custom equipment already exists"

    resp = client.post(
        "/api/v1/custom-equipment",
        json={**KETTLEBELL, "name": "Sandbag", "category": "custom"},
        headers=headers,
    )

    assert resp.status_code == HTTPStatus.CREATED

    resp = client.get("/api/v1/custom-equipment", headers=headers)

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert [e["name"] for e in resp.json["data"]] == ["Kettlebell", "Sandbag"]
    assert resp.json["data"][0]["created_by"] == CREATOR

    resp = client.patch(
        f"/api/v1/custom-equipment/{equipment_id}",
        json={"created_by": str(uuid.uuid4()), "description": "Cast iron"},
        headers=headers,
    )

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["data"]["created_by"] == CREATOR
    assert resp.json["data"]["description"] == "Cast iron"

    resp = client.delete(f"/api/v1/custom-equipment/{equipment_id}", headers=headers)
    assert resp.status_code == HTTPStatus.OK
    resp = client.get(f"/api/v1/custom-equipment/{equipment_id}", headers=headers)
    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_custom_equipment_created_by_required(client: Client, headers: dict[str, str]) -> None:
    resp = client.post(
        "/api/v1/custom-equipment",
        json={"name": "Kettlebell", "category": "free_weights"},
        headers=headers,
    )

    assert resp.status_code == HTTPStatus.BAD_REQUEST
    assert resp.json
    assert resp.json["message"] == "'created_by' is required"


def test_custom_exercise_equipment_links(client: Client, headers: dict[str, str]) -> None:
    exercise_id = create(client, "custom-exercises", SWING, headers)
    custom_equipment_id = create(client, "custom-equipment", KETTLEBELL, headers)
    public_equipment_id = create(client, "equipment", {"name": "Mat", "category": "accessories"})

    link_ids = [
        create(
            client,
            "custom-exercise-equipment/link",
            {"custom_exercise_id": exercise_id, "equipment_id": equipment_id},
            headers,
        )
        for equipment_id in [custom_equipment_id, public_equipment_id]
    ]

    resp = client.post(
        "/api/v1/custom-exercise-equipment/link",
        json={"custom_exercise_id": exercise_id, "equipment_id": str(uuid.uuid4())},
        headers=headers,
    )

    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.json
    assert resp.json["message"] == "equipment not found"

    resp = client.post(
        "/api/v1/custom-exercise-equipment/link",
        json={"custom_exercise_id": exercise_id, "equipment_id": custom_equipment_id},
        headers=headers,
    )

    assert resp.status_code == HTTPStatus.CONFLICT

    resp = client.get(f"/api/v1/custom-exercises/{exercise_id}", headers=headers)

    assert resp.json
    assert resp.json["data"]["equipment_ids"] == sorted(
        [custom_equipment_id, public_equipment_id]
    )

    resp = client.get(
        f"/api/v1/custom-exercise-equipment/exercise/{exercise_id}/links", headers=headers
    )

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert sorted(l["id"] for l in resp.json["data"]) == sorted(link_ids)

    resp = client.get(
        f"/api/v1/custom-exercise-equipment/equipment/{public_equipment_id}/links",
        headers=headers,
    )

    assert resp.json
    assert [l["id"] for l in resp.json["data"]] == [link_ids[1]]

    resp = client.delete(
        f"/api/v1/custom-exercise-equipment/exercise/{exercise_id}/links", headers=headers
    )

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["data"] == {"deleted": 2}

    resp = client.get(
        f"/api/v1/custom-exercise-equipment/exercise/{exercise_id}/links", headers=headers
    )

    assert resp.json
    assert resp.json["data"] == []

    resp = client.delete(
        f"/api/v1/custom-exercise-equipment/exercise/{uuid.uuid4()}/links", headers=headers
    )

    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.json
    assert resp.json["message"] == "custom exercise not found"


def test_custom_exercise_equipment_link_deleted_equipment(
    client: Client, headers: dict[str, str]
) -> None:
    exercise_id = create(client, "custom-exercises", SWING, headers)
    equipment_id = create(client, "custom-equipment", KETTLEBELL, headers)

    resp = client.delete(f"/api/v1/custom-equipment/{equipment_id}", headers=headers)
    assert resp.status_code == HTTPStatus.OK

    resp = client.post(
        "/api/v1/custom-exercise-equipment/link",
        json={"custom_exercise_id": exercise_id, "equipment_id": equipment_id},
        headers=headers,
    )

    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_custom_exercise_links_of_deleted_equipment(
    client: Client, headers: dict[str, str]
) -> None:
    exercise_id = create(client, "custom-exercises", SWING, headers)
    custom_equipment_id = create(client, "custom-equipment", KETTLEBELL, headers)
    public_equipment_id = create(client, "equipment", {"name": "Mat", "category": "accessories"})

    link_ids = [
        create(
            client,
            "custom-exercise-equipment/link",
            {"custom_exercise_id": exercise_id, "equipment_id": equipment_id},
            headers,
        )
        for equipment_id in [custom_equipment_id, public_equipment_id]
    ]

    resp = client.delete(f"/api/v1/custom-equipment/{custom_equipment_id}", headers=headers)
    assert resp.status_code == HTTPStatus.OK

    resp = client.get(f"/api/v1/custom-exercises/{exercise_id}", headers=headers)

    assert resp.json
    assert resp.json["data"]["equipment_ids"] == [public_equipment_id]

    resp = client.get(
        f"/api/v1/custom-exercise-equipment/exercise/{exercise_id}/links", headers=headers
    )

    assert resp.json
    assert [l["id"] for l in resp.json["data"]] == [link_ids[1]]

    resp = client.get(f"/api/v1/custom-exercise-equipment/link/{link_ids[0]}", headers=headers)

    assert resp.status_code == HTTPStatus.NOT_FOUND

    assert client.delete(f"/api/v1/equipment/{public_equipment_id}").status_code == HTTPStatus.OK

    resp = client.get(f"/api/v1/custom-exercises/{exercise_id}", headers=headers)

    assert resp.json
    assert resp.json["data"]["equipment_ids"] == []

    resp = client.get(
        f"/api/v1/custom-exercise-equipment/equipment/{public_equipment_id}/links",
        headers=headers,
    )

    assert resp.json
    assert resp.json["data"] == []


def test_custom_exercise_muscular_group_links(client: Client, headers: dict[str, str]) -> None:
    exercise_id = create(client, "custom-exercises", SWING, headers)
    group_id = create(client, "muscular-groups", {"name": "Core", "body_part": "core"})

    link_id = create(
        client,
        "custom-exercise-muscular-groups/link",
        {"custom_exercise_id": exercise_id, "muscular_group_id": group_id},
        headers,
    )

    resp = client.get(f"/api/v1/custom-exercise-muscular-groups/link/{link_id}", headers=headers)

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["data"]["muscular_group_id"] == group_id

    resp = client.get(
        f"/api/v1/custom-exercise-muscular-groups/muscular-group/{group_id}/links",
        headers=headers,
    )

    assert resp.json
    assert [l["id"] for l in resp.json["data"]] == [link_id]

    resp = client.post(
        "/api/v1/custom-exercise-muscular-groups/link",
        json={"custom_exercise_id": str(uuid.uuid4()), "muscular_group_id": group_id},
        headers=headers,
    )

    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.json
    assert resp.json["message"] == "custom exercise not found"

    resp = client.delete(f"/api/v1/custom-exercise-muscular-groups/link/{link_id}", headers=headers)

    assert resp.status_code == HTTPStatus.OK


def test_custom_workout_templates_and_blocks(client: Client, headers: dict[str, str]) -> None:
    template_id = create(
        client,
        "custom-workout-templates",
        {"created_by": CREATOR, "name": "Morning", "difficulty_level": "beginner"},
        headers,
    )
    block = {
        "created_by": CREATOR,
        "template_id": template_id,
        "block_name": "Mobility",
        "block_type": "warmup",
        "block_order": 1,
        "exercise_count": 2,
    }

    block_id = create(client, "custom-template-blocks", block, headers)

    resp = client.post("/api/v1/custom-template-blocks", json=block, headers=headers)

    assert resp.status_code == HTTPStatus.CONFLICT

    resp = client.post(
        "/api/v1/custom-template-blocks",
        json={**block, "template_id": str(uuid.uuid4())},
        headers=headers,
    )

    assert resp.status_code == HTTPStatus.NOT_FOUND
    assert resp.json
    assert resp.json["message"] == "custom workout template not found"

    resp = client.get(f"/api/v1/custom-template-blocks/template/{template_id}", headers=headers)

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert [b["id"] for b in resp.json["data"]] == [block_id]

    resp = client.put(
        f"/api/v1/custom-template-blocks/{block_id}", json={"reps": 12}, headers=headers
    )

    assert resp.status_code == HTTPStatus.OK
    assert resp.json
    assert resp.json["data"]["reps"] == 12
    assert resp.json["data"]["template_id"] == template_id

    resp = client.delete(f"/api/v1/custom-template-blocks/{block_id}", headers=headers)
    assert resp.status_code == HTTPStatus.OK
    resp = client.get(f"/api/v1/custom-template-blocks/{block_id}", headers=headers)
    assert resp.status_code == HTTPStatus.NOT_FOUND


def test_custom_data_not_visible_in_public_catalog(
    client: Client, headers: dict[str, str]
) -> None:
    create(client, "custom-equipment", KETTLEBELL, headers)
    create(client, "equipment", {"name": "Kettlebell", "category": "free_weights"})

    resp = client.get("/api/v1/equipment")

    assert resp.json
    assert len(resp.json["data"]) == 1
    assert "created_by" not in resp.json["data"][0]
