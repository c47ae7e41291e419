"""Platform wide catalog: equipment, muscular groups, exercises and workout templates."""

from __future__ import annotations

from flask import Blueprint, request
from flask.typing import ResponseReturnValue
from sqlalchemy import select

from athenai import validation, views
from athenai.crud import Data, Field, Resource
from athenai.errors import APIError, ErrorCode
from athenai.links import LinkResource, Reference
from athenai.models import (
    BlockType,
    BodyPart,
    DifficultyLevel,
    Equipment,
    EquipmentCategory,
    Exercise,
    ExerciseEquipment,
    ExerciseMuscularGroup,
    ExerciseType,
    MuscularGroup,
    TargetAudience,
    TemplateBlock,
    WorkoutTemplate,
)
from athenai.serialization import model_to_dict, to_dict

bp = Blueprint("catalog", __name__)

equipment = Resource(
    Equipment,
    "equipment",
    [
        Field("name", validation.text, required=True),
        Field("description", validation.string),
        Field("category", validation.choice(EquipmentCategory), required=True),
        Field("is_active", validation.boolean, default=True),
    ],
    order_by=[Equipment.name],
)
equipment.register(bp, "/equipment", "equipment")

muscular_groups = Resource(
    MuscularGroup,
    "muscular group",
    [
        Field("name", validation.text, required=True),
        Field("description", validation.string),
        Field("body_part", validation.choice(BodyPart), required=True),
        Field("is_active", validation.boolean, default=True),
    ],
    order_by=[MuscularGroup.name],
)
muscular_groups.register(bp, "/muscular-groups", "muscular_groups")


def exercise_fields() -> list[Field]:
    return [
        Field("name", validation.text, required=True),
        Field("synonyms", validation.string_list, default=list),
        Field("difficulty_level", validation.choice(DifficultyLevel), required=True),
        Field("exercise_type", validation.choice(ExerciseType), required=True),
        Field("instructions", validation.text, required=True),
        Field("video_url", validation.string),
        Field("image_url", validation.string),
        Field("is_active", validation.boolean, default=True),
    ]


exercises = Resource(
    Exercise,
    "exercise",
    [*exercise_fields(), Field("created_by", validation.identifier)],
    order_by=[Exercise.name],
)


@bp.route("/exercises/search")
def search_exercises() -> ResponseReturnValue:
    """Find exercises training any of the given muscular groups and using any of the given
    equipment.

    Both filters are given as repeated or comma separated query parameters. If both are given,
    only exercises matching both filters are returned.
    """
    try:
        muscular_group_ids = validation.identifiers(request.args.getlist("muscular_group_ids"))
        equipment_ids = validation.identifiers(request.args.getlist("equipment_ids"))
    except ValueError as e:
        raise APIError(ErrorCode.BAD_REQUEST, f"invalid query parameter: {e}", e) from e

    criteria = []

    if muscular_group_ids:
        criteria.append(
            Exercise.id.in_(
                select(ExerciseMuscularGroup.exercise_id)
                .join(MuscularGroup, MuscularGroup.id == ExerciseMuscularGroup.muscular_group_id)
                .where(
                    MuscularGroup.id.in_(muscular_group_ids),
                    *muscular_groups.live_criteria(),
                )
            )
        )

    if equipment_ids:
        criteria.append(
            Exercise.id.in_(
                select(ExerciseEquipment.exercise_id)
                .join(Equipment, Equipment.id == ExerciseEquipment.equipment_id)
                .where(Equipment.id.in_(equipment_ids), *equipment.live_criteria())
            )
        )

    return views.success(
        [to_dict(e) for e in exercises.list(*criteria)], "Exercises retrieved successfully"
    )


exercises.register(bp, "/exercises", "exercises")

exercise_equipment = LinkResource(
    ExerciseEquipment,
    "exercise equipment link",
    Reference("exercise_id", "exercise", "exercise", [exercises]),
    Reference("equipment_id", "equipment", "equipment", [equipment]),
)
exercise_equipment.register(bp, "/exercise-equipment", "exercise_equipment")

exercise_muscular_groups = LinkResource(
    ExerciseMuscularGroup,
    "exercise muscular group link",
    Reference("exercise_id", "exercise", "exercise", [exercises]),
    Reference("muscular_group_id", "muscular-group", "muscular group", [muscular_groups]),
)
exercise_muscular_groups.register(bp, "/exercise-muscular-groups", "exercise_muscular_groups")


@to_dict.register
def exercise_to_dict(model: Exercise) -> dict[str, object]:
    return {
        **model_to_dict(model),
        "muscular_group_ids": exercise_muscular_groups.target_ids(model.muscular_group_links),
        "equipment_ids": exercise_equipment.target_ids(model.equipment_links),
    }


def template_fields() -> list[Field]:
    return [
        Field("name", validation.text, required=True),
        Field("description", validation.string),
        Field("difficulty_level", validation.choice(DifficultyLevel), required=True),
        Field("estimated_duration_minutes", validation.integer(minimum=1)),
        Field("target_audience", validation.choice(TargetAudience)),
        Field("is_active", validation.boolean, default=True),
    ]


workout_templates = Resource(
    WorkoutTemplate,
    "workout template",
    [
        *template_fields(),
        Field("created_by", validation.identifier),
        Field("is_public", validation.boolean, default=True),
    ],
    order_by=[WorkoutTemplate.name],
)


@bp.route("/workout-templates/name/<name>")
def read_workout_template_by_name(name: str) -> ResponseReturnValue:
    template = workout_templates.find_one(WorkoutTemplate.name == name)
    return views.success(to_dict(template), "Workout template retrieved successfully")


@bp.route("/workout-templates/difficulty/<level>")
def read_workout_templates_by_difficulty(level: str) -> ResponseReturnValue:
    difficulty = parse_path_choice(DifficultyLevel, "difficulty level", level)
    templates = workout_templates.list(WorkoutTemplate.difficulty_level == difficulty)
    return views.success(
        [to_dict(t) for t in templates], "Workout templates retrieved successfully"
    )


@bp.route("/workout-templates/target-audience/<audience>")
def read_workout_templates_by_target_audience(audience: str) -> ResponseReturnValue:
    target_audience = parse_path_choice(TargetAudience, "target audience", audience)
    templates = workout_templates.list(WorkoutTemplate.target_audience == target_audience)
    return views.success(
        [to_dict(t) for t in templates], "Workout templates retrieved successfully"
    )


workout_templates.register(bp, "/workout-templates", "workout_templates")


def block_fields() -> list[Field]:
    return [
        Field("template_id", validation.identifier, required=True, update=False),
        Field("block_name", validation.text, required=True),
        Field("block_type", validation.choice(BlockType), required=True),
        Field("block_order", validation.integer(minimum=1), required=True),
        Field("exercise_count", validation.integer(minimum=1), required=True),
        Field("estimated_duration_minutes", validation.integer(minimum=1)),
        Field("instructions", validation.string),
        Field("reps", validation.integer(minimum=1)),
        Field("series", validation.integer(minimum=1)),
        Field("rest_time_seconds", validation.integer(minimum=0)),
    ]


def check_template_block(obj: TemplateBlock, _: Data) -> None:
    if not workout_templates.exists(obj.template_id):
        raise APIError(ErrorCode.NOT_FOUND, "workout template not found")


template_blocks = Resource(
    TemplateBlock,
    "template block",
    block_fields(),
    soft_delete=False,
    order_by=[TemplateBlock.block_order],
    check=check_template_block,
)


@bp.route("/template-blocks/template/<template_id>")
def read_template_blocks_by_template(template_id: str) -> ResponseReturnValue:
    template = workout_templates.get(template_id)
    blocks = template_blocks.list(TemplateBlock.template_id == template.id)
    return views.success([to_dict(b) for b in blocks], "Template blocks retrieved successfully")


template_blocks.register(bp, "/template-blocks", "template_blocks", listable=False)


def parse_path_choice(enum_class: type, noun: str, value: str) -> object:
    try:
        return validation.choice(enum_class)(value)
    except ValueError as e:
        raise APIError(ErrorCode.BAD_REQUEST, f"invalid {noun}: {e}", e) from e
