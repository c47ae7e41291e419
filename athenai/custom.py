"""Gym specific catalog living in the tenant schema of a gym."""

from __future__ import annotations

from flask import Blueprint
from flask.typing import ResponseReturnValue

from athenai import catalog, validation, views
from athenai.crud import Data, Field, Resource
from athenai.errors import APIError, ErrorCode
from athenai.links import LinkResource, Reference
from athenai.serialization import model_to_dict, to_dict
from athenai.tenant_models import (
    CustomEquipment,
    CustomEquipmentCategory,
    CustomExercise,
    CustomExerciseEquipment,
    CustomExerciseMuscularGroup,
    CustomTemplateBlock,
    CustomWorkoutTemplate,
)

bp = Blueprint("custom", __name__)

CREATED_BY = Field("created_by", validation.identifier, required=True, update=False)

custom_equipment = Resource(
    CustomEquipment,
    "custom equipment",
    [
        CREATED_BY,
        Field("name", validation.text, required=True),
        Field("description", validation.string),
        Field("category", validation.choice(CustomEquipmentCategory), required=True),
        Field("is_active", validation.boolean, default=True),
    ],
    tenant=True,
    order_by=[CustomEquipment.name],
)
custom_equipment.register(bp, "/custom-equipment", "custom_equipment")

custom_exercises = Resource(
    CustomExercise,
    "custom exercise",
    [CREATED_BY, *catalog.exercise_fields()],
    tenant=True,
    order_by=[CustomExercise.name],
)
custom_exercises.register(bp, "/custom-exercises", "custom_exercises")

custom_exercise_equipment = LinkResource(
    CustomExerciseEquipment,
    "custom exercise equipment link",
    Reference("custom_exercise_id", "exercise", "custom exercise", [custom_exercises]),
    Reference(
        "equipment_id", "equipment", "equipment", [custom_equipment, catalog.equipment]
    ),
    tenant=True,
    removable=True,
)
custom_exercise_equipment.register(bp, "/custom-exercise-equipment", "custom_exercise_equipment")

custom_exercise_muscular_groups = LinkResource(
    CustomExerciseMuscularGroup,
    "custom exercise muscular group link",
    Reference("custom_exercise_id", "exercise", "custom exercise", [custom_exercises]),
    Reference(
        "muscular_group_id", "muscular-group", "muscular group", [catalog.muscular_groups]
    ),
    tenant=True,
    removable=True,
)
custom_exercise_muscular_groups.register(
    bp, "/custom-exercise-muscular-groups", "custom_exercise_muscular_groups"
)


@to_dict.register
def custom_exercise_to_dict(model: CustomExercise) -> dict[str, object]:
    return {
        **model_to_dict(model),
        "muscular_group_ids": custom_exercise_muscular_groups.target_ids(
            model.muscular_group_links
        ),
        "equipment_ids": custom_exercise_equipment.target_ids(model.equipment_links),
    }


custom_workout_templates = Resource(
    CustomWorkoutTemplate,
    "custom workout template",
    [CREATED_BY, *catalog.template_fields()],
    tenant=True,
    order_by=[CustomWorkoutTemplate.name],
)
custom_workout_templates.register(bp, "/custom-workout-templates", "custom_workout_templates")


def check_custom_template_block(obj: CustomTemplateBlock, _: Data) -> None:
    if not custom_workout_templates.exists(obj.template_id):
        raise APIError(ErrorCode.NOT_FOUND, "custom workout template not found")


custom_template_blocks = Resource(
    CustomTemplateBlock,
    "custom template block",
    [CREATED_BY, *catalog.block_fields()],
    tenant=True,
    soft_delete=False,
    order_by=[CustomTemplateBlock.block_order],
    check=check_custom_template_block,
)


@bp.route("/custom-template-blocks/template/<template_id>")
@views.gym_required
def read_custom_template_blocks_by_template(template_id: str) -> ResponseReturnValue:
    template = custom_workout_templates.get(template_id)
    blocks = custom_template_blocks.list(CustomTemplateBlock.template_id == template.id)
    return views.success(
        [to_dict(b) for b in blocks], "Custom template blocks retrieved successfully"
    )


custom_template_blocks.register(
    bp, "/custom-template-blocks", "custom_template_blocks", listable=False
)
