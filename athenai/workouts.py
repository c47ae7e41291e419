"""Concrete workouts of a gym and their assignment to members."""

from __future__ import annotations

from flask import Blueprint
from flask.typing import ResponseReturnValue

from athenai import catalog, custom, users, validation, views
from athenai.crud import Data, Field, Resource, parse_id
from athenai.errors import APIError, ErrorCode
from athenai.models import DifficultyLevel
from athenai.serialization import to_dict
from athenai.tenant_models import (
    CustomMemberWorkout,
    CustomWorkoutExercise,
    CustomWorkoutInstance,
    MemberWorkoutStatus,
    Source,
)

bp = Blueprint("workouts", __name__)

CREATED_BY = custom.CREATED_BY


def resolve_source(  # noqa: PLR0913
    obj: object,
    data: Data,
    source_attr: str,
    public_attr: str,
    gym_attr: str,
    resources: dict[Source, Resource],
) -> None:
    """Ensure that exactly the reference selected by the source is set and exists.

    The reference of the other source must not be given in the request and is cleared, so that a
    change of the source replaces the reference.
    """
    source = getattr(obj, source_attr)
    own, other = (public_attr, gym_attr) if source is Source.PUBLIC else (gym_attr, public_attr)

    if data.get(other) is not None:
        raise APIError(
            ErrorCode.BAD_REQUEST,
            f"'{other}' must not be set if '{source_attr}' is '{source.value}'",
        )

    setattr(obj, other, None)
    reference = getattr(obj, own)

    if reference is None:
        raise APIError(
            ErrorCode.BAD_REQUEST, f"'{own}' is required if '{source_attr}' is '{source.value}'"
        )

    resource = resources[source]

    if not resource.exists(reference):
        raise APIError(ErrorCode.NOT_FOUND, f"{resource.noun} not found")


def check_workout_instance(obj: CustomWorkoutInstance, data: Data) -> None:
    resolve_source(
        obj,
        data,
        "template_source",
        "public_template_id",
        "gym_template_id",
        {Source.PUBLIC: catalog.workout_templates, Source.GYM: custom.custom_workout_templates},
    )


workout_instances = Resource(
    CustomWorkoutInstance,
    "custom workout instance",
    [
        CREATED_BY,
        Field("name", validation.text, required=True),
        Field("description", validation.string),
        Field("template_source", validation.choice(Source), required=True),
        Field("public_template_id", validation.identifier),
        Field("gym_template_id", validation.identifier),
        Field("difficulty_level", validation.choice(DifficultyLevel), required=True),
        Field("estimated_duration_minutes", validation.integer(minimum=1)),
    ],
    tenant=True,
    check=check_workout_instance,
)


def check_workout_exercise(obj: CustomWorkoutExercise, data: Data) -> None:
    if not workout_instances.exists(obj.workout_instance_id):
        raise APIError(ErrorCode.NOT_FOUND, f"{workout_instances.noun} not found")

    resolve_source(
        obj,
        data,
        "exercise_source",
        "public_exercise_id",
        "gym_exercise_id",
        {Source.PUBLIC: catalog.exercises, Source.GYM: custom.custom_exercises},
    )

    if obj.reps_min is not None and obj.reps_max is not None and obj.reps_min > obj.reps_max:
        raise APIError(ErrorCode.BAD_REQUEST, "'reps_min' must not be greater than 'reps_max'")


workout_exercises = Resource(
    CustomWorkoutExercise,
    "custom workout exercise",
    [
        CREATED_BY,
        Field("workout_instance_id", validation.identifier, required=True, update=False),
        Field("exercise_source", validation.choice(Source), required=True),
        Field("public_exercise_id", validation.identifier),
        Field("gym_exercise_id", validation.identifier),
        Field("block_name", validation.text, required=True),
        Field("exercise_order", validation.integer(minimum=1), required=True),
        Field("sets", validation.integer(minimum=1)),
        Field("reps_min", validation.integer(minimum=1)),
        Field("reps_max", validation.integer(minimum=1)),
        Field("weight_kg", validation.number(minimum=0, maximum=999.99)),
        Field("duration_seconds", validation.integer(minimum=1)),
        Field("rest_seconds", validation.integer(minimum=0)),
        Field("notes", validation.string),
    ],
    tenant=True,
    soft_delete=False,
    order_by=[CustomWorkoutExercise.block_name, CustomWorkoutExercise.exercise_order],
    check=check_workout_exercise,
)


@bp.route("/custom-workout-instances/<id_>/summary")
@views.gym_required
def read_workout_instance_summary(id_: str) -> ResponseReturnValue:
    instance = workout_instances.get(id_)
    exercises = sorted(
        workout_exercises.list(CustomWorkoutExercise.workout_instance_id == instance.id),
        key=lambda e: (e.exercise_order, e.block_name),
    )
    return views.success(
        {
            **to_dict(instance),
            "total_exercises": len(exercises),
            "total_sets": sum(e.sets for e in exercises if e.sets is not None),
            "block_names": list(dict.fromkeys(e.block_name for e in exercises)),
            "calculated_duration_minutes": sum(
                (e.duration_seconds or 0) + (e.rest_seconds or 0) for e in exercises
            )
            // 60,
            "workout_stats": workout_stats(exercises),
            "exercises": [to_dict(e) for e in exercises],
        },
        "Custom workout instance summary retrieved successfully",
    )


def workout_stats(exercises: list[CustomWorkoutExercise]) -> dict[str, float]:
    """Estimate the training volume of a workout.

    The weight is the sum of sets times weight of all lines. The reps of a line are the mean of
    its rep range, lines without a complete range are ignored.
    """
    sets = sum(e.sets for e in exercises if e.sets is not None)
    reps = [
        (e.reps_min + e.reps_max) / 2
        for e in exercises
        if e.reps_min is not None and e.reps_max is not None
    ]
    return {
        "total_estimated_weight": sum(
            e.sets * e.weight_kg
            for e in exercises
            if e.sets is not None and e.weight_kg is not None
        ),
        "average_sets_per_exercise": sets / len(exercises) if exercises else 0.0,
        "average_reps_per_set": sum(reps) / len(reps) if reps else 0.0,
    }


@bp.route("/custom-workout-exercises/workout/<instance_id>")
@views.gym_required
def read_workout_exercises_by_instance(instance_id: str) -> ResponseReturnValue:
    instance = workout_instances.get(instance_id)
    exercises = workout_exercises.list(CustomWorkoutExercise.workout_instance_id == instance.id)
    return views.success(
        [to_dict(e) for e in exercises], "Custom workout exercises retrieved successfully"
    )


workout_instances.register(bp, "/custom-workout-instances", "custom_workout_instances")
workout_exercises.register(
    bp, "/custom-workout-exercises", "custom_workout_exercises", listable=False
)


def check_member_workout(obj: CustomMemberWorkout, _: Data) -> None:
    if not users.users.exists(obj.member_id):
        raise APIError(ErrorCode.NOT_FOUND, "member not found")

    if not workout_instances.exists(obj.workout_instance_id):
        raise APIError(ErrorCode.NOT_FOUND, f"{workout_instances.noun} not found")


member_workouts = Resource(
    CustomMemberWorkout,
    "custom member workout",
    [
        CREATED_BY,
        Field("member_id", validation.identifier, required=True, update=False),
        Field("workout_instance_id", validation.identifier, required=True, update=False),
        Field("scheduled_date", validation.date, required=True),
        Field("started_at", validation.timestamp),
        Field("completed_at", validation.timestamp),
        Field(
            "status",
            validation.choice(MemberWorkoutStatus),
            default=MemberWorkoutStatus.SCHEDULED,
            create=False,
        ),
        Field("notes", validation.string),
        Field("rating", validation.integer(minimum=1, maximum=5)),
    ],
    tenant=True,
    order_by=[CustomMemberWorkout.scheduled_date, CustomMemberWorkout.created_at],
    check=check_member_workout,
)


@bp.route("/custom-member-workouts/member/<member_id>")
@views.gym_required
def read_member_workouts_by_member(member_id: str) -> ResponseReturnValue:
    parsed = parse_id(member_id)
    if parsed is None or not users.users.exists(parsed):
        raise APIError(ErrorCode.NOT_FOUND, "member not found")
    workouts = member_workouts.list(CustomMemberWorkout.member_id == parsed)
    return views.success(
        [to_dict(w) for w in workouts], "Custom member workouts retrieved successfully"
    )


member_workouts.register(
    bp, "/custom-member-workouts", "custom_member_workouts", listable=False
)
