"""Tables that exist once per gym.

All tables are declared in the placeholder schema `tenant`. The actual schema of a gym is
substituted at execution time by means of a schema translate map (see `athenai.tenancy`).
"""

from __future__ import annotations

import datetime
import enum
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    column,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from athenai.models import (
    NAMING_CONVENTION,
    BlockType,
    DifficultyLevel,
    ExerciseType,
    SoftDelete,
    TargetAudience,
    Timestamps,
    choice,
    unique_live,
    utcnow,
)

TENANT_SCHEMA = "tenant"


class TenantBase(DeclarativeBase):
    metadata = MetaData(schema=TENANT_SCHEMA, naming_convention=NAMING_CONVENTION)


class Role(str, enum.Enum):
    PLATFORM_ADMIN = "platform_admin"
    GYM_ADMIN = "gym_admin"
    TRAINER = "trainer"
    MEMBER = "member"
    GUEST = "guest"


class TrainingPhase(str, enum.Enum):
    WEIGHT_LOSS = "weight_loss"
    MUSCLE_GAIN = "muscle_gain"
    CARDIO_IMPROVE = "cardio_improve"
    MAINTENANCE = "maintenance"


class Motivation(str, enum.Enum):
    MEDICAL_RECOMMENDATION = "medical_recommendation"
    SELF_IMPROVEMENT = "self_improvement"
    COMPETITION = "competition"
    REHABILITATION = "rehabilitation"
    WELLBEING = "wellbeing"


class SpecialSituation(str, enum.Enum):
    PREGNANCY = "pregnancy"
    POST_PARTUM = "post_partum"
    INJURY_RECOVERY = "injury_recovery"
    CHRONIC_CONDITION = "chronic_condition"
    ELDERLY_POPULATION = "elderly_population"
    PHYSICAL_LIMITATION = "physical_limitation"
    NONE = "none"


class CustomEquipmentCategory(str, enum.Enum):
    FREE_WEIGHTS = "free_weights"
    MACHINES = "machines"
    CARDIO = "cardio"
    ACCESSORIES = "accessories"
    BODYWEIGHT = "bodyweight"
    CUSTOM = "custom"


class Source(str, enum.Enum):
    PUBLIC = "public"
    GYM = "gym"


class MemberWorkoutStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"


class User(Timestamps, SoftDelete, TenantBase):
    __tablename__ = "user"
    __table_args__ = (unique_live("user", "username"), unique_live("user", "email"))

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[Role] = mapped_column(choice(Role, "role"), nullable=False, default=Role.MEMBER)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    training_phase: Mapped[TrainingPhase | None] = mapped_column(
        choice(TrainingPhase, "training_phase"), nullable=True
    )
    motivation: Mapped[Motivation | None] = mapped_column(
        choice(Motivation, "motivation"), nullable=True
    )
    special_situation: Mapped[SpecialSituation | None] = mapped_column(
        choice(SpecialSituation, "special_situation"), nullable=True
    )


class CustomEquipment(Timestamps, SoftDelete, TenantBase):
    __tablename__ = "custom_equipment"
    __table_args__ = (unique_live("custom_equipment", "name"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[CustomEquipmentCategory] = mapped_column(
        choice(CustomEquipmentCategory, "category"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class CustomExercise(Timestamps, SoftDelete, TenantBase):
    __tablename__ = "custom_exercise"
    __table_args__ = (unique_live("custom_exercise", "name"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    synonyms: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    difficulty_level: Mapped[DifficultyLevel] = mapped_column(
        choice(DifficultyLevel, "difficulty_level"), nullable=False
    )
    exercise_type: Mapped[ExerciseType] = mapped_column(
        choice(ExerciseType, "exercise_type"), nullable=False
    )
    instructions: Mapped[str] = mapped_column(Text, nullable=False)
    video_url: Mapped[str | None] = mapped_column(String, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    equipment_links: Mapped[list[CustomExerciseEquipment]] = relationship(
        "CustomExerciseEquipment", lazy="selectin", viewonly=True
    )
    muscular_group_links: Mapped[list[CustomExerciseMuscularGroup]] = relationship(
        "CustomExerciseMuscularGroup", lazy="selectin", viewonly=True
    )


class CustomExerciseEquipment(TenantBase):
    """Link between a custom exercise and either custom or public equipment."""

    __tablename__ = "custom_exercise_equipment"
    __table_args__ = (
        UniqueConstraint(
            "custom_exercise_id", "equipment_id", name="uq_custom_exercise_equipment_pair"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    custom_exercise_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey(f"{TENANT_SCHEMA}.custom_exercise.id", ondelete="CASCADE"), nullable=False
    )
    equipment_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class CustomExerciseMuscularGroup(TenantBase):
    __tablename__ = "custom_exercise_muscular_group"
    __table_args__ = (
        UniqueConstraint(
            "custom_exercise_id",
            "muscular_group_id",
            name="uq_custom_exercise_muscular_group_pair",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    custom_exercise_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey(f"{TENANT_SCHEMA}.custom_exercise.id", ondelete="CASCADE"), nullable=False
    )
    muscular_group_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class CustomWorkoutTemplate(Timestamps, SoftDelete, TenantBase):
    __tablename__ = "custom_workout_template"
    __table_args__ = (
        unique_live("custom_workout_template", "name"),
        CheckConstraint(
            column("estimated_duration_minutes") > 0, name="estimated_duration_minutes_gt_0"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    difficulty_level: Mapped[DifficultyLevel] = mapped_column(
        choice(DifficultyLevel, "difficulty_level"), nullable=False
    )
    estimated_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    target_audience: Mapped[TargetAudience | None] = mapped_column(
        choice(TargetAudience, "target_audience"), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class CustomTemplateBlock(Timestamps, TenantBase):
    __tablename__ = "custom_template_block"
    __table_args__ = (
        UniqueConstraint("template_id", "block_order", name="uq_custom_template_block_order"),
        CheckConstraint(column("block_order") > 0, name="block_order_gt_0"),
        CheckConstraint(column("exercise_count") > 0, name="exercise_count_gt_0"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    template_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey(f"{TENANT_SCHEMA}.custom_workout_template.id", ondelete="CASCADE"),
        nullable=False,
    )
    block_name: Mapped[str] = mapped_column(String, nullable=False)
    block_type: Mapped[BlockType] = mapped_column(choice(BlockType, "block_type"), nullable=False)
    block_order: Mapped[int] = mapped_column(Integer, nullable=False)
    exercise_count: Mapped[int] = mapped_column(Integer, nullable=False)
    estimated_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    reps: Mapped[int | None] = mapped_column(Integer, nullable=True)
    series: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rest_time_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)


class CustomWorkoutInstance(Timestamps, SoftDelete, TenantBase):
    __tablename__ = "custom_workout_instance"
    __table_args__ = (
        CheckConstraint(
            "(template_source = 'public' AND public_template_id IS NOT NULL"
            " AND gym_template_id IS NULL)"
            " OR (template_source = 'gym' AND gym_template_id IS NOT NULL"
            " AND public_template_id IS NULL)",
            name="template_source_consistent",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    template_source: Mapped[Source] = mapped_column(
        choice(Source, "template_source"), nullable=False
    )
    public_template_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    gym_template_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    difficulty_level: Mapped[DifficultyLevel] = mapped_column(
        choice(DifficultyLevel, "difficulty_level"), nullable=False
    )
    estimated_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)


class CustomWorkoutExercise(Timestamps, TenantBase):
    __tablename__ = "custom_workout_exercise"
    __table_args__ = (
        UniqueConstraint(
            "workout_instance_id",
            "block_name",
            "exercise_order",
            name="uq_custom_workout_exercise_position",
        ),
        CheckConstraint(
            "(exercise_source = 'public' AND public_exercise_id IS NOT NULL"
            " AND gym_exercise_id IS NULL)"
            " OR (exercise_source = 'gym' AND gym_exercise_id IS NOT NULL"
            " AND public_exercise_id IS NULL)",
            name="exercise_source_consistent",
        ),
        CheckConstraint(column("exercise_order") > 0, name="exercise_order_gt_0"),
        CheckConstraint(column("sets") > 0, name="sets_gt_0"),
        CheckConstraint(column("reps_min") > 0, name="reps_min_gt_0"),
        CheckConstraint(column("reps_max") > 0, name="reps_max_gt_0"),
        CheckConstraint(column("reps_min") <= column("reps_max"), name="reps_min_le_reps_max"),
        CheckConstraint(column("weight_kg") >= 0, name="weight_kg_ge_0"),
        CheckConstraint(column("duration_seconds") > 0, name="duration_seconds_gt_0"),
        CheckConstraint(column("rest_seconds") >= 0, name="rest_seconds_ge_0"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    workout_instance_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey(f"{TENANT_SCHEMA}.custom_workout_instance.id", ondelete="CASCADE"),
        nullable=False,
    )
    exercise_source: Mapped[Source] = mapped_column(
        choice(Source, "exercise_source"), nullable=False
    )
    public_exercise_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    gym_exercise_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    block_name: Mapped[str] = mapped_column(String, nullable=False)
    exercise_order: Mapped[int] = mapped_column(Integer, nullable=False)
    sets: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reps_min: Mapped[int | None] = mapped_column(Integer, nullable=True)
    reps_max: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight_kg: Mapped[float | None] = mapped_column(Numeric(5, 2, asdecimal=False), nullable=True)
    duration_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rest_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class CustomMemberWorkout(Timestamps, SoftDelete, TenantBase):
    __tablename__ = "custom_member_workout"
    __table_args__ = (
        CheckConstraint(column("rating").between(1, 5), name="rating_between_1_and_5"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    created_by: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False)
    member_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey(f"{TENANT_SCHEMA}.user.id"), nullable=False
    )
    workout_instance_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey(f"{TENANT_SCHEMA}.custom_workout_instance.id"), nullable=False
    )
    scheduled_date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    started_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    completed_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    status: Mapped[MemberWorkoutStatus] = mapped_column(
        choice(MemberWorkoutStatus, "status"),
        nullable=False,
        default=MemberWorkoutStatus.SCHEDULED,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
