from __future__ import annotations

import datetime
import enum
import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Text,
    UniqueConstraint,
    Uuid,
    column,
    text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

LIVE = text("deleted_at IS NULL")


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


def choice(enum_class: type[enum.Enum], name: str) -> Enum:
    return Enum(
        enum_class,
        name=name,
        native_enum=False,
        create_constraint=True,
        values_callable=lambda e: [m.value for m in e],
    )


def unique_live(table: str, *columns: str) -> Index:
    """Unique index ignoring soft-deleted rows."""
    return Index(
        f"uq_{table}_{'_'.join(columns)}",
        *columns,
        unique=True,
        postgresql_where=LIVE,
        sqlite_where=LIVE,
    )


class Base(DeclarativeBase):
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class DifficultyLevel(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ExerciseType(str, enum.Enum):
    STRENGTH = "strength"
    CARDIO = "cardio"
    FLEXIBILITY = "flexibility"
    BALANCE = "balance"
    FUNCTIONAL = "functional"


class EquipmentCategory(str, enum.Enum):
    FREE_WEIGHTS = "free_weights"
    MACHINES = "machines"
    CARDIO = "cardio"
    ACCESSORIES = "accessories"
    BODYWEIGHT = "bodyweight"


class BodyPart(str, enum.Enum):
    UPPER_BODY = "upper_body"
    LOWER_BODY = "lower_body"
    CORE = "core"
    FULL_BODY = "full_body"


class BlockType(str, enum.Enum):
    WARMUP = "warmup"
    MAIN = "main"
    CORE = "core"
    CARDIO = "cardio"
    COOLDOWN = "cooldown"
    CUSTOM = "custom"


class TargetAudience(str, enum.Enum):
    WEIGHT_LOSS = "weight_loss"
    MUSCLE_BUILDING = "muscle_building"
    ENDURANCE = "endurance"
    STRENGTH = "strength"
    FLEXIBILITY = "flexibility"
    GENERAL_FITNESS = "general_fitness"
    REHABILITATION = "rehabilitation"


class Timestamps:
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class SoftDelete:
    deleted_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class Gym(Timestamps, SoftDelete, Base):
    __tablename__ = "gym"
    __table_args__ = (unique_live("gym", "domain"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    domain: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False)
    address: Mapped[str] = mapped_column(String, nullable=False)
    phone: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Admin(Timestamps, Base):
    __tablename__ = "admin"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    username: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    last_login_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )


class RefreshToken(Base):
    __tablename__ = "refresh_token"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    admin_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("admin.id", ondelete="CASCADE"), nullable=False
    )
    token_hash: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    expires_at: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    revoked_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class Equipment(Timestamps, SoftDelete, Base):
    __tablename__ = "equipment"
    __table_args__ = (unique_live("equipment", "name"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[EquipmentCategory] = mapped_column(
        choice(EquipmentCategory, "category"), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class MuscularGroup(Timestamps, SoftDelete, Base):
    __tablename__ = "muscular_group"
    __table_args__ = (unique_live("muscular_group", "name"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    body_part: Mapped[BodyPart] = mapped_column(choice(BodyPart, "body_part"), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Exercise(Timestamps, SoftDelete, Base):
    __tablename__ = "exercise"
    __table_args__ = (unique_live("exercise", "name"),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
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
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    equipment_links: Mapped[list[ExerciseEquipment]] = relationship(
        "ExerciseEquipment", lazy="selectin", viewonly=True
    )
    muscular_group_links: Mapped[list[ExerciseMuscularGroup]] = relationship(
        "ExerciseMuscularGroup", lazy="selectin", viewonly=True
    )


class ExerciseEquipment(Base):
    __tablename__ = "exercise_equipment"
    __table_args__ = (
        UniqueConstraint("exercise_id", "equipment_id", name="uq_exercise_equipment_pair"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("exercise.id", ondelete="CASCADE"), nullable=False
    )
    equipment_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("equipment.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class ExerciseMuscularGroup(Base):
    __tablename__ = "exercise_muscular_group"
    __table_args__ = (
        UniqueConstraint(
            "exercise_id", "muscular_group_id", name="uq_exercise_muscular_group_pair"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    exercise_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("exercise.id", ondelete="CASCADE"), nullable=False
    )
    muscular_group_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("muscular_group.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime.datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class WorkoutTemplate(Timestamps, SoftDelete, Base):
    __tablename__ = "workout_template"
    __table_args__ = (
        unique_live("workout_template", "name"),
        CheckConstraint(
            column("estimated_duration_minutes") > 0, name="estimated_duration_minutes_gt_0"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    difficulty_level: Mapped[DifficultyLevel] = mapped_column(
        choice(DifficultyLevel, "difficulty_level"), nullable=False
    )
    estimated_duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    target_audience: Mapped[TargetAudience | None] = mapped_column(
        choice(TargetAudience, "target_audience"), nullable=True
    )
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class TemplateBlock(Timestamps, Base):
    __tablename__ = "template_block"
    __table_args__ = (
        UniqueConstraint("template_id", "block_order", name="uq_template_block_order"),
        CheckConstraint(column("block_order") > 0, name="block_order_gt_0"),
        CheckConstraint(column("exercise_count") > 0, name="exercise_count_gt_0"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    template_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("workout_template.id", ondelete="CASCADE"), nullable=False
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
