"""
Create public tables.

Revision ID: 5d2e8c41a7b3
Revises:
Create Date: 2025-03-02

"""

import sqlalchemy as sa
from alembic import op

revision = "5d2e8c41a7b3"
down_revision = None
branch_labels = None
depends_on = None

LIVE = sa.text("deleted_at IS NULL")

DIFFICULTY_LEVELS = ("beginner", "intermediate", "advanced")


def choice(name: str, *values: str) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def timestamps() -> list[sa.Column]:  # type: ignore[type-arg]
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def create_unique_live_index(table: str, column: str) -> None:
    op.create_index(
        f"uq_{table}_{column}",
        table,
        [column],
        unique=True,
        postgresql_where=LIVE,
        sqlite_where=LIVE,
    )


def upgrade() -> None:
    op.create_table(
        "gym",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("domain", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("address", sa.String(), nullable=False),
        sa.Column("phone", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_gym")),
    )
    create_unique_live_index("gym", "domain")

    op.create_table(
        "admin",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_admin")),
        sa.UniqueConstraint("username", name=op.f("uq_admin_username")),
        sa.UniqueConstraint("email", name=op.f("uq_admin_email")),
    )

    op.create_table(
        "refresh_token",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("admin_id", sa.Uuid(), nullable=False),
        sa.Column("token_hash", sa.String(), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["admin_id"],
            ["admin.id"],
            name=op.f("fk_refresh_token_admin_id_admin"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_refresh_token")),
        sa.UniqueConstraint("token_hash", name=op.f("uq_refresh_token_token_hash")),
    )

    op.create_table(
        "equipment",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "category",
            choice(
                "category", "free_weights", "machines", "cardio", "accessories", "bodyweight"
            ),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_equipment")),
    )
    create_unique_live_index("equipment", "name")

    op.create_table(
        "muscular_group",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "body_part",
            choice("body_part", "upper_body", "lower_body", "core", "full_body"),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_muscular_group")),
    )
    create_unique_live_index("muscular_group", "name")

    op.create_table(
        "exercise",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("synonyms", sa.JSON(), nullable=False),
        sa.Column(
            "difficulty_level", choice("difficulty_level", *DIFFICULTY_LEVELS), nullable=False
        ),
        sa.Column(
            "exercise_type",
            choice("exercise_type", "strength", "cardio", "flexibility", "balance", "functional"),
            nullable=False,
        ),
        sa.Column("instructions", sa.Text(), nullable=False),
        sa.Column("video_url", sa.String(), nullable=True),
        sa.Column("image_url", sa.String(), nullable=True),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_exercise")),
    )
    create_unique_live_index("exercise", "name")

    op.create_table(
        "exercise_equipment",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("equipment_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["exercise_id"],
            ["exercise.id"],
            name=op.f("fk_exercise_equipment_exercise_id_exercise"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["equipment_id"],
            ["equipment.id"],
            name=op.f("fk_exercise_equipment_equipment_id_equipment"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_exercise_equipment")),
        sa.UniqueConstraint("exercise_id", "equipment_id", name="uq_exercise_equipment_pair"),
    )

    op.create_table(
        "exercise_muscular_group",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("exercise_id", sa.Uuid(), nullable=False),
        sa.Column("muscular_group_id", sa.Uuid(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["exercise_id"],
            ["exercise.id"],
            name=op.f("fk_exercise_muscular_group_exercise_id_exercise"),
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["muscular_group_id"],
            ["muscular_group.id"],
            name=op.f("fk_exercise_muscular_group_muscular_group_id_muscular_group"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_exercise_muscular_group")),
        sa.UniqueConstraint(
            "exercise_id", "muscular_group_id", name="uq_exercise_muscular_group_pair"
        ),
    )

    op.create_table(
        "workout_template",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column(
            "difficulty_level", choice("difficulty_level", *DIFFICULTY_LEVELS), nullable=False
        ),
        sa.Column("estimated_duration_minutes", sa.Integer(), nullable=True),
        sa.Column(
            "target_audience",
            choice(
                "target_audience",
                "weight_loss",
                "muscle_building",
                "endurance",
                "strength",
                "flexibility",
                "general_fitness",
                "rehabilitation",
            ),
            nullable=True,
        ),
        sa.Column("created_by", sa.Uuid(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        *timestamps(),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "estimated_duration_minutes > 0",
            name=op.f("ck_workout_template_estimated_duration_minutes_gt_0"),
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_workout_template")),
    )
    create_unique_live_index("workout_template", "name")

    op.create_table(
        "template_block",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("template_id", sa.Uuid(), nullable=False),
        sa.Column("block_name", sa.String(), nullable=False),
        sa.Column(
            "block_type",
            choice("block_type", "warmup", "main", "core", "cardio", "cooldown", "custom"),
            nullable=False,
        ),
        sa.Column("block_order", sa.Integer(), nullable=False),
        sa.Column("exercise_count", sa.Integer(), nullable=False),
        sa.Column("estimated_duration_minutes", sa.Integer(), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("reps", sa.Integer(), nullable=True),
        sa.Column("series", sa.Integer(), nullable=True),
        sa.Column("rest_time_seconds", sa.Integer(), nullable=True),
        *timestamps(),
        sa.CheckConstraint("block_order > 0", name=op.f("ck_template_block_block_order_gt_0")),
        sa.CheckConstraint(
            "exercise_count > 0", name=op.f("ck_template_block_exercise_count_gt_0")
        ),
        sa.ForeignKeyConstraint(
            ["template_id"],
            ["workout_template.id"],
            name=op.f("fk_template_block_template_id_workout_template"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_template_block")),
        sa.UniqueConstraint("template_id", "block_order", name="uq_template_block_order"),
    )


def downgrade() -> None:
    op.drop_table("template_block")
    op.drop_index("uq_workout_template_name", table_name="workout_template")
    op.drop_table("workout_template")
    op.drop_table("exercise_muscular_group")
    op.drop_table("exercise_equipment")
    op.drop_index("uq_exercise_name", table_name="exercise")
    op.drop_table("exercise")
    op.drop_index("uq_muscular_group_name", table_name="muscular_group")
    op.drop_table("muscular_group")
    op.drop_index("uq_equipment_name", table_name="equipment")
    op.drop_table("equipment")
    op.drop_table("refresh_token")
    op.drop_table("admin")
    op.drop_index("uq_gym_domain", table_name="gym")
    op.drop_table("gym")
