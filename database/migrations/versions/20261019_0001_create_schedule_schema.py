"""create schedule schema

Revision ID: 20261019_0001
Revises: None
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


ENTITY_KINDS = ("user", "role", "faculty", "discipline", "teacher", "type", "audithoria", "schedule")


def _timestamps(with_updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now())]
    if with_updated:
        columns.append(sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True))
    return columns


def upgrade() -> None:
    op.create_table(
        "roles",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("value", sa.String(length=50), nullable=False),
    )
    op.create_index("ix_roles_value", "roles", ["value"], unique=True)

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("roles", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "faculties",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_faculties_name", "faculties", ["name"], unique=True)

    op.create_table(
        "groups",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("course", sa.String(length=10), nullable=False),
        sa.Column(
            "faculty_id",
            sa.String(length=36),
            sa.ForeignKey("faculties.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(with_updated=False),
    )
    op.create_index("ix_groups_name", "groups", ["name"], unique=True)
    op.create_index("ix_groups_faculty_id", "groups", ["faculty_id"])

    op.create_table(
        "teachers",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("surname", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=True),
        sa.Column("patronymic", sa.String(length=100), nullable=True),
        sa.Column("academic_hours", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("accumulated_hours", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
        sa.UniqueConstraint("surname", "name", "patronymic", name="uq_teachers_full_name"),
    )
    op.create_index("ix_teachers_surname", "teachers", ["surname"])

    op.create_table(
        "teacher_burdens",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "teacher_id",
            sa.String(length=36),
            sa.ForeignKey("teachers.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("month", sa.Date(), nullable=False),
        sa.Column("hours", sa.Integer(), nullable=True),
    )
    op.create_index("ix_teacher_burdens_teacher_id", "teacher_burdens", ["teacher_id"])

    op.create_table(
        "disciplines",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("academic_hours", sa.Integer(), nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_disciplines_name", "disciplines", ["name"], unique=True)

    op.create_table(
        "discipline_groups",
        sa.Column(
            "discipline_id",
            sa.String(length=36),
            sa.ForeignKey("disciplines.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("group_id", sa.String(length=36), sa.ForeignKey("groups.id", ondelete="CASCADE"), primary_key=True),
    )
    op.create_table(
        "discipline_teachers",
        sa.Column(
            "discipline_id",
            sa.String(length=36),
            sa.ForeignKey("disciplines.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "teacher_id",
            sa.String(length=36),
            sa.ForeignKey("teachers.id", ondelete="CASCADE"),
            primary_key=True,
        ),
    )

    op.create_table(
        "audithories",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("pc", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_audithories_name", "audithories", ["name"], unique=True)

    op.create_table(
        "lesson_types",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
    )
    op.create_index("ix_lesson_types_name", "lesson_types", ["name"], unique=True)

    op.create_table(
        "schedule_entries",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("group_id", sa.String(length=36), sa.ForeignKey("groups.id"), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_schedule_entries_date", "schedule_entries", ["date"])
    op.create_index("ix_schedule_entries_group_id", "schedule_entries", ["group_id"])

    op.create_table(
        "schedule_items",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column(
            "entry_id",
            sa.String(length=36),
            sa.ForeignKey("schedule_entries.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("number", sa.Integer(), nullable=False),
        sa.Column("discipline_id", sa.String(length=36), sa.ForeignKey("disciplines.id"), nullable=False),
        sa.Column("teacher_id", sa.String(length=36), sa.ForeignKey("teachers.id"), nullable=False),
        sa.Column("type_id", sa.String(length=36), sa.ForeignKey("lesson_types.id"), nullable=False),
        sa.Column("audithoria_id", sa.String(length=36), sa.ForeignKey("audithories.id"), nullable=False),
        sa.UniqueConstraint("date", "number", "teacher_id", name="uq_schedule_items_teacher_slot"),
        sa.UniqueConstraint("date", "number", "audithoria_id", name="uq_schedule_items_audithoria_slot"),
    )
    op.create_index("ix_schedule_items_entry_id", "schedule_items", ["entry_id"])
    op.create_index("ix_schedule_items_teacher_id", "schedule_items", ["teacher_id"])
    op.create_index("ix_schedule_items_audithoria_id", "schedule_items", ["audithoria_id"])

    op.create_table(
        "activity_logs",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("actor_id", sa.String(length=36), nullable=True),
        sa.Column(
            "entity",
            sa.Enum(*ENTITY_KINDS, name="entity_kind", native_enum=False, length=20),
            nullable=False,
        ),
        sa.Column("entity_id", sa.String(length=36), nullable=False),
        sa.Column("action", sa.String(length=32), nullable=False),
        sa.Column("details", sa.JSON(), nullable=False),
        *_timestamps(with_updated=False),
    )
    for column in ("actor_id", "entity", "created_at"):
        op.create_index(f"ix_activity_logs_{column}", "activity_logs", [column])


def downgrade() -> None:
    for column in ("created_at", "entity", "actor_id"):
        op.drop_index(f"ix_activity_logs_{column}", table_name="activity_logs")
    op.drop_table("activity_logs")
    for index in ("ix_schedule_items_audithoria_id", "ix_schedule_items_teacher_id", "ix_schedule_items_entry_id"):
        op.drop_index(index, table_name="schedule_items")
    op.drop_table("schedule_items")
    op.drop_index("ix_schedule_entries_group_id", table_name="schedule_entries")
    op.drop_index("ix_schedule_entries_date", table_name="schedule_entries")
    op.drop_table("schedule_entries")
    op.drop_index("ix_lesson_types_name", table_name="lesson_types")
    op.drop_table("lesson_types")
    op.drop_index("ix_audithories_name", table_name="audithories")
    op.drop_table("audithories")
    op.drop_table("discipline_teachers")
    op.drop_table("discipline_groups")
    op.drop_index("ix_disciplines_name", table_name="disciplines")
    op.drop_table("disciplines")
    op.drop_index("ix_teacher_burdens_teacher_id", table_name="teacher_burdens")
    op.drop_table("teacher_burdens")
    op.drop_index("ix_teachers_surname", table_name="teachers")
    op.drop_table("teachers")
    op.drop_index("ix_groups_faculty_id", table_name="groups")
    op.drop_index("ix_groups_name", table_name="groups")
    op.drop_table("groups")
    op.drop_index("ix_faculties_name", table_name="faculties")
    op.drop_table("faculties")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
    op.drop_index("ix_roles_value", table_name="roles")
    op.drop_table("roles")
