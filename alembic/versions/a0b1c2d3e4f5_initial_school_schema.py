"""initial school schema

Revision ID: a0b1c2d3e4f5
Revises:
Create Date: 2026-10-19 09:00:00.000000

This migration:
1. Creates the user_role, attendance_status and registration_request_status enums
2. Creates users with the parent and teacher detail tables
3. Creates classes and students
4. Creates registration_requests (class must exist, student linked on approval)
5. Creates notifications, messages, attendance, documents and school_updates

Tables are created in dependency order so every foreign key target exists.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "a0b1c2d3e4f5"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

USER_ROLES = ("student", "parent", "teacher", "admin")
ATTENDANCE_STATUSES = ("present", "absent", "late", "excused")
REQUEST_STATUSES = ("pending", "approved", "rejected")


def _base_columns() -> list[sa.Column]:
    """Primary key and timestamps (from BaseModel)."""
    return [
        sa.Column("id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create the school schema."""
    bind = op.get_bind()

    user_role_enum = postgresql.ENUM(*USER_ROLES, name="user_role", create_type=False)
    attendance_status_enum = postgresql.ENUM(
        *ATTENDANCE_STATUSES, name="attendance_status", create_type=False
    )
    request_status_enum = postgresql.ENUM(
        *REQUEST_STATUSES, name="registration_request_status", create_type=False
    )
    user_role_enum.create(bind, checkfirst=True)
    attendance_status_enum.create(bind, checkfirst=True)
    request_status_enum.create(bind, checkfirst=True)

    # Users
    op.create_table(
        "users",
        *_base_columns(),
        sa.Column("username", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=True),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("role", user_role_enum, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
        sa.Column("last_login_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)
    op.create_index(op.f("ix_users_role"), "users", ["role"], unique=False)

    op.create_table(
        "parents",
        sa.Column("user_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("phone_number", sa.String(length=30), nullable=True),
        sa.Column("address", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )

    op.create_table(
        "teachers",
        sa.Column("user_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("subject_specialization", sa.String(length=100), nullable=True),
        sa.Column("hire_date", sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )

    # Classes and students
    op.create_table(
        "classes",
        *_base_columns(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("level", sa.String(length=50), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_classes_name_level", "classes", ["name", "level"], unique=False)

    op.create_table(
        "students",
        *_base_columns(),
        sa.Column("student_name", sa.String(length=200), nullable=False),
        sa.Column("parent_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("parent_name", sa.String(length=200), nullable=True),
        sa.Column("parent_email", sa.String(length=255), nullable=True),
        sa.Column("student_dob", sa.Date(), nullable=True),
        sa.Column("grade_level", sa.String(length=50), nullable=True),
        sa.Column("class_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("user_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["parent_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.UniqueConstraint("user_id"),
    )
    op.create_index(op.f("ix_students_parent_id"), "students", ["parent_id"], unique=False)
    op.create_index(op.f("ix_students_class_id"), "students", ["class_id"], unique=False)
    op.create_index("ix_students_student_name", "students", ["student_name"], unique=False)

    # Registration requests
    op.create_table(
        "registration_requests",
        *_base_columns(),
        sa.Column("student_name", sa.String(length=200), nullable=False),
        sa.Column("student_dob", sa.Date(), nullable=True),
        sa.Column("grade_level", sa.String(length=50), nullable=True),
        sa.Column("parent_name", sa.String(length=200), nullable=False),
        sa.Column("parent_email", sa.String(length=255), nullable=False),
        sa.Column("class_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column(
            "status",
            request_status_enum,
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "submitted_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("processed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("processed_by", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column("decision_reason", sa.Text(), nullable=True),
        sa.Column("student_id", postgresql.UUID(as_uuid=False), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["processed_by"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="SET NULL"),
    )
    op.create_index(
        "ix_registration_requests_status", "registration_requests", ["status"], unique=False
    )
    op.create_index(
        "ix_registration_requests_submitted_at",
        "registration_requests",
        ["submitted_at"],
        unique=False,
    )
    op.create_index(
        "ix_registration_requests_parent_email",
        "registration_requests",
        ["parent_email"],
        unique=False,
    )

    # Notifications and messages
    op.create_table(
        "notifications",
        *_base_columns(),
        sa.Column("user_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column(
            "notification_type",
            sa.String(length=50),
            nullable=False,
            server_default="request",
        ),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default="false"),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_notifications_user_created", "notifications", ["user_id", "created_at"], unique=False
    )

    op.create_table(
        "messages",
        *_base_columns(),
        sa.Column("from_user_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("to_user_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["from_user_id"], ["users.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["to_user_id"], ["users.id"], ondelete="CASCADE"),
    )
    op.create_index(
        "ix_messages_pair_created",
        "messages",
        ["from_user_id", "to_user_id", "created_at"],
        unique=False,
    )

    # Attendance
    op.create_table(
        "attendance",
        *_base_columns(),
        sa.Column("student_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("class_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("status", attendance_status_enum, nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["student_id"], ["students.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], ondelete="CASCADE"),
        sa.UniqueConstraint(
            "student_id", "class_id", "date", name="uq_attendance_student_class_date"
        ),
    )
    op.create_index("ix_attendance_class_date", "attendance", ["class_id", "date"], unique=False)
    op.create_index("ix_attendance_date", "attendance", ["date"], unique=False)

    # Documents and school updates
    op.create_table(
        "documents",
        *_base_columns(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("file_path", sa.String(length=500), nullable=False),
        sa.Column("class_id", postgresql.UUID(as_uuid=False), nullable=False),
        sa.Column("uploaded_by", postgresql.UUID(as_uuid=False), nullable=True),
        sa.Column(
            "uploaded_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["uploaded_by"], ["users.id"], ondelete="SET NULL"),
    )
    op.create_index(
        "ix_documents_class_uploaded", "documents", ["class_id", "uploaded_at"], unique=False
    )

    op.create_table(
        "school_updates",
        *_base_columns(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image_url", sa.String(length=500), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    """Drop the school schema."""
    op.drop_table("school_updates")
    op.drop_index("ix_documents_class_uploaded", table_name="documents")
    op.drop_table("documents")
    op.drop_index("ix_attendance_date", table_name="attendance")
    op.drop_index("ix_attendance_class_date", table_name="attendance")
    op.drop_table("attendance")
    op.drop_index("ix_messages_pair_created", table_name="messages")
    op.drop_table("messages")
    op.drop_index("ix_notifications_user_created", table_name="notifications")
    op.drop_table("notifications")
    op.drop_index("ix_registration_requests_parent_email", table_name="registration_requests")
    op.drop_index("ix_registration_requests_submitted_at", table_name="registration_requests")
    op.drop_index("ix_registration_requests_status", table_name="registration_requests")
    op.drop_table("registration_requests")
    op.drop_index("ix_students_student_name", table_name="students")
    op.drop_index(op.f("ix_students_class_id"), table_name="students")
    op.drop_index(op.f("ix_students_parent_id"), table_name="students")
    op.drop_table("students")
    op.drop_index("ix_classes_name_level", table_name="classes")
    op.drop_table("classes")
    op.drop_table("teachers")
    op.drop_table("parents")
    op.drop_index(op.f("ix_users_role"), table_name="users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")

    bind = op.get_bind()
    postgresql.ENUM(*REQUEST_STATUSES, name="registration_request_status").drop(
        bind, checkfirst=True
    )
    postgresql.ENUM(*ATTENDANCE_STATUSES, name="attendance_status").drop(bind, checkfirst=True)
    postgresql.ENUM(*USER_ROLES, name="user_role").drop(bind, checkfirst=True)
