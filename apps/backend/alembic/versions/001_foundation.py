"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema completo desde cero (migración fundacional).
  - Definir tablas, constraints e índices del portal de inscripciones.

Collaborators:
  - PostgreSQL 14+
  - Alembic (framework de migraciones)
  - Repositorios Postgres (usan este esquema como contrato)

Policy:
  - Esta es una migración BASELINE. Downgrade NO soportado.
  - Convención de nombres (constraints / indexes):
      pk_<tabla>                         - Primary keys
      uq_<tabla>_<col>                   - Unique constraints
      ix_<tabla>_<col>                   - Indexes
      fk_<tabla>_<col>__<ref_tabla>      - Foreign keys
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Crea el esquema fundacional.

    Orden:
      1) Identity (users)
      2) Courses (inscripciones embebidas en JSONB + versión para CAS)
      3) OTP challenges
    """

    # =========================================================
    # 1) IDENTITY (users)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("full_name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("department", sa.String(200), nullable=False),
        sa.Column(
            "is_faculty_advisor",
            sa.Boolean,
            nullable=False,
            server_default=sa.text("false"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("email", name="uq_users_email"),
        sa.CheckConstraint(
            "category IN ('Admin','Instructor','Student')",
            name="ck_users_category",
        ),
    )
    op.create_index("ix_users_category", "users", ["category"])

    # =========================================================
    # 2) COURSES
    # =========================================================
    op.create_table(
        "courses",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("course_code", sa.String(32), nullable=False),
        sa.Column("credits", sa.Integer, nullable=False),
        sa.Column("instructor_id", postgresql.UUID(as_uuid=True), nullable=False),
        # Inscripciones embebidas: [{student_id, student_name, ..., status}]
        sa.Column(
            "enrollments",
            postgresql.JSONB,
            nullable=False,
            server_default=sa.text("'[]'::jsonb"),
        ),
        # Contador para escrituras compare-and-swap de enrollments.
        sa.Column(
            "version", sa.Integer, nullable=False, server_default=sa.text("1")
        ),
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
        sa.PrimaryKeyConstraint("id", name="pk_courses"),
        sa.UniqueConstraint("course_code", name="uq_courses_course_code"),
        sa.ForeignKeyConstraint(
            ["instructor_id"],
            ["users.id"],
            name="fk_courses_instructor_id__users",
        ),
        sa.CheckConstraint("credits > 0", name="ck_courses_credits_positive"),
    )
    op.create_index("ix_courses_instructor_id", "courses", ["instructor_id"])
    op.create_index("ix_courses_created_at", "courses", ["created_at"])

    # Soporta filtros `enrollments @> '[{"student_id": ...}]'` y por status.
    op.execute(
        "CREATE INDEX ix_courses_enrollments ON courses "
        "USING GIN (enrollments jsonb_path_ops)"
    )

    # =========================================================
    # 3) OTP CHALLENGES
    # =========================================================
    op.create_table(
        "otp_challenges",
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("purpose", sa.String(20), nullable=False),
        sa.Column("code_hash", sa.String(64), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "attempts", sa.Integer, nullable=False, server_default=sa.text("0")
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("email", "purpose", name="pk_otp_challenges"),
        sa.CheckConstraint(
            "purpose IN ('signup','login')", name="ck_otp_challenges_purpose"
        ),
    )
    op.create_index("ix_otp_challenges_expires_at", "otp_challenges", ["expires_at"])


def downgrade() -> None:
    """
    Downgrade NO soportado para la migración fundacional.
    """
    raise NotImplementedError(
        "Baseline: downgrade no soportado por política. "
        "Para resetear la base de datos, recrear el schema y correr upgrade head."
    )
