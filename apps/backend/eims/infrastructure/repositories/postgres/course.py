"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/course.py
============================================================
Class: PostgresCourseRepository

Responsibilities:
  - Persistir el agregado Course con sus inscripciones embebidas (JSONB).
  - Listados paginados / por instructor / por estudiante / por estado.
  - Escritura optimista de inscripciones: UPDATE ... WHERE version = %s.

Collaborators:
  - PostgresRepositoryBase (pool + errores consistentes)
  - domain.entities.Course, Enrollment, EnrollmentStatus
  - psycopg.types.json.Jsonb (adaptación de parámetros JSONB)
  - Tabla: courses (índice único en course_code, GIN en enrollments)

Constraints / Notes:
  - Sin lógica de negocio: la máquina de estados vive en domain/application.
  - Filtros sobre el JSONB con el operador de contención @> (usa el GIN).
  - Orden determinístico: created_at ASC, course_code ASC.
============================================================
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from psycopg.types.json import Jsonb

from ....crosscutting.exceptions import DatabaseError
from ....domain.entities import (
    Course,
    Enrollment,
    EnrollmentStatus,
    normalize_course_code,
)
from .base import PostgresRepositoryBase


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_dt(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def enrollment_to_json(enrollment: Enrollment) -> dict[str, Any]:
    return {
        "student_id": str(enrollment.student_id),
        "student_name": enrollment.student_name,
        "student_email": enrollment.student_email,
        "department": enrollment.department,
        "status": enrollment.status.value,
        "enrollment_date": _iso(enrollment.enrollment_date),
        "updated_at": _iso(enrollment.updated_at),
    }


def enrollment_from_json(data: dict[str, Any]) -> Enrollment:
    try:
        updated_at = _parse_dt(data.get("updated_at"))
        # R: documentos viejos sin enrollment_date usan updated_at; sin ninguno es corrupto.
        enrollment_date = _parse_dt(data.get("enrollment_date")) or updated_at
        if enrollment_date is None:
            raise KeyError("enrollment_date")
        return Enrollment(
            student_id=UUID(str(data["student_id"])),
            student_name=data.get("student_name") or "",
            student_email=data.get("student_email") or "",
            department=data.get("department") or "",
            status=EnrollmentStatus(data["status"]),
            enrollment_date=enrollment_date,
            updated_at=updated_at,
        )
    except (KeyError, ValueError) as exc:
        raise DatabaseError(f"Invalid enrollment document in database: {exc}") from exc


class PostgresCourseRepository(PostgresRepositoryBase):
    """R: Implementación PostgreSQL del repositorio de cursos."""

    _SELECT_COLUMNS = """
        id, title, course_code, credits, instructor_id,
        enrollments, version, created_at, updated_at
    """

    _ORDER_BY = "ORDER BY created_at ASC, course_code ASC"

    # =========================================================
    # Mapping
    # =========================================================
    def _row_to_course(self, row: tuple) -> Course:
        (
            course_id,
            title,
            course_code,
            credits,
            instructor_id,
            enrollments,
            version,
            created_at,
            updated_at,
        ) = row

        return Course(
            id=course_id,
            title=title,
            course_code=course_code,
            credits=credits,
            instructor_id=instructor_id,
            enrollments=[enrollment_from_json(e) for e in (enrollments or [])],
            version=version,
            created_at=created_at,
            updated_at=updated_at,
        )

    def _select_courses(
        self,
        *,
        where_sql: str = "",
        params: list[object] | None = None,
        suffix_sql: str = "",
        context_msg: str,
        extra: dict | None = None,
    ) -> list[Course]:
        """
        R: SELECT con orden determinístico.

        where_sql / suffix_sql se construyen SOLO desde este repositorio.
        """
        rows = self._fetchall(
            query=f"""
                SELECT {self._SELECT_COLUMNS}
                FROM courses
                {where_sql}
                {self._ORDER_BY}
                {suffix_sql}
            """,
            params=params or [],
            context_msg=context_msg,
            extra=extra or {},
        )
        return [self._row_to_course(r) for r in rows]

    # =========================================================
    # Escrituras
    # =========================================================
    def create_course(self, course: Course) -> bool:
        row = self._fetchone(
            query="""
                INSERT INTO courses (
                    id, title, course_code, credits, instructor_id,
                    enrollments, version, created_at, updated_at
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, NOW(), NOW())
                ON CONFLICT (course_code) DO NOTHING
                RETURNING id
            """,
            params=(
                course.id,
                course.title,
                normalize_course_code(course.course_code),
                course.credits,
                course.instructor_id,
                Jsonb([enrollment_to_json(e) for e in course.enrollments]),
                course.version,
            ),
            context_msg="PostgresCourseRepository: Failed to create course",
            extra={"course_id": str(course.id)},
        )
        return row is not None

    def save_enrollments(
        self,
        course_id: UUID,
        enrollments: List[Enrollment],
        *,
        expected_version: int,
    ) -> Optional[Course]:
        row = self._fetchone(
            query=f"""
                UPDATE courses
                SET enrollments = %s,
                    version = version + 1,
                    updated_at = NOW()
                WHERE id = %s AND version = %s
                RETURNING {self._SELECT_COLUMNS}
            """,
            params=(
                Jsonb([enrollment_to_json(e) for e in enrollments]),
                course_id,
                expected_version,
            ),
            context_msg="PostgresCourseRepository: Failed to save enrollments",
            extra={"course_id": str(course_id), "expected_version": expected_version},
        )
        return self._row_to_course(row) if row else None

    # =========================================================
    # Lecturas
    # =========================================================
    def get_course(self, course_id: UUID) -> Optional[Course]:
        courses = self._select_courses(
            where_sql="WHERE id = %s",
            params=[course_id],
            context_msg="PostgresCourseRepository: Failed to load course",
            extra={"course_id": str(course_id)},
        )
        return courses[0] if courses else None

    def get_course_by_code(self, course_code: str) -> Optional[Course]:
        courses = self._select_courses(
            where_sql="WHERE course_code = %s",
            params=[normalize_course_code(course_code)],
            context_msg="PostgresCourseRepository: Failed to load course by code",
            extra={"course_code": course_code},
        )
        return courses[0] if courses else None

    def list_courses(self, *, offset: int = 0, limit: int = 10) -> List[Course]:
        return self._select_courses(
            suffix_sql="OFFSET %s LIMIT %s",
            params=[max(0, offset), max(0, limit)],
            context_msg="PostgresCourseRepository: Failed to list courses",
            extra={"offset": offset, "limit": limit},
        )

    def count_courses(self) -> int:
        row = self._fetchone(
            query="SELECT COUNT(*) FROM courses",
            params=(),
            context_msg="PostgresCourseRepository: Failed to count courses",
            extra={},
        )
        return int(row[0]) if row else 0

    def list_courses_by_instructor(self, instructor_id: UUID) -> List[Course]:
        return self._select_courses(
            where_sql="WHERE instructor_id = %s",
            params=[instructor_id],
            context_msg="PostgresCourseRepository: Failed to list instructor courses",
            extra={"instructor_id": str(instructor_id)},
        )

    def list_courses_for_student(self, student_id: UUID) -> List[Course]:
        return self._select_courses(
            where_sql="WHERE enrollments @> %s",
            params=[Jsonb([{"student_id": str(student_id)}])],
            context_msg="PostgresCourseRepository: Failed to list student courses",
            extra={"student_id": str(student_id)},
        )

    def list_courses_with_enrollment_status(
        self, status: EnrollmentStatus
    ) -> List[Course]:
        return self._select_courses(
            where_sql="WHERE enrollments @> %s",
            params=[Jsonb([{"status": EnrollmentStatus(status).value}])],
            context_msg="PostgresCourseRepository: Failed to list courses by status",
            extra={"status": EnrollmentStatus(status).value},
        )
