"""
============================================================
TARJETA CRC — infrastructure/repositories/in_memory/course.py
============================================================
Class: InMemoryCourseRepository

Responsibilities:
  - Almacenar cursos (con sus inscripciones embebidas) en memoria.
  - Replicar la unicidad de course_code y el compare-and-swap por versión
    que el repo Postgres resuelve con UPDATE ... WHERE version = %s.
  - Mantener ordering determinístico alineado con Postgres:
      ORDER BY created_at ASC, course_code ASC

Collaborators:
  - domain.entities.Course, Enrollment, EnrollmentStatus
  - domain.repositories.CourseRepository (contrato a implementar)

Constraints / Notes:
  - Thread-safe: acceso protegido por Lock.
  - Copias defensivas: los callers nunca reciben la instancia almacenada,
    así una mutación sin save_enrollments no se filtra al "store".
============================================================
"""

from __future__ import annotations

import copy
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Iterable, List, Optional
from uuid import UUID

from ....domain.entities import (
    Course,
    Enrollment,
    EnrollmentStatus,
    normalize_course_code,
)
from ....domain.repositories import CourseRepository


class InMemoryCourseRepository(CourseRepository):
    """Repositorio in-memory, thread-safe, para cursos."""

    def __init__(self) -> None:
        self._lock = Lock()
        self._courses: Dict[UUID, Course] = {}
        self._ids_by_code: Dict[str, UUID] = {}

    # =========================================================
    # Helpers internos
    # =========================================================
    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    @staticmethod
    def _sorted(items: Iterable[Course]) -> List[Course]:
        floor = datetime.min.replace(tzinfo=timezone.utc)
        return sorted(items, key=lambda c: (c.created_at or floor, c.course_code))

    def _snapshot(self, predicate=None) -> List[Course]:
        with self._lock:
            values = [
                copy.deepcopy(c)
                for c in self._courses.values()
                if predicate is None or predicate(c)
            ]
        return self._sorted(values)

    # =========================================================
    # Escrituras
    # =========================================================
    def create_course(self, course: Course) -> bool:
        code = normalize_course_code(course.course_code)
        stored = copy.deepcopy(course)
        stored.course_code = code
        stored.created_at = stored.created_at or self._now()
        stored.updated_at = stored.updated_at or stored.created_at

        with self._lock:
            if code in self._ids_by_code:
                return False
            self._courses[stored.id] = stored
            self._ids_by_code[code] = stored.id
        return True

    def save_enrollments(
        self,
        course_id: UUID,
        enrollments: List[Enrollment],
        *,
        expected_version: int,
    ) -> Optional[Course]:
        with self._lock:
            current = self._courses.get(course_id)
            if current is None or current.version != expected_version:
                return None
            current.enrollments = copy.deepcopy(list(enrollments))
            current.version = expected_version + 1
            current.updated_at = self._now()
            return copy.deepcopy(current)

    # =========================================================
    # Lecturas
    # =========================================================
    def get_course(self, course_id: UUID) -> Optional[Course]:
        with self._lock:
            course = self._courses.get(course_id)
            return copy.deepcopy(course) if course else None

    def get_course_by_code(self, course_code: str) -> Optional[Course]:
        with self._lock:
            course_id = self._ids_by_code.get(normalize_course_code(course_code))
            course = self._courses.get(course_id) if course_id else None
            return copy.deepcopy(course) if course else None

    def list_courses(self, *, offset: int = 0, limit: int = 10) -> List[Course]:
        start = max(0, offset)
        return self._snapshot()[start : start + max(0, limit)]

    def count_courses(self) -> int:
        with self._lock:
            return len(self._courses)

    def list_courses_by_instructor(self, instructor_id: UUID) -> List[Course]:
        return self._snapshot(lambda c: c.instructor_id == instructor_id)

    def list_courses_for_student(self, student_id: UUID) -> List[Course]:
        return self._snapshot(lambda c: c.has_enrollment(student_id))

    def list_courses_with_enrollment_status(
        self, status: EnrollmentStatus
    ) -> List[Course]:
        return self._snapshot(
            lambda c: any(e.status == status for e in c.enrollments)
        )
