"""
===============================================================================
COURSE USE CASE RESULTS (Shared Result / Error Models)
===============================================================================

Business Goal:
    Modelos compartidos de resultado y error para los casos de uso de cursos:
    alta, catálogo paginado, "mis cursos" y roster de aprobados.
===============================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from ....crosscutting.pagination import PageSlice
from ....domain.entities import Course, Enrollment


class CourseErrorCode(str, Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"


@dataclass(frozen=True)
class CourseError:
    code: CourseErrorCode
    message: str
    resource_id: str | None = None


@dataclass
class CourseResult:
    course: Course | None = None
    error: CourseError | None = None


@dataclass
class CourseListResult:
    courses: List[Course]
    error: CourseError | None = None


@dataclass
class CoursePageResult:
    page: PageSlice[Course] | None = None
    error: CourseError | None = None


@dataclass
class CourseRosterResult:
    """Inscripciones aprobadas de un curso."""

    course: Course | None = None
    students: List[Enrollment] = field(default_factory=list)
    error: CourseError | None = None
