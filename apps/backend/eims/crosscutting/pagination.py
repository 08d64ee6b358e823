# apps/backend/eims/crosscutting/pagination.py
"""
===============================================================================
MÓDULO: Utilidades de paginación (page / limit)
===============================================================================

Objetivo
--------
Paginación numerada simple para listados de cursos:
- page (1-based) + limit
- metadata total / totalPages para que el frontend arme el paginador

-------------------------------------------------------------------------------
CRC (Component Card)
-------------------------------------------------------------------------------
Componente:
  PageWindow + PageSlice

Responsabilidades:
  - Traducir page/limit a offset
  - Calcular cantidad total de páginas
===============================================================================
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PageWindow:
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class PageSlice(Generic[T]):
    items: List[T]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return total_pages(self.total, self.limit)


def total_pages(total: int, limit: int) -> int:
    """Páginas necesarias para `total` items (0 si no hay items)."""
    if total <= 0:
        return 0
    return math.ceil(total / max(1, limit))

