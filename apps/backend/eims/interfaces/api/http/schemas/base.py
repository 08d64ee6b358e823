"""
Base de DTOs HTTP.

Los payloads viajan en camelCase (contrato del frontend); en Python los
campos son snake_case. Las respuestas exitosas llevan `error: false`.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SuccessRes(CamelModel):
    error: bool = False
    message: str | None = None
