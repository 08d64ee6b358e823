"""
===============================================================================
TARJETA CRC — eims/context.py (Contexto por request)
===============================================================================

Responsabilidades:
  - Guardar request_id / method / path / user_id del request en curso
    (ContextVars, seguro en async).
  - Exponerlos como dict para el JSONFormatter.

Colaboradores:
  - crosscutting.middleware: abre y limpia el contexto.
  - identity.auth_users: agrega user_id una vez resuelto el token.
  - crosscutting.logger: lee get_context_dict().
===============================================================================
"""

from __future__ import annotations

from contextvars import ContextVar

_VARS: dict[str, ContextVar[str]] = {
    name: ContextVar(name, default="")
    for name in ("request_id", "method", "path", "user_id")
}


def set_request_context(
    *, request_id: str = "", method: str = "", path: str = ""
) -> None:
    _VARS["request_id"].set(request_id)
    _VARS["method"].set(method)
    _VARS["path"].set(path)


def set_user_context(user_id: str) -> None:
    _VARS["user_id"].set(user_id)


def get_context_dict() -> dict[str, str]:
    """Contexto actual sin las claves vacías."""
    return {name: value for name, var in _VARS.items() if (value := var.get())}


def clear_context() -> None:
    # R: El worker reutiliza el contexto entre requests; limpiar siempre.
    for var in _VARS.values():
        var.set("")
