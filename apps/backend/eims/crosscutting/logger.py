# apps/backend/eims/crosscutting/logger.py
"""
===============================================================================
TARJETA CRC — crosscutting/logger.py (Logging estructurado)
===============================================================================

Responsabilidades:
  - Emitir una línea JSON por evento en stdout.
  - Adjuntar el contexto del request (request_id, method, path, user_id).
  - Enmascarar credenciales y códigos OTP que lleguen por `extra=`.

Colaboradores:
  - eims/context.py: ContextVars del request en curso.
  - crosscutting/config.py: LOG_LEVEL / LOG_JSON (vía configure_logging).

Notas:
  - El logger global `logger` existe desde el import para que los módulos
    puedan loguear antes de que main.py cargue Settings.
===============================================================================
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any

from ..context import get_context_dict

LOGGER_NAME = "eims-api"

# R: Atributos estándar de LogRecord; todo lo demás vino por `extra=`.
_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime", "taskName"}

SENSITIVE_KEYS = frozenset(
    {
        "password",
        "password_hash",
        "new_password",
        "secret",
        "jwt_secret",
        "token",
        "access_token",
        "authorization",
        "otp",
        "code_hash",
    }
)

_MASK = "***REDACTADO***"
_MAX_STR = 4_000
_MAX_DEPTH = 4


def redact(value: Any, *, key: str | None = None, depth: int = 0) -> Any:
    """Devuelve una versión serializable de `value` sin secretos."""
    if key is not None and key.lower() in SENSITIVE_KEYS:
        return _MASK
    if depth > _MAX_DEPTH:
        return "***TRUNCADO***"

    if isinstance(value, str):
        return value if len(value) <= _MAX_STR else value[:_MAX_STR] + "…"
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    if isinstance(value, dict):
        return {str(k): redact(v, key=str(k), depth=depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [redact(v, key=key, depth=depth + 1) for v in value]
    if value is None or isinstance(value, (bool, int, float)):
        return value
    return str(value)


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": os.getpid(),
        }
        entry.update(get_context_dict())

        extras = {
            k: v for k, v in record.__dict__.items() if k not in _RESERVED_ATTRS
        }
        entry.update(redact(extras))

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": self.formatException(record.exc_info),
            }

        return json.dumps(entry, ensure_ascii=False, default=str)


def setup_logger(
    name: str = LOGGER_NAME, *, level: str = "INFO", use_json: bool = True
) -> logging.Logger:
    """Configura (o reconfigura) el logger de la app con un único handler."""
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))

    if not log.handlers:
        log.addHandler(logging.StreamHandler(sys.stdout))

    formatter = (
        JSONFormatter()
        if use_json
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    for handler in log.handlers:
        handler.setFormatter(formatter)
    return log


def configure_logging(settings) -> logging.Logger:
    """Aplica LOG_LEVEL / LOG_JSON de Settings al logger global."""
    return setup_logger(
        LOGGER_NAME, level=settings.log_level or "INFO", use_json=settings.log_json
    )


logger = setup_logger()
