# apps/backend/eims/crosscutting/middleware.py
"""
===============================================================================
TARJETA CRC — crosscutting/middleware.py (RequestContextMiddleware)
===============================================================================

Responsabilidades:
  - Aceptar X-Request-Id entrante (hasta 128 chars) o generar un UUID.
  - Abrir el contexto del request y exponer request.state.request_id.
  - Devolver X-Request-Id en la respuesta.
  - Un log por request con status y latencia (salvo /healthz).

Colaboradores:
  - eims/context.py
  - crosscutting/logger.py
  - crosscutting/error_responses.py (lee request.state.request_id)
===============================================================================
"""

from __future__ import annotations

import time
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from ..context import clear_context, set_request_context
from .logger import logger

REQUEST_ID_HEADER = "X-Request-Id"
MAX_REQUEST_ID_LENGTH = 128
QUIET_PATHS = frozenset({"/healthz"})


def _request_id_from(request: Request) -> str:
    incoming = (request.headers.get(REQUEST_ID_HEADER) or "").strip()
    if incoming and len(incoming) <= MAX_REQUEST_ID_LENGTH:
        return incoming
    return str(uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = _request_id_from(request)
        request.state.request_id = request_id
        set_request_context(
            request_id=request_id, method=request.method, path=request.url.path
        )

        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            if request.url.path not in QUIET_PATHS:
                logger.info(
                    "request completado",
                    extra={
                        "status_code": status_code,
                        "latency_ms": round((time.perf_counter() - started) * 1000, 2),
                    },
                )
            clear_context()
