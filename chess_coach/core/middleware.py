from __future__ import annotations

import time
from typing import Any
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from chess_coach.core.logging import correlation_id_ctx, get_logger, request_id_ctx

logger = get_logger("chess_coach.request")

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_ID_HEADER = "X-Correlation-ID"


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


def _request_fields(request: Request, event: str, **fields: Any) -> dict[str, Any]:
    return {"event": event, "method": request.method, "path": request.url.path, **fields}


class RequestIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid4())
        correlation_id = request.headers.get(CORRELATION_ID_HEADER) or request_id

        token_request = request_id_ctx.set(request_id)
        token_correlation = correlation_id_ctx.set(correlation_id)
        request.state.request_id = request_id
        request.state.correlation_id = correlation_id

        start = time.perf_counter()
        logger.info("request.start", extra=_request_fields(request, "request.start"))
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            logger.info(
                "request.complete",
                extra=_request_fields(
                    request,
                    "request.complete",
                    status_code=response.status_code,
                    duration_ms=_elapsed_ms(start),
                ),
            )
            return response
        except Exception:
            logger.exception(
                "request.error",
                extra=_request_fields(request, "request.error", duration_ms=_elapsed_ms(start)),
            )
            raise
        finally:
            request_id_ctx.reset(token_request)
            correlation_id_ctx.reset(token_correlation)
