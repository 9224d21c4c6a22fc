import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import RequestResponseEndpoint

from ...domain.models import RequestContext
from ...domain.models.request_context import REQUEST_ID_HEADER, TRACE_ID_HEADER

access_logger = logging.getLogger("subscription_tracker.access")


async def correlation_middleware(request: Request, call_next: RequestResponseEndpoint) -> Response:
    """Tag the request with correlation IDs and emit one access log line for it."""
    context = RequestContext.from_headers(
        request.headers.get(REQUEST_ID_HEADER), request.headers.get(TRACE_ID_HEADER)
    )
    request.state.context = context
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "-"
        access_logger.info(
            "[%s] %s %s %d %.2fms",
            request.method,
            client,
            request.url.path,
            status_code,
            elapsed_ms,
            extra=context.log_extra(),
        )
    response.headers[REQUEST_ID_HEADER] = context.request_id
    response.headers[TRACE_ID_HEADER] = context.trace_id
    return response
