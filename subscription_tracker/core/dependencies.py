from fastapi import Depends, Request

from ..domain.models import RequestContext
from ..domain.models.request_context import REQUEST_ID_HEADER, TRACE_ID_HEADER
from .container import ApplicationContainer


def get_container(request: Request) -> ApplicationContainer:
    container = getattr(request.app.state, "container", None)
    if not container:
        raise RuntimeError("Application container not initialised.")
    return container


def get_subscription_service(container: ApplicationContainer = Depends(get_container)):
    return container.subscription_service


def get_request_context(request: Request) -> RequestContext:
    context = getattr(request.state, "context", None)
    if context is None:
        context = RequestContext.from_headers(
            request.headers.get(REQUEST_ID_HEADER), request.headers.get(TRACE_ID_HEADER)
        )
        request.state.context = context
    return context
