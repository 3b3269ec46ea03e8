"""Map ordering errors onto HTTP responses.

Protean's own ``ValidationError`` and ``ObjectNotFoundError`` are handled by
``protean.integrations.fastapi.register_exception_handlers``; this adds the
ordering error kinds next to them, using the same ``{"error": ...}`` body.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from ordering.errors import OrderingError
from ordering.utils.logging import get_logger

logger = get_logger(__name__)


async def ordering_error_handler(request: Request, exc: OrderingError) -> JSONResponse:
    logger.info(
        "request_rejected",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=exc.status_code,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.messages})


def register_error_handlers(app: FastAPI) -> None:
    register_exception_handlers(app)
    app.add_exception_handler(OrderingError, ordering_error_handler)
