import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from skycast.definitions.data_sources import ErrorMessage
from skycast.utils.logger import setup_logger

logger = setup_logger(__name__)


def new_request_id() -> str:
    return f"req_{uuid.uuid4().hex[:8]}_{int(time.time() * 1000)}"


class RequestTrackerMiddleware(BaseHTTPMiddleware):
    """
    Middleware that tags every request with an id and a processing time.

    The id is exposed to handlers as ``request.state.request_id`` and to
    clients through the ``X-Request-ID`` header. An exception escaping a
    handler becomes a JSON error body shaped like the aggregator's.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or new_request_id()
        request.state.request_id = request_id

        start_time = time.perf_counter()
        logger.debug(
            "Incoming request",
            extra={
                "request_id": request_id,
                "method": request.method,
                "path": request.url.path,
                "client": request.client.host if request.client else "unknown",
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.perf_counter() - start_time
            logger.error(
                "Request failed",
                extra={
                    "request_id": request_id,
                    "path": request.url.path,
                    "process_time": process_time,
                    "error_type": type(e).__name__,
                },
            )
            response = JSONResponse(
                status_code=500, content={"error": ErrorMessage.FETCH_FAILED.value}
            )
        else:
            process_time = time.perf_counter() - start_time
            logger.debug(
                "Request completed",
                extra={
                    "request_id": request_id,
                    "status_code": response.status_code,
                    "process_time": process_time,
                },
            )

        response.headers["X-Process-Time"] = f"{process_time:.3f}"
        response.headers["X-Request-ID"] = request_id
        return response
