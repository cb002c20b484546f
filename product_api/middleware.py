import secrets
import time

from fastapi import Request, status
from fastapi.responses import JSONResponse

from product_api.config import API_KEY_NAME
from product_api.logging_config import get_child_logger, tracer

logger = get_child_logger("middleware")

UNAUTHORIZED_MESSAGE = "Unauthorized: Invalid or missing API key"


async def log_requests(request: Request, call_next):
    """
    Log the method and path of every request, then its outcome.

    Never short-circuits; the timestamp comes from the log formatter.
    """
    path = request.url.path
    if request.url.query:
        path = f"{path}?{request.url.query}"

    logger.info(f"{request.method} {path}", extra={"method": request.method, "path": path})

    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000

    logger.info(
        f"{request.method} {path} -> {response.status_code} ({elapsed_ms:.1f} ms)",
        extra={"status_code": response.status_code, "duration_ms": elapsed_ms},
    )
    return response


async def require_api_key(request: Request, call_next):
    """
    Reject any request whose API key header does not match the configured key.
    """
    client_api_key = request.headers.get(API_KEY_NAME)
    expected_key = request.app.state.settings.api_key

    if not client_api_key or not secrets.compare_digest(
        client_api_key.encode(), expected_key.encode()
    ):
        with tracer.start_as_current_span("reject_unauthorized") as span:
            span.set_attribute("http.method", request.method)
            span.set_attribute("http.route", request.url.path)
            span.set_attribute("auth.key_present", client_api_key is not None)

        logger.warning(
            "Rejected request with invalid or missing API key",
            extra={"path": request.url.path, "key_present": client_api_key is not None},
        )
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"error": UNAUTHORIZED_MESSAGE},
        )

    return await call_next(request)
