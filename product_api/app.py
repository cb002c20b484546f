from typing import Optional

from fastapi import FastAPI, Request, Security, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.security import APIKeyHeader
from starlette.exceptions import HTTPException as StarletteHTTPException

from product_api.config import API_KEY_NAME, Settings
from product_api.logging_config import configure_logging, logger, tracer
from product_api.middleware import log_requests, require_api_key
from product_api.routes.product_route import INTERNAL_ERROR_MESSAGE, router as product_router
from product_api.store import ProductStore

WELCOME_MESSAGE = "Welcome to the Product API! Go to /api/products to see all products."

# Documents the header in the OpenAPI schema; enforcement happens in require_api_key
api_key_header_scheme = APIKeyHeader(
    name=API_KEY_NAME,
    auto_error=False,
    scheme_name="ApiKeyAuthHeader",
    description="API Key (x-api-key) in header",
)


async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def handle_request_validation_error(request: Request, exc: RequestValidationError):
    logger.warning(
        "Malformed request",
        extra={"path": request.url.path, "errors": exc.errors()},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body"},
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    with tracer.start_as_current_span("handle_unexpected_error") as span:
        span.set_attribute("error", True)
        span.set_attribute("error.type", type(exc).__name__)

        logger.error(
            f"Unhandled error processing {request.method} {request.url.path}: {exc}",
            extra={"error_type": type(exc).__name__},
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": INTERNAL_ERROR_MESSAGE},
        )


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """
    Build an application with its own settings and product store.

    Each call returns an isolated instance; the store starts from the seed
    products unless one is passed in.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Product API",
        version="1.0.0",
        openapi_url="/api/openapi.json",
        dependencies=[Security(api_key_header_scheme)],
    )
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore()

    # Starlette runs the last registered middleware first: logging wraps authentication
    app.middleware("http")(require_api_key)
    app.middleware("http")(log_requests)

    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    @app.get("/", response_class=PlainTextResponse)
    async def welcome() -> str:
        return WELCOME_MESSAGE

    app.include_router(product_router)

    logger.info(
        "Product API initialised",
        extra={"products": len(app.state.store), "port": settings.port},
    )
    return app


app = create_app()
