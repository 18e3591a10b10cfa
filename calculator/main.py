from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .arithmetic import router as arithmetic_router
from .arithmetic.schemas import format_timestamp, utcnow
from .config import get_settings
from .observability import RequestLoggingMiddleware, configure_logging, get_logger
from .system import router as system_router
from .system import available_endpoints

settings = get_settings()


def status_code_name(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).name
    except ValueError:
        return str(status_code)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: route logs to console and files; file writes happen on the listener thread
    sinks = configure_logging(settings)
    if sinks is not None:
        sinks.start()

    logger = get_logger("calculator")
    logger.info(
        "server_started",
        host=settings.HOST,
        port=settings.PORT,
        log_dir=settings.LOG_DIR if settings.LOG_TO_FILES else None,
    )

    yield

    # Shutdown: flush queued log records and release the log files
    logger.info("server_stopped")
    if sinks is not None:
        sinks.close()

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan,
    debug=settings.DEBUG
)

app.add_middleware(RequestLoggingMiddleware)

# Global exception handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        get_logger("calculator").warning(
            "endpoint_not_found",
            method=request.method,
            url=request.url.path,
            ip=request.client.host if request.client else None,
        )
        return JSONResponse(
            status_code=404,
            content={
                "error": "ENDPOINT_NOT_FOUND",
                "message": f"No endpoint at {request.url.path}",
                "availableEndpoints": available_endpoints(),
                "documentation": str(request.base_url),
            }
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": status_code_name(exc.status_code), "message": exc.detail},
        headers=exc.headers,
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content={"error": "INVALID_REQUEST", "message": "Request validation failed"}
    )

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    # Stack traces go to the log only
    get_logger("calculator").error(
        "unhandled_exception",
        method=request.method,
        url=request.url.path,
        error=str(exc),
        exc_info=exc,
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": "Internal server error",
            "timestamp": format_timestamp(utcnow()),
        }
    )

# Include routers
app.include_router(system_router)
app.include_router(arithmetic_router)
