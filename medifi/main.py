import time
import logging
from dotenv import load_dotenv

# Load environment variables from .env file before anything else
load_dotenv()

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from medifi.core.config import settings
from medifi.core.errors import ConflictError, MediFiError, NotFoundError, UploadError, ValidationError
from medifi.core.logging import request_id_ctx, setup_logging
from medifi.api.router import api_router
from medifi.platform.registry import PlatformRegistry

setup_logging()
app = FastAPI(title=settings.APP_NAME)
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id", "-")
    request_id_ctx.set(rid)
    response = await call_next(request)
    return response

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = (time.time() - start_time) * 1000
    logger.info(
        f"Request: {request.method} {request.url.path} - Response: {response.status_code} - Time: {process_time:.2f}ms"
    )
    return response

ERROR_STATUS = {
    ValidationError: 400,
    NotFoundError: 404,
    ConflictError: 409,
    UploadError: 502,
}

@app.exception_handler(MediFiError)
async def medifi_error_handler(request: Request, exc: MediFiError):
    status_code = ERROR_STATUS.get(type(exc), 400)
    if isinstance(exc, UploadError):
        logger.error(f"Upload failed for {request.method} {request.url.path}: {exc.message}")
    content = {"error": exc.message}
    if isinstance(exc, ValidationError):
        content["details"] = exc.details()
    return JSONResponse(status_code=status_code, content=content)

@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [
        {"field": ".".join(str(p) for p in err["loc"] if p not in ("body", "query", "path", "form")), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": "Validation error", "details": details})

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled exception for request {request.method} {request.url.path}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error"},
    )

@app.on_event("startup")
async def on_startup():
    # tests may install their own platform before startup
    if getattr(app.state, "platform", None) is None:
        app.state.platform = PlatformRegistry.from_settings(settings)
    await app.state.platform.start()
    logger.info(f"{settings.APP_NAME} API started (storage={settings.STORAGE_PROVIDER})")

@app.on_event("shutdown")
async def on_shutdown():
    platform = getattr(app.state, "platform", None)
    if platform:
        await platform.close()
    app.state.platform = None

@app.get("/health", tags=["health"])
async def health():
    return {"status": "ok", "message": "MediFi API is running"}

app.include_router(api_router, prefix=settings.API_PREFIX)
