# examgen/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from examgen.core.settings import settings, validate_required_settings
from examgen.core.logging import configure_logging
from examgen.middleware.cors import PreflightCORSMiddleware
from examgen.middleware.error_handler import setup_exception_handlers
from examgen.middleware.request_context import RequestContextMiddleware
from examgen.routes.exams import router as exams_router

# ---------- app init ----------
configure_logging(settings.LOG_LEVEL)

log = logging.getLogger("examgen")


@asynccontextmanager
async def lifespan(app: FastAPI):
    missing = validate_required_settings()
    if missing:
        # not fatal: requests answer 500 until the credential is provided
        log.warning("settings_missing", extra={"missing": missing})
    log.info(
        "startup",
        extra={
            "env": settings.ENV,
            "provider": settings.LLM_PROVIDER,
            "models": settings.llm_model_list,
            "quantity_bounds": [settings.QUANTITY_MIN, settings.QUANTITY_MAX],
        },
    )
    yield


app = FastAPI(title=settings.SERVICE_NAME, version="1.0.0", lifespan=lifespan)

# ---------- middleware ----------
# CORS is added last so it wraps the request-context layer and answers preflights first.
app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    PreflightCORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-Id"],
    max_age=600,
)

# ---------- exception handlers ----------
setup_exception_handlers(app)

# ---------- routers ----------
app.include_router(exams_router)


# ---------- health ----------
@app.get("/api/health")
def health_check():
    return {"message": "OK"}
