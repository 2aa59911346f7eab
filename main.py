# type: ignore
# pyright: reportGeneralTypeIssues=false
# pyright: reportOptionalMemberAccess=false
"""
Rota Service
============
Assigns the US and UK support slots to team members for arbitrary date
ranges, respecting holidays and spreading load fairly over time.

    auto-assign ─► week finder (optional) ─► planner ─► assignments + history
    check-conflicts ─► conflict reporter (read-only)

Port: 8005
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from rota.controllers import (
    assignment_controller,
    holiday_controller,
    member_controller,
    report_controller,
    system_controller,
)
from rota.core.config import settings
from rota.core.dependencies import get_member_service
from rota.core.logging import get_logger
from rota.middleware import MetricsMiddleware, RequestIDMiddleware

logger = get_logger(settings.SERVICE_NAME)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    if settings.SEED_DEFAULT_ROSTER:
        get_member_service().seed_defaults()
    logger.info(
        "%s v%s started on port %d",
        settings.SERVICE_NAME, settings.SERVICE_VERSION, settings.SERVICE_PORT,
    )
    yield
    logger.info("Shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Rota Service",
    description="US/UK support rota with holiday-aware, fair auto-assignment.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception")
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc)},
    )


app.include_router(system_controller.router)
app.include_router(member_controller.router)
app.include_router(holiday_controller.router)
app.include_router(assignment_controller.router)
app.include_router(report_controller.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.SERVICE_PORT)
