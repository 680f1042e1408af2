from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from scrimhub_backend.core.database import init_db
from scrimhub_backend.core.exceptions import ScrimHubError, ValidationError
from scrimhub_backend.core.logger import setup_logger

# --- Routers ---
from scrimhub_backend.core.auth import router as auth_router
from scrimhub_backend.routes.team_routes import router as team_router
from scrimhub_backend.routes.player_routes import router as player_router
from scrimhub_backend.routes.scrim_routes import router as scrim_router
from scrimhub_backend.routes.match_routes import router as match_router
from scrimhub_backend.routes.leaderboard_routes import router as leaderboard_router

logger = setup_logger(__name__)

app = FastAPI(title="ScrimHub")


@app.on_event("startup")
async def on_startup():
    # 1️⃣ Init DB tables async
    await init_db()
    logger.info("✅ Database ready")


@app.exception_handler(ScrimHubError)
async def scrimhub_error_handler(request: Request, exc: ScrimHubError):
    # Client errors are expected; only storage failures are worth a warning here
    if exc.status_code >= 500:
        logger.warning(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.user_message, "error": type(exc).__name__},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Same body as a service-level ValidationError, whichever layer rejects the payload
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    reason = f"Invalid request ({field}): {first.get('msg', 'invalid value')}"
    return JSONResponse(
        status_code=ValidationError.status_code,
        content={"detail": reason, "error": ValidationError.__name__},
    )


app.include_router(auth_router, prefix="/auth", tags=["Auth"])
app.include_router(team_router, prefix="/teams", tags=["Teams"])
app.include_router(player_router, prefix="/players", tags=["Players"])
app.include_router(scrim_router, prefix="/scrims", tags=["Scrims"])
app.include_router(match_router, prefix="/matches", tags=["Matches"])
app.include_router(leaderboard_router, prefix="/leaderboards", tags=["Leaderboards"])


@app.get("/health")
def health():
    return {"status": "ok"}
