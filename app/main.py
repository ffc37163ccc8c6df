import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.routers import auth, marketplace

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.PROJECT_NAME)

# Signed session cookie carrying the password-gate flag
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie="auth",
    max_age=settings.AUTH_COOKIE_MAX_AGE_SECONDS,
    https_only=settings.SECURE_COOKIES,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Missing marketplace credentials must stop the server from starting
@app.on_event("startup")
async def startup_event():
    settings.validate()
    logger.info("MP_URL loaded: %s", settings.MP_URL)
    logger.info("PARTNER loaded: %s", settings.PARTNER)


app.include_router(auth.router)
app.include_router(marketplace.router)


@app.get("/health")
def health():
    return {"status": "ok", "service": settings.PROJECT_NAME}


# Serve the single-page client build last so API routes take precedence
if settings.FRONTEND_BUILD_DIR and Path(settings.FRONTEND_BUILD_DIR).is_dir():
    app.mount("/", StaticFiles(directory=settings.FRONTEND_BUILD_DIR, html=True), name="frontend")
else:
    logger.info("FRONTEND_BUILD_DIR not set or missing; serving API only.")
