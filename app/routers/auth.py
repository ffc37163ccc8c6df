import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.config import settings
from app.schemas.auth import LoginRequest
from app.services.auth_middleware import clear_authentication, is_authenticated, mark_authenticated
from app.services.auth_service import verify_password

router = APIRouter(prefix="/api", tags=["Auth"])
logger = logging.getLogger(__name__)


@router.post("/login")
def login(body: LoginRequest, request: Request):
    if verify_password(body.password, settings.PASSWORD_HASH):
        mark_authenticated(request)
        return {"success": True}

    logger.warning("Rejected login attempt from %s", request.client.host if request.client else "unknown")
    clear_authentication(request)
    return JSONResponse(status_code=status.HTTP_401_UNAUTHORIZED, content={"success": False})


@router.get("/check-auth")
def check_auth(request: Request):
    return {"authenticated": is_authenticated(request)}


@router.post("/logout")
def logout(request: Request):
    clear_authentication(request)
    return {"success": True}
