from fastapi import HTTPException, Request, status

from app.config import settings

AUTH_SESSION_KEY = "auth"


def is_authenticated(request: Request) -> bool:
    return request.session.get(AUTH_SESSION_KEY) is True


def mark_authenticated(request: Request) -> None:
    request.session[AUTH_SESSION_KEY] = True


def clear_authentication(request: Request) -> None:
    request.session.pop(AUTH_SESSION_KEY, None)


def require_authenticated(request: Request) -> None:
    """Gate marketplace routes behind the password session when configured to."""
    if settings.REQUIRE_AUTH_FOR_API and not is_authenticated(request):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
