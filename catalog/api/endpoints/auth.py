from fastapi import APIRouter, Depends, status, Request, Response
from sqlalchemy.orm import Session
from typing import Optional

import catalog.auth as auth
import catalog.schemas as schemas
from catalog.config import settings
from catalog.database import get_db
from catalog.rate_limiter import api_limit, auth_limit

router = APIRouter(prefix="/auth", tags=["auth"])

def _cookie_options() -> dict:
    return {
        "httponly": True,
        "samesite": "lax",
        "secure": settings.is_production,
        "path": "/",
    }

@router.post("/register", response_model=schemas.User, status_code=status.HTTP_201_CREATED)
@auth_limit
@api_limit
async def register(
    request: Request,
    response: Response,
    credentials: schemas.RegisterRequest,
    db: Session = Depends(get_db),
):
    """
    Зарегистрировать пользователя
    """
    return auth.register(db, credentials.username, credentials.password)

@router.post("/login", response_model=schemas.User)
@auth_limit
@api_limit
async def login(
    request: Request,
    response: Response,
    credentials: schemas.LoginRequest,
    db: Session = Depends(get_db),
):
    """
    Войти и получить cookie сессии
    """
    user, token = auth.login(db, credentials.username, credentials.password)
    response.set_cookie(key=settings.SESSION_COOKIE_NAME, value=token, **_cookie_options())
    return user

@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
@api_limit
async def logout(
    request: Request,
    response: Response,
    token: Optional[str] = Depends(auth.session_cookie),
    db: Session = Depends(get_db),
):
    """
    Завершить сессию; 204 даже если сессии не было
    """
    auth.logout(db, token)
    response.delete_cookie(settings.SESSION_COOKIE_NAME, **_cookie_options())
    return None

@router.get("/me", response_model=schemas.User)
@api_limit
async def me(
    request: Request,
    response: Response,
    current_user: schemas.User = Depends(auth.require_auth),
):
    return current_user
