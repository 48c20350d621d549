import logging
import secrets
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from fastapi import Depends
from fastapi.security import APIKeyCookie
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import catalog.crud as crud
import catalog.schemas as schemas
from catalog.config import settings
from catalog.database import get_db
from catalog.errors import AuthenticationError, ConflictError

logger = logging.getLogger(__name__)

# Сессии на cookie: токен хранится в таблице sessions, браузер отдает его сам
session_cookie = APIKeyCookie(name=settings.SESSION_COOKIE_NAME, auto_error=False)

password_hasher = PasswordHasher()

INVALID_CREDENTIALS = "invalid username or password"


def new_session_token() -> str:
    """32 байта из CSPRNG в hex"""
    return secrets.token_hex(32)


def register(db: Session, username: str, password: str) -> schemas.User:
    if crud.get_user_by_username(db, username) is not None:
        raise ConflictError("username already taken")

    try:
        db_user = crud.create_user(db, username, password_hasher.hash(password))
    except IntegrityError:
        # Параллельная регистрация с тем же именем
        db.rollback()
        raise ConflictError("username already taken")

    logger.info(f"Registered user {db_user.id} ({username})")
    return schemas.User.model_validate(db_user)


def authenticate(db: Session, username: str, password: str) -> schemas.User:
    """
    Проверить логин и пароль

    Одинаковая ошибка для неизвестного пользователя и неверного пароля,
    чтобы нельзя было перебирать имена
    """
    db_user = crud.get_user_by_username(db, username)
    if db_user is None:
        logger.info(f"Failed login for unknown username {username!r}")
        raise AuthenticationError(INVALID_CREDENTIALS)

    try:
        password_hasher.verify(db_user.password_hash, password)
    except (VerificationError, InvalidHashError):
        logger.info(f"Failed login for user {db_user.id}")
        raise AuthenticationError(INVALID_CREDENTIALS)

    return schemas.User.model_validate(db_user)


def login(db: Session, username: str, password: str) -> tuple:
    """
    Проверить учетные данные и открыть сессию
    Возвращает (пользователь, токен)
    """
    user = authenticate(db, username, password)
    token = new_session_token()
    crud.create_session(db, token, user.id)
    logger.info(f"User {user.id} logged in")
    return user, token


def logout(db: Session, token: Optional[str]) -> None:
    if token and crud.delete_session(db, token):
        logger.info("Session revoked")


def resolve_session(db: Session, token: Optional[str]) -> Optional[schemas.User]:
    if not token:
        return None
    db_user = crud.get_session_user(db, token)
    if db_user is None:
        return None
    return schemas.User.model_validate(db_user)


def get_current_user(
    token: Optional[str] = Depends(session_cookie),
    db: Session = Depends(get_db),
) -> Optional[schemas.User]:
    """
    Пользователь текущей сессии или None
    """
    return resolve_session(db, token)


def require_auth(
    user: Optional[schemas.User] = Depends(get_current_user),
) -> schemas.User:
    """
    Зависимость для эндпоинтов, требующих входа
    Без валидной сессии запрос прерывается с 401 до вызова обработчика
    """
    if user is None:
        raise AuthenticationError("Not logged in")
    return user
