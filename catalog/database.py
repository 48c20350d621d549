import sqlite3

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

from catalog.config import settings


def engine_options(url: str) -> dict:
    """
    Параметры engine в зависимости от диалекта
    SQLite не поддерживает pool_size/max_overflow для in-memory баз
    """
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}, "echo": settings.DB_ECHO}
    return {
        "pool_size": settings.DB_POOL_SIZE,
        "max_overflow": settings.DB_MAX_OVERFLOW,
        "pool_pre_ping": True,
        "echo": settings.DB_ECHO,
    }


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite проверяет внешние ключи только с этим PRAGMA
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

# Создаем фабрику сессий
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# Dependency для получения сессии
def get_db():
    """
    Синхронная зависимость для получения сессии БД
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
