import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy import text
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from catalog.config import settings
from catalog.rate_limiter import limiter
from catalog.database import engine, Base, get_db
from catalog.api.routes import api_router
from catalog import errors
import catalog.models  # noqa: F401  регистрирует таблицы в Base.metadata

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Создаем таблицы при запуске
    Base.metadata.create_all(bind=engine)
    logger.info(f"Library Catalog API started ({settings.ENVIRONMENT})")
    yield
    # Очистка при завершении
    engine.dispose()

app = FastAPI(
    title="Library Catalog API",
    description="Каталог авторов и книг с сессиями на cookie",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json"
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_exception_handler(StarletteHTTPException, errors.http_exception_handler)
app.add_exception_handler(RequestValidationError, errors.request_validation_handler)
app.add_exception_handler(Exception, errors.unhandled_exception_handler)


@app.middleware("http")
async def require_csrf_header(request: Request, call_next):
    """
    Изменяющие запросы к API должны нести заголовок X-Requested-With
    """
    if (
        request.url.path.startswith(settings.API_PREFIX)
        and request.method not in SAFE_METHODS
        and not request.headers.get(settings.CSRF_HEADER_NAME)
    ):
        logger.warning(f"Rejected {request.method} {request.url.path} without {settings.CSRF_HEADER_NAME}")
        return JSONResponse(
            status_code=403,
            content={"error": f"missing {settings.CSRF_HEADER_NAME} header"},
        )
    return await call_next(request)


# Настройка CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


app.include_router(api_router, prefix=settings.API_PREFIX)

@app.get("/")
async def root():
    return {
        "message": "Library Catalog API",
        "api": settings.API_PREFIX,
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc"
        }
    }

@app.get("/health")
async def health_check(db: Session = Depends(get_db)):
    """
    Простой health check
    """
    try:
        # Проверяем соединение с БД
        db.execute(text("SELECT 1"))
        return {"status": "healthy", "database": "connected"}
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return {"status": "unhealthy", "database": str(e)}

if __name__ == "__main__":
    uvicorn.run(
        "catalog.main:app",
        host="0.0.0.0",
        port=8000,
        reload=not settings.is_production
    )
