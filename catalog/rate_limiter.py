from slowapi import Limiter
from slowapi.util import get_remote_address

from catalog.config import settings


limiter = Limiter(
    key_func=get_remote_address,
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    strategy="fixed-window",
    headers_enabled=True,
)

# Одно окно на все эндпоинты API для каждого клиента
api_limit = limiter.shared_limit(settings.API_RATE_LIMIT, scope="api")

# Дополнительное окно для регистрации и входа
auth_limit = limiter.limit(settings.AUTH_RATE_LIMIT)
