from fastapi import APIRouter
from catalog.api.endpoints import auth, authors, books

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(authors.router)
api_router.include_router(books.router)
