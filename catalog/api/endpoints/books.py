import logging

from fastapi import APIRouter, Depends, status, Query, Request, Response
from sqlalchemy.orm import Session
from typing import List, Optional

import catalog.crud as crud
import catalog.schemas as schemas
import catalog.utils as utils
from catalog.database import get_db
from catalog.auth import require_auth
from catalog.errors import AuthorizationError, NotFoundError, ValidationError
from catalog.rate_limiter import api_limit
from catalog.validation import book_filters, require_positive_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/books", tags=["books"])

AUTHOR_MISSING = "authorID does not exist"

@router.get("", response_model=List[schemas.Book])
@api_limit
async def read_books(
    request: Request,
    response: Response,
    author_id: Optional[str] = Query(None, alias="authorID"),
    genre: Optional[str] = None,
    min_year: Optional[str] = Query(None, alias="minYear"),
    db: Session = Depends(get_db),
):
    """
    Получить список книг

    Фильтры authorID, genre и minYear объединяются через AND
    """
    filters = book_filters(author_id, genre, min_year)
    return [utils.book_to_schema(book) for book in crud.get_books(db, filters)]

@router.get("/{book_id}", response_model=schemas.Book)
@api_limit
async def read_book(
    request: Request,
    response: Response,
    book_id: str,
    db: Session = Depends(get_db),
):
    """
    Получить книгу по ID
    """
    db_book = crud.get_book(db, book_id=require_positive_id(book_id))
    if db_book is None:
        raise NotFoundError("Book not found")
    return utils.book_to_schema(db_book)

@router.post("", response_model=schemas.Book, status_code=status.HTTP_201_CREATED)
@api_limit
async def create_book(
    request: Request,
    response: Response,
    book: schemas.BookCreate,
    db: Session = Depends(get_db),
    current_user: schemas.User = Depends(require_auth),
):
    """
    Создать новую книгу от имени текущего пользователя
    """
    if not crud.author_exists(db, author_id=book.author_id):
        raise ValidationError(AUTHOR_MISSING)

    db_book = crud.create_book(db=db, book=book, created_by_user_id=current_user.id)
    response.headers["Location"] = str(db_book.id)
    return utils.book_to_schema(db_book)

@router.put("/{book_id}", response_model=schemas.Book)
@api_limit
async def update_book(
    request: Request,
    response: Response,
    book_id: str,
    book_update: schemas.BookUpdate,
    db: Session = Depends(get_db),
    current_user: schemas.User = Depends(require_auth),
):
    """
    Полностью заменить книгу (только создатель)
    """
    book_id = require_positive_id(book_id)

    if not crud.author_exists(db, author_id=book_update.author_id):
        raise ValidationError(AUTHOR_MISSING)

    db_book = crud.get_book(db, book_id=book_id)
    if db_book is None:
        raise NotFoundError("Book not found")

    if db_book.created_by_user_id != current_user.id:
        logger.info(f"User {current_user.id} denied edit of book {book_id}")
        raise AuthorizationError("you can only edit books you created")

    db_book = crud.update_book(db, db_book=db_book, book_update=book_update)
    return utils.book_to_schema(db_book)

@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
@api_limit
async def delete_book(
    request: Request,
    response: Response,
    book_id: str,
    db: Session = Depends(get_db),
    current_user: schemas.User = Depends(require_auth),
):
    """
    Удалить книгу (только создатель)
    """
    book_id = require_positive_id(book_id)

    db_book = crud.get_book(db, book_id=book_id)
    if db_book is None:
        raise NotFoundError("Book not found")

    if db_book.created_by_user_id != current_user.id:
        logger.info(f"User {current_user.id} denied delete of book {book_id}")
        raise AuthorizationError("you can only delete books you created")

    crud.delete_book(db, db_book=db_book)
    return None
