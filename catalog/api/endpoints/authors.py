import logging

from fastapi import APIRouter, Depends, status, Request, Response
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from typing import List

import catalog.crud as crud
import catalog.schemas as schemas
from catalog.database import get_db
from catalog.auth import require_auth
from catalog.errors import ConflictError, NotFoundError
from catalog.rate_limiter import api_limit
from catalog.validation import require_positive_id

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/authors", tags=["authors"])

@router.get("", response_model=List[schemas.Author])
@api_limit
async def read_authors(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    Получить список всех авторов
    """
    return crud.get_authors(db)

@router.get("/{author_id}", response_model=schemas.Author)
@api_limit
async def read_author(
    request: Request,
    response: Response,
    author_id: str,
    db: Session = Depends(get_db),
):
    """
    Получить автора по ID
    """
    db_author = crud.get_author(db, author_id=require_positive_id(author_id))
    if db_author is None:
        raise NotFoundError("Author not found")
    return db_author

@router.post("", response_model=schemas.Author, status_code=status.HTTP_201_CREATED)
@api_limit
async def create_author(
    request: Request,
    response: Response,
    author: schemas.AuthorCreate,
    db: Session = Depends(get_db),
    current_user: schemas.User = Depends(require_auth),
):
    """
    Создать нового автора

    В заголовке Location возвращается id нового автора
    """
    db_author = crud.create_author(db=db, author=author)
    response.headers["Location"] = str(db_author.id)
    return db_author

@router.delete("/{author_id}", status_code=status.HTTP_204_NO_CONTENT)
@api_limit
async def delete_author(
    request: Request,
    response: Response,
    author_id: str,
    db: Session = Depends(get_db),
    current_user: schemas.User = Depends(require_auth),
):
    """
    Удалить автора

    Автора, на которого ссылаются книги, удалить нельзя (409)
    """
    author_id = require_positive_id(author_id)
    try:
        deleted = crud.delete_author(db, author_id=author_id)
    except IntegrityError:
        db.rollback()
        logger.info(f"User {current_user.id} tried to delete author {author_id} with books")
        raise ConflictError("Cannot delete author because they still have books")

    if not deleted:
        raise NotFoundError("Author not found")
    return None
