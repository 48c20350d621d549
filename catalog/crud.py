from sqlalchemy.orm import Session
from sqlalchemy import delete
from typing import List, Optional
import catalog.models as models
import catalog.schemas as schemas

# ====================== AUTHOR CRUD ======================

def get_author(db: Session, author_id: int) -> Optional[models.Author]:
    """
    Получить автора по ID
    """
    return db.query(models.Author).filter(models.Author.id == author_id).first()

def author_exists(db: Session, author_id: int) -> bool:
    return db.query(models.Author.id).filter(models.Author.id == author_id).first() is not None

def get_authors(db: Session) -> List[models.Author]:
    """
    Получить всех авторов в порядке хранения
    """
    return db.query(models.Author).all()

def create_author(db: Session, author: schemas.AuthorCreate) -> models.Author:
    db_author = models.Author(name=author.name, bio=author.bio)
    db.add(db_author)
    db.commit()
    db.refresh(db_author)

    return db_author

def delete_author(db: Session, author_id: int) -> bool:
    """
    Удалить автора
    Возвращает True если удалено, False если не найден.
    Если на автора ссылаются книги, БД отклоняет удаление (IntegrityError)
    """
    result = db.execute(delete(models.Author).where(models.Author.id == author_id))
    db.commit()
    return result.rowcount > 0

# ====================== BOOK CRUD ======================

def get_book(db: Session, book_id: int) -> Optional[models.Book]:
    return db.query(models.Book).filter(models.Book.id == book_id).first()

def get_books(db: Session, filters: schemas.BookFilters) -> List[models.Book]:
    """
    Получить список книг с фильтрацией
    Несколько фильтров объединяются через AND
    """
    query = db.query(models.Book)

    if filters.author_id is not None:
        query = query.filter(models.Book.author_id == filters.author_id)
    if filters.genre is not None:
        query = query.filter(models.Book.genre == filters.genre)
    if filters.min_year is not None:
        # Годы хранятся строками фиксированной ширины, строковое сравнение корректно
        query = query.filter(models.Book.pub_year >= filters.min_year)

    return query.all()

def create_book(db: Session, book: schemas.BookCreate, created_by_user_id: int) -> models.Book:
    db_book = models.Book(
        author_id=book.author_id,
        created_by_user_id=created_by_user_id,
        title=book.title,
        pub_year=book.publish_year,
        genre=book.genre,
    )
    db.add(db_book)
    db.commit()
    db.refresh(db_book)

    return db_book

def update_book(db: Session, db_book: models.Book, book_update: schemas.BookUpdate) -> models.Book:
    """
    Полная замена изменяемых полей книги
    id и created_by_user_id не меняются
    """
    db_book.author_id = book_update.author_id
    db_book.title = book_update.title
    db_book.pub_year = book_update.publish_year
    db_book.genre = book_update.genre

    db.commit()
    db.refresh(db_book)

    return db_book

def delete_book(db: Session, db_book: models.Book) -> None:
    db.delete(db_book)
    db.commit()

# ====================== USER / SESSION CRUD ======================

def get_user_by_username(db: Session, username: str) -> Optional[models.User]:
    return db.query(models.User).filter(models.User.username == username).first()

def create_user(db: Session, username: str, password_hash: str) -> models.User:
    db_user = models.User(username=username, password_hash=password_hash)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)

    return db_user

def create_session(db: Session, token: str, user_id: int) -> models.UserSession:
    db_session = models.UserSession(token=token, user_id=user_id)
    db.add(db_session)
    db.commit()

    return db_session

def get_session_user(db: Session, token: str) -> Optional[models.User]:
    """
    Найти пользователя по токену сессии (JOIN sessions -> users)
    """
    return (
        db.query(models.User)
        .join(models.UserSession, models.UserSession.user_id == models.User.id)
        .filter(models.UserSession.token == token)
        .first()
    )

def delete_session(db: Session, token: str) -> bool:
    result = db.execute(delete(models.UserSession).where(models.UserSession.token == token))
    db.commit()
    return result.rowcount > 0
