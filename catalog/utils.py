import catalog.models as models
import catalog.schemas as schemas

def book_to_schema(db_book: models.Book) -> schemas.Book:
    """
    Преобразует SQLAlchemy Book в Pydantic Book
    Имена колонок отличаются от полей API (pub_year -> publishYear)
    """
    book_data = {
        "id": db_book.id,
        "authorID": db_book.author_id,
        "createdByUserID": db_book.created_by_user_id,
        "title": db_book.title,
        "publishYear": db_book.pub_year,
        "genre": db_book.genre,
    }

    return schemas.Book(**book_data)
