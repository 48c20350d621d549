from pydantic import BaseModel, Field, field_validator
from typing import Optional

PUBLISH_YEAR_PATTERN = r"^[0-9]{4}$"
USERNAME_PATTERN = r"^[A-Za-z0-9_]+$"

# Верхняя граница INTEGER в SQLite и BIGINT в PostgreSQL
MAX_ID = 2**63 - 1

# Authors
class AuthorCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    bio: str = Field(..., min_length=1, max_length=2000)

class Author(BaseModel):
    id: int
    name: str
    bio: str

    class Config:
        from_attributes = True

# Books
class BookCreate(BaseModel):
    """
    Тело запроса для создания и полной замены книги
    Поля принимаются только под именами API (authorID, publishYear)
    """
    author_id: int = Field(..., alias="authorID", gt=0, le=MAX_ID)
    title: str = Field(..., min_length=1, max_length=300)
    publish_year: str = Field(..., alias="publishYear", pattern=PUBLISH_YEAR_PATTERN)
    genre: str = Field(..., min_length=1, max_length=100)

    @field_validator("author_id", mode="before")
    @classmethod
    def author_id_is_number(cls, value):
        # 5.0 допустимо, "5" и true нет
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("authorID must be a number")
        return value

class BookUpdate(BookCreate):
    pass

class Book(BaseModel):
    id: int
    author_id: int = Field(..., alias="authorID")
    created_by_user_id: int = Field(..., alias="createdByUserID")
    title: str
    publish_year: str = Field(..., alias="publishYear")
    genre: str

    class Config:
        populate_by_name = True

class BookFilters(BaseModel):
    author_id: Optional[int] = None
    genre: Optional[str] = None
    min_year: Optional[str] = None

# Users
class Credentials(BaseModel):
    username: str = Field(..., min_length=1, max_length=50, pattern=USERNAME_PATTERN)
    password: str = Field(..., min_length=1, max_length=200)

class RegisterRequest(Credentials):
    pass

class LoginRequest(Credentials):
    pass

class User(BaseModel):
    id: int
    username: str

    class Config:
        from_attributes = True
