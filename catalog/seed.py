#!/usr/bin/env python3
"""
Заполнение каталога демо-данными: три автора, три книги и пользователь foo/bar
"""

import logging

from sqlalchemy.orm import Session

import catalog.models as models
from catalog.auth import password_hasher
from catalog.database import Base, SessionLocal, engine

logger = logging.getLogger(__name__)

DEMO_USERNAME = "foo"
DEMO_PASSWORD = "bar"

AUTHORS = [
    {"name": "J.K. Rowling", "bio": "Science Fiction author."},
    {"name": "Freida McFadden", "bio": "Murder Mystery author."},
    {"name": "Colleen Hoover", "bio": "Romance Fiction author."},
]

# author: индекс в AUTHORS
BOOKS = [
    {"author": 0, "title": "Harry Potter & The Chamber of Secrets", "pub_year": "1998", "genre": "Sci-Fi"},
    {"author": 1, "title": "Never Lie", "pub_year": "2022", "genre": "Mystery"},
    {"author": 2, "title": "Verity", "pub_year": "2018", "genre": "Psychological Thriller"},
]

def seed(db: Session) -> models.User:
    """Очистить все таблицы и загрузить демо-данные"""
    # Порядок важен из-за внешних ключей
    for model in (models.UserSession, models.Book, models.User, models.Author):
        db.query(model).delete()

    authors = [models.Author(**data) for data in AUTHORS]
    db.add_all(authors)

    user = models.User(username=DEMO_USERNAME, password_hash=password_hasher.hash(DEMO_PASSWORD))
    db.add(user)
    db.flush()

    for data in BOOKS:
        db.add(models.Book(
            author_id=authors[data["author"]].id,
            created_by_user_id=user.id,
            title=data["title"],
            pub_year=data["pub_year"],
            genre=data["genre"],
        ))

    db.commit()
    return user

def main():
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed(db)
        logger.info(f"Seeded {len(AUTHORS)} authors, {len(BOOKS)} books and demo user {DEMO_USERNAME}/{DEMO_PASSWORD}")
    except Exception as e:
        db.rollback()
        logger.error(f"Seeding failed: {e}")
        raise
    finally:
        db.close()

if __name__ == "__main__":
    main()
