"""
Проверка параметров пути и строки запроса.

Тела запросов проверяются pydantic-схемами (catalog.schemas); здесь только то,
что приходит строками из URL.
"""

import re
from typing import Optional

import catalog.schemas as schemas
from catalog.errors import ValidationError

_POSITIVE_INT = re.compile(r"[0-9]+")
_FOUR_DIGITS = re.compile(r"[0-9]{4}")


def parse_positive_int(value: Optional[str]) -> Optional[int]:
    """
    Вернуть число в диапазоне 1..MAX_ID или None, если строка не является таким числом
    """
    if value is None or not _POSITIVE_INT.fullmatch(value):
        return None
    # Длинные строки отбрасываем до int(): у него есть лимит на число цифр
    if len(value.lstrip("0")) > len(str(schemas.MAX_ID)):
        return None
    number = int(value)
    return number if 0 < number <= schemas.MAX_ID else None


def is_four_digit_year(value: str) -> bool:
    return _FOUR_DIGITS.fullmatch(value) is not None


def require_positive_id(value: str) -> int:
    number = parse_positive_int(value)
    if number is None:
        raise ValidationError("id must be a positive integer")
    return number


def book_filters(
    author_id: Optional[str],
    genre: Optional[str],
    min_year: Optional[str],
) -> schemas.BookFilters:
    """
    Собрать фильтры списка книг из параметров запроса

    Отсутствующие параметры не фильтруют; некорректные дают 400
    """
    filters = schemas.BookFilters(genre=genre)

    if author_id is not None:
        filters.author_id = parse_positive_int(author_id)
        if filters.author_id is None:
            raise ValidationError("authorID must be a positive integer")

    if min_year is not None:
        if not is_four_digit_year(min_year):
            raise ValidationError("minYear must be 4 digits")
        filters.min_year = min_year

    return filters
