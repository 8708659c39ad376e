import re
from typing import List, Optional

EXCERPT_LENGTH = 200

_NON_WORD = re.compile(r"[^\w\s-]", re.UNICODE)
_SPACES = re.compile(r"\s+")
_HYPHENS = re.compile(r"-{2,}")


def slugify(value: str) -> str:
    """Преобразование заголовка в slug: 'Hello World!' -> 'hello-world'"""
    value = _NON_WORD.sub("", value.lower())
    value = _SPACES.sub("-", value.strip())
    value = _HYPHENS.sub("-", value)
    return value.strip("-_")


def make_excerpt(content: str, length: int = EXCERPT_LENGTH) -> str:
    """Краткое содержание поста из первых символов текста"""
    text = _SPACES.sub(" ", content).strip()
    if len(text) <= length:
        return text
    return text[:length].rstrip() + "..."


def split_tags(raw: Optional[str]) -> List[str]:
    """Разбор тегов из строки через запятую с сохранением порядка"""
    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def escape_like(value: str, escape: str = "\\") -> str:
    """Экранирование спецсимволов LIKE"""
    return (
        value.replace(escape, escape * 2)
        .replace("%", escape + "%")
        .replace("_", escape + "_")
    )
