"""
Разбор идентификатора ресурса из пути запроса.

Один и тот же эндпоинт принимает либо UUID записи, либо человекочитаемый slug.
Строка разбирается один раз на границе, дальше репозитории работают с
``EntityId`` или ``Slug``.
"""
import uuid
from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class EntityId:
    """Корректный UUID; исходный текст сохраняется для поиска по slug"""
    value: uuid.UUID
    text: str


@dataclass(frozen=True)
class Slug:
    value: str


Identifier = Union[EntityId, Slug]


def parse_uuid(raw: Optional[str]) -> Optional[uuid.UUID]:
    if not raw:
        return None
    try:
        return uuid.UUID(raw)
    except (ValueError, AttributeError, TypeError):
        return None


def parse_identifier(raw: str) -> Identifier:
    """Разбор идентификатора: UUID, если строка им является, иначе slug"""
    value = parse_uuid(raw)
    if value is not None:
        return EntityId(value=value, text=raw)
    return Slug(value=raw)
