from typing import Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Базовая схема с camelCase именами полей в JSON"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class Envelope(BaseModel, Generic[DataT]):
    """Успешный ответ API"""
    success: bool = True
    data: DataT


class PageEnvelope(BaseModel, Generic[DataT]):
    """Успешный ответ API со страницей результатов"""
    success: bool = True
    data: List[DataT]
    pagination: Pagination
