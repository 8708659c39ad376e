from blog_api.domains.categories.entities import Category, CategorySummary
from blog_api.domains.categories.schemas import (
    CategoryCreate, CategoryUpdate, CategoryResponse, CategorySummaryResponse
)

__all__ = [
    "Category", "CategorySummary",
    "CategoryCreate", "CategoryUpdate", "CategoryResponse", "CategorySummaryResponse"
]
