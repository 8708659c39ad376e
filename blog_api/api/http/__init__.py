from blog_api.api.http.health import router as health_router
from blog_api.api.http.auth import router as auth_router
from blog_api.api.http.posts import router as posts_router
from blog_api.api.http.categories import router as categories_router

__all__ = [
    "health_router",
    "auth_router",
    "posts_router",
    "categories_router"
]
