from fastapi import APIRouter
from blog_api.api.http import auth_router, posts_router, categories_router

api_router = APIRouter(prefix="/api")
api_router.include_router(auth_router)
api_router.include_router(posts_router)
api_router.include_router(categories_router)
