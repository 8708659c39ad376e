from contextlib import asynccontextmanager
import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from blog_api.api.http import health_router
from blog_api.api.router import api_router
from blog_api.core.config import settings
from blog_api.core.db import init_models
from blog_api.core.errors import register_exception_handlers
from blog_api.core.logging import configure_logging

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_models()
    logger.info("Blog API started")
    yield


app = FastAPI(
    title="Blog API",
    description="REST API блога: посты, категории и комментарии",
    version="1.0.0",
    lifespan=lifespan
)

# Настройка CORS для работы с frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Загруженные изображения отдаются как статика
os.makedirs(settings.upload_dir, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

# Подключаем роутеры
app.include_router(health_router)
app.include_router(api_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "Blog API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
