from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.core.db import get_db

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(db: AsyncSession = Depends(get_db)):
    """Проверка доступности API и базы данных"""
    await db.execute(text("SELECT 1"))
    return {"success": True, "data": {"status": "ok"}}
