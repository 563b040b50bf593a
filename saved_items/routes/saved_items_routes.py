"""定义收藏条目相关的 HTTP 路由。"""

from fastapi import APIRouter, Request

from saved_items.db.database import pg_health_check
from saved_items.middleware import render, saved_items_pipeline
from saved_items.services import (
    delete_saved_items,
    get_saved_items,
    put_saved_items,
)


PREFIX = "/svc/saved-items"

router = APIRouter()


@router.get("/health")
async def health_check():
    """检查服务健康状态与数据库连通性。"""
    postgres_ok = await pg_health_check()
    return {"status": "ok" if postgres_ok else "degraded", "postgres": postgres_ok}


@router.get(f"{PREFIX}/user")
async def fetch_saved_items(request: Request):
    """获取当前用户的收藏条目。"""
    return render(await saved_items_pipeline.run(request, get_saved_items))


@router.put(f"{PREFIX}/user")
async def replace_saved_items(request: Request):
    """整体替换当前用户的收藏条目。"""
    return render(await saved_items_pipeline.run(request, put_saved_items))


@router.delete(f"{PREFIX}/user")
async def remove_saved_items(request: Request):
    """删除当前用户的收藏条目。"""
    return render(await saved_items_pipeline.run(request, delete_saved_items))
