import json
import logging
from typing import Optional

from fastapi import Request

from saved_items.constants import INVALID_BODY
from saved_items.db.repository import SavedItemsRepo
from saved_items.models.saved_item import (
    EndpointResult,
    MessageResponse,
    RequestContext,
    parse_saved_items,
)


_repo: Optional[SavedItemsRepo] = None
_logger: logging.Logger = logging.getLogger("saved_items.services.saved_items")


def configure_saved_items_service(
    *,
    repo: SavedItemsRepo,
    logger: logging.Logger,
) -> None:
    """在应用启动阶段注入收藏服务所需的仓储与日志对象。"""
    global _repo, _logger
    _repo = repo
    _logger = logger


def _require_repo() -> SavedItemsRepo:
    """返回已配置的仓储实例，未配置时抛出异常交由整形阶段处理。"""
    if _repo is None:
        raise RuntimeError("Saved items repository not configured")
    return _repo


def _reject_constant(name: str):
    """拒绝 NaN、Infinity 等非标准 JSON 常量。"""
    raise ValueError(f"invalid JSON constant: {name}")


async def get_saved_items(ctx: RequestContext, request: Request) -> EndpointResult:
    """返回当前用户的全部收藏条目。"""
    items = await _require_repo().get(ctx.user_id)
    return EndpointResult(200, items)


async def put_saved_items(ctx: RequestContext, request: Request) -> EndpointResult:
    """用请求体中的 JSON 数组整体替换当前用户的收藏集合。"""
    repo = _require_repo()
    try:
        body = json.loads(await request.body(), parse_constant=_reject_constant)
    except ValueError:
        return EndpointResult(400, None, INVALID_BODY)

    items = parse_saved_items(body)
    if items is None:
        return EndpointResult(400, None, INVALID_BODY)

    await repo.put(ctx.user_id, items)
    _logger.debug(
        "Saved items replaced",
        extra={"user_id": ctx.user_id, "count": len(items)},
    )
    return EndpointResult(
        201, MessageResponse(message="successfully saved items").model_dump()
    )


async def delete_saved_items(ctx: RequestContext, request: Request) -> EndpointResult:
    """删除当前用户的全部收藏条目。"""
    await _require_repo().delete(ctx.user_id)
    return EndpointResult(
        200, MessageResponse(message="successfully deleted saved items").model_dump()
    )
