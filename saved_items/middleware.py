"""收藏服务的请求处理管线：身份校验、错误整形与 JSON 响应渲染。

每个阶段接收 (上下文, 请求, 下一阶段)，返回 EndpointResult。
管线按顺序组合各阶段，最内层为具体的资源处理函数。
"""

from typing import Awaitable, Callable, List, Optional, Sequence

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from saved_items.config import ERROR_FIELD, logger
from saved_items.constants import (
    MAX_USER_ID,
    SERVICE_UNAVAILABLE,
    UNAUTHORIZED,
    USER_ID_HEADER,
)
from saved_items.models.saved_item import EndpointResult, ErrorResponse, RequestContext


Endpoint = Callable[[RequestContext, Request], Awaitable[EndpointResult]]
Stage = Callable[[RequestContext, Request, Endpoint], Awaitable[EndpointResult]]


def parse_user_id(value: Optional[str]) -> Optional[int]:
    """将请求头解析为十进制无符号整数，缺失、非法或为 0 时返回 None。"""
    if not value or not value.isascii() or not value.isdigit():
        return None
    user_id = int(value)
    if user_id == 0 or user_id > MAX_USER_ID:
        return None
    return user_id


async def auth_check(
    ctx: RequestContext, request: Request, call_next: Endpoint
) -> EndpointResult:
    """校验网关注入的用户 ID 请求头，通过后写入上下文并继续处理。"""
    user_id = parse_user_id(request.headers.get(USER_ID_HEADER))
    if user_id is None:
        return EndpointResult(401, None, UNAUTHORIZED)
    ctx.user_id = user_id
    return await call_next(ctx, request)


async def json_middleware(
    ctx: RequestContext, request: Request, call_next: Endpoint
) -> EndpointResult:
    """捕获内部错误并替换为通用的服务不可用响应，原始错误仅记录到日志。"""
    try:
        result = await call_next(ctx, request)
    except Exception as exc:
        result = EndpointResult(500, None, exc)

    if result.error is not None and result.status_code != 401:
        err = result.error
        exc_info = None
        if isinstance(err, BaseException):
            exc_info = (type(err), err, err.__traceback__)
        logger.error(
            "unexpected service error",
            exc_info=exc_info,
            extra={
                ERROR_FIELD: str(err),
                "method": request.method,
                "path": request.url.path,
            },
        )
        return EndpointResult(503, None, SERVICE_UNAVAILABLE)

    return result


class Pipeline:
    """按顺序组合多个处理阶段，最外层阶段最先执行。"""

    def __init__(self, stages: Sequence[Stage]):
        self._stages: List[Stage] = list(stages)

    def wrap(self, endpoint: Endpoint) -> Endpoint:
        """返回被全部阶段包裹后的处理函数。"""
        wrapped = endpoint
        for stage in reversed(self._stages):
            wrapped = _bind(stage, wrapped)
        return wrapped

    async def run(self, request: Request, endpoint: Endpoint) -> EndpointResult:
        """为本次请求创建新的上下文并执行整条管线。"""
        return await self.wrap(endpoint)(RequestContext(), request)


def _bind(stage: Stage, call_next: Endpoint) -> Endpoint:
    async def bound(ctx: RequestContext, request: Request) -> EndpointResult:
        return await stage(ctx, request, call_next)

    return bound


def render(result: EndpointResult) -> Response:
    """将 EndpointResult 转换为统一格式的 JSON 响应。"""
    if result.error is not None:
        message = getattr(result.error, "message", None) or str(result.error)
        return JSONResponse(
            status_code=result.status_code,
            content=ErrorResponse(error=message).model_dump(),
        )
    if result.payload is None:
        return Response(status_code=result.status_code)
    return JSONResponse(status_code=result.status_code, content=result.payload)


# Shaper outermost, identity gate next, resource handler innermost.
saved_items_pipeline = Pipeline([json_middleware, auth_check])
