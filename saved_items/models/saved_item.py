"""定义收藏条目、响应信封与请求上下文的数据模型。"""

from dataclasses import dataclass
from typing import Any, Dict, List, NamedTuple, Optional, Union

from pydantic import BaseModel

from saved_items.constants import ErrorDescriptor


# A saved item is opaque to the service; it is stored and returned as-is.
SavedItem = Dict[str, Any]


class MessageResponse(BaseModel):
    """成功或提示类结果的 JSON 信封。"""
    message: str


class ErrorResponse(BaseModel):
    """失败结果的 JSON 信封。"""
    error: str


@dataclass
class RequestContext:
    """单次请求范围内的上下文，由身份校验阶段写入用户 ID。"""
    user_id: Optional[int] = None


class EndpointResult(NamedTuple):
    """处理函数与中间件阶段统一返回的 (状态码, 负载, 错误) 三元组。"""
    status_code: int
    payload: Any = None
    error: Optional[Union[ErrorDescriptor, BaseException]] = None


def parse_saved_items(body: Any) -> Optional[List[SavedItem]]:
    """校验请求体是否为 JSON 对象数组，不合法时返回 None。"""
    if not isinstance(body, list):
        return None
    if not all(isinstance(item, dict) for item in body):
        return None
    return body
