"""定义项目中使用的常量、枚举与固定错误描述。"""

from dataclasses import dataclass
from enum import Enum


class SavedItemsTable(str, Enum):
    """saved_items 表结构名称及索引常量。"""
    TABLE_NAME = "saved_items"
    COLUMN_NAME = "user_id"
    INDEX_NAME = f"idx_{TABLE_NAME}_{COLUMN_NAME}"


class ErrorKind(str, Enum):
    """对外暴露的错误类别。"""
    AUTH = "auth"
    BAD_REQUEST = "bad_request"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ErrorDescriptor:
    """不可变的错误描述，包含类别与固定的对外提示信息。"""
    kind: ErrorKind
    message: str

    def __str__(self) -> str:
        return self.message


# Header injected by the API gateway once the caller is authenticated.
USER_ID_HEADER = "USER_ID"

# Largest value accepted for the identity header (unsigned 64-bit).
MAX_USER_ID = 2**64 - 1

UNAUTHORIZED = ErrorDescriptor(
    ErrorKind.AUTH, f"please include a valid {USER_ID_HEADER} header in the request"
)
SERVICE_UNAVAILABLE = ErrorDescriptor(
    ErrorKind.UNAVAILABLE, "sorry, this service is currently unavailable"
)
INVALID_BODY = ErrorDescriptor(
    ErrorKind.BAD_REQUEST, "request body must be a JSON array of objects"
)
