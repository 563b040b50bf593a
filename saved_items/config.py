"""集中管理应用配置与日志初始化的模块。"""

from datetime import datetime
from enum import Enum
import json
import logging
import os
from urllib.parse import quote_plus
from dotenv import load_dotenv, find_dotenv
from starlette.middleware.base import BaseHTTPMiddleware


load_dotenv(find_dotenv())

class LogLevel(Enum):
    """日志输出等级枚举，与 Python logging 保持一致。"""
    FATAL = "fatal"
    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"
    NOTSET = "notset"

def get_env_variable(
    var_name: str, default_value: str = None, required: bool = False
) -> str:
    """统一读取环境变量，可指定默认值与必填校验。"""
    value = os.getenv(var_name)
    if value is None:
        if default_value is None and required:
            raise ValueError(f"Environment variable '{var_name}' not found.")
        return default_value
    return value

# DATABASE CONFIGURATION
POSTGRES_DB = get_env_variable("POSTGRES_DB", "saved_items")
POSTGRES_USER = get_env_variable("POSTGRES_USER", "postgres")
POSTGRES_PASSWORD = get_env_variable("POSTGRES_PASSWORD", "")
DB_HOST = get_env_variable("DB_HOST", "localhost")
DB_PORT = get_env_variable("DB_PORT", "5432")
DB_POOL_MIN_SIZE = int(get_env_variable("DB_POOL_MIN_SIZE", "1"))
DB_POOL_MAX_SIZE = int(get_env_variable("DB_POOL_MAX_SIZE", "10"))

pg_connection_suffix = f"{quote_plus(POSTGRES_USER)}:{quote_plus(POSTGRES_PASSWORD)}@{DB_HOST}:{DB_PORT}/{quote_plus(POSTGRES_DB)}"
PG_DSN = f"postgresql://{pg_connection_suffix}"

SERVICE_HOST = get_env_variable("SERVICE_HOST", "localhost", True)
SERVICE_PORT = int(get_env_variable("SERVICE_PORT", "8000", True))

GZIP_MINIMUM_SIZE = int(get_env_variable("GZIP_MINIMUM_SIZE", "500"))

# Logging Configuration

HTTP_REQ = "http_req"
HTTP_RESP = "http_resp"
ERROR_FIELD = "error"

logger = logging.getLogger()

LOGGING_LEVEL = get_env_variable("LOGGING_LEVEL", LogLevel.INFO.value)
if LOGGING_LEVEL == LogLevel.DEBUG.value:
    logger.setLevel(logging.DEBUG)
elif LOGGING_LEVEL == LogLevel.INFO.value:
    logger.setLevel(logging.INFO)
elif LOGGING_LEVEL == LogLevel.WARN.value:
    logger.setLevel(logging.WARN)
elif LOGGING_LEVEL == LogLevel.ERROR.value:
    logger.setLevel(logging.ERROR)
elif LOGGING_LEVEL == LogLevel.FATAL.value:
    logger.setLevel(logging.FATAL)
else:
    logger.setLevel(logging.INFO)


class JsonFormatter(logging.Formatter):
    """将日志记录序列化为单行 JSON，便于日志平台采集。"""
    def format(self, record):
        json_record = {}

        json_record["message"] = record.getMessage()

        for field in (HTTP_REQ, HTTP_RESP, ERROR_FIELD):
            if field in record.__dict__:
                json_record[field] = record.__dict__[field]

        if record.levelno >= logging.ERROR and record.exc_info:
            json_record["exception"] = self.formatException(record.exc_info)

        timestamp = datetime.fromtimestamp(record.created)
        json_record["timestamp"] = timestamp.isoformat()

        # add level
        json_record["level"] = record.levelname
        json_record["filename"] = record.filename
        json_record["lineno"] = record.lineno
        json_record["funcName"] = record.funcName
        json_record["module"] = record.module
        json_record["threadName"] = record.threadName

        return json.dumps(json_record, default=str)


CONSOLE_JSON = get_env_variable("CONSOLE_JSON", "false").lower() == "true"
if CONSOLE_JSON:
    formatter = JsonFormatter()
else:
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

handler = logging.StreamHandler()
handler.setFormatter(formatter)
logger.addHandler(handler)

class LogMiddleware(BaseHTTPMiddleware):
    """记录请求与响应日志，便于观察系统调用情况。"""
    async def dispatch(self, request, call_next):
        """在请求处理前后打印路由及响应信息。"""
        response = await call_next(request)

        logger_method = logger.info

        if request.url.path.endswith("/health"):
            logger_method = logger.debug

        logger_method(
            f"Request {request.method} {request.url} - {response.status_code}",
            extra={
                HTTP_REQ: {"method": request.method, "url": str(request.url)},
                HTTP_RESP: {"status_code": response.status_code},
            },
        )

        return response


logging.getLogger("uvicorn.access").disabled = True
