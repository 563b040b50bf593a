"""FastAPI 入口脚本，负责应用生命周期、中间件与路由注册。"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
import uvicorn

from saved_items.config import (
    GZIP_MINIMUM_SIZE,
    SERVICE_HOST,
    SERVICE_PORT,
    LogMiddleware,
    logger,
)
from saved_items.db.database import PSQLDatabase, ensure_saved_items_table
from saved_items.db.repository import PgSavedItemsRepo, SavedItemsRepo
from saved_items.routes import saved_items_routes
from saved_items.services import configure_saved_items_service


def create_app(repo: Optional[SavedItemsRepo] = None) -> FastAPI:
    """构建应用；传入 repo 时跳过数据库连接池的创建。"""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """管理应用启动与销毁时需要执行的资源准备与清理工作。"""
        if repo is not None:
            configure_saved_items_service(repo=repo, logger=logger)
            yield
            # /health may still have opened a pool on demand.
            await PSQLDatabase.close_pool()
            return

        pool = await PSQLDatabase.get_pool()
        await ensure_saved_items_table()
        configure_saved_items_service(repo=PgSavedItemsRepo(pool), logger=logger)
        logger.info("Saved items service started")

        yield

        logger.info("Shutting down saved items service")
        await PSQLDatabase.close_pool()

    app = FastAPI(title="saved-items", lifespan=lifespan)

    # GZip sits inside LogMiddleware so it sees the complete response body.
    app.add_middleware(GZipMiddleware, minimum_size=GZIP_MINIMUM_SIZE)
    app.add_middleware(LogMiddleware)

    app.include_router(saved_items_routes.router)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=SERVICE_HOST, port=SERVICE_PORT, log_config=None)
