"""PostgreSQL 连接池、表结构初始化与健康检查工具方法。"""

import asyncpg
from saved_items.config import DB_POOL_MAX_SIZE, DB_POOL_MIN_SIZE, PG_DSN, logger
from saved_items.constants import SavedItemsTable

# PostgreSQL 数据库连接池管理。
class PSQLDatabase:
    """维护全局 asyncpg 连接池的单例封装。"""
    pool = None

    @classmethod
    async def get_pool(cls):
        """惰性创建并返回 asyncpg 连接池。"""
        if cls.pool is None:
            cls.pool = await asyncpg.create_pool(
                dsn=PG_DSN,
                min_size=DB_POOL_MIN_SIZE,
                max_size=DB_POOL_MAX_SIZE,
            )
        return cls.pool
    
    @classmethod
    async def close_pool(cls):
        """关闭并清理连接池资源。"""
        if cls.pool is not None:
            await cls.pool.close()
            cls.pool = None

# 确保收藏条目表及索引存在。
async def ensure_saved_items_table():
    """创建 saved_items 表及用户索引，重复执行不会报错。"""
    pool = await PSQLDatabase.get_pool()
    async with pool.acquire() as conn:
        await conn.execute(
            f"""
            CREATE TABLE IF NOT EXISTS {SavedItemsTable.TABLE_NAME.value} (
                user_id NUMERIC(20, 0) NOT NULL,
                position INTEGER NOT NULL,
                item JSONB NOT NULL,
                saved_at TIMESTAMPTZ NOT NULL DEFAULT now(),
                PRIMARY KEY (user_id, position)
            );
            """
        )

        await conn.execute(
            f"""
            CREATE INDEX IF NOT EXISTS {SavedItemsTable.INDEX_NAME.value}
            ON {SavedItemsTable.TABLE_NAME.value} ({SavedItemsTable.COLUMN_NAME.value});
            """
        )

        logger.info("Saved items table ensured.")

# 检查 PostgreSQL 数据库的健康状态。
async def pg_health_check():
    """执行轻量级查询检测 PostgreSQL 是否可用。"""
    try:
        pool = await PSQLDatabase.get_pool()
        async with pool.acquire() as conn:
            await conn.fetchval("SELECT 1")
        return True
    except Exception as e:
        logger.error(f"Health check failed: {e}")
        return False
