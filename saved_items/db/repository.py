"""收藏条目的数据访问层：仓储接口与基于 asyncpg 的实现。"""

from abc import ABC, abstractmethod
from decimal import Decimal
import json
from typing import List

from saved_items.constants import SavedItemsTable
from saved_items.models.saved_item import SavedItem


_TABLE = SavedItemsTable.TABLE_NAME.value


class SavedItemsRepo(ABC):
    """按用户 ID 读取、整体替换、删除收藏集合的仓储接口。"""

    @abstractmethod
    async def get(self, user_id: int) -> List[SavedItem]:
        """返回用户的全部收藏条目，按保存顺序排列。"""

    @abstractmethod
    async def put(self, user_id: int, items: List[SavedItem]) -> None:
        """用给定列表整体替换用户的收藏集合。"""

    @abstractmethod
    async def delete(self, user_id: int) -> None:
        """删除用户的全部收藏条目。"""


class PgSavedItemsRepo(SavedItemsRepo):
    """基于 asyncpg 连接池的 PostgreSQL 仓储实现。"""

    def __init__(self, pool):
        self._pool = pool

    async def get(self, user_id: int) -> List[SavedItem]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                f"SELECT item FROM {_TABLE} WHERE user_id = $1 ORDER BY position",
                Decimal(user_id),
            )
        return [json.loads(row["item"]) for row in rows]

    async def put(self, user_id: int, items: List[SavedItem]) -> None:
        """在单个事务内先删除旧集合再写入新集合。"""
        key = Decimal(user_id)
        async with self._pool.acquire() as conn:
            async with conn.transaction():
                await conn.execute(f"DELETE FROM {_TABLE} WHERE user_id = $1", key)
                if items:
                    await conn.executemany(
                        f"INSERT INTO {_TABLE} (user_id, position, item) "
                        "VALUES ($1, $2, $3::jsonb)",
                        [
                            (key, position, json.dumps(item))
                            for position, item in enumerate(items)
                        ],
                    )

    async def delete(self, user_id: int) -> None:
        async with self._pool.acquire() as conn:
            await conn.execute(
                f"DELETE FROM {_TABLE} WHERE user_id = $1", Decimal(user_id)
            )
