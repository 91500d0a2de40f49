"""
Tuckql 语句执行器

唯一执行 I/O 的组件：读语句返回解码后的行，写语句返回 CursorResult。
驱动异常不做包装，原样抛出。
"""

import logging
import re
from typing import Any, Dict, List, Sequence, Union

import aiosqlite

from ..common.exceptions import QueryError
from .codec import JsonImpl, decode_rows
from .result import CursorResult


logger = logging.getLogger(__name__)

_READ_STATEMENT = re.compile(r'^\s*select', re.IGNORECASE)

RowSet = List[Dict[str, Any]]


def is_read_statement(sql: str) -> bool:
    """判断是否为读语句（以 select 开头，大小写不敏感）"""
    return _READ_STATEMENT.match(sql) is not None


class Executor:
    """语句执行器"""

    def __init__(self, connection: aiosqlite.Connection, json_impl: JsonImpl):
        """
        初始化执行器

        Args:
            connection: 已打开的 aiosqlite 连接
            json_impl: 解码结果行使用的 JSON 实现
        """
        self.connection = connection
        self.json_impl = json_impl
        self.connection.row_factory = aiosqlite.Row

    async def run(self, sql: str, params: Sequence[Any] = ()) -> Union[RowSet, CursorResult]:
        """
        执行一条语句

        Args:
            sql: SQL 文本
            params: 位置参数

        Returns:
            读语句返回行列表（可能为空），写语句返回 CursorResult

        Raises:
            QueryError: SQL 为空
        """
        if not sql or not sql.strip():
            raise QueryError("SQL statement must not be empty")
        if is_read_statement(sql):
            return await self.fetch(sql, params)
        return await self.write(sql, params)

    async def fetch(self, sql: str, params: Sequence[Any] = ()) -> RowSet:
        """执行读语句，返回解码后的行"""
        logger.debug("Fetching: %s (%d params)", sql, len(params))
        async with self.connection.execute(sql, tuple(params)) as cursor:
            rows = await cursor.fetchall()
        return decode_rows((dict(row) for row in rows), self.json_impl)

    async def write(self, sql: str, params: Sequence[Any] = ()) -> CursorResult:
        """执行写语句并立即提交，只执行一次"""
        logger.debug("Writing: %s (%d params)", sql, len(params))
        cursor = await self.connection.execute(sql, tuple(params))
        try:
            result = CursorResult(rowcount=cursor.rowcount, lastrowid=cursor.lastrowid)
        finally:
            await cursor.close()
        await self.connection.commit()
        return result
