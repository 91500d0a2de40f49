"""
Tuckql 表句柄

一个 SQLiteTable 对应一个表上下文：持有查询状态并绑定一个 SQLite 连接。
"""

import asyncio
import logging
import os
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import aiosqlite

from ..common.exceptions import ConfigurationError, ConnectionClosedError, ValidationError
from ..common.options import SqliteConnectorOptions, get_database, get_default_connector_options, set_database
from ..query.builder import (
    build_delete,
    build_insert,
    build_select,
    build_update,
    render_join,
)
from ..query.codec import get_json_impl
from ..query.executor import Executor, RowSet
from ..query.result import CursorResult
from ..query.state import QueryState


logger = logging.getLogger(__name__)


class SQLiteTable:
    """
    SQLite 表句柄

    查询状态（列、JOIN、排序、LIMIT）在多次查询之间保留，
    复用实例执行不同形状的查询时需要显式覆盖或调用 reset()。

    使用方式：
        users = SQLiteTable('users', database='app.sqlite')
        users.set_columns(['id', 'name'])
        users.add_sort('name DESC')
        rows = await users.select('id > ?', 10)
        await users.close()
    """

    def __init__(
        self,
        table: str,
        database: Optional[Union[str, 'os.PathLike[str]']] = None,
        options: Optional[SqliteConnectorOptions] = None,
    ):
        """
        初始化表句柄

        Args:
            table: 表名
            database: 数据库文件路径，None 时读取进程级默认路径（只在此处读取一次）
            options: 连接器配置选项

        Raises:
            ConfigurationError: 数据库路径为空，或 JSON 实现不可用
        """
        self.database = os.fspath(database) if database is not None else get_database()
        if not self.database:
            raise ConfigurationError("Database path must not be empty")
        self.options = options or get_default_connector_options()
        self.json_impl = get_json_impl(self.options.json_impl)

        self._state = QueryState()
        self.set_table(table)

        self._connection: Optional[aiosqlite.Connection] = None
        self._executor: Optional[Executor] = None
        self._connect_lock = asyncio.Lock()
        self._closed = False

    @staticmethod
    def set_database(path: Union[str, 'os.PathLike[str]']) -> None:
        """设置进程级默认数据库路径，只影响之后创建的实例"""
        set_database(path)

    # ========== 查询状态 ==========

    @property
    def state(self) -> QueryState:
        """当前查询状态的副本"""
        return self._state.copy()

    @property
    def closed(self) -> bool:
        return self._closed

    def set_table(self, table: str) -> None:
        self._state.table = table

    def get_table(self) -> str:
        return self._state.table

    def set_columns(self, columns: Sequence[str]) -> None:
        """
        设置投影列，完全替换之前的列

        Args:
            columns: 列名序列，空序列表示 SELECT *

        Raises:
            ValidationError: 传入单个字符串
        """
        if isinstance(columns, str):
            raise ValidationError("columns must be a sequence of column names, not a str")
        self._state.columns = list(columns)

    def get_columns(self) -> List[str]:
        return list(self._state.columns)

    def set_limit(self, limit: Optional[int]) -> None:
        """设置 LIMIT，None 表示清除"""
        self._state.limit = limit

    def add_sort(self, term: str) -> None:
        """追加一个排序项，如 'name DESC'"""
        self._state.sort.append(term)

    def add_join(self, kind: str, table: str, column_a: str, column_b: str) -> None:
        """
        追加 JOIN 子句

        Args:
            kind: 'left' / 'inner' / 'right'，其他值按 left 处理
            table: 关联表
            column_a: 左侧列（如 'users.id'）
            column_b: 右侧列（如 'orders.user_id'）
        """
        self._state.joins.append(render_join(kind, table, column_a, column_b))

    def reset(self) -> None:
        """清空列、JOIN、排序和 LIMIT，保留表名"""
        self._state.reset()

    # ========== 连接管理 ==========

    async def connect(self) -> None:
        """打开连接（首次查询时也会自动打开）"""
        await self._get_executor()

    def _ensure_open(self) -> None:
        if self._closed:
            raise ConnectionClosedError(self._state.table)

    async def _get_executor(self) -> Executor:
        self._ensure_open()
        if self._executor is not None:
            return self._executor

        async with self._connect_lock:
            self._ensure_open()
            if self._executor is None:
                logger.debug("Opening SQLite connection to %s", self.database)
                connection = await aiosqlite.connect(self.database, **self.options.connect_kwargs())
                # 打开期间调用了 close()
                if self._closed:
                    await connection.close()
                    raise ConnectionClosedError(self._state.table)
                self._connection = connection
                self._executor = Executor(connection, self.json_impl)
        return self._executor

    async def close(self) -> None:
        """关闭连接；之后的所有操作抛出 ConnectionClosedError"""
        if self._closed:
            return
        self._closed = True
        # 等待进行中的连接打开完成
        async with self._connect_lock:
            connection, self._connection, self._executor = self._connection, None, None
        if connection is not None:
            logger.debug("Closing SQLite connection to %s", self.database)
            await connection.close()

    async def __aenter__(self) -> 'SQLiteTable':
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    # ========== 查询 ==========

    async def query(self, sql: str, *args: Any) -> Union[RowSet, CursorResult]:
        """
        执行原始 SQL

        以 select 开头的语句返回解码后的行，其余返回 CursorResult。
        """
        executor = await self._get_executor()
        return await executor.run(sql, args)

    async def select(self, where: Optional[str] = None, *args: Any) -> List[Dict[str, Any]]:
        """
        执行 SELECT

        Args:
            where: WHERE 片段（'id = ?' 或 'WHERE id = ?'）
            *args: WHERE 片段中 ? 对应的参数

        Returns:
            行列表，文本列值会尝试按 JSON 解码
        """
        self._ensure_open()
        compiled = build_select(self._state, where, args)
        executor = await self._get_executor()
        return await executor.fetch(compiled.sql, compiled.params)

    async def insert(self, data: Mapping[str, Any]) -> CursorResult:
        """
        执行 INSERT

        Args:
            data: 列名 -> 值，dict/list 会被序列化为 JSON 文本

        Returns:
            CursorResult（lastrowid 为新行的 rowid）

        Raises:
            ValidationError: data 为空
        """
        self._ensure_open()
        compiled = build_insert(self._state, data, self.json_impl)
        executor = await self._get_executor()
        return await executor.write(compiled.sql, compiled.params)

    async def update(self, data: Mapping[str, Any], where: Optional[str] = None, *args: Any) -> CursorResult:
        """
        执行 UPDATE

        没有匹配行时同样成功返回（rowcount 为 0）。
        """
        self._ensure_open()
        compiled = build_update(self._state, data, where, args, self.json_impl)
        executor = await self._get_executor()
        return await executor.write(compiled.sql, compiled.params)

    async def delete(self, where: Optional[str] = None, *args: Any) -> CursorResult:
        """执行 DELETE；where 为空时删除全表"""
        self._ensure_open()
        compiled = build_delete(self._state, where, args)
        executor = await self._get_executor()
        return await executor.write(compiled.sql, compiled.params)

    def __repr__(self) -> str:
        return f"SQLiteTable(table='{self._state.table}', database='{self.database}', closed={self._closed})"
