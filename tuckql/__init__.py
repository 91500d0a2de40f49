"""
Tuckql - 轻量级 SQLite 流式查询构建器

配置表名、列、JOIN、排序和 LIMIT 后执行 SELECT/INSERT/UPDATE/DELETE，
无需手写常见 SQL；同时接受原始 WHERE 片段和参数列表。
"""

from .core import SQLiteTable
from .common.options import (
    SqliteConnectorOptions,
    set_database,
    get_database,
)
from .query import (
    QueryState,
    CompiledQuery,
    CursorResult,
    build_select,
    build_insert,
    build_update,
    build_delete,
)
from .common.exceptions import (
    TuckqlException,
    ConfigurationError,
    ValidationError,
    SerializationError,
    QueryError,
    DatabaseConnectionError,
    ConnectionClosedError,
)

__version__ = '0.1.0'

__all__ = [
    # Table
    'SQLiteTable',
    # Options
    'SqliteConnectorOptions',
    'set_database',
    'get_database',
    # Query
    'QueryState',
    'CompiledQuery',
    'CursorResult',
    'build_select',
    'build_insert',
    'build_update',
    'build_delete',
    # Exceptions
    'TuckqlException',
    'ConfigurationError',
    'ValidationError',
    'SerializationError',
    'QueryError',
    'DatabaseConnectionError',
    'ConnectionClosedError',
]
