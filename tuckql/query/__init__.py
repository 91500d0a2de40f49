"""
Tuckql 查询子系统

包含查询状态、语句构建器、值编解码、执行器和结果类型
"""

from .state import QueryState
from .builder import (
    CompiledQuery,
    build_select,
    build_insert,
    build_update,
    build_delete,
    strip_where,
    get_join_type,
    render_join,
    placeholders,
)
from .codec import JsonImpl, get_json_impl, encode_value, try_decode, decode_row, decode_rows
from .executor import Executor, is_read_statement
from .result import CursorResult

__all__ = [
    # State
    'QueryState',
    # Builder
    'CompiledQuery',
    'build_select',
    'build_insert',
    'build_update',
    'build_delete',
    'strip_where',
    'get_join_type',
    'render_join',
    'placeholders',
    # Codec
    'JsonImpl',
    'get_json_impl',
    'encode_value',
    'try_decode',
    'decode_row',
    'decode_rows',
    # Executor
    'Executor',
    'is_read_statement',
    # Result
    'CursorResult',
]
