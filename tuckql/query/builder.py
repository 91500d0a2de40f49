"""
Tuckql 语句构建器

将 QueryState 与调用参数组装为 SQL 文本和有序参数元组。
纯函数，不做任何 I/O。WHERE / JOIN 片段被视为可信的调用方输入，原样拼接。
"""

import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..common.exceptions import ValidationError
from .state import QueryState
from .codec import JsonImpl, encode_value, get_json_impl


# 开头的 where 关键字（大小写不敏感，必须是完整单词）
_LEADING_WHERE = re.compile(r'^\s*where\b', re.IGNORECASE)

# JOIN 类型映射，未知类型回退为 LEFT JOIN
JOIN_TYPES: Dict[str, str] = {
    'left': 'LEFT JOIN',
    'inner': 'INNER JOIN',
    'right': 'RIGHT JOIN',
}
DEFAULT_JOIN_TYPE = 'LEFT JOIN'


@dataclass(frozen=True)
class CompiledQuery:
    """编译后的语句：SQL 文本 + 位置参数"""
    sql: str
    params: Tuple[Any, ...] = ()

    def __iter__(self):
        # 支持 sql, params = compiled
        yield self.sql
        yield self.params


def strip_where(fragment: Optional[str]) -> str:
    """
    去掉 WHERE 片段开头的 where 关键字

    'WHERE id = ?' 与 'id = ?' 得到相同结果。

    Args:
        fragment: WHERE 片段，可为 None

    Returns:
        去掉关键字并首尾去空白后的片段（可能为空串）
    """
    if not fragment:
        return ''
    return _LEADING_WHERE.sub('', fragment, count=1).strip()


def get_join_type(kind: str) -> str:
    """
    获取 JOIN 关键字

    Args:
        kind: 'left' / 'inner' / 'right'（大小写不敏感），其他值按 left 处理

    Returns:
        如 'LEFT JOIN'
    """
    return JOIN_TYPES.get(kind.strip().lower(), DEFAULT_JOIN_TYPE)


def render_join(kind: str, table: str, column_a: str, column_b: str) -> str:
    """渲染完整的 JOIN 子句"""
    return f"{get_join_type(kind)} {table} ON {column_a} = {column_b}"


def placeholders(count: int) -> str:
    """
    生成占位符串

    Args:
        count: 占位符数量

    Returns:
        '?, ?, ?'

    Raises:
        ValidationError: count 小于 1
    """
    if count < 1:
        raise ValidationError(f"Placeholder count must be at least 1, got {count}")
    return ', '.join(['?'] * count)


def _require_table(state: QueryState) -> str:
    if not state.table:
        raise ValidationError("Table name is not set")
    return state.table


def _join_segments(segments: Sequence[str]) -> str:
    return ' '.join(segment for segment in segments if segment)


def build_select(
    state: QueryState,
    where: Optional[str] = None,
    args: Sequence[Any] = ()
) -> CompiledQuery:
    """
    构建 SELECT 语句

    片段顺序固定：列 -> 表 -> JOIN -> WHERE -> ORDER BY -> LIMIT，
    缺省片段直接省略。

    Args:
        state: 查询状态
        where: WHERE 片段（可带或不带 where 关键字）
        args: WHERE 片段中 ? 对应的参数

    Returns:
        CompiledQuery
    """
    table = _require_table(state)
    fragment = strip_where(where)

    segments = [
        'SELECT',
        ', '.join(state.columns) if state.columns else '*',
        'FROM',
        table,
        ' '.join(state.joins),
        f"WHERE {fragment}" if fragment else '',
        f"ORDER BY {', '.join(state.sort)}" if state.sort else '',
        f"LIMIT {state.limit}" if state.limit is not None else '',
    ]
    return CompiledQuery(_join_segments(segments), tuple(args))


def build_insert(
    state: QueryState,
    data: Mapping[str, Any],
    impl: Optional[JsonImpl] = None
) -> CompiledQuery:
    """
    构建 INSERT 语句

    按 data 的键顺序生成列名、占位符和参数，三者数量严格一致。

    Args:
        state: 查询状态
        data: 列名 -> 值
        impl: JSON 实现，默认标准库

    Returns:
        CompiledQuery

    Raises:
        ValidationError: data 为空
        SerializationError: 结构化值无法序列化
    """
    table = _require_table(state)
    if not data:
        raise ValidationError(f"Cannot insert an empty row into table '{table}'")
    impl = impl or get_json_impl()

    columns: List[str] = []
    values: List[Any] = []
    for key, value in data.items():
        columns.append(key)
        values.append(encode_value(value, impl))

    sql = f"INSERT INTO {table} ({', '.join(columns)}) VALUES({placeholders(len(values))})"
    return CompiledQuery(sql, tuple(values))


def build_update(
    state: QueryState,
    data: Mapping[str, Any],
    where: Optional[str] = None,
    args: Sequence[Any] = (),
    impl: Optional[JsonImpl] = None
) -> CompiledQuery:
    """
    构建 UPDATE 语句

    参数顺序：SET 的值在前，WHERE 片段的参数在后。
    data 为空时不做校验，交给数据库报错。

    Args:
        state: 查询状态
        data: 列名 -> 新值
        where: WHERE 片段
        args: WHERE 片段中 ? 对应的参数
        impl: JSON 实现，默认标准库

    Returns:
        CompiledQuery
    """
    table = _require_table(state)
    impl = impl or get_json_impl()
    fragment = strip_where(where)

    assignments: List[str] = []
    values: List[Any] = []
    for key, value in data.items():
        assignments.append(f"{key} = ?")
        values.append(encode_value(value, impl))

    segments = [
        'UPDATE',
        table,
        'SET',
        ', '.join(assignments),
        f"WHERE {fragment}" if fragment else '',
    ]
    return CompiledQuery(_join_segments(segments), tuple(values) + tuple(args))


def build_delete(
    state: QueryState,
    where: Optional[str] = None,
    args: Sequence[Any] = ()
) -> CompiledQuery:
    """构建 DELETE 语句，参数原样传递"""
    table = _require_table(state)
    fragment = strip_where(where)
    segments = ['DELETE FROM', table, f"WHERE {fragment}" if fragment else '']
    return CompiledQuery(_join_segments(segments), tuple(args))
