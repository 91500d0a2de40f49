"""
Tuckql 查询状态

保存表名、投影列、JOIN、排序和 LIMIT，跨多次查询持续存在。
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class QueryState:
    """
    查询状态

    columns 为空表示 SELECT *；joins 中保存已渲染的 JOIN 子句。
    """
    table: str = ''
    columns: List[str] = field(default_factory=list)
    joins: List[str] = field(default_factory=list)
    sort: List[str] = field(default_factory=list)
    limit: Optional[int] = None

    def reset(self) -> None:
        """清空列、JOIN、排序和 LIMIT，保留表名"""
        self.columns = []
        self.joins = []
        self.sort = []
        self.limit = None

    def copy(self) -> 'QueryState':
        """返回一份独立的副本"""
        return QueryState(
            table=self.table,
            columns=list(self.columns),
            joins=list(self.joins),
            sort=list(self.sort),
            limit=self.limit,
        )
