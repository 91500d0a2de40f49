"""
Tuckql 写操作结果
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CursorResult:
    """
    写操作（INSERT/UPDATE/DELETE）完成标记

    不携带行数据；rowcount 为 0 同样表示成功。
    """
    rowcount: int = -1
    lastrowid: Optional[int] = None

    def __repr__(self) -> str:
        return f"CursorResult(rowcount={self.rowcount}, lastrowid={self.lastrowid})"
