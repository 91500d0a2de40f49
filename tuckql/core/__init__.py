"""
Tuckql 核心模块

包含表句柄 SQLiteTable
"""

from .table import SQLiteTable

__all__ = [
    'SQLiteTable',
]
