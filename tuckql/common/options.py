"""
Tuckql 配置选项 dataclass 定义

该模块定义连接器配置选项，以及进程级默认数据库路径。
"""
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .exceptions import ConfigurationError


# 默认数据库文件名（相对当前工作目录）
DEFAULT_DATABASE_NAME = 'database.sqlite'

# 环境变量，优先级低于 set_database()
DATABASE_ENV_VAR = 'TUCKQL_DATABASE'

_database_path: Optional[str] = None


@dataclass(slots=True)
class SqliteConnectorOptions:
    """SQLite 连接器配置选项"""
    check_same_thread: bool = True  # 检查同一线程
    timeout: Optional[float] = None  # 连接超时时间
    isolation_level: Optional[str] = None  # 事务隔离级别
    json_impl: Optional[str] = None  # 指定JSON库名：'orjson', 'ujson', 'json'

    def connect_kwargs(self) -> Dict[str, Any]:
        """
        转换为 sqlite3.connect 的关键字参数

        只传递显式设置的选项，其余使用驱动默认值。

        Returns:
            关键字参数字典
        """
        kwargs: Dict[str, Any] = {'check_same_thread': self.check_same_thread}
        if self.timeout is not None:
            kwargs['timeout'] = self.timeout
        if self.isolation_level is not None:
            kwargs['isolation_level'] = self.isolation_level
        return kwargs


def get_default_connector_options() -> SqliteConnectorOptions:
    """返回默认连接器选项"""
    return SqliteConnectorOptions()


def set_database(path: Union[str, 'os.PathLike[str]']) -> None:
    """
    设置进程级默认数据库路径

    只影响之后创建的 SQLiteTable 实例，已创建的实例保持原路径。

    Args:
        path: 数据库文件路径

    Raises:
        ConfigurationError: 路径为空
    """
    global _database_path
    path = os.fspath(path)
    if not path:
        raise ConfigurationError("Database path must not be empty")
    _database_path = path


def get_database() -> str:
    """
    获取当前默认数据库路径

    解析顺序：
    1) set_database() 设置的路径
    2) 环境变量 TUCKQL_DATABASE
    3) 当前工作目录下的 database.sqlite

    Returns:
        数据库文件路径
    """
    if _database_path is not None:
        return _database_path
    env_path = os.environ.get(DATABASE_ENV_VAR, '').strip()
    if env_path:
        return env_path
    return os.path.join(os.getcwd(), DEFAULT_DATABASE_NAME)


def reset_database() -> None:
    """清除 set_database() 的设置，恢复默认解析顺序"""
    global _database_path
    _database_path = None
