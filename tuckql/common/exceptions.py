"""
Tuckql 异常定义

驱动层（sqlite3 / aiosqlite）抛出的异常不会被包装，原样传递给调用方。
"""


class TuckqlException(Exception):
    """Tuckql 基础异常类"""


class ConfigurationError(TuckqlException):
    """配置异常"""


class ValidationError(TuckqlException):
    """输入验证异常"""


class SerializationError(TuckqlException):
    """序列化异常"""


class QueryError(TuckqlException):
    """查询异常"""


class DatabaseConnectionError(TuckqlException):
    """数据库连接异常"""


class ConnectionClosedError(DatabaseConnectionError):
    """连接已关闭异常"""
    def __init__(self, table_name: str):
        self.table_name = table_name
        super().__init__(f"Connection for table '{table_name}' is closed")
