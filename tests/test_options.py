"""
配置与异常测试

测试方法：
- 场景设计：默认路径解析顺序
- 错误推断：空路径、异常继承关系

覆盖范围：
- set_database / get_database / TUCKQL_DATABASE
- 构造时读取一次默认路径
- SqliteConnectorOptions 参数转换
- 异常继承层次结构
"""

import os

import pytest

from tuckql import (
    SQLiteTable,
    SqliteConnectorOptions,
    set_database,
    get_database,
    TuckqlException,
    ConfigurationError,
    ValidationError,
    SerializationError,
    QueryError,
    DatabaseConnectionError,
    ConnectionClosedError,
)
from tuckql.common.options import DATABASE_ENV_VAR, DEFAULT_DATABASE_NAME


class TestDefaultDatabase:
    """进程级默认数据库路径测试"""

    def test_default_in_cwd(self):
        assert get_database() == os.path.join(os.getcwd(), DEFAULT_DATABASE_NAME)

    def test_env_var(self, monkeypatch, temp_file):
        monkeypatch.setenv(DATABASE_ENV_VAR, str(temp_file))
        assert get_database() == str(temp_file)

    def test_set_database_overrides_env(self, monkeypatch, temp_dir):
        monkeypatch.setenv(DATABASE_ENV_VAR, str(temp_dir / 'env.sqlite'))
        set_database(temp_dir / 'explicit.sqlite')
        assert get_database() == str(temp_dir / 'explicit.sqlite')

    def test_empty_path_rejected(self):
        with pytest.raises(ConfigurationError):
            set_database('')

    def test_read_once_at_construction(self, temp_dir):
        """修改默认路径不影响已创建的实例"""
        SQLiteTable.set_database(temp_dir / 'first.sqlite')
        first = SQLiteTable('users')

        SQLiteTable.set_database(temp_dir / 'second.sqlite')
        second = SQLiteTable('users')

        assert first.database == str(temp_dir / 'first.sqlite')
        assert second.database == str(temp_dir / 'second.sqlite')

    def test_explicit_database_wins(self, temp_dir):
        set_database(temp_dir / 'default.sqlite')
        table = SQLiteTable('users', database=temp_dir / 'other.sqlite')
        assert table.database == str(temp_dir / 'other.sqlite')

    def test_explicit_empty_database_rejected(self):
        with pytest.raises(ConfigurationError):
            SQLiteTable('users', database='')


class TestConnectorOptions:
    """连接器选项测试"""

    def test_default_kwargs(self):
        assert SqliteConnectorOptions().connect_kwargs() == {'check_same_thread': True}

    def test_set_options_forwarded(self):
        options = SqliteConnectorOptions(timeout=2.5, isolation_level='IMMEDIATE')
        assert options.connect_kwargs() == {
            'check_same_thread': True,
            'timeout': 2.5,
            'isolation_level': 'IMMEDIATE',
        }

    def test_json_impl_not_forwarded(self):
        options = SqliteConnectorOptions(json_impl='json')
        assert 'json_impl' not in options.connect_kwargs()

    def test_unknown_json_impl_fails_at_construction(self, temp_file):
        with pytest.raises(ConfigurationError):
            SQLiteTable('users', database=temp_file, options=SqliteConnectorOptions(json_impl='nope'))


class TestExceptionHierarchy:
    """异常继承关系测试"""

    def test_all_exceptions_inherit_from_base(self):
        for exc_class in [
            ConfigurationError,
            ValidationError,
            SerializationError,
            QueryError,
            DatabaseConnectionError,
            ConnectionClosedError,
        ]:
            assert issubclass(exc_class, TuckqlException), \
                f"{exc_class.__name__} should inherit from TuckqlException"

    def test_connection_closed_is_connection_error(self):
        assert issubclass(ConnectionClosedError, DatabaseConnectionError)

    def test_connection_closed_message(self):
        exc = ConnectionClosedError('users')
        assert exc.table_name == 'users'
        assert "users" in str(exc)
