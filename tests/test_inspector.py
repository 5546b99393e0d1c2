"""
数据库信息检查器测试
"""

import pytest

from db_compat.core.exceptions import (
    ConnectionError,
    InsufficientVersionError,
    UnsupportedOperationError,
)
from db_compat.core.inspector import (
    DatabaseInspector,
    get_default_connection,
    set_default_connection,
)
from db_compat.core.registry import EngineId, get_default_registry
from fakes import FakeConnection, mysql_connection, postgresql_connection


class TestDatabaseInspector:
    """DatabaseInspector测试类"""

    def setup_method(self):
        """测试方法 setup"""
        self.postgresql = postgresql_connection()
        self.mysql = mysql_connection("5.5.0")
        self.inspector = DatabaseInspector(self.postgresql)

    def teardown_method(self):
        """测试方法 teardown"""
        set_default_connection(None)

    def test_uses_default_registry(self):
        """测试默认使用进程级注册表"""
        assert self.inspector.registry is get_default_registry()

    def test_identify_and_predicates(self):
        """测试引擎识别和判断"""
        assert self.inspector.identify() is EngineId.POSTGRESQL
        assert self.inspector.is_postgresql()
        assert not self.inspector.is_mysql()
        assert self.inspector.is_mysql(self.mysql)
        assert self.inspector.is_engine(EngineId.MYSQL, self.mysql)
        assert self.inspector.adapter_name() == "PostgreSQL"

    def test_versions(self):
        """测试获取版本"""
        assert self.inspector.version() == "13.4"
        assert self.inspector.version(raw=True).startswith("PostgreSQL 13.4 on")
        assert self.inspector.numeric_version() == 130004
        assert self.inspector.version(connection=self.mysql) == "5.5.0"

    def test_mysql_numeric_version_unsupported(self):
        """测试 MySQL 数值版本不受支持"""
        with pytest.raises(UnsupportedOperationError):
            self.inspector.numeric_version(self.mysql)

    def test_unknown_version_unsupported(self):
        """测试无法识别的引擎不能获取版本"""
        with pytest.raises(UnsupportedOperationError):
            self.inspector.version(connection=FakeConnection("sqlite"))

    def test_required_version(self):
        """测试获取当前引擎的版本要求"""
        assert self.inspector.required_version().string == "9.5.0"
        assert self.inspector.required_version(self.mysql).string == "5.6.0"
        assert self.inspector.required_version(FakeConnection("sqlite")) is None

    def test_check_version(self):
        """测试版本检查"""
        assert self.inspector.version_matches()
        self.inspector.check_version()
        self.inspector.check_version(self.mysql)

        old = postgresql_connection(
            banner="PostgreSQL 9.4.26 on x86_64-pc-linux-gnu", version_num="90400"
        )
        assert not self.inspector.version_matches(old)
        with pytest.raises(InsufficientVersionError):
            self.inspector.check_version(old)


class TestDefaultConnection:
    """进程默认连接测试类"""

    def teardown_method(self):
        """测试方法 teardown"""
        set_default_connection(None)

    def test_missing_default_connection(self):
        """测试未设置默认连接"""
        set_default_connection(None)
        with pytest.raises(ConnectionError):
            get_default_connection()
        with pytest.raises(ConnectionError):
            DatabaseInspector().identify()

    def test_falls_back_to_default_connection(self):
        """测试未传入连接时使用进程默认连接"""
        connection = mysql_connection()
        set_default_connection(connection)

        inspector = DatabaseInspector()
        assert get_default_connection() is connection
        assert inspector.is_mysql()
        assert inspector.version() == "8.0.36"

    def test_instance_connection_takes_precedence(self):
        """测试检查器自身的连接优先于进程默认连接"""
        set_default_connection(mysql_connection())
        inspector = DatabaseInspector(postgresql_connection())
        assert inspector.is_postgresql()
        assert inspector.is_mysql(get_default_connection())


if __name__ == "__main__":
    pytest.main()
