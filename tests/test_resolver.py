"""
数据库版本解析测试
"""

import pytest

from db_compat.core.exceptions import UnsupportedOperationError, VersionParseError
from db_compat.core.registry import EngineId
from db_compat.core.resolver import (
    DISPLAY_VERSION_RESOLVERS,
    MYSQL_VERSION_QUERY,
    NUMERIC_VERSION_RESOLVERS,
    POSTGRESQL_VERSION_NUM_QUERY,
    POSTGRESQL_VERSION_QUERY,
    RAW_VERSION_RESOLVERS,
    display_version,
    numeric_version,
    parse_postgresql_banner,
    raw_version,
)
from fakes import FakeConnection, mysql_connection, postgresql_connection


class TestPostgreSQLVersion:
    """PostgreSQL版本解析测试类"""

    def setup_method(self):
        """测试方法 setup"""
        self.connection = postgresql_connection(
            banner="PostgreSQL 13.4 on x86_64-pc-linux-gnu, compiled by gcc 10.2.1, 64-bit",
            version_num="130004",
        )

    def test_display_version_extracts_semver(self):
        """测试从版本标识中提取版本号"""
        assert display_version(self.connection, EngineId.POSTGRESQL) == "13.4"
        assert self.connection.queries == [POSTGRESQL_VERSION_QUERY]

    def test_display_version_raw(self):
        """测试获取原始版本标识"""
        raw = display_version(self.connection, EngineId.POSTGRESQL, raw=True)
        assert raw.startswith("PostgreSQL 13.4 on x86_64")
        assert raw == raw_version(self.connection, EngineId.POSTGRESQL)

    def test_numeric_version_uses_separate_query(self):
        """测试数值版本使用单独的查询"""
        assert numeric_version(self.connection, EngineId.POSTGRESQL) == 130004
        assert self.connection.queries == [POSTGRESQL_VERSION_NUM_QUERY]

    def test_numeric_version_accepts_int(self):
        """测试驱动直接返回整数的情况"""
        connection = postgresql_connection(version_num=90500)
        assert numeric_version(connection, EngineId.POSTGRESQL) == 90500

    def test_numeric_version_invalid(self):
        """测试无法解析的数值版本"""
        connection = postgresql_connection(version_num="not-a-number")
        with pytest.raises(VersionParseError):
            numeric_version(connection, EngineId.POSTGRESQL)

    def test_unexpected_banner(self):
        """测试版本标识格式不符合预期"""
        connection = postgresql_connection(banner="EnterpriseDB 13.4 on x86_64")
        with pytest.raises(VersionParseError) as exc_info:
            display_version(connection, EngineId.POSTGRESQL)
        assert exc_info.value.raw_version == "EnterpriseDB 13.4 on x86_64"

    def test_versions_are_not_cached(self):
        """测试每次调用都重新查询"""
        numeric_version(self.connection, EngineId.POSTGRESQL)
        self.connection.values[POSTGRESQL_VERSION_NUM_QUERY] = "140001"
        assert numeric_version(self.connection, EngineId.POSTGRESQL) == 140001


@pytest.mark.parametrize(
    "banner, expected",
    [
        ("PostgreSQL 13.4 on x86_64-pc-linux-gnu", "13.4"),
        ("PostgreSQL 9.5.25 on x86_64-pc-linux-gnu", "9.5.25"),
        ("PostgreSQL 16beta1 on aarch64-apple-darwin", "16beta1"),
        ("postgresql 15.2 (Debian 15.2-1.pgdg110+1) on x86_64", "15.2"),
    ],
)
def test_parse_postgresql_banner(banner, expected):
    """测试解析各种 PostgreSQL 版本标识"""
    assert parse_postgresql_banner(banner) == expected


def test_parse_postgresql_banner_requires_prefix():
    """测试版本标识必须以 PostgreSQL 开头"""
    with pytest.raises(VersionParseError):
        parse_postgresql_banner("Version: PostgreSQL 13.4")


class TestMySQLVersion:
    """MySQL版本解析测试类"""

    def setup_method(self):
        """测试方法 setup"""
        self.connection = mysql_connection("5.7.44-log")

    def test_version_is_returned_as_is(self):
        """测试 MySQL 版本原样返回"""
        assert display_version(self.connection, EngineId.MYSQL) == "5.7.44-log"
        assert display_version(self.connection, EngineId.MYSQL, raw=True) == "5.7.44-log"
        assert raw_version(self.connection, EngineId.MYSQL) == "5.7.44-log"
        assert set(self.connection.queries) == {MYSQL_VERSION_QUERY}

    def test_numeric_version_unsupported(self):
        """测试 MySQL 不支持数值版本"""
        with pytest.raises(UnsupportedOperationError) as exc_info:
            numeric_version(self.connection, EngineId.MYSQL)
        assert exc_info.value.engine == "mysql"
        assert exc_info.value.operation == "numeric_version"
        assert self.connection.queries == []


def test_unknown_engine_is_unsupported():
    """测试无法识别的引擎不能解析版本"""
    connection = FakeConnection("sqlite")
    with pytest.raises(UnsupportedOperationError):
        raw_version(connection, EngineId.UNKNOWN)
    with pytest.raises(UnsupportedOperationError):
        display_version(connection, EngineId.UNKNOWN)
    with pytest.raises(UnsupportedOperationError):
        numeric_version(connection, EngineId.UNKNOWN)
    assert connection.queries == []


def test_resolvers_cover_every_known_engine():
    """测试每个已知引擎都有对应的解析函数"""
    for table in (RAW_VERSION_RESOLVERS, DISPLAY_VERSION_RESOLVERS, NUMERIC_VERSION_RESOLVERS):
        assert set(table) == set(EngineId.known())


if __name__ == "__main__":
    pytest.main()
