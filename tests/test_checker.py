"""
版本兼容性检查测试
"""

import logging

import pytest

from db_compat.core.checker import VERSION_MATCHERS, check_version, version_matches
from db_compat.core.exceptions import ConfigError, InsufficientVersionError
from db_compat.core.registry import AdapterRegistry, EngineId, VersionRequirement
from fakes import FakeConnection, mysql_connection, postgresql_connection


def old_postgresql():
    return postgresql_connection(
        banner="PostgreSQL 9.4.26 on x86_64-pc-linux-gnu", version_num="90400"
    )


class TestPostgreSQLCheck:
    """PostgreSQL版本检查测试类"""

    def test_exact_minimum_matches(self):
        """测试恰好等于最低版本"""
        connection = postgresql_connection(
            banner="PostgreSQL 9.5.0 on x86_64-pc-linux-gnu", version_num="90500"
        )
        assert version_matches(connection)
        check_version(connection)

    def test_newer_version_is_silent(self, caplog):
        """测试新版本静默通过"""
        with caplog.at_level(logging.WARNING):
            check_version(postgresql_connection())
        assert caplog.records == []

    def test_older_version_does_not_match(self):
        """测试旧版本不满足要求"""
        assert not version_matches(old_postgresql())

    def test_older_version_raises(self):
        """测试强制要求不满足时抛出异常"""
        with pytest.raises(InsufficientVersionError) as exc_info:
            check_version(old_postgresql())

        error = exc_info.value
        assert "9.5.0" in error.message
        assert "9.4.26" in error.message
        assert error.message == (
            "Database server version mismatch: Required version is 9.5.0, "
            "but current version is 9.4.26"
        )
        assert error.engine == "postgresql"
        assert error.required_version == "9.5.0"
        assert error.current_version == "9.4.26"
        assert error.error_code == "INSUFFICIENT_VERSION"

    def test_check_is_idempotent(self):
        """测试重复检查结果一致"""
        connection = old_postgresql()
        messages = []
        for _ in range(2):
            with pytest.raises(InsufficientVersionError) as exc_info:
                check_version(connection)
            messages.append(exc_info.value.message)
        assert messages[0] == messages[1]

    def test_not_enforced_logs_warning(self, caplog):
        """测试非强制要求只记录警告"""
        registry = AdapterRegistry.default().with_requirements(
            {
                EngineId.POSTGRESQL: VersionRequirement(
                    string="9.5.0", numeric=90500, enforced=False
                )
            }
        )
        with caplog.at_level(logging.WARNING):
            check_version(old_postgresql(), registry)

        assert len(caplog.records) == 1
        message = caplog.records[0].getMessage()
        assert "Required version is 9.5.0" in message
        assert "current version is 9.4.26" in message
        assert message.endswith("so continuing with this version.")

    def test_custom_warn_logger(self, caplog):
        """测试使用调用方提供的日志记录器"""
        registry = AdapterRegistry.default().with_requirements(
            {EngineId.POSTGRESQL: VersionRequirement(string="9.5.0", numeric=90500)}
        )
        app_logger = logging.getLogger("my_app.boot")
        with caplog.at_level(logging.WARNING):
            check_version(old_postgresql(), registry, warn_logger=app_logger)
        assert [record.name for record in caplog.records] == ["my_app.boot"]

    def test_missing_numeric_threshold(self):
        """测试 PostgreSQL 版本要求缺少数值阈值"""
        registry = AdapterRegistry.default().with_requirements(
            {EngineId.POSTGRESQL: VersionRequirement(string="9.5.0", enforced=True)}
        )
        with pytest.raises(ConfigError):
            version_matches(postgresql_connection(), registry)


class TestMySQLCheck:
    """MySQL版本检查测试类"""

    @pytest.mark.parametrize("version", ["5.5.0", "5.1.73", "4.0.0", "8.0.36"])
    def test_any_version_matches(self, version, caplog):
        """测试 MySQL 任何版本都视为满足"""
        connection = mysql_connection(version)
        assert version_matches(connection)
        with caplog.at_level(logging.WARNING):
            check_version(connection)
        assert caplog.records == []

    def test_no_version_query_needed(self):
        """测试 MySQL 检查不需要查询版本"""
        connection = mysql_connection("5.5.0")
        check_version(connection)
        assert connection.queries == []


def test_unknown_adapter_is_silent(caplog):
    """测试无法识别的适配器静默通过"""
    connection = FakeConnection("sqlite")
    assert version_matches(connection)
    with caplog.at_level(logging.WARNING):
        check_version(connection)
    assert caplog.records == []
    assert connection.queries == []


def test_matchers_cover_every_known_engine():
    """测试每个已知引擎都有版本比较规则"""
    assert set(VERSION_MATCHERS) == set(EngineId.known())


if __name__ == "__main__":
    pytest.main()
