"""
数据库版本解析模块

针对不同引擎执行相应的只读查询，获取原始版本、展示版本和数值版本。

- PostgreSQL: ``SELECT version()`` 返回形如 "PostgreSQL 13.4 on x86_64-..." 的标识串，
  展示版本从中提取；数值版本通过 ``SHOW server_version_num;`` 单独获取，
  便于与阈值（如 90500 即 9.5.0）做精确比较。
- MySQL: ``SELECT VERSION()`` 直接返回版本字符串；不提供数值版本。
- UNKNOWN: 所有操作均抛出 UnsupportedOperationError。

每次调用都重新查询，结果不做缓存。
"""

import re
from typing import Callable, Dict

from ..utils.logging_utils import get_logger
from .exceptions import UnsupportedOperationError, VersionParseError
from .handle import ConnectionHandle
from .registry import EngineId

logger = get_logger(__name__)

# 版本查询语句
MYSQL_VERSION_QUERY = "SELECT VERSION()"
POSTGRESQL_VERSION_QUERY = "SELECT version()"
POSTGRESQL_VERSION_NUM_QUERY = "SHOW server_version_num;"

POSTGRESQL_BANNER_PATTERN = re.compile(r"\APostgreSQL (\S+)", re.IGNORECASE)


def _mysql_raw_version(connection: ConnectionHandle) -> str:
    return str(connection.select_value(MYSQL_VERSION_QUERY))


def _postgresql_raw_version(connection: ConnectionHandle) -> str:
    return str(connection.select_value(POSTGRESQL_VERSION_QUERY))


def _mysql_display_version(connection: ConnectionHandle, raw: bool) -> str:
    # MySQL 返回的已经是纯版本字符串
    return _mysql_raw_version(connection)


def _postgresql_display_version(connection: ConnectionHandle, raw: bool) -> str:
    banner = _postgresql_raw_version(connection)
    if raw:
        return banner
    return parse_postgresql_banner(banner)


def _mysql_numeric_version(connection: ConnectionHandle) -> int:
    raise UnsupportedOperationError(
        "无法获取 MySQL 的数值版本",
        engine=str(EngineId.MYSQL),
        operation="numeric_version",
    )


def _postgresql_numeric_version(connection: ConnectionHandle) -> int:
    value = connection.select_value(POSTGRESQL_VERSION_NUM_QUERY)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise VersionParseError(
            f"无法解析 PostgreSQL 数值版本: {value!r}", raw_version=str(value)
        )


RAW_VERSION_RESOLVERS: Dict[EngineId, Callable[[ConnectionHandle], str]] = {
    EngineId.MYSQL: _mysql_raw_version,
    EngineId.POSTGRESQL: _postgresql_raw_version,
}

DISPLAY_VERSION_RESOLVERS: Dict[EngineId, Callable[[ConnectionHandle, bool], str]] = {
    EngineId.MYSQL: _mysql_display_version,
    EngineId.POSTGRESQL: _postgresql_display_version,
}

NUMERIC_VERSION_RESOLVERS: Dict[EngineId, Callable[[ConnectionHandle], int]] = {
    EngineId.MYSQL: _mysql_numeric_version,
    EngineId.POSTGRESQL: _postgresql_numeric_version,
}


def _lookup(table: Dict[EngineId, Callable], engine: EngineId, operation: str):
    resolver = table.get(engine)
    if resolver is None:
        raise UnsupportedOperationError(
            f"无法对引擎 {engine} 执行 {operation}",
            engine=str(engine),
            operation=operation,
        )
    return resolver


def parse_postgresql_banner(banner: str) -> str:
    """
    从 PostgreSQL 版本标识串中提取版本号

    Args:
        banner: ``SELECT version()`` 的返回值

    Returns:
        str: 版本号，如 "13.4"

    Raises:
        VersionParseError: 标识串不以 "PostgreSQL <版本>" 开头时

    Example:
        >>> parse_postgresql_banner("PostgreSQL 13.4 on x86_64-pc-linux-gnu")
        '13.4'
    """
    match = POSTGRESQL_BANNER_PATTERN.match(banner or "")
    if match is None:
        raise VersionParseError(
            f"无法解析 PostgreSQL 版本标识: {banner!r}", raw_version=banner
        )
    return match.group(1)


def raw_version(connection: ConnectionHandle, engine: EngineId) -> str:
    """
    获取数据库返回的原始版本字符串

    Raises:
        UnsupportedOperationError: 引擎为 UNKNOWN 时
    """
    version = _lookup(RAW_VERSION_RESOLVERS, engine, "raw_version")(connection)
    logger.debug(f"{engine} 原始版本: {version}")
    return version


def display_version(
    connection: ConnectionHandle, engine: EngineId, raw: bool = False
) -> str:
    """
    获取用于展示的版本字符串

    Args:
        connection: 连接句柄
        engine: 引擎标识
        raw: 为 True 时返回未经处理的原始字符串

    Raises:
        UnsupportedOperationError: 引擎为 UNKNOWN 时
        VersionParseError: PostgreSQL 版本标识格式不符合预期时
    """
    return _lookup(DISPLAY_VERSION_RESOLVERS, engine, "version")(connection, raw)


def numeric_version(connection: ConnectionHandle, engine: EngineId) -> int:
    """
    获取可用于精确比较的数值版本

    Raises:
        UnsupportedOperationError: 引擎不提供数值版本（MySQL）或为 UNKNOWN 时
    """
    version = _lookup(NUMERIC_VERSION_RESOLVERS, engine, "numeric_version")(
        connection
    )
    logger.debug(f"{engine} 数值版本: {version}")
    return version
