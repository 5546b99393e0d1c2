"""
数据库引擎识别模块

根据连接报告的适配器名称，按注册表顺序匹配识别规则，确定引擎标识。
"""

from typing import Optional

from ..utils.logging_utils import get_logger
from .default_connection import resolve_connection
from .handle import ConnectionHandle
from .registry import AdapterRegistry, EngineId, get_default_registry

logger = get_logger(__name__)


def adapter_name(connection: ConnectionHandle) -> str:
    """获取连接使用的原始适配器名称"""
    return connection.adapter_name


def identify(
    connection: ConnectionHandle, registry: Optional[AdapterRegistry] = None
) -> EngineId:
    """
    识别连接对应的数据库引擎

    Args:
        connection: 连接句柄
        registry: 适配器注册表，默认使用进程级默认注册表

    Returns:
        EngineId: 第一个匹配的引擎；都不匹配时返回 EngineId.UNKNOWN

    Example:
        >>> identify(handle)  # handle.adapter_name == "PostgreSQL"
        <EngineId.POSTGRESQL: 'postgresql'>
    """
    registry = registry or get_default_registry()
    name = adapter_name(connection) or ""

    for engine, pattern in registry.supported_adapters().items():
        if pattern.search(name):
            logger.debug(f"适配器 '{name}' 识别为 {engine}")
            return engine

    logger.debug(f"无法识别的适配器: '{name}'")
    return EngineId.UNKNOWN


def is_engine(
    engine: EngineId,
    connection: Optional[ConnectionHandle] = None,
    registry: Optional[AdapterRegistry] = None,
) -> bool:
    """
    判断连接是否为指定引擎

    Args:
        engine: 期望的引擎标识
        connection: 连接句柄，未传入时使用进程默认连接
        registry: 适配器注册表，默认使用进程级默认注册表

    Raises:
        ConnectionError: 未传入连接且未设置默认连接时
    """
    return identify(resolve_connection(connection), registry) == engine


def is_mysql(
    connection: Optional[ConnectionHandle] = None,
    registry: Optional[AdapterRegistry] = None,
) -> bool:
    return is_engine(EngineId.MYSQL, connection, registry)


def is_postgresql(
    connection: Optional[ConnectionHandle] = None,
    registry: Optional[AdapterRegistry] = None,
) -> bool:
    return is_engine(EngineId.POSTGRESQL, connection, registry)
