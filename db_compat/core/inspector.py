"""
数据库信息检查器模块

提供面向应用的统一入口，将引擎识别、版本解析和兼容性检查组合在一起，
并支持进程级默认连接：调用方未显式传入连接时使用默认连接。

使用示例：
    >>> from db_compat import DatabaseInspector, set_default_connection
    >>> set_default_connection(SQLAlchemyConnectionHandle(engine))
    >>> inspector = DatabaseInspector()
    >>> inspector.is_postgresql()
    True
    >>> inspector.check_version()  # 应用启动时调用
"""

import logging
from typing import Optional

from ..utils.logging_utils import get_logger
from . import checker, identifier, resolver
from .default_connection import get_default_connection, set_default_connection
from .handle import ConnectionHandle
from .registry import AdapterRegistry, EngineId, VersionRequirement, get_default_registry

logger = get_logger(__name__)

__all__ = ["DatabaseInspector", "get_default_connection", "set_default_connection"]


class DatabaseInspector:
    """
    数据库信息检查器

    Attributes:
        registry (AdapterRegistry): 使用的适配器注册表
        connection (Optional[ConnectionHandle]): 检查器自身的默认连接，为 None 时回退到进程默认连接
        warn_logger (logging.Logger): 版本不强制时输出警告的日志记录器

    Example:
        >>> inspector = DatabaseInspector(handle)
        >>> inspector.identify()
        <EngineId.POSTGRESQL: 'postgresql'>
        >>> inspector.version()
        '13.4'
    """

    def __init__(
        self,
        connection: Optional[ConnectionHandle] = None,
        registry: Optional[AdapterRegistry] = None,
        warn_logger: Optional[logging.Logger] = None,
    ) -> None:
        self.connection = connection
        self.registry = registry or get_default_registry()
        self.warn_logger = warn_logger or logger

    def _resolve_connection(
        self, connection: Optional[ConnectionHandle]
    ) -> ConnectionHandle:
        if connection is not None:
            return connection
        if self.connection is not None:
            return self.connection
        return get_default_connection()

    def adapter_name(self, connection: Optional[ConnectionHandle] = None) -> str:
        """获取原始适配器名称"""
        return identifier.adapter_name(self._resolve_connection(connection))

    def identify(self, connection: Optional[ConnectionHandle] = None) -> EngineId:
        """识别数据库引擎，无法识别时返回 EngineId.UNKNOWN"""
        return identifier.identify(self._resolve_connection(connection), self.registry)

    def is_engine(
        self, engine: EngineId, connection: Optional[ConnectionHandle] = None
    ) -> bool:
        return self.identify(connection) == engine

    def is_mysql(self, connection: Optional[ConnectionHandle] = None) -> bool:
        return self.is_engine(EngineId.MYSQL, connection)

    def is_postgresql(self, connection: Optional[ConnectionHandle] = None) -> bool:
        return self.is_engine(EngineId.POSTGRESQL, connection)

    def required_version(
        self, connection: Optional[ConnectionHandle] = None
    ) -> Optional[VersionRequirement]:
        """获取当前引擎的版本要求，没有要求时返回 None"""
        return self.registry.requirement_for(self.identify(connection))

    def version(
        self, raw: bool = False, connection: Optional[ConnectionHandle] = None
    ) -> str:
        """
        获取数据库版本

        Args:
            raw: 为 True 时返回数据库返回的原始字符串
            connection: 连接句柄，默认使用检查器或进程的默认连接

        Raises:
            UnsupportedOperationError: 引擎无法识别时
            VersionParseError: PostgreSQL 版本标识格式不符合预期时
        """
        connection = self._resolve_connection(connection)
        engine = identifier.identify(connection, self.registry)
        return resolver.display_version(connection, engine, raw=raw)

    def numeric_version(self, connection: Optional[ConnectionHandle] = None) -> int:
        """
        获取数值版本

        Raises:
            UnsupportedOperationError: 引擎为 MySQL 或无法识别时
        """
        connection = self._resolve_connection(connection)
        engine = identifier.identify(connection, self.registry)
        return resolver.numeric_version(connection, engine)

    def version_matches(self, connection: Optional[ConnectionHandle] = None) -> bool:
        """判断当前版本是否满足要求"""
        return checker.version_matches(
            self._resolve_connection(connection), self.registry
        )

    def check_version(self, connection: Optional[ConnectionHandle] = None) -> None:
        """
        检查数据库版本兼容性

        Raises:
            InsufficientVersionError: 版本要求为强制且当前版本不满足时
        """
        checker.check_version(
            self._resolve_connection(connection), self.registry, self.warn_logger
        )

    def __repr__(self) -> str:
        engines = ", ".join(str(engine) for engine in self.registry.supported_adapters())
        return f"DatabaseInspector(engines=[{engines}], connection={self.connection!r})"
