"""
DB Compat - 数据库引擎识别与版本兼容性检查
==========================================

识别应用所连接的数据库引擎及版本，并按引擎执行最低版本策略。

主要特性:
- 根据适配器名称识别 PostgreSQL / MySQL
- 获取原始版本、展示版本和数值版本
- 强制要求不满足时抛出 InsufficientVersionError，非强制时仅记录警告
- 支持 TOML 配置覆盖版本要求
- 命令行界面

使用示例:
    >>> from sqlalchemy import create_engine
    >>> from db_compat import DatabaseInspector, SQLAlchemyConnectionHandle
    >>> handle = SQLAlchemyConnectionHandle(create_engine(url))
    >>> inspector = DatabaseInspector(handle)
    >>> inspector.check_version()
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .core import (
    AdapterRegistry,
    ConfigError,
    ConnectionError,
    ConnectionHandle,
    DatabaseInspector,
    DBCompatError,
    EngineId,
    InsufficientVersionError,
    RequirementsConfig,
    UnsupportedOperationError,
    VersionParseError,
    VersionRequirement,
    check_version,
    get_default_connection,
    get_default_registry,
    identify,
    is_engine,
    is_mysql,
    is_postgresql,
    set_default_connection,
    supported_adapters,
    version_matches,
)
from .drivers import SQLAlchemyConnectionHandle

__all__ = [
    # 核心
    "AdapterRegistry",
    "EngineId",
    "VersionRequirement",
    "ConnectionHandle",
    "DatabaseInspector",
    "RequirementsConfig",
    "SQLAlchemyConnectionHandle",
    # 函数
    "check_version",
    "version_matches",
    "identify",
    "is_engine",
    "is_mysql",
    "is_postgresql",
    "get_default_registry",
    "supported_adapters",
    "set_default_connection",
    "get_default_connection",
    # 异常类
    "DBCompatError",
    "InsufficientVersionError",
    "UnsupportedOperationError",
    "VersionParseError",
    "ConfigError",
    "ConnectionError",
]


def get_version() -> str:
    """
    获取当前模块版本号。

    Returns:
        str: 版本号字符串，格式为 'x.y.z'
    """
    return __version__
