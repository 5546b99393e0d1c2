"""
数据库兼容性检查核心模块

主要功能模块：
- AdapterRegistry: 引擎识别规则与版本要求的不可变注册表
- identify / is_engine: 根据适配器名称识别数据库引擎
- raw_version / display_version / numeric_version: 版本解析
- check_version / version_matches: 版本兼容性检查
- DatabaseInspector: 组合以上功能、支持默认连接的统一入口
- RequirementsConfig: 基于 TOML 的版本要求覆盖配置

支持的数据库引擎：
- PostgreSQL（强制要求 >= 9.5.0）
- MySQL（要求 5.6.0，仅提示不强制）
"""

from .checker import check_version, version_matches
from .config import RequirementsConfig
from .default_connection import get_default_connection, set_default_connection
from .exceptions import (
    ConfigError,
    ConnectionError,
    DBCompatError,
    InsufficientVersionError,
    UnsupportedOperationError,
    VersionParseError,
)
from .handle import ConnectionHandle
from .identifier import identify, is_engine, is_mysql, is_postgresql
from .inspector import DatabaseInspector
from .registry import (
    AdapterRegistry,
    EngineId,
    VersionRequirement,
    get_default_registry,
    supported_adapters,
)
from .resolver import display_version, numeric_version, parse_postgresql_banner, raw_version

__all__ = [
    # ==================== 注册表 ====================
    "AdapterRegistry",
    "EngineId",
    "VersionRequirement",
    "get_default_registry",
    "supported_adapters",
    # ==================== 引擎识别 ====================
    "ConnectionHandle",
    "identify",
    "is_engine",
    "is_mysql",
    "is_postgresql",
    # ==================== 版本解析 ====================
    "raw_version",
    "display_version",
    "numeric_version",
    "parse_postgresql_banner",
    # ==================== 兼容性检查 ====================
    "check_version",
    "version_matches",
    "DatabaseInspector",
    "set_default_connection",
    "get_default_connection",
    # ==================== 配置管理 ====================
    "RequirementsConfig",
    # ==================== 异常处理体系 ====================
    "DBCompatError",
    "InsufficientVersionError",
    "UnsupportedOperationError",
    "VersionParseError",
    "ConfigError",
    "ConnectionError",
]
