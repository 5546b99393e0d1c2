"""
数据库版本兼容性检查模块

将检测到的数据库版本与注册表中的版本要求比较，并按强制策略处理：
- 满足要求：静默返回
- 不满足且强制：抛出 InsufficientVersionError，调用方应终止启动
- 不满足且不强制：记录警告后继续

比较规则：
- PostgreSQL: 数值版本 >= 要求的数值阈值，单一下限，无次版本宽容
- MySQL: 始终视为满足，版本要求仅供参考
"""

import logging
from typing import Callable, Dict, Optional

from ..utils.logging_utils import get_logger
from .exceptions import ConfigError, InsufficientVersionError
from .handle import ConnectionHandle
from .identifier import identify
from .registry import AdapterRegistry, EngineId, VersionRequirement, get_default_registry
from .resolver import display_version, numeric_version

logger = get_logger(__name__)

VERSION_MISMATCH_MSG = (
    "Database server version mismatch: Required version is {required}, "
    "but current version is {current}"
)
NOT_ENFORCED_SUFFIX = (
    ". Version is not enforced for this database however, "
    "so continuing with this version."
)


def _mysql_matches(connection: ConnectionHandle, requirement: VersionRequirement) -> bool:
    return True


def _postgresql_matches(
    connection: ConnectionHandle, requirement: VersionRequirement
) -> bool:
    if requirement.numeric is None:
        raise ConfigError(
            "PostgreSQL 版本要求缺少数值阈值",
            config_section=str(EngineId.POSTGRESQL),
            config_key="numeric",
        )
    return numeric_version(connection, EngineId.POSTGRESQL) >= requirement.numeric


VERSION_MATCHERS: Dict[
    EngineId, Callable[[ConnectionHandle, VersionRequirement], bool]
] = {
    EngineId.MYSQL: _mysql_matches,
    EngineId.POSTGRESQL: _postgresql_matches,
}


def version_matches(
    connection: ConnectionHandle,
    registry: Optional[AdapterRegistry] = None,
    engine: Optional[EngineId] = None,
) -> bool:
    """
    判断当前连接的数据库版本是否满足要求

    Args:
        connection: 连接句柄
        registry: 适配器注册表，默认使用进程级默认注册表
        engine: 已识别的引擎，未提供时自动识别

    Returns:
        bool: 满足要求返回 True；没有版本要求的引擎（包括 UNKNOWN）也返回 True
    """
    registry = registry or get_default_registry()
    if engine is None:
        engine = identify(connection, registry)

    requirement = registry.requirement_for(engine)
    matcher = VERSION_MATCHERS.get(engine)
    if requirement is None or matcher is None:
        return True
    return matcher(connection, requirement)


def check_version(
    connection: ConnectionHandle,
    registry: Optional[AdapterRegistry] = None,
    warn_logger: Optional[logging.Logger] = None,
) -> None:
    """
    检查数据库版本兼容性

    Args:
        connection: 连接句柄
        registry: 适配器注册表，默认使用进程级默认注册表
        warn_logger: 用于输出不强制时警告的日志记录器，默认使用本模块的记录器

    Raises:
        InsufficientVersionError: 版本要求为强制且当前版本不满足时

    Example:
        >>> check_version(handle)  # PostgreSQL 9.4 -> InsufficientVersionError
    """
    registry = registry or get_default_registry()
    warn_logger = warn_logger or logger

    engine = identify(connection, registry)
    requirement = registry.requirement_for(engine)
    if requirement is None:
        logger.debug(f"引擎 {engine} 没有版本要求，跳过检查")
        return

    if version_matches(connection, registry, engine):
        logger.debug(f"{engine} 版本满足要求: >= {requirement.string}")
        return

    current = display_version(connection, engine)
    message = VERSION_MISMATCH_MSG.format(required=requirement.string, current=current)

    if requirement.enforced:
        logger.error(message)
        raise InsufficientVersionError(
            message,
            engine=str(engine),
            required_version=requirement.string,
            current_version=current,
        )

    warn_logger.warning(message + NOT_ENFORCED_SUFFIX)
