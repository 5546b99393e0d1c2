"""
数据库适配器注册表模块

维护受支持的数据库引擎、用于识别引擎的适配器名称正则，以及每个引擎的
最低版本要求和是否强制执行。

注册表是一个不可变的值对象：构建时完成校验，之后只读。
进程级默认注册表在首次使用时构建一次，所有入口也都接受显式传入的注册表。
"""

import re
import threading
from dataclasses import dataclass, field
from enum import Enum
from re import Pattern
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from ..utils.logging_utils import get_logger
from .exceptions import ConfigError

logger = get_logger(__name__)


class EngineId(str, Enum):
    """
    数据库引擎标识

    封闭集合，UNKNOWN 为无法识别时的哨兵值，永远没有对应的版本要求。
    """

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def known(cls) -> tuple:
        """返回除 UNKNOWN 以外的全部引擎"""
        return tuple(engine for engine in cls if engine is not cls.UNKNOWN)


@dataclass(frozen=True)
class VersionRequirement:
    """
    单个引擎的最低版本要求

    Attributes:
        string (str): 展示用的版本字符串，如 "9.5.0"
        numeric (Optional[int]): 数值版本阈值，如 90500；引擎不支持数值比较时为 None
        enforced (bool): 版本不满足时是否视为致命错误
    """

    string: str
    numeric: Optional[int] = None
    enforced: bool = False

    def to_dict(self) -> Dict[str, object]:
        """转换为字典，省略空的数值版本"""
        data: Dict[str, object] = {"string": self.string, "enforced": self.enforced}
        if self.numeric is not None:
            data["numeric"] = self.numeric
        return data


# 默认的适配器识别规则（顺序即匹配顺序）
# SQLAlchemy 将 MariaDB 报告为 mariadb 方言，按 MySQL 处理
DEFAULT_ADAPTER_PATTERNS: Dict[EngineId, str] = {
    EngineId.MYSQL: r"mysql|mariadb",
    EngineId.POSTGRESQL: r"postgres",
}

# 默认的版本要求
DEFAULT_REQUIREMENTS: Dict[EngineId, VersionRequirement] = {
    EngineId.POSTGRESQL: VersionRequirement(
        string="9.5.0",
        numeric=90500,  # PG_VERSION_NUM
        enforced=True,
    ),
    EngineId.MYSQL: VersionRequirement(string="5.6.0", enforced=False),
}


@dataclass(frozen=True)
class AdapterRegistry:
    """
    适配器注册表

    Attributes:
        patterns (Mapping[EngineId, Pattern]): 引擎到适配器名称正则的只读映射，按匹配顺序排列
        requirements (Mapping[EngineId, VersionRequirement]): 引擎到版本要求的只读映射

    Example:
        >>> registry = AdapterRegistry.default()
        >>> registry.requirement_for(EngineId.POSTGRESQL).numeric
        90500
    """

    patterns: Mapping[EngineId, Pattern] = field(default_factory=dict)
    requirements: Mapping[EngineId, VersionRequirement] = field(default_factory=dict)

    def __post_init__(self) -> None:
        patterns = {
            self._to_engine(engine): self._compile(pattern)
            for engine, pattern in self.patterns.items()
        }
        requirements = {
            self._to_engine(engine): requirement
            for engine, requirement in self.requirements.items()
        }

        if EngineId.UNKNOWN in patterns or EngineId.UNKNOWN in requirements:
            raise ConfigError("unknown 引擎不能出现在注册表中")

        missing = [str(engine) for engine in patterns if engine not in requirements]
        if missing:
            raise ConfigError(f"以下引擎缺少版本要求: {', '.join(missing)}")

        extra = [str(engine) for engine in requirements if engine not in patterns]
        if extra:
            raise ConfigError(f"以下引擎未注册识别规则: {', '.join(extra)}")

        for engine, requirement in requirements.items():
            if not isinstance(requirement, VersionRequirement):
                raise ConfigError(
                    f"引擎 {engine} 的版本要求类型无效: {type(requirement).__name__}"
                )

        # frozen dataclass 只能通过 object.__setattr__ 替换字段
        object.__setattr__(self, "patterns", MappingProxyType(patterns))
        object.__setattr__(self, "requirements", MappingProxyType(requirements))

    @staticmethod
    def _to_engine(engine: "EngineId | str") -> EngineId:
        try:
            return EngineId(engine)
        except ValueError:
            supported = ", ".join(str(e) for e in EngineId.known())
            raise ConfigError(f"不支持的数据库引擎: {engine}，支持的引擎: {supported}")

    @staticmethod
    def _compile(pattern: "str | Pattern") -> Pattern:
        if isinstance(pattern, str):
            return re.compile(pattern, re.IGNORECASE)
        return pattern

    @classmethod
    def default(cls) -> "AdapterRegistry":
        """使用内置的识别规则和版本要求构建注册表"""
        return cls(
            patterns=dict(DEFAULT_ADAPTER_PATTERNS),
            requirements=dict(DEFAULT_REQUIREMENTS),
        )

    def supported_adapters(self) -> Mapping[EngineId, Pattern]:
        """
        返回引擎到识别正则的映射

        每次调用返回同一个只读映射实例。
        """
        return self.patterns

    def requirement_for(self, engine: EngineId) -> Optional[VersionRequirement]:
        """
        获取引擎的版本要求

        Args:
            engine: 引擎标识

        Returns:
            Optional[VersionRequirement]: 版本要求；UNKNOWN 或未注册的引擎返回 None
        """
        return self.requirements.get(engine)

    def with_requirements(
        self, overrides: Mapping[EngineId, VersionRequirement]
    ) -> "AdapterRegistry":
        """
        返回替换了部分版本要求的新注册表，原注册表不变

        Args:
            overrides: 需要覆盖的版本要求
        """
        requirements = dict(self.requirements)
        requirements.update(overrides)
        return AdapterRegistry(patterns=dict(self.patterns), requirements=requirements)


_default_registry: Optional[AdapterRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> AdapterRegistry:
    """
    获取进程级默认注册表

    首次调用时构建，此后始终返回同一实例。
    """
    global _default_registry

    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                _default_registry = AdapterRegistry.default()
                logger.debug("默认适配器注册表已构建")
    return _default_registry


def supported_adapters() -> Mapping[EngineId, Pattern]:
    """返回默认注册表中的引擎识别规则"""
    return get_default_registry().supported_adapters()
