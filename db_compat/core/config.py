"""
版本要求配置模块

使用 TOML 格式覆盖内置的数据库版本要求。配置文件不存在时使用内置默认值。

配置文件示例::

    version = "1.0.0"

    [requirements.postgresql]
    numeric = 90500
    string = "9.5.0"
    enforced = true

    [requirements.mysql]
    string = "5.6.0"
    enforced = false
"""

import tomllib
from dataclasses import replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional

import tomli_w

from ..utils.logging_utils import get_logger
from ..utils.path_utils import PathHelper
from .exceptions import ConfigError
from .registry import (
    DEFAULT_REQUIREMENTS,
    AdapterRegistry,
    EngineId,
    VersionRequirement,
    get_default_registry,
)

logger = get_logger(__name__)

# 支持的配置版本
SUPPORTED_VERSIONS = ["1.0.0"]
CURRENT_VERSION = "1.0.0"

DEFAULT_CONFIG_FILE = "requirements.toml"

# 各字段允许的类型
FIELD_TYPES: Dict[str, tuple] = {
    "string": (str,),
    "numeric": (int,),
    "enforced": (bool,),
}


class RequirementsConfig:
    """
    版本要求配置管理器

    Attributes:
        app_name (str): 应用名称，用于确定配置目录
        config_path (Path): 配置文件路径

    Example:
        >>> config = RequirementsConfig(config_path="/etc/my_app/requirements.toml")
        >>> registry = config.build_registry()
        >>> inspector = DatabaseInspector(registry=registry)
    """

    def __init__(
        self,
        app_name: str = "db_compat",
        config_file: str = DEFAULT_CONFIG_FILE,
        config_path: "str | Path | None" = None,
    ) -> None:
        """
        初始化配置管理器

        Args:
            app_name: 应用名称，用于确定默认配置目录
            config_file: 配置文件名，默认为"requirements.toml"
            config_path: 显式指定的配置文件路径，优先于 app_name/config_file
        """
        self.app_name = app_name
        if config_path is not None:
            self.config_path = Path(config_path)
        else:
            # 只解析路径，目录在 write_default 时才创建
            self.config_path = (
                PathHelper.get_user_config_dir(app_name, create=False) / config_file
            )

    def exists(self) -> bool:
        return self.config_path.is_file()

    def load(self) -> Dict[str, Any]:
        """
        加载并验证配置文件

        Returns:
            Dict[str, Any]: 配置字典；文件不存在时返回空字典

        Raises:
            ConfigError: 当配置文件格式无效或版本不支持时
        """
        if not self.exists():
            logger.debug(f"配置文件不存在，使用默认版本要求: {self.config_path}")
            return {}

        try:
            with open(self.config_path, "rb") as f:
                config = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            logger.error(f"配置文件TOML格式错误: {str(e)}")
            raise ConfigError(
                f"配置文件格式无效: {str(e)}", config_file=str(self.config_path)
            )
        except OSError as e:
            logger.error(f"读取配置文件失败: {str(e)}")
            raise ConfigError(
                f"配置文件读取失败: {str(e)}", config_file=str(self.config_path)
            )

        self._validate_config(config)
        return config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """
        验证配置文件结构

        Raises:
            ConfigError: 当配置结构无效时
        """
        config_file = str(self.config_path)

        version = config.get("version", CURRENT_VERSION)
        if version not in SUPPORTED_VERSIONS:
            raise ConfigError(f"不支持的配置版本: {version}", config_file=config_file)

        requirements = config.get("requirements", {})
        if not isinstance(requirements, dict):
            raise ConfigError(
                "requirements 必须是表", config_file=config_file, config_section="requirements"
            )

        known = {str(engine) for engine in EngineId.known()}
        for engine_name, section in requirements.items():
            if engine_name not in known:
                raise ConfigError(
                    f"不支持的数据库引擎: {engine_name}，支持的引擎: {', '.join(sorted(known))}",
                    config_file=config_file,
                    config_section=engine_name,
                )
            if not isinstance(section, dict):
                raise ConfigError(
                    f"引擎 {engine_name} 的配置必须是表",
                    config_file=config_file,
                    config_section=engine_name,
                )
            for key, value in section.items():
                expected = FIELD_TYPES.get(key)
                if expected is None:
                    raise ConfigError(
                        f"未知的配置项: {key}",
                        config_file=config_file,
                        config_section=engine_name,
                        config_key=key,
                    )
                # bool 是 int 的子类，numeric 不接受布尔值
                if not isinstance(value, expected) or (
                    key == "numeric" and isinstance(value, bool)
                ):
                    raise ConfigError(
                        f"配置项 {engine_name}.{key} 类型无效: {type(value).__name__}",
                        config_file=config_file,
                        config_section=engine_name,
                        config_key=key,
                    )

    def requirement_overrides(
        self, base: Optional[AdapterRegistry] = None
    ) -> Dict[EngineId, VersionRequirement]:
        """
        读取配置文件中的版本要求，并与基础注册表中的要求按字段合并

        Args:
            base: 基础注册表，默认使用进程级默认注册表

        Returns:
            Dict[EngineId, VersionRequirement]: 需要覆盖的版本要求

        Raises:
            ConfigError: 配置的引擎未在基础注册表中注册时
        """
        base = base or get_default_registry()
        config = self.load()
        overrides: Dict[EngineId, VersionRequirement] = {}
        for engine_name, section in config.get("requirements", {}).items():
            engine = EngineId(engine_name)
            current = base.requirement_for(engine)
            if current is None:
                raise ConfigError(
                    f"基础注册表中没有引擎 {engine_name} 的版本要求",
                    config_file=str(self.config_path),
                    config_section=engine_name,
                )
            overrides[engine] = replace(current, **section)
        return overrides

    def build_registry(self, base: Optional[AdapterRegistry] = None) -> AdapterRegistry:
        """
        构建应用了配置覆盖的注册表

        Args:
            base: 基础注册表，默认使用进程级默认注册表

        Returns:
            AdapterRegistry: 新的注册表；没有覆盖时直接返回基础注册表
        """
        base = base or get_default_registry()
        overrides = self.requirement_overrides(base)
        if not overrides:
            return base

        logger.info(
            f"已从 {self.config_path} 加载版本要求: "
            f"{', '.join(str(engine) for engine in overrides)}"
        )
        return base.with_requirements(overrides)

    def write_default(self, overwrite: bool = False) -> Path:
        """
        将内置的版本要求写入配置文件

        Args:
            overwrite: 文件已存在时是否覆盖

        Returns:
            Path: 配置文件路径

        Raises:
            ConfigError: 文件已存在且不允许覆盖，或写入失败时
        """
        if self.exists() and not overwrite:
            raise ConfigError(
                f"配置文件已存在: {self.config_path}", config_file=str(self.config_path)
            )

        config = {
            "version": CURRENT_VERSION,
            "metadata": {"created": datetime.now().astimezone().isoformat()},
            "requirements": {
                str(engine): requirement.to_dict()
                for engine, requirement in DEFAULT_REQUIREMENTS.items()
            },
        }

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "wb") as f:
                f.write(tomli_w.dumps(config).encode("utf-8"))
        except OSError as e:
            logger.error(f"保存配置文件失败: {str(e)}")
            raise ConfigError(
                f"配置文件保存失败: {str(e)}", config_file=str(self.config_path)
            )

        logger.info(f"已写入默认版本要求: {self.config_path}")
        return self.config_path
