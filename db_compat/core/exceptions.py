"""
数据库兼容性检查自定义异常模块

提供项目专用的异常类层次结构，用于区分版本不满足、不支持的操作、
版本解析失败以及配置错误等不同情况。
驱动层面的异常（网络、认证等）不会被包装，直接透传给调用方。
"""

from typing import Any, Dict, Optional


class DBCompatError(Exception):
    """
    数据库兼容性检查基础异常类

    所有自定义异常的基类，提供统一的异常处理接口。

    Attributes:
        message (str): 异常描述信息
        error_code (Optional[str]): 错误代码，用于错误分类
        details (Optional[Dict[str, Any]]): 详细的错误信息
    """

    default_error_code: Optional[str] = None

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        初始化基础异常

        Args:
            message: 异常描述信息
            error_code: 错误代码，未提供时使用类的默认错误代码
            details: 详细的错误信息字典
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}

    def __str__(self) -> str:
        """返回异常的字符串表示"""
        base_str = f"{self.__class__.__name__}: {self.message}"
        if self.error_code:
            base_str += f" (错误代码: {self.error_code})"
        return base_str

    def to_dict(self) -> Dict[str, Any]:
        """
        将异常信息转换为字典格式

        Returns:
            包含异常信息的字典
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "details": self.details,
        }


class InsufficientVersionError(DBCompatError):
    """
    数据库版本不满足强制要求

    仅当引擎的版本要求为强制（enforced）且检测到的版本低于要求时抛出，
    调用方应据此终止应用启动流程。
    """

    default_error_code = "INSUFFICIENT_VERSION"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        engine: Optional[str] = None,
        required_version: Optional[str] = None,
        current_version: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        初始化版本不满足异常

        Args:
            message: 异常描述信息
            error_code: 错误代码
            engine: 数据库引擎标识（如：postgresql）
            required_version: 要求的最低版本（展示用字符串）
            current_version: 检测到的当前版本（展示用字符串）
            details: 详细的错误信息
        """
        super().__init__(message, error_code, details)
        self.engine = engine
        self.required_version = required_version
        self.current_version = current_version

        # 自动填充详细信息
        if engine:
            self.details["engine"] = engine
        if required_version:
            self.details["required_version"] = required_version
        if current_version:
            self.details["current_version"] = current_version


class UnsupportedOperationError(DBCompatError):
    """
    不支持的操作

    例如请求 MySQL 的数值版本，或对无法识别的引擎解析版本。
    属于调用方的编程错误，而不是需要恢复的运行时状况。
    """

    default_error_code = "UNSUPPORTED_OPERATION"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        engine: Optional[str] = None,
        operation: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.engine = engine
        self.operation = operation

        if engine:
            self.details["engine"] = engine
        if operation:
            self.details["operation"] = operation


class VersionParseError(DBCompatError):
    """
    版本字符串解析失败

    数据库返回的版本标识不符合预期格式时抛出，视为致命缺陷，不做降级处理。
    """

    default_error_code = "VERSION_PARSE_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        raw_version: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, error_code, details)
        self.raw_version = raw_version

        if raw_version is not None:
            self.details["raw_version"] = raw_version


class ConfigError(DBCompatError):
    """
    配置相关异常

    处理版本要求配置文件读取、解析、验证，以及注册表构建过程中出现的错误。
    """

    default_error_code = "CONFIG_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        config_file: Optional[str] = None,
        config_section: Optional[str] = None,
        config_key: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        初始化配置异常

        Args:
            message: 异常描述信息
            error_code: 错误代码
            config_file: 相关的配置文件路径
            config_section: 相关的配置节
            config_key: 相关的配置键
            details: 详细的错误信息
        """
        super().__init__(message, error_code, details)
        self.config_file = config_file
        self.config_section = config_section
        self.config_key = config_key

        # 自动填充详细信息
        if config_file:
            self.details["config_file"] = config_file
        if config_section:
            self.details["config_section"] = config_section
        if config_key:
            self.details["config_key"] = config_key


class ConnectionError(DBCompatError):
    """
    连接不可用异常

    当未显式传入连接、且未设置进程默认连接时抛出。
    真实的数据库连接失败由驱动抛出，不经过此类。
    """

    default_error_code = "CONNECTION_ERROR"
