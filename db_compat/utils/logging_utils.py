"""
日志配置模块

db_compat 的各模块通过 ``get_logger(__name__)`` 获取 logger，均挂在 "db_compat"
之下。库本身不安装任何 handler，由应用或命令行入口调用 ``setup_logging`` 决定
日志输出到何处：

- 滚动日志文件，默认位于用户配置目录下的 logs 子目录
- 标准错误，命令行工具用它显示版本不满足时的警告
"""

import logging
import logging.handlers
import sys
from pathlib import Path

from .path_utils import PathHelper

# 版本检查日志需要定位到具体模块，因此带上 logger 名称和源码位置
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s [%(filename)s:%(lineno)d]"

LOG_LEVELS = {
    name: getattr(logging, name) for name in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
}

MAX_LOG_FILE_SIZE = 10 * 1024 * 1024
LOG_BACKUP_COUNT = 5


def _parse_level(level: str) -> int:
    """将级别名称（不区分大小写）转换为 logging 常量，无效时抛出 ValueError"""
    try:
        return LOG_LEVELS[level.upper()]
    except KeyError:
        raise ValueError(f"无效的日志级别: '{level}'，有效值为: {list(LOG_LEVELS)}")


def _file_handler(
    app_name: str, log_dir: str | None, max_file_size: int, backup_count: int
) -> logging.Handler:
    directory = (
        Path(log_dir) if log_dir is not None else PathHelper.get_user_config_dir(app_name) / "logs"
    )
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OSError(f"无法创建日志目录 {directory}: {str(e)}")

    return logging.handlers.RotatingFileHandler(
        filename=str(directory / f"{app_name}.log"),
        maxBytes=max_file_size,
        backupCount=backup_count,
        encoding="utf-8",
    )


def setup_logging(
    app_name: str = "db_compat",
    level: str = "INFO",
    log_to_console: bool = False,
    log_to_file: bool = True,
    max_file_size: int = MAX_LOG_FILE_SIZE,
    backup_count: int = LOG_BACKUP_COUNT,
    log_format: str | None = None,
    log_dir: str | None = None,
) -> logging.Logger:
    """
    为 app_name 对应的 logger 安装输出 handler

    重复调用时会先关闭并移除上一次安装的 handler，因此可以在运行中切换输出方式。

    Args:
        app_name: logger 名称，同时用作日志文件名和默认日志目录
        level: 日志级别名称，不区分大小写
        log_to_console: 是否输出到标准错误
        log_to_file: 是否写入滚动日志文件
        max_file_size: 单个日志文件的最大字节数
        backup_count: 保留的历史日志文件数量
        log_format: 日志格式，默认使用 LOG_FORMAT
        log_dir: 日志目录，默认为用户配置目录下的 logs

    Returns:
        logging.Logger: 已配置的 logger

    Raises:
        ValueError: 日志级别无效，或两种输出方式都未启用时
        OSError: 无法创建日志目录时

    Example:
        >>> setup_logging("db_compat", "WARNING", log_to_console=True, log_to_file=False)
    """
    log_level = _parse_level(level)
    if not (log_to_file or log_to_console):
        raise ValueError("至少需要启用一种日志输出方式（控制台或文件）")

    handlers: list[logging.Handler] = []
    if log_to_file:
        handlers.append(_file_handler(app_name, log_dir, max_file_size, backup_count))
    if log_to_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    logger = logging.getLogger(app_name)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    formatter = logging.Formatter(log_format or LOG_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        logger.addHandler(handler)
    logger.setLevel(log_level)

    logger.debug(f"日志输出已配置: {app_name}，级别 {level.upper()}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """获取 logger，模块内用法：``logger = get_logger(__name__)``"""
    return logging.getLogger(name)


def set_log_level(logger_name: str, level: str) -> None:
    """同时调整 logger 及其全部 handler 的级别"""
    log_level = _parse_level(level)
    logger = get_logger(logger_name)
    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)
