"""
进程级默认连接

调用方未显式传入连接时，识别谓词和 DatabaseInspector 使用此处设置的连接。
"""

import threading
from typing import Optional

from ..utils.logging_utils import get_logger
from .exceptions import ConnectionError
from .handle import ConnectionHandle

logger = get_logger(__name__)

_default_connection: Optional[ConnectionHandle] = None
_default_connection_lock = threading.Lock()


def set_default_connection(connection: Optional[ConnectionHandle]) -> None:
    """
    设置进程级默认连接

    Args:
        connection: 连接句柄，传入 None 表示清除默认连接
    """
    global _default_connection

    with _default_connection_lock:
        _default_connection = connection
    if connection is None:
        logger.debug("已清除默认连接")
    else:
        logger.debug(f"已设置默认连接，适配器: {connection.adapter_name}")


def get_default_connection() -> ConnectionHandle:
    """
    获取进程级默认连接

    Raises:
        ConnectionError: 尚未设置默认连接时
    """
    connection = _default_connection
    if connection is None:
        raise ConnectionError("未设置默认连接，请先调用 set_default_connection() 或显式传入连接")
    return connection


def resolve_connection(connection: Optional[ConnectionHandle]) -> ConnectionHandle:
    """返回显式传入的连接，未传入时返回默认连接"""
    if connection is not None:
        return connection
    return get_default_connection()
