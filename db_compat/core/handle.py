"""
数据库连接句柄协议

本包只依赖连接对象的两个能力：报告适配器名称、执行只读标量查询。
连接由调用方拥有，本包从不修改或关闭它。
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class ConnectionHandle(Protocol):
    """
    连接句柄协议

    Attributes:
        adapter_name (str): 驱动报告的原始适配器名称，如 "postgresql"、"mysql"

    Example:
        >>> class MyHandle:
        ...     adapter_name = "postgresql"
        ...     def select_value(self, sql):
        ...         return "PostgreSQL 13.4 on x86_64-pc-linux-gnu"
        >>> isinstance(MyHandle(), ConnectionHandle)
        True
    """

    @property
    def adapter_name(self) -> str: ...

    def select_value(self, sql: str) -> Any:
        """执行只读查询并返回第一行第一列的值"""
        ...
