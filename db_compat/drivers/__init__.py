"""
数据库驱动适配包

将具体的数据库访问库适配为连接句柄协议，目前提供基于 SQLAlchemy 的实现。
"""

from .sqlalchemy_handle import SQLAlchemyConnectionHandle

__all__ = [
    "SQLAlchemyConnectionHandle",
]
