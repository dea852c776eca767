"""
服务层模块 - 提供业务逻辑实现
"""

from .base import BaseService, ServiceException, SheetDBAPIError
from .sheet_service import SheetService

__all__ = [
    "BaseService",
    "ServiceException",
    "SheetDBAPIError",
    "SheetService",
]
