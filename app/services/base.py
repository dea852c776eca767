"""
基础服务类 - 提供日志、度量与服务层异常
"""
import logging
from abc import ABC
from typing import Any, Dict, Optional


class BaseService(ABC):
    """所有服务的基类"""

    def __init__(self, service_name: str = None):
        """
        Args:
            service_name: 服务名称，用于日志标识（logger 为 app.services.<name>）
        """
        self.service_name = service_name or self.__class__.__name__
        self.logger = logging.getLogger(f"app.services.{self.service_name}")
        self._metrics: Dict[str, Any] = {}

    def log_info(self, message: str, **kwargs) -> None:
        self.logger.info(message, extra=kwargs)

    def log_debug(self, message: str, **kwargs) -> None:
        self.logger.debug(message, extra=kwargs)

    def log_warning(self, message: str, **kwargs) -> None:
        self.logger.warning(message, extra=kwargs)

    def log_error(self, message: str, error: Optional[Exception] = None, **kwargs) -> None:
        """记录错误日志，传入 error 时附带异常堆栈"""
        self.logger.error(message, exc_info=error, extra=kwargs)

    def increment_metric(self, metric_name: str, amount: int = 1) -> None:
        """累加服务级计数（如 failures）"""
        self._metrics[metric_name] = self._metrics.get(metric_name, 0) + amount

    def record_keyed_metric(self, metric_name: str, key: str, value: Any) -> None:
        """
        按 key 记录指标，如 sheets -> {"$AAPL": {...}}

        并发 fan-out 时各 sheet 写各自的 key，互不覆盖。
        """
        self._metrics.setdefault(metric_name, {})[key] = value

    def get_metrics(self) -> Dict[str, Any]:
        """获取所有度量指标（浅拷贝）"""
        return self._metrics.copy()


class ServiceException(Exception):
    """服务层异常基类，code/details 供 API 层映射错误响应"""

    def __init__(self, message: str, code: str = None, details: Dict[str, Any] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class SheetDBAPIError(ServiceException):
    """SheetDB 请求失败（HTTP 状态码或传输层错误）"""
    pass
