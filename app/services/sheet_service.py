"""
SheetDB Sheet 服务 - 带重试的表格数据读取
"""
import asyncio
import time
from typing import List, Optional, Sequence

import httpx

from app.clients.sheetdb import SheetDBClient
from app.core.config import settings
from app.core.retry import retry_async
from app.core.rows import Row
from app.services.base import BaseService, SheetDBAPIError


class SheetService(BaseService):
    """SheetDB Sheet 服务，负责带重试/退避地读取表格行"""

    def __init__(
        self,
        sheetdb_client: SheetDBClient,
        max_tries: Optional[int] = None,
        base_delay: Optional[float] = None,
    ):
        """
        初始化 Sheet 服务

        Args:
            sheetdb_client: SheetDB 客户端实例
            max_tries: 默认最大尝试次数，不指定则读取配置
            base_delay: 退避基础延迟（秒），不指定则读取配置
        """
        super().__init__("SheetService")
        self.sheetdb_client = sheetdb_client
        self.max_tries = max_tries if max_tries is not None else settings.retry.max_tries
        self.base_delay = base_delay if base_delay is not None else settings.retry.base_delay_seconds

    async def get_sheet_by_ticker(self, ticker: str, tries: Optional[int] = None) -> List[Row]:
        """
        读取 $TICKER 形式的 sheet（如 ?sheet=$AAPL）

        失败时按 base_delay * n² 退避重试，全部失败后记录警告并返回空列表。
        """
        return await self._fetch_with_retry(
            self.sheetdb_client.ticker_sheet(ticker),
            label=f"getSheetByTicker({ticker})",
            tries=tries,
        )

    async def get_sheet_by_name(self, name: str, tries: Optional[int] = None) -> List[Row]:
        """读取按名称命名的 sheet（不加前缀），如 "Market" """
        return await self._fetch_with_retry(name, label=f"getSheetByName({name})", tries=tries)

    async def get_sheets_by_ticker(self, tickers: Sequence[str]) -> List[List[Row]]:
        """并发读取多个 ticker，结果顺序与输入一致，单个失败以空列表代替"""
        return list(await asyncio.gather(*(self.get_sheet_by_ticker(t) for t in tickers)))

    async def get_sheets_by_name(self, names: Sequence[str]) -> List[List[Row]]:
        return list(await asyncio.gather(*(self.get_sheet_by_name(n) for n in names)))

    async def get_sheets_strict(self, names: Sequence[str]) -> List[List[Row]]:
        """
        并发读取多个 sheet，不重试，任一失败则整体失败

        Raises:
            SheetDBAPIError: 任一请求失败
        """
        self.log_info(f"批量读取 sheet: {list(names)}")
        try:
            return await self.sheetdb_client.get_sheets(names)
        except (httpx.HTTPError, ValueError) as e:
            self._handle_api_error(e)

    async def _fetch_with_retry(self, sheet: str, label: str, tries: Optional[int] = None) -> List[Row]:
        max_tries = tries if tries is not None else self.max_tries
        attempts = 0

        def _count(attempt: int) -> None:
            nonlocal attempts
            attempts = attempt
            self.log_debug(f"{label} 第 {attempt}/{max_tries} 次尝试")

        async def _once() -> List[Row]:
            # _ts 用于绕过缓存
            return await self.sheetdb_client.get_sheet(
                sheet, extra_params={"_ts": int(time.time() * 1000)}
            )

        try:
            rows = await retry_async(
                _once,
                max_tries=max_tries,
                base_delay=self.base_delay,
                on_attempt=_count,
            )
        except Exception as e:
            self.increment_metric("failures")
            self.record_keyed_metric("sheets", sheet, {"attempts": attempts, "rows_fetched": 0, "ok": False})
            self.log_warning(f"{label} failed: {str(e) or e.__class__.__name__}")
            return []

        self.record_keyed_metric("sheets", sheet, {"attempts": attempts, "rows_fetched": len(rows), "ok": True})
        return rows

    def _handle_api_error(self, error: Exception) -> None:
        """处理 SheetDB API 错误"""
        error_msg = str(error)

        if isinstance(error, httpx.HTTPStatusError):
            error_code = str(error.response.status_code)
        else:
            error_code = error.__class__.__name__

        self.log_error(f"SheetDB API 错误: {error_code} - {error_msg}", error=error)

        raise SheetDBAPIError(
            message=f"SheetDB API 调用失败: {error_msg}",
            code=error_code,
            details={"error_msg": error_msg},
        ) from error
