import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence

import httpx

from app.core.config import settings
from app.core.rows import Row, normalize_rows


class SheetDBClient:
	"""
	最小实现：基于 httpx.AsyncClient 的 SheetDB 只读客户端。
	单次请求、不重试，任何失败直接抛给调用方。
	"""

	def __init__(
		self,
		base_url: Optional[str] = None,
		timeout: Optional[float] = None,
		ticker_prefix: Optional[str] = None,
		wrapped_field: Optional[str] = None,
		transport: Optional[httpx.AsyncBaseTransport] = None,
	) -> None:
		self._logger = logging.getLogger("sq.sheetdb")
		self.base_url = base_url or settings.sheetdb.base_url
		self.ticker_prefix = settings.sheetdb.ticker_prefix if ticker_prefix is None else ticker_prefix
		self.wrapped_field = wrapped_field or settings.sheetdb.wrapped_field
		self.client = httpx.AsyncClient(
			base_url=self.base_url,
			headers={"Content-Type": "application/json"},
			timeout=timeout or settings.sheetdb.timeout_seconds,
			transport=transport,
		)

	async def __aenter__(self) -> "SheetDBClient":
		return self

	async def __aexit__(self, *exc_info: Any) -> None:
		await self.aclose()

	async def aclose(self) -> None:
		await self.client.aclose()

	def ticker_sheet(self, ticker: str) -> str:
		"""股票代码对应的 sheet 名称，如 AAPL -> $AAPL"""
		return f"{self.ticker_prefix}{ticker}"

	# ---------- 读取单个 sheet 的原始响应体 ----------
	async def fetch_body(self, sheet: str, extra_params: Optional[Dict[str, Any]] = None) -> Any:
		params: Dict[str, Any] = {"sheet": sheet}
		if extra_params:
			params.update(extra_params)

		self._logger.debug(f"请求 SheetDB: sheet={sheet}, params={params}")
		response = await self.client.get("/", params=params)
		response.raise_for_status()
		return response.json()

	# ---------- 读取单个 sheet 并归一为行列表 ----------
	async def get_sheet(self, sheet: str, extra_params: Optional[Dict[str, Any]] = None) -> List[Row]:
		body = await self.fetch_body(sheet, extra_params)
		rows = normalize_rows(body, self.wrapped_field)
		self._logger.debug(f"sheet={sheet} 返回 {len(rows)} 行")
		return rows

	async def get_ticker_sheet(self, ticker: str) -> List[Row]:
		return await self.get_sheet(self.ticker_sheet(ticker))

	# ---------- 并发读取多个 sheet（任一失败则整体失败） ----------
	async def get_sheets(self, sheets: Sequence[str]) -> List[List[Row]]:
		# gather 不会取消仍在进行中的请求，其结果被丢弃
		return list(await asyncio.gather(*(self.get_sheet(sheet) for sheet in sheets)))
