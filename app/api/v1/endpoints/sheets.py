"""
表格数据 API 端点
"""
from typing import Any, List

from fastapi import APIRouter, HTTPException, Path, Query
from pydantic import BaseModel

from app.core.rows import Row
from app.services.base import SheetDBAPIError
from app.services.dependencies import SheetServiceDep

router = APIRouter()


class SheetResponse(BaseModel):
    """单个 sheet 的行数据"""
    sheet: str
    count: int
    rows: List[Any] = []  # 原样透传，不校验单元格类型


def _to_response(sheet: str, rows: List[Row]) -> SheetResponse:
    return SheetResponse(sheet=sheet, count=len(rows), rows=rows)


@router.get("/sheets/{name}", response_model=SheetResponse, summary="按名称读取 sheet")
async def get_sheet_by_name(
    name: str = Path(..., description="sheet 名称，如 Market"),
    sheet_service: SheetServiceDep = None,
) -> SheetResponse:
    rows = await sheet_service.get_sheet_by_name(name)
    return _to_response(name, rows)


@router.get("/tickers/{ticker}", response_model=SheetResponse, summary="按股票代码读取 sheet")
async def get_sheet_by_ticker(
    ticker: str = Path(..., description="股票代码，如 AAPL"),
    sheet_service: SheetServiceDep = None,
) -> SheetResponse:
    rows = await sheet_service.get_sheet_by_ticker(ticker)
    return _to_response(ticker, rows)


@router.get("/tickers", response_model=List[SheetResponse], summary="并发读取多个股票代码")
async def get_sheets_by_ticker(
    symbols: List[str] = Query(..., description="股票代码列表"),
    sheet_service: SheetServiceDep = None,
) -> List[SheetResponse]:
    results = await sheet_service.get_sheets_by_ticker(symbols)
    return [_to_response(symbol, rows) for symbol, rows in zip(symbols, results)]


@router.get("/sheets", response_model=List[SheetResponse], summary="并发读取多个 sheet（任一失败则整体失败）")
async def get_sheets_strict(
    names: List[str] = Query(..., description="sheet 名称列表"),
    sheet_service: SheetServiceDep = None,
) -> List[SheetResponse]:
    try:
        results = await sheet_service.get_sheets_strict(names)
    except SheetDBAPIError as e:
        raise HTTPException(status_code=502, detail=f"读取失败: {e} (code={e.code})")
    return [_to_response(name, rows) for name, rows in zip(names, results)]
