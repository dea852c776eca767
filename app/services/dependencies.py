"""
服务依赖注入模块
"""
from typing import Annotated
from fastapi import Depends, Request
from app.clients.sheetdb import SheetDBClient
from app.services.sheet_service import SheetService


def get_sheetdb_client(request: Request) -> SheetDBClient:
    """获取全局 SheetDBClient"""
    return request.app.state.sheetdb


def get_sheet_service(sheetdb_client: Annotated[SheetDBClient, Depends(get_sheetdb_client)]) -> SheetService:
    """获取 Sheet 服务"""
    return SheetService(sheetdb_client)


# 类型别名，方便在端点中使用
SheetDBClientDep = Annotated[SheetDBClient, Depends(get_sheetdb_client)]
SheetServiceDep = Annotated[SheetService, Depends(get_sheet_service)]
