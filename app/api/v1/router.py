from fastapi import APIRouter

from .endpoints import test, sheets

api_v1_router = APIRouter()
api_v1_router.include_router(test.router, tags=["测试"])
api_v1_router.include_router(sheets.router, tags=["表格数据"])
