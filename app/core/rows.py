"""
行数据模型与响应形态归一化
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Union

# 单元格取值由表头动态决定，不做校验
CellValue = Union[str, int, float, bool, None]
Row = Dict[str, CellValue]

DEFAULT_WRAPPED_FIELD = "data"


class ResponseShape(str, Enum):
    """SheetDB 响应体的顶层形态"""
    LIST = "list"  # 直接是行列表
    WRAPPED = "wrapped"  # {"data": [...]}
    UNKNOWN = "unknown"  # 其它任何形态，按空处理


@dataclass(frozen=True)
class SheetBody:
    """已解码的响应体及其形态标记"""
    shape: ResponseShape
    raw: Any
    wrapped_field: str = DEFAULT_WRAPPED_FIELD

    @classmethod
    def classify(cls, raw: Any, wrapped_field: str = DEFAULT_WRAPPED_FIELD) -> 'SheetBody':
        """根据解码后的 JSON 判断形态，不修改原始数据。"""
        if isinstance(raw, list):
            return cls(ResponseShape.LIST, raw, wrapped_field)
        if isinstance(raw, dict) and isinstance(raw.get(wrapped_field), list):
            return cls(ResponseShape.WRAPPED, raw, wrapped_field)
        return cls(ResponseShape.UNKNOWN, raw, wrapped_field)

    @property
    def rows(self) -> List[Row]:
        if self.shape is ResponseShape.LIST:
            return self.raw
        if self.shape is ResponseShape.WRAPPED:
            return self.raw[self.wrapped_field]
        return []


def normalize_rows(raw: Any, wrapped_field: str = DEFAULT_WRAPPED_FIELD) -> List[Row]:
    """
    将任意响应体归一为行列表

    - list 原样返回（同一对象）
    - 对象且 wrapped_field 字段为 list 时返回该字段
    - 其它形态（null、标量、缺少字段的对象）返回空列表
    """
    return SheetBody.classify(raw, wrapped_field).rows
