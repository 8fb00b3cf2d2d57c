"""
提交数据模型 - Submission

data 的值只有三种：字符串 / 布尔（勾选）/ 字符串数组（多选）。
历史数据里的数字、null 等在加载时规整，不让读取端抛错。
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any, Union

from pydantic import BaseModel, Field, field_validator

JSONValue = Union[str, bool, list[str]]

_TAG_SPLIT = re.compile(r"[,，\n]")


def normalize_value(value: Any) -> JSONValue | None:
    """规整单个提交值；无法表示的返回 None"""
    if isinstance(value, (bool, str)):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, (list, tuple, set, frozenset)):
        items = [str(v) for v in value if isinstance(v, (str, int, float)) and not isinstance(v, bool)]
        return sorted(items) if isinstance(value, (set, frozenset)) else items
    return None


def parse_tags(text: str) -> list[str]:
    """按逗号（中英文）或换行拆分标签"""
    return [t.strip() for t in _TAG_SPLIT.split(text or "") if t.strip()]


class Submission(BaseModel):
    """一次填写的提交记录"""
    id: str
    event_id: str | None = None
    form_id: str | None = None
    owner_id: str | None = None
    data: dict[str, JSONValue] = Field(default_factory=dict)
    tags: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("data", mode="before")
    @classmethod
    def _normalize_data(cls, v: Any) -> dict[str, Any]:
        if not isinstance(v, dict):
            return {}
        out = {}
        for k, raw in v.items():
            value = normalize_value(raw)
            if value is not None:
                out[str(k)] = value
        return out

    @field_validator("tags", mode="before")
    @classmethod
    def _normalize_tags(cls, v: Any) -> list[str]:
        if v is None:
            return []
        if isinstance(v, str):
            return parse_tags(v)
        return v
