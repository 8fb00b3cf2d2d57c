"""
成行算法 - 把有序字段列表切分成显示行

规则：
1. 拼接符（splice）是前后两个输入字段之间的零宽连接，本身不占格子
2. 字段 拼接 字段 (拼接 字段)* 组成一行，最多 max_row_fields 个字段
3. 装饰字段（大标题/小标题/分割线）永远独占一行，不参与拼接
4. 编辑中出现的游离拼接符（一侧没有可拼接字段）直接忽略，保存时再报错

行信息不缓存：每次排序/移动后都从当前顺序重新计算。

测试要点：
- test_group_rows_chain: 拼接成行
- test_group_rows_decoration_breaks_chain: 装饰字段打断拼接
- test_group_rows_cap: 超过上限时另起一行
- test_group_positions: start/middle/end 标记
"""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from pydantic import BaseModel, Field

from ..config import EngineConfig, get_config
from ..models import FormField, is_decorative, is_splice, is_standalone


class GroupPosition(str, Enum):
    """字段在拼接组中的位置（仅用于编辑画布的边框）"""
    NONE = "none"
    START = "start"
    MIDDLE = "middle"
    END = "end"


class FieldRow(BaseModel):
    """一行（一个或多个字段）"""
    fields: list[FormField] = Field(default_factory=list)
    indices: list[int] = Field(default_factory=list)

    @property
    def is_group(self) -> bool:
        return len(self.fields) > 1

    @property
    def keys(self) -> list[str]:
        return [f.key for f in self.fields]


def _row_limit(max_fields: int | None, config: EngineConfig | None) -> int:
    if max_fields is not None:
        return max_fields
    return (config or get_config()).layout.max_row_fields


def group_rows(
    fields: Sequence[FormField],
    max_fields: int | None = None,
    config: EngineConfig | None = None,
) -> list[FieldRow]:
    """单次从左到右扫描，得到显示行"""
    limit = _row_limit(max_fields, config)
    rows: list[FieldRow] = []
    n = len(fields)
    i = 0

    while i < n:
        current = fields[i]

        if is_splice(current):
            i += 1
            continue

        if is_standalone(current):
            rows.append(FieldRow(fields=[current], indices=[i]))
            i += 1
            continue

        row = FieldRow(fields=[current], indices=[i])
        j = i
        while len(row.fields) < limit:
            splice_index, next_index = j + 1, j + 2
            if next_index >= n or not is_splice(fields[splice_index]):
                break
            candidate = fields[next_index]
            if is_decorative(candidate):
                break
            row.fields.append(candidate)
            row.indices.append(next_index)
            j = next_index

        rows.append(row)
        i = j + 1

    return rows


def group_positions(
    fields: Sequence[FormField],
    max_fields: int | None = None,
    config: EngineConfig | None = None,
) -> list[GroupPosition]:
    """每个下标对应的组位置；组内的拼接符记为 middle"""
    positions = [GroupPosition.NONE] * len(fields)
    for row in group_rows(fields, max_fields=max_fields, config=config):
        if not row.is_group:
            continue
        first, last = row.indices[0], row.indices[-1]
        for idx in range(first + 1, last):
            positions[idx] = GroupPosition.MIDDLE
        positions[first] = GroupPosition.START
        positions[last] = GroupPosition.END
    return positions
