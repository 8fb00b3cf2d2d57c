"""
布局模块 - 字段成行与拼接规则

子模块：
- grouping: 成行算法（编辑时宽松，忽略游离拼接）
- splice_rules: 拼接规则校验（保存时严格）
"""

from .grouping import FieldRow, GroupPosition, group_positions, group_rows
from .splice_rules import check_splices

__all__ = [
    "FieldRow",
    "GroupPosition",
    "group_rows",
    "group_positions",
    "check_splices",
]
