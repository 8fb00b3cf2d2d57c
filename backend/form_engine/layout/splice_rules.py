"""
拼接规则校验（保存时）

逐条报告违反的规则，带下标，便于界面提示如何修改：
- 拼接不能在开头/结尾
- 不允许两个拼接相邻
- 拼接两侧必须是可填写字段（不能挨着标题/分割线）
- 一行最多 max_row_fields 个字段
"""

from __future__ import annotations

from typing import Sequence

from ..config import EngineConfig, get_config
from ..models import FormField, SchemaIssue, SchemaIssueCode, is_decorative, is_splice, is_standalone


def _is_real(field: FormField) -> bool:
    return not is_decorative(field)


def check_splices(
    fields: Sequence[FormField],
    max_fields: int | None = None,
    config: EngineConfig | None = None,
) -> list[SchemaIssue]:
    """返回所有拼接相关问题（空列表表示通过）"""
    limit = max_fields if max_fields is not None else (config or get_config()).layout.max_row_fields
    issues: list[SchemaIssue] = []
    n = len(fields)
    chain = 0

    for i, f in enumerate(fields):
        if is_splice(f):
            if i == 0:
                issues.append(SchemaIssue(
                    code=SchemaIssueCode.SPLICE_AT_START,
                    message="拼接不能放在表单的开头",
                    field_key=f.key,
                    index=i,
                ))
            if i == n - 1:
                issues.append(SchemaIssue(
                    code=SchemaIssueCode.SPLICE_AT_END,
                    message="拼接不能放在表单的结尾",
                    field_key=f.key,
                    index=i,
                ))
            if i > 0 and is_splice(fields[i - 1]):
                issues.append(SchemaIssue(
                    code=SchemaIssueCode.SPLICE_ADJACENT,
                    message=f"不允许两个拼接挨在一起（第 {i} 项和第 {i + 1} 项）",
                    field_key=f.key,
                    index=i,
                ))
            elif (i > 0 and is_standalone(fields[i - 1])) or (i < n - 1 and is_standalone(fields[i + 1])):
                issues.append(SchemaIssue(
                    code=SchemaIssueCode.SPLICE_DANGLING,
                    message=f"第 {i + 1} 项拼接两侧必须是可填写的字段，不能连接标题或分割线",
                    field_key=f.key,
                    index=i,
                ))
            continue

        if not _is_real(f):
            chain = 0
            continue

        if i >= 2 and is_splice(fields[i - 1]) and _is_real(fields[i - 2]):
            chain += 1
        else:
            chain = 1

        if chain == limit + 1:
            issues.append(SchemaIssue(
                code=SchemaIssueCode.CHAIN_TOO_LONG,
                message=f"拼接最大支持一行 {limit} 个字段（{_chain_hint(limit)}），“{f.label or f.key}”超出",
                field_key=f.key,
                index=i,
            ))

    return issues


def _chain_hint(limit: int) -> str:
    return " 拼接 ".join(["字段"] * limit)
