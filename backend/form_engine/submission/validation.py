"""
提交校验 - 提交前的必填检查与格式检查

必填：
- 只检查当前显示中的必填字段，隐藏字段永不阻止提交
- 复合字段（姓名拆分、带区号手机号）的每个存储key都必须非空
- 勾选必须为 true，多选必须至少选一个

格式：
- 邮箱字段非空时才校验（常用实用规则，不是完整 RFC）
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import Any, Mapping, Sequence

from ..config import EngineConfig, get_config
from ..interfaces import SubmissionValidationError
from ..models import (
    CheckboxField,
    EmailField,
    FieldIssue,
    FieldIssueCode,
    FormField,
    FormSchema,
    MultiSelectField,
    as_bool,
    as_list,
    as_text,
    is_decorative,
    storage_keys,
)
from ..visibility import visible_keys


@lru_cache(maxsize=8)
def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern)


def is_valid_email(value: str, config: EngineConfig | None = None) -> bool:
    """邮箱格式是否有效（空值视为不合法，调用方自行决定是否跳过空值）"""
    pattern = (config or get_config()).validation.email_pattern
    return bool(_compile(pattern).match(value.strip()))


def _fields_of(schema: FormSchema | Sequence[FormField]) -> Sequence[FormField]:
    return schema.fields if isinstance(schema, FormSchema) else schema


def _missing_keys(field: FormField, answers: Mapping[str, Any]) -> list[str]:
    """必填字段中未填的存储key"""
    if isinstance(field, CheckboxField):
        return [] if as_bool(answers.get(field.key)) else [field.key]
    if isinstance(field, MultiSelectField):
        return [] if as_list(answers.get(field.key)) else [field.key]
    return [k for k in storage_keys(field) if not as_text(answers.get(k))]


def check_required(
    schema: FormSchema | Sequence[FormField],
    answers: Mapping[str, Any],
    config: EngineConfig | None = None,
) -> list[FieldIssue]:
    """检查显示中的必填字段"""
    fields = _fields_of(schema)
    visible = visible_keys(fields, answers, config)
    issues: list[FieldIssue] = []

    for field in fields:
        if is_decorative(field) or not field.required or field.key not in visible:
            continue
        missing = _missing_keys(field, answers)
        if missing:
            name = field.label or field.key
            issues.append(FieldIssue(
                code=FieldIssueCode.REQUIRED_MISSING,
                message=f"请填写必填项：{name}",
                field_key=field.key,
                label=field.label,
                storage_key=missing[0],
            ))

    return issues


def check_formats(
    schema: FormSchema | Sequence[FormField],
    answers: Mapping[str, Any],
    config: EngineConfig | None = None,
) -> list[FieldIssue]:
    """检查显示中且已填写的邮箱字段"""
    fields = _fields_of(schema)
    visible = visible_keys(fields, answers, config)
    issues: list[FieldIssue] = []

    for field in fields:
        if not isinstance(field, EmailField) or field.key not in visible:
            continue
        value = as_text(answers.get(field.key))
        if value and not is_valid_email(value, config):
            issues.append(FieldIssue(
                code=FieldIssueCode.EMAIL_INVALID,
                message=f"邮箱格式不正确：{field.label or field.key}",
                field_key=field.key,
                label=field.label,
                storage_key=field.key,
            ))

    return issues


def check_submission(
    schema: FormSchema | Sequence[FormField],
    answers: Mapping[str, Any],
    config: EngineConfig | None = None,
) -> list[FieldIssue]:
    """必填 + 格式，按表单顺序的问题列表"""
    return check_required(schema, answers, config) + check_formats(schema, answers, config)


def ensure_submission_valid(
    schema: FormSchema | Sequence[FormField],
    answers: Mapping[str, Any],
    config: EngineConfig | None = None,
) -> None:
    """
    校验提交

    Raises:
        SubmissionValidationError: 存在必填缺失或格式错误
    """
    issues = check_submission(schema, answers, config)
    if issues:
        raise SubmissionValidationError(issues)
