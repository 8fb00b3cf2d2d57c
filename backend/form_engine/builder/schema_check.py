"""
保存校验 - 表单保存前的结构检查

检查顺序（与编辑器提示顺序一致）：
1. 选择类字段必须有选项
2. 必须包含手机号或邮箱（可关闭）
3. 拼接规则（开头/结尾/相邻/两侧/一行上限）
4. key 唯一（字段 key 与存储 key 不能互相冲突）
5. 姓名拆分 key 1-3 个；带区号手机号恰好 2 个 key
6. 显示条件（触发字段存在、可用、不是自己、触发值有效）
7. 表单名称非空（传入名称时检查）

测试要点：
- test_options_missing: 选项为空
- test_contact_field_missing: 无联系方式字段
- test_splice_rules: 拼接规则逐条报告
- test_duplicate_storage_key: key 冲突
- test_rule_checks: 显示条件配置问题
"""

from __future__ import annotations

from typing import Sequence

from ..config import EngineConfig, get_config
from ..interfaces import SchemaValidationError
from ..layout import check_splices
from ..models import (
    FieldKind,
    FormField,
    FormSchema,
    NameField,
    PhoneField,
    SchemaIssue,
    SchemaIssueCode,
    field_kind,
    is_choice,
    storage_keys,
)
from ..visibility import check_rules

CONTACT_KINDS = frozenset({FieldKind.PHONE, FieldKind.EMAIL})


def _fields_of(schema: FormSchema | Sequence[FormField]) -> Sequence[FormField]:
    return schema.fields if isinstance(schema, FormSchema) else schema


def _check_options(fields: Sequence[FormField]) -> list[SchemaIssue]:
    return [
        SchemaIssue(
            code=SchemaIssueCode.OPTIONS_MISSING,
            message=f'字段 "{f.label}" 需要选项',
            field_key=f.key,
            index=i,
        )
        for i, f in enumerate(fields)
        if is_choice(f) and not [o for o in f.options if o.strip()]
    ]


def _check_contact(fields: Sequence[FormField]) -> list[SchemaIssue]:
    if any(field_kind(f) in CONTACT_KINDS for f in fields):
        return []
    return [SchemaIssue(
        code=SchemaIssueCode.CONTACT_FIELD_MISSING,
        message="表单必须包含“手机号”或“邮箱”字段（至少一个），否则无法保存",
    )]


def _check_keys(fields: Sequence[FormField]) -> list[SchemaIssue]:
    issues: list[SchemaIssue] = []
    owners: dict[str, int] = {}

    for i, f in enumerate(fields):
        keys = list(dict.fromkeys(k for k in [f.key, *storage_keys(f)] if k))
        for k in keys:
            if k in owners and owners[k] != i:
                other = fields[owners[k]]
                issues.append(SchemaIssue(
                    code=SchemaIssueCode.DUPLICATE_STORAGE_KEY,
                    message=f"“{f.label or f.key}”的标识“{k}”与“{other.label or other.key}”重复",
                    field_key=f.key,
                    index=i,
                ))
            else:
                owners[k] = i

    return issues


def _check_split_keys(fields: Sequence[FormField]) -> list[SchemaIssue]:
    issues: list[SchemaIssue] = []

    for i, f in enumerate(fields):
        name = f.label or f.key

        if isinstance(f, NameField) and f.name_keys is not None:
            keys = [k for k in f.name_keys if k.strip()]
            if not 1 <= len(keys) <= 3 or len(set(keys)) != len(keys):
                issues.append(SchemaIssue(
                    code=SchemaIssueCode.NAME_KEYS_INVALID,
                    message=f"“{name}”的姓名拆分需要 1-3 个互不相同的存储标识",
                    field_key=f.key,
                    index=i,
                ))

        if isinstance(f, PhoneField) and f.with_country_code:
            keys = [k for k in (f.phone_keys or []) if k.strip()]
            if len(keys) != 2 or keys[0] == keys[1]:
                issues.append(SchemaIssue(
                    code=SchemaIssueCode.PHONE_KEYS_INVALID,
                    message=f"“{name}”带区号时需要 2 个存储标识（区号、号码）",
                    field_key=f.key,
                    index=i,
                ))

    return issues


def check_schema(
    schema: FormSchema | Sequence[FormField],
    form_name: str | None = None,
    *,
    require_contact: bool | None = None,
    config: EngineConfig | None = None,
) -> list[SchemaIssue]:
    """
    保存前检查表单结构

    Args:
        schema: 表单结构或字段列表
        form_name: 表单名称；None 表示不检查名称
        require_contact: 是否要求联系方式字段；None 时取配置

    Returns:
        问题列表（空列表表示可以保存）
    """
    cfg = config or get_config()
    fields = _fields_of(schema)
    if require_contact is None:
        require_contact = cfg.validation.require_contact_field

    issues = _check_options(fields)
    if require_contact:
        issues += _check_contact(fields)
    issues += check_splices(fields, config=cfg)
    issues += _check_keys(fields)
    issues += _check_split_keys(fields)
    issues += check_rules(fields, cfg)

    if form_name is not None and cfg.validation.require_form_name and not form_name.strip():
        issues.append(SchemaIssue(
            code=SchemaIssueCode.FORM_NAME_MISSING,
            message="请填写表单名称",
        ))

    return issues


def ensure_schema_savable(
    schema: FormSchema | Sequence[FormField],
    form_name: str | None = None,
    *,
    require_contact: bool | None = None,
    config: EngineConfig | None = None,
) -> None:
    """
    保存前检查

    Raises:
        SchemaValidationError: 存在任何结构问题
    """
    issues = check_schema(schema, form_name, require_contact=require_contact, config=config)
    if issues:
        raise SchemaValidationError(issues)
