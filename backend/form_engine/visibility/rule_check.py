"""
显示条件配置检查（编辑/保存时）

运行时遇到无法解析的规则按“显示”处理；这里负责在编辑器里把问题指出来。
"""

from __future__ import annotations

from typing import Sequence

from ..config import EngineConfig, get_config
from ..models import (
    CheckboxField,
    FormField,
    SchemaIssue,
    SchemaIssueCode,
    is_choice,
    is_trigger_eligible,
    storage_keys,
)


def allowed_trigger_values(trigger: FormField, config: EngineConfig | None = None) -> list[str]:
    """触发字段可选的条件值"""
    if isinstance(trigger, CheckboxField):
        display = (config or get_config()).display
        return [display.checkbox_true_text, display.checkbox_false_text]
    if is_choice(trigger):
        return list(trigger.options)
    return []


def default_trigger_value(trigger: FormField | None, config: EngineConfig | None = None) -> str:
    """新建规则时的默认条件值：勾选取“是”，单选/下拉取第一个选项"""
    if trigger is None:
        return ""
    values = allowed_trigger_values(trigger, config)
    return values[0] if values else ""


def trigger_candidates(fields: Sequence[FormField], owner_key: str) -> list[FormField]:
    """可作为 owner 显示条件的字段"""
    return [f for f in fields if f.key != owner_key and is_trigger_eligible(f)]


def check_rules(fields: Sequence[FormField], config: EngineConfig | None = None) -> list[SchemaIssue]:
    """检查所有显示条件"""
    issues: list[SchemaIssue] = []

    for index, f in enumerate(fields):
        rule = getattr(f, "visible_when", None)
        if rule is None:
            continue
        name = f.label or f.key

        if rule.depends_on_key in storage_keys(f) or rule.depends_on_key == f.key:
            issues.append(SchemaIssue(
                code=SchemaIssueCode.RULE_TRIGGER_SELF,
                message=f"“{name}”的显示条件不能依赖自己",
                field_key=f.key,
                index=index,
            ))
            continue

        owner = next((o for o in fields if rule.depends_on_key in storage_keys(o)), None)
        if owner is None:
            issues.append(SchemaIssue(
                code=SchemaIssueCode.RULE_TRIGGER_MISSING,
                message=f"“{name}”的显示条件引用的字段不存在：{rule.depends_on_key}",
                field_key=f.key,
                index=index,
            ))
            continue

        if not is_trigger_eligible(owner):
            issues.append(SchemaIssue(
                code=SchemaIssueCode.RULE_TRIGGER_NOT_ELIGIBLE,
                message=f"“{name}”的显示条件只能使用 勾选 / 单选 / 下拉 字段",
                field_key=f.key,
                index=index,
            ))
            continue

        allowed = allowed_trigger_values(owner, config)
        if rule.value not in allowed:
            issues.append(SchemaIssue(
                code=SchemaIssueCode.RULE_VALUE_INVALID,
                message=f"“{name}”的触发值“{rule.value}”不是“{owner.label or owner.key}”的可选值",
                field_key=f.key,
                index=index,
            ))

    return issues
