"""
显示条件求值 - 根据当前答案决定字段是否显示

规则：
- 无条件：始终显示
- equals: answers[dependsOnKey] 的规范字符串 == value 时显示
- notEquals: 不相等时显示
- 触发字段的规范字符串：勾选 → "是"/"否"，单选/下拉 → 选中的选项文本
- 只看一层：触发字段自身被隐藏时，仍按它当前存的值求值（不级联隐藏）
- 规则无法解析（触发字段不存在/类型不支持）时按“显示”处理，不抛错
- 隐藏且 clearOnHide=True 的字段不保留答案：由显示变为隐藏时立即清掉，
  隐藏期间写入（或从旧提交带入）的值也一并清掉

测试要点：
- test_no_rule_visible: 无条件显示
- test_checkbox_trigger: 勾选触发
- test_clear_on_hide: 隐藏时清空
- test_unresolvable_rule_visible: 无法解析的规则按显示处理
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

from pydantic import BaseModel, Field

from ..config import EngineConfig, get_config
from ..models import (
    CheckboxField,
    FormField,
    FormSchema,
    VisibilityOp,
    as_bool,
    as_text,
    is_trigger_eligible,
    storage_keys,
)


class VisibilityResult(BaseModel):
    """一次求值的结果"""
    visible: set[str] = Field(default_factory=set)
    answers: dict[str, Any] = Field(default_factory=dict)
    cleared: list[str] = Field(default_factory=list)


def _fields_of(schema: FormSchema | Sequence[FormField]) -> Sequence[FormField]:
    return schema.fields if isinstance(schema, FormSchema) else schema


def find_trigger(fields: Iterable[FormField], depends_on_key: str, owner_key: str | None = None) -> FormField | None:
    """查找可用的触发字段（勾选/单选/下拉，且不是自己）"""
    for f in fields:
        if f.key == owner_key:
            continue
        if is_trigger_eligible(f) and depends_on_key in storage_keys(f):
            return f
    return None


def trigger_value(trigger: FormField, answers: Mapping[str, Any], config: EngineConfig | None = None) -> str:
    """触发字段当前值的规范字符串"""
    raw = answers.get(trigger.key)
    if isinstance(trigger, CheckboxField):
        display = (config or get_config()).display
        return display.checkbox_true_text if as_bool(raw) else display.checkbox_false_text
    return as_text(raw)


def is_visible(
    field: FormField,
    answers: Mapping[str, Any],
    fields: FormSchema | Sequence[FormField],
    config: EngineConfig | None = None,
) -> bool:
    """字段是否显示"""
    rule = getattr(field, "visible_when", None)
    if rule is None:
        return True

    trigger = find_trigger(_fields_of(fields), rule.depends_on_key, owner_key=field.key)
    if trigger is None:
        return True

    matched = trigger_value(trigger, answers, config) == rule.value
    if rule.op == VisibilityOp.NOT_EQUALS:
        return not matched
    return matched


def visible_keys(
    fields: FormSchema | Sequence[FormField],
    answers: Mapping[str, Any],
    config: EngineConfig | None = None,
) -> set[str]:
    """当前显示的字段 key 集合"""
    items = _fields_of(fields)
    return {f.key for f in items if is_visible(f, answers, items, config)}


def apply_visibility(
    fields: FormSchema | Sequence[FormField],
    answers: Mapping[str, Any],
    previously_visible: set[str] | None = None,
    config: EngineConfig | None = None,
    clear_hidden: bool = True,
) -> VisibilityResult:
    """
    重新求值并处理“隐藏时清空”

    Args:
        fields: 表单结构或字段列表
        answers: 当前答案
        clear_hidden: 是否清掉隐藏字段的答案；False 只求值

    Returns:
        新的显示集合、处理后的答案、被清掉的存储key
    """
    items = _fields_of(fields)
    visible = visible_keys(items, answers, config)
    cleaned = dict(answers)
    cleared: list[str] = []

    if clear_hidden:
        for f in items:
            rule = getattr(f, "visible_when", None)
            if rule is None or not rule.clear_on_hide:
                continue
            if f.key not in visible:
                for k in storage_keys(f):
                    if k in cleaned:
                        cleaned.pop(k)
                        cleared.append(k)

    return VisibilityResult(visible=visible, answers=cleaned, cleared=cleared)
