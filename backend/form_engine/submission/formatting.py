"""
答案格式化 - 提交数据 → (标签, 显示值) 列表

详情页、CSV导出、编辑页摘要都走这一个函数，保证同一条提交处处显示一致。

规则（按当前表单字段顺序，不按提交数据的key顺序）：
- 姓名：非空部分用空格连接，全空则不输出
- 手机号（带区号）：[区号, 号码] 非空部分用空格连接；不带区号：原值
- 多选：按选项顺序用“、”连接，空则不输出
- 勾选：仅为 true 时输出“是”
- 其余：去空白后非空才输出
- 表单已改版时，提交里多出来的key忽略，缺少的字段不输出，不抛错

测试要点：
- test_format_name_parts: 姓名拼接
- test_format_phone_with_country_code: 区号拼接
- test_format_multi_select: 多选连接
- test_format_checkbox: 勾选只在 true 时输出
- test_format_schema_drift: 表单改版后不抛错
"""

from __future__ import annotations

from typing import Any, Mapping, NamedTuple, Sequence

from ..config import EngineConfig, get_config
from ..models import (
    CheckboxField,
    FormField,
    FormSchema,
    MultiSelectField,
    NameField,
    PhoneField,
    as_bool,
    as_list,
    as_text,
    is_decorative,
    selection_order,
    storage_keys,
)


class AnswerPair(NamedTuple):
    """一条显示用的 (标签, 值)"""
    label: str
    value: str


def format_field(field: FormField, data: Mapping[str, Any], config: EngineConfig | None = None) -> str:
    """单个字段的显示值；空串表示不输出"""
    if is_decorative(field):
        return ""

    display = (config or get_config()).display

    if isinstance(field, NameField):
        parts = [as_text(data.get(k)) for k in storage_keys(field)]
        return display.name_separator.join(p for p in parts if p)

    if isinstance(field, PhoneField):
        keys = storage_keys(field)
        if len(keys) >= 2:
            parts = [as_text(data.get(k)) for k in keys[:2]]
            return display.phone_separator.join(p for p in parts if p)
        return as_text(data.get(field.key))

    if isinstance(field, MultiSelectField):
        return display.multi_select_separator.join(selection_order(field.options, as_list(data.get(field.key))))

    if isinstance(field, CheckboxField):
        return display.checkbox_true_text if as_bool(data.get(field.key)) else ""

    return as_text(data.get(field.key))


def format_answers(
    schema: FormSchema | Sequence[FormField],
    data: Mapping[str, Any],
    config: EngineConfig | None = None,
) -> list[AnswerPair]:
    """按表单顺序输出非空的 (标签, 显示值)"""
    fields = schema.fields if isinstance(schema, FormSchema) else schema
    pairs: list[AnswerPair] = []
    for field in fields:
        value = format_field(field, data, config)
        if value:
            pairs.append(AnswerPair(field.label, value))
    return pairs
