"""
提交数据投影 - 现场答案 ↔ 提交 JSON

序列化（提交时）：
- 只处理输入字段，装饰/拼接字段不写任何key
- 显示中的字段按类型写入：勾选 → bool，多选 → 按选项顺序排列的字符串数组，其余 → 去空白的字符串
- 空字符串/空数组不写入（缺失即等价于空）
- 隐藏字段不写入；但 clearOnHide=False 保留下来的旧值原样带上

反序列化（编辑回填）：
- 只取当前表单声明的存储key，多余key丢弃
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence

from ..config import EngineConfig
from ..models import (
    CheckboxField,
    FormField,
    FormSchema,
    JSONValue,
    MultiSelectField,
    as_bool,
    as_list,
    as_text,
    is_decorative,
    normalize_value,
    selection_order,
    storage_keys,
)
from ..visibility import visible_keys


def _fields_of(schema: FormSchema | Sequence[FormField]) -> Sequence[FormField]:
    return schema.fields if isinstance(schema, FormSchema) else schema


def coerce_field(field: FormField, answers: Mapping[str, Any]) -> dict[str, JSONValue]:
    """按字段类型把答案转成提交值"""
    if isinstance(field, CheckboxField):
        return {field.key: as_bool(answers.get(field.key))}

    if isinstance(field, MultiSelectField):
        selected = selection_order(field.options, as_list(answers.get(field.key)))
        return {field.key: selected} if selected else {}

    out: dict[str, JSONValue] = {}
    for k in storage_keys(field):
        text = as_text(answers.get(k))
        if text:
            out[k] = text
    return out


def serialize_answers(
    schema: FormSchema | Sequence[FormField],
    answers: Mapping[str, Any],
    config: EngineConfig | None = None,
) -> dict[str, JSONValue]:
    """现场答案 → 提交 data"""
    fields = _fields_of(schema)
    visible = visible_keys(fields, answers, config)
    payload: dict[str, JSONValue] = {}

    for field in fields:
        if is_decorative(field):
            continue

        if field.key in visible:
            payload.update(coerce_field(field, answers))
            continue

        rule = field.visible_when
        if rule is not None and not rule.clear_on_hide:
            for k in storage_keys(field):
                if k in answers:
                    value = normalize_value(answers[k])
                    if value is not None:
                        payload[k] = value

    return payload


def seed_answers(
    schema: FormSchema | Sequence[FormField],
    data: Mapping[str, Any],
) -> dict[str, Any]:
    """提交 data → 现场答案（编辑时回填）"""
    answers: dict[str, Any] = {}
    for field in _fields_of(schema):
        if isinstance(field, CheckboxField):
            if field.key in data:
                answers[field.key] = as_bool(data[field.key])
        elif isinstance(field, MultiSelectField):
            if field.key in data:
                answers[field.key] = as_list(data[field.key])
        else:
            for k in storage_keys(field):
                if k in data:
                    answers[k] = as_text(data[k])
    return answers
