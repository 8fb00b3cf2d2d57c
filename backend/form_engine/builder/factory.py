"""
字段工厂 - 新建字段、切换字段类型

新建字段的默认值来自字段预设（config/presets.py）：
- 标签：类型默认标签，重名时追加 " 2"、" 3"…
- key：由标签生成的 ASCII 标识；标签含非 ASCII 字符时为 "f_" + 8 位随机十六进制
- 姓名默认 firstLast，手机号默认 plain，各自的存储key重名时追加 "_2"、"_3"…
- 单选/下拉/多选默认两个选项
- 分割线与拼接不带标签
"""

from __future__ import annotations

import uuid
from typing import Any, Iterable, Sequence

from ..config import FieldPresets, load_presets
from ..models import (
    FIELD_MODELS,
    FieldKind,
    FormField,
    NameField,
    NameFormat,
    PhoneField,
    PhoneFormat,
    TextCase,
    TextField,
    is_choice,
    storage_keys,
)

_UNLABELED_KINDS = frozenset({FieldKind.DIVIDER, FieldKind.SPLICE})
_DISPLAY_ONLY = frozenset({
    FieldKind.SECTION_TITLE,
    FieldKind.SECTION_SUBTITLE,
    FieldKind.DIVIDER,
    FieldKind.SPLICE,
})


def _taken_keys(fields: Iterable[FormField]) -> set[str]:
    """已占用的 key（字段 key + 存储 key + 声明过的拆分 key）"""
    taken: set[str] = set()
    for f in fields:
        if f.key:
            taken.add(f.key)
        taken.update(storage_keys(f))
        taken.update(getattr(f, "name_keys", None) or [])
        taken.update(getattr(f, "phone_keys", None) or [])
    return taken


def _random_key() -> str:
    return f"f_{uuid.uuid4().hex[:8]}"


def _dedupe(key: str, taken: set[str]) -> str:
    if key not in taken:
        return key
    i = 2
    while f"{key}_{i}" in taken:
        i += 1
    return f"{key}_{i}"


def make_key(label: str, fields: Sequence[FormField] = ()) -> str:
    """由标签生成字段 key（小写 ASCII，空格和 - 换成 _）"""
    text = label.strip().lower().replace(" ", "_").replace("-", "_")
    if not text or not text.isascii():
        key = _random_key()
        taken = _taken_keys(fields)
        while key in taken:
            key = _random_key()
        return key
    return _dedupe(text, _taken_keys(fields))


def unique_label(base: str, fields: Sequence[FormField] = ()) -> str:
    """不与现有字段重名的标签"""
    labels = {f.label for f in fields}
    if base not in labels:
        return base
    i = 2
    while f"{base} {i}" in labels:
        i += 1
    return f"{base} {i}"


def unique_storage_keys(base: Sequence[str], fields: Sequence[FormField] = ()) -> list[str]:
    """为一组存储key去重（key、key_2、key_3…）"""
    taken = _taken_keys(fields)
    result: list[str] = []
    for key in base:
        unique = _dedupe(key, taken)
        taken.add(unique)
        result.append(unique)
    return result


def _as_kind(kind: FieldKind | str) -> FieldKind:
    try:
        return FieldKind(kind)
    except ValueError:
        raise ValueError(f"未知的字段类型: {kind}") from None


def _kind_config(
    kind: FieldKind,
    fields: Sequence[FormField],
    presets: FieldPresets,
    previous: Any = None,
) -> dict[str, Any]:
    """类型相关的默认配置；previous 为切换类型前的字段"""
    config: dict[str, Any] = {}

    if kind in (FieldKind.SELECT, FieldKind.DROPDOWN, FieldKind.MULTI_SELECT):
        old = list(getattr(previous, "options", None) or []) if is_choice(previous) else []
        config["options"] = old or list(presets.default_options)

    elif kind == FieldKind.TEXT:
        old_case = previous.text_case if isinstance(previous, TextField) else None
        config["text_case"] = old_case or TextCase.NONE

    elif kind == FieldKind.NAME:
        fmt = (previous.name_format if isinstance(previous, NameField) else None) or NameFormat.FIRST_LAST
        config["name_format"] = fmt
        config["name_keys"] = unique_storage_keys(presets.name_key_template(fmt.value), fields)

    elif kind == FieldKind.PHONE:
        fmt = (previous.phone_format if isinstance(previous, PhoneField) else None) or PhoneFormat.PLAIN
        config["phone_format"] = fmt
        config["phone_keys"] = unique_storage_keys(presets.phone_key_template(fmt.value), fields)

    elif kind == FieldKind.SECTION_TITLE:
        config["font_size"] = presets.title_font_size

    elif kind == FieldKind.SECTION_SUBTITLE:
        config["font_size"] = presets.subtitle_font_size

    elif kind == FieldKind.DIVIDER:
        config["divider_dashed"] = False
        config["divider_thickness"] = presets.divider_thickness

    return config


def new_field(
    kind: FieldKind | str,
    fields: Sequence[FormField] = (),
    *,
    label: str | None = None,
    key: str | None = None,
    required: bool = False,
    presets: FieldPresets | None = None,
) -> FormField:
    """
    新建一个带默认配置的字段

    Args:
        kind: 字段类型
        fields: 表单中已有的字段（用于标签/key去重）
        label: 预设标签，不给则用类型默认标签
        key: 预设 key，已被占用时改为由标签生成
        required: 是否必填（仅展示字段忽略）
    """
    kind = _as_kind(kind)
    presets = presets or load_presets()

    text = unique_label(label or presets.default_label(kind), fields)
    if key and key not in _taken_keys(fields):
        field_key = key
    else:
        field_key = make_key(text, fields)

    data: dict[str, Any] = {
        "key": field_key,
        "label": "" if kind in _UNLABELED_KINDS else text,
    }
    if kind not in _DISPLAY_ONLY:
        data["required"] = required
    data.update(_kind_config(kind, fields, presets))

    return FIELD_MODELS[kind](**data)


def change_kind(
    field: FormField,
    kind: FieldKind | str,
    fields: Sequence[FormField] = (),
    *,
    label: str | None = None,
    presets: FieldPresets | None = None,
) -> FormField:
    """
    切换字段类型：保留 key/标签/必填/显示条件，重置类型相关配置

    选项在新旧类型都是选择类时沿用；文本大小写、姓名/手机号格式在同类型时沿用。
    """
    kind = _as_kind(kind)
    presets = presets or load_presets()
    others = [f for f in fields if f.key != field.key]

    data: dict[str, Any] = {
        "key": field.key,
        "label": label if label is not None else field.label,
    }
    if kind not in _DISPLAY_ONLY:
        data["required"] = bool(getattr(field, "required", False))
        rule = getattr(field, "visible_when", None)
        if rule is not None:
            data["visible_when"] = rule.model_copy()
    data.update(_kind_config(kind, others, presets, previous=field))

    return FIELD_MODELS[kind](**data)
