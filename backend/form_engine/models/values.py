"""
答案值读取 - 把现场答案/存储值按字段类型读成 文本/布尔/列表

现场答案可能来自界面（set、数字等），存储值来自 JSON；
这里统一读取，读不出来时按空值处理，不抛错。
"""

from __future__ import annotations

from typing import Any, Iterable

TRUTHY_TEXTS = frozenset({"是", "true", "1", "yes", "y"})


def as_text(value: Any) -> str:
    """读成去除首尾空白的字符串；布尔/列表等不可读值返回空串"""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def as_bool(value: Any) -> bool:
    """读成勾选状态（兼容旧数据里的 "是"/"true"）"""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUTHY_TEXTS
    return False


def as_list(value: Any) -> list[str]:
    """读成多选列表：去空白、去空项、去重；集合按排序输出"""
    if isinstance(value, str):
        items = [value]
    elif isinstance(value, (set, frozenset)):
        items = sorted(v for v in value if isinstance(v, str))
    elif isinstance(value, (list, tuple)):
        items = [v for v in value if isinstance(v, str)]
    else:
        return []
    stripped = (v.strip() for v in items)
    return list(dict.fromkeys(v for v in stripped if v))


def selection_order(options: Iterable[str], values: Iterable[str]) -> list[str]:
    """多选值排序：按表单选项顺序，选项里没有的旧值按字母序排在后面"""
    rank = {o: i for i, o in enumerate(options)}
    chosen = list(dict.fromkeys(values))
    known = sorted((v for v in chosen if v in rank), key=rank.__getitem__)
    extra = sorted(v for v in chosen if v not in rank)
    return known + extra
