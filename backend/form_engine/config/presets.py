"""
字段预设 - 新建字段时使用的默认标签、默认选项、存储key模板

可选从 YAML 覆盖（engine_options.presets_path），未配置时用内置默认值。

使用方式：
    presets = load_presets()
    presets.default_label("phone")        # "手机号"
    presets.name_key_template("firstLast") # ["first_name", "last_name"]
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from ..models import FieldKind
from .runtime_config import get_config

_KIND_TITLES = {
    "name": "姓名",
    "text": "文本",
    "multilineText": "多行文本",
    "phone": "手机号",
    "email": "邮箱",
    "select": "单选",
    "dropdown": "下拉",
    "multiSelect": "多选",
    "checkbox": "勾选",
    "date": "日期",
    "time": "时间",
    "address": "地址",
    "sectionTitle": "大标题",
    "sectionSubtitle": "小标题",
    "divider": "分割线",
    "splice": "拼接",
}


class FieldPresets(BaseModel):
    """字段预设"""

    kind_titles: dict[str, str] = Field(default_factory=lambda: dict(_KIND_TITLES))
    default_labels: dict[str, str] = Field(
        default_factory=lambda: {**_KIND_TITLES, "dropdown": "下拉选框"}
    )
    default_options: list[str] = Field(default_factory=lambda: ["选项 1", "选项 2"])
    name_keys: dict[str, list[str]] = Field(default_factory=lambda: {
        "fullName": ["full_name"],
        "firstLast": ["first_name", "last_name"],
        "firstMiddleLast": ["first_name", "middle_name", "last_name"],
    })
    phone_keys: dict[str, list[str]] = Field(default_factory=lambda: {
        "plain": ["phone"],
        "withCountryCode": ["country_code", "phone_number"],
    })
    title_font_size: float = 22
    subtitle_font_size: float = 16
    divider_thickness: float = 1

    def kind_title(self, kind: FieldKind | str) -> str:
        value = kind.value if isinstance(kind, FieldKind) else kind
        return self.kind_titles.get(value, value)

    def default_label(self, kind: FieldKind | str) -> str:
        value = kind.value if isinstance(kind, FieldKind) else kind
        return self.default_labels.get(value, self.kind_title(value))

    def name_key_template(self, name_format: str) -> list[str]:
        return list(self.name_keys.get(name_format, ["full_name"]))

    def phone_key_template(self, phone_format: str) -> list[str]:
        return list(self.phone_keys.get(phone_format, ["phone"]))


class PresetLoader:
    """预设加载器（缓存）"""

    @classmethod
    @lru_cache(maxsize=4)
    def load(cls, presets_path: str | Path | None = None) -> FieldPresets:
        """加载并缓存预设；未给路径时返回内置默认值"""
        if presets_path is None:
            return FieldPresets()

        path = Path(presets_path)
        if not path.exists():
            raise FileNotFoundError(f"字段预设文件不存在: {path}")

        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        return FieldPresets(**data.get("field_presets", data))

    @classmethod
    def reload(cls, presets_path: str | Path | None = None) -> FieldPresets:
        """强制重新加载（清除缓存）"""
        cls.load.cache_clear()
        return cls.load(presets_path)


def load_presets(presets_path: str | Path | None = None) -> FieldPresets:
    """加载字段预设（默认取运行期配置中的 presets_path）"""
    if presets_path is None:
        presets_path = get_config().presets_path
    return PresetLoader.load(presets_path)
