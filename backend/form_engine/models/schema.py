"""
表单结构模型 - FormSchema / FormRecord

FormSchema 是存储层原样保存的表单结构：
- fields 的顺序即渲染顺序（成行前）
- presentation 仅影响展示（背景等），未知键原样保留
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .field import FormField, is_decorative, storage_keys


class BackgroundKind(str, Enum):
    """背景来源"""
    BUILT_IN = "builtIn"
    CUSTOM = "custom"


class FormBackground(BaseModel):
    """表单背景（图片本身由存储层管理）"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    kind: BackgroundKind
    built_in_key: str | None = None
    storage_path: str | None = None
    opacity: float = 1.0


class FormPresentation(BaseModel):
    """展示配置"""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    background: FormBackground | None = None


class FormSchema(BaseModel):
    """表单结构"""
    version: int = 1
    fields: list[FormField] = Field(default_factory=list)
    presentation: FormPresentation | None = None

    @classmethod
    def from_storage(cls, data: dict[str, Any]) -> FormSchema:
        """从存储的 JSON 加载"""
        return cls.model_validate(data)

    def to_storage(self) -> dict[str, Any]:
        """写回存储的 JSON（只写出加载/设置过的键）"""
        data = self.model_dump(mode="json", by_alias=True, exclude_unset=True)
        data["version"] = self.version
        data.setdefault("fields", [])
        return data

    def get_field(self, key: str) -> FormField | None:
        """按字段 key 查找"""
        for f in self.fields:
            if f.key == key:
                return f
        return None

    def input_fields(self) -> list[FormField]:
        """读写提交数据的字段（按顺序）"""
        return [f for f in self.fields if not is_decorative(f)]

    def all_storage_keys(self) -> list[str]:
        """所有存储 key（按字段顺序）"""
        keys: list[str] = []
        for f in self.fields:
            keys.extend(storage_keys(f))
        return keys

    def owner_of(self, storage_key: str) -> FormField | None:
        """存储 key 所属的字段"""
        for f in self.fields:
            if storage_key in storage_keys(f):
                return f
        return None


class FormRecord(BaseModel):
    """表单记录（存储层的一行）"""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    owner_id: str | None = None
    name: str
    form_schema: FormSchema = Field(default_factory=FormSchema, alias="schema")
    is_archived: bool = False
    created_at: datetime | None = None
