"""
校验问题模型

两类问题：
- SchemaIssue: 保存表单时发现的结构问题（可由编辑者修复）
- FieldIssue: 提交时发现的填写问题（必填缺失、邮箱格式）

每条问题带稳定的 code 和面向用户的中文 message。
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class SchemaIssueCode(str, Enum):
    """表单结构问题"""
    FORM_NAME_MISSING = "form_name_missing"
    CONTACT_FIELD_MISSING = "contact_field_missing"
    OPTIONS_MISSING = "options_missing"
    SPLICE_AT_START = "splice_at_start"
    SPLICE_AT_END = "splice_at_end"
    SPLICE_ADJACENT = "splice_adjacent"
    SPLICE_DANGLING = "splice_dangling"
    CHAIN_TOO_LONG = "chain_too_long"
    DUPLICATE_STORAGE_KEY = "duplicate_storage_key"
    NAME_KEYS_INVALID = "name_keys_invalid"
    PHONE_KEYS_INVALID = "phone_keys_invalid"
    RULE_TRIGGER_MISSING = "rule_trigger_missing"
    RULE_TRIGGER_SELF = "rule_trigger_self"
    RULE_TRIGGER_NOT_ELIGIBLE = "rule_trigger_not_eligible"
    RULE_VALUE_INVALID = "rule_value_invalid"


class FieldIssueCode(str, Enum):
    """填写问题"""
    REQUIRED_MISSING = "required_missing"
    EMAIL_INVALID = "email_invalid"


class SchemaIssue(BaseModel):
    """表单结构问题"""
    code: SchemaIssueCode
    message: str
    field_key: str | None = None
    index: int | None = None


class FieldIssue(BaseModel):
    """填写问题（定位到字段，必要时到具体存储 key）"""
    code: FieldIssueCode
    message: str
    field_key: str
    label: str = ""
    storage_key: str | None = None
