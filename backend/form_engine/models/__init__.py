"""
数据模型层 - 定义表单引擎核心数据结构

所有模块通过这些模型交互：
- FormField: 字段类型系统（按 type 区分的联合类型）
- FormSchema/FormRecord: 表单结构与表单记录
- Submission: 提交数据
- SchemaIssue/FieldIssue: 校验问题
"""

from .field import (
    CHOICE_KINDS,
    DECORATION_KINDS,
    FIELD_MODELS,
    TRIGGER_KINDS,
    AddressField,
    CheckboxField,
    DateField,
    DividerField,
    DropdownField,
    EmailField,
    FieldKind,
    FormField,
    MultilineTextField,
    MultiSelectField,
    MultiSelectStyle,
    NameField,
    NameFormat,
    PhoneField,
    PhoneFormat,
    SectionSubtitleField,
    SectionTitleField,
    SelectField,
    SelectStyle,
    SpliceField,
    TextCase,
    TextField,
    TimeField,
    UnknownField,
    VisibilityOp,
    VisibilityRule,
    field_kind,
    is_choice,
    is_decorative,
    is_splice,
    is_standalone,
    is_trigger_eligible,
    parse_field,
    storage_keys,
)
from .issues import FieldIssue, FieldIssueCode, SchemaIssue, SchemaIssueCode
from .schema import BackgroundKind, FormBackground, FormPresentation, FormRecord, FormSchema
from .submission import JSONValue, Submission, normalize_value, parse_tags
from .values import as_bool, as_list, as_text, selection_order

__all__ = [
    "FIELD_MODELS",
    "DECORATION_KINDS",
    "CHOICE_KINDS",
    "TRIGGER_KINDS",
    "FieldKind",
    "FormField",
    "NameField",
    "TextField",
    "MultilineTextField",
    "PhoneField",
    "EmailField",
    "SelectField",
    "DropdownField",
    "MultiSelectField",
    "CheckboxField",
    "DateField",
    "TimeField",
    "AddressField",
    "SectionTitleField",
    "SectionSubtitleField",
    "DividerField",
    "SpliceField",
    "UnknownField",
    "TextCase",
    "NameFormat",
    "PhoneFormat",
    "SelectStyle",
    "MultiSelectStyle",
    "VisibilityOp",
    "VisibilityRule",
    "field_kind",
    "parse_field",
    "storage_keys",
    "is_decorative",
    "is_splice",
    "is_standalone",
    "is_choice",
    "is_trigger_eligible",
    "FormSchema",
    "FormRecord",
    "FormPresentation",
    "FormBackground",
    "BackgroundKind",
    "Submission",
    "JSONValue",
    "normalize_value",
    "parse_tags",
    "as_text",
    "as_bool",
    "as_list",
    "selection_order",
    "SchemaIssue",
    "SchemaIssueCode",
    "FieldIssue",
    "FieldIssueCode",
]
