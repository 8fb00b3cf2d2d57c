"""
字段模型 - 表单字段的类型系统

每种字段类型对应一个模型，按 JSON 中的 type 区分（带标签的联合类型）：
- 输入字段：name/text/multilineText/phone/email/select/dropdown/multiSelect/checkbox/date/time/address
- 装饰字段：sectionTitle/sectionSubtitle/divider（仅展示）
- 拼接符：splice（把前后两个输入字段拼到同一行）

无法识别的 type 按仅展示字段加载，写回时保留原始内容。

对外提供两个派生函数：
- storage_keys(field): 字段在提交数据中占用的 key
- is_decorative(field): 是否为仅展示字段（含拼接符）
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator
from pydantic.alias_generators import to_camel


class FieldKind(str, Enum):
    """字段类型"""
    NAME = "name"
    TEXT = "text"
    MULTILINE_TEXT = "multilineText"
    PHONE = "phone"
    EMAIL = "email"
    SELECT = "select"
    DROPDOWN = "dropdown"
    MULTI_SELECT = "multiSelect"
    CHECKBOX = "checkbox"
    DATE = "date"
    TIME = "time"
    ADDRESS = "address"
    SECTION_TITLE = "sectionTitle"
    SECTION_SUBTITLE = "sectionSubtitle"
    DIVIDER = "divider"
    SPLICE = "splice"


class TextCase(str, Enum):
    """文本大小写（录入时转换）"""
    NONE = "none"
    UPPER = "upper"
    LOWER = "lower"


class NameFormat(str, Enum):
    """姓名格式"""
    FULL_NAME = "fullName"
    FIRST_LAST = "firstLast"
    FIRST_MIDDLE_LAST = "firstMiddleLast"


class PhoneFormat(str, Enum):
    """手机号格式"""
    PLAIN = "plain"
    WITH_COUNTRY_CODE = "withCountryCode"


class SelectStyle(str, Enum):
    DROPDOWN = "dropdown"
    DOT = "dot"


class MultiSelectStyle(str, Enum):
    CHIPS = "chips"
    LIST = "list"


class VisibilityOp(str, Enum):
    """显示条件运算符"""
    EQUALS = "equals"
    NOT_EQUALS = "notEquals"


class VisibilityRule(BaseModel):
    """显示条件：dependsOnKey 对应字段的值 与 value 比较"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    depends_on_key: str
    op: VisibilityOp = VisibilityOp.EQUALS
    value: str = ""
    clear_on_hide: bool = True

    def model_post_init(self, context: Any) -> None:
        # 规则的四个键总是写回
        self.__pydantic_fields_set__.update(("op", "value", "clear_on_hide"))


class _FieldModel(BaseModel):
    """字段公共部分"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    key: str
    label: str = ""

    def model_post_init(self, context: Any) -> None:
        # key/label/type/required 必须写回，即使构造时走的是默认值
        self.__pydantic_fields_set__.update(("label", "kind", "required"))


class _InputField(_FieldModel):
    """输入字段：可必填、可挂显示条件"""
    required: bool = False
    visible_when: VisibilityRule | None = None


class _DisplayField(_FieldModel):
    """仅展示字段：永不必填"""
    required: bool = False

    @field_validator("required")
    @classmethod
    def _never_required(cls, v: bool) -> bool:
        return False


# ============================================================================
# 输入字段
# ============================================================================

class NameField(_InputField):
    """姓名（可拆成 1-3 个存储 key）"""
    kind: Literal["name"] = Field("name", alias="type")
    name_format: NameFormat | None = None
    name_keys: list[str] | None = None


class TextField(_InputField):
    kind: Literal["text"] = Field("text", alias="type")
    text_case: TextCase | None = None


class MultilineTextField(_InputField):
    kind: Literal["multilineText"] = Field("multilineText", alias="type")


class PhoneField(_InputField):
    """手机号（带区号时拆成 [区号key, 号码key]）"""
    kind: Literal["phone"] = Field("phone", alias="type")
    phone_format: PhoneFormat | None = None
    phone_keys: list[str] | None = None

    @property
    def with_country_code(self) -> bool:
        return self.phone_format == PhoneFormat.WITH_COUNTRY_CODE


class EmailField(_InputField):
    kind: Literal["email"] = Field("email", alias="type")


class SelectField(_InputField):
    kind: Literal["select"] = Field("select", alias="type")
    options: list[str] = Field(default_factory=list)
    select_style: SelectStyle | None = None


class DropdownField(_InputField):
    kind: Literal["dropdown"] = Field("dropdown", alias="type")
    options: list[str] = Field(default_factory=list)


class MultiSelectField(_InputField):
    kind: Literal["multiSelect"] = Field("multiSelect", alias="type")
    options: list[str] = Field(default_factory=list)
    multi_select_style: MultiSelectStyle | None = None


class CheckboxField(_InputField):
    kind: Literal["checkbox"] = Field("checkbox", alias="type")


class DateField(_InputField):
    kind: Literal["date"] = Field("date", alias="type")


class TimeField(_InputField):
    kind: Literal["time"] = Field("time", alias="type")


class AddressField(_InputField):
    kind: Literal["address"] = Field("address", alias="type")


# ============================================================================
# 仅展示字段
# ============================================================================

class SectionTitleField(_DisplayField):
    """大标题"""
    kind: Literal["sectionTitle"] = Field("sectionTitle", alias="type")
    font_size: float | None = None
    color_key: str | None = Field(None, alias="decorationColorKey")


class SectionSubtitleField(_DisplayField):
    """小标题"""
    kind: Literal["sectionSubtitle"] = Field("sectionSubtitle", alias="type")
    font_size: float | None = None
    color_key: str | None = Field(None, alias="decorationColorKey")


class DividerField(_DisplayField):
    """分割线"""
    kind: Literal["divider"] = Field("divider", alias="type")
    divider_dashed: bool | None = None
    divider_thickness: float | None = None
    color_key: str | None = Field(None, alias="decorationColorKey")


class SpliceField(_DisplayField):
    """拼接符：无内容，仅连接前后两个字段"""
    kind: Literal["splice"] = Field("splice", alias="type")


class UnknownField(BaseModel):
    """未识别类型（新版客户端添加的展示元素），原样保留"""
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    kind: str = Field(alias="type")
    key: str = ""
    label: str = ""
    required: bool = False

    @field_validator("required")
    @classmethod
    def _never_required(cls, v: bool) -> bool:
        return False


_KNOWN_KINDS = {k.value for k in FieldKind}


def _field_tag(value: Any) -> str:
    """联合类型判别：已知 type 走对应模型，其余走 UnknownField"""
    if isinstance(value, dict):
        kind = value.get("type", value.get("kind"))
    else:
        kind = getattr(value, "kind", None)
    if isinstance(kind, Enum):
        kind = kind.value
    return kind if kind in _KNOWN_KINDS else "unknown"


FormField = Annotated[
    Union[
        Annotated[NameField, Tag("name")],
        Annotated[TextField, Tag("text")],
        Annotated[MultilineTextField, Tag("multilineText")],
        Annotated[PhoneField, Tag("phone")],
        Annotated[EmailField, Tag("email")],
        Annotated[SelectField, Tag("select")],
        Annotated[DropdownField, Tag("dropdown")],
        Annotated[MultiSelectField, Tag("multiSelect")],
        Annotated[CheckboxField, Tag("checkbox")],
        Annotated[DateField, Tag("date")],
        Annotated[TimeField, Tag("time")],
        Annotated[AddressField, Tag("address")],
        Annotated[SectionTitleField, Tag("sectionTitle")],
        Annotated[SectionSubtitleField, Tag("sectionSubtitle")],
        Annotated[DividerField, Tag("divider")],
        Annotated[SpliceField, Tag("splice")],
        Annotated[UnknownField, Tag("unknown")],
    ],
    Discriminator(_field_tag),
]

FIELD_MODELS: dict[FieldKind, type[BaseModel]] = {
    FieldKind.NAME: NameField,
    FieldKind.TEXT: TextField,
    FieldKind.MULTILINE_TEXT: MultilineTextField,
    FieldKind.PHONE: PhoneField,
    FieldKind.EMAIL: EmailField,
    FieldKind.SELECT: SelectField,
    FieldKind.DROPDOWN: DropdownField,
    FieldKind.MULTI_SELECT: MultiSelectField,
    FieldKind.CHECKBOX: CheckboxField,
    FieldKind.DATE: DateField,
    FieldKind.TIME: TimeField,
    FieldKind.ADDRESS: AddressField,
    FieldKind.SECTION_TITLE: SectionTitleField,
    FieldKind.SECTION_SUBTITLE: SectionSubtitleField,
    FieldKind.DIVIDER: DividerField,
    FieldKind.SPLICE: SpliceField,
}

DECORATION_KINDS = frozenset({
    FieldKind.SECTION_TITLE,
    FieldKind.SECTION_SUBTITLE,
    FieldKind.DIVIDER,
})
CHOICE_KINDS = frozenset({FieldKind.SELECT, FieldKind.DROPDOWN, FieldKind.MULTI_SELECT})
TRIGGER_KINDS = frozenset({FieldKind.CHECKBOX, FieldKind.SELECT, FieldKind.DROPDOWN})

ChoiceField = Union[SelectField, DropdownField, MultiSelectField]


def field_kind(field: Any) -> FieldKind | None:
    """字段类型；未识别类型返回 None"""
    kind = getattr(field, "kind", None)
    if kind in _KNOWN_KINDS:
        return FieldKind(kind)
    return None


def parse_field(data: dict[str, Any]) -> Any:
    """从存储的 JSON 解析单个字段"""
    kind = _field_tag(data)
    if kind == "unknown":
        return UnknownField.model_validate(data)
    return FIELD_MODELS[FieldKind(kind)].model_validate(data)


def is_splice(field: Any) -> bool:
    return field_kind(field) == FieldKind.SPLICE


def is_decorative(field: Any) -> bool:
    """仅展示字段（装饰、拼接、未识别类型）：不读写提交数据，不可必填"""
    kind = field_kind(field)
    return kind is None or kind in DECORATION_KINDS or kind == FieldKind.SPLICE


def is_standalone(field: Any) -> bool:
    """独占一行的展示字段（装饰/未识别），不参与拼接"""
    return is_decorative(field) and not is_splice(field)


def is_choice(field: Any) -> bool:
    return field_kind(field) in CHOICE_KINDS


def is_trigger_eligible(field: Any) -> bool:
    """可作为显示条件的触发字段：勾选/单选/下拉"""
    return field_kind(field) in TRIGGER_KINDS


def storage_keys(field: Any) -> list[str]:
    """字段在提交数据中占用的 key（装饰/拼接字段为空列表）"""
    if is_decorative(field):
        return []

    if isinstance(field, NameField):
        keys = [k for k in (field.name_keys or []) if k]
        return keys or [field.key]

    if isinstance(field, PhoneField):
        if field.with_country_code and field.phone_keys and len(field.phone_keys) >= 2:
            return list(field.phone_keys[:2])
        return [field.key]

    return [field.key]
