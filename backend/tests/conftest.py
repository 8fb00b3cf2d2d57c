"""
pytest 配置与公共 fixtures

使用方式：
    def test_something(scenario_schema, store):
        session = FillSession(scenario_schema)
        ...
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from form_engine.config import EngineConfig, FieldPresets
from form_engine.models import (
    CheckboxField,
    DividerField,
    EmailField,
    FormField,
    FormSchema,
    MultiSelectField,
    NameField,
    PhoneField,
    SectionTitleField,
    SelectField,
    SpliceField,
    TextField,
    VisibilityRule,
)
from form_engine.pipeline import InMemoryFormStore


# ============================================================================
# 配置 Fixtures
# ============================================================================

@pytest.fixture
def engine_config() -> EngineConfig:
    """默认运行期配置"""
    return EngineConfig()


@pytest.fixture
def presets() -> FieldPresets:
    """内置字段预设"""
    return FieldPresets()


# ============================================================================
# 表单结构 Fixtures
# ============================================================================

@pytest.fixture
def scenario_schema() -> FormSchema:
    """访客登记：姓名 + 手机号 + 邮箱（选填）"""
    return FormSchema(fields=[
        NameField(key="full_name", label="姓名", required=True),
        PhoneField(key="phone", label="手机号", required=True),
        EmailField(key="email", label="邮箱", required=False),
    ])


@pytest.fixture
def visibility_schema() -> FormSchema:
    """勾选“同意”后显示必填的“补充说明”"""
    return FormSchema(fields=[
        PhoneField(key="phone", label="手机号"),
        CheckboxField(key="agree", label="同意联系"),
        TextField(
            key="details",
            label="补充说明",
            required=True,
            visible_when=VisibilityRule(depends_on_key="agree", value="是"),
        ),
    ])


@pytest.fixture
def rich_schema() -> FormSchema:
    """包含各类字段的表单"""
    return FormSchema(fields=[
        SectionTitleField(key="title", label="访客登记", font_size=22),
        NameField(key="name", label="姓名", name_keys=["first_name", "last_name"], required=True),
        SpliceField(key="s1"),
        PhoneField(
            key="mobile",
            label="手机号",
            phone_format="withCountryCode",
            phone_keys=["country_code", "phone_number"],
        ),
        DividerField(key="d1"),
        SelectField(key="budget", label="预算", options=["100万以下", "100-200万", "200万以上"]),
        MultiSelectField(key="rooms", label="户型", options=["一居", "两居", "三居"]),
        CheckboxField(key="agent", label="已有经纪人"),
    ])


@pytest.fixture
def build_fields() -> Callable[..., list[FormField]]:
    """
    用简写构建字段列表

        "+"       拼接
        "#标题"   大标题
        "-"       分割线
        其他      文本字段（key 与标签相同）
    """
    def _build(*tokens: str) -> list[FormField]:
        fields: list[FormField] = []
        for i, token in enumerate(tokens):
            if token == "+":
                fields.append(SpliceField(key=f"splice_{i}"))
            elif token == "-":
                fields.append(DividerField(key=f"divider_{i}"))
            elif token.startswith("#"):
                fields.append(SectionTitleField(key=token[1:], label=token[1:]))
            else:
                fields.append(TextField(key=token, label=token))
        return fields

    return _build


# ============================================================================
# 存储 Fixtures
# ============================================================================

@pytest.fixture
def store() -> InMemoryFormStore:
    """内存存储"""
    return InMemoryFormStore(owner_id="agent-1")


# ============================================================================
# 文件 Fixtures
# ============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """临时目录"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
