"""
保存校验单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_schema_check.py -v
"""

import pytest

from form_engine.builder import check_schema, ensure_schema_savable
from form_engine.interfaces import SchemaValidationError
from form_engine.models import (
    EmailField,
    FormSchema,
    NameField,
    PhoneField,
    SchemaIssueCode,
    SelectField,
    TextField,
)


def _codes(issues):
    return [i.code for i in issues]


class TestCheckSchema:
    """表单结构检查测试"""

    def test_valid(self, scenario_schema: FormSchema, rich_schema: FormSchema):
        assert check_schema(scenario_schema, "访客登记") == []
        assert check_schema(rich_schema) == []

    def test_options_missing(self):
        """测试选择类字段没有选项"""
        fields = [PhoneField(key="phone"), SelectField(key="intent", label="意向", options=[])]
        issues = check_schema(fields)
        assert _codes(issues) == [SchemaIssueCode.OPTIONS_MISSING]
        assert issues[0].message == '字段 "意向" 需要选项'
        assert issues[0].index == 1

    def test_contact_field_missing(self):
        """测试缺少手机号/邮箱"""
        fields = [TextField(key="company")]
        issues = check_schema(fields)
        assert _codes(issues) == [SchemaIssueCode.CONTACT_FIELD_MISSING]
        assert "手机号" in issues[0].message
        assert check_schema(fields, require_contact=False) == []

    def test_splice_rules(self, build_fields):
        """测试拼接问题逐条报告"""
        fields = [EmailField(key="email"), *build_fields("+", "+", "a")]
        codes = _codes(check_schema(fields))
        assert SchemaIssueCode.SPLICE_ADJACENT in codes

    def test_duplicate_storage_key(self):
        """测试拆分 key 与其他字段冲突"""
        fields = [
            NameField(key="name", name_keys=["first_name", "last_name"]),
            TextField(key="first_name"),
            EmailField(key="email"),
        ]
        issues = check_schema(fields)
        assert _codes(issues) == [SchemaIssueCode.DUPLICATE_STORAGE_KEY]
        assert issues[0].field_key == "first_name"

    def test_duplicate_field_key(self):
        fields = [EmailField(key="email"), TextField(key="email")]
        assert _codes(check_schema(fields)) == [SchemaIssueCode.DUPLICATE_STORAGE_KEY]

    def test_name_keys_invalid(self):
        fields = [
            EmailField(key="email"),
            NameField(key="n1", name_keys=["a", "b", "c", "d"]),
            NameField(key="n2", name_keys=[]),
        ]
        issues = check_schema(fields)
        assert _codes(issues) == [SchemaIssueCode.NAME_KEYS_INVALID] * 2

    def test_phone_keys_invalid(self):
        fields = [PhoneField(key="p", phone_format="withCountryCode", phone_keys=["cc"])]
        assert _codes(check_schema(fields)) == [SchemaIssueCode.PHONE_KEYS_INVALID]

    def test_rule_checks(self):
        fields = [
            EmailField(key="email"),
            TextField(key="details", visible_when={"dependsOnKey": "agree", "value": "是"}),
        ]
        assert _codes(check_schema(fields)) == [SchemaIssueCode.RULE_TRIGGER_MISSING]

    def test_form_name(self, scenario_schema: FormSchema):
        """测试表单名称（只在传入时检查）"""
        assert _codes(check_schema(scenario_schema, "  ")) == [SchemaIssueCode.FORM_NAME_MISSING]
        assert check_schema(scenario_schema) == []


class TestEnsureSavable:
    """保存校验异常测试"""

    def test_raises(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            ensure_schema_savable([TextField(key="a")], "")

        codes = _codes(exc_info.value.issues)
        assert codes == [SchemaIssueCode.CONTACT_FIELD_MISSING, SchemaIssueCode.FORM_NAME_MISSING]
        assert "请填写表单名称" in str(exc_info.value)

    def test_passes(self, scenario_schema: FormSchema):
        ensure_schema_savable(scenario_schema, "访客登记")
