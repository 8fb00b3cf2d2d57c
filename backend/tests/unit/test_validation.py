"""
提交校验单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_validation.py -v
"""

import pytest

from form_engine.interfaces import SubmissionValidationError
from form_engine.models import (
    CheckboxField,
    EmailField,
    FieldIssueCode,
    FormSchema,
    MultiSelectField,
    NameField,
)
from form_engine.submission import (
    check_formats,
    check_required,
    check_submission,
    ensure_submission_valid,
    is_valid_email,
)


class TestEmail:
    """邮箱格式测试"""

    @pytest.mark.parametrize("value", ["a@b.com", "a.b+c@sub.example.org", "USER_1%x@mail-host.cn"])
    def test_valid(self, value: str):
        assert is_valid_email(value)

    @pytest.mark.parametrize("value", ["a@b", "a@b.c", "a b@c.com", "@b.com", "a@.com", "a@b.c0"])
    def test_invalid(self, value: str):
        assert not is_valid_email(value)

    def test_empty_email_not_checked(self, scenario_schema: FormSchema):
        """测试邮箱留空不校验"""
        assert check_formats(scenario_schema, {"email": ""}) == []
        assert check_formats(scenario_schema, {}) == []

    def test_email_gate(self, scenario_schema: FormSchema):
        issues = check_formats(scenario_schema, {"email": "a@b"})
        assert [i.code for i in issues] == [FieldIssueCode.EMAIL_INVALID]
        assert issues[0].field_key == "email"
        assert check_formats(scenario_schema, {"email": "a@b.com"}) == []

    def test_hidden_email_not_checked(self):
        fields = [
            CheckboxField(key="agree"),
            EmailField(key="email", visible_when={"dependsOnKey": "agree", "value": "是"}),
        ]
        assert check_formats(fields, {"agree": False, "email": "bad"}) == []


class TestRequired:
    """必填测试"""

    def test_scenario_passes(self, scenario_schema: FormSchema):
        """测试邮箱选填时可以提交"""
        assert check_submission(scenario_schema, {"full_name": "Alice Lee", "phone": "4161234567"}) == []

    def test_missing_required(self, scenario_schema: FormSchema):
        issues = check_required(scenario_schema, {"full_name": " "})
        assert [i.field_key for i in issues] == ["full_name", "phone"]
        assert issues[0].message == "请填写必填项：姓名"

    def test_composite_required(self):
        """测试拆分姓名每个部分都必须填写"""
        fields = [NameField(key="name", label="姓名", name_keys=["first", "last"], required=True)]
        issues = check_required(fields, {"first": "Alice", "last": ""})
        assert len(issues) == 1
        assert issues[0].storage_key == "last"
        assert check_required(fields, {"first": "Alice", "last": "Lee"}) == []

    def test_checkbox_required(self):
        fields = [CheckboxField(key="consent", label="同意条款", required=True)]
        assert len(check_required(fields, {"consent": False})) == 1
        assert check_required(fields, {"consent": True}) == []

    def test_multi_select_required(self):
        fields = [MultiSelectField(key="rooms", options=["一居"], required=True)]
        assert len(check_required(fields, {"rooms": []})) == 1
        assert check_required(fields, {"rooms": ["一居"]}) == []

    def test_hidden_required_never_blocks(self, visibility_schema: FormSchema):
        """测试隐藏的必填字段不阻止提交"""
        assert check_required(visibility_schema, {"agree": False}) == []
        issues = check_required(visibility_schema, {"agree": True})
        assert [i.field_key for i in issues] == ["details"]


class TestEnsureValid:
    """校验异常测试"""

    def test_raises_with_all_issues(self, scenario_schema: FormSchema):
        with pytest.raises(SubmissionValidationError) as exc_info:
            ensure_submission_valid(scenario_schema, {"email": "a@b"})

        err = exc_info.value
        assert err.field_keys == ["full_name", "phone", "email"]
        assert "请填写必填项：姓名" in str(err)

    def test_passes(self, scenario_schema: FormSchema):
        ensure_submission_valid(scenario_schema, {"full_name": "Alice", "phone": "416"})
