"""
提交投影与格式化单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_projection.py -v
"""

from form_engine.models import CheckboxField, FormSchema, TextField, VisibilityRule
from form_engine.submission import format_answers, seed_answers, serialize_answers


class TestSerialize:
    """序列化测试"""

    def test_scenario(self, scenario_schema: FormSchema):
        """测试姓名 + 手机号（邮箱留空）"""
        data = serialize_answers(scenario_schema, {"full_name": "Alice Lee", "phone": "4161234567"})
        assert data == {"full_name": "Alice Lee", "phone": "4161234567"}

    def test_trim_and_omit_empty(self, scenario_schema: FormSchema):
        data = serialize_answers(scenario_schema, {"full_name": "  Bob ", "phone": "   ", "email": ""})
        assert data == {"full_name": "Bob"}

    def test_rich_schema(self, rich_schema: FormSchema):
        """测试各类型的写入方式"""
        answers = {
            "first_name": "Alice",
            "last_name": "Lee",
            "country_code": "+1",
            "phone_number": "4161234567",
            "budget": "100-200万",
            "rooms": ["三居", "一居", "三居"],
        }
        data = serialize_answers(rich_schema, answers)
        assert data == {
            "first_name": "Alice",
            "last_name": "Lee",
            "country_code": "+1",
            "phone_number": "4161234567",
            "budget": "100-200万",
            "rooms": ["一居", "三居"],
            "agent": False,
        }

    def test_decorations_write_nothing(self, rich_schema: FormSchema):
        data = serialize_answers(rich_schema, {"title": "x", "s1": "y", "d1": "z"})
        assert data == {"agent": False}

    def test_empty_multi_select_omitted(self, rich_schema: FormSchema):
        assert "rooms" not in serialize_answers(rich_schema, {"rooms": []})

    def test_hidden_field_dropped(self, visibility_schema: FormSchema):
        """测试隐藏字段不写入"""
        data = serialize_answers(visibility_schema, {"agree": False, "details": "hello"})
        assert data == {"agree": False}

    def test_hidden_field_kept_without_clear(self):
        """测试 clearOnHide=False 的旧值原样带上"""
        fields = [
            CheckboxField(key="agree"),
            TextField(
                key="details",
                visible_when=VisibilityRule(depends_on_key="agree", value="是", clear_on_hide=False),
            ),
        ]
        assert serialize_answers(fields, {"agree": False, "details": "hello"}) == {
            "agree": False,
            "details": "hello",
        }


class TestFormatAnswers:
    """格式化测试"""

    def test_scenario_pairs(self, scenario_schema: FormSchema):
        pairs = format_answers(scenario_schema, {"full_name": "Alice Lee", "phone": "4161234567"})
        assert pairs == [("姓名", "Alice Lee"), ("手机号", "4161234567")]

    def test_format_name_parts(self, rich_schema: FormSchema):
        """测试姓名拼接"""
        assert format_answers(rich_schema, {"first_name": "Alice", "last_name": "Lee"})[0] == ("姓名", "Alice Lee")
        assert format_answers(rich_schema, {"first_name": "Alice", "last_name": " "})[0] == ("姓名", "Alice")
        assert format_answers(rich_schema, {"first_name": "", "last_name": ""}) == []

    def test_format_phone_with_country_code(self, rich_schema: FormSchema):
        """测试区号拼接"""
        pairs = format_answers(rich_schema, {"country_code": "+1", "phone_number": "4161234567"})
        assert pairs == [("手机号", "+1 4161234567")]
        assert format_answers(rich_schema, {"phone_number": "4161234567"}) == [("手机号", "4161234567")]

    def test_format_multi_select(self, rich_schema: FormSchema):
        """测试多选连接"""
        assert format_answers(rich_schema, {"rooms": ["三居", "一居"]}) == [("户型", "一居、三居")]

    def test_format_checkbox(self, rich_schema: FormSchema):
        """测试勾选只在 true 时输出"""
        assert format_answers(rich_schema, {"agent": True}) == [("已有经纪人", "是")]
        assert format_answers(rich_schema, {"agent": False}) == []

    def test_format_schema_drift(self, scenario_schema: FormSchema):
        """测试表单改版后不抛错"""
        pairs = format_answers(scenario_schema, {"legacy_budget": "100万", "phone": "416", "email": 3})
        assert pairs == [("手机号", "416"), ("邮箱", "3")]

    def test_schema_order_not_data_order(self, scenario_schema: FormSchema):
        pairs = format_answers(scenario_schema, {"email": "a@b.com", "full_name": "Alice"})
        assert [p.label for p in pairs] == ["姓名", "邮箱"]

    def test_projection_idempotence(self, rich_schema: FormSchema):
        """测试序列化后再格式化与直接格式化一致"""
        answers = {
            "first_name": " Alice ",
            "last_name": "Lee",
            "country_code": "+1",
            "phone_number": "4161234567",
            "budget": "200万以上",
            "rooms": ["三居", "两居"],
            "agent": True,
        }
        direct = format_answers(rich_schema, answers)
        assert format_answers(rich_schema, serialize_answers(rich_schema, answers)) == direct


class TestSeedAnswers:
    """编辑回填测试"""

    def test_seed_drops_unknown_keys(self, rich_schema: FormSchema):
        data = {"first_name": "Alice", "rooms": ["一居"], "agent": True, "legacy": "x"}
        assert seed_answers(rich_schema, data) == {"first_name": "Alice", "rooms": ["一居"], "agent": True}

    def test_seed_then_serialize(self, scenario_schema: FormSchema):
        data = {"full_name": "Alice Lee", "phone": "4161234567"}
        assert serialize_answers(scenario_schema, seed_answers(scenario_schema, data)) == data
