"""
配置加载单元测试

每个模块完成后必须运行：pytest backend/tests/unit/test_config.py -v
"""

from pathlib import Path

import pytest

from form_engine.config import EngineConfig, FieldPresets, PresetLoader


class TestEngineConfig:
    """运行期配置测试"""

    def test_default_config(self, engine_config: EngineConfig):
        """测试默认配置"""
        assert engine_config.layout.max_row_fields == 4
        assert engine_config.display.checkbox_true_text == "是"
        assert engine_config.display.multi_select_separator == "、"
        assert engine_config.validation.require_contact_field is True

    def test_from_yaml(self, temp_dir: Path):
        """测试从YAML加载（支持 {default: x} 写法）"""
        path = temp_dir / "form_engine.yaml"
        path.write_text(
            "engine_options:\n"
            "  layout:\n"
            "    max_row_fields:\n"
            "      default: 3\n"
            "      desc: 一行上限\n"
            "  validation:\n"
            "    require_contact_field: false\n"
            "  presets_path: presets.yaml\n",
            encoding="utf-8",
        )
        config = EngineConfig.from_yaml(path)

        assert config.layout.max_row_fields == 3
        assert config.validation.require_contact_field is False
        assert config.presets_path == (temp_dir / "presets.yaml").resolve()

    def test_missing_yaml_uses_defaults(self, temp_dir: Path):
        """测试配置文件不存在时使用默认值"""
        config = EngineConfig.from_yaml(temp_dir / "missing.yaml")
        assert config.layout.max_row_fields == 4

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch):
        """测试环境变量覆盖"""
        monkeypatch.setenv("FORM_ENGINE_LAYOUT__MAX_ROW_FIELDS", "3")
        assert EngineConfig().layout.max_row_fields == 3


class TestFieldPresets:
    """字段预设测试"""

    def test_default_labels(self, presets: FieldPresets):
        assert presets.default_label("phone") == "手机号"
        assert presets.default_label("dropdown") == "下拉选框"
        assert presets.kind_title("dropdown") == "下拉"

    def test_key_templates(self, presets: FieldPresets):
        assert presets.name_key_template("firstMiddleLast") == ["first_name", "middle_name", "last_name"]
        assert presets.phone_key_template("withCountryCode") == ["country_code", "phone_number"]

    def test_loader_defaults(self):
        assert PresetLoader.load(None).default_options == ["选项 1", "选项 2"]

    def test_loader_from_yaml(self, temp_dir: Path):
        """测试从YAML覆盖预设"""
        path = temp_dir / "presets.yaml"
        path.write_text(
            "field_presets:\n"
            "  default_options: [是, 否]\n"
            "  title_font_size: 24\n",
            encoding="utf-8",
        )
        presets = PresetLoader.reload(str(path))

        assert presets.default_options == ["是", "否"]
        assert presets.title_font_size == 24
        assert presets.default_label("email") == "邮箱"

    def test_loader_missing_file(self, temp_dir: Path):
        with pytest.raises(FileNotFoundError):
            PresetLoader.load(str(temp_dir / "missing.yaml"))
