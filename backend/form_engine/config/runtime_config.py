"""
运行期配置 - 读取 config/form_engine.yaml

职责：
- 加载成行上限、保存校验开关、显示文案等参数
- 提供环境变量覆盖机制（FORM_ENGINE_ 前缀）
- 类型安全的配置访问
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

DEFAULT_CONFIG_PATH = Path("config/form_engine.yaml")

EMAIL_PATTERN = r"^[A-Za-z0-9._%+-]+@(?:[A-Za-z0-9-]+\.)+[A-Za-z]{2,}$"


class LayoutConfig(BaseModel):
    """成行配置"""

    max_row_fields: int = 4


class ValidationConfig(BaseModel):
    """保存/提交校验配置"""

    require_contact_field: bool = True
    require_form_name: bool = True
    email_pattern: str = EMAIL_PATTERN


class DisplayConfig(BaseModel):
    """显示文案"""

    checkbox_true_text: str = "是"
    checkbox_false_text: str = "否"
    multi_select_separator: str = "、"
    name_separator: str = " "
    phone_separator: str = " "
    tag_separator: str = ", "


class ExportConfig(BaseModel):
    """导出配置"""

    timestamp_format: str = "%Y-%m-%d %H:%M"
    sheet_title: str = "提交记录"


class LoggingConfig(BaseModel):
    """日志配置"""

    log_level: str = "INFO"


class EngineConfig(BaseSettings):
    """运行期配置（支持环境变量覆盖）"""

    presets_path: Path | None = None

    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "env_prefix": "FORM_ENGINE_",
        "env_nested_delimiter": "__",
    }

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> EngineConfig:
        """从YAML文件加载配置"""
        path = Path(yaml_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        opts = data.get("engine_options", {})

        presets_path = opts.get("presets_path")
        if presets_path and not Path(presets_path).is_absolute():
            presets_path = (path.parent / presets_path).resolve()

        return cls(
            presets_path=presets_path,
            layout=LayoutConfig(**cls._extract(opts, "layout")),
            validation=ValidationConfig(**cls._extract(opts, "validation")),
            display=DisplayConfig(**cls._extract(opts, "display")),
            export=ExportConfig(**cls._extract(opts, "export")),
            logging=LoggingConfig(**cls._extract(opts, "logging")),
        )

    @staticmethod
    def _extract(data: dict[str, Any], key: str) -> dict[str, Any]:
        """提取并展平配置（支持 {default: x} 写法）"""
        section = data.get(key) or {}
        result = {}
        for k, v in section.items():
            if isinstance(v, dict) and "default" in v:
                result[k] = v["default"]
            elif not isinstance(v, dict):
                result[k] = v
        return result


# 全局配置实例
_config: EngineConfig | None = None


def get_config() -> EngineConfig:
    """获取全局配置（惰性加载）"""
    global _config
    if _config is None:
        _config = EngineConfig.from_yaml(DEFAULT_CONFIG_PATH)
    return _config


def reload_config(yaml_path: str | Path | None = None) -> EngineConfig:
    """重新加载配置"""
    global _config
    _config = EngineConfig.from_yaml(yaml_path or DEFAULT_CONFIG_PATH)
    return _config
