"""
配置层 - 加载运行期配置与字段预设

职责：
- 加载 config/form_engine.yaml（运行期参数）
- 加载字段预设（默认标签/选项/存储key模板）
- 提供类型安全的配置访问接口
"""

from .presets import FieldPresets, PresetLoader, load_presets
from .runtime_config import EngineConfig, get_config, reload_config

__all__ = [
    "EngineConfig",
    "get_config",
    "reload_config",
    "FieldPresets",
    "PresetLoader",
    "load_presets",
]
