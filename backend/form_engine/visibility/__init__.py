"""
显示条件模块

子模块：
- evaluator: 运行时求值（每次答案变化都全量重算）
- rule_check: 编辑时的规则配置检查
"""

from .evaluator import (
    VisibilityResult,
    apply_visibility,
    find_trigger,
    is_visible,
    trigger_value,
    visible_keys,
)
from .rule_check import allowed_trigger_values, check_rules, default_trigger_value, trigger_candidates

__all__ = [
    "VisibilityResult",
    "apply_visibility",
    "find_trigger",
    "is_visible",
    "trigger_value",
    "visible_keys",
    "allowed_trigger_values",
    "check_rules",
    "default_trigger_value",
    "trigger_candidates",
]
