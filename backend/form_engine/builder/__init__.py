"""
表单编辑模块

子模块：
- factory: 新建字段、切换类型
- schema_check: 保存前结构检查
- draft: 编辑草稿（增删改、拖动、保存、复制）
"""

from .draft import ARCHIVED_MESSAGE, FormDraft, duplicate_form, move_items
from .factory import change_kind, make_key, new_field, unique_label, unique_storage_keys
from .schema_check import check_schema, ensure_schema_savable

__all__ = [
    "make_key",
    "unique_label",
    "unique_storage_keys",
    "new_field",
    "change_kind",
    "check_schema",
    "ensure_schema_savable",
    "FormDraft",
    "duplicate_form",
    "move_items",
    "ARCHIVED_MESSAGE",
]
