"""
表单编辑草稿 - 编辑器的可变状态

职责：
1. 从表单记录加载字段/名称/展示配置
2. 增删改字段、拖动排序（破坏拼接规则的结构修改直接拒绝，字段保持不变）
3. 成行结果每次由当前顺序重新计算，不缓存
4. 保存：归档检查 → 保存校验 → 新建/更新

测试要点：
- test_add_field_defaults: 新建字段默认值
- test_move_refused_on_splice_violation: 拖动破坏拼接规则被拒绝
- test_unsaved_changes: 修改检测
- test_save_archived_refused: 已归档表单不可保存
- test_duplicate_form: 复制表单
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from ..config import EngineConfig, FieldPresets, get_config
from ..interfaces import FormArchivedError, FormEngineError
from ..layout import FieldRow, GroupPosition, check_splices, group_positions, group_rows
from ..models import FieldKind, FormField, FormPresentation, FormRecord, FormSchema
from .factory import new_field
from .schema_check import ensure_schema_savable

if TYPE_CHECKING:
    from ..interfaces import IFormStore

logger = logging.getLogger(__name__)

ARCHIVED_MESSAGE = "该表单已归档，无法修改。请先取消归档，或复制一个新表单再编辑。"
COPY_SUFFIX = " 副本"


def move_items(items: list, from_indices: Iterable[int], to_index: int) -> list:
    """列表拖动：把 from_indices 处的元素整体移到原下标 to_index 之前"""
    picked = sorted(set(from_indices))
    moving = [items[i] for i in picked]
    remaining = [item for i, item in enumerate(items) if i not in picked]
    insert_at = to_index - sum(1 for i in picked if i < to_index)
    insert_at = max(0, min(insert_at, len(remaining)))
    return remaining[:insert_at] + moving + remaining[insert_at:]


class FormDraft:
    """表单编辑草稿"""

    def __init__(
        self,
        fields: list[FormField] | None = None,
        name: str = "",
        presentation: FormPresentation | None = None,
        form_id: str | None = None,
        is_archived: bool = False,
        config: EngineConfig | None = None,
        presets: FieldPresets | None = None,
    ):
        self.config = config or get_config()
        self.presets = presets
        self.form_id = form_id
        self.name = name
        self.fields: list[FormField] = list(fields or [])
        self.presentation = presentation
        self.is_archived = is_archived
        self.error_message: str | None = None
        self._baseline = self._snapshot()

    @classmethod
    def load(cls, record: FormRecord, config: EngineConfig | None = None) -> FormDraft:
        """从表单记录加载"""
        schema = record.form_schema.model_copy(deep=True)
        return cls(
            fields=list(schema.fields),
            name=record.name,
            presentation=schema.presentation,
            form_id=record.id,
            is_archived=record.is_archived,
            config=config,
        )

    # ========================================================================
    # 结构修改
    # ========================================================================

    def _apply(self, proposed: list[FormField], action: str) -> bool:
        """校验拼接规则后替换字段；已有问题的旧数据只要求不出现新的问题（按问题类型 + 字段 key 判断）"""
        existing = {(i.code, i.field_key) for i in check_splices(self.fields, config=self.config)}
        added = [
            i for i in check_splices(proposed, config=self.config)
            if (i.code, i.field_key) not in existing
        ]
        if added:
            self.error_message = added[0].message
            logger.warning(f"[{self.form_id or 'new'}] {action}被拒绝: {self.error_message}")
            return False

        self.fields = proposed
        self.error_message = None
        return True

    def add_field(
        self,
        field: FormField | FieldKind | str,
        *,
        index: int | None = None,
        label: str | None = None,
        key: str | None = None,
        required: bool = False,
    ) -> FormField | None:
        """
        添加字段

        Args:
            field: 现成的字段，或字段类型（按预设生成默认字段）
            index: 插入位置，None 表示追加到末尾

        Returns:
            添加的字段；破坏拼接规则时返回 None
        """
        if isinstance(field, (FieldKind, str)):
            field = new_field(field, self.fields, label=label, key=key, required=required, presets=self.presets)

        proposed = list(self.fields)
        proposed.insert(len(proposed) if index is None else index, field)
        return field if self._apply(proposed, "添加字段") else None

    def replace_field(self, key: str, field: FormField) -> bool:
        """替换字段（编辑属性或切换类型后写回）"""
        idx = self.index_of(key)
        if idx is None:
            self.error_message = f"字段不存在: {key}"
            return False

        proposed = list(self.fields)
        proposed[idx] = field
        return self._apply(proposed, "更新字段")

    def move(self, from_indices: Iterable[int], to_index: int) -> bool:
        """拖动排序"""
        proposed = move_items(self.fields, from_indices, to_index)
        return self._apply(proposed, "移动字段")

    def remove_field(self, key: str) -> bool:
        """删除字段"""
        idx = self.index_of(key)
        if idx is None:
            self.error_message = f"字段不存在: {key}"
            return False

        proposed = self.fields[:idx] + self.fields[idx + 1:]
        return self._apply(proposed, "删除字段")

    def index_of(self, key: str) -> int | None:
        for i, f in enumerate(self.fields):
            if f.key == key:
                return i
        return None

    # ========================================================================
    # 派生
    # ========================================================================

    def rows(self) -> list[FieldRow]:
        """当前成行结果"""
        return group_rows(self.fields, config=self.config)

    def positions(self) -> list[GroupPosition]:
        """每个字段在所在行中的位置（用于画边框）"""
        return group_positions(self.fields, config=self.config)

    def build_schema(self) -> FormSchema:
        schema = FormSchema(version=1, fields=list(self.fields))
        if self.presentation is not None:
            schema.presentation = self.presentation
        return schema

    def _snapshot(self) -> tuple[str, dict]:
        return self.name.strip(), self.build_schema().to_storage()

    @property
    def has_unsaved_changes(self) -> bool:
        return self._snapshot() != self._baseline

    def mark_saved(self) -> None:
        self._baseline = self._snapshot()

    # ========================================================================
    # 保存
    # ========================================================================

    def save(self, store: IFormStore) -> FormRecord:
        """
        保存（新建或更新）

        Raises:
            FormArchivedError: 表单已归档
            SchemaValidationError: 结构校验失败
        """
        try:
            if self.form_id is not None and self.is_archived:
                raise FormArchivedError(ARCHIVED_MESSAGE)

            ensure_schema_savable(self.fields, self.name, config=self.config)
        except FormEngineError as e:
            self.error_message = str(e)
            logger.warning(f"[{self.form_id or 'new'}] 保存被拒绝: {e}")
            raise

        name = self.name.strip()
        schema = self.build_schema()
        if self.form_id is not None:
            record = store.update_form(self.form_id, name, schema)
            logger.info(f"[{record.id}] 表单已更新: {name}（{len(schema.fields)} 个字段）")
        else:
            record = store.create_form(name, schema)
            self.form_id = record.id
            logger.info(f"[{record.id}] 表单已创建: {name}（{len(schema.fields)} 个字段）")

        self.name = name
        self.error_message = None
        self.mark_saved()
        return record


def duplicate_form(record: FormRecord, store: IFormStore) -> FormRecord:
    """复制表单（名称追加“ 副本”，结构不变，新表单未归档）"""
    name = f"{record.name}{COPY_SUFFIX}"
    copy = store.create_form(name, record.form_schema.model_copy(deep=True))
    logger.info(f"[{copy.id}] 已从 [{record.id}] 复制表单: {name}")
    return copy
