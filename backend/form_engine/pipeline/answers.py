"""
现场答案状态 - 填写与编辑共用

答案每次变化都对完整输入重新求显示条件，不做增量更新；
隐藏且 clearOnHide=True 的字段不保留答案（包括初始带入和隐藏期间写入的值），
所以 pairs() 与 payload() 始终一致。
"""

from __future__ import annotations

import logging
from typing import Any

from ..config import EngineConfig, get_config
from ..layout import FieldRow, group_rows
from ..models import FieldIssue, FormSchema, JSONValue, MultiSelectField, TextCase, TextField, as_list
from ..submission import AnswerPair, check_submission, format_answers, serialize_answers
from ..visibility import apply_visibility

logger = logging.getLogger(__name__)


class AnswerState:
    """一份表单的现场答案"""

    def __init__(
        self,
        schema: FormSchema,
        answers: dict[str, Any] | None = None,
        config: EngineConfig | None = None,
    ):
        self.schema = schema
        self.config = config or get_config()
        self.answers: dict[str, Any] = dict(answers or {})
        self._visible: set[str] = set()
        self._refresh()

    @property
    def visible(self) -> set[str]:
        return set(self._visible)

    def is_visible(self, field_key: str) -> bool:
        return field_key in self._visible

    def _convert(self, storage_key: str, value: Any) -> Any:
        """录入时转换（文本大小写）"""
        owner = self.schema.owner_of(storage_key)
        if owner is None:
            raise KeyError(f"表单中没有这个存储key: {storage_key}")
        if isinstance(owner, TextField) and isinstance(value, str):
            if owner.text_case == TextCase.UPPER:
                return value.upper()
            if owner.text_case == TextCase.LOWER:
                return value.lower()
        return value

    def set_answer(self, storage_key: str, value: Any) -> list[str]:
        """
        写入一个答案并重算显示条件

        Returns:
            因隐藏被清掉的存储key
        """
        self.answers[storage_key] = self._convert(storage_key, value)
        return self._refresh()

    def toggle_option(self, field_key: str, option: str) -> list[str]:
        """多选：选中/取消一个选项"""
        field = self.schema.get_field(field_key)
        if not isinstance(field, MultiSelectField):
            raise KeyError(f"不是多选字段: {field_key}")

        selected = as_list(self.answers.get(field_key))
        if option in selected:
            selected.remove(option)
        else:
            selected.append(option)
        return self.set_answer(field_key, selected)

    def _refresh(self) -> list[str]:
        result = apply_visibility(self.schema, self.answers, config=self.config)
        self.answers = result.answers
        self._visible = result.visible
        if result.cleared:
            logger.debug(f"隐藏字段已清空: {', '.join(result.cleared)}")
        return result.cleared

    def visible_rows(self) -> list[FieldRow]:
        """当前显示的字段成行（隐藏字段不占位）"""
        shown = [f for f in self.schema.fields if f.key in self._visible]
        return group_rows(shown, config=self.config)

    def issues(self) -> list[FieldIssue]:
        return check_submission(self.schema, self.answers, self.config)

    @property
    def can_submit(self) -> bool:
        return not self.issues()

    def payload(self) -> dict[str, JSONValue]:
        """序列化后的提交数据"""
        return serialize_answers(self.schema, self.answers, self.config)

    def pairs(self) -> list[AnswerPair]:
        """当前答案的 (标签, 显示值)"""
        return format_answers(self.schema, self.answers, self.config)
