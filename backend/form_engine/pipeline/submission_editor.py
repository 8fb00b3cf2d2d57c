"""
提交编辑 - 修改已有提交的答案和标签

- 按当前表单回填答案，表单中已不存在的key不回填、保存时丢弃
- 修改后同样按显示条件清空隐藏字段
- 保存前校验必填与邮箱格式
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..config import EngineConfig
from ..interfaces import SubmissionValidationError
from ..models import FormSchema, Submission, parse_tags
from ..submission import seed_answers
from .answers import AnswerState

if TYPE_CHECKING:
    from ..interfaces import IFormStore

logger = logging.getLogger(__name__)


class SubmissionEditor(AnswerState):
    """提交编辑器"""

    def __init__(self, schema: FormSchema, submission: Submission, config: EngineConfig | None = None):
        super().__init__(schema, seed_answers(schema, submission.data), config)
        self.submission = submission
        self.tags: list[str] = list(submission.tags)

    def set_tags(self, text: str) -> list[str]:
        """从输入框文本设置标签（逗号/换行分隔）"""
        self.tags = parse_tags(text)
        return self.tags

    def save(self, store: IFormStore) -> Submission:
        """
        保存修改

        Raises:
            SubmissionValidationError: 必填缺失或格式错误（不写入）
        """
        issues = self.issues()
        if issues:
            logger.warning(f"[{self.submission.id}] 保存被拒绝: {'；'.join(i.message for i in issues)}")
            raise SubmissionValidationError(issues)

        data = self.payload()
        updated = store.update_submission(self.submission.id, data=data, tags=self.tags)
        logger.info(f"[{updated.id}] 提交已修改（{len(data)} 个key，{len(self.tags)} 个标签）")

        self.submission = updated
        return updated
