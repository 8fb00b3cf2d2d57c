"""
现场填写会话

流程：
1. 访客逐项填写（set_answer / toggle_option）
2. 提交：必填 + 格式校验 → 序列化 → 写入一次 → 清空答案，迎接下一位访客

校验不通过时不写入任何数据，已填内容保留。

测试要点：
- test_submit_scenario: 姓名 + 手机号提交
- test_submit_blocked_keeps_answers: 校验失败保留答案
- test_submit_resets: 提交后清空
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..interfaces import SubmissionValidationError
from .answers import AnswerState

if TYPE_CHECKING:
    from ..interfaces import IFormStore
    from ..models import Submission

logger = logging.getLogger(__name__)


class FillSession(AnswerState):
    """现场填写会话"""

    def submit(
        self,
        store: IFormStore,
        event_id: str | None = None,
        form_id: str | None = None,
    ) -> Submission:
        """
        校验并提交

        Raises:
            SubmissionValidationError: 必填缺失或格式错误（不写入）
        """
        issues = self.issues()
        if issues:
            logger.warning(f"[{form_id or '-'}] 提交被拒绝: {'；'.join(i.message for i in issues)}")
            raise SubmissionValidationError(issues)

        data = self.payload()
        submission = store.create_submission(event_id, form_id, data)
        logger.info(f"[{submission.id}] 提交成功（表单 {form_id or '-'}，{len(data)} 个key）")

        self.reset()
        return submission

    def reset(self) -> None:
        """清空答案"""
        self.answers = {}
        self._refresh()
