"""
流程层 - 填写、编辑与存储

子模块：
- answers: 现场答案状态（填写与编辑共用）
- fill_session: 现场填写会话
- submission_editor: 提交编辑
- memory_store: IFormStore 的内存实现
"""

from .answers import AnswerState
from .fill_session import FillSession
from .memory_store import InMemoryFormStore
from .submission_editor import SubmissionEditor

__all__ = [
    "AnswerState",
    "FillSession",
    "SubmissionEditor",
    "InMemoryFormStore",
]
