"""
模块接口契约 - 存储协作方接口与异常定义

设计原则：
1. 引擎本身不做 I/O，表单/提交的读写交给 IFormStore 实现
2. 每个接口定义清晰的输入输出类型
3. 便于单元测试和mock替换

使用方式：
    from form_engine.interfaces import IFormStore

    class SupabaseFormStore(IFormStore):
        def get_form(self, form_id: str) -> FormRecord | None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from .models import FieldIssue, FormRecord, FormSchema, JSONValue, SchemaIssue, Submission


# ============================================================================
# 存储协作方接口
# ============================================================================

class IFormStore(ABC):
    """表单与提交数据的存储接口"""

    @abstractmethod
    def get_form(self, form_id: str) -> FormRecord | None:
        """获取表单记录，不存在返回 None"""
        ...

    @abstractmethod
    def list_forms(self, include_archived: bool = False) -> list[FormRecord]:
        """列出表单"""
        ...

    @abstractmethod
    def create_form(self, name: str, schema: FormSchema) -> FormRecord:
        """
        新建表单

        Args:
            name: 表单名称（已去除首尾空白）
            schema: 已通过保存校验的表单结构

        Returns:
            新建的表单记录
        """
        ...

    @abstractmethod
    def update_form(self, form_id: str, name: str, schema: FormSchema) -> FormRecord:
        """
        更新表单

        Raises:
            StorageError: 表单不存在
        """
        ...

    @abstractmethod
    def create_submission(
        self,
        event_id: str | None,
        form_id: str | None,
        data: dict[str, JSONValue],
    ) -> Submission:
        """
        写入一条提交

        Args:
            event_id: 活动ID
            form_id: 提交时使用的表单ID（快照）
            data: 已校验、已序列化的提交数据

        Returns:
            存储后的提交记录
        """
        ...

    @abstractmethod
    def update_submission(
        self,
        submission_id: str,
        data: dict[str, JSONValue] | None = None,
        tags: Iterable[str] | None = None,
    ) -> Submission:
        """
        更新提交（data/tags 为 None 时不修改）

        Raises:
            StorageError: 提交不存在
        """
        ...

    @abstractmethod
    def list_submissions(
        self,
        event_id: str | None = None,
        form_id: str | None = None,
    ) -> list[Submission]:
        """列出提交（按提交时间降序）"""
        ...


# ============================================================================
# 异常定义
# ============================================================================

class FormEngineError(Exception):
    """表单引擎基础异常"""
    pass


class SchemaValidationError(FormEngineError):
    """表单结构校验失败（保存时）"""

    def __init__(self, issues: Iterable[SchemaIssue]):
        self.issues = list(issues)
        super().__init__("；".join(i.message for i in self.issues) or "表单结构校验失败")


class SubmissionValidationError(FormEngineError):
    """提交校验失败（必填缺失/格式错误）"""

    def __init__(self, issues: Iterable[FieldIssue]):
        self.issues = list(issues)
        super().__init__("；".join(i.message for i in self.issues) or "提交校验失败")

    @property
    def field_keys(self) -> list[str]:
        """出问题的字段（去重，保持顺序）"""
        return list(dict.fromkeys(i.field_key for i in self.issues))


class FormArchivedError(FormEngineError):
    """表单已归档，不可修改"""
    pass


class StorageError(FormEngineError):
    """存储读写失败"""
    pass


class ExportError(FormEngineError):
    """导出文件写入失败"""
    pass
