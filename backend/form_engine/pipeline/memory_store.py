"""
内存存储 - IFormStore 的内存实现

用于测试与命令行工具；真实部署由外部存储服务实现同一接口。

测试要点：
- test_create_and_get_form: 新建/读取表单
- test_update_missing_form: 更新不存在的表单报错
- test_list_submissions_order: 提交按时间降序
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Iterable

from ..interfaces import IFormStore, StorageError
from ..models import FormRecord, FormSchema, JSONValue, Submission

logger = logging.getLogger(__name__)


class InMemoryFormStore(IFormStore):
    """内存存储实现"""

    def __init__(self, owner_id: str | None = None):
        self.owner_id = owner_id
        self._forms: dict[str, FormRecord] = {}
        self._submissions: dict[str, Submission] = {}

    # ========================================================================
    # 表单
    # ========================================================================

    def get_form(self, form_id: str) -> FormRecord | None:
        return self._forms.get(form_id)

    def list_forms(self, include_archived: bool = False) -> list[FormRecord]:
        forms = list(self._forms.values())[::-1]
        if not include_archived:
            forms = [f for f in forms if not f.is_archived]
        forms.sort(key=lambda f: f.created_at or datetime.min, reverse=True)
        return forms

    def create_form(self, name: str, schema: FormSchema) -> FormRecord:
        record = FormRecord(
            id=str(uuid.uuid4()),
            owner_id=self.owner_id,
            name=name,
            form_schema=schema.model_copy(deep=True),
            created_at=datetime.now(),
        )
        self._forms[record.id] = record
        logger.debug(f"[{record.id}] 写入表单: {name}")
        return record

    def update_form(self, form_id: str, name: str, schema: FormSchema) -> FormRecord:
        record = self._forms.get(form_id)
        if record is None:
            raise StorageError(f"表单不存在: {form_id}")

        updated = record.model_copy(update={"name": name, "form_schema": schema.model_copy(deep=True)})
        self._forms[form_id] = updated
        logger.debug(f"[{form_id}] 更新表单: {name}")
        return updated

    def set_archived(self, form_id: str, archived: bool = True) -> FormRecord:
        """归档/取消归档"""
        record = self._forms.get(form_id)
        if record is None:
            raise StorageError(f"表单不存在: {form_id}")

        updated = record.model_copy(update={"is_archived": archived})
        self._forms[form_id] = updated
        return updated

    # ========================================================================
    # 提交
    # ========================================================================

    def create_submission(
        self,
        event_id: str | None,
        form_id: str | None,
        data: dict[str, JSONValue],
    ) -> Submission:
        now = datetime.now()
        submission = Submission(
            id=str(uuid.uuid4()),
            event_id=event_id,
            form_id=form_id,
            owner_id=self.owner_id,
            data=dict(data),
            created_at=now,
            updated_at=now,
        )
        self._submissions[submission.id] = submission
        logger.debug(f"[{submission.id}] 写入提交（{len(data)} 个key）")
        return submission

    def update_submission(
        self,
        submission_id: str,
        data: dict[str, JSONValue] | None = None,
        tags: Iterable[str] | None = None,
    ) -> Submission:
        submission = self._submissions.get(submission_id)
        if submission is None:
            raise StorageError(f"提交不存在: {submission_id}")

        changes: dict = {"updated_at": datetime.now()}
        if data is not None:
            changes["data"] = dict(data)
        if tags is not None:
            changes["tags"] = list(tags)

        updated = submission.model_copy(update=changes)
        self._submissions[submission_id] = updated
        logger.debug(f"[{submission_id}] 更新提交")
        return updated

    def get_submission(self, submission_id: str) -> Submission | None:
        return self._submissions.get(submission_id)

    def list_submissions(
        self,
        event_id: str | None = None,
        form_id: str | None = None,
    ) -> list[Submission]:
        items = list(self._submissions.values())[::-1]
        if event_id is not None:
            items = [s for s in items if s.event_id == event_id]
        if form_id is not None:
            items = [s for s in items if s.form_id == form_id]

        # 按提交时间降序
        items.sort(key=lambda s: s.created_at or datetime.min, reverse=True)
        return items
